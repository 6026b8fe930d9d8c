"""Icosahedron geometry used by the ambient dice basis: vertex tables and triangle lookup."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

KT = 0.6180339887498949
KT2 = KT * KT

VERTEX_POSITIONS = np.array(
    [
        [1.0, KT, 0.0],
        [-1.0, KT, 0.0],
        [1.0, -KT, -0.0],
        [-1.0, -KT, 0.0],
        [0.0, 1.0, KT],
        [-0.0, -1.0, KT],
        [0.0, 1.0, -KT],
        [0.0, -1.0, -KT],
        [KT, 0.0, 1.0],
        [-KT, 0.0, 1.0],
        [KT, -0.0, -1.0],
        [-KT, -0.0, -1.0],
    ]
)

_SRBF_AXES = np.array(
    [
        [1.0, KT, 0.0],
        [-1.0, KT, 0.0],
        [0.0, 1.0, KT],
        [-0.0, -1.0, KT],
        [KT, 0.0, 1.0],
        [KT, -0.0, -1.0],
    ]
)
SRBF_NORMALISED_VERTEX_POSITIONS = _SRBF_AXES / np.linalg.norm(_SRBF_AXES, axis=1, keepdims=True)

# Arbitrary orthonormal frames constructed around each vertex.
TANGENTS = np.array(
    [
        [0.27639312, -0.44721365, -0.85065085],
        [0.27639312, 0.44721365, 0.85065085],
        [0.27639312, 0.44721365, 0.85065085],
        [0.27639312, -0.44721365, 0.85065085],
        [1.0, -0.0, -0.0],
        [1.0, -0.0, 0.0],
        [1.0, -0.0, 0.0],
        [1.0, 0.0, 0.0],
        [0.8506508, -0.0, -0.52573115],
        [0.8506508, 0.0, 0.52573115],
        [0.8506508, 0.0, 0.52573115],
        [0.8506508, -0.0, -0.52573115],
    ]
)

BITANGENTS = np.array(
    [
        [-0.44721365, 0.72360677, -0.52573115],
        [0.44721365, 0.72360677, -0.52573115],
        [-0.44721365, -0.72360677, 0.52573115],
        [-0.44721365, 0.72360677, 0.52573115],
        [-0.0, 0.525731, -0.85065085],
        [-0.0, 0.525731, 0.85065085],
        [0.0, -0.525731, -0.85065085],
        [-0.0, -0.525731, 0.85065085],
        [-0.0, 1.0, -0.0],
        [0.0, 1.0, -0.0],
        [-0.0, -1.0, 0.0],
        [0.0, -1.0, 0.0],
    ]
)

TRIANGLE_INDICES = (
    (0, 4, 8),
    (1, 4, 9),
    (2, 5, 8),
    (3, 5, 9),
    (0, 6, 10),
    (1, 6, 11),
    (2, 7, 10),
    (3, 7, 11),
    (4, 8, 9),
    (5, 8, 9),
    (6, 10, 11),
    (7, 10, 11),
    (0, 2, 8),
    (1, 3, 9),
    (0, 2, 10),
    (1, 3, 11),
    (0, 4, 6),
    (1, 4, 6),
    (2, 5, 7),
    (3, 5, 7),
)

_A = 0.9510565
_B = 0.36327127
_C = 0.58778524
_D = 1.1755705

TRIANGLE_BARYCENTRIC_NORMALS = np.array(
    [
        [[_A, _B, -_C], [-_C, _A, _B], [_B, -_C, _A]],
        [[-_A, _B, -_C], [_C, _A, _B], [-_B, -_C, _A]],
        [[_A, -_B, -_C], [-_C, -_A, _B], [_B, _C, _A]],
        [[-_A, -_B, -_C], [_C, -_A, _B], [-_B, _C, _A]],
        [[_A, _B, _C], [-_C, _A, -_B], [_B, -_C, -_A]],
        [[-_A, _B, _C], [_C, _A, -_B], [-_B, -_C, -_A]],
        [[_A, -_B, _C], [-_C, -_A, -_B], [_B, _C, -_A]],
        [[-_A, -_B, _C], [_C, -_A, -_B], [-_B, _C, -_A]],
        [[0.0, _D, 0.0], [_A, -_B, _C], [-_A, -_B, _C]],
        [[0.0, -_D, 0.0], [_A, _B, _C], [-_A, _B, _C]],
        [[0.0, _D, 0.0], [_A, -_B, -_C], [-_A, -_B, -_C]],
        [[0.0, -_D, 0.0], [_A, _B, -_C], [-_A, _B, -_C]],
        [[_C, _A, -_B], [_C, -_A, -_B], [0.0, 0.0, _D]],
        [[-_C, _A, -_B], [-_C, -_A, -_B], [0.0, 0.0, _D]],
        [[_C, _A, _B], [_C, -_A, _B], [0.0, 0.0, -_D]],
        [[-_C, _A, _B], [-_C, -_A, _B], [0.0, 0.0, -_D]],
        [[_D, 0.0, 0.0], [-_B, _C, _A], [-_B, _C, -_A]],
        [[-_D, 0.0, 0.0], [_B, _C, _A], [_B, _C, -_A]],
        [[_D, 0.0, 0.0], [-_B, -_C, _A], [-_B, -_C, -_A]],
        [[-_D, 0.0, 0.0], [_B, -_C, _A], [_B, -_C, -_A]],
    ]
)

# 1 / (3 * alpha) times the projection of each triangle's edge vectors onto the vertex tangents.
TRI_DERIVATIVE_TANGENT_FACTORS = np.array(
    [
        [-0.34100485, -0.238272, 0.3504874, 0.21661313, 0.2981424, -0.11388027],
        [0.34100485, 0.238272, -0.3504874, -0.21661313, -0.2981424, 0.11388027],
        [0.027519437, 0.35801283, 0.3504874, 0.21661313, 0.2981424, -0.11388027],
        [0.34100485, 0.238272, -0.3504874, -0.21661313, -0.2981424, 0.11388027],
        [0.027519437, 0.35801283, 0.3504874, 0.21661313, 0.2981424, -0.11388027],
        [-0.027519437, -0.35801283, -0.3504874, -0.21661313, -0.2981424, 0.11388027],
        [-0.34100485, -0.238272, 0.3504874, 0.21661313, 0.2981424, -0.11388027],
        [-0.027519437, -0.35801283, -0.3504874, -0.21661313, -0.2981424, 0.11388027],
        [0.21661313, -0.21661313, -0.11388027, -0.36852428, 0.11388027, 0.36852428],
        [0.21661313, -0.21661313, -0.11388027, -0.36852428, 0.11388027, 0.36852428],
        [0.21661313, -0.21661313, -0.11388027, -0.36852428, 0.11388027, 0.36852428],
        [0.21661313, -0.21661313, -0.11388027, -0.36852428, 0.11388027, 0.36852428],
        [0.1937447, -0.238272, 0.1937447, 0.35801283, 0.2981424, 0.2981424],
        [-0.1937447, 0.238272, -0.1937447, 0.238272, -0.2981424, -0.2981424],
        [0.1937447, 0.35801283, 0.1937447, -0.238272, 0.2981424, 0.2981424],
        [-0.1937447, -0.35801283, -0.1937447, -0.35801283, -0.2981424, -0.2981424],
        [-0.34100485, 0.027519437, 0.3504874, 0.0, 0.3504874, 0.0],
        [0.34100485, -0.027519437, -0.3504874, 0.0, -0.3504874, 0.0],
        [0.027519437, -0.34100485, 0.3504874, 0.0, 0.3504874, 0.0],
        [0.34100485, -0.027519437, -0.3504874, 0.0, -0.3504874, 0.0],
    ]
)

# 1 / (3 * alpha) times the projection of each triangle's edge vectors onto the vertex bitangents.
TRI_DERIVATIVE_BITANGENT_FACTORS = np.array(
    [
        [0.1397348, -0.2811345, 0.11388027, -0.2981424, 0.21661313, 0.3504874],
        [0.1397348, -0.2811345, 0.11388027, -0.2981424, 0.21661313, 0.3504874],
        [0.36749536, 0.08738982, -0.11388027, 0.2981424, -0.21661313, -0.3504874],
        [-0.1397348, 0.2811345, -0.11388027, 0.2981424, -0.21661313, -0.3504874],
        [0.36749536, 0.08738982, -0.11388027, 0.2981424, -0.21661313, -0.3504874],
        [0.36749536, 0.08738982, -0.11388027, 0.2981424, -0.21661313, -0.3504874],
        [0.1397348, -0.2811345, 0.11388027, -0.2981424, 0.21661313, 0.3504874],
        [-0.36749536, -0.08738982, 0.11388027, -0.2981424, 0.21661313, 0.3504874],
        [-0.2981424, -0.2981424, 0.3504874, 0.0, 0.3504874, 0.0],
        [0.2981424, 0.2981424, -0.3504874, 0.0, -0.3504874, 0.0],
        [0.2981424, 0.2981424, -0.3504874, 0.0, -0.3504874, 0.0],
        [-0.2981424, -0.2981424, 0.3504874, 0.0, 0.3504874, 0.0],
        [-0.31348547, -0.2811345, -0.31348547, 0.08738982, 0.21661313, -0.21661313],
        [-0.31348547, -0.2811345, 0.31348547, 0.2811345, 0.21661313, -0.21661313],
        [-0.31348547, 0.08738982, -0.31348547, -0.2811345, -0.21661313, 0.21661313],
        [-0.31348547, 0.08738982, 0.31348547, -0.08738982, -0.21661313, 0.21661313],
        [0.1397348, 0.36749536, 0.11388027, 0.36852428, -0.11388027, -0.36852428],
        [0.1397348, 0.36749536, 0.11388027, 0.36852428, -0.11388027, -0.36852428],
        [0.36749536, 0.1397348, -0.11388027, -0.36852428, 0.11388027, 0.36852428],
        [-0.1397348, -0.36749536, -0.11388027, -0.36852428, 0.11388027, 0.36852428],
    ]
)

_SELECT_A = np.array([1.0, KT2, -KT])
_SELECT_B = np.array([-KT, 1.0, KT2])
_SELECT_C = np.array([KT2, -KT, 1.0])


@dataclass(frozen=True)
class Barycentrics:
    """The icosahedron triangle containing a direction, its vertices and barycentric weights."""

    tri_index: int
    indices: tuple[int, int, int]
    weights: tuple[float, float, float]


def _as_direction(direction) -> np.ndarray:
    d = np.asarray(direction, dtype=np.float64)
    if d.shape != (3,):
        raise ValueError(f"expected a 3-component direction, got shape {d.shape}")
    return d


def _octant_bits(d: np.ndarray) -> tuple[int, int, int]:
    return int(d[0] < 0), int(d[1] < 0), int(d[2] < 0)


def _selections(d: np.ndarray) -> tuple[bool, bool, bool]:
    a = np.abs(d)
    return bool(a @ _SELECT_A > 0.0), bool(a @ _SELECT_B > 0.0), bool(a @ _SELECT_C > 0.0)


def index_icosahedron(direction) -> tuple[int, int, int]:
    """Indices of the three icosahedron vertices around ``direction``."""
    d = _as_direction(direction)
    ox, oy, oz = _octant_bits(d)
    fx, fy = 1 - ox, 1 - oy
    select_a, select_b, select_c = _selections(d)
    i0 = oy * 2 + ox if select_a else oz * 2 + fx + 8
    i1 = oz * 2 + oy + 4 if select_b else fy * 2 + ox
    i2 = oz * 2 + ox + 8 if select_c else fy * 2 + oy + 4
    return i0, i1, i2


def index_icosahedron_triangle(direction) -> int:
    """Index of the icosahedron face that contains ``direction``."""
    d = _as_direction(direction)
    ox, oy, oz = _octant_bits(d)
    select_a, select_b, select_c = _selections(d)
    tri = ox + oy * 2 + oz * 4
    if not select_a:
        tri = 8 + oy + oz * 2
    if not select_b:
        tri = 12 + ox + oz * 2
    if not select_c:
        tri = 16 + ox + oy * 2
    return tri


def compute_barycentrics(direction) -> Barycentrics:
    """Locate ``direction`` on the icosahedron and compute its barycentric weights."""
    d = _as_direction(direction)
    tri = index_icosahedron_triangle(d)
    weights = TRIANGLE_BARYCENTRIC_NORMALS[tri] @ d
    return Barycentrics(
        tri_index=tri,
        indices=TRIANGLE_INDICES[tri],
        weights=(float(weights[0]), float(weights[1]), float(weights[2])),
    )