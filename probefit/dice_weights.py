"""Per-vertex weights for the ambient dice hybrid cubic Bezier and SRBF bases."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .icosahedron import (
    SRBF_NORMALISED_VERTEX_POSITIONS,
    TRI_DERIVATIVE_BITANGENT_FACTORS,
    TRI_DERIVATIVE_TANGENT_FACTORS,
    TRIANGLE_INDICES,
    compute_barycentrics,
)

_SQRT5 = math.sqrt(5.0)
_ALPHA = 0.5 * math.sqrt(0.5 * (5.0 + _SQRT5))
_BETA = -0.5 * math.sqrt(0.1 * (5.0 + _SQRT5))

_A0 = (_SQRT5 - 5.0) / 40.0
_A1 = (11.0 * _SQRT5 - 15.0) / 40.0
_A2 = _SQRT5 / 10.0

_VALUE_FACTOR = -_BETA / _ALPHA

SRBF_WEIGHT_COUNT = 12


@dataclass(frozen=True)
class VertexWeights:
    """Weights applied to a vertex's value and its two directional derivatives."""

    value: float
    directional_derivative_u: float
    directional_derivative_v: float


def _interior_split(b0: float, b1: float, b2: float) -> tuple[float, float, float]:
    """How the central control point is shared out between the three sub-patches."""
    if b0 == 1.0:
        return 1.0, 0.0, 0.0
    if b1 == 1.0:
        return 0.0, 1.0, 0.0
    if b2 == 1.0:
        return 0.0, 0.0, 1.0
    denom = b1 * b2 + b0 * b2 + b0 * b1
    if denom == 0.0:
        # The central control point has zero weight here, so the split is irrelevant.
        return 0.0, 0.0, 0.0
    return b1 * b2 / denom, b0 * b2 / denom, b0 * b1 / denom


def hybrid_cubic_bezier_weights(
    tri_index: int, b0: float, b1: float, b2: float
) -> tuple[VertexWeights, VertexWeights, VertexWeights]:
    """Weights of the three vertices of triangle ``tri_index`` at barycentrics ``(b0, b1, b2)``."""
    if not 0 <= tri_index < len(TRIANGLE_INDICES):
        raise ValueError(f"triangle index must be in 0..{len(TRIANGLE_INDICES) - 1}, got {tri_index}")
    b0, b1, b2 = float(b0), float(b1), float(b2)
    w0, w1, w2 = _interior_split(b0, b1, b2)

    b0_2, b1_2, b2_2 = b0 * b0, b1 * b1, b2 * b2

    c300 = b0_2 * b0
    c030 = b1_2 * b1
    c003 = b2_2 * b2

    c120 = 3.0 * b0 * b1_2
    c021 = 3.0 * b1_2 * b2
    c210 = 3.0 * b0_2 * b1
    c012 = 3.0 * b1 * b2_2
    c201 = 3.0 * b0_2 * b2
    c102 = 3.0 * b0 * b2_2

    c111 = 6.0 * b0 * b1 * b2
    s0, s1, s2 = w0 * c111, w1 * c111, w2 * c111

    values = [_A0 * s2, _A0 * s0, _A0 * s1]

    c021 += _A1 * s0
    c012 += _A1 * s0
    c003 += _A0 * s0
    c120 += _A2 * s0
    c102 += _A2 * s0

    c102 += _A1 * s1
    c201 += _A1 * s1
    c300 += _A0 * s1
    c012 += _A2 * s1
    c210 += _A2 * s1

    c210 += _A1 * s2
    c120 += _A1 * s2
    c030 += _A0 * s2
    c201 += _A2 * s2
    c021 += _A2 * s2

    tangent = TRI_DERIVATIVE_TANGENT_FACTORS[tri_index]
    bitangent = TRI_DERIVATIVE_BITANGENT_FACTORS[tri_index]

    edge_controls = (
        ((c210, c201), (0, 1)),
        ((c120, c021), (2, 3)),
        ((c102, c012), (4, 5)),
    )
    corners = (c300, c030, c003)

    result = []
    for vertex, ((first, second), (k0, k1)) in enumerate(edge_controls):
        value = values[vertex] + _VALUE_FACTOR * (first + second) + corners[vertex]
        du = float(tangent[k0]) * first + float(tangent[k1]) * second
        dv = float(bitangent[k0]) * first + float(bitangent[k1]) * second
        result.append(VertexWeights(value, du, dv))
    return result[0], result[1], result[2]


def hybrid_cubic_bezier_weights_for_direction(
    direction,
) -> tuple[tuple[int, int, int], tuple[VertexWeights, VertexWeights, VertexWeights]]:
    """Vertex indices and Bezier weights of the triangle containing ``direction``."""
    bary = compute_barycentrics(direction)
    weights = hybrid_cubic_bezier_weights(bary.tri_index, *bary.weights)
    return bary.indices, weights


def srbf_weights(direction) -> np.ndarray:
    """Weights of the twelve spherical radial basis lobes for ``direction``.

    Lobe ``2 * i`` points along axis ``i`` and lobe ``2 * i + 1`` opposite it; only the
    lobe on the direction's side of each axis gets a weight.
    """
    d = np.asarray(direction, dtype=np.float64)
    if d.shape != (3,):
        raise ValueError(f"expected a 3-component direction, got shape {d.shape}")
    weights = np.zeros(SRBF_WEIGHT_COUNT)
    for axis_index, axis in enumerate(SRBF_NORMALISED_VERTEX_POSITIONS):
        cosine = float(d @ axis)
        index = 2 * axis_index if cosine > 0 else 2 * axis_index + 1
        cos2 = cosine * cosine
        cos4 = cos2 * cos2
        weights[index] = 0.7 * (0.5 * cos2) + 0.3 * (5.0 / 6.0 * cos4)
    return weights