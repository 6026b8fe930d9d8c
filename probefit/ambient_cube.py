"""Ambient cube lighting: six axis-aligned irradiance values blended by squared direction."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from scipy.optimize import nnls

from .image import Image

FACE_COUNT = 6


def _zero_faces() -> np.ndarray:
    return np.zeros((FACE_COUNT, 3))


@dataclass
class AmbientCube:
    """Irradiance for the -X, +X, -Y, +Y, -Z, +Z faces, one RGB row each."""

    irradiance: np.ndarray = field(default_factory=_zero_faces)

    def __post_init__(self) -> None:
        self.irradiance = np.asarray(self.irradiance, dtype=np.float64)
        if self.irradiance.shape != (FACE_COUNT, 3):
            raise ValueError(f"expected irradiance of shape (6, 3), got {self.irradiance.shape}")

    def evaluate(self, direction) -> np.ndarray:
        """Reconstruct RGB irradiance in ``direction``."""
        d = np.asarray(direction, dtype=np.float64)
        if d.shape != (3,):
            raise ValueError(f"expected a 3-component direction, got shape {d.shape}")
        faces = [0 if d[0] < 0 else 1, 2 if d[1] < 0 else 3, 4 if d[2] < 0 else 5]
        return (d * d) @ self.irradiance[faces]


def _as_directions(directions) -> np.ndarray:
    array = np.asarray(directions, dtype=np.float64)
    if array.shape[-1:] != (3,):
        raise ValueError(f"directions must have 3 components, got shape {array.shape}")
    return array.reshape(-1, 3)


def _as_colours(irradiance) -> np.ndarray:
    if isinstance(irradiance, Image):
        array = irradiance.pixels.astype(np.float64)
    else:
        array = np.asarray(irradiance, dtype=np.float64)
    if array.ndim < 2 or array.shape[-1] < 3:
        raise ValueError(f"irradiance must have at least 3 channels, got shape {array.shape}")
    return array.reshape(-1, array.shape[-1])[:, :3]


def _design_matrix(directions: np.ndarray) -> np.ndarray:
    squared = directions * directions
    negative = directions < 0
    matrix = np.zeros((len(directions), FACE_COUNT))
    matrix[:, 0::2] = np.where(negative, squared, 0.0)
    matrix[:, 1::2] = np.where(negative, 0.0, squared)
    return matrix


def solve_ambient_cube_least_squares(directions, irradiance) -> AmbientCube:
    """Fit a non-negative ambient cube to irradiance observed along ``directions``.

    ``directions`` is any array of 3-vectors; ``irradiance`` is an :class:`Image`
    or an array of colours, matched to the directions in row-major order.
    """
    dirs = _as_directions(directions)
    colours = _as_colours(irradiance)
    if len(dirs) == 0:
        raise ValueError("no samples to fit")
    if len(dirs) != len(colours):
        raise ValueError(f"{len(dirs)} directions but {len(colours)} irradiance samples")

    matrix = _design_matrix(dirs)
    faces = np.column_stack([nnls(matrix, colours[:, channel])[0] for channel in range(3)])
    return AmbientCube(faces)