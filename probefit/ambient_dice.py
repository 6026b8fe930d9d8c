"""Ambient dice lighting: twelve icosahedron vertices fitted by least squares.

Three reconstructions are supported: linear interpolation over the containing
face, a hybrid cubic Bezier patch that also stores two directional derivatives
per vertex, and a set of spherical radial basis lobes.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable

import numpy as np

from .dice_weights import hybrid_cubic_bezier_weights_for_direction, srbf_weights
from .icosahedron import compute_barycentrics
from .image import Image

VERTEX_COUNT = 12
BEZIER_PARAMETER_COUNT = 3 * VERTEX_COUNT


def _zero_vertices() -> np.ndarray:
    return np.zeros((VERTEX_COUNT, 3))


def _as_vertex_table(name: str, table) -> np.ndarray:
    array = np.asarray(table, dtype=np.float64)
    if array.shape != (VERTEX_COUNT, 3):
        raise ValueError(f"expected {name} of shape (12, 3), got {array.shape}")
    return array


@dataclass
class AmbientDice:
    """RGB value and two RGB directional derivatives for each of the twelve vertices."""

    values: np.ndarray = field(default_factory=_zero_vertices)
    derivatives_u: np.ndarray = field(default_factory=_zero_vertices)
    derivatives_v: np.ndarray = field(default_factory=_zero_vertices)

    def __post_init__(self) -> None:
        self.values = _as_vertex_table("values", self.values)
        self.derivatives_u = _as_vertex_table("derivatives_u", self.derivatives_u)
        self.derivatives_v = _as_vertex_table("derivatives_v", self.derivatives_v)

    def evaluate_linear(self, direction) -> np.ndarray:
        """Barycentric interpolation of the vertex values of the face containing ``direction``."""
        bary = compute_barycentrics(direction)
        return np.asarray(bary.weights) @ self.values[list(bary.indices)]

    def evaluate_srbf(self, direction) -> np.ndarray:
        """Sum of the radial basis lobes weighted by the vertex values."""
        return srbf_weights(direction) @ self.values

    def evaluate_bezier(self, direction) -> np.ndarray:
        """Hybrid cubic Bezier reconstruction using values and directional derivatives."""
        indices, weights = hybrid_cubic_bezier_weights_for_direction(direction)
        result = np.zeros(3)
        for index, weight in zip(indices, weights):
            result += (
                weight.value * self.values[index]
                + weight.directional_derivative_u * self.derivatives_u[index]
                + weight.directional_derivative_v * self.derivatives_v[index]
            )
        return result


def _linear_row(direction) -> np.ndarray:
    bary = compute_barycentrics(direction)
    row = np.zeros(VERTEX_COUNT)
    for index, weight in zip(bary.indices, bary.weights):
        row[index] = weight
    return row


def _bezier_row(direction) -> np.ndarray:
    indices, weights = hybrid_cubic_bezier_weights_for_direction(direction)
    row = np.zeros(BEZIER_PARAMETER_COUNT)
    for index, weight in zip(indices, weights):
        row[3 * index : 3 * index + 3] = (
            weight.value,
            weight.directional_derivative_u,
            weight.directional_derivative_v,
        )
    return row


_RowFunction = Callable[[np.ndarray], np.ndarray]


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


def _weight_matrix(directions: np.ndarray, row: _RowFunction, width: int) -> np.ndarray:
    if len(directions) == 0:
        return np.zeros((0, width))
    return np.array([row(d) for d in directions])


def _gram(directions, row: _RowFunction, width: int) -> np.ndarray:
    dirs = _as_directions(directions)
    if len(dirs) == 0:
        raise ValueError("no directions to integrate over")
    weights = _weight_matrix(dirs, row, width)
    sample_scale = 4.0 * math.pi / len(dirs)
    return (weights.T @ weights) * sample_scale


def compute_gram_matrix_bezier(directions) -> np.ndarray:
    """36x36 Gram matrix of the Bezier basis, integrated over uniformly spread ``directions``."""
    return _gram(directions, _bezier_row, BEZIER_PARAMETER_COUNT)


def compute_gram_matrix_linear(directions) -> np.ndarray:
    """12x12 Gram matrix of the linear basis, integrated over uniformly spread ``directions``."""
    return _gram(directions, _linear_row, VERTEX_COUNT)


def compute_gram_matrix_srbf(directions) -> np.ndarray:
    """12x12 Gram matrix of the radial basis, integrated over uniformly spread ``directions``."""
    return _gram(directions, srbf_weights, VERTEX_COUNT)


def _solve(
    directions,
    irradiance,
    texel_areas,
    gram_directions,
    row: _RowFunction,
    width: int,
) -> np.ndarray:
    dirs = _as_directions(directions)
    colours = _as_colours(irradiance)
    areas = np.asarray(texel_areas, dtype=np.float64).reshape(-1)
    if len(dirs) == 0:
        raise ValueError("no samples to fit")
    if len(dirs) != len(colours):
        raise ValueError(f"{len(dirs)} directions but {len(colours)} irradiance samples")
    if len(dirs) != len(areas):
        raise ValueError(f"{len(dirs)} directions but {len(areas)} texel areas")

    weights = _weight_matrix(dirs, row, width)
    moments = weights.T @ (colours * areas[:, None])
    gram = _gram(gram_directions, row, width)
    solution, *_ = np.linalg.lstsq(gram, moments, rcond=None)
    return solution


def solve_ambient_dice_least_squares_linear(
    directions, irradiance, texel_areas, gram_directions
) -> AmbientDice:
    """Fit vertex values for linear reconstruction.

    ``directions``, ``irradiance`` and ``texel_areas`` describe the samples in
    matching order; ``gram_directions`` are uniform sphere samples for the Gram matrix.
    """
    solution = _solve(directions, irradiance, texel_areas, gram_directions, _linear_row, VERTEX_COUNT)
    return AmbientDice(values=solution)


def solve_ambient_dice_least_squares_bezier(
    directions, irradiance, texel_areas, gram_directions
) -> AmbientDice:
    """Fit vertex values and directional derivatives for Bezier reconstruction."""
    solution = _solve(
        directions, irradiance, texel_areas, gram_directions, _bezier_row, BEZIER_PARAMETER_COUNT
    )
    return AmbientDice(
        values=solution[0::3],
        derivatives_u=solution[1::3],
        derivatives_v=solution[2::3],
    )


def solve_ambient_dice_least_squares_srbf(
    directions, irradiance, texel_areas, gram_directions
) -> AmbientDice:
    """Fit lobe values for radial basis reconstruction."""
    solution = _solve(directions, irradiance, texel_areas, gram_directions, srbf_weights, VERTEX_COUNT)
    return AmbientDice(values=solution)