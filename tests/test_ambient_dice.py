import math

import numpy as np
import pytest

from probefit.ambient_dice import (
    AmbientDice,
    compute_gram_matrix_bezier,
    compute_gram_matrix_linear,
    compute_gram_matrix_srbf,
    solve_ambient_dice_least_squares_bezier,
    solve_ambient_dice_least_squares_linear,
    solve_ambient_dice_least_squares_srbf,
)
from probefit.icosahedron import VERTEX_POSITIONS
from probefit.image import Image


def _sphere_points(count):
    golden = math.pi * (3.0 - math.sqrt(5.0))
    points = []
    for k in range(count):
        z = 1.0 - 2.0 * (k + 0.5) / count
        r = math.sqrt(1.0 - z * z)
        phi = golden * k + 0.1
        points.append([r * math.cos(phi), r * math.sin(phi), z])
    return np.array(points)


DIRECTIONS = _sphere_points(1500)
AREAS = np.full(len(DIRECTIONS), 4.0 * math.pi / len(DIRECTIONS))


def _random_dice(seed):
    rng = np.random.default_rng(seed)
    return AmbientDice(
        values=rng.uniform(0.0, 1.0, (12, 3)),
        derivatives_u=rng.uniform(-0.5, 0.5, (12, 3)),
        derivatives_v=rng.uniform(-0.5, 0.5, (12, 3)),
    )


def test_rejects_wrong_vertex_table_shape():
    with pytest.raises(ValueError):
        AmbientDice(values=np.zeros((6, 3)))


@pytest.mark.parametrize("vertex", range(12))
def test_linear_reproduces_vertex_value_at_vertex(vertex):
    dice = _random_dice(1)
    direction = VERTEX_POSITIONS[vertex] / np.linalg.norm(VERTEX_POSITIONS[vertex])
    np.testing.assert_allclose(dice.evaluate_linear(direction), dice.values[vertex], atol=1e-5)


@pytest.mark.parametrize("vertex", range(12))
def test_bezier_reproduces_vertex_value_at_vertex(vertex):
    dice = _random_dice(2)
    direction = VERTEX_POSITIONS[vertex] / np.linalg.norm(VERTEX_POSITIONS[vertex])
    np.testing.assert_allclose(dice.evaluate_bezier(direction), dice.values[vertex], atol=1e-4)


def test_zero_dice_evaluates_to_zero():
    dice = AmbientDice()
    direction = np.array([0.3, -0.5, 0.81])
    np.testing.assert_allclose(dice.evaluate_srbf(direction), np.zeros(3))
    np.testing.assert_allclose(dice.evaluate_bezier(direction), np.zeros(3))


@pytest.mark.parametrize(
    "gram_fn, size",
    [
        (compute_gram_matrix_linear, 12),
        (compute_gram_matrix_srbf, 12),
        (compute_gram_matrix_bezier, 36),
    ],
)
def test_gram_matrix_is_symmetric_positive_definite(gram_fn, size):
    gram = gram_fn(DIRECTIONS)
    assert gram.shape == (size, size)
    np.testing.assert_allclose(gram, gram.T, atol=1e-12)
    assert np.linalg.eigvalsh(gram).min() > 0.0


def test_gram_matrix_requires_directions():
    with pytest.raises(ValueError):
        compute_gram_matrix_linear(np.zeros((0, 3)))


def test_linear_fit_round_trips():
    truth = _random_dice(3)
    irradiance = np.array([truth.evaluate_linear(d) for d in DIRECTIONS])
    fitted = solve_ambient_dice_least_squares_linear(DIRECTIONS, irradiance, AREAS, DIRECTIONS)
    np.testing.assert_allclose(fitted.values, truth.values, atol=1e-6)


def test_srbf_fit_round_trips():
    truth = _random_dice(4)
    irradiance = np.array([truth.evaluate_srbf(d) for d in DIRECTIONS])
    fitted = solve_ambient_dice_least_squares_srbf(DIRECTIONS, irradiance, AREAS, DIRECTIONS)
    np.testing.assert_allclose(fitted.values, truth.values, atol=1e-6)


def test_bezier_fit_round_trips():
    truth = _random_dice(5)
    irradiance = np.array([truth.evaluate_bezier(d) for d in DIRECTIONS])
    fitted = solve_ambient_dice_least_squares_bezier(DIRECTIONS, irradiance, AREAS, DIRECTIONS)
    np.testing.assert_allclose(fitted.values, truth.values, atol=1e-5)
    np.testing.assert_allclose(fitted.derivatives_u, truth.derivatives_u, atol=1e-5)
    np.testing.assert_allclose(fitted.derivatives_v, truth.derivatives_v, atol=1e-5)


def test_linear_fit_accepts_image_input():
    truth = _random_dice(6)
    grid = DIRECTIONS.reshape(30, 50, 3)
    pixels = np.ones((30, 50, 4))
    for y in range(30):
        for x in range(50):
            pixels[y, x, :3] = truth.evaluate_linear(grid[y, x])
    image = Image.from_array(pixels)
    fitted = solve_ambient_dice_least_squares_linear(grid, image, AREAS, DIRECTIONS)
    np.testing.assert_allclose(fitted.values, truth.values, atol=1e-4)


def test_solve_rejects_mismatched_texel_areas():
    irradiance = np.ones((len(DIRECTIONS), 3))
    with pytest.raises(ValueError):
        solve_ambient_dice_least_squares_linear(DIRECTIONS, irradiance, AREAS[:-1], DIRECTIONS)


def test_solve_rejects_mismatched_irradiance():
    irradiance = np.ones((len(DIRECTIONS) - 1, 3))
    with pytest.raises(ValueError):
        solve_ambient_dice_least_squares_srbf(DIRECTIONS, irradiance, AREAS, DIRECTIONS)


def test_solve_rejects_empty_samples():
    with pytest.raises(ValueError):
        solve_ambient_dice_least_squares_bezier(np.zeros((0, 3)), np.zeros((0, 3)), [], DIRECTIONS)