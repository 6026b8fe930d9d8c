import math

import numpy as np
import pytest

from probefit.ambient_cube import AmbientCube, solve_ambient_cube_least_squares
from probefit.image import Image


def _fibonacci_sphere(count):
    golden = math.pi * (3.0 - math.sqrt(5.0))
    points = []
    for i in range(count):
        z = 1.0 - 2.0 * (i + 0.5) / count
        r = math.sqrt(1.0 - z * z)
        phi = golden * i
        points.append((r * math.cos(phi), r * math.sin(phi), z))
    return np.array(points)


FACES = np.array(
    [
        [0.1, 0.2, 0.3],
        [1.0, 0.5, 0.25],
        [0.4, 0.4, 0.4],
        [2.0, 1.5, 1.0],
        [0.0, 0.3, 0.6],
        [0.7, 0.8, 0.9],
    ]
)


@pytest.mark.parametrize(
    "direction, face",
    [
        ((-1.0, 0.0, 0.0), 0),
        ((1.0, 0.0, 0.0), 1),
        ((0.0, -1.0, 0.0), 2),
        ((0.0, 1.0, 0.0), 3),
        ((0.0, 0.0, -1.0), 4),
        ((0.0, 0.0, 1.0), 5),
    ],
)
def test_evaluate_on_axes_returns_face(direction, face):
    cube = AmbientCube(FACES)
    np.testing.assert_allclose(cube.evaluate(direction), FACES[face])


def test_evaluate_blends_by_squared_components():
    cube = AmbientCube(FACES)
    d = np.array([-1.0, 1.0, 0.0]) / math.sqrt(2.0)
    np.testing.assert_allclose(cube.evaluate(d), 0.5 * FACES[0] + 0.5 * FACES[3])


def test_constant_cube_is_constant_on_unit_sphere():
    cube = AmbientCube(np.tile([0.3, 0.6, 0.9], (6, 1)))
    for d in _fibonacci_sphere(50):
        np.testing.assert_allclose(cube.evaluate(d), [0.3, 0.6, 0.9], atol=1e-12)


def test_default_cube_is_black():
    cube = AmbientCube()
    np.testing.assert_array_equal(cube.evaluate((0.0, 0.0, 1.0)), np.zeros(3))
    np.testing.assert_array_equal(cube.evaluate((0.6, -0.8, 0.0)), np.zeros(3))


def test_bad_shape_rejected():
    with pytest.raises(ValueError):
        AmbientCube(np.zeros((5, 3)))


def test_least_squares_recovers_cube_from_array():
    dirs = _fibonacci_sphere(400)
    truth = AmbientCube(FACES)
    colours = np.array([truth.evaluate(d) for d in dirs])
    solved = solve_ambient_cube_least_squares(dirs, colours)
    np.testing.assert_allclose(solved.irradiance, FACES, atol=1e-6)


def test_least_squares_accepts_image():
    dirs = _fibonacci_sphere(64)
    truth = AmbientCube(FACES)
    pixels = np.ones((8, 8, 4))
    pixels[..., :3] = np.array([truth.evaluate(d) for d in dirs]).reshape(8, 8, 3)
    solved = solve_ambient_cube_least_squares(dirs.reshape(8, 8, 3), Image.from_array(pixels))
    np.testing.assert_allclose(solved.irradiance, FACES, atol=1e-4)


def test_least_squares_is_non_negative():
    dirs = _fibonacci_sphere(200)
    colours = np.where(dirs[:, :1] < 0, -1.0, 1.0) * np.ones((200, 3))
    solved = solve_ambient_cube_least_squares(dirs, colours)
    irradiance = np.asarray(solved.irradiance, dtype=float)
    assert float(irradiance.min()) >= 0.0
    # The -x face only sees negative targets, so the constraint pins it to zero.
    np.testing.assert_allclose(irradiance[0], np.zeros(3), atol=1e-9)
    # The +x face sees positive targets and must carry some of them.
    assert float(irradiance[1].min()) > 0.0


def test_least_squares_mismatched_counts():
    with pytest.raises(ValueError):
        solve_ambient_cube_least_squares(_fibonacci_sphere(10), np.zeros((9, 3)))


def test_least_squares_no_samples():
    with pytest.raises(ValueError):
        solve_ambient_cube_least_squares(np.zeros((0, 3)), np.zeros((0, 3)))