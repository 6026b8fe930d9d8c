"""Real spherical harmonics up to band 4 and diffuse reconstruction helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np

MAX_ORDER = 4

# Per-band diffuse convolution factors (Ramamoorthi and Hanrahan, equation 8).
_DIFFUSE_BAND_FACTORS = (
    math.pi,
    math.pi * 2.0 / 3.0,
    math.pi / 4.0,
    0.0,
    -math.pi / 24.0,
)

_LUMINANCE_COEFFICIENTS = np.array([0.2126, 0.7152, 0.0722])


@dataclass
class RadianceSample:
    """A radiance value observed along a direction."""

    direction: np.ndarray
    value: np.ndarray

    def __post_init__(self) -> None:
        self.direction = np.asarray(self.direction, dtype=np.float64)
        self.value = np.asarray(self.value, dtype=np.float64)


def sh_size(order: int) -> int:
    """Number of coefficients in an SH expansion up to band ``order``."""
    return (order + 1) * (order + 1)


def _order_of(sh: np.ndarray) -> int:
    count = len(sh)
    order = math.isqrt(count) - 1
    if order < 0 or sh_size(order) != count:
        raise ValueError(f"{count} is not a valid spherical harmonics coefficient count")
    return order


def _band_of(index: int) -> int:
    return math.isqrt(index)


def sh_evaluate(p, order: int) -> np.ndarray:
    """Evaluate the SH basis functions up to band ``order`` in direction ``p``."""
    if not 0 <= order <= MAX_ORDER:
        raise ValueError(f"spherical harmonics order must be in 0..{MAX_ORDER}, got {order}")

    px, py, pz = (float(c) for c in p)
    x, y, z = -px, -py, pz
    x2, y2, z2 = x * x, y * y, z * z
    z3 = z2 * z
    x4, y4, z4 = x2 * x2, y2 * y2, z2 * z2
    pi = math.pi
    sqrt_pi = math.sqrt(pi)
    sqrt = math.sqrt

    values = [1.0 / (2.0 * sqrt_pi)]
    if order >= 1:
        c1 = sqrt(3.0 / (4.0 * pi))
        values += [-c1 * y, c1 * z, -c1 * x]
    if order >= 2:
        values += [
            sqrt(15.0 / (4.0 * pi)) * y * x,
            -sqrt(15.0 / (4.0 * pi)) * y * z,
            sqrt(5.0 / (16.0 * pi)) * (3.0 * z2 - 1.0),
            -sqrt(15.0 / (4.0 * pi)) * x * z,
            sqrt(15.0 / (16.0 * pi)) * (x2 - y2),
        ]
    if order >= 3:
        values += [
            -sqrt(70.0 / (64.0 * pi)) * y * (3.0 * x2 - y2),
            sqrt(105.0 / (4.0 * pi)) * y * x * z,
            -sqrt(21.0 / (16.0 * pi)) * y * (-1.0 + 5.0 * z2),
            sqrt(7.0 / (16.0 * pi)) * (5.0 * z3 - 3.0 * z),
            -sqrt(21.0 / (64.0 * pi)) * x * (-1.0 + 5.0 * z2),
            sqrt(105.0 / (16.0 * pi)) * (x2 - y2) * z,
            -sqrt(70.0 / (64.0 * pi)) * x * (x2 - 3.0 * y2),
        ]
    if order >= 4:
        values += [
            3.0 * sqrt(35.0 / (16.0 * pi)) * x * y * (x2 - y2),
            -3.0 * sqrt(70.0 / (64.0 * pi)) * y * z * (3.0 * x2 - y2),
            3.0 * sqrt(5.0 / (16.0 * pi)) * y * x * (-1.0 + 7.0 * z2),
            -3.0 * sqrt(10.0 / (64.0 * pi)) * y * z * (-3.0 + 7.0 * z2),
            (105.0 * z4 - 90.0 * z2 + 9.0) / (16.0 * sqrt_pi),
            -3.0 * sqrt(10.0 / (64.0 * pi)) * x * z * (-3.0 + 7.0 * z2),
            3.0 * sqrt(5.0 / (64.0 * pi)) * (x2 - y2) * (-1.0 + 7.0 * z2),
            -3.0 * sqrt(70.0 / (64.0 * pi)) * x * z * (x2 - 3.0 * y2),
            3.0 * sqrt(35.0 / (4.0 * (64.0 * pi))) * (x4 - 6.0 * y2 * x2 + y4),
        ]
    return np.array(values)


def sh_evaluate_l1(p) -> np.ndarray:
    return sh_evaluate(p, 1)


def sh_evaluate_l2(p) -> np.ndarray:
    return sh_evaluate(p, 2)


def sh_add_weighted(accumulator, sh, weight) -> np.ndarray:
    """Return ``accumulator + sh * weight``; scalar coefficients times a colour weight give colour coefficients."""
    acc = np.asarray(accumulator, dtype=np.float64)
    coeffs = np.asarray(sh, dtype=np.float64)
    w = np.asarray(weight, dtype=np.float64)
    if len(acc) != len(coeffs):
        raise ValueError("spherical harmonics of different sizes")
    term = np.multiply.outer(coeffs, w) if coeffs.ndim == 1 else coeffs * w
    return acc + term


def sh_dot(sh_a, sh_b):
    """Sum of coefficient-wise products of two expansions of the same size."""
    a = np.asarray(sh_a, dtype=np.float64)
    b = np.asarray(sh_b, dtype=np.float64)
    if len(a) != len(b):
        raise ValueError("spherical harmonics of different sizes")
    if a.ndim > 1 and b.ndim > 1:
        return (a * b).sum(axis=0)
    result = np.tensordot(a, b, axes=(0, 0))
    return float(result) if np.ndim(result) == 0 else result


def sh_evaluate_diffuse_l1_geomerics(sh, n) -> float:
    """Non-linear diffuse reconstruction from scalar L1 SH (Geomerics)."""
    coeffs = np.asarray(sh, dtype=np.float64)
    if len(coeffs) != 4 or coeffs.ndim != 1:
        raise ValueError("expected 4 scalar L1 coefficients")
    r0 = coeffs[0]
    r1 = 0.5 * np.array([coeffs[3], coeffs[1], coeffs[2]])
    len_r1 = float(np.linalg.norm(r1))
    q = 0.5 * (1.0 + float(np.dot(r1 / len_r1, np.asarray(n, dtype=np.float64))))
    p = 1.0 + 2.0 * len_r1 / r0
    a = (1.0 - len_r1 / r0) / (1.0 + len_r1 / r0)
    return float(r0 * (a + (1.0 - a) * (p + 1.0) * q**p))


def _band_factors(order: int) -> np.ndarray:
    if order > MAX_ORDER:
        raise ValueError(f"spherical harmonics order must be at most {MAX_ORDER}, got {order}")
    return np.array([_DIFFUSE_BAND_FACTORS[_band_of(i)] for i in range(sh_size(order))])


def _scale_per_coefficient(coeffs: np.ndarray, factors: np.ndarray) -> np.ndarray:
    return coeffs * factors.reshape((-1,) + (1,) * (coeffs.ndim - 1))


def sh_convolve_diffuse(sh) -> np.ndarray:
    """Convolve an expansion with the clamped cosine lobe, band by band."""
    coeffs = np.asarray(sh, dtype=np.float64)
    return _scale_per_coefficient(coeffs, _band_factors(_order_of(coeffs)))


def sh_evaluate_diffuse(sh, direction):
    """Irradiance (times pi) reconstructed from radiance SH in ``direction``."""
    coeffs = np.asarray(sh, dtype=np.float64)
    order = _order_of(coeffs)
    return sh_dot(sh_convolve_diffuse(coeffs), sh_evaluate(direction, order))


def sh_evaluate_diffuse_l1_zh3_hallucinate(sh, n) -> np.ndarray:
    """L1 RGB diffuse reconstruction plus a zonal L2 term hallucinated from the linear band."""
    coeffs = np.asarray(sh, dtype=np.float64)
    if coeffs.shape != (4, 3):
        raise ValueError("expected L1 RGB coefficients of shape (4, 3)")
    linear = coeffs[[3, 1, 2]]
    axis = linear @ _LUMINANCE_COEFFICIENTS
    axis = axis / np.linalg.norm(axis)
    ratio = np.abs(axis @ linear) / coeffs[0]
    zonal_l2 = coeffs[0] * (0.08 * ratio + 0.6 * ratio * ratio)
    f_z = float(np.dot(axis, np.asarray(n, dtype=np.float64)))
    zh_dir = math.sqrt(5.0 / (16.0 * math.pi)) * (3.0 * f_z * f_z - 1.0)
    base = sh_evaluate_diffuse(coeffs, n)
    return base + math.pi * 0.25 * zonal_l2 * zh_dir


def sh_find_windowing_lambda(sh, max_laplacian: float) -> float:
    """Find the windowing strength that brings the squared Laplacian down to ``max_laplacian**2``."""
    coeffs = np.asarray(sh, dtype=np.float64)
    order = _order_of(coeffs)

    table_l = [0.0] * (order + 1)
    table_b = [0.0] * (order + 1)
    for band in range(1, order + 1):
        table_l[band] = float(band * band * (band + 1) * (band + 1))
        table_b[band] = sum(coeffs[band * band + band + m] ** 2 for m in range(-1, band + 1))

    squared_laplacian = sum(table_l[band] * table_b[band] for band in range(1, order + 1))
    target = max_laplacian * max_laplacian
    if squared_laplacian <= target:
        return 0.0

    lam = 0.0
    for _ in range(10_000_000):
        f = 0.0
        fd = 0.0
        for band in range(1, order + 1):
            denom = 1.0 + lam * table_l[band]
            f += table_l[band] * table_b[band] / denom**2
            fd += 2.0 * table_l[band] ** 2 * table_b[band] / denom**3
        f = target - f
        delta = -f / fd
        lam += delta
        if abs(delta) < 1e-6:
            break
    return lam


def sh_apply_windowing(sh, lam: float) -> np.ndarray:
    """Return the expansion with band ``l`` scaled by ``1 / (1 + lam * l^2 (l+1)^2)``."""
    coeffs = np.asarray(sh, dtype=np.float64)
    order = _order_of(coeffs)
    factors = np.array(
        [1.0 / (1.0 + lam * (l := _band_of(i)) * l * (l + 1.0) * (l + 1.0)) for i in range(sh_size(order))]
    )
    return _scale_per_coefficient(coeffs, factors)


def sh_mean_square_error(sh, samples: Iterable[RadianceSample]):
    """Mean squared error between the expansion and radiance samples."""
    coeffs = np.asarray(sh, dtype=np.float64)
    order = _order_of(coeffs)
    errors = [
        (sample.value - sh_dot(coeffs, sh_evaluate(sample.direction, order))) ** 2 for sample in samples
    ]
    if not errors:
        raise ValueError("no radiance samples")
    return sum(errors) / len(errors)


def sh_mean_square_error_scalar(sh, samples: Iterable[RadianceSample]) -> float:
    """Mean square error summed over channels with weight one third each."""
    return float(np.sum(np.asarray(sh_mean_square_error(sh, samples)) * (1.0 / 3.0)))