# probefit

A library for encoding spherical lighting into compact probe representations
and reconstructing it again, so that different encodings can be compared.

## Modules

- `probefit.image`: the `Image` class, a float RGBA pixel grid stored as a
  `(height, width, 4)` numpy array. It offers `Image.from_array`,
  nearest-neighbour `sample_nearest` with edge clamping, `paste`, `fill` and
  `write_png` (8-bit opaque PNG; an empty image writes nothing). Error metrics
  over the overlapping region of two images: `image_difference`,
  `image_symmetric_absolute_percentage_error` and `image_mean_square_error`.
- `probefit.spherical_harmonics`: real spherical harmonics up to band 4
  (`sh_evaluate`, `sh_evaluate_l1`, `sh_evaluate_l2`), accumulation and dot
  products (`sh_add_weighted`, `sh_dot`), diffuse convolution and
  reconstruction (`sh_convolve_diffuse`, `sh_evaluate_diffuse`), the Geomerics
  non-linear L1 reconstruction (`sh_evaluate_diffuse_l1_geomerics`), the ZH3
  zonal term hallucinated from L1 RGB coefficients
  (`sh_evaluate_diffuse_l1_zh3_hallucinate`), windowing
  (`sh_find_windowing_lambda`, `sh_apply_windowing`) and error against
  `RadianceSample` lists (`sh_mean_square_error`,
  `sh_mean_square_error_scalar`).
- `probefit.ambient_cube`: `AmbientCube`, six RGB face values blended by the
  squared direction, and `solve_ambient_cube_least_squares`, a non-negative
  least-squares fit per colour channel.
- `probefit.icosahedron`: the icosahedron tables behind the ambient dice basis
  and the lookups `index_icosahedron`, `index_icosahedron_triangle` and
  `compute_barycentrics` (which returns a `Barycentrics` record).
- `probefit.dice_weights`: `hybrid_cubic_bezier_weights`,
  `hybrid_cubic_bezier_weights_for_direction` (returning `VertexWeights`
  per vertex) and `srbf_weights` for the twelve radial basis lobes.
- `probefit.ambient_dice`: `AmbientDice` with `evaluate_linear`,
  `evaluate_srbf` and `evaluate_bezier`; Gram matrices
  (`compute_gram_matrix_linear`, `compute_gram_matrix_bezier`,
  `compute_gram_matrix_srbf`) and least-squares fits
  (`solve_ambient_dice_least_squares_linear`,
  `solve_ambient_dice_least_squares_bezier`,
  `solve_ambient_dice_least_squares_srbf`).

## Installation

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Examples

Evaluate a spherical harmonics expansion:

```python
import numpy as np
from probefit.spherical_harmonics import sh_evaluate, sh_dot

basis = sh_evaluate([0.0, 0.0, 1.0], 2)   # nine L2 basis values
coefficients = np.zeros(9)
coefficients[0] = 1.0
print(sh_dot(coefficients, basis))
```

Fit an ambient cube to sampled irradiance:

```python
import numpy as np
from probefit.ambient_cube import solve_ambient_cube_least_squares

rng = np.random.default_rng(0)
directions = rng.normal(size=(500, 3))
directions /= np.linalg.norm(directions, axis=1, keepdims=True)
irradiance = np.clip(directions[:, [1]], 0.0, None) * [1.0, 0.9, 0.8] + 0.1

cube = solve_ambient_cube_least_squares(directions, irradiance)
print(cube.evaluate([0.0, 1.0, 0.0]))
```

Fit ambient dice. The solvers take the samples, one texel area per sample,
and a separate set of uniformly spread directions used to integrate the Gram
matrix:

```python
import numpy as np
from probefit.ambient_dice import solve_ambient_dice_least_squares_bezier

def fibonacci_sphere(count):
    i = np.arange(count) + 0.5
    z = 1.0 - 2.0 * i / count
    r = np.sqrt(1.0 - z * z)
    phi = np.pi * (3.0 - np.sqrt(5.0)) * i
    return np.column_stack([r * np.cos(phi), r * np.sin(phi), z])

directions = fibonacci_sphere(2000)
irradiance = np.clip(directions[:, [2]], 0.0, None) * [1.0, 1.0, 1.0]
areas = np.full(len(directions), 4.0 * np.pi / len(directions))

dice = solve_ambient_dice_least_squares_bezier(
    directions, irradiance, areas, fibonacci_sphere(4096)
)
print(dice.evaluate_bezier([0.0, 0.0, 1.0]))
```

## What this package does not do

- It has no command-line tool; everything is used from Python.
- It does not read HDR or other image files and does not resize images;
  build `Image` objects from numpy arrays with `Image.from_array`. The only
  file output is `Image.write_png`.
- It does not generate reference lighting (for example by Monte Carlo
  integration) or run a comparison between encodings; it supplies the
  encodings, their fits and the image error metrics to build that on.
- Ambient dice fitting covers the linear, Bezier and radial basis variants
  only; there is no Y/Co/Cg variant.