[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "probefit"
version = "0.1.0"
description = "Fit and evaluate lighting probe encodings: spherical harmonics, ambient cubes and ambient dice."
requires-python = ">=3.10"
keywords = ["lighting", "irradiance", "spherical harmonics", "ambient cube", "ambient dice", "probes"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "numpy",
    "scipy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["probefit"]

[tool.pytest.ini_options]
addopts = "-ra"
