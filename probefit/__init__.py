"""Fitting and evaluation of spherical lighting probe encodings: images, spherical harmonics, ambient cubes and ambient dice."""

__version__ = "0.1.0"

__all__ = [
    "image",
    "spherical_harmonics",
    "ambient_cube",
    "icosahedron",
    "dice_weights",
    "ambient_dice",
]