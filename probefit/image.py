"""Floating-point RGBA images and per-pixel error metrics."""

from __future__ import annotations

import math
from os import PathLike
from typing import Sequence, Union

import numpy as np
from PIL import Image as PILImage

_PathType = Union[str, "PathLike[str]"]


class Image:
    """A width x height grid of RGBA float pixels, stored row-major as (height, width, 4)."""

    def __init__(self, width: int = 0, height: int = 0) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"image size must be non-negative, got {width}x{height}")
        self.pixels = np.zeros((height, width, 4), dtype=np.float32)

    @classmethod
    def from_array(cls, pixels) -> "Image":
        """Build an image from an array shaped (height, width, 4)."""
        array = np.asarray(pixels, dtype=np.float32)
        if array.ndim != 3 or array.shape[2] != 4:
            raise ValueError(f"expected an array of shape (height, width, 4), got {array.shape}")
        image = cls()
        image.pixels = array.copy()
        return image

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def aspect(self) -> float:
        return self.width / self.height

    def __getitem__(self, pos: tuple[int, int]) -> np.ndarray:
        x, y = pos
        return self.pixels[y, x]

    def __setitem__(self, pos: tuple[int, int], value) -> None:
        x, y = pos
        self.pixels[y, x] = value

    def sample_nearest(self, uv: Sequence[float]) -> np.ndarray:
        """Return the pixel nearest to texture coordinate ``uv``, clamped to the edges."""
        if self.pixel_count == 0:
            raise ValueError("cannot sample an empty image")
        u, v = uv
        x = min(max(math.floor(u * self.width), 0), self.width - 1)
        y = min(max(math.floor(v * self.height), 0), self.height - 1)
        return self.pixels[y, x].copy()

    def paste(self, src: "Image", pos: Sequence[int]) -> None:
        """Copy ``src`` into this image with its top-left corner at ``pos``."""
        x, y = pos
        if x < 0 or y < 0 or x + src.width > self.width or y + src.height > self.height:
            raise IndexError(
                f"a {src.width}x{src.height} image at {tuple(pos)} does not fit "
                f"in a {self.width}x{self.height} image"
            )
        self.pixels[y : y + src.height, x : x + src.width] = src.pixels

    def fill(self, value) -> None:
        """Set every pixel to ``value``."""
        self.pixels[...] = np.asarray(value, dtype=np.float32)

    def write_png(self, path: _PathType) -> None:
        """Write the RGB channels as an 8-bit opaque PNG; empty images write nothing."""
        if self.pixel_count == 0:
            return
        rgb = (np.clip(self.pixels[..., :3], 0.0, 1.0) * 255.0).astype(np.uint8)
        alpha = np.full(rgb.shape[:2] + (1,), 255, dtype=np.uint8)
        PILImage.fromarray(np.concatenate([rgb, alpha], axis=2), mode="RGBA").save(path, format="PNG")


def _common_region(reference: Image, image: Image) -> tuple[np.ndarray, np.ndarray]:
    width = min(reference.width, image.width)
    height = min(reference.height, image.height)
    return reference.pixels[:height, :width], image.pixels[:height, :width]


def image_difference(reference: Image, image: Image) -> Image:
    """Per-pixel ``reference - image`` over the overlapping region."""
    ref, img = _common_region(reference, image)
    return Image.from_array(ref - img)


def image_symmetric_absolute_percentage_error(reference: Image, image: Image) -> Image:
    """Per-pixel ``|reference - image| / (reference + image)`` over the overlapping region."""
    ref, img = _common_region(reference, image)
    with np.errstate(divide="ignore", invalid="ignore"):
        return Image.from_array(np.abs(ref - img) / (ref + img))


def image_mean_square_error(reference: Image, image: Image) -> np.ndarray:
    """Mean of the squared per-channel error over the overlapping region."""
    ref, img = _common_region(reference, image)
    if ref.size == 0:
        raise ValueError("images have no overlapping pixels")
    error = ref.astype(np.float64) - img.astype(np.float64)
    return (error * error).sum(axis=(0, 1)) / (ref.shape[0] * ref.shape[1])