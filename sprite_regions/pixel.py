"""
Pixel values, pixel grids and the transparency predicate.

A PixelGrid is indexed X first: ``grid[x, y]``. This is the transpose of the
``(height, width, channels)`` layout OpenCV uses, so images coming from
``cv2.imread`` go through ``PixelGrid.from_image``.
"""

from __future__ import annotations

from typing import NamedTuple

import cv2
import numpy as np


class Pixel(NamedTuple):
    """An RGBA sample, one byte per channel."""
    r: int
    g: int
    b: int
    a: int = 255

    @property
    def is_transparent(self) -> bool:
        return self.a == 0

    @classmethod
    def parse(cls, text: str) -> Pixel:
        """
        Parse a color written as "R,G,B" or "R,G,B,A".

        Alpha defaults to 255 when omitted.

        Raises:
            ValueError: If the text does not hold 3 or 4 integers in 0..255.
        """
        parts = [p.strip() for p in text.split(",")]
        if len(parts) not in (3, 4):
            raise ValueError(f"color must be R,G,B or R,G,B,A, got {text!r}")
        try:
            values = [int(p) for p in parts]
        except ValueError:
            raise ValueError(f"color components must be integers, got {text!r}") from None
        if any(not 0 <= v <= 255 for v in values):
            raise ValueError(f"color components must be in 0..255, got {text!r}")
        return cls(*values)


TRANSPARENT = Pixel(0, 0, 0, 0)


def is_background(pixel: Pixel, mask: Pixel | None = None, *, compare_alpha: bool = True) -> bool:
    """
    Decide whether a single pixel is background.

    Without a mask, a pixel is background when its alpha is zero. With a mask,
    it is background when its R, G, B (and A, if ``compare_alpha``) equal the
    mask's.
    """
    if mask is None:
        return pixel.is_transparent
    channels = 4 if compare_alpha else 3
    return tuple(pixel[:channels]) == tuple(mask[:channels])


def background_mask(pixels: np.ndarray, mask: Pixel | None = None, *,
                    compare_alpha: bool = True) -> np.ndarray:
    """
    Vectorized ``is_background`` over a whole ``(width, height, 4)`` array.

    Returns:
        Boolean array of shape (width, height), True where the cell is background
    """
    if mask is None:
        return pixels[:, :, 3] == 0
    channels = 4 if compare_alpha else 3
    reference = np.array(mask[:channels], dtype=np.uint8)
    return np.all(pixels[:, :, :channels] == reference, axis=-1)


class PixelGrid:
    """
    A width x height grid of RGBA pixels, stored as a uint8 array of shape
    (width, height, 4).
    """

    def __init__(self, pixels: np.ndarray):
        if pixels is None:
            raise ValueError("pixels cannot be None")
        if not isinstance(pixels, np.ndarray):
            raise ValueError(f"pixels must be a numpy array, got {type(pixels)}")
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"pixels must have shape (width, height, 4), got {pixels.shape}")
        if pixels.dtype != np.uint8:
            raise ValueError(f"pixels must be uint8, got {pixels.dtype}")
        self.pixels = pixels

    @property
    def width(self) -> int:
        return self.pixels.shape[0]

    @property
    def height(self) -> int:
        return self.pixels.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return self.width, self.height

    def __getitem__(self, xy: tuple[int, int]) -> Pixel:
        x, y = xy
        return Pixel(*(int(c) for c in self.pixels[x, y]))

    def __setitem__(self, xy: tuple[int, int], pixel: Pixel) -> None:
        x, y = xy
        self.pixels[x, y] = pixel

    def __repr__(self) -> str:
        return f"PixelGrid(width={self.width}, height={self.height})"

    @classmethod
    def blank(cls, width: int, height: int, fill: Pixel = TRANSPARENT) -> PixelGrid:
        """Create a grid with every cell set to ``fill``."""
        if width < 0 or height < 0:
            raise ValueError(f"grid dimensions must be non-negative, got {width}x{height}")
        pixels = np.empty((width, height, 4), dtype=np.uint8)
        pixels[:, :] = fill
        return cls(pixels)

    @classmethod
    def from_image(cls, image: np.ndarray) -> PixelGrid:
        """
        Build a grid from an OpenCV image array.

        Args:
            image: Image as numpy array, either grayscale (height, width),
                   BGR (height, width, 3) or BGRA (height, width, 4), uint8.
                   Images without alpha are treated as fully opaque.

        Returns:
            PixelGrid with RGBA channels, indexed [x, y]
        """
        if image is None:
            raise ValueError("image cannot be None")
        if not isinstance(image, np.ndarray):
            raise ValueError(f"image must be a numpy array, got {type(image)}")
        if image.dtype != np.uint8:
            raise ValueError(f"image must be uint8, got {image.dtype}")

        if image.ndim not in (2, 3) or (image.ndim == 3 and image.shape[2] not in (3, 4)):
            raise ValueError(f"image must be grayscale, BGR or BGRA, got shape {image.shape}")

        if image.size == 0:
            # cvtColor rejects empty input
            return cls.blank(image.shape[1], image.shape[0])
        if image.ndim == 2:
            rgba = cv2.cvtColor(image, cv2.COLOR_GRAY2RGBA)
        elif image.shape[2] == 3:
            rgba = cv2.cvtColor(image, cv2.COLOR_BGR2RGBA)
        else:
            rgba = cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)

        # (height, width, 4) -> (width, height, 4)
        return cls(np.ascontiguousarray(rgba.transpose(1, 0, 2)))
