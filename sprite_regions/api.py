#!/usr/bin/env python3
"""
Public API for the sprite region library.

This module provides the main interface for programmatic use of the sprite
detection, row grouping and normalization pipeline.
"""

from __future__ import annotations

import logging

import numpy as np

from sprite_regions.detection import detect_regions
from sprite_regions.grouping import flatten_rows, group_by_row, normalize_rows
from sprite_regions.pixel import Pixel, PixelGrid
from sprite_regions.regions import SpriteRegion, reading_order

logger = logging.getLogger(__name__)

DEFAULT_Y_TOLERANCE = 3


def detect_sprites(
    grid: PixelGrid | np.ndarray | None,
    *,
    y_tolerance: int = DEFAULT_Y_TOLERANCE,
    transparency_mask: Pixel | None = None,
) -> list[SpriteRegion]:
    """
    Detect the sprites in a pixel grid, grouped into rows and normalized.

    Each connected group of non-background pixels becomes one region. Regions
    are grouped into rows by Y, and inside each row they are resized to the
    row's largest width and height, bottom aligned and horizontally centred
    on their original extent.

    Args:
        grid: PixelGrid, or a uint8 array of shape (width, height, 4) in RGBA.
              Use PixelGrid.from_image for OpenCV (height, width, c) images.
        y_tolerance: Maximum Y distance (in pixels) between a sprite and any
                     sprite already in a row for it to join that row.
        transparency_mask: Optional color treated as background, for images
                           without a meaningful alpha channel.

    Returns:
        Regions sorted top to bottom, then left to right

    Raises:
        ValueError: If grid is None or malformed, or y_tolerance is negative.

    Example:
        >>> import cv2
        >>> from sprite_regions import PixelGrid, detect_sprites
        >>>
        >>> img = cv2.imread("spritesheet.png", cv2.IMREAD_UNCHANGED)
        >>> for region in detect_sprites(PixelGrid.from_image(img)):
        >>>     print(region.x, region.y, region.width, region.height)
    """
    if grid is None:
        raise ValueError("grid cannot be None")
    if not isinstance(grid, PixelGrid):
        grid = PixelGrid(grid)
    if y_tolerance < 0:
        raise ValueError(f"y_tolerance must be >= 0, got {y_tolerance}")

    regions = sorted(detect_regions(grid, transparency_mask), key=reading_order)

    rows = group_by_row(regions, y_tolerance)
    logger.debug("Grouped %d region(s) into %d row(s) with y_tolerance=%d",
                 len(regions), len(rows), y_tolerance)

    normalize_rows(rows)

    return flatten_rows(rows)
