"""
Shared helpers for building synthetic pixel grids.
"""

import pytest

from sprite_regions import Pixel, PixelGrid

OPAQUE_RED = Pixel(255, 0, 0, 255)


def fill_rect(grid: PixelGrid, x: int, y: int, width: int, height: int,
              color: Pixel = OPAQUE_RED) -> None:
    """Paint a solid rectangle into a grid (grid is indexed [x, y])."""
    grid.pixels[x:x + width, y:y + height] = color


@pytest.fixture
def make_grid():
    """
    Factory for transparent grids with some opaque cells.

    Usage: make_grid(width, height, [(x, y), ...], color=..., background=...)
    """
    def _make(width, height, opaque=(), color=OPAQUE_RED, background=Pixel(0, 0, 0, 0)):
        grid = PixelGrid.blank(width, height, fill=background)
        for x, y in opaque:
            grid[x, y] = color
        return grid
    return _make


@pytest.fixture
def fill():
    """The fill_rect helper, as a fixture."""
    return fill_rect
