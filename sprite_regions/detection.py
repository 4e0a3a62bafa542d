"""
Functions for detecting sprite regions in a pixel grid.

Every non-background pixel is flood filled (breadth first, 8-connectivity)
into its connected component, and each component is reported as its
bounding box.
"""

from __future__ import annotations

import logging

import numpy as np

from sprite_regions.pixel import Pixel, PixelGrid, background_mask
from sprite_regions.regions import SpriteRegion

logger = logging.getLogger(__name__)

# (dx, dy) for all 8 neighbors, dx outer, dy inner
NEIGHBOR_OFFSETS = tuple((dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0))


class CoordinateQueue:
    """
    FIFO of (x, y) coordinates backed by a fixed-capacity ring buffer.

    A flood fill enqueues each cell at most once, so a capacity equal to the
    grid area can never overflow.
    """

    def __init__(self, capacity: int):
        capacity = max(1, capacity)
        self._xs = np.empty(capacity, dtype=np.int64)
        self._ys = np.empty(capacity, dtype=np.int64)
        self._head = 0
        self._size = 0

    @property
    def capacity(self) -> int:
        return len(self._xs)

    def __len__(self) -> int:
        return self._size

    def push(self, x: int, y: int) -> None:
        if self._size == self.capacity:
            raise OverflowError(f"coordinate queue is full ({self.capacity} entries)")
        tail = (self._head + self._size) % self.capacity
        self._xs[tail] = x
        self._ys[tail] = y
        self._size += 1

    def pop(self) -> tuple[int, int]:
        if self._size == 0:
            raise IndexError("pop from an empty coordinate queue")
        x = int(self._xs[self._head])
        y = int(self._ys[self._head])
        self._head = (self._head + 1) % self.capacity
        self._size -= 1
        return x, y


def iter_neighbors(x: int, y: int, width: int, height: int):
    """Yield the in-bounds 8-neighbors of (x, y)."""
    for dx, dy in NEIGHBOR_OFFSETS:
        nx = x + dx
        ny = y + dy
        if 0 <= nx < width and 0 <= ny < height:
            yield nx, ny


def flood_fill(background: np.ndarray, start_x: int, start_y: int,
               visited: np.ndarray) -> SpriteRegion:
    """
    Find the bounding box of the component containing (start_x, start_y).

    Every neighbor examined is marked visited, background or not, but only
    non-background neighbors are expanded and counted towards the bounds.

    Args:
        background: Boolean (width, height) array, True for background cells
        start_x: X coordinate of a non-background seed pixel
        start_y: Y coordinate of the seed
        visited: Boolean (width, height) array, updated in place

    Returns:
        Bounding box of the component
    """
    width, height = background.shape
    queue = CoordinateQueue(width * height)
    queue.push(start_x, start_y)
    visited[start_x, start_y] = True
    min_x = max_x = start_x
    min_y = max_y = start_y

    while queue:
        x, y = queue.pop()
        for nx, ny in iter_neighbors(x, y, width, height):
            if visited[nx, ny]:
                continue
            visited[nx, ny] = True
            if background[nx, ny]:
                continue
            queue.push(nx, ny)
            if nx < min_x:
                min_x = nx
            elif nx > max_x:
                max_x = nx
            if ny < min_y:
                min_y = ny
            elif ny > max_y:
                max_y = ny

    return SpriteRegion(min_x, min_y, max_x - min_x + 1, max_y - min_y + 1)


def detect_regions(grid: PixelGrid, transparency_mask: Pixel | None = None,
                   visited: np.ndarray | None = None) -> list[SpriteRegion]:
    """
    Detect every connected sprite in a grid.

    Cells are scanned column by column (X outer, Y inner). Seeds are tested
    against the mask on all four channels, while the flood fill compares
    neighbors on R, G and B only. Both comparisons are kept as they are so
    existing outputs do not change.

    Args:
        grid: Pixel grid to scan
        transparency_mask: Optional color treated as background instead of
                           zero alpha
        visited: Optional all-False boolean (width, height) array to use as
                 the visited mask; a fresh one is allocated if omitted.
                 Every cell is marked exactly once by the end of the scan.

    Returns:
        One region per component, in discovery order (unsorted)

    Raises:
        ValueError: If visited does not match the grid shape.
    """
    width, height = grid.shape
    scan_background = background_mask(grid.pixels, transparency_mask, compare_alpha=True)
    if transparency_mask is None:
        fill_background = scan_background
    else:
        fill_background = background_mask(grid.pixels, transparency_mask, compare_alpha=False)
        mismatched = int(np.count_nonzero(scan_background != fill_background))
        if mismatched:
            logger.warning(
                "%d pixel(s) match mask color %s on RGB but not on alpha; they seed sprites "
                "when scanned but stop flood fills as background",
                mismatched, tuple(transparency_mask))

    if visited is None:
        visited = np.zeros((width, height), dtype=bool)
    elif visited.shape != (width, height):
        raise ValueError(f"visited must have shape {(width, height)}, got {visited.shape}")

    regions = []
    for x in range(width):
        for y in range(height):
            if visited[x, y]:
                continue
            if scan_background[x, y]:
                visited[x, y] = True
                continue
            regions.append(flood_fill(fill_background, x, y, visited))

    logger.debug("Detected %d region(s) in %dx%d grid", len(regions), width, height)
    return regions
