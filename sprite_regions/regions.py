"""
The sprite region value type.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SpriteRegion:
    """
    Bounding box of one sprite in grid coordinates.

    Attributes:
        x: Left column
        y: Top row
        width: Width in pixels
        height: Height in pixels
    """
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        """Exclusive right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """Exclusive bottom edge."""
        return self.y + self.height

    @property
    def bbox(self) -> tuple[int, int, int, int]:
        """The region as (y1, y2, x1, x2)."""
        return self.y, self.bottom, self.x, self.right

    def as_dict(self) -> dict[str, int]:
        return {"X": self.x, "Y": self.y, "Width": self.width, "Height": self.height}


def reading_order(region: SpriteRegion) -> tuple[int, int]:
    """Sort key: top to bottom, then left to right."""
    return region.y, region.x
