"""
Functions for grouping sprite regions into rows and normalizing each row.

A row is one animation strip: regions whose top edges lie within a
tolerance of each other.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable

from sprite_regions.regions import SpriteRegion, reading_order

logger = logging.getLogger(__name__)

Row = list[SpriteRegion]


def group_by_row(regions: Iterable[SpriteRegion], y_tolerance: int) -> list[Row]:
    """
    Cluster regions into rows by their Y coordinate.

    Each region joins the first existing row holding any member whose Y is
    within ``y_tolerance`` of its own, or starts a new row. Membership is
    tested against every member, not a row centre, so a row can chain to a
    Y span wider than twice the tolerance.

    Args:
        regions: Regions, normally sorted by (y, x)
        y_tolerance: Maximum Y difference to a row member, >= 0

    Returns:
        Rows in order of creation, members in insertion order

    Raises:
        ValueError: If y_tolerance is negative.
    """
    if y_tolerance < 0:
        raise ValueError(f"y_tolerance must be >= 0, got {y_tolerance}")

    rows: list[Row] = []
    for region in regions:
        for row in rows:
            if any(abs(member.y - region.y) <= y_tolerance for member in row):
                row.append(region)
                break
        else:
            rows.append([region])
    return rows


def normalize_rows(rows: list[Row]) -> None:
    """
    Give every region in a row the row's largest width and height.

    Regions are bottom aligned to the lowest edge in the row and widened
    around their original left edge by half the added width. Each slot is
    replaced with a new region. Coordinates may become negative or leave the
    grid; nothing is clamped.
    """
    for row in rows:
        if not row:
            continue
        max_width = max(r.width for r in row)
        max_height = max(r.height for r in row)
        max_bottom = max(r.bottom for r in row)
        new_y = max_bottom - max_height

        for i, region in enumerate(row):
            y_offset = region.y - new_y
            x_offset = (max_width - region.width) // 2
            row[i] = replace(
                region,
                x=region.x - x_offset,
                y=region.y - y_offset,
                width=max_width,
                height=max_height,
            )

        logger.debug("Normalized row of %d to %dx%d, bottom %d",
                     len(row), max_width, max_height, max_bottom)


def flatten_rows(rows: Iterable[Row]) -> list[SpriteRegion]:
    """Flatten rows into one list sorted by (y, x)."""
    return sorted((region for row in rows for region in row), key=reading_order)
