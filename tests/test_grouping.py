"""
Tests for row grouping and per-row normalization.
"""

import numpy as np
import pytest

from sprite_regions import SpriteRegion
from sprite_regions.grouping import flatten_rows, group_by_row, normalize_rows


def _at_y(*ys):
    return [SpriteRegion(i * 10, y, 4, 4) for i, y in enumerate(ys)]


def test_zero_tolerance_splits_adjacent_rows():
    """Y=0 and Y=1 are different rows when no tolerance is allowed."""
    regions = _at_y(0, 1)
    assert group_by_row(regions, 0) == [[regions[0]], [regions[1]]]


def test_equal_y_shares_row_with_zero_tolerance():
    regions = _at_y(5, 5, 5)
    assert group_by_row(regions, 0) == [regions]


def test_tolerance_is_inclusive():
    regions = _at_y(0, 3, 7)
    rows = group_by_row(regions, 3)
    assert rows == [[regions[0], regions[1]], [regions[2]]]


def test_rows_chain_through_members():
    """Joining by any member lets a row span more than twice the tolerance."""
    regions = _at_y(0, 3, 6, 9)
    rows = group_by_row(regions, 3)
    assert rows == [regions]
    span = max(r.y for r in rows[0]) - min(r.y for r in rows[0])
    assert span > 2 * 3


def test_first_matching_row_wins():
    """A region near two rows joins the one created first."""
    top, bottom, middle = _at_y(0, 10, 5)
    rows = group_by_row([top, bottom, middle], 5)
    assert rows == [[top, middle], [bottom]]


def test_row_and_member_order_follow_insertion():
    regions = [SpriteRegion(0, 20, 2, 2), SpriteRegion(5, 0, 2, 2), SpriteRegion(9, 21, 2, 2)]
    rows = group_by_row(regions, 1)
    assert rows == [[regions[0], regions[2]], [regions[1]]]


def test_empty_input_has_no_rows():
    assert group_by_row([], 3) == []


def test_negative_tolerance_is_rejected():
    with pytest.raises(ValueError, match="y_tolerance"):
        group_by_row(_at_y(0), -1)


def test_normalize_aligns_bottoms_to_tallest():
    """A 4x4 at Y=0 and a 4x6 at Y=2 both end up 4x6 with bottom 8."""
    rows = [[SpriteRegion(0, 0, 4, 4), SpriteRegion(10, 2, 4, 6)]]
    normalize_rows(rows)
    assert rows == [[SpriteRegion(0, 2, 4, 6), SpriteRegion(10, 2, 4, 6)]]
    assert {r.bottom for r in rows[0]} == {8}


def test_normalize_centres_narrow_sprites():
    """Narrow sprites shift left by half the added width, possibly below zero."""
    rows = [[SpriteRegion(0, 0, 2, 2), SpriteRegion(10, 0, 7, 2), SpriteRegion(20, 0, 4, 2)]]
    normalize_rows(rows)
    assert [r.x for r in rows[0]] == [-2, 10, 19]
    assert {(r.width, r.height) for r in rows[0]} == {(7, 2)}


def test_normalize_uses_lowest_bottom_not_tallest_sprite():
    """The shared bottom is the lowest edge in the row, even from a short sprite."""
    rows = [[SpriteRegion(0, 0, 3, 5), SpriteRegion(5, 3, 3, 3)]]
    normalize_rows(rows)
    assert rows == [[SpriteRegion(0, 1, 3, 5), SpriteRegion(5, 1, 3, 5)]]


def test_normalize_replaces_region_values():
    """Rows get new region objects; the originals are untouched."""
    original = SpriteRegion(0, 0, 2, 2)
    rows = [[original, SpriteRegion(5, 0, 4, 4)]]
    normalize_rows(rows)
    assert original == SpriteRegion(0, 0, 2, 2)
    assert rows[0][0] is not original


def test_normalize_properties_on_random_rows():
    """Every row ends with one size and one bottom; X follows the centring rule."""
    rng = np.random.default_rng(99)
    rows = []
    for _ in range(20):
        rows.append([
            SpriteRegion(int(rng.integers(0, 200)), int(rng.integers(0, 50)),
                         int(rng.integers(1, 30)), int(rng.integers(1, 30)))
            for _ in range(int(rng.integers(1, 6)))
        ])
    originals = [list(row) for row in rows]

    normalize_rows(rows)

    for before, after in zip(originals, rows):
        max_width = max(r.width for r in before)
        assert len({(r.width, r.height) for r in after}) == 1
        assert len({r.bottom for r in after}) == 1
        assert after[0].bottom == max(r.bottom for r in before)
        for old, new in zip(before, after):
            assert new.x == old.x - (max_width - old.width) // 2


def test_flatten_rows_sorts_by_y_then_x():
    rows = [[SpriteRegion(9, 4, 1, 1), SpriteRegion(1, 4, 1, 1)], [SpriteRegion(5, 0, 1, 1)]]
    assert flatten_rows(rows) == [SpriteRegion(5, 0, 1, 1), SpriteRegion(1, 4, 1, 1),
                                  SpriteRegion(9, 4, 1, 1)]
