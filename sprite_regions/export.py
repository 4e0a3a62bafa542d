"""
Functions for exporting sprite regions as JSON or XML animation metadata.

Regions are exported either grouped by row, one looping animation per row,
or as a flat list of frames. Names are 1-based, zero-padded counters:
"Row000001", "Row000001Sprite000002", or "Sprite000003" in the flat form.
"""

from __future__ import annotations

import json
import re
import xml.etree.ElementTree as ET
from typing import Any, Sequence

from sprite_regions.api import DEFAULT_Y_TOLERANCE
from sprite_regions.grouping import group_by_row
from sprite_regions.regions import SpriteRegion

DEFAULT_FRAME_NAME = "Frame"
DEFAULT_DURATION = 1

_XML_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_.-]*")

# Keys every frame record already uses
_RESERVED_FRAME_NAMES = ("Name", "Duration")


def row_name(row_index: int) -> str:
    return f"Row{row_index + 1:06d}"


def sprite_name(sprite_index: int, row_index: int | None = None) -> str:
    name = f"Sprite{sprite_index + 1:06d}"
    if row_index is None:
        return name
    return row_name(row_index) + name


def _normalize_duration(duration: float | None) -> float:
    """None becomes the default; integral floats become ints so 1.0 renders as 1."""
    if duration is None:
        return DEFAULT_DURATION
    if isinstance(duration, float) and duration.is_integer():
        return int(duration)
    return duration


def _frame(name: str, region: SpriteRegion, frame_name: str, duration: float) -> dict[str, Any]:
    return {"Name": name, frame_name: region.as_dict(), "Duration": duration}


def build_export_records(
    regions: Sequence[SpriteRegion],
    frame_name: str = DEFAULT_FRAME_NAME,
    duration: float | None = DEFAULT_DURATION,
    *,
    y_tolerance: int = DEFAULT_Y_TOLERANCE,
    grouped: bool = True,
) -> list[dict[str, Any]]:
    """
    Build the plain data structure both exporters render.

    Args:
        regions: Regions to export, in output order
        frame_name: Key (or element name) of the coordinate block
        duration: Duration of every frame; None means the default of 1
        y_tolerance: Row grouping tolerance, used when grouped
        grouped: Group frames into looping rows instead of a flat list

    Returns:
        List of row records, or of frame records when not grouped

    Raises:
        ValueError: If frame_name is empty, "Name" or "Duration", or
                    y_tolerance is negative.
    """
    if not frame_name:
        raise ValueError("frame_name cannot be empty")
    if frame_name in _RESERVED_FRAME_NAMES:
        raise ValueError(f"frame_name cannot be {frame_name!r}, the frame record already uses it")
    duration = _normalize_duration(duration)

    if not grouped:
        return [_frame(sprite_name(i), region, frame_name, duration)
                for i, region in enumerate(regions)]

    return [
        {
            "Name": row_name(row_index),
            "Loop": True,
            "Frames": [_frame(sprite_name(i, row_index), region, frame_name, duration)
                       for i, region in enumerate(row)],
        }
        for row_index, row in enumerate(group_by_row(regions, y_tolerance))
    ]


def to_json(
    regions: Sequence[SpriteRegion],
    frame_name: str = DEFAULT_FRAME_NAME,
    duration: float | None = DEFAULT_DURATION,
    *,
    y_tolerance: int = DEFAULT_Y_TOLERANCE,
    grouped: bool = True,
    indent: int | None = 2,
) -> str:
    """
    Serialize regions to a JSON array.

    See build_export_records for the arguments.
    """
    records = build_export_records(regions, frame_name, duration,
                                   y_tolerance=y_tolerance, grouped=grouped)
    return json.dumps(records, indent=indent)


def _append_frame(parent: ET.Element, record: dict[str, Any], frame_name: str) -> None:
    frame = ET.SubElement(parent, "Frame")
    ET.SubElement(frame, "Name").text = record["Name"]
    coords = ET.SubElement(frame, frame_name)
    for key, value in record[frame_name].items():
        ET.SubElement(coords, key).text = str(value)
    ET.SubElement(frame, "Duration").text = str(record["Duration"])


def to_xml(
    regions: Sequence[SpriteRegion],
    frame_name: str = DEFAULT_FRAME_NAME,
    duration: float | None = DEFAULT_DURATION,
    *,
    y_tolerance: int = DEFAULT_Y_TOLERANCE,
    grouped: bool = True,
) -> str:
    """
    Serialize regions to an indented XML document with a Spritesheet root.

    Grouped output holds Row elements (Name, Loop, Frame...); flat output
    holds Frame elements directly under the root.

    Raises:
        ValueError: If frame_name is not a valid XML element name.
    """
    if not _XML_NAME.fullmatch(frame_name or ""):
        raise ValueError(f"frame_name must be a valid XML element name, got {frame_name!r}")

    records = build_export_records(regions, frame_name, duration,
                                   y_tolerance=y_tolerance, grouped=grouped)

    root = ET.Element("Spritesheet")
    for record in records:
        if not grouped:
            _append_frame(root, record, frame_name)
            continue
        row = ET.SubElement(root, "Row")
        ET.SubElement(row, "Name").text = record["Name"]
        ET.SubElement(row, "Loop").text = "true"
        for frame in record["Frames"]:
            _append_frame(row, frame, frame_name)

    ET.indent(root, space="    ")
    return '<?xml version="1.0" encoding="utf-8"?>\n' + ET.tostring(root, encoding="unicode") + "\n"
