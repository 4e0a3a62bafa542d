"""
Functions for visualizing detected sprite regions on images.
"""

from typing import Iterable

import cv2
import numpy as np

from sprite_regions.regions import SpriteRegion


def visualize_regions(img: np.ndarray, regions: Iterable[SpriteRegion],
                      color: tuple[int, int, int] = (0, 255, 0),
                      output_path: str | None = None) -> np.ndarray:
    """
    Visualize sprite regions by drawing their rectangles over the image.

    Args:
        img: Input image as loaded by OpenCV (BGR or BGRA, height x width)
        regions: Regions to draw, in grid coordinates
        color: BGR color of the rectangles
        output_path: Path to save the visualization (optional)

    Returns:
        BGR image with the region outlines and their indices
    """
    vis_img = img.copy()

    if vis_img.ndim == 2:
        vis_img = cv2.cvtColor(vis_img, cv2.COLOR_GRAY2BGR)
    elif vis_img.shape[2] == 4:
        # Blend over a white background so transparent areas stay visible
        bg = np.ones((vis_img.shape[0], vis_img.shape[1], 3), dtype=np.uint8) * 255
        alpha = vis_img[:, :, 3:4].astype(float) / 255
        vis_img = (vis_img[:, :, :3] * alpha + bg * (1 - alpha)).astype(np.uint8)

    font = cv2.FONT_HERSHEY_SIMPLEX
    for i, region in enumerate(regions):
        # Normalized regions can extend past the image; OpenCV clips the drawing
        cv2.rectangle(vis_img, (region.x, region.y), (region.right - 1, region.bottom - 1), color, 1)
        cv2.putText(vis_img, str(i), (region.x, region.y - 2), font, 0.3, color, 1)

    if output_path:
        cv2.imwrite(output_path, vis_img)

    return vis_img
