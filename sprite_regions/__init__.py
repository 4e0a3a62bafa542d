"""
Sprite Region Detection Tool

Finds the bounding boxes of the sprites in a spritesheet, groups them into
animation rows and gives all frames of a row a common size.

Public API:
    - detect_sprites: Detect, group and normalize the sprites of a pixel grid
    - PixelGrid: RGBA pixel grid indexed [x, y]; from_image() adapts OpenCV images
    - Pixel: RGBA color value, also used as a transparency mask
    - SpriteRegion: Bounding box of one sprite
    - to_json / to_xml: Export regions as animation metadata

Logging is silent by default. To see progress messages:

    import logging
    logging.basicConfig(level=logging.DEBUG)
"""

import logging

logger = logging.getLogger("sprite_regions")
logger.addHandler(logging.NullHandler())

from sprite_regions.api import detect_sprites, DEFAULT_Y_TOLERANCE
from sprite_regions.export import to_json, to_xml
from sprite_regions.pixel import Pixel, PixelGrid
from sprite_regions.regions import SpriteRegion

__version__ = "0.1.0"
__all__ = ["detect_sprites", "DEFAULT_Y_TOLERANCE", "to_json", "to_xml",
           "Pixel", "PixelGrid", "SpriteRegion", "__version__"]
