"""
Tile image lookup for parsed maps (uses PIL)

The reader never touches files. Applications that bundle their maps and
images as a name -> bytes table (a resources directory, a zip, data baked
into an executable...) can use these helpers to turn a parsed Map into a
GID -> image table ready for rendering:

    resources = load_resources("resources/")
    tmx_map = parse(resources["sandbox.tmx"])
    images = load_tile_images(tmx_map, resources)

    for obj in tmx_map.objectgroups[0].objects:
        if obj.gid is not None:
            image = images.get(obj.gid)
"""

import io
import logging
from pathlib import Path
from typing import Dict, Mapping, Union

from PIL import Image

from .models import Map

logger = logging.getLogger(__name__)


def load_resources(directory: Union[str, Path]) -> Dict[str, bytes]:
    """Read every regular file in directory into a {file name: bytes} table."""
    resources = {}
    for path in sorted(Path(directory).iterdir()):
        if path.is_file():
            resources[path.name] = path.read_bytes()
    return resources


def load_tile_images(tmx_map: Map, resources: Mapping[str, bytes]) -> Dict[int, Image.Image]:
    """
    Decode the image of every declared tile, keyed by its GID.

    gid = tileset.firstgid + tile.id

    Tiles without an image are ignored. A missing resource is logged and
    skipped so the caller can still draw everything else. Images are
    converted to RGBA.
    """
    tileset = tmx_map.tileset
    images = {}

    for tile in tileset.tiles:
        if tile.image is None:
            continue

        data = resources.get(tile.image.source)
        if data is None:
            logger.warning("Resource not found for tile %d: %s", tile.id, tile.image.source)
            continue

        gid = tileset.firstgid + tile.id
        with Image.open(io.BytesIO(data)) as image:
            images[gid] = image.convert("RGBA")

    logger.debug("Loaded %d tile images from tileset %s", len(images), tileset.name)
    return images
