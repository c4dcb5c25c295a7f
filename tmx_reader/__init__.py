"""
TMX Reader - typed, read-only loader for Tiled maps

Requisitos:
    pip install numpy pillow
"""

from pathlib import Path
from typing import Union

from .errors import (
    TmxParseError,
    MalformedMarkup,
    MalformedAttribute,
    MissingRequiredAttribute,
    MissingRequiredElement,
    InvalidNumericLiteral,
    InvalidBooleanLiteral,
    UnsupportedEnumValue,
    NoMapElement,
)
from .gid import TileFlags, decode_gid, encode_gid, decode_gids
from .models import (
    Map, Tileset, Tile, Image, TileOffset,
    Objectgroup, Object, Property,
    Orientation, RenderOrder, StaggerAxis, StaggerIndex, PropertyType, DrawOrder,
)
from .reader import parse


def load(path: Union[str, Path]) -> Map:
    """Read a .tmx file from disk and parse it."""
    return parse(Path(path).read_bytes())


__version__ = "1.0.0"
__all__ = [
    "parse",
    "load",
    "Map",
    "Tileset",
    "Tile",
    "Image",
    "TileOffset",
    "Objectgroup",
    "Object",
    "Property",
    "Orientation",
    "RenderOrder",
    "StaggerAxis",
    "StaggerIndex",
    "PropertyType",
    "DrawOrder",
    "TileFlags",
    "decode_gid",
    "encode_gid",
    "decode_gids",
    "TmxParseError",
    "MalformedMarkup",
    "MalformedAttribute",
    "MissingRequiredAttribute",
    "MissingRequiredElement",
    "InvalidNumericLiteral",
    "InvalidBooleanLiteral",
    "UnsupportedEnumValue",
    "NoMapElement",
]
