#!/usr/bin/env python3

"""
TMX Reader - print a summary of a Tiled map

Usage:
    python -m tmx_reader [--debug] <map.tmx>
"""

import logging
import sys
from pathlib import Path

from . import load
from .errors import TmxParseError


def describe(tmx_map) -> str:
    lines = [
        f"Map {tmx_map.width}x{tmx_map.height} tiles of "
        f"{tmx_map.tilewidth}x{tmx_map.tileheight} px "
        f"({tmx_map.orientation.value}, {tmx_map.renderorder.value})",
        f"Background: {tmx_map.backgroundcolor}",
    ]

    tileset = tmx_map.tileset
    lines.append(
        f"Tileset '{tileset.name}': firstgid={tileset.firstgid}, "
        f"{len(tileset.tiles)}/{tileset.tilecount} tiles declared"
    )

    for group in tmx_map.objectgroups:
        tile_objects = sum(1 for obj in group.objects if obj.gid is not None)
        lines.append(
            f"  [{group.name}] {len(group.objects)} objects "
            f"({tile_objects} with tiles)"
        )

    return "\n".join(lines)


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)

    if "--debug" in args:
        args.remove("--debug")
        logging.basicConfig(level=logging.DEBUG)

    if len(args) != 1:
        print(__doc__)
        return 1

    source_path = Path(args[0])
    if not source_path.exists():
        print(f"Error: File '{source_path}' not found")
        return 1

    try:
        tmx_map = load(source_path)
    except TmxParseError as e:
        print(f"Error: {e}")
        return 1

    print(describe(tmx_map))
    return 0


if __name__ == "__main__":
    sys.exit(main())
