"""
Global tile ID (GID) packing.

=============================================================================
FLIP FLAGS
=============================================================================

A GID stored in a TMX document is an unsigned 32-bit integer. Tiled uses the
three highest bits to record how the tile is oriented:

    bit 31  0x80000000  flipped horizontally
    bit 30  0x40000000  flipped vertically
    bit 29  0x20000000  flipped diagonally (swap x/y axes)

    +---+---+---+------------------------------+
    | H | V | D |     tile id (29 bits)        |
    +---+---+---+------------------------------+

The remaining bits are the plain GID, which is resolved against a tileset:

    local tile id = gid - tileset.firstgid

Decoding always yields the cleared GID and all three flags from the same raw
value, so they can never disagree. encode_gid() is the exact inverse.
=============================================================================
"""

from typing import NamedTuple, Tuple

import numpy as np


FLIPPED_HORIZONTALLY_FLAG = 0x80000000
FLIPPED_VERTICALLY_FLAG = 0x40000000
FLIPPED_DIAGONALLY_FLAG = 0x20000000
FLAG_MASK = FLIPPED_HORIZONTALLY_FLAG | FLIPPED_VERTICALLY_FLAG | FLIPPED_DIAGONALLY_FLAG
CLEAR_MASK = ~FLAG_MASK & 0xFFFFFFFF


class TileFlags(NamedTuple):
    """Orientation flags recovered from the high bits of a GID."""
    flipped_horizontally: bool = False
    flipped_vertically: bool = False
    flipped_diagonally: bool = False


NO_FLAGS = TileFlags()


def decode_gid(raw_gid: int) -> Tuple[int, TileFlags]:
    """
    Split a packed GID into (cleared gid, TileFlags).

    Example:
        decode_gid(31)              -> (31, TileFlags(False, False, False))
        decode_gid(31 | 0x80000000) -> (31, TileFlags(True, False, False))
    """
    if raw_gid < FLIPPED_DIAGONALLY_FLAG:
        return raw_gid, NO_FLAGS
    return (
        raw_gid & CLEAR_MASK,
        TileFlags(
            raw_gid & FLIPPED_HORIZONTALLY_FLAG != 0,
            raw_gid & FLIPPED_VERTICALLY_FLAG != 0,
            raw_gid & FLIPPED_DIAGONALLY_FLAG != 0,
        ),
    )


def encode_gid(gid: int, flags: TileFlags = NO_FLAGS) -> int:
    """Pack a cleared GID and its flags back into the raw 32-bit value."""
    raw = gid & CLEAR_MASK
    if flags.flipped_horizontally:
        raw |= FLIPPED_HORIZONTALLY_FLAG
    if flags.flipped_vertically:
        raw |= FLIPPED_VERTICALLY_FLAG
    if flags.flipped_diagonally:
        raw |= FLIPPED_DIAGONALLY_FLAG
    return raw


def decode_gids(raw_gids) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Vectorised decode_gid() for any array-like of packed GIDs.

    Returns four arrays of the input's shape:
        (cleared gids as uint32, horizontal, vertical, diagonal as bool)

    Useful for asset pipelines that keep many GIDs in a numpy buffer
    (e.g. tile layer data decoded with np.frombuffer(..., dtype='<u4')).
    """
    raw = np.asarray(raw_gids, dtype=np.uint32)
    return (
        raw & np.uint32(CLEAR_MASK),
        (raw & np.uint32(FLIPPED_HORIZONTALLY_FLAG)) != 0,
        (raw & np.uint32(FLIPPED_VERTICALLY_FLAG)) != 0,
        (raw & np.uint32(FLIPPED_DIAGONALLY_FLAG)) != 0,
    )
