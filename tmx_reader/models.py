"""
Typed, immutable model of a TMX map.

=============================================================================
STRUCTURE
=============================================================================

    Map
    ├── Tileset                     exactly one
    │   ├── Tile*                   only tiles with declared data
    │   │   └── Image?
    │   └── TileOffset?
    ├── Objectgroup*                document order = draw order
    │   ├── Object*
    │   │   └── Property*?
    │   └── Property*?
    └── Property*?

Every record is a frozen dataclass built bottom-up by tmx_reader.reader and
never mutated afterwards. Sequences are tuples. A missing <properties> block
is None, an empty one is an empty tuple.

=============================================================================
GID RESOLUTION
=============================================================================

Object.gid refers to a tile through the global ID space:

    gid = tileset.firstgid + tile.id

The reader does not resolve it. Use Tileset.tile_for_gid() when needed.
=============================================================================
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .gid import NO_FLAGS, TileFlags, encode_gid


# =============================================================================
# ENUMERATIONS
# =============================================================================
# Values are the canonical TMX spellings (compared lower-cased).

class Orientation(Enum):
    ORTHOGONAL = "orthogonal"
    ISOMETRIC = "isometric"
    STAGGERED = "staggered"
    HEXAGONAL = "hexagonal"


class RenderOrder(Enum):
    """Which corner tile rendering starts from."""
    RIGHT_DOWN = "right-down"
    RIGHT_UP = "right-up"
    LEFT_DOWN = "left-down"
    LEFT_UP = "left-up"


class StaggerAxis(Enum):
    X = "x"
    Y = "y"


class StaggerIndex(Enum):
    EVEN = "even"
    ODD = "odd"


class PropertyType(Enum):
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    COLOR = "color"
    FILE = "file"


class DrawOrder(Enum):
    INDEX = "index"
    TOPDOWN = "topdown"


# =============================================================================
# LEAF RECORDS
# =============================================================================

@dataclass(frozen=True)
class Property:
    """
    Custom property attached to a map, object group or object.

    The value is kept as the text found in the document. Callers convert it
    according to prop_type, e.g.:

        <property name="friction" type="float" value="1"/>
        -> Property(name="friction", prop_type=PropertyType.FLOAT, value="1")
    """
    name: str
    value: str
    prop_type: PropertyType = PropertyType.STRING


@dataclass(frozen=True)
class Image:
    source: str                          # Path to image file
    width: int                           # Image width (pixels)
    height: Optional[int] = None         # Image height (pixels)
    format: Optional[str] = None         # Embedded image format hint
    trans: Optional[str] = None          # Transparent color (RRGGBB)


@dataclass(frozen=True)
class TileOffset:
    """Pixel offset applied when drawing tiles of a tileset."""
    x: int
    y: int


# =============================================================================
# TILES AND TILESET
# =============================================================================

@dataclass(frozen=True)
class Tile:
    id: int                                          # Local tile ID (0-based)
    type: Optional[str] = None                       # Tile type/class
    terrain: Optional[str] = None                    # Terrain corners
    probability: float = 1.0                         # Weight in random painting
    image: Optional[Image] = None                    # Image (collection tilesets)


@dataclass(frozen=True)
class Tileset:
    """
    Tileset embedded in the map.

    tiles only lists tiles that declare custom data in the document, so
    len(tiles) may be smaller than tilecount. tilecount is the total.
    """
    firstgid: int                                    # First Global ID
    name: str                                        # Tileset name
    tilewidth: int                                   # Tile width in pixels
    tileheight: int                                  # Tile height in pixels
    tilecount: int                                   # Total number of tiles
    columns: int                                     # Tiles per row (0 for collections)
    spacing: int = 0                                 # Pixels between tiles
    margin: int = 0                                  # Pixels around edge
    source: Optional[str] = None                     # TSX file path (if external)
    tiles: Tuple[Tile, ...] = ()
    tileoffset: Optional[TileOffset] = None

    def tile_for_gid(self, gid: int) -> Optional[Tile]:
        """Return the declared tile with firstgid + id == gid, or None."""
        local_id = gid - self.firstgid
        for tile in self.tiles:
            if tile.id == local_id:
                return tile
        return None


# =============================================================================
# OBJECTS
# =============================================================================

@dataclass(frozen=True)
class Object:
    """
    Object placed in an object group.

    gid and flags come from one decode of the packed gid attribute. Objects
    without a gid attribute have gid None and no flags set.
    """
    id: int
    x: float
    y: float
    width: float = 0.0
    height: float = 0.0
    rotation: float = 0.0                            # Degrees, clockwise
    visible: bool = True
    name: Optional[str] = None
    type: Optional[str] = None
    template: Optional[str] = None
    gid: Optional[int] = None                        # Cleared GID (tile objects)
    flags: TileFlags = NO_FLAGS
    properties: Optional[Tuple[Property, ...]] = None

    @property
    def flipped_horizontally(self) -> bool:
        return self.flags.flipped_horizontally

    @property
    def flipped_vertically(self) -> bool:
        return self.flags.flipped_vertically

    @property
    def flipped_diagonally(self) -> bool:
        return self.flags.flipped_diagonally

    @property
    def raw_gid(self) -> Optional[int]:
        """The packed value as written in the document, or None."""
        if self.gid is None:
            return None
        return encode_gid(self.gid, self.flags)


@dataclass(frozen=True)
class Objectgroup:
    name: str                                        # Layer name
    id: int = 0                                      # Unique layer ID
    color: str = ""                                  # Display color (raw)
    x: float = 0.0
    y: float = 0.0
    opacity: float = 1.0                             # Transparency
    visible: bool = True                             # Is layer visible?
    offsetx: float = 0.0                             # X pixel offset
    offsety: float = 0.0                             # Y pixel offset
    draworder: DrawOrder = DrawOrder.TOPDOWN
    objects: Tuple[Object, ...] = ()
    properties: Optional[Tuple[Property, ...]] = None


# =============================================================================
# MAP (ROOT)
# =============================================================================

@dataclass(frozen=True)
class Map:
    """
    Root of a parsed TMX document.

    staggeraxis/staggerindex are only meaningful for staggered and
    hexagonal orientations; they keep their defaults otherwise.
    """
    version: str                                     # TMX format version
    orientation: Orientation
    width: int                                       # Map width in tiles
    height: int                                      # Map height in tiles
    tilewidth: int                                   # Tile width in pixels
    tileheight: int                                  # Tile height in pixels
    backgroundcolor: str                             # Raw color string
    nextobjectid: int
    tileset: Tileset
    renderorder: RenderOrder = RenderOrder.RIGHT_DOWN
    staggeraxis: StaggerAxis = StaggerAxis.X
    staggerindex: StaggerIndex = StaggerIndex.EVEN
    objectgroups: Tuple[Objectgroup, ...] = ()
    properties: Optional[Tuple[Property, ...]] = None

    def get_objectgroup_by_name(self, name: str) -> Optional[Objectgroup]:
        for group in self.objectgroups:
            if group.name == name:
                return group
        return None
