"""
Recursive-descent TMX reader.

=============================================================================
HOW IT WORKS
=============================================================================

parse() makes a single forward pass over the XML events. Each recognized
element has a read_<tag>(cursor, start) function that works in two phases:

1. CHILDREN: walk the direct children with iter_children(). Known children
   are handed to their own reader; everything else goes to skip_subtree().
   The phase ends on the element's own end tag.

2. ATTRIBUTES: convert the attributes of the start tag into the typed
   record, applying required/default policies from coerce.Attributes.

Children are therefore complete before the parent record is built, and an
element type added by a newer Tiled version is skipped as a whole without
disturbing anything around it.

    <map>                           read_map
      <tileset>                     read_tileset
        <tileoffset/>               read_tileoffset
        <tile>                      read_tile
          <image/>                  read_image
        </tile>
      </tileset>
      <layer>...</layer>            skip_subtree
      <objectgroup>                 read_objectgroup
        <object>                    read_object
          <properties>              read_properties
            <property/>             read_property
          </properties>
        </object>
      </objectgroup>
    </map>

=============================================================================
"""

import logging
from typing import List, Optional, Tuple, Union

from .coerce import (
    Attributes,
    draworder_from_string,
    orientation_from_string,
    propertytype_from_string,
    renderorder_from_string,
    staggeraxis_from_string,
    staggerindex_from_string,
)
from .errors import MissingRequiredElement, NoMapElement
from .events import START, END_OF_DOCUMENT, Event, EventCursor, iter_children, skip_subtree
from .gid import NO_FLAGS, decode_gid
from .models import (
    DrawOrder,
    Image,
    Map,
    Object,
    Objectgroup,
    Property,
    PropertyType,
    RenderOrder,
    StaggerAxis,
    StaggerIndex,
    Tile,
    TileOffset,
    Tileset,
)

logger = logging.getLogger(__name__)


# =============================================================================
# LEAF READERS
# =============================================================================

def read_property(cursor: EventCursor, start: Event) -> Property:
    """
    <property name="friction" type="float" value="1"/>

    The value stays text; type defaults to string.
    """
    for child in iter_children(cursor):
        skip_subtree(cursor, child)

    attrs = Attributes.from_event(start)
    return Property(
        name=attrs.required("name"),
        value=attrs.required("value"),
        prop_type=attrs.enum("type", propertytype_from_string, PropertyType.STRING),
    )


def read_image(cursor: EventCursor, start: Event) -> Image:
    for child in iter_children(cursor):
        skip_subtree(cursor, child)

    attrs = Attributes.from_event(start)
    return Image(
        source=attrs.required("source"),
        width=attrs.integer("width"),
        height=attrs.integer("height", None),
        format=attrs.get("format"),
        trans=attrs.get("trans"),
    )


def read_tileoffset(cursor: EventCursor, start: Event) -> TileOffset:
    for child in iter_children(cursor):
        skip_subtree(cursor, child)

    attrs = Attributes.from_event(start)
    return TileOffset(x=attrs.integer("x"), y=attrs.integer("y"))


# =============================================================================
# MID-LEVEL READERS
# =============================================================================

def read_properties(cursor: EventCursor, start: Event) -> Tuple[Property, ...]:
    """Collect <property> children in document order."""
    properties: List[Property] = []
    for child in iter_children(cursor):
        if child.tag == "property":
            properties.append(read_property(cursor, child))
        else:
            skip_subtree(cursor, child)
    return tuple(properties)


def read_tile(cursor: EventCursor, start: Event) -> Tile:
    image: Optional[Image] = None
    for child in iter_children(cursor):
        if child.tag == "image":
            image = read_image(cursor, child)
        else:
            skip_subtree(cursor, child)

    attrs = Attributes.from_event(start)
    return Tile(
        id=attrs.integer("id"),
        # Tiled 1.9 renamed "type" to "class"
        type=attrs.get("type", attrs.get("class")),
        terrain=attrs.get("terrain"),
        probability=attrs.real("probability", 1.0),
        image=image,
    )


def read_object(cursor: EventCursor, start: Event) -> Object:
    """
    Read an <object>, decoding its packed gid attribute.

    gid="2147483679" (31 | 0x80000000) gives gid 31, flipped horizontally.
    Without a gid attribute the object has no tile and no flags.
    """
    properties: Optional[Tuple[Property, ...]] = None
    for child in iter_children(cursor):
        if child.tag == "properties":
            properties = read_properties(cursor, child)
        else:
            skip_subtree(cursor, child)

    attrs = Attributes.from_event(start)

    raw_gid = attrs.gid("gid")
    if raw_gid is None:
        gid, flags = None, NO_FLAGS
    else:
        gid, flags = decode_gid(raw_gid)

    return Object(
        id=attrs.integer("id"),
        x=attrs.real("x"),
        y=attrs.real("y"),
        width=attrs.real("width", 0.0),
        height=attrs.real("height", 0.0),
        rotation=attrs.real("rotation", 0.0),
        visible=attrs.boolean("visible", True),
        name=attrs.get("name"),
        type=attrs.get("type", attrs.get("class")),
        template=attrs.get("template"),
        gid=gid,
        flags=flags,
        properties=properties,
    )


# =============================================================================
# COMPOSITE READERS
# =============================================================================

def read_tileset(cursor: EventCursor, start: Event) -> Tileset:
    tiles: List[Tile] = []
    tileoffset: Optional[TileOffset] = None
    for child in iter_children(cursor):
        if child.tag == "tile":
            tiles.append(read_tile(cursor, child))
        elif child.tag == "tileoffset":
            tileoffset = read_tileoffset(cursor, child)
        else:
            skip_subtree(cursor, child)

    attrs = Attributes.from_event(start)
    return Tileset(
        firstgid=attrs.integer("firstgid"),
        name=attrs.required("name"),
        tilewidth=attrs.integer("tilewidth"),
        tileheight=attrs.integer("tileheight"),
        tilecount=attrs.integer("tilecount"),
        columns=attrs.integer("columns"),
        spacing=attrs.integer("spacing", 0),
        margin=attrs.integer("margin", 0),
        source=attrs.get("source"),
        tiles=tuple(tiles),
        tileoffset=tileoffset,
    )


def read_objectgroup(cursor: EventCursor, start: Event) -> Objectgroup:
    objects: List[Object] = []
    properties: Optional[Tuple[Property, ...]] = None
    for child in iter_children(cursor):
        if child.tag == "object":
            objects.append(read_object(cursor, child))
        elif child.tag == "properties":
            properties = read_properties(cursor, child)
        else:
            skip_subtree(cursor, child)

    attrs = Attributes.from_event(start)
    return Objectgroup(
        name=attrs.required("name"),
        id=attrs.integer("id", 0),
        color=attrs.get("color", ""),
        x=attrs.real("x", 0.0),
        y=attrs.real("y", 0.0),
        opacity=attrs.real("opacity", 1.0),
        visible=attrs.boolean("visible", True),
        offsetx=attrs.real("offsetx", 0.0),
        offsety=attrs.real("offsety", 0.0),
        draworder=attrs.enum("draworder", draworder_from_string, DrawOrder.TOPDOWN),
        objects=tuple(objects),
        properties=properties,
    )


# =============================================================================
# ROOT READER
# =============================================================================

def read_map(cursor: EventCursor, start: Event) -> Map:
    tileset: Optional[Tileset] = None
    objectgroups: List[Objectgroup] = []
    properties: Optional[Tuple[Property, ...]] = None
    for child in iter_children(cursor):
        if child.tag == "tileset":
            tileset = read_tileset(cursor, child)
        elif child.tag == "objectgroup":
            objectgroups.append(read_objectgroup(cursor, child))
        elif child.tag == "properties":
            properties = read_properties(cursor, child)
        else:
            skip_subtree(cursor, child)

    attrs = Attributes.from_event(start)
    tmx_map = Map(
        version=attrs.required("version"),
        orientation=attrs.enum("orientation", orientation_from_string),
        renderorder=attrs.enum("renderorder", renderorder_from_string, RenderOrder.RIGHT_DOWN),
        width=attrs.integer("width"),
        height=attrs.integer("height"),
        tilewidth=attrs.integer("tilewidth"),
        tileheight=attrs.integer("tileheight"),
        backgroundcolor=attrs.required("backgroundcolor"),
        nextobjectid=attrs.integer("nextobjectid"),
        staggeraxis=attrs.enum("staggeraxis", staggeraxis_from_string, StaggerAxis.X),
        staggerindex=attrs.enum("staggerindex", staggerindex_from_string, StaggerIndex.EVEN),
        tileset=_require_tileset(tileset),
        objectgroups=tuple(objectgroups),
        properties=properties,
    )
    logger.debug(
        "Read map %dx%d (%s) with %d object groups",
        tmx_map.width, tmx_map.height, tmx_map.orientation.value, len(tmx_map.objectgroups),
    )
    return tmx_map


def _require_tileset(tileset: Optional[Tileset]) -> Tileset:
    if tileset is None:
        raise MissingRequiredElement("map", "tileset")
    return tileset


# =============================================================================
# ENTRY POINT
# =============================================================================

def parse(document: Union[str, bytes]) -> Map:
    """
    Parse a complete TMX document into a Map.

    Parameters:
    -----------
    document : str or bytes
        The markup itself, not a path. Bytes are decoded using the
        encoding declared in the XML prolog (UTF-8 by default).

    Returns:
    --------
    Map : Fully built, immutable map

    Raises:
    -------
    TmxParseError : the first problem found; see tmx_reader.errors

    The first <map> element found anywhere in the document is read. Any
    later <map> is skipped. The rest of the document is still consumed so
    that markup errors after the map are reported.
    """
    cursor = EventCursor(document)
    tmx_map: Optional[Map] = None

    while True:
        event = cursor.next_event()
        if event.kind == END_OF_DOCUMENT:
            break
        if event.kind != START or event.tag != "map":
            continue
        if tmx_map is None:
            tmx_map = read_map(cursor, event)
        else:
            skip_subtree(cursor, event)

    if tmx_map is None:
        raise NoMapElement()
    return tmx_map
