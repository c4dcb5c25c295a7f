"""
Conversion of raw attribute text into typed values.

Each coercer is a pure function of (field name, raw text). Failures raise the
matching TmxParseError subclass naming the field. Enumerations are matched
case-insensitively against their canonical TMX spellings; an unknown spelling
is always an error, never a fallback to a default.

Attributes wraps the extracted attribute mapping of one element so readers
can state, per field, whether it is required or which default applies.
"""

import math
import re
from enum import Enum
from typing import Callable, Dict, Optional, Type, TypeVar

from .errors import (
    InvalidBooleanLiteral,
    InvalidNumericLiteral,
    MissingRequiredAttribute,
    UnsupportedEnumValue,
)
from .events import Event, extract_attributes
from .models import (
    DrawOrder,
    Orientation,
    PropertyType,
    RenderOrder,
    StaggerAxis,
    StaggerIndex,
)

E = TypeVar("E", bound=Enum)

_INT_RE = re.compile(r"[+-]?[0-9]+")
_MAX_GID = 0xFFFFFFFF

# Sentinel for "no default, attribute must be present"
_REQUIRED = object()


# =============================================================================
# SCALARS
# =============================================================================

def to_int(field: str, raw: str) -> int:
    if not _INT_RE.fullmatch(raw):
        raise InvalidNumericLiteral(field, raw)
    return int(raw)


def to_float(field: str, raw: str) -> float:
    # float() would also accept "1_0" and surrounding whitespace
    if "_" in raw or raw != raw.strip():
        raise InvalidNumericLiteral(field, raw)
    try:
        value = float(raw)
    except ValueError:
        raise InvalidNumericLiteral(field, raw) from None
    # nan would make two parses of one document compare unequal
    if not math.isfinite(value):
        raise InvalidNumericLiteral(field, raw)
    return value


def to_bool(field: str, raw: str) -> bool:
    """Accept exactly true/false, and the TMX-style 1/0."""
    if raw in ("true", "1"):
        return True
    if raw in ("false", "0"):
        return False
    raise InvalidBooleanLiteral(field, raw)


def to_gid(field: str, raw: str) -> int:
    """Parse a packed GID; it must fit in an unsigned 32-bit integer."""
    value = to_int(field, raw)
    if not 0 <= value <= _MAX_GID:
        raise InvalidNumericLiteral(field, raw)
    return value


# =============================================================================
# ENUMERATIONS
# =============================================================================

def _enum_from_string(enum_cls: Type[E], field: str, raw: str) -> E:
    try:
        return enum_cls(raw.lower())
    except ValueError:
        raise UnsupportedEnumValue(field, raw) from None


def orientation_from_string(raw: str) -> Orientation:
    return _enum_from_string(Orientation, "orientation", raw)


def renderorder_from_string(raw: str) -> RenderOrder:
    return _enum_from_string(RenderOrder, "renderorder", raw)


def staggeraxis_from_string(raw: str) -> StaggerAxis:
    return _enum_from_string(StaggerAxis, "staggeraxis", raw)


def staggerindex_from_string(raw: str) -> StaggerIndex:
    return _enum_from_string(StaggerIndex, "staggerindex", raw)


def propertytype_from_string(raw: str) -> PropertyType:
    return _enum_from_string(PropertyType, "type", raw)


def draworder_from_string(raw: str) -> DrawOrder:
    return _enum_from_string(DrawOrder, "draworder", raw)


# =============================================================================
# PER-ELEMENT ATTRIBUTE VIEW
# =============================================================================

class Attributes:
    """
    Attributes of one element with required/default policies.

    Example:
        attrs = Attributes.from_event(start)
        width = attrs.integer("width")               # required
        opacity = attrs.real("opacity", 1.0)         # optional, default 1.0
        name = attrs.get("name")                     # optional, None
    """

    def __init__(self, tag: str, values: Dict[str, str]):
        self.tag = tag
        self.values = values

    @classmethod
    def from_event(cls, event: Event) -> "Attributes":
        return cls(event.tag, extract_attributes(event))

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.values.get(name, default)

    def required(self, name: str) -> str:
        try:
            return self.values[name]
        except KeyError:
            raise MissingRequiredAttribute(self.tag, name) from None

    def _convert(self, name: str, convert: Callable, default):
        raw = self.values.get(name)
        if raw is None:
            if default is _REQUIRED:
                raise MissingRequiredAttribute(self.tag, name)
            return default
        return convert(name, raw)

    def integer(self, name: str, default=_REQUIRED):
        return self._convert(name, to_int, default)

    def real(self, name: str, default=_REQUIRED):
        return self._convert(name, to_float, default)

    def boolean(self, name: str, default=_REQUIRED):
        return self._convert(name, to_bool, default)

    def gid(self, name: str = "gid") -> Optional[int]:
        return self._convert(name, to_gid, None)

    def enum(self, name: str, parse: Callable[[str], E], default=_REQUIRED):
        return self._convert(name, lambda _field, raw: parse(raw), default)
