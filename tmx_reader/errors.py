"""
Exceptions raised while reading a TMX document.

Every failure is fatal: the reader stops at the first problem it finds and
raises one of the classes below. There is no partial result.

    TmxParseError
    ├── MalformedMarkup            XML could not be tokenized
    │   └── MalformedAttribute     attribute key/value is not valid text
    ├── MissingRequiredAttribute   required attribute absent
    ├── MissingRequiredElement     required child element absent
    ├── InvalidNumericLiteral      numeric attribute does not parse
    ├── InvalidBooleanLiteral      boolean attribute does not parse
    ├── UnsupportedEnumValue       unknown enumeration spelling
    └── NoMapElement               document has no <map>
"""

from typing import Optional, Tuple


class TmxParseError(Exception):
    """Base class for every error raised by tmx_reader."""


class MalformedMarkup(TmxParseError):
    """The XML event stream cannot be tokenized."""

    def __init__(self, message: str, position: Optional[Tuple[int, int]] = None):
        super().__init__(message)
        self.position = position  # (line, column) when the tokenizer reports it


class MalformedAttribute(MalformedMarkup):
    def __init__(self, tag: str, name: str):
        super().__init__(f"Attribute '{name}' on <{tag}> is not valid text")
        self.tag = tag
        self.name = name


class MissingRequiredAttribute(TmxParseError):
    def __init__(self, tag: str, field: str):
        super().__init__(f"<{tag}> is missing required attribute '{field}'")
        self.tag = tag
        self.field = field


class MissingRequiredElement(TmxParseError):
    def __init__(self, tag: str, child: str):
        super().__init__(f"<{tag}> is missing required child element <{child}>")
        self.tag = tag
        self.child = child


class InvalidNumericLiteral(TmxParseError):
    def __init__(self, field: str, raw: str):
        super().__init__(f"Invalid numeric value for '{field}': {raw!r}")
        self.field = field
        self.raw = raw


class InvalidBooleanLiteral(TmxParseError):
    def __init__(self, field: str, raw: str):
        super().__init__(f"Invalid boolean value for '{field}': {raw!r}")
        self.field = field
        self.raw = raw


class UnsupportedEnumValue(TmxParseError):
    def __init__(self, field: str, value: str):
        super().__init__(f"Unsupported {field}: {value!r}")
        self.field = field
        self.value = value


class NoMapElement(TmxParseError):
    def __init__(self):
        super().__init__("Document does not contain a <map> element")
