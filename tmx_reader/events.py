"""
Forward-only cursor over the XML event stream.

The document is fed to ElementTree's XMLPullParser a chunk at a time and
handed out as START/END events. No tree is kept: every element is cleared
as soon as its end tag has been seen. A self-closing tag such as <image/>
arrives as a START immediately followed by its END.

    <map>                 START map
      <foo>               START foo   -> skip_subtree()
        <bar/>            START bar, END bar
      </foo>              END foo     <- cursor resumes here
    </map>                END map
"""

import logging
import xml.etree.ElementTree as ET
from collections import deque
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, NamedTuple, Optional, Union

from .errors import MalformedAttribute, MalformedMarkup

logger = logging.getLogger(__name__)

# Characters (or bytes) handed to the pull parser per step
FEED_CHUNK_SIZE = 64 * 1024

START = "start"
END = "end"
END_OF_DOCUMENT = "eof"


class Event(NamedTuple):
    kind: str                                        # START, END or END_OF_DOCUMENT
    tag: str = ""
    attributes: Mapping[str, str] = MappingProxyType({})  # Raw attributes (START only)


EOF_EVENT = Event(END_OF_DOCUMENT)


class EventCursor:
    """
    Exclusive, forward-only reader over one document.

    Readers receive the cursor and advance it with next_event(). Parse
    errors from the tokenizer surface as MalformedMarkup at the point in
    the stream where they occur.
    """

    def __init__(self, document: Union[str, bytes], chunk_size: int = FEED_CHUNK_SIZE):
        self._document = document
        self._chunk_size = chunk_size
        self._offset = 0
        self._parser = ET.XMLPullParser(events=(START, END))
        self._pending = deque()
        self._closed = False
        self._error: Optional[MalformedMarkup] = None

    def next_event(self) -> Event:
        while not self._pending:
            if self._error is not None:
                raise self._error
            if self._closed:
                return EOF_EVENT
            self._feed()
        return self._pending.popleft()

    def _feed(self):
        # Events tokenized before an error are still handed out first; the
        # error is raised once they have been consumed.
        try:
            if self._offset < len(self._document):
                chunk = self._document[self._offset:self._offset + self._chunk_size]
                self._offset += len(chunk)
                self._parser.feed(chunk)
            else:
                self._parser.close()
                self._closed = True

            # XMLPullParser queues syntax errors and raises them from here
            for kind, elem in self._parser.read_events():
                if kind == START:
                    # Copy now, the element is cleared once its end tag is read
                    self._pending.append(Event(START, elem.tag, dict(elem.attrib)))
                else:
                    self._pending.append(Event(END, elem.tag))
                    elem.clear()
        except ET.ParseError as e:
            self._error = MalformedMarkup(f"Malformed XML: {e}", getattr(e, "position", None))
            self._error.__cause__ = e
        except UnicodeError as e:
            self._error = MalformedMarkup(f"Document is not valid text: {e}")
            self._error.__cause__ = e


def extract_attributes(event: Event) -> Dict[str, str]:
    """
    Map lower-cased attribute names to their raw string values.

    Later duplicates overwrite earlier ones. Text that EventCursor hands
    out is already valid; the encoding check guards events built by hand.
    """
    attributes = {}
    for key, value in event.attributes.items():
        try:
            key.encode("utf-8")
            value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise MalformedAttribute(event.tag, key) from e
        attributes[key.lower()] = value
    return attributes


def iter_children(cursor: EventCursor) -> Iterator[Event]:
    """
    Yield the START event of each direct child of the current element.

    The caller must consume every yielded child completely (with a reader
    or skip_subtree) before asking for the next one. Iteration stops on the
    current element's end tag or at end of document.
    """
    while True:
        event = cursor.next_event()
        if event.kind != START:
            return
        yield event


def skip_subtree(cursor: EventCursor, start: Event):
    """
    Discard an unrecognized element and everything inside it.

    Called right after start was read; returns with the cursor just past
    the matching end tag, as if the element had never been there.
    """
    logger.debug("Skipping unrecognized element <%s>", start.tag)
    depth = 1
    while depth:
        event = cursor.next_event()
        if event.kind == START:
            depth += 1
        elif event.kind == END:
            depth -= 1
        else:
            return
