"""Tests for the event cursor, attribute extraction and subtree skipping."""

import unittest

from tmx_reader import MalformedAttribute, MalformedMarkup
from tmx_reader.events import (
    END,
    END_OF_DOCUMENT,
    EOF_EVENT,
    START,
    Event,
    EventCursor,
    extract_attributes,
    iter_children,
    skip_subtree,
)


def drain(cursor):
    events = []
    while True:
        event = cursor.next_event()
        events.append((event.kind, event.tag))
        if event.kind == END_OF_DOCUMENT:
            return events


class TestEventCursor(unittest.TestCase):
    def test_self_closing_is_start_then_end(self):
        events = drain(EventCursor("<a><b/></a>"))
        self.assertEqual(events, [
            (START, "a"), (START, "b"), (END, "b"), (END, "a"), (END_OF_DOCUMENT, ""),
        ])

    def test_small_chunks(self):
        document = '<map a="1"><tileset name="x"/><objectgroup name="g"/></map>'
        self.assertEqual(drain(EventCursor(document, chunk_size=3)), drain(EventCursor(document)))

    def test_attributes_survive_until_read(self):
        cursor = EventCursor('<a x="1"><b/></a>')
        start = cursor.next_event()
        drain(cursor)
        self.assertEqual(start.attributes, {"x": "1"})

    def test_eof_repeats(self):
        cursor = EventCursor("<a/>")
        drain(cursor)
        self.assertEqual(cursor.next_event().kind, END_OF_DOCUMENT)

    def test_unbalanced(self):
        with self.assertRaises(MalformedMarkup):
            drain(EventCursor("<a><b></a>"))

    def test_unclosed(self):
        with self.assertRaises(MalformedMarkup):
            drain(EventCursor("<a><b/>"))

    def test_lone_surrogate(self):
        with self.assertRaises(MalformedMarkup):
            drain(EventCursor('<a x="\ud800"/>'))


class TestExtractAttributes(unittest.TestCase):
    def test_keys_lower_cased(self):
        event = Event(START, "map", {"Width": "10", "tileheight": "32"})
        self.assertEqual(extract_attributes(event), {"width": "10", "tileheight": "32"})

    def test_last_duplicate_wins(self):
        event = Event(START, "map", {"WIDTH": "1", "width": "2"})
        self.assertEqual(extract_attributes(event), {"width": "2"})

    def test_default_attributes_are_read_only(self):
        with self.assertRaises(TypeError):
            Event(END, "map").attributes["x"] = "1"
        self.assertEqual(EOF_EVENT.attributes, {})

    def test_invalid_text(self):
        event = Event(START, "map", {"name": "\udc80"})
        with self.assertRaises(MalformedAttribute) as ctx:
            extract_attributes(event)
        self.assertEqual((ctx.exception.tag, ctx.exception.name), ("map", "name"))


class TestSkipSubtree(unittest.TestCase):
    def test_leaves_cursor_after_unknown_element(self):
        cursor = EventCursor("<r><u><v><w/></v><v/></u><k/></r>")
        cursor.next_event()                                # <r>
        skip_subtree(cursor, cursor.next_event())          # <u>...</u>
        self.assertEqual(cursor.next_event(), Event(START, "k", {}))

    def test_self_closing_unknown(self):
        cursor = EventCursor("<r><u/><k/></r>")
        cursor.next_event()
        skip_subtree(cursor, cursor.next_event())
        self.assertEqual(cursor.next_event().tag, "k")

    def test_iter_children_with_skips(self):
        cursor = EventCursor("<r><a><x/></a><b/><c><y><z/></y></c></r>")
        cursor.next_event()
        seen = []
        for child in iter_children(cursor):
            seen.append(child.tag)
            skip_subtree(cursor, child)
        self.assertEqual(seen, ["a", "b", "c"])


if __name__ == "__main__":
    unittest.main()
