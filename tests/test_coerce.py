"""Unit tests for attribute value coercion."""

import unittest

from tmx_reader import (
    DrawOrder,
    InvalidBooleanLiteral,
    InvalidNumericLiteral,
    MissingRequiredAttribute,
    Orientation,
    PropertyType,
    RenderOrder,
    StaggerAxis,
    StaggerIndex,
    UnsupportedEnumValue,
)
from tmx_reader.coerce import (
    Attributes,
    draworder_from_string,
    orientation_from_string,
    propertytype_from_string,
    renderorder_from_string,
    staggeraxis_from_string,
    staggerindex_from_string,
    to_bool,
    to_float,
    to_gid,
    to_int,
)


# ── Scalars ──────────────────────────────────────────────────

class TestNumbers(unittest.TestCase):
    def test_int(self):
        self.assertEqual(to_int("w", "79"), 79)
        self.assertEqual(to_int("w", "-3"), -3)
        self.assertEqual(to_int("w", "+3"), 3)

    def test_int_rejects(self):
        for raw in ["", "1.0", " 1", "1 ", "1_000", "0x10", "abc", "٣"]:
            with self.assertRaises(InvalidNumericLiteral) as ctx:
                to_int("width", raw)
            self.assertEqual(ctx.exception.field, "width")
            self.assertEqual(ctx.exception.raw, raw)

    def test_float(self):
        self.assertEqual(to_float("x", "373.939"), 373.939)
        self.assertEqual(to_float("x", "1"), 1.0)
        self.assertEqual(to_float("x", "-2.5e3"), -2500.0)

    def test_float_rejects(self):
        for raw in ["", "1,5", " 1.0", "1_0.5", "one", "nan", "NaN", "inf", "-inf", "infinity", "1e999"]:
            with self.assertRaises(InvalidNumericLiteral):
                to_float("x", raw)

    def test_gid_range(self):
        self.assertEqual(to_gid("gid", "0"), 0)
        self.assertEqual(to_gid("gid", "4294967295"), 0xFFFFFFFF)
        for raw in ["-1", "4294967296"]:
            with self.assertRaises(InvalidNumericLiteral):
                to_gid("gid", raw)


class TestBooleans(unittest.TestCase):
    def test_true(self):
        for raw in ["true", "1"]:
            self.assertIs(to_bool("visible", raw), True)

    def test_false(self):
        for raw in ["false", "0"]:
            self.assertIs(to_bool("visible", raw), False)

    def test_rejects(self):
        for raw in ["yes", "", "2", "t", "TRUE", "True", "False"]:
            with self.assertRaises(InvalidBooleanLiteral) as ctx:
                to_bool("visible", raw)
            self.assertEqual(ctx.exception.field, "visible")


# ── Enumerations ─────────────────────────────────────────────

class TestEnums(unittest.TestCase):
    def test_all_spellings(self):
        cases = [
            (orientation_from_string, {
                "orthogonal": Orientation.ORTHOGONAL,
                "isometric": Orientation.ISOMETRIC,
                "staggered": Orientation.STAGGERED,
                "hexagonal": Orientation.HEXAGONAL,
            }),
            (renderorder_from_string, {
                "right-down": RenderOrder.RIGHT_DOWN,
                "right-up": RenderOrder.RIGHT_UP,
                "left-down": RenderOrder.LEFT_DOWN,
                "left-up": RenderOrder.LEFT_UP,
            }),
            (staggeraxis_from_string, {"x": StaggerAxis.X, "y": StaggerAxis.Y}),
            (staggerindex_from_string, {"even": StaggerIndex.EVEN, "odd": StaggerIndex.ODD}),
            (propertytype_from_string, {
                "string": PropertyType.STRING,
                "int": PropertyType.INT,
                "float": PropertyType.FLOAT,
                "bool": PropertyType.BOOL,
                "color": PropertyType.COLOR,
                "file": PropertyType.FILE,
            }),
            (draworder_from_string, {"index": DrawOrder.INDEX, "topdown": DrawOrder.TOPDOWN}),
        ]
        for parse, spellings in cases:
            for raw, expected in spellings.items():
                self.assertIs(parse(raw), expected)
                self.assertIs(parse(raw.upper()), expected)

    def test_unknown_spelling_is_fatal(self):
        with self.assertRaises(UnsupportedEnumValue) as ctx:
            renderorder_from_string("rightdown")
        self.assertEqual(ctx.exception.field, "renderorder")
        self.assertEqual(ctx.exception.value, "rightdown")

    def test_object_property_type_unsupported(self):
        with self.assertRaises(UnsupportedEnumValue):
            propertytype_from_string("object")


# ── Attributes view ──────────────────────────────────────────

class TestAttributes(unittest.TestCase):
    def setUp(self):
        self.attrs = Attributes("object", {"id": "4", "x": "1.5", "visible": "0"})

    def test_required_present(self):
        self.assertEqual(self.attrs.integer("id"), 4)
        self.assertEqual(self.attrs.real("x"), 1.5)
        self.assertFalse(self.attrs.boolean("visible"))

    def test_required_missing(self):
        with self.assertRaises(MissingRequiredAttribute) as ctx:
            self.attrs.real("y")
        self.assertEqual((ctx.exception.tag, ctx.exception.field), ("object", "y"))
        with self.assertRaises(MissingRequiredAttribute):
            self.attrs.required("name")

    def test_defaults(self):
        self.assertEqual(self.attrs.real("width", 0.0), 0.0)
        self.assertIsNone(self.attrs.integer("height", None))
        self.assertIsNone(self.attrs.get("name"))
        self.assertIsNone(self.attrs.gid())
        self.assertIs(self.attrs.enum("draworder", draworder_from_string, DrawOrder.TOPDOWN),
                      DrawOrder.TOPDOWN)

    def test_present_value_is_still_validated(self):
        attrs = Attributes("object", {"width": "wide"})
        with self.assertRaises(InvalidNumericLiteral):
            attrs.real("width", 0.0)


if __name__ == "__main__":
    unittest.main()
