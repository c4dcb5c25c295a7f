"""Tests for `python -m tmx_reader`."""

import contextlib
import io
import unittest
from pathlib import Path

from tmx_reader.__main__ import main

SANDBOX = Path(__file__).parent / "data" / "sandbox.tmx"


def run(*args):
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        code = main(list(args))
    return code, out.getvalue()


class TestMain(unittest.TestCase):
    def test_summary(self):
        code, output = run(str(SANDBOX))
        self.assertEqual(code, 0)
        self.assertIn("Map 79x45 tiles of 32x32 px (orthogonal, right-down)", output)
        self.assertIn("Tileset 'objs': firstgid=1, 4/62 tiles declared", output)
        self.assertIn("[parallax] 3 objects (3 with tiles)", output)
        self.assertIn("[bounds] 1 objects (0 with tiles)", output)

    def test_usage(self):
        code, output = run()
        self.assertEqual(code, 1)
        self.assertIn("Usage", output)

    def test_missing_file(self):
        code, output = run("does-not-exist.tmx")
        self.assertEqual(code, 1)
        self.assertIn("not found", output)

    def test_parse_error(self):
        broken = Path(__file__).parent / "data" / "broken.tmx"
        code, output = run(str(broken))
        self.assertEqual(code, 1)
        self.assertIn("missing required attribute 'name'", output)


if __name__ == "__main__":
    unittest.main()
