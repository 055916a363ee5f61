"""Tests for the safe64 command-line interface."""

from __future__ import annotations

import contextlib
import io
import json
import os
import sys
import tempfile
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from safe64 import __version__
from safe64._cli import main


class CliTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)

    def _file(self, data: bytes) -> str:
        path = os.path.join(self._tmp.name, "input")
        with open(path, "wb") as f:
            f.write(data)
        return path

    def _run(self, *argv: str) -> str:
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            main(list(argv))
        return out.getvalue()

    def test_encode_json(self):
        path = self._file(b'{"a": 1}\n')
        self.assertEqual(self._run("encode", "-i", path), "SV03F1T1eyJhIjoxfQ\n")

    def test_encode_raw(self):
        path = self._file(b"hello")
        self.assertEqual(self._run("encode", "--raw", "--format", "none", "-i", path),
                         "SV03aGVsbG8\n")
        self.assertEqual(self._run("encode", "--raw", "--no-header", "--tildes", "-i", path),
                         "aGVsbG8~\n")

    def test_encode_msgpack_full_header(self):
        path = self._file(b'{"a": 1}')
        self.assertEqual(
            self._run("encode", "--format", "msgpack", "--full-header", "-i", path),
            "SV03F3T1gaFhAQ\n")

    def test_decode(self):
        path = self._file(b"SV03F1T1eyJhIjoxfQ\n")
        self.assertEqual(json.loads(self._run("decode", "-i", path)), {"a": 1})

    def test_decode_force_object(self):
        path = self._file(b"SV03F1T1eyJhIjoxfQ")
        out = self._run("decode", "--type", "object", "--force-type", "-i", path)
        self.assertEqual(json.loads(out), {"a": 1})

    def test_decode_text(self):
        path = self._file(b"SV03aGVsbG8")
        self.assertEqual(self._run("decode", "-i", path), "hello\n")

    def test_decode_no_header(self):
        path = self._file(b"SVBB")
        self.assertEqual(self._run("decode", "--format", "none", "--no-header", "-i", path), "IPA\n")
        self.assertEqual(self._run("decode", "--format", "none", "-i", path), "\n")

    def test_strip(self):
        path = self._file(b"SV03F1T1eyJhIjoxfQ")
        self.assertEqual(self._run("strip", "-i", path), "eyJhIjoxfQ\n")

    def test_info(self):
        path = self._file(b"SV03F1T1eyJhIjoxfQ")
        info = json.loads(self._run("info", "-i", path))
        self.assertEqual(info, {
            "header": "SV03F1T1",
            "version": 3,
            "format": "plain_text",
            "type": "map",
            "offset": 8,
        })

    def test_version(self):
        self.assertEqual(self._run("version"), "safe64 {}\n".format(__version__))

    def test_error_exit_code(self):
        path = self._file(b"SV03F1T1e!JhIjoxfQ")
        err = io.StringIO()
        with contextlib.redirect_stderr(err), contextlib.redirect_stdout(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main(["decode", "--strict", "-i", path])
        self.assertEqual(ctx.exception.code, 2)
        self.assertIn("ERR_INVALID_ENCODING", err.getvalue())

    def test_no_command(self):
        with contextlib.redirect_stdout(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main([])
        self.assertEqual(ctx.exception.code, 1)


if __name__ == "__main__":
    unittest.main()
