"""Safe64 command-line interface.

Usage:
    echo '{"a":1}' | python3 -m safe64 encode [--format json] [--type map]
    printf 'raw bytes' | python3 -m safe64 encode --raw
    echo 'SV03F1T1eyJhIjoxfQ' | python3 -m safe64 decode
    python3 -m safe64 strip --input token.txt
    python3 -m safe64 info --input token.txt
    python3 -m safe64 version
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, List, Optional

from . import (
    Config,
    Format,
    Safe64Error,
    Transcoder,
    Type,
    __version__,
    read_options,
    strip_header,
)

_FORMATS = ["none", "json", "pickle", "msgpack"]
_TYPES = ["string", "map", "object"]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="safe64",
        description="Safe64 v3: URL-safe base64 with a self-describing header",
    )
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log header resolution to stderr")
    sub = parser.add_subparsers(dest="command")

    # ── encode ──
    enc_p = sub.add_parser("encode", help="Encode input to a Safe64 string")
    enc_p.add_argument("--format", "-f", choices=_FORMATS, default="json",
                       help="Serialization format (default: json)")
    enc_p.add_argument("--type", "-t", choices=_TYPES, default="map",
                       help="Decoded shape recorded in the header (default: map)")
    enc_p.add_argument("--raw", action="store_true",
                       help="Encode input bytes as-is instead of parsing JSON")
    enc_p.add_argument("--tildes", action="store_true",
                       help="Write padding as '~' (legacy v1 output)")
    enc_p.add_argument("--no-header", action="store_true",
                       help="Do not prepend a v3 header")
    enc_p.add_argument("--full-header", action="store_true",
                       help="Always write the format and type header fields")
    enc_p.add_argument("--encode-strings", action="store_true",
                       help="Serialize a top-level JSON string instead of passing it through")
    enc_p.add_argument("--input", "-i", metavar="FILE",
                       help="Read input from FILE instead of stdin")

    # ── decode ──
    dec_p = sub.add_parser("decode", help="Decode a Safe64 string")
    dec_p.add_argument("--format", "-f", choices=_FORMATS, default="json",
                       help="Format assumed when there is no header (default: json)")
    dec_p.add_argument("--type", "-t", choices=_TYPES, default="map",
                       help="Shape to decode into (default: map)")
    dec_p.add_argument("--force-type", action="store_true",
                       help="--type wins over the header's type field")
    dec_p.add_argument("--no-header", action="store_true",
                       help="Read input as a bare body, never as a header")
    dec_p.add_argument("--strict", action="store_true",
                       help="Reject characters outside the Safe64 alphabet")
    dec_p.add_argument("--input", "-i", metavar="FILE",
                       help="Read the string from FILE instead of stdin")

    # ── strip / info ──
    strip_p = sub.add_parser("strip", help="Print the body without its header")
    strip_p.add_argument("--input", "-i", metavar="FILE",
                         help="Read the string from FILE instead of stdin")
    info_p = sub.add_parser("info", help="Print header fields as JSON")
    info_p.add_argument("--input", "-i", metavar="FILE",
                        help="Read the string from FILE instead of stdin")

    # ── version ──
    sub.add_parser("version", help="Print version and exit")

    return parser


def _read_input(filepath: Optional[str]) -> bytes:
    """Read bytes from a file or stdin."""
    if filepath:
        with open(filepath, "rb") as f:
            return f.read()
    if sys.stdin.isatty():
        print("safe64: reading from stdin (Ctrl-D to end)...", file=sys.stderr)
    return sys.stdin.buffer.read()


def _read_token(filepath: Optional[str]) -> str:
    return _read_input(filepath).decode("ascii", errors="replace").strip()


def _to_json(obj: Any) -> Any:
    """`default=` hook for printing OBJECT-shaped and binary results."""
    if isinstance(obj, (bytes, bytearray)):
        return obj.decode("utf-8", errors="replace")
    if hasattr(obj, "__dict__"):
        return vars(obj)
    return repr(obj)


def _cmd_encode(args: argparse.Namespace) -> None:
    raw = _read_input(args.input)
    fmt = Format.coerce(args.format)
    t = Transcoder(Config(
        format=fmt,
        type=Type.coerce(args.type),
        legacy_padding=args.tildes,
        add_header=not args.no_header,
        full_header=args.full_header,
        encode_strings=args.encode_strings,
    ))

    if args.raw or fmt is Format.NONE:
        print(t.encode(raw))
    else:
        print(t.encode(json.loads(raw)))


def _cmd_decode(args: argparse.Namespace) -> None:
    t = Transcoder(Config(
        format=Format.coerce(args.format),
        type=Type.coerce(args.type),
        force_type=args.force_type,
        add_header=not args.no_header,
        strict=args.strict,
    ))
    result = t.decode(_read_token(args.input))
    if isinstance(result, str):
        print(result)
    else:
        print(json.dumps(result, ensure_ascii=False, default=_to_json))


def _cmd_info(args: argparse.Namespace) -> None:
    opts = read_options(_read_token(args.input))
    print(json.dumps({
        "header": opts.header,
        "version": opts.version,
        "format": opts.format.name.lower(),
        "type": opts.type.name.lower(),
        "offset": opts.offset,
    }))


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="safe64: %(name)s: %(message)s")

    if args.command == "version":
        print(f"safe64 {__version__}")
        return

    try:
        if args.command == "encode":
            _cmd_encode(args)
        elif args.command == "decode":
            _cmd_decode(args)
        elif args.command == "strip":
            print(strip_header(_read_token(args.input)))
        elif args.command == "info":
            _cmd_info(args)
    except Safe64Error as e:
        print(f"safe64: error [{e.code}]: {e}", file=sys.stderr)
        sys.exit(2)
    except json.JSONDecodeError as e:
        print(f"safe64: JSON parse error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
