"""Safe64 v3 header: build and parse.

Format:  SVvv[Ff[Tt]]

    vv = version, two hex digits (mandatory)
    f  = format, one hex digit (omitted for Format.NONE)
    t  = type, one hex digit (omitted for Type.STRING and Format.NATIVE_GRAPH)

Example: SV03F1T1 (version 3, format JSON, type MAP).

Omitted fields are what keep the header short, but they also mean the
first body character sits where the next field marker would go.  The
builder therefore emits an otherwise-omittable field whenever the body
starts with that field's marker; the result is still a valid header.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ._constants import (
    HDR_FORMAT,
    HDR_FORMAT_WIDTH,
    HDR_PREFIX,
    HDR_TYPE,
    HDR_TYPE_WIDTH,
    HDR_VERSION_WIDTH,
    HEX_DIGITS,
    VERSION,
    VERSION_MAX,
    VERSION_MIN,
)
from ._enums import Format, Type
from ._errors import HeaderVersionError


_UNTYPED = frozenset({Format.NONE, Format.NATIVE_GRAPH})


def hex_field(number: int, width: int) -> str:
    """Format an integer as zero-padded lower-case hex of a set width."""
    return "{:0{}x}".format(int(number), width)


@dataclass(frozen=True)
class Header:
    """Decoded header fields.  `None` marks a field absent from the wire."""

    version: int = VERSION
    format: Optional[Format] = None
    type: Optional[Type] = None

    def __post_init__(self) -> None:
        if isinstance(self.version, bool) or not isinstance(self.version, int):
            raise HeaderVersionError("header version must be an int")
        if not VERSION_MIN <= self.version <= VERSION_MAX:
            raise HeaderVersionError(
                "header version {} outside {}..{}".format(
                    self.version, VERSION_MIN, VERSION_MAX))

    def render(self) -> str:
        """Write exactly the fields that are present."""
        h = HDR_PREFIX + hex_field(self.version, HDR_VERSION_WIDTH)
        if self.format is not None:
            h += HDR_FORMAT + hex_field(self.format, HDR_FORMAT_WIDTH)
            if self.type is not None:
                h += HDR_TYPE + hex_field(self.type, HDR_TYPE_WIDTH)
        return h


def build_header(format: Format, type: Type, version: int = VERSION,
                 full: bool = False, body: str = "") -> str:
    """Build a header to prepend to an encoded body.

    `body` is only inspected for its first character (see module docs).
    """
    format = Format.coerce(format)
    type = Type.coerce(type)

    with_format = full or format is not Format.NONE or body.startswith(HDR_FORMAT)
    # Type means nothing to NONE (always STRING) or NATIVE_GRAPH (ignored).
    with_type = with_format and (
        full
        or (type is not Type.STRING and format not in _UNTYPED)
        or body.startswith(HDR_TYPE)
    )
    return Header(
        version,
        format if with_format else None,
        type if with_type else None,
    ).render()


def _hex_at(s: str, off: int, width: int) -> Optional[int]:
    digits = s[off:off + width]
    if len(digits) != width or not all(ch in HEX_DIGITS for ch in digits):
        return None
    return int(digits, 16)


def parse_header(s: str) -> Tuple[Optional[Header], int]:
    """Look for a header at the start of `s`.

    Returns (header, offset) where offset is the index of the body.  With
    no recognizable header the result is (None, 0).  Only the grammar
    positions are read; a marker not followed by a hex digit ends the
    header there.
    """
    if not s.startswith(HDR_PREFIX):
        return None, 0

    off = len(HDR_PREFIX)
    version = _hex_at(s, off, HDR_VERSION_WIDTH)
    if version is None:
        return None, 0
    off += HDR_VERSION_WIDTH

    fmt: Optional[Format] = None
    typ: Optional[Type] = None

    if s.startswith(HDR_FORMAT, off):
        tag = _hex_at(s, off + len(HDR_FORMAT), HDR_FORMAT_WIDTH)
        if tag is not None:
            fmt = Format.coerce(tag)
            off += len(HDR_FORMAT) + HDR_FORMAT_WIDTH

            if s.startswith(HDR_TYPE, off):
                tag = _hex_at(s, off + len(HDR_TYPE), HDR_TYPE_WIDTH)
                if tag is not None:
                    typ = Type.coerce(tag)
                    off += len(HDR_TYPE) + HDR_TYPE_WIDTH

    return Header(version, fmt, typ), off
