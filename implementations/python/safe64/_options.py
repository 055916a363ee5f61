"""Options: what a decode call should do with a given input string.

Combines the parsed header (if any) with the caller's configured format
and type.  Precedence:

    detection off       → whole string is body; configured format and type
    no header           → configured format and type
    header, no F field  → Format.NONE
    header, F field     → header format (never overridden)
    header, T field     → header type, unless force_type → configured type
    header, no T field  → configured type
    Format.NONE         → Type.STRING, whatever else was resolved
"""

from __future__ import annotations

from dataclasses import dataclass

from ._enums import Format, Type
from ._header import parse_header


@dataclass(frozen=True)
class Options:
    format: Format
    type: Type
    version: int
    offset: int
    string: str

    @property
    def has_header(self) -> bool:
        return self.offset > 0

    @property
    def header(self) -> str:
        return self.string[:self.offset]

    @property
    def body(self) -> str:
        return self.string[self.offset:]


def resolve_options(s: str, format: Format = Format.NONE,
                    type: Type = Type.STRING,
                    force_type: bool = False,
                    detect_header: bool = True) -> Options:
    """Parse `s` and resolve the format/type to decode its body with.

    With `detect_header` off, `s` is taken to be a bare body even if it
    starts with something that parses as a header.
    """
    fmt = Format.coerce(format)
    typ = Type.coerce(type)

    header, offset = parse_header(s) if detect_header else (None, 0)
    version = 0
    if header is not None:
        version = header.version
        fmt = header.format if header.format is not None else Format.NONE
        if header.type is not None and not force_type:
            typ = header.type

    if fmt is Format.NONE:
        typ = Type.STRING

    return Options(fmt, typ, version, offset, s)
