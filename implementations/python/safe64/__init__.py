"""safe64: Safe64 v3 Python implementation.

A URL-safe variant of base64 with an optional self-describing header
recording the protocol version, the serialization format, and the shape
of the decoded value.

Quick start:
    >>> from safe64 import encode, decode
    >>> encode({"a": 1})
    'SV03F1T1eyJhIjoxfQ'
    >>> decode('SV03F1T1eyJhIjoxfQ')
    {'a': 1}

Raw bodies, without header or serialization:
    >>> encode_bytes(b"hello")
    'aGVsbG8'
    >>> encode_bytes(b"hello", legacy_padding=True)
    'aGVsbG8~'
    >>> decode_bytes('aGVsbG8~') == decode_bytes('aGVsbG8') == b"hello"
    True
"""

from __future__ import annotations

from typing import Any, Optional

from ._alphabet import decode_bytes, encode_bytes, from_base64, to_base64
from ._constants import VERSION
from ._core import Config, Transcoder
from ._dispatch import FormatDispatcher, default_serializers
from ._enums import Format, Type
from ._errors import (
    ERR_HEADER_VERSION,
    ERR_INVALID_ENCODING,
    ERR_SERIALIZATION,
    ERR_UNSUPPORTED_FORMAT,
    ERR_UNSUPPORTED_TYPE,
    HeaderVersionError,
    InvalidEncodingError,
    Safe64Error,
    SerializationError,
    UnsupportedFormatError,
    UnsupportedTypeError,
)
from ._header import Header, build_header, parse_header
from ._options import Options, resolve_options
from ._serializers import (
    JsonSerializer,
    MsgpackSerializer,
    PickleSerializer,
    Serializer,
)

__version__ = "3.0.0"

__all__ = [
    # Public API functions
    "encode",
    "decode",
    "strip_header",
    "read_options",
    "encode_bytes",
    "decode_bytes",
    "from_base64",
    "to_base64",
    "build_header",
    "parse_header",
    "resolve_options",
    # Types
    "Config",
    "Transcoder",
    "Format",
    "Type",
    "Header",
    "Options",
    "FormatDispatcher",
    "default_serializers",
    "Serializer",
    "JsonSerializer",
    "PickleSerializer",
    "MsgpackSerializer",
    "VERSION",
    # Exceptions
    "Safe64Error",
    "InvalidEncodingError",
    "SerializationError",
    "UnsupportedFormatError",
    "UnsupportedTypeError",
    "HeaderVersionError",
    # Error codes
    "ERR_INVALID_ENCODING",
    "ERR_SERIALIZATION",
    "ERR_UNSUPPORTED_FORMAT",
    "ERR_UNSUPPORTED_TYPE",
    "ERR_HEADER_VERSION",
]

strip_header = Transcoder.strip_header
read_options = Transcoder.read_options


# ── One-shot API ──────────────────────────────────────────────
# Each call builds its own Transcoder; keep one around when encoding or
# decoding many values with the same settings.

def encode(value: Any, config: Optional[Config] = None, **overrides: Any) -> str:
    """Encode `value` to a Safe64 string.

    Settings come from `config` (default Config()) with any Config field
    overridden by keyword, e.g. encode(v, format=Format.MSGPACK).
    """
    return Transcoder(config, **overrides).encode(value)


def decode(s: str, config: Optional[Config] = None, **overrides: Any) -> Any:
    """Decode a Safe64 string.  Settings work as in encode()."""
    return Transcoder(config, **overrides).decode(s)
