"""Safe64 error codes and exception classes.

Every failure is deterministic for a given input and configuration, so
nothing here is retried.  Callers can catch the shared base class and
switch on `.code`, or catch the specific subclass.
"""

from __future__ import annotations

# ── Error codes ──────────────────────────────────────────────
# Grep-friendly strings, shared with conformance/vectors.json.

ERR_INVALID_ENCODING: str = "ERR_INVALID_ENCODING"      # illegal body characters
ERR_SERIALIZATION: str = "ERR_SERIALIZATION"            # payload codec failure
ERR_UNSUPPORTED_FORMAT: str = "ERR_UNSUPPORTED_FORMAT"  # unknown format tag
ERR_UNSUPPORTED_TYPE: str = "ERR_UNSUPPORTED_TYPE"      # unknown or unusable type
ERR_HEADER_VERSION: str = "ERR_HEADER_VERSION"          # version outside 0..255


class Safe64Error(Exception):
    """Base exception for Safe64 processing errors.

    The `.code` attribute is one of the ERR_* strings above.
    """

    code: str = ""

    def __init__(self, msg: str = "", code: str = "") -> None:
        if code:
            self.code = code
        super().__init__(msg or self.code)


class InvalidEncodingError(Safe64Error):
    """Body holds characters outside the base64 alphabet (strict mode only)."""

    code = ERR_INVALID_ENCODING


class SerializationError(Safe64Error):
    """A payload serializer rejected the value or the decoded bytes."""

    code = ERR_SERIALIZATION


class UnsupportedFormatError(Safe64Error):
    code = ERR_UNSUPPORTED_FORMAT


class UnsupportedTypeError(Safe64Error):
    code = ERR_UNSUPPORTED_TYPE


class HeaderVersionError(Safe64Error):
    code = ERR_HEADER_VERSION
