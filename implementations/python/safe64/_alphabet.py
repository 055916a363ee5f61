"""Safe64 body alphabet: URL-safe substitution and padding recovery.

Encoding replaces "+" with "-" and "/" with "_".  Padding is either
stripped (default) or written 1:1 as "~" (legacy v1 output).  Decoding
does not need to know which convention was used: "~" maps back to "=",
and any missing padding is recomputed from the body length.

Lengths where len % 4 == 1 can never come out of a base64 encoder, so
they are malformed rather than merely unpadded.
"""

from __future__ import annotations

import base64
import binascii
import re

from ._constants import B64_ALPHABET, FROM_SAFE, PAD, TO_SAFE, TO_SAFE_LEGACY
from ._errors import InvalidEncodingError

# Standard alphabet, at most two trailing pad characters.
_STRICT_B64 = re.compile(r"[A-Za-z0-9+/]*={0,2}")


def from_base64(b64: str, legacy_padding: bool = False) -> str:
    """Convert standard base64 text into raw Safe64 (no header)."""
    if legacy_padding:
        return b64.translate(TO_SAFE_LEGACY)
    return b64.translate(TO_SAFE).rstrip(PAD)


def _pad(b64: str) -> str:
    rem = len(b64) % 4
    if rem == 1:
        raise InvalidEncodingError(
            "body length {} is not a valid base64 length".format(len(b64)))
    return b64 + PAD * ((4 - rem) % 4)


def to_base64(safe: str) -> str:
    """Convert raw Safe64 (either padding convention) back to base64."""
    return _pad(safe.translate(FROM_SAFE))


def encode_bytes(data: bytes, legacy_padding: bool = False) -> str:
    """Encode bytes to raw Safe64 with no header and no serialization."""
    return from_base64(base64.b64encode(data).decode("ascii"), legacy_padding)


def decode_bytes(safe: str, strict: bool = False) -> bytes:
    """Decode raw Safe64 (no header) back into bytes.

    strict=True raises InvalidEncodingError on any character outside the
    base64 alphabet after restoration.  Otherwise decoding is best-effort:
    stray characters are discarded and a dangling final character is
    dropped, so this never raises.
    """
    if strict:
        b64 = to_base64(safe)
        if _STRICT_B64.fullmatch(b64) is None:
            raise InvalidEncodingError("invalid characters in encoded string")
        try:
            return base64.b64decode(b64, validate=True)
        except binascii.Error as e:
            raise InvalidEncodingError("invalid encoded string: {}".format(e))

    kept = "".join(ch for ch in safe.translate(FROM_SAFE) if ch in B64_ALPHABET)
    if len(kept) % 4 == 1:
        kept = kept[:-1]
    return base64.b64decode(_pad(kept))
