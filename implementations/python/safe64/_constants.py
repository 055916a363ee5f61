"""Safe64 v3 constants: protocol version, header grammar, body alphabets.

Header grammar (v3):

    header       = "SV" version [ format-field [ type-field ] ]
    version      = 2HEXDIG
    format-field = "F" 1HEXDIG
    type-field   = "T" 1HEXDIG
"""

from __future__ import annotations

import string

# ── Protocol version ─────────────────────────────────────────
# History:
#   1  always replaced "=" with "~"; JSON and native formats only.
#   2  strips "=" by default and re-adds it on decode; adds binary format.
#   3  adds the self-describing header below.
VERSION: int = 3

VERSION_MIN: int = 0
VERSION_MAX: int = 0xFF

# ── Header markers and field widths (hex digits) ─────────────
HDR_PREFIX: str = "SV"
HDR_FORMAT: str = "F"
HDR_TYPE: str = "T"

HDR_VERSION_WIDTH: int = 2
HDR_FORMAT_WIDTH: int = 1
HDR_TYPE_WIDTH: int = 1

HEX_DIGITS: frozenset = frozenset(string.hexdigits)

# ── Body alphabets ───────────────────────────────────────────
# Standard base64 uses "+" and "/" which are unsafe in URLs and paths.
# Legacy (v1) output writes padding as "~"; current output strips it.
STD_CHARS: str = "+/="
SAFE_CHARS: str = "-_~"

TO_SAFE = str.maketrans("+/", "-_")
TO_SAFE_LEGACY = str.maketrans(STD_CHARS, SAFE_CHARS)
FROM_SAFE = str.maketrans(SAFE_CHARS, STD_CHARS)

PAD: str = "="
B64_ALPHABET: frozenset = frozenset(string.ascii_letters + string.digits + "+/")
