"""Safe64 v3 core: the Transcoder and its configuration.

Encode:  value → serialize → base64 → safe alphabet → prepend header
Decode:  parse header → resolve options → restore alphabet → base64
         decode → text, or deserialize into the requested shape

A Transcoder is long-lived and holds nothing but its Config.  Every call
builds its own Header/Options values, so calls never leak state into
each other.  `configure()` swaps in a new Config; a call already in
progress keeps the one it started with.  Concurrent configure() calls
must be serialized by the caller.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Optional

from ._alphabet import decode_bytes, encode_bytes
from ._constants import VERSION
from ._dispatch import FormatDispatcher, bytes_to_text, text_to_bytes
from ._enums import Format, Type
from ._header import build_header
from ._options import Options, resolve_options

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    """Transcoder settings.

    format          Serializer for non-text values; recorded in the header.
    type            Shape to decode into; recorded in the header.
    legacy_padding  Write "=" as "~" instead of stripping it (v1 output).
    add_header      Prepend a v3 header to encoded strings.  When False,
                    decode reads input as a bare body.
    full_header     Always write the format and type header fields.
    force_type      On decode, `type` wins over the header's type field.
    strict          Reject bodies with characters outside the alphabet.
    encode_strings  Run `str` input through the serializer.  When False,
                    strings are assumed to be in the target format already.
    """

    format: Format = Format.PLAIN_TEXT
    type: Type = Type.MAP
    legacy_padding: bool = False
    add_header: bool = True
    full_header: bool = False
    force_type: bool = False
    strict: bool = False
    encode_strings: bool = False

    def __post_init__(self) -> None:
        # Frozen, so coerced values go in through object.__setattr__.
        object.__setattr__(self, "format", Format.coerce(self.format))
        object.__setattr__(self, "type", Type.coerce(self.type))


class Transcoder:
    """Encode values to Safe64 strings and decode them back."""

    def __init__(self, config: Optional[Config] = None,
                 dispatcher: Optional[FormatDispatcher] = None,
                 **overrides: Any) -> None:
        config = config if config is not None else Config()
        if overrides:
            config = dataclasses.replace(config, **overrides)
        self._config = config
        self._dispatcher = dispatcher if dispatcher is not None else FormatDispatcher()

    def __repr__(self) -> str:
        return "Transcoder({!r})".format(self._config)

    @property
    def config(self) -> Config:
        return self._config

    @property
    def dispatcher(self) -> FormatDispatcher:
        return self._dispatcher

    def configure(self, **changes: Any) -> "Transcoder":
        """Replace selected Config fields.  Returns self for chaining."""
        self._config = dataclasses.replace(self._config, **changes)
        return self

    # ── Static utilities ──────────────────────────────────────

    @staticmethod
    def read_options(s: str) -> Options:
        """Parse a header with no format/type assumptions."""
        return resolve_options(s, Format.NONE, Type.STRING)

    @staticmethod
    def strip_header(s: str) -> str:
        """Return the raw Safe64 body of `s`, without any v3 header.

        Only the leading header is removed.  A body that itself begins with
        "SV" and two hex digits is indistinguishable from a header, so a
        second call strips it too.
        """
        return Transcoder.read_options(s).body

    encode_bytes = staticmethod(encode_bytes)
    decode_bytes = staticmethod(decode_bytes)

    # ── Encode / decode ───────────────────────────────────────

    def encode(self, value: Any) -> str:
        """Transform a value into a Safe64 string.

        bytes are always encoded as-is.  A str is encoded as-is unless
        `encode_strings` is set.  Anything else is serialized with the
        configured format first.
        """
        cfg = self._config

        if isinstance(value, (bytes, bytearray)):
            data = bytes(value)
        elif isinstance(value, str) and not cfg.encode_strings:
            data = text_to_bytes(value)
        else:
            data = self._dispatcher.serialize(cfg.format, value)

        body = encode_bytes(data, cfg.legacy_padding)
        if not cfg.add_header:
            return body
        return build_header(cfg.format, cfg.type, VERSION, cfg.full_header, body) + body

    def decode(self, s: str) -> Any:
        """Decode a Safe64 string, honoring its header when it has one.

        With `add_header` off the input is read as a bare body and the
        configured format and type apply.
        """
        cfg = self._config
        opts = resolve_options(s, cfg.format, cfg.type, cfg.force_type,
                               detect_header=cfg.add_header)
        if opts.has_header:
            log.debug("header %r: version=%d format=%s type=%s",
                      opts.header, opts.version, opts.format.name, opts.type.name)
            if opts.version != VERSION:
                log.debug("header version %d differs from %d", opts.version, VERSION)

        data = decode_bytes(opts.body, cfg.strict)

        if opts.format is Format.NONE or opts.type is Type.STRING:
            return bytes_to_text(data)
        return self._dispatcher.deserialize(opts.format, opts.type, data)
