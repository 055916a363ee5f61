"""Format dispatch: route a Format tag to a serializer, a Type to a shape."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from ._enums import Format, Type
from ._errors import SerializationError, UnsupportedFormatError, UnsupportedTypeError
from ._serializers import JsonSerializer, MsgpackSerializer, PickleSerializer, Serializer

log = logging.getLogger(__name__)

# Decoded text may come from binary payloads, so undecodable bytes are
# carried as lone surrogates and written back unchanged on encode.
TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "surrogateescape"


def default_serializers() -> Dict[Format, Serializer]:
    return {
        Format.PLAIN_TEXT: JsonSerializer(),
        Format.NATIVE_GRAPH: PickleSerializer(),
        Format.COMPACT_BINARY: MsgpackSerializer(),
    }


def text_to_bytes(text: str) -> bytes:
    return text.encode(TEXT_ENCODING, TEXT_ERRORS)


def bytes_to_text(data: bytes) -> str:
    return data.decode(TEXT_ENCODING, TEXT_ERRORS)


class FormatDispatcher:
    """Maps Format tags to serializers.

    Format.NONE never reaches a serializer: values are stringified on the
    way in and returned as text on the way out.  `serializers` replaces
    the stock registry entirely; formats missing from it are unsupported.
    """

    def __init__(self, serializers: Optional[Mapping[Format, Serializer]] = None) -> None:
        if serializers is None:
            serializers = default_serializers()
        self._serializers = {Format.coerce(f): s for f, s in serializers.items()}

    def serializer_for(self, format: Format) -> Serializer:
        format = Format.coerce(format)
        try:
            return self._serializers[format]
        except KeyError:
            raise UnsupportedFormatError(
                "no serializer registered for format {}".format(format.name))

    def serialize(self, format: Format, value: Any) -> bytes:
        format = Format.coerce(format)
        if format is Format.NONE:
            # Lossy for anything but text; str() is all NONE promises.
            return text_to_bytes(str(value))

        codec = self.serializer_for(format)
        try:
            return codec.serialize(value)
        except SerializationError:
            log.debug("%s serializer rejected %s value", codec.name,
                      type(value).__name__)
            raise

    def deserialize(self, format: Format, type: Type, data: bytes) -> Any:
        format = Format.coerce(format)
        type = Type.coerce(type)
        if format is Format.NONE:
            return bytes_to_text(data)

        codec = self.serializer_for(format)
        if codec.shapes is not None and type not in codec.shapes:
            raise UnsupportedTypeError(
                "{} cannot decode to type {}".format(codec.name, type.name))
        try:
            return codec.deserialize(data, type)
        except SerializationError:
            log.debug("%s deserializer rejected %d bytes", codec.name, len(data))
            raise
