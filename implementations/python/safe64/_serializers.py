"""Payload serializers: the codecs behind each Format tag.

The dispatcher only depends on the `Serializer` protocol below, so any
object with the same shape can be registered in place of the stock
codecs:

    JSON     (Format.PLAIN_TEXT)      json, compact separators, UTF-8
    pickle   (Format.NATIVE_GRAPH)    Python-only, decode ignores Type
    msgpack  (Format.COMPACT_BINARY)  binary, JSON-compatible data model

Type.OBJECT turns every decoded mapping into a `types.SimpleNamespace`.
On the way in, objects that are not natively supported are written as
the mapping of their attributes, so OBJECT-shaped data round-trips.

Never unpickle data from an untrusted source: pickle can execute
arbitrary code while loading.
"""

from __future__ import annotations

import json
import pickle
from types import SimpleNamespace
from typing import Any, Dict, FrozenSet, Optional, Protocol

import msgpack
from msgpack.exceptions import UnpackException

from ._enums import Type
from ._errors import SerializationError


class Serializer(Protocol):
    """Capability interface for a payload codec.

    `shapes` lists the Types `deserialize()` can honor, or is None when
    the codec has a single shape of its own and ignores Type.
    Implementations raise SerializationError on any failure.
    """

    name: str
    shapes: Optional[FrozenSet[Type]]

    def serialize(self, value: Any) -> bytes:
        ...

    def deserialize(self, data: bytes, shape: Type) -> Any:
        ...


STRUCTURED_SHAPES: FrozenSet[Type] = frozenset({Type.MAP, Type.OBJECT})


def _plain(obj: Any) -> Dict[str, Any]:
    """`default=` hook: write attribute-style records as mappings."""
    if hasattr(obj, "__dict__"):
        return vars(obj)
    raise TypeError("{} is not serializable".format(type(obj).__name__))


def _record(d: Dict[Any, Any]) -> SimpleNamespace:
    return SimpleNamespace(**d)


class JsonSerializer:
    name = "json"
    shapes = STRUCTURED_SHAPES

    def serialize(self, value: Any) -> bytes:
        try:
            text = json.dumps(value, separators=(",", ":"), ensure_ascii=False,
                              allow_nan=False, default=_plain)
            return text.encode("utf-8")
        except (TypeError, ValueError, RecursionError) as e:
            raise SerializationError("json encode failed: {}".format(e)) from e

    def deserialize(self, data: bytes, shape: Type) -> Any:
        hook = _record if shape is Type.OBJECT else None
        try:
            return json.loads(data.decode("utf-8"), object_hook=hook)
        except (TypeError, ValueError, RecursionError) as e:
            # UnicodeDecodeError and JSONDecodeError are both ValueErrors.
            raise SerializationError("json decode failed: {}".format(e)) from e


class PickleSerializer:
    name = "pickle"
    shapes = None

    def __init__(self, protocol: int = pickle.HIGHEST_PROTOCOL) -> None:
        self.protocol = protocol

    def serialize(self, value: Any) -> bytes:
        try:
            return pickle.dumps(value, protocol=self.protocol)
        except (pickle.PicklingError, TypeError, AttributeError,
                RecursionError) as e:
            raise SerializationError("pickle encode failed: {}".format(e)) from e

    def deserialize(self, data: bytes, shape: Type) -> Any:
        try:
            return pickle.loads(data)  # noqa: S301
        except (pickle.UnpicklingError, EOFError, ValueError, TypeError,
                AttributeError, ImportError, IndexError, KeyError) as e:
            raise SerializationError("pickle decode failed: {}".format(e)) from e


class MsgpackSerializer:
    name = "msgpack"
    shapes = STRUCTURED_SHAPES

    def serialize(self, value: Any) -> bytes:
        try:
            return msgpack.packb(value, default=_plain, use_bin_type=True)
        except (TypeError, ValueError, OverflowError) as e:
            raise SerializationError("msgpack encode failed: {}".format(e)) from e

    def deserialize(self, data: bytes, shape: Type) -> Any:
        hook = _record if shape is Type.OBJECT else None
        try:
            return msgpack.unpackb(data, raw=False, strict_map_key=False,
                                   object_hook=hook)
        except (TypeError, ValueError, UnpackException) as e:
            # Truncated input, trailing bytes and bad type bytes all land here.
            raise SerializationError("msgpack decode failed: {}".format(e)) from e
