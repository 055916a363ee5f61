"""Format and Type enumerations.

Both are closed sets with stable small-integer tags.  The tags are what
goes on the wire (one hex digit each in the header), so a value must
never be reassigned, only new ones appended.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Union

from ._errors import UnsupportedFormatError, UnsupportedTypeError


class Format(IntEnum):
    """Serialization format used for the payload."""

    NONE = 0            # no serialization; value is text or is stringified
    PLAIN_TEXT = 1      # JSON
    NATIVE_GRAPH = 2    # pickle; decode ignores Type
    COMPACT_BINARY = 3  # msgpack

    # Aliases naming the codec each tag maps to in this binding.
    JSON = 1
    PICKLE = 2
    MSGPACK = 3

    @classmethod
    def coerce(cls, value: Union["Format", int, str]) -> "Format":
        """Accept a member, its integer tag, or its (case-insensitive) name."""
        return _coerce(cls, value, UnsupportedFormatError)


class Type(IntEnum):
    """Shape of the decoded value."""

    STRING = 0  # do not deserialize; return text
    MAP = 1     # dicts and lists
    OBJECT = 2  # mappings become attribute-style records

    @classmethod
    def coerce(cls, value: Union["Type", int, str]) -> "Type":
        """Accept a member, its integer tag, or its (case-insensitive) name."""
        return _coerce(cls, value, UnsupportedTypeError)


def _coerce(enum_cls, value, err_cls):
    if isinstance(value, enum_cls):
        return value
    # bool is an int subclass; True must not silently become tag 1.
    if isinstance(value, bool):
        raise err_cls("{}: not a valid {}".format(value, enum_cls.__name__))
    if isinstance(value, int):
        try:
            return enum_cls(value)
        except ValueError:
            raise err_cls("{} tag {} is not defined".format(enum_cls.__name__, value))
    if isinstance(value, str):
        member = enum_cls.__members__.get(value.upper().replace("-", "_"))
        if member is None:
            raise err_cls("unknown {} name {!r}".format(enum_cls.__name__, value))
        return member
    raise err_cls("cannot use {} as a {}".format(type(value).__name__, enum_cls.__name__))
