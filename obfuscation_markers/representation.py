"""
Built-in representation providers.

Python has no primitive arrays; the typed sequences of the standard library
play that role instead. array.array and memoryview objects are classified by
their struct format code, and bytes/bytearray count as byte arrays:

    ?            boolean
    u w c        char
    b B          byte (also bytes and bytearray)
    h H          short
    i I          int
    l L q Q n N  long
    f e          float
    d            double

Lists and tuples are object arrays; str and UserString are character
sequences.

Every built-in provider is a process-wide singleton, created at import time.
lookup_builtin() returns those singletons for their classes, and
default_instance() picks the provider that suits a value type.
"""

from __future__ import annotations

import array
from abc import abstractmethod
from collections import UserString
from collections.abc import Callable
from functools import partial
from typing import Any

from .exceptions import require_value
from .providers import RepresentationProvider

_BYTE_ORDER_PREFIXES = "@=<>!"


def array_format(value: Any) -> str | None:
    """
    Return the struct format code of an array.array or memoryview value.

    Returns:
        The format code without byte order prefix, or None for other values
    """
    if isinstance(value, array.array):
        return value.typecode
    if isinstance(value, memoryview):
        return normalize_format(value.format)
    return None


def normalize_format(fmt: str) -> str:
    return fmt.lstrip(_BYTE_ORDER_PREFIXES)


def _join(elements: Any) -> str:
    return "[" + ", ".join(str(element) for element in elements) + "]"


class TypeSpecific(RepresentationProvider):
    """
    Representation provider for one specific kind of value.

    Values of that kind are converted with convert(); any other value is
    represented by its own str().
    """

    @abstractmethod
    def matches(self, value: Any) -> bool:
        """Check if value is of the kind this provider handles."""

    @abstractmethod
    def convert(self, value: Any) -> str:
        """Convert a matching value."""

    def represent(self, value: Any) -> str:
        require_value(value)
        return self.convert(value) if self.matches(value) else str(value)

    def represent_lazily(self, value: Any) -> Callable[[], str]:
        require_value(value)
        if self.matches(value):
            return partial(self.convert, value)
        return partial(str, value)

    def __repr__(self) -> str:
        return f"{__name__}.{type(self).__name__}"


class ToString(RepresentationProvider):
    """Represents every value by its str()."""

    def represent(self, value: Any) -> str:
        require_value(value)
        return str(value)

    def represent_lazily(self, value: Any) -> Callable[[], str]:
        require_value(value)
        return partial(str, value)

    def __repr__(self) -> str:
        return f"{__name__}.{type(self).__name__}"


class PrimitiveArrayToString(TypeSpecific):
    """Base for providers of typed arrays, selected by format code."""

    formats: frozenset[str] = frozenset()

    def matches(self, value: Any) -> bool:
        return array_format(value) in self.formats

    def convert(self, value: Any) -> str:
        return _join(value.tolist())


class BooleanArrayToString(PrimitiveArrayToString):
    formats = frozenset("?")


class CharArrayToString(PrimitiveArrayToString):
    formats = frozenset("uwc")

    def convert(self, value: Any) -> str:
        # memoryview with format 'c' yields single bytes
        return _join(
            element.decode("latin-1") if isinstance(element, bytes) else element
            for element in value.tolist()
        )


class ByteArrayToString(PrimitiveArrayToString):
    formats = frozenset("bB")

    def matches(self, value: Any) -> bool:
        return isinstance(value, (bytes, bytearray)) or super().matches(value)

    def convert(self, value: Any) -> str:
        if isinstance(value, (bytes, bytearray)):
            return _join(value)
        return super().convert(value)


class ShortArrayToString(PrimitiveArrayToString):
    formats = frozenset("hH")


class IntArrayToString(PrimitiveArrayToString):
    formats = frozenset("iI")


class LongArrayToString(PrimitiveArrayToString):
    formats = frozenset("lLqQnN")


class FloatArrayToString(PrimitiveArrayToString):
    formats = frozenset("fe")


class DoubleArrayToString(PrimitiveArrayToString):
    formats = frozenset("d")


class ObjectArrayToString(TypeSpecific):
    """Represents lists and tuples; nested containers use their own str()."""

    def matches(self, value: Any) -> bool:
        return isinstance(value, (list, tuple))

    def convert(self, value: Any) -> str:
        return _join(value)


class ObjectArrayDeepToString(TypeSpecific):
    """Represents lists and tuples, expanding nested containers and typed arrays."""

    def matches(self, value: Any) -> bool:
        return isinstance(value, (list, tuple))

    def convert(self, value: Any) -> str:
        return _deep_text(value, set())


class CharSequenceIdentity(TypeSpecific):
    """Returns character sequences as they are."""

    def matches(self, value: Any) -> bool:
        return isinstance(value, (str, UserString))

    def convert(self, value: Any) -> str:
        return value if isinstance(value, str) else str(value)


TO_STRING = ToString()
BOOLEAN_ARRAY_TO_STRING = BooleanArrayToString()
CHAR_ARRAY_TO_STRING = CharArrayToString()
BYTE_ARRAY_TO_STRING = ByteArrayToString()
SHORT_ARRAY_TO_STRING = ShortArrayToString()
INT_ARRAY_TO_STRING = IntArrayToString()
LONG_ARRAY_TO_STRING = LongArrayToString()
FLOAT_ARRAY_TO_STRING = FloatArrayToString()
DOUBLE_ARRAY_TO_STRING = DoubleArrayToString()
OBJECT_ARRAY_TO_STRING = ObjectArrayToString()
OBJECT_ARRAY_DEEP_TO_STRING = ObjectArrayDeepToString()
CHAR_SEQUENCE_IDENTITY = CharSequenceIdentity()

_PRIMITIVE_ARRAY_PROVIDERS: tuple[PrimitiveArrayToString, ...] = (
    BOOLEAN_ARRAY_TO_STRING,
    CHAR_ARRAY_TO_STRING,
    BYTE_ARRAY_TO_STRING,
    SHORT_ARRAY_TO_STRING,
    INT_ARRAY_TO_STRING,
    LONG_ARRAY_TO_STRING,
    FLOAT_ARRAY_TO_STRING,
    DOUBLE_ARRAY_TO_STRING,
)

_BY_FORMAT: dict[str, PrimitiveArrayToString] = {
    fmt: provider for provider in _PRIMITIVE_ARRAY_PROVIDERS for fmt in provider.formats
}

_BUILTINS: dict[type, RepresentationProvider] = {
    type(provider): provider
    for provider in (
        TO_STRING,
        *_PRIMITIVE_ARRAY_PROVIDERS,
        OBJECT_ARRAY_TO_STRING,
        OBJECT_ARRAY_DEEP_TO_STRING,
        CHAR_SEQUENCE_IDENTITY,
    )
}


def _deep_text(value: Any, ancestors: set[int]) -> str:
    if id(value) in ancestors:
        return "[...]"
    ancestors.add(id(value))
    try:
        return "[" + ", ".join(_deep_element(element, ancestors) for element in value) + "]"
    finally:
        ancestors.discard(id(value))


def _deep_element(element: Any, ancestors: set[int]) -> str:
    if isinstance(element, (list, tuple)):
        return _deep_text(element, ancestors)
    for provider in _PRIMITIVE_ARRAY_PROVIDERS:
        if provider.matches(element):
            return provider.convert(element)
    return str(element)


def lookup_builtin(provider_type: type) -> RepresentationProvider | None:
    """
    Return the built-in singleton for a provider class.

    Only the exact built-in classes match; subclasses return None.

    Args:
        provider_type: Representation provider class

    Returns:
        The shared instance, or None if provider_type is not a built-in
    """
    return _BUILTINS.get(require_value(provider_type, "provider_type"))


def default_instance(value_type: type, fmt: str | None = None) -> RepresentationProvider:
    """
    Return the built-in provider that suits values of a type.

    Args:
        value_type: Type of the values to represent
        fmt: Struct format code, for array.array and memoryview types

    Returns:
        The matching array provider for typed arrays with a known format code,
        the byte array provider for bytes and bytearray, the shallow object
        array provider for lists and tuples, the identity provider for str and
        UserString, and the str() provider for anything else
    """
    require_value(value_type, "value_type")
    if not isinstance(value_type, type):
        raise TypeError(f"value_type must be a type, got {value_type!r}")

    if issubclass(value_type, (array.array, memoryview)):
        if fmt is None:
            return TO_STRING
        return _BY_FORMAT.get(normalize_format(fmt), TO_STRING)
    if issubclass(value_type, (bytes, bytearray)):
        return BYTE_ARRAY_TO_STRING
    if issubclass(value_type, (list, tuple)):
        return OBJECT_ARRAY_TO_STRING
    if issubclass(value_type, (str, UserString)):
        return CHAR_SEQUENCE_IDENTITY
    return TO_STRING


def default_instance_for(value: Any) -> RepresentationProvider:
    """Return the built-in provider that suits a value, using its format code if any."""
    require_value(value)
    return default_instance(type(value), array_format(value))
