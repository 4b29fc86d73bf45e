"""
Masking strategies.

Provides the Obfuscator base class and the built-in strategies that markers
map to. All strategies are immutable and compare by value, so two obfuscators
created from equal parameters are interchangeable.

Example:
    from obfuscation_markers.obfuscator import Obfuscator

    Obfuscator.all().obfuscate_text("secret")             # "******"
    Obfuscator.fixed_length(3, "x").obfuscate_text("abc")  # "xxx"

    obfuscator = Obfuscator.portion().keep_at_end(4).build()
    obfuscator.obfuscate_text("1234567890")               # "******7890"
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from .deprecation import deprecated
from .exceptions import require_value

DEFAULT_MASK_CHAR = "*"


def _check_mask_char(mask_char: str) -> None:
    if not isinstance(mask_char, str) or len(mask_char) != 1:
        raise ValueError(f"mask_char must be a single character, got {mask_char!r}")


def _check_not_negative(value: int, name: str) -> None:
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")


class Obfuscator(ABC):
    """Transforms text into an obfuscated form of that text."""

    @abstractmethod
    def obfuscate_text(self, text: str) -> str:
        """
        Obfuscate the given text.

        Args:
            text: Text to obfuscate

        Returns:
            Obfuscated text

        Raises:
            NullValueError: If text is None
        """

    @staticmethod
    def all(mask_char: str = DEFAULT_MASK_CHAR) -> Obfuscator:
        """Return an obfuscator that replaces every character."""
        return AllObfuscator(mask_char)

    @staticmethod
    def none() -> Obfuscator:
        """Return an obfuscator that leaves text untouched."""
        return NONE

    @staticmethod
    def fixed_length(length: int, mask_char: str = DEFAULT_MASK_CHAR) -> Obfuscator:
        """Return an obfuscator that replaces text with exactly length mask characters."""
        return FixedLengthObfuscator(length, mask_char)

    @staticmethod
    def fixed_value(value: str) -> Obfuscator:
        """Return an obfuscator that always returns value."""
        return FixedValueObfuscator(value)

    @staticmethod
    def portion() -> PortionBuilder:
        """Return a builder for obfuscators that keep part of the text."""
        return PortionBuilder()


@dataclass(frozen=True)
class AllObfuscator(Obfuscator):
    mask_char: str = DEFAULT_MASK_CHAR

    def __post_init__(self) -> None:
        _check_mask_char(self.mask_char)

    def obfuscate_text(self, text: str) -> str:
        require_value(text, "text")
        return self.mask_char * len(text)


@dataclass(frozen=True)
class NoneObfuscator(Obfuscator):
    def obfuscate_text(self, text: str) -> str:
        return require_value(text, "text")


NONE = NoneObfuscator()


@dataclass(frozen=True)
class FixedLengthObfuscator(Obfuscator):
    length: int
    mask_char: str = DEFAULT_MASK_CHAR

    def __post_init__(self) -> None:
        _check_not_negative(self.length, "length")
        _check_mask_char(self.mask_char)

    def obfuscate_text(self, text: str) -> str:
        require_value(text, "text")
        return self.mask_char * self.length


@dataclass(frozen=True)
class FixedValueObfuscator(Obfuscator):
    value: str

    def __post_init__(self) -> None:
        require_value(self.value)

    def obfuscate_text(self, text: str) -> str:
        require_value(text, "text")
        return self.value


@dataclass(frozen=True)
class PortionObfuscator(Obfuscator):
    """
    Keeps a prefix and/or suffix of the text and masks the rest.

    The at_least_* settings overrule the keep_* settings: at least that many
    characters, counted from the start or the end, are always masked.
    A fixed_total_length pads or truncates the masked part so the result
    always has that length. The deprecated fixed_length fixes the number of
    mask characters instead, and is ignored if fixed_total_length is set.
    """

    keep_at_start: int = 0
    keep_at_end: int = 0
    at_least_from_start: int = 0
    at_least_from_end: int = 0
    fixed_total_length: int | None = None
    fixed_length: int | None = None
    mask_char: str = DEFAULT_MASK_CHAR

    def __post_init__(self) -> None:
        _check_not_negative(self.keep_at_start, "keep_at_start")
        _check_not_negative(self.keep_at_end, "keep_at_end")
        _check_not_negative(self.at_least_from_start, "at_least_from_start")
        _check_not_negative(self.at_least_from_end, "at_least_from_end")
        _check_mask_char(self.mask_char)
        if self.fixed_total_length is not None:
            _check_not_negative(self.fixed_total_length, "fixed_total_length")
            if self.fixed_total_length < self.keep_at_start + self.keep_at_end:
                raise ValueError(
                    f"fixed_total_length ({self.fixed_total_length}) must be at least "
                    f"keep_at_start + keep_at_end ({self.keep_at_start + self.keep_at_end})"
                )
        if self.fixed_length is not None:
            _check_not_negative(self.fixed_length, "fixed_length")

    def obfuscate_text(self, text: str) -> str:
        require_value(text, "text")
        length = len(text)
        from_start = min(self.keep_at_start, max(0, length - self.at_least_from_end))
        keep_at_most = max(0, length - self.at_least_from_start)

        if self.fixed_total_length is not None:
            # prefix and suffix may overlap for short input
            from_end = min(self.keep_at_end, length, keep_at_most)
            mask_count = self.fixed_total_length - from_start - from_end
        else:
            from_end = max(0, min(self.keep_at_end, length - from_start, keep_at_most))
            if self.fixed_length is not None:
                mask_count = self.fixed_length
            else:
                mask_count = length - from_start - from_end

        return text[:from_start] + self.mask_char * mask_count + text[length - from_end :]


class PortionBuilder:
    """Fluent builder for PortionObfuscator."""

    def __init__(self) -> None:
        self._keep_at_start = 0
        self._keep_at_end = 0
        self._at_least_from_start = 0
        self._at_least_from_end = 0
        self._fixed_total_length: int | None = None
        self._fixed_length: int | None = None
        self._mask_char = DEFAULT_MASK_CHAR

    def keep_at_start(self, count: int) -> PortionBuilder:
        self._keep_at_start = count
        return self

    def keep_at_end(self, count: int) -> PortionBuilder:
        self._keep_at_end = count
        return self

    def at_least_from_start(self, count: int) -> PortionBuilder:
        self._at_least_from_start = count
        return self

    def at_least_from_end(self, count: int) -> PortionBuilder:
        self._at_least_from_end = count
        return self

    def with_fixed_total_length(self, length: int | None) -> PortionBuilder:
        """Set the total length of the result, or None to use the input length."""
        self._fixed_total_length = length
        return self

    @deprecated(version="1.1", replacement="with_fixed_total_length")
    def with_fixed_length(self, length: int | None) -> PortionBuilder:
        """Set the number of mask characters, or None to use the masked length."""
        self._fixed_length = length
        return self

    def with_mask_char(self, mask_char: str) -> PortionBuilder:
        self._mask_char = mask_char
        return self

    def build(self) -> Obfuscator:
        """
        Create the obfuscator.

        Raises:
            ValueError: If any count is negative, the mask character is not a
                single character, or the fixed total length is smaller than
                keep_at_start + keep_at_end
        """
        return PortionObfuscator(
            keep_at_start=self._keep_at_start,
            keep_at_end=self._keep_at_end,
            at_least_from_start=self._at_least_from_start,
            at_least_from_end=self._at_least_from_end,
            fixed_total_length=self._fixed_total_length,
            fixed_length=self._fixed_length,
            mask_char=self._mask_char,
        )
