"""
Declarative obfuscation markers.

Markers describe how a value should be obfuscated, or how it should be turned
into text before being obfuscated. They are plain immutable records; the
ObjectFactory turns them into Obfuscator and RepresentationProvider instances.

Markers can be attached to program elements in two ways:

    from typing import Annotated

    class Account:
        number: Annotated[str, ObfuscatePortion(keep_at_end=4)]

    @ObfuscateAll()
    def password(self) -> str:
        ...

or passed to the factory explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeVar, final

from .obfuscator import DEFAULT_MASK_CHAR
from .providers import ObfuscatorProvider, RepresentationProvider

MARKERS_ATTRIBUTE = "__obfuscation_markers__"

T = TypeVar("T")


@dataclass(frozen=True)
class Marker:
    """Base class for all markers. Calling a marker attaches it to its argument."""

    def __call__(self, target: T) -> T:
        attach(target, self)
        return target


def attach(target: Any, marker: Marker) -> None:
    """
    Attach a marker to a class, function or method.

    Decorators are applied bottom-up, so the marker is prepended to keep the
    markers in source order. Attached markers are not inherited by subclasses.
    """
    existing = vars(target).get(MARKERS_ATTRIBUTE, ())
    setattr(target, MARKERS_ATTRIBUTE, (marker, *existing))


def _check_provider(marker: Marker, provider: Any, base: type) -> None:
    if not isinstance(provider, type):
        raise TypeError(
            f"{type(marker).__name__} requires a class, got {provider!r}"
        )
    if not issubclass(provider, base):
        raise TypeError(
            f"{type(marker).__name__} requires a subclass of {base.__name__}, "
            f"got {provider.__qualname__}"
        )


@final
@dataclass(frozen=True)
class ObfuscateAll(Marker):
    """Obfuscate every character."""

    mask_char: str = DEFAULT_MASK_CHAR


@final
@dataclass(frozen=True)
class ObfuscateNone(Marker):
    """Do not obfuscate at all."""


@final
@dataclass(frozen=True)
class ObfuscateFixedLength(Marker):
    """Replace the value with a fixed number of mask characters."""

    length: int
    mask_char: str = DEFAULT_MASK_CHAR


@final
@dataclass(frozen=True)
class ObfuscateFixedValue(Marker):
    """Replace the value with a fixed text."""

    value: str


@final
@dataclass(frozen=True)
class ObfuscatePortion(Marker):
    """
    Keep a portion of the value and obfuscate the rest.

    Attributes:
        keep_at_start: Number of characters to keep at the start
        keep_at_end: Number of characters to keep at the end
        at_least_from_start: Minimum number of characters from the start to
            obfuscate; overrules keep_at_start and keep_at_end
        at_least_from_end: Minimum number of characters from the end to
            obfuscate; overrules keep_at_start and keep_at_end
        fixed_total_length: Total length of the obfuscated value, or None to
            use the actual length. Must be at least keep_at_start + keep_at_end.
        fixed_length: Deprecated. Fixed number of mask characters, or None to
            use the actual length. Ignored if fixed_total_length is set.
        mask_char: Character to obfuscate with
    """

    keep_at_start: int = 0
    keep_at_end: int = 0
    at_least_from_start: int = 0
    at_least_from_end: int = 0
    fixed_total_length: int | None = None
    fixed_length: int | None = None
    mask_char: str = DEFAULT_MASK_CHAR


@final
@dataclass(frozen=True)
class ObfuscateUsing(Marker):
    """Obfuscate using the obfuscator of an ObfuscatorProvider class."""

    provider: type[ObfuscatorProvider]

    def __post_init__(self) -> None:
        _check_provider(self, self.provider, ObfuscatorProvider)


@final
@dataclass(frozen=True)
class RepresentedBy(Marker):
    """Turn values into text using a RepresentationProvider class."""

    provider: type[RepresentationProvider]

    def __post_init__(self) -> None:
        _check_provider(self, self.provider, RepresentationProvider)


MaskingMarker = (
    ObfuscateAll
    | ObfuscateNone
    | ObfuscateFixedLength
    | ObfuscateFixedValue
    | ObfuscatePortion
    | ObfuscateUsing
)

# Order matters: it is the discovery order when scanning a lookup
MASKING_MARKER_KINDS: tuple[type[Marker], ...] = (
    ObfuscateAll,
    ObfuscateNone,
    ObfuscateFixedLength,
    ObfuscateFixedValue,
    ObfuscatePortion,
    ObfuscateUsing,
)

REPRESENTATION_MARKER_KINDS: tuple[type[Marker], ...] = (RepresentedBy,)
