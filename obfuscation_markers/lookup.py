"""
Marker sources.

The factory accepts markers from three kinds of sources: an annotated program
element, a MarkerLookup function, or an explicit collection of markers. This
module reads markers from program elements and adapts elements and
collections to the MarkerLookup contract.

Supported program elements:
    - typing.Annotated aliases, e.g. Annotated[str, ObfuscateAll()]
    - classes, functions and methods decorated with a marker
    - property objects (markers of the getter)
    - dataclasses.Field and inspect.Parameter objects with an Annotated type
"""

from __future__ import annotations

import dataclasses
import inspect
from collections.abc import Callable, Iterable
from typing import Annotated, Any, TypeVar, get_origin, get_type_hints

from .exceptions import require_value
from .markers import MARKERS_ATTRIBUTE, Marker

M = TypeVar("M", bound=Marker)

MarkerLookup = Callable[[type[Marker]], Marker | None]


def _annotated_metadata(annotation: Any) -> tuple[Any, ...]:
    if get_origin(annotation) is Annotated:
        return tuple(annotation.__metadata__)
    return ()


def markers_of(element: Any) -> tuple[Any, ...]:
    """
    Return the markers attached to a program element, in declaration order.

    Non-marker metadata is returned as well; the factory ignores it.

    Args:
        element: Annotated alias, decorated object, property, dataclass field
            or signature parameter

    Returns:
        Tuple of attached metadata, empty for unsupported elements

    Raises:
        NullValueError: If element is None
    """
    require_value(element, "element")

    if get_origin(element) is Annotated:
        return _annotated_metadata(element)
    if isinstance(element, property):
        return markers_of(element.fget) if element.fget is not None else ()
    if isinstance(element, dataclasses.Field):
        return _annotated_metadata(element.type)
    if isinstance(element, inspect.Parameter):
        return _annotated_metadata(element.annotation)

    try:
        attributes = vars(element)
    except TypeError:
        return ()
    return tuple(attributes.get(MARKERS_ATTRIBUTE, ()))


def field_element(owner: type, name: str) -> Any:
    """
    Return the annotated type hint of a class attribute.

    String annotations (including those created by ``from __future__ import
    annotations``) are resolved.

    Raises:
        AttributeError: If owner has no type hint for name
    """
    hints = get_type_hints(owner, include_extras=True)
    try:
        return hints[name]
    except KeyError:
        raise AttributeError(
            f"{owner.__qualname__} has no annotated attribute {name!r}"
        ) from None


def _first_of_kind(markers: Iterable[Any], kind: type[M]) -> M | None:
    for marker in markers:
        if isinstance(marker, kind):
            return marker
    return None


def element_lookup(element: Any) -> MarkerLookup:
    """Return a MarkerLookup over the markers of a program element."""
    markers = markers_of(element)

    def lookup(kind: type[Marker]) -> Marker | None:
        return _first_of_kind(markers, kind)

    return lookup


def collection_lookup(markers: Iterable[Any]) -> MarkerLookup:
    """Return a MarkerLookup over an explicit collection of markers."""
    frozen = tuple(require_value(marker, "marker") for marker in markers)

    def lookup(kind: type[Marker]) -> Marker | None:
        return _first_of_kind(frozen, kind)

    return lookup


def lookup_marker(lookup: MarkerLookup, kind: type[M]) -> M | None:
    """
    Apply a lookup and check the kind of its result.

    Raises:
        TypeError: If the lookup returned something other than a marker of kind
    """
    marker = lookup(kind)
    if marker is not None and not isinstance(marker, kind):
        raise TypeError(
            f"Lookup for {kind.__name__} returned {type(marker).__name__}: {marker!r}"
        )
    return marker
