"""
Marker scanning and single-match enforcement.

Both scanning functions convert every recognized marker and collect
(marker, result) pairs in discovery order; single_match() then reduces the
pairs to at most one result. Conversion errors propagate immediately.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from .exceptions import ConflictError, require_value
from .lookup import MarkerLookup, lookup_marker
from .markers import Marker

logger = logging.getLogger(__name__)

R = TypeVar("R")

Match = tuple[Marker, R]


def scan_lookup(
    lookup: MarkerLookup,
    kinds: tuple[type[Marker], ...],
    convert: Callable[[Any], R],
) -> list[Match[R]]:
    """
    Ask a lookup for each marker kind, in the order of kinds.

    Args:
        lookup: Function from marker kind to marker or None
        kinds: Marker kinds to check
        convert: Conversion from a found marker to its result

    Returns:
        (marker, result) pairs for every kind the lookup returned a marker for
    """
    require_value(lookup, "lookup")
    matches: list[Match[R]] = []
    for kind in kinds:
        marker = lookup_marker(lookup, kind)
        if marker is not None:
            matches.append((marker, convert(marker)))
    return matches


def scan_markers(
    markers: Iterable[Any],
    kinds: tuple[type[Marker], ...],
    convert: Callable[[Any], R],
) -> list[Match[R]]:
    """
    Walk an explicit marker collection in its own order.

    Objects that are not markers of one of the given kinds are skipped.

    Raises:
        NullValueError: If the collection or any of its members is None
    """
    require_value(markers, "markers")
    matches: list[Match[R]] = []
    for marker in markers:
        require_value(marker, "marker")
        if isinstance(marker, kinds):
            matches.append((marker, convert(marker)))
    return matches


def single_match(matches: list[Match[R]], capability: str) -> R | None:
    """
    Reduce scan results to a single result.

    Args:
        matches: (marker, result) pairs in discovery order
        capability: Name of the capability, used in the error message

    Returns:
        None if there are no matches, the only result if there is one

    Raises:
        ConflictError: If there is more than one match; carries all markers
    """
    if not matches:
        return None
    if len(matches) == 1:
        marker, result = matches[0]
        logger.debug("resolved %s %r from %r", capability, result, marker)
        return result

    markers = [marker for marker, _ in matches]
    logger.debug("conflicting %s markers: %r", capability, markers)
    raise ConflictError(capability, markers)
