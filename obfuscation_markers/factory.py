"""
Object factory: turns markers into obfuscators and representation providers.

ObjectFactory is the public entry point. Subclasses only need to implement
instance(); every conversion method can be overridden to customize how a
marker kind is turned into an obfuscator, for example to cache results.

Example:
    from typing import Annotated

    factory = ObjectFactory.using_reflection()

    class Account:
        number: Annotated[str, ObfuscatePortion(keep_at_end=4)]

    obfuscator = factory.obfuscator_for(field_element(Account, "number"))
    obfuscator.obfuscate_text("NL91ABNA0417164300")  # "**************4300"

    factory.obfuscator(ObfuscateAll(), ObfuscateNone())  # raises ConflictError
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, TypeVar

from .exceptions import InstantiationError, require_value
from .lookup import MarkerLookup, element_lookup
from .markers import (
    MASKING_MARKER_KINDS,
    REPRESENTATION_MARKER_KINDS,
    MaskingMarker,
    ObfuscateAll,
    ObfuscateFixedLength,
    ObfuscateFixedValue,
    ObfuscateNone,
    ObfuscatePortion,
    ObfuscateUsing,
    RepresentedBy,
)
from .obfuscator import Obfuscator
from .providers import ObfuscatorProvider, RepresentationProvider
from .representation import lookup_builtin
from .scanner import scan_lookup, scan_markers, single_match

T = TypeVar("T")

OBFUSCATOR = "obfuscator"
REPRESENTATION = "representation"


class ObjectFactory(ABC):
    """
    Creates obfuscators and representation providers from markers.

    Resolution of a set of markers yields None when no relevant marker is
    present, the converted result when exactly one is present, and raises
    ConflictError when more than one is present.
    """

    @abstractmethod
    def instance(self, type_: type[T]) -> T:
        """
        Return an instance of a class.

        Args:
            type_: Class to return an instance of

        Returns:
            An instance of type_

        Raises:
            NullValueError: If type_ is None
            InstantiationError: If no instance could be returned
        """

    @staticmethod
    def using_reflection() -> ObjectFactory:
        """
        Return the shared factory that calls classes without arguments.

        Every class to instantiate needs a zero-argument constructor;
        otherwise instance() raises InstantiationError.
        """
        from .resolver import USING_REFLECTION

        return USING_REFLECTION

    # -- marker to obfuscator conversions --------------------------------

    def all_obfuscator(self, marker: ObfuscateAll) -> Obfuscator:
        return Obfuscator.all(marker.mask_char)

    def none_obfuscator(self, marker: ObfuscateNone) -> Obfuscator:
        require_value(marker, "marker")
        return Obfuscator.none()

    def fixed_length_obfuscator(self, marker: ObfuscateFixedLength) -> Obfuscator:
        return Obfuscator.fixed_length(marker.length, marker.mask_char)

    def fixed_value_obfuscator(self, marker: ObfuscateFixedValue) -> Obfuscator:
        return Obfuscator.fixed_value(marker.value)

    def portion_obfuscator(self, marker: ObfuscatePortion) -> Obfuscator:
        """
        Convert an ObfuscatePortion marker.

        fixed_total_length takes precedence; the deprecated fixed_length is
        only applied when fixed_total_length is None, and then emits a
        DeprecationWarning.
        """
        builder = (
            Obfuscator.portion()
            .keep_at_start(marker.keep_at_start)
            .keep_at_end(marker.keep_at_end)
            .at_least_from_start(marker.at_least_from_start)
            .at_least_from_end(marker.at_least_from_end)
            .with_mask_char(marker.mask_char)
        )
        if marker.fixed_total_length is not None:
            builder.with_fixed_total_length(marker.fixed_total_length)
        elif marker.fixed_length is not None:
            builder.with_fixed_length(marker.fixed_length)
        return builder.build()

    def using_obfuscator(self, marker: ObfuscateUsing) -> Obfuscator:
        return self.obfuscator_provider_for(marker).obfuscator()

    def marker_obfuscator(self, marker: MaskingMarker) -> Obfuscator:
        """
        Convert any masking marker by dispatching on its kind.

        Raises:
            NullValueError: If marker is None
            TypeError: If marker is not a masking marker
            InstantiationError: If marker is an ObfuscateUsing marker whose
                provider cannot be instantiated
        """
        require_value(marker, "marker")
        match marker:
            case ObfuscateAll():
                return self.all_obfuscator(marker)
            case ObfuscateNone():
                return self.none_obfuscator(marker)
            case ObfuscateFixedLength():
                return self.fixed_length_obfuscator(marker)
            case ObfuscateFixedValue():
                return self.fixed_value_obfuscator(marker)
            case ObfuscatePortion():
                return self.portion_obfuscator(marker)
            case ObfuscateUsing():
                return self.using_obfuscator(marker)
            case _:
                raise TypeError(f"Not a masking marker: {marker!r}")

    # -- obfuscator providers --------------------------------------------

    def obfuscator_provider(self, provider_type: type[ObfuscatorProvider]) -> ObfuscatorProvider:
        """Return an instance of an ObfuscatorProvider class, using instance()."""
        return self.instance(provider_type)

    def obfuscator_provider_for(self, marker: ObfuscateUsing) -> ObfuscatorProvider:
        """
        Return the provider referenced by an ObfuscateUsing marker.

        Raises:
            InstantiationError: If the provider class cannot be instantiated;
                the failure of obfuscator_provider() is chained as __cause__
        """
        require_value(marker, "marker")
        try:
            return self.obfuscator_provider(marker.provider)
        except Exception as e:
            raise InstantiationError(
                "Cannot create obfuscator provider", type_=marker.provider
            ) from e

    # -- obfuscator resolution -------------------------------------------

    def obfuscator(self, *markers: Any) -> Obfuscator | None:
        """
        Resolve the obfuscator described by explicit markers.

        Objects that are not masking markers are ignored.

        Returns:
            The single obfuscator, or None if no masking marker was given

        Raises:
            ConflictError: If more than one masking marker was given
            InstantiationError: If an ObfuscateUsing provider cannot be created
            NullValueError: If any marker is None
        """
        return self.obfuscator_from_markers(markers)

    def obfuscator_from_markers(self, markers: Iterable[Any]) -> Obfuscator | None:
        """Like obfuscator(), for a collection of markers."""
        matches = scan_markers(markers, MASKING_MARKER_KINDS, self.marker_obfuscator)
        return single_match(matches, OBFUSCATOR)

    def obfuscator_for(self, element: Any) -> Obfuscator | None:
        """
        Resolve the obfuscator described by the markers of a program element.

        Args:
            element: Annotated alias, decorated object, property, dataclass
                field or signature parameter (see lookup.markers_of)
        """
        return self.obfuscator_from_lookup(element_lookup(element))

    def obfuscator_from_lookup(self, lookup: MarkerLookup) -> Obfuscator | None:
        """
        Resolve the obfuscator described by a marker lookup function.

        The lookup is asked for each masking marker kind in turn: ObfuscateAll,
        ObfuscateNone, ObfuscateFixedLength, ObfuscateFixedValue,
        ObfuscatePortion, ObfuscateUsing.

        Args:
            lookup: Function from marker kind to the marker of that kind, or
                None if absent
        """
        matches = scan_lookup(lookup, MASKING_MARKER_KINDS, self.marker_obfuscator)
        return single_match(matches, OBFUSCATOR)

    # -- representation providers ----------------------------------------

    def representation_provider_of(
        self, provider_type: type[RepresentationProvider]
    ) -> RepresentationProvider:
        """
        Return an instance of a RepresentationProvider class.

        Built-in provider classes yield their shared instance; any other class
        is instantiated with instance().
        """
        builtin = lookup_builtin(provider_type)
        if builtin is not None:
            return builtin
        return self.instance(provider_type)

    def represented_by(self, marker: RepresentedBy) -> RepresentationProvider:
        """
        Return the provider referenced by a RepresentedBy marker.

        Raises:
            InstantiationError: If the provider class cannot be instantiated;
                the original failure is chained as __cause__
        """
        require_value(marker, "marker")
        try:
            return self.representation_provider_of(marker.provider)
        except Exception as e:
            raise InstantiationError(
                "Cannot create representation provider", type_=marker.provider
            ) from e

    def representation_provider(self, *markers: Any) -> RepresentationProvider | None:
        """
        Resolve the representation provider described by explicit markers.

        Returns:
            The single provider, or None if no RepresentedBy marker was given

        Raises:
            ConflictError: If more than one RepresentedBy marker was given
            InstantiationError: If the provider cannot be created
        """
        return self.representation_provider_from_markers(markers)

    def representation_provider_from_markers(
        self, markers: Iterable[Any]
    ) -> RepresentationProvider | None:
        """Like representation_provider(), for a collection of markers."""
        matches = scan_markers(markers, REPRESENTATION_MARKER_KINDS, self.represented_by)
        return single_match(matches, REPRESENTATION)

    def representation_provider_for(self, element: Any) -> RepresentationProvider | None:
        """Resolve the representation provider of a program element."""
        return self.representation_provider_from_lookup(element_lookup(element))

    def representation_provider_from_lookup(
        self, lookup: MarkerLookup
    ) -> RepresentationProvider | None:
        """Resolve the representation provider described by a marker lookup function."""
        matches = scan_lookup(lookup, REPRESENTATION_MARKER_KINDS, self.represented_by)
        return single_match(matches, REPRESENTATION)
