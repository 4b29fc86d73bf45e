"""
Declarative obfuscation markers.

Markers describe how values should be obfuscated; an ObjectFactory turns them
into reusable Obfuscator and RepresentationProvider instances.

Example:
    from typing import Annotated

    from obfuscation_markers import ObfuscatePortion, ObjectFactory, field_element

    class Account:
        number: Annotated[str, ObfuscatePortion(keep_at_end=4)]

    factory = ObjectFactory.using_reflection()
    obfuscator = factory.obfuscator_for(field_element(Account, "number"))
"""

from importlib.metadata import PackageNotFoundError, version

from .config import ObfuscationConfig, build_object_factory, load_config
from .deprecation import deprecated
from .exceptions import (
    ConfigError,
    ConflictError,
    InstantiationError,
    NullValueError,
    ObfuscationError,
)
from .factory import ObjectFactory
from .lookup import (
    MarkerLookup,
    collection_lookup,
    element_lookup,
    field_element,
    markers_of,
)
from .markers import (
    MASKING_MARKER_KINDS,
    REPRESENTATION_MARKER_KINDS,
    Marker,
    ObfuscateAll,
    ObfuscateFixedLength,
    ObfuscateFixedValue,
    ObfuscateNone,
    ObfuscatePortion,
    ObfuscateUsing,
    RepresentedBy,
)
from .obfuscator import Obfuscator, PortionBuilder
from .providers import (
    LazyRepresentationProvider,
    ObfuscatorProvider,
    RepresentationProvider,
)
from .representation import (
    BooleanArrayToString,
    ByteArrayToString,
    CharArrayToString,
    CharSequenceIdentity,
    DoubleArrayToString,
    FloatArrayToString,
    IntArrayToString,
    LongArrayToString,
    ObjectArrayDeepToString,
    ObjectArrayToString,
    ShortArrayToString,
    ToString,
    default_instance,
    default_instance_for,
    lookup_builtin,
)
from .resolver import ReflectionObjectFactory, RegistryObjectFactory, construct

# Version is read from package metadata (pyproject.toml)
try:
    __version__ = version("obfuscation-markers")
except PackageNotFoundError:
    # Package not installed, use fallback (development mode)
    __version__ = "0.1.0-dev"

# Explicit public API
__all__ = [
    # Version
    "__version__",
    # Markers
    "Marker",
    "ObfuscateAll",
    "ObfuscateNone",
    "ObfuscateFixedLength",
    "ObfuscateFixedValue",
    "ObfuscatePortion",
    "ObfuscateUsing",
    "RepresentedBy",
    "MASKING_MARKER_KINDS",
    "REPRESENTATION_MARKER_KINDS",
    # Strategies
    "Obfuscator",
    "PortionBuilder",
    "ObfuscatorProvider",
    "RepresentationProvider",
    "LazyRepresentationProvider",
    # Built-in representation providers
    "ToString",
    "BooleanArrayToString",
    "CharArrayToString",
    "ByteArrayToString",
    "ShortArrayToString",
    "IntArrayToString",
    "LongArrayToString",
    "FloatArrayToString",
    "DoubleArrayToString",
    "ObjectArrayToString",
    "ObjectArrayDeepToString",
    "CharSequenceIdentity",
    "lookup_builtin",
    "default_instance",
    "default_instance_for",
    # Factories
    "ObjectFactory",
    "ReflectionObjectFactory",
    "RegistryObjectFactory",
    "construct",
    # Marker sources
    "MarkerLookup",
    "markers_of",
    "field_element",
    "element_lookup",
    "collection_lookup",
    # Configuration
    "ObfuscationConfig",
    "load_config",
    "build_object_factory",
    # Deprecation
    "deprecated",
    # Exceptions
    "ObfuscationError",
    "InstantiationError",
    "ConflictError",
    "NullValueError",
    "ConfigError",
]
