"""
Unified exception hierarchy for obfuscation markers.

Every failure raised while turning markers into obfuscators or representation
providers derives from ObfuscationError, so callers can treat a broken
declarative setup with a single except clause.
"""

from typing import Any


class ObfuscationError(Exception):
    """
    Base exception for all obfuscation marker errors.

    Example:
        try:
            obfuscator = factory.obfuscator_for(Account.number)
        except ObfuscationError as e:
            logger.error(f"Invalid obfuscation setup: {e}")
    """

    def __init__(self, message: str, **context: Any) -> None:
        """
        Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error message
            **context: Additional context information (stored in self.context)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class InstantiationError(ObfuscationError):
    """
    A referenced implementation type could not be created.

    Raised when a provider type has no zero-argument constructor, its
    constructor raised, or the object factory in use could not supply an
    instance for any other reason. The underlying exception is always
    available as ``__cause__``.
    """

    def __init__(self, message: str, type_: Any = None, **context: Any) -> None:
        if type_ is not None:
            context = {"type": _type_name(type_), **context}
        super().__init__(message, **context)
        self.type_ = type_


class ConflictError(ObfuscationError):
    """
    More than one marker for the same capability was found.

    Examples:
        - ObfuscateAll and ObfuscateNone on the same field
        - Two RepresentedBy markers in one explicit marker collection
    """

    def __init__(self, capability: str, markers: Any) -> None:
        self.capability = capability
        self.markers = tuple(markers)
        rendered = ", ".join(repr(marker) for marker in self.markers)
        super().__init__(f"Multiple {capability} markers found: [{rendered}]")


class NullValueError(ObfuscationError, TypeError):
    """A mandatory argument was None."""

    def __init__(self, name: str) -> None:
        super().__init__(f"{name} must not be None")
        self.name = name


class ConfigError(ObfuscationError):
    """
    Configuration-related errors.

    Examples:
        - Config file not found or too large
        - Invalid YAML syntax
        - Unknown resolver name
        - Provider import path that cannot be resolved
    """

    pass


def _type_name(type_: Any) -> str:
    module = getattr(type_, "__module__", None)
    qualname = getattr(type_, "__qualname__", None)
    if module and qualname:
        return f"{module}.{qualname}"
    return repr(type_)


def require_value(value: Any, name: str = "value") -> Any:
    """
    Return value unchanged, or raise NullValueError if it is None.

    Args:
        value: Value to check
        name: Argument name used in the error message

    Returns:
        The given value
    """
    if value is None:
        raise NullValueError(name)
    return value
