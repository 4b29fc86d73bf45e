"""Deprecation utilities for marking deprecated APIs.

Example:
    from obfuscation_markers.deprecation import deprecated

    @deprecated(version="1.1", replacement="with_fixed_total_length")
    def with_fixed_length(self, length):
        ...
"""

import warnings
from collections.abc import Callable
from functools import wraps
from typing import TypeVar

F = TypeVar("F", bound=Callable[..., object])


def deprecated(version: str, replacement: str | None = None) -> Callable[[F], F]:
    """
    Mark a function or method as deprecated.

    Emits a DeprecationWarning each time the decorated function is called and
    stores the message as __deprecated__ on the wrapper. The message names
    the version in which the deprecation happened and, if given, the
    replacement to use.

    Args:
        version: Version in which the function was deprecated (e.g., "1.1")
        replacement: Optional name of the replacement function/method

    Returns:
        Decorator function that wraps the original function
    """

    def decorator(func: F) -> F:
        message = f"{func.__qualname__} is deprecated since version {version}"
        if replacement:
            message += f", use {replacement} instead"

        @wraps(func)
        def wrapper(*args: object, **kwargs: object) -> object:
            warnings.warn(message, DeprecationWarning, stacklevel=2)
            return func(*args, **kwargs)

        # same attribute typing_extensions.deprecated sets
        wrapper.__deprecated__ = message  # type: ignore[attr-defined]
        return wrapper  # type: ignore[return-value]

    return decorator
