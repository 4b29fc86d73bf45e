"""
Provider contracts referenced by ObfuscateUsing and RepresentedBy markers.

Implementations must be immutable after construction, as the instances are
usually cached and shared between threads.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from functools import partial
from typing import Any

from .exceptions import require_value
from .obfuscator import Obfuscator


class ObfuscatorProvider(ABC):
    """
    Provides an Obfuscator for ObfuscateUsing markers.

    Example:
        class CardNumberObfuscator(ObfuscatorProvider):
            def obfuscator(self) -> Obfuscator:
                return Obfuscator.portion().keep_at_end(4).build()

        @dataclass
        class Payment:
            card: Annotated[str, ObfuscateUsing(CardNumberObfuscator)]
    """

    @abstractmethod
    def obfuscator(self) -> Obfuscator:
        """Return the obfuscator to use."""


class RepresentationProvider(ABC):
    """
    Turns arbitrary values into text before they are obfuscated.

    Subclasses implement represent(); the lazy variant defaults to deferring
    that call until the returned thunk is invoked.
    """

    @abstractmethod
    def represent(self, value: Any) -> str:
        """
        Return the text representation of a value.

        Raises:
            NullValueError: If value is None
        """

    def represent_lazily(self, value: Any) -> Callable[[], str]:
        """
        Return a zero-argument callable that computes the text representation.

        Raises:
            NullValueError: If value is None. Raised immediately, not when the
                returned callable is invoked.
        """
        require_value(value)
        return partial(self.represent, value)

    def representation_function(self) -> Callable[[Any], str]:
        """Return a function that eagerly represents its argument."""
        return self.represent


class LazyRepresentationProvider(RepresentationProvider):
    """RepresentationProvider whose natural form is the deferred one."""

    @abstractmethod
    def represent_lazily(self, value: Any) -> Callable[[], str]:
        """Return a zero-argument callable that computes the text representation."""

    def represent(self, value: Any) -> str:
        return self.represent_lazily(value)()
