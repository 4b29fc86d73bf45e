"""
Instance resolution for provider classes referenced by markers.

construct() is the default policy: call the class without arguments.
RegistryObjectFactory lets a host register suppliers per class instead,
for example to hand out instances managed by a dependency injection
container.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from .exceptions import InstantiationError, require_value
from .factory import ObjectFactory

logger = logging.getLogger(__name__)

T = TypeVar("T")


def construct(type_: type[T]) -> T:
    """
    Create an instance of a class using its zero-argument constructor.

    Args:
        type_: Class to instantiate

    Returns:
        A new instance

    Raises:
        NullValueError: If type_ is None
        InstantiationError: If type_ is not a class, requires constructor
            arguments, is abstract, or its constructor raised. The original
            exception is chained as __cause__.
    """
    require_value(type_, "type_")
    if not isinstance(type_, type):
        raise InstantiationError(f"Cannot create an instance of non-class {type_!r}")

    try:
        instance = type_()
    except Exception as e:
        raise InstantiationError("Cannot create instance", type_=type_) from e

    logger.debug("created instance of %s", type_.__qualname__)
    return instance


class ReflectionObjectFactory(ObjectFactory):
    """ObjectFactory that creates every instance with construct()."""

    def instance(self, type_: type[T]) -> T:
        return construct(type_)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


USING_REFLECTION = ReflectionObjectFactory()


class RegistryObjectFactory(ObjectFactory):
    """
    ObjectFactory backed by registered suppliers.

    Example:
        factory = RegistryObjectFactory(fallback=ObjectFactory.using_reflection())

        @factory.registers(TokenObfuscatorProvider)
        def token_provider() -> TokenObfuscatorProvider:
            return TokenObfuscatorProvider(prefix_length=settings.token_prefix)

        factory.obfuscator(ObfuscateUsing(TokenObfuscatorProvider))
    """

    def __init__(self, *, fallback: ObjectFactory | None = None) -> None:
        """
        Initialize the factory.

        Args:
            fallback: Factory for classes without a registered supplier.
                If None, unregistered classes cannot be instantiated.
        """
        self._suppliers: dict[type, Callable[[], Any]] = {}
        self._fallback = fallback

    @property
    def fallback(self) -> ObjectFactory | None:
        return self._fallback

    def register(self, type_: type[T], supplier: Callable[[], T]) -> None:
        """
        Register the supplier for a class, replacing any earlier one.

        Args:
            type_: Class to supply instances for
            supplier: Zero-argument callable that returns an instance
        """
        require_value(type_, "type_")
        require_value(supplier, "supplier")
        self._suppliers[type_] = supplier
        logger.debug("registered supplier for %s", type_.__qualname__)

    def registers(self, type_: type[T]) -> Callable[[Callable[[], T]], Callable[[], T]]:
        """Decorator form of register()."""

        def decorator(supplier: Callable[[], T]) -> Callable[[], T]:
            self.register(type_, supplier)
            return supplier

        return decorator

    def is_registered(self, type_: type) -> bool:
        return type_ in self._suppliers

    def instance(self, type_: type[T]) -> T:
        require_value(type_, "type_")
        supplier = self._suppliers.get(type_)
        if supplier is None:
            if self._fallback is None:
                raise InstantiationError("No supplier registered", type_=type_)
            return self._fallback.instance(type_)

        try:
            return supplier()
        except Exception as e:
            raise InstantiationError("Supplier failed", type_=type_) from e
