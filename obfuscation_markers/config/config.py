"""
Loading of obfuscation settings from YAML and building of object factories.
"""

import importlib
import logging
import os
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from pydantic import ValidationError

from ..exceptions import ConfigError
from ..factory import ObjectFactory
from ..resolver import RegistryObjectFactory
from .constants import CONFIG_SECTION, MAX_CONFIG_SIZE_BYTES
from .schemas import ObfuscationConfig

logger = logging.getLogger(__name__)


def _check_file_size(path: Path) -> None:
    """Check file size limit to prevent DoS attacks."""
    file_size = os.path.getsize(path)
    if file_size > MAX_CONFIG_SIZE_BYTES:
        raise ConfigError(
            f"Configuration file is {file_size} bytes, exceeding maximum size "
            f"of {MAX_CONFIG_SIZE_BYTES} bytes",
            path=path,
        )


def parse_config(data: Any) -> ObfuscationConfig:
    """
    Validate already loaded configuration data.

    Args:
        data: Mapping with the settings, optionally nested under an
            'obfuscation' key; None means all defaults

    Raises:
        ConfigError: If the data does not match the schema
    """
    if data is None:
        return ObfuscationConfig()
    if not isinstance(data, dict):
        raise ConfigError(
            f"Configuration must be a mapping, got {type(data).__name__}"
        )
    if CONFIG_SECTION in data:
        data = data[CONFIG_SECTION] or {}

    try:
        return ObfuscationConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid obfuscation configuration: {e}") from e


def load_config(path: str | Path) -> ObfuscationConfig:
    """
    Load obfuscation settings from a YAML file.

    Raises:
        ConfigError: If the file is missing, too large, not valid YAML or
            does not match the schema
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigError("Configuration file not found", path=path)
    _check_file_size(path)

    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}", path=path) from e

    config = parse_config(data)
    logger.debug("loaded obfuscation config from %s: %r", path, config)
    return config


def import_object(path: str) -> Any:
    """
    Import an object by 'package.module:Name' or 'package.module.Name' path.

    Raises:
        ConfigError: If the module cannot be imported or has no such attribute
    """
    if ":" in path:
        module_name, _, attr_path = path.partition(":")
    else:
        module_name, _, attr_path = path.rpartition(".")
    if not module_name or not attr_path:
        raise ConfigError("Invalid import path", path=path)

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(f"Cannot import module '{module_name}'", path=path) from e

    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise ConfigError(f"Cannot resolve '{attr}'", path=path) from e
    return obj


def build_object_factory(config: ObfuscationConfig | None = None) -> ObjectFactory:
    """
    Build the ObjectFactory described by the settings.

    Args:
        config: Settings; None means the defaults (reflection)

    Raises:
        ConfigError: If a provider or supplier path cannot be resolved
    """
    config = config or ObfuscationConfig()
    if config.resolver == "reflection":
        if config.providers:
            logger.warning(
                "ignoring %d provider registrations for the reflection resolver",
                len(config.providers),
            )
        return ObjectFactory.using_reflection()

    fallback = ObjectFactory.using_reflection() if config.fallback_to_reflection else None
    factory = RegistryObjectFactory(fallback=fallback)
    for type_path, supplier_path in config.providers.items():
        type_ = import_object(type_path)
        if not isinstance(type_, type):
            raise ConfigError("Provider path does not name a class", path=type_path)
        supplier = import_object(supplier_path) if supplier_path is not None else type_
        if not callable(supplier):
            raise ConfigError("Supplier is not callable", path=supplier_path)
        factory.register(type_, supplier)
    return factory
