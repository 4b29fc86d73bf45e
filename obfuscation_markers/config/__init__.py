"""
Configuration package.

This module provides:
- ObfuscationConfig, the Pydantic schema of the settings
- load_config / parse_config for reading settings from YAML or a mapping
- build_object_factory for turning settings into an ObjectFactory
"""

from .config import build_object_factory, import_object, load_config, parse_config
from .constants import CONFIG_SECTION, MAX_CONFIG_SIZE_BYTES
from .schemas import ObfuscationConfig

__all__ = [
    "ObfuscationConfig",
    "load_config",
    "parse_config",
    "build_object_factory",
    "import_object",
    # Constants
    "CONFIG_SECTION",
    "MAX_CONFIG_SIZE_BYTES",
]
