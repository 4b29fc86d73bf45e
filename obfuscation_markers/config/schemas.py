"""
Configuration schema using Pydantic for validation.
"""

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

_IMPORT_PATH = re.compile(r"^[A-Za-z_][\w.]*(:[A-Za-z_][\w.]*)?$")


def _check_import_path(path: str) -> str:
    if not _IMPORT_PATH.match(path):
        raise ValueError(
            f"Invalid import path '{path}'. Use 'package.module:Name' "
            "or 'package.module.Name'."
        )
    return path


class ObfuscationConfig(BaseModel):
    """
    Settings for building an ObjectFactory.

    Example YAML:
        obfuscation:
          resolver: registry
          fallback_to_reflection: true
          providers:
            myapp.obfuscation:TokenProvider: myapp.container:token_provider
            myapp.obfuscation:CardProvider: null
    """

    resolver: Literal["reflection", "registry"] = Field(
        default="reflection",
        description="How provider classes are instantiated",
    )
    fallback_to_reflection: bool = Field(
        default=True,
        description="Registry resolver: instantiate unregistered classes by reflection",
    )
    providers: dict[str, str | None] = Field(
        default_factory=dict,
        description="Provider class import path to supplier import path "
        "(null to call the class itself)",
    )

    @field_validator("providers")
    @classmethod
    def validate_providers(cls, v: dict[str, str | None]) -> dict[str, str | None]:
        """Validate that keys and suppliers are import paths."""
        for type_path, supplier_path in v.items():
            _check_import_path(type_path)
            if supplier_path is not None:
                _check_import_path(supplier_path)
        return v

    model_config = ConfigDict(extra="forbid")
