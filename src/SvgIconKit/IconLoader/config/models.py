"""
Pydantic v2 Configuration Model for the Icon Loader

Provides the immutable, typed configuration consumed by ``SvgIconLoader``:
- Where icon files live (``icon_path``)
- How marker elements are recognised (``icon_prefix``, ``target_tag``)
- What happens after a successful load (``icon_class``)
- Loader behaviour toggles (``auto_init``, ``cache_enabled``)

Field names are snake_case; the camelCase spellings used by ``config.json``
(``iconPath``, ``iconPrefix`` ...) are accepted as aliases. Unknown keys are
ignored so the external configuration resource can carry other sections.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from typing import Any, ClassVar, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Class appended to the nested <svg> element of every injected icon.
SVG_ELEMENT_CLASS = "icon-svg"

# Name of the external configuration resource and its loader section.
CONFIG_RESOURCE_NAME = "config.json"
CONFIG_SECTION_KEY = "svgIcon"


class IconLoaderConfig(BaseModel):
    """Configuration for marker discovery, icon resolution and injection."""

    model_config: ClassVar[ConfigDict] = ConfigDict(
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    icon_path: str = Field(
        default="assets/icons/",
        alias="iconPath",
        description="Base path/URL prefix under which icon files are found",
    )
    icon_prefix: str = Field(
        default="icon-",
        alias="iconPrefix",
        description="Marker-class prefix identifying an icon request",
    )
    icon_class: str = Field(
        default="svg-icon",
        alias="iconClass",
        description="Class applied to a successfully populated marker",
    )
    auto_init: bool = Field(
        default=True,
        alias="autoInit",
        description="Scan the document immediately on initialize()",
    )
    cache_enabled: bool = Field(
        default=True,
        alias="cacheEnabled",
        description="Cache fetched icon content for reuse",
    )
    target_tag: str = Field(
        default="i",
        alias="targetTag",
        description="Element tag eligible for icon loading",
    )

    @field_validator("icon_prefix", "target_tag")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("target_tag")
    @classmethod
    def normalize_tag(cls, v: str) -> str:
        return v.strip().lower()

    def icon_url(self, icon_name: str) -> str:
        """Return the resource path of ``icon_name`` under ``icon_path``."""
        return f"{self.icon_path}{icon_name}.svg"

    def to_external(self) -> Dict[str, Any]:
        """Dump using the camelCase keys of ``config.json``."""
        return self.model_dump(mode="json", by_alias=True)

    def config_hash(self) -> str:
        """
        Compute deterministic SHA256 hash of config for reproducibility.

        Returns:
            Hex-encoded SHA256 hash of normalized config JSON.
        """
        normalized = json.dumps(self.model_dump(mode="json"), sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(normalized.encode()).hexdigest()


_ALIAS_TO_FIELD: Dict[str, str] = {
    (info.alias or name): name for name, info in IconLoaderConfig.model_fields.items()
}


def normalize_overrides(overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Map camelCase or snake_case keys onto model field names.

    Keys that match neither spelling are dropped.
    """
    normalized: Dict[str, Any] = {}
    for key, value in overrides.items():
        if key in IconLoaderConfig.model_fields:
            normalized[key] = value
        elif key in _ALIAS_TO_FIELD:
            normalized[_ALIAS_TO_FIELD[key]] = value
    return normalized


def merge_config(
    base: IconLoaderConfig | None,
    overrides: IconLoaderConfig | Mapping[str, Any] | None,
) -> IconLoaderConfig:
    """
    Layer ``overrides`` over ``base`` field by field.

    Only keys present in ``overrides`` replace values; everything else keeps
    the value from ``base`` (or the defaults when ``base`` is None). Passing a
    full ``IconLoaderConfig`` as ``overrides`` replaces only the fields that
    were explicitly set on it.

    Raises:
        pydantic.ValidationError: If the merged values are invalid.
    """
    base = base or IconLoaderConfig()
    if overrides is None:
        return base

    if isinstance(overrides, IconLoaderConfig):
        updates = overrides.model_dump(include=overrides.model_fields_set)
    else:
        updates = normalize_overrides(overrides)

    if not updates:
        return base

    data = base.model_dump()
    data.update(updates)
    return IconLoaderConfig.model_validate(data)
