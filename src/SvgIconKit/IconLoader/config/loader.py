# === NAVMAP v1 ===
# {
#   "module": "SvgIconKit.IconLoader.config.loader",
#   "purpose": "Configuration Loading with File/Env/CLI Precedence.",
#   "sections": [
#     {
#       "id": "read-file",
#       "name": "_read_file",
#       "anchor": "function-read-file",
#       "kind": "function"
#     },
#     {
#       "id": "extract-section",
#       "name": "extract_section",
#       "anchor": "function-extract-section",
#       "kind": "function"
#     },
#     {
#       "id": "coerce-env-value",
#       "name": "_coerce_env_value",
#       "anchor": "function-coerce-env-value",
#       "kind": "function"
#     },
#     {
#       "id": "env-overrides",
#       "name": "_env_overrides",
#       "anchor": "function-env-overrides",
#       "kind": "function"
#     },
#     {
#       "id": "load-config",
#       "name": "load_config",
#       "anchor": "function-load-config",
#       "kind": "function"
#     },
#     {
#       "id": "export-config-schema",
#       "name": "export_config_schema",
#       "anchor": "function-export-config-schema",
#       "kind": "function"
#     }
#   ]
# }
# === /NAVMAP ===

"""
Configuration Loading with File/Env/CLI Precedence

Implements four-level config composition:
1. **Defaults**: ``IconLoaderConfig()``
2. **File level** (YAML/JSON): either a ``svgIcon`` section or a flat mapping
3. **Environment level**: SVGICON_* prefixed variables override file
4. **CLI level**: programmatic overrides win

Environment variables map directly onto field names:
  SVGICON_ICON_PATH="static/icons/"  →  icon_path="static/icons/"
  SVGICON_CACHE_ENABLED=false        →  cache_enabled=False

JSON values are automatically parsed; strings are type-coerced when possible.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .models import CONFIG_SECTION_KEY, IconLoaderConfig, merge_config, normalize_overrides

_LOGGER = logging.getLogger(__name__)

# ============================================================================
# Helpers
# ============================================================================


def _read_file(path: str | Path) -> dict[str, Any]:
    """
    Read YAML or JSON config file.

    Args:
        path: File path (suffix determines format: .yaml/.yml or .json)

    Returns:
        Parsed config dictionary

    Raises:
        ValueError: If file cannot be read or parsed
    """
    p = Path(path)
    if not p.exists():
        raise ValueError(f"Config file not found: {path}")

    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ValueError(f"Cannot read config file {path}: {e}") from e

    suffix = p.suffix.lower()

    if suffix in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
    elif suffix == ".json":
        try:
            data = json.loads(text) if text.strip() else {}
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    else:
        raise ValueError(f"Unsupported file format: {suffix}. Use .yaml or .json")

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
    return data


def extract_section(data: Mapping[str, Any]) -> dict[str, Any] | None:
    """
    Return the icon loader section of a parsed configuration document.

    A document with a ``svgIcon`` key yields that section (or None when the
    section is not a mapping); any other document is treated as flat.
    """
    if CONFIG_SECTION_KEY in data:
        section = data[CONFIG_SECTION_KEY]
        if not isinstance(section, Mapping):
            return None
        return dict(section)
    return dict(data)


def _coerce_env_value(value: str) -> Any:
    """
    Attempt to coerce environment variable string to appropriate type.

    Tries JSON parsing first (handles bools, numbers, quoted strings).
    Falls back to string if JSON fails.
    """
    try:
        return json.loads(value)
    except (json.JSONDecodeError, ValueError):
        pass

    if value.lower() in ("true", "false"):
        return value.lower() == "true"

    return value


def _env_overrides(env_prefix: str = "SVGICON_") -> dict[str, Any]:
    """
    Collect SVGICON_* environment variables as field overrides.

    Args:
        env_prefix: Environment variable prefix (default: SVGICON_)

    Returns:
        Mapping of field name to coerced value
    """
    overrides: dict[str, Any] = {}
    for env_key, env_value in os.environ.items():
        if not env_key.startswith(env_prefix):
            continue

        field_name = env_key[len(env_prefix) :].lower()
        if field_name not in IconLoaderConfig.model_fields:
            _LOGGER.debug("Ignoring unknown environment override %s", env_key)
            continue

        overrides[field_name] = _coerce_env_value(env_value)
        _LOGGER.debug(
            "Environment override: %s -> %s = %r", env_key, field_name, overrides[field_name]
        )

    return overrides


# ============================================================================
# Public API
# ============================================================================


def load_config(
    path: str | Path | None = None,
    env_prefix: str = "SVGICON_",
    cli_overrides: Mapping[str, Any] | None = None,
) -> IconLoaderConfig:
    """
    Load IconLoaderConfig from file, environment, and CLI with proper precedence.

    **Precedence:** defaults < file < environment < CLI

    Args:
        path: Path to YAML/JSON config file (optional)
        env_prefix: Environment variable prefix (default: SVGICON_)
        cli_overrides: CLI overrides dict (optional); None values are skipped

    Returns:
        Validated IconLoaderConfig instance

    Raises:
        ValueError: If the file cannot be read or the merged config is invalid
    """
    config = IconLoaderConfig()

    if path:
        try:
            section = extract_section(_read_file(path))
        except ValueError as e:
            _LOGGER.error("Failed to load config: %s", e)
            raise
        if section is None:
            raise ValueError(f"Section '{CONFIG_SECTION_KEY}' in {path} must be a mapping")
        _LOGGER.info("Loaded config from %s", path)
        layers = [section]
    else:
        layers = []

    layers.append(_env_overrides(env_prefix))
    if cli_overrides:
        cli_layer = normalize_overrides(cli_overrides)
        layers.append({k: v for k, v in cli_layer.items() if v is not None})

    try:
        for layer in layers:
            config = merge_config(config, layer)
    except ValueError as e:
        _LOGGER.error("Configuration validation failed: %s", e)
        raise ValueError(f"Configuration validation failed: {e}") from e

    _LOGGER.debug("Configuration validated. Config hash: %s...", config.config_hash()[:8])
    return config


def export_config_schema(output_path: str | Path | None = None) -> dict[str, Any]:
    """
    Export JSON Schema for IconLoaderConfig.

    Args:
        output_path: Optional file path; when given the schema is also written there

    Returns:
        JSON schema dict (Pydantic v2 format)
    """
    schema = IconLoaderConfig.model_json_schema(by_alias=True)
    if output_path is not None:
        out = Path(output_path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(json.dumps(schema, indent=2), encoding="utf-8")
    return schema
