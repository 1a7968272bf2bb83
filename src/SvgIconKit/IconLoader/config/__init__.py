"""
Icon Loader Configuration Package

Public API for loading, merging, and introspecting icon loader configuration.

Example:
    from SvgIconKit.IconLoader.config import load_config, merge_config

    # Load from file with env/CLI overrides
    config = load_config(
        path="config.json",
        cli_overrides={"iconPath": "static/icons/"},
    )

    # Layer a partial update over an existing config
    config = merge_config(config, {"iconClass": "icon"})
"""

from .loader import (
    export_config_schema,
    extract_section,
    load_config,
)
from .models import (
    CONFIG_RESOURCE_NAME,
    CONFIG_SECTION_KEY,
    SVG_ELEMENT_CLASS,
    IconLoaderConfig,
    merge_config,
    normalize_overrides,
)

__all__ = [
    # Models
    "IconLoaderConfig",
    "CONFIG_RESOURCE_NAME",
    "CONFIG_SECTION_KEY",
    "SVG_ELEMENT_CLASS",
    # Merging
    "merge_config",
    "normalize_overrides",
    # Loading
    "load_config",
    "extract_section",
    "export_config_schema",
]
