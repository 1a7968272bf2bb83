"""
Icon Loader Package

Lazily loads SVG icons into marker elements (``<i class="icon-star">``) of an
HTML document: markers are discovered by class prefix, icon markup is fetched
over HTTP with ``httpx``, cached per loader, and injected into the document.

Example:
    import asyncio
    from SvgIconKit.IconLoader import create_icon_loader

    async def render(html: str) -> str:
        async with create_icon_loader(html, base_url="https://example.org/") as loader:
            await loader.initialize()
            return loader.document.serialize()

    asyncio.run(render('<i class="icon-star"></i>'))
"""

from .cache import IconCache
from .config import (
    IconLoaderConfig,
    export_config_schema,
    load_config,
    merge_config,
)
from .document import HtmlDocument
from .errors import (
    ConfigUnavailableError,
    IconFetchError,
    IconLoaderError,
    get_actionable_error_message,
)
from .loader import SvgIconLoader, create_icon_loader, iter_markers
from .logging_utils import setup_logging
from .net import LocalDirectoryTransport, build_http_client

__all__ = [
    # Loader
    "SvgIconLoader",
    "create_icon_loader",
    "iter_markers",
    "IconCache",
    "HtmlDocument",
    # Configuration
    "IconLoaderConfig",
    "load_config",
    "merge_config",
    "export_config_schema",
    # Errors
    "IconLoaderError",
    "ConfigUnavailableError",
    "IconFetchError",
    "get_actionable_error_message",
    # Infrastructure
    "LocalDirectoryTransport",
    "build_http_client",
    "setup_logging",
]
