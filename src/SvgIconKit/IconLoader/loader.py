# === NAVMAP v1 ===
# {
#   "module": "SvgIconKit.IconLoader.loader",
#   "purpose": "Fetch, cache and inject SVG icons into marker elements.",
#   "sections": [
#     {
#       "id": "iter-markers",
#       "name": "iter_markers",
#       "anchor": "function-iter-markers",
#       "kind": "function"
#     },
#     {
#       "id": "svgiconloader",
#       "name": "SvgIconLoader",
#       "anchor": "class-svgiconloader",
#       "kind": "class"
#     },
#     {
#       "id": "create-icon-loader",
#       "name": "create_icon_loader",
#       "anchor": "function-create-icon-loader",
#       "kind": "function"
#     }
#   ]
# }
# === /NAVMAP ===

"""
SvgIconLoader - lazy SVG icon injection for HTML documents.

Marker elements are elements of the configured ``target_tag`` carrying a
class that starts with ``icon_prefix``; the rest of that class is the icon
name. For every marker the loader fetches ``icon_path + name + ".svg"``,
caches the markup, and replaces the marker's children with it.

Key behaviors:
- External ``config.json`` (``svgIcon`` section) is consulted once by
  ``initialize()`` and never fails it
- Fetch failures are recovered per element: the marker shows the bare icon
  name as text and the error is logged
- Completed fetches are served from the per-instance cache; concurrent misses
  for the same name are not deduplicated and each reaches the network
- Batch operations launch all loads together and return once all settled

Example:
    async with create_icon_loader(html, base_url="https://example.org/") as loader:
        await loader.initialize()
        output = loader.document.serialize()
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Awaitable, Iterable, Iterator, List, Optional, Tuple, Union

import httpx
from bs4 import BeautifulSoup, Tag

from .cache import IconCache
from .config.models import (
    CONFIG_RESOURCE_NAME,
    CONFIG_SECTION_KEY,
    SVG_ELEMENT_CLASS,
    IconLoaderConfig,
    merge_config,
)
from .document import HtmlDocument, add_class, class_list, set_inner_markup, set_text, tag_name
from .errors import ConfigUnavailableError, IconFetchError, log_icon_failure
from .net.client import build_http_client, resolve_url

LOGGER = logging.getLogger(__name__)

ConfigInput = Union[IconLoaderConfig, Mapping[str, Any], None]


def iter_markers(document: HtmlDocument, config: IconLoaderConfig) -> Iterator[Tuple[Tag, str]]:
    """
    Yield ``(element, icon_name)`` for every marker in ``document``.

    The icon name comes from the first class token starting with the prefix.
    """
    prefix = config.icon_prefix
    for element in document.find_markers(config.target_tag, prefix):
        token = next((cls for cls in class_list(element) if cls.startswith(prefix)), None)
        if token is not None:
            yield element, token[len(prefix) :]


class SvgIconLoader:
    """
    Loads SVG icons into marker elements of an HTML document.

    The loader never owns the document; it only mutates marker children and
    class lists. It owns the HTTP client only when it built one itself.
    """

    def __init__(
        self,
        document: Union[HtmlDocument, BeautifulSoup, str],
        *,
        client: Optional[httpx.AsyncClient] = None,
        config: ConfigInput = None,
        base_url: Optional[str] = None,
        root: Optional[Union[str, Path]] = None,
        config_resource: str = CONFIG_RESOURCE_NAME,
    ) -> None:
        """
        Initialize the loader.

        Args:
            document: Document to scan (raw HTML and soups are wrapped)
            client: HTTP client for icon and configuration requests
            config: Configuration merged over the defaults
            base_url: Base URL for an owned client (ignored when ``client`` is given)
            root: Directory served by an owned client instead of the network
            config_resource: Name of the external configuration resource
        """
        if isinstance(document, HtmlDocument):
            self.document = document
        else:
            self.document = HtmlDocument(document)

        self._config = merge_config(IconLoaderConfig(), config)
        self._cache = IconCache()
        self._config_loaded = False
        self._config_resource = config_resource

        self._owns_client = client is None
        if client is None:
            client = build_http_client(base_url=base_url, root=root)
        self._client = client

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> "SvgIconLoader":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this loader created it."""
        if self._owns_client:
            await self._client.aclose()

    @property
    def config_loaded(self) -> bool:
        """True once the external configuration has been consulted."""
        return self._config_loaded

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def initialize(self) -> IconLoaderConfig:
        """
        Consult external configuration, then scan if ``auto_init`` is set.

        Returns:
            Copy of the configuration in effect after initialization
        """
        await self.load_external_config()

        if self._config.auto_init:
            await self.scan_and_load()

        return self.get_config()

    async def load_external_config(self) -> bool:
        """
        Merge the ``svgIcon`` section of the configuration resource.

        Missing resources, bad JSON, invalid values and transport errors are
        logged as warnings and leave the configuration unchanged.

        Returns:
            True when the configuration was updated
        """
        try:
            response = await self._client.get(resolve_url(self._client, self._config_resource))
            if not response.is_success:
                LOGGER.warning(
                    "Config file not found (HTTP %s), using default configuration",
                    response.status_code,
                )
                return False

            data = response.json()
            if not isinstance(data, Mapping):
                raise ConfigUnavailableError(
                    "Configuration resource is not a JSON object",
                    url=str(response.url),
                )

            section = data.get(CONFIG_SECTION_KEY)
            if section is None:
                LOGGER.debug("No '%s' section in %s", CONFIG_SECTION_KEY, self._config_resource)
                return False
            if not isinstance(section, Mapping):
                raise ConfigUnavailableError(
                    f"'{CONFIG_SECTION_KEY}' section is not a JSON object",
                    url=str(response.url),
                )

            self._config = merge_config(self._config, section)
            LOGGER.info("SVG icon configuration loaded: %s", self._config.to_external())
            return True
        except (ConfigUnavailableError, ValueError, httpx.HTTPError, httpx.InvalidURL) as exc:
            LOGGER.warning("Failed to load configuration, using defaults: %s", exc)
            return False
        finally:
            self._config_loaded = True

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def scan_and_load(self) -> int:
        """
        Load icons into every marker currently in the document.

        Returns:
            Number of markers processed
        """
        jobs: List[Awaitable[bool]] = [
            self.load_icon(element, icon_name)
            for element, icon_name in iter_markers(self.document, self._config)
        ]

        await self._gather(jobs)
        return len(jobs)

    async def load_icon(self, element: Tag, icon_name: str) -> bool:
        """
        Load ``icon_name`` into ``element``.

        Failures never propagate: the element falls back to showing the icon
        name as text.

        Returns:
            True when markup was injected, False on fallback
        """
        config = self._config

        if config.cache_enabled and icon_name in self._cache:
            self._insert_icon(element, self._cache.get(icon_name) or "", config)
            return True

        url = config.icon_url(icon_name)
        try:
            response = await self._client.get(resolve_url(self._client, url))
            if not response.is_success:
                raise IconFetchError(icon_name, url, status_code=response.status_code)
            content = response.text
        except (IconFetchError, httpx.HTTPError, httpx.InvalidURL) as exc:
            log_icon_failure(exc, icon_name=icon_name, url=url, logger=LOGGER)
            set_text(element, icon_name)
            return False

        if config.cache_enabled:
            content = self._cache.store(icon_name, content)

        self._insert_icon(element, content, config)
        return True

    async def load_icon_to(self, icon_name: str, target: Union[str, Tag]) -> bool:
        """
        Load ``icon_name`` into a specific element.

        Args:
            icon_name: Icon to load
            target: CSS selector (first match is used) or element

        Returns:
            False when the target does not resolve or the load fell back
        """
        config = self._config
        element = self.document.select_one(target) if isinstance(target, str) else target

        if element is None:
            LOGGER.error("Target %s element not found: %s", config.target_tag, target)
            return False

        if tag_name(element) != config.target_tag:
            LOGGER.warning(
                "Target element is not a %s tag: <%s>", config.target_tag, tag_name(element)
            )

        return await self.load_icon(element, icon_name)

    async def load_icons(self, icon_names: Iterable[str]) -> int:
        """
        Load each named icon into all of its markers.

        Every load of every name runs concurrently; the call returns once all
        of them have reached success or fallback.

        Returns:
            Number of markers processed
        """
        config = self._config
        jobs = [
            self.load_icon(element, icon_name)
            for icon_name in icon_names
            for element in self.document.find_by_class(
                config.target_tag, f"{config.icon_prefix}{icon_name}"
            )
        ]
        await self._gather(jobs)
        return len(jobs)

    async def rescan(self) -> int:
        """Scan again, e.g. after markers were added to the document."""
        LOGGER.info("Rescanning for %s tags with icon classes...", self._config.target_tag)
        return await self.scan_and_load()

    # ------------------------------------------------------------------
    # Configuration & state
    # ------------------------------------------------------------------

    def update_config(self, partial: ConfigInput) -> IconLoaderConfig:
        """
        Merge ``partial`` over the current configuration.

        Raises:
            pydantic.ValidationError: If a value is invalid; configuration is unchanged
        """
        self._config = merge_config(self._config, partial)
        LOGGER.info("SVG icon configuration updated: %s", self._config.to_external())
        return self.get_config()

    def get_config(self) -> IconLoaderConfig:
        return self._config.model_copy()

    def get_loaded_icons(self) -> List[str]:
        return self._cache.names()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _insert_icon(element: Tag, content: str, config: IconLoaderConfig) -> None:
        set_inner_markup(element, content)
        add_class(element, config.icon_class)

        svg_element = element.find("svg")
        if svg_element is not None:
            add_class(svg_element, SVG_ELEMENT_CLASS)

    @staticmethod
    async def _gather(jobs: List[Awaitable[bool]]) -> None:
        results = await asyncio.gather(*jobs, return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                LOGGER.error("Unexpected error while loading icon", exc_info=result)


def create_icon_loader(
    html: Union[HtmlDocument, BeautifulSoup, str, Path],
    *,
    base_url: Optional[str] = None,
    root: Optional[Union[str, Path]] = None,
    config: ConfigInput = None,
    config_resource: str = CONFIG_RESOURCE_NAME,
) -> SvgIconLoader:
    """
    Factory for a loader that owns its HTTP client.

    Args:
        html: Document, markup, or path to an HTML file
        base_url: URL relative resource names resolve against
        root: Serve icons and config from this directory instead of the network
        config: Configuration merged over the defaults
        config_resource: Name of the external configuration resource

    Returns:
        SvgIconLoader; close it with ``aclose()`` or ``async with``
    """
    if isinstance(html, Path):
        document = HtmlDocument.from_file(html)
    elif isinstance(html, HtmlDocument):
        document = html
    else:
        document = HtmlDocument(html)

    return SvgIconLoader(
        document,
        config=config,
        base_url=base_url,
        root=root,
        config_resource=config_resource,
    )
