"""
HTTPX Async Client Factory & Local Directory Transport.

Architecture:
1. build_http_client(base_url=..., root=...) → httpx.AsyncClient
2. resolve_url(client, name) resolves resource names against the client's
   base URL with RFC 3986 reference resolution, as a browser resolves them
   against the page: "assets/x.svg" stays under the page directory,
   "/static/x.svg" starts at the host root, absolute URLs pass through
3. LocalDirectoryTransport serves a build output directory without a
   running web server (GET only, 404 for missing files); filesystem errors
   surface as ``httpx.ReadError`` like any other transport failure
"""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import Optional, Union

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = httpx.Timeout(10.0)
DEFAULT_USER_AGENT = "SvgIconKit/IconLoader"

# Base URL used for directory-backed clients; the host is never contacted.
LOCAL_BASE_URL = "http://local.invalid/"


class LocalDirectoryTransport(httpx.AsyncBaseTransport):
    """Serve GET requests from files under ``root``."""

    def __init__(self, root: Union[str, Path]) -> None:
        self._root = Path(root).expanduser().resolve()
        if not self._root.is_dir():
            raise ValueError(f"Not a directory: {root}")

    @property
    def root(self) -> Path:
        return self._root

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        if request.method not in ("GET", "HEAD"):
            return httpx.Response(405, request=request)

        # URL.path is already percent-decoded.
        relative = request.url.path.lstrip("/")
        try:
            target = (self._root / relative).resolve()

            if target != self._root and self._root not in target.parents:
                logger.warning("Refusing path outside root: %s", request.url.path)
                return httpx.Response(403, request=request)

            if not target.is_file():
                logger.debug("Local file not found: %s", target)
                return httpx.Response(404, request=request)

            body = b"" if request.method == "HEAD" else target.read_bytes()
        except (OSError, ValueError) as exc:
            message = f"Cannot read {request.url.path!r}: {exc}"
            raise httpx.ReadError(message, request=request) from exc

        content_type = mimetypes.guess_type(target.name)[0] or "application/octet-stream"
        return httpx.Response(
            200,
            headers={"Content-Type": content_type},
            content=body,
            request=request,
        )


def _normalize_base_url(base_url: str) -> str:
    # A page URL like ".../site/index.html" resolves names against its directory.
    url = httpx.URL(base_url)
    path = url.path or "/"
    if not path.endswith("/"):
        head, _, tail = path.rpartition("/")
        path = head + "/" if "." in tail else path + "/"
    return str(url.copy_with(path=path))


def build_http_client(
    *,
    base_url: Optional[str] = None,
    root: Optional[Union[str, Path]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    timeout: httpx.Timeout = DEFAULT_TIMEOUT,
) -> httpx.AsyncClient:
    """
    Build an ``httpx.AsyncClient`` for icon and configuration requests.

    Args:
        base_url: URL the relative resource names resolve against
        root: Serve resources from this directory instead of the network
        transport: Explicit transport (takes precedence over ``root``)
        timeout: Request timeout configuration

    Returns:
        Configured AsyncClient; the caller owns it and must close it
    """
    if root is not None and transport is None:
        transport = LocalDirectoryTransport(root)
        base_url = base_url or LOCAL_BASE_URL
        logger.debug("Serving icon resources from %s", root)

    kwargs = {
        "timeout": timeout,
        "headers": {"User-Agent": DEFAULT_USER_AGENT},
        "follow_redirects": True,
    }
    if base_url:
        kwargs["base_url"] = _normalize_base_url(base_url)
    if transport is not None:
        kwargs["transport"] = transport

    return httpx.AsyncClient(**kwargs)


def resolve_url(client: httpx.AsyncClient, name: str) -> httpx.URL:
    """
    Resolve ``name`` against ``client.base_url``.

    Unlike httpx's own base-URL merge, which appends every name to the base
    path, a root-relative name (``/static/icons/``) replaces the base path.
    """
    base = client.base_url
    if not base.scheme:
        return httpx.URL(name)
    return base.join(name)
