"""HTTP client construction for icon and configuration requests."""

from .client import (
    DEFAULT_TIMEOUT,
    LOCAL_BASE_URL,
    LocalDirectoryTransport,
    build_http_client,
    resolve_url,
)

__all__ = [
    "DEFAULT_TIMEOUT",
    "LOCAL_BASE_URL",
    "LocalDirectoryTransport",
    "build_http_client",
    "resolve_url",
]
