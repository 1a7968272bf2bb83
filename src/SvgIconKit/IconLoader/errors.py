# === NAVMAP v1 ===
# {
#   "module": "SvgIconKit.IconLoader.errors",
#   "purpose": "Error taxonomy and logging helpers for icon loading.",
#   "sections": [
#     {
#       "id": "iconloadererror",
#       "name": "IconLoaderError",
#       "anchor": "class-iconloadererror",
#       "kind": "class"
#     },
#     {
#       "id": "configunavailableerror",
#       "name": "ConfigUnavailableError",
#       "anchor": "class-configunavailableerror",
#       "kind": "class"
#     },
#     {
#       "id": "iconfetcherror",
#       "name": "IconFetchError",
#       "anchor": "class-iconfetcherror",
#       "kind": "class"
#     },
#     {
#       "id": "get-actionable-error-message",
#       "name": "get_actionable_error_message",
#       "anchor": "function-get-actionable-error-message",
#       "kind": "function"
#     },
#     {
#       "id": "log-icon-failure",
#       "name": "log_icon_failure",
#       "anchor": "function-log-icon-failure",
#       "kind": "function"
#     }
#   ]
# }
# === /NAVMAP ===

"""Error taxonomy and logging helpers for icon loading.

Responsibilities
----------------
- Define lightweight exception types (``ConfigUnavailableError``,
  ``IconFetchError``) that carry enough context for log records without
  leaking transport internals.
- Translate HTTP status codes into user-friendly remediation hints via
  :func:`get_actionable_error_message`.
- Centralise structured failure logging through :func:`log_icon_failure`.

Design Notes
------------
- None of these errors escape :class:`SvgIconLoader`; they are raised and
  recovered inside the loader so every failure degrades to a visible fallback.
"""

from __future__ import annotations

import logging
from typing import Any

__all__ = (
    "IconLoaderError",
    "ConfigUnavailableError",
    "IconFetchError",
    "get_actionable_error_message",
    "log_icon_failure",
)

LOGGER = logging.getLogger(__name__)


class IconLoaderError(Exception):
    """Base class for icon loader errors."""


class ConfigUnavailableError(IconLoaderError):
    """Raised when the external configuration resource is missing or invalid."""

    def __init__(
        self, message: str, *, url: str | None = None, status_code: int | None = None
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class IconFetchError(IconLoaderError):
    """Raised when an icon resource cannot be fetched."""

    def __init__(
        self,
        icon_name: str,
        url: str,
        *,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        message = f"Failed to load icon: {url}"
        if status_code is not None:
            message = f"{message} (HTTP {status_code})"
        super().__init__(message)
        self.icon_name = icon_name
        self.url = url
        self.status_code = status_code
        self.details = details or {}


def get_actionable_error_message(status_code: int | None) -> tuple[str, str | None]:
    """Generate user-friendly error message with an actionable suggestion.

    Args:
        status_code: HTTP status code of the failed request, or None for
            transport-level failures

    Returns:
        Tuple of (error_message, suggestion) where suggestion may be None

    Examples:
        >>> msg, suggestion = get_actionable_error_message(404)
        >>> print(msg)
        Icon not found (HTTP 404)
    """
    if status_code is None:
        return (
            "Icon request failed before a response was received",
            "Check that the icon server is reachable and the base URL is correct",
        )
    if status_code == 404:
        return (
            "Icon not found (HTTP 404)",
            "Check the icon name and that the file exists under iconPath",
        )
    if status_code in (401, 403):
        return (
            f"Access denied (HTTP {status_code})",
            "Icon files must be served without authentication",
        )
    if 500 <= status_code < 600:
        return (
            f"Server error (HTTP {status_code})",
            "The icon server failed; a later rescan will try again",
        )
    return (f"Unexpected response (HTTP {status_code})", None)


def log_icon_failure(
    error: BaseException,
    *,
    icon_name: str,
    url: str,
    logger: logging.Logger | None = None,
) -> None:
    """Log an icon fetch failure with structured context.

    Args:
        error: The exception that caused the failure
        icon_name: Name of the icon being loaded
        url: Resource URL that was requested
        logger: Logger to use (default: module logger)
    """
    logger = logger or LOGGER
    status_code = getattr(error, "status_code", None)
    message, suggestion = get_actionable_error_message(status_code)
    extra_fields: dict[str, Any] = {
        "error_type": type(error).__name__,
        "status_code": status_code,
    }
    if suggestion:
        extra_fields["suggestion"] = suggestion
    logger.error(
        'Error loading SVG icon "%s": %s (%s)',
        icon_name,
        message,
        error,
        extra={"icon_name": icon_name, "url": url, "extra_fields": extra_fields},
    )
