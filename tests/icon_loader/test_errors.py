"""Error types, remediation hints and structured failure logging."""

from __future__ import annotations

import logging

import httpx
import pytest

from SvgIconKit.IconLoader.errors import (
    ConfigUnavailableError,
    IconFetchError,
    IconLoaderError,
    get_actionable_error_message,
    log_icon_failure,
)


def test_icon_fetch_error_message_and_context() -> None:
    error = IconFetchError("star", "assets/icons/star.svg", status_code=404)

    assert isinstance(error, IconLoaderError)
    assert str(error) == "Failed to load icon: assets/icons/star.svg (HTTP 404)"
    assert error.icon_name == "star"
    assert error.details == {}
    assert str(IconFetchError("x", "x.svg")) == "Failed to load icon: x.svg"


def test_config_unavailable_error_context() -> None:
    error = ConfigUnavailableError("bad", url="config.json", status_code=500)

    assert isinstance(error, IconLoaderError)
    assert (error.url, error.status_code) == ("config.json", 500)


@pytest.mark.parametrize(
    ("status_code", "message", "has_suggestion"),
    [
        (None, "before a response", True),
        (404, "Icon not found", True),
        (403, "Access denied", True),
        (503, "Server error", True),
        (418, "Unexpected response", False),
    ],
)
def test_actionable_messages(status_code, message: str, has_suggestion: bool) -> None:
    text, suggestion = get_actionable_error_message(status_code)

    assert message in text
    assert (suggestion is not None) is has_suggestion


def test_log_icon_failure_attaches_structured_fields(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("SvgIconKit.tests.errors")
    error = IconFetchError("star", "assets/icons/star.svg", status_code=404)

    with caplog.at_level(logging.ERROR, logger=logger.name):
        log_icon_failure(error, icon_name="star", url=error.url, logger=logger)

    record = caplog.records[-1]
    assert record.levelno == logging.ERROR
    assert 'Error loading SVG icon "star"' in record.getMessage()
    assert record.icon_name == "star"
    assert record.url == "assets/icons/star.svg"
    assert record.extra_fields["status_code"] == 404
    assert record.extra_fields["error_type"] == "IconFetchError"
    assert "suggestion" in record.extra_fields


def test_log_icon_failure_for_transport_errors(caplog: pytest.LogCaptureFixture) -> None:
    error = httpx.ConnectError("refused")

    with caplog.at_level(logging.ERROR):
        log_icon_failure(error, icon_name="home", url="assets/icons/home.svg")

    record = caplog.records[-1]
    assert record.extra_fields["status_code"] is None
    assert record.extra_fields["error_type"] == "ConnectError"
