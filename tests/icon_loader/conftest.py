"""Shared fixtures for icon loader tests."""

from __future__ import annotations

import asyncio
from typing import Callable, Generator, List

import pytest

from tests.icon_loader.fakes import IconServer, Route


@pytest.fixture
def icon_server() -> Generator[Callable[..., IconServer], None, None]:
    """Factory for :class:`IconServer` instances; their clients are closed afterwards."""

    servers: List[IconServer] = []

    def _factory(routes: dict[str, Route] | None = None, *, delay: float = 0.0) -> IconServer:
        server = IconServer(routes, delay=delay)
        servers.append(server)
        return server

    yield _factory

    for server in servers:
        asyncio.run(server.aclose())
