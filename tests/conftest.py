# === NAVMAP v1 ===
# {
#   "module": "tests.conftest",
#   "purpose": "Shared pytest fixtures for suite",
#   "sections": [
#     {
#       "id": "reset-package-logger",
#       "name": "reset_package_logger",
#       "anchor": "function-reset-package-logger",
#       "kind": "function"
#     },
#     {
#       "id": "clean-env",
#       "name": "clean_env",
#       "anchor": "function-clean-env",
#       "kind": "function"
#     }
#   ]
# }
# === /NAVMAP ===

"""
Pytest Configuration

This module configures shared pytest behaviour: ``src`` is put on sys.path so
the suite runs from a plain checkout, and every test starts with the package
logger and SVGICON_* environment in a known state.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Generator

import pytest

# --- Globals ---

ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


# --- Fixtures ---


@pytest.fixture(autouse=True)
def reset_package_logger() -> Generator[None, None, None]:
    """Undo ``setup_logging`` side effects so ``caplog`` sees every record."""

    logger = logging.getLogger("SvgIconKit")
    saved_handlers = list(logger.handlers)
    saved_level = logger.level
    saved_propagate = logger.propagate
    yield
    for handler in list(logger.handlers):
        if handler not in saved_handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(saved_level)
    logger.propagate = saved_propagate


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop SVGICON_* variables inherited from the developer's shell."""

    for key in list(os.environ):
        if key.startswith("SVGICON_"):
            monkeypatch.delenv(key, raising=False)
