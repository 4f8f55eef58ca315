"""
Shared test fixtures.

PHILOSOPHY: Use REAL objects wherever possible. Only mock at system boundaries.
- Real Pydantic models (not dicts pretending to be models)
- respx ONLY for HTTP boundary
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

import pytest

from tests.alert_fixtures import build_definition

if TYPE_CHECKING:
    from collections.abc import Callable


@pytest.fixture(autouse=True)
def _isolate_alertdefs_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer shells (and .env files) from leaking into tests."""
    for key in list(os.environ):
        if key.startswith("ALERTDEFS_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("alertdefs.cli.load_dotenv", lambda *args, **kwargs: False)


@pytest.fixture
def make_definition() -> Callable[..., dict[str, Any]]:
    """Factory for alert definition dicts shaped like `GET /alertDefinitions` items."""
    return build_definition
