"""Pytest configuration and fixtures.

Provides error-history and environment isolation plus a recording sleep
double. Fixtures here are autouse unless noted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os

import pytest

from quietretry.display import ErrorAction, set_error_action
from quietretry.history import reset_error_history

# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class RecordingSleep:
    """Sleep double that records requested durations instead of blocking."""

    calls: list[float] = field(default_factory=list)

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@dataclass
class AsyncRecordingSleep:
    """Awaitable counterpart of ``RecordingSleep``."""

    calls: list[float] = field(default_factory=list)

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def async_recording_sleep() -> AsyncRecordingSleep:
    return AsyncRecordingSleep()


# =============================================================================
# Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def fresh_error_state():
    """Give each test an empty process-wide history and the default action."""
    history = reset_error_history()
    set_error_action(ErrorAction.CONTINUE)
    yield history
    set_error_action(ErrorAction.CONTINUE)


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Keep ``Config.from_env()`` from loading a .env file during tests.

    Every test starts with the load-once flag cleared.
    Opt-out: @pytest.mark.allow_dotenv
    """
    monkeypatch.setattr("quietretry.config._DOTENV_LOADED", False)
    if request.node.get_closest_marker("allow_dotenv"):
        return
    monkeypatch.setattr(
        "quietretry.config.load_dotenv", lambda *_args, **_kwargs: False
    )


@pytest.fixture(autouse=True)
def isolate_env(request, monkeypatch):
    """Clear QUIETRETRY_* and PROCESSOR_ARCHITECTURE to prevent test pollution.

    Opt-out: @pytest.mark.allow_env_pollution
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return
    for key in list(os.environ.keys()):
        if key.startswith("QUIETRETRY_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("PROCESSOR_ARCHITECTURE", raising=False)
