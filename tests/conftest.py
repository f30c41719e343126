"""Pytest configuration and fixtures.

Provides small test doubles for listeners and pre-built values in every
state. Fixtures here are function-scoped so registries never leak between
tests.
"""

from __future__ import annotations

import logging

import pytest

from failable import (
    Channel,
    Dispatcher,
    LoadableHolder,
    LoadableState,
    State,
)
from tests.helpers import ABC, Recorder

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def abc_dispatcher() -> Dispatcher[ABC]:
    return Dispatcher(ABC)


@pytest.fixture
def channel() -> Channel:
    return Channel(Dispatcher(State))


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def loadables() -> dict[LoadableState, LoadableHolder[int]]:
    """One holder per Loadable state, built through the public transitions."""
    error = ValueError("boom")
    return {
        LoadableState.EMPTY: LoadableHolder(),
        LoadableState.PENDING: LoadableHolder().pending(),
        LoadableState.SUCCESS: LoadableHolder().success(3),
        LoadableState.RELOADING: LoadableHolder().success(3).pending(),
        LoadableState.FAILURE: LoadableHolder().failure(error),
        LoadableState.RETRYING: LoadableHolder().failure(error).pending(),
    }


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def debug_library_logs():
    """Let caplog observe the library's DEBUG records."""
    logging.getLogger("failable").setLevel(logging.DEBUG)
