"""Pytest configuration and shared fixtures.

Adds `src/` to `sys.path` so tests can import the project package
without requiring installation.
"""

import logging
import os
import sys
from collections.abc import Callable

import httpx
import pytest

# Ensure `src` is on the import path
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_PATH = os.path.join(PROJECT_ROOT, "src")
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)

from netheal.client import NethealApi, RequestExecutor  # noqa: E402
from netheal.notify import MemorySink  # noqa: E402

BASE_URL = "http://netheal.test/api"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def sink() -> MemorySink:
    """In-memory notification sink."""
    return MemorySink(ttl=60.0)


@pytest.fixture
def make_executor(sink: MemorySink) -> Callable[..., RequestExecutor]:
    """Build an executor whose HTTP traffic goes to a MockTransport handler."""

    def _make(handler: Handler, **kwargs) -> RequestExecutor:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        kwargs.setdefault("notifier", sink)
        return RequestExecutor(BASE_URL, client=client, **kwargs)

    return _make


@pytest.fixture
def make_api(make_executor) -> Callable[..., NethealApi]:
    def _make(handler: Handler, **kwargs) -> NethealApi:
        return NethealApi(make_executor(handler, **kwargs))

    return _make


@pytest.fixture
def recorder() -> list[httpx.Request]:
    """List that request-recording handlers append to."""
    return []


@pytest.fixture(autouse=True)
def restore_netheal_logger():
    """Undo logging changes made by setup_logging (CLI callback, logging tests)."""
    logger = logging.getLogger("netheal")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
