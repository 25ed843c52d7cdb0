# ==============================================================================
# Shared Test Fixtures
# ==============================================================================
"""
Pytest fixtures shared across all test modules.

Provides:
- FakeEventSource, an in-memory EventSource that counts session operations
- Clean environment and settings cache per test
- Root logging handlers restored after each test
"""

import asyncio
import logging

import pytest

from eventhub_reader.base.source import EventSource
from eventhub_reader.core.models import InboundEvent
from eventhub_reader.utils.config import Settings, get_settings


class FakeEventSource(EventSource):
    """In-memory event source.

    Yields the given payloads (alternating partitions "0" and "1"), then
    either ends, raises ``error``, or keeps producing events forever when
    ``endless`` is set.
    """

    def __init__(self, payloads=(), endless=False, interval=0.0, error=None):
        self.payloads = list(payloads)
        self.endless = endless
        self.interval = interval
        self.error = error
        self.open_calls = 0
        self.close_calls = 0
        self.is_open = False

    async def open(self) -> None:
        self.open_calls += 1
        self.is_open = True

    async def events(self):
        for i, payload in enumerate(self.payloads):
            if self.interval:
                await asyncio.sleep(self.interval)
            yield InboundEvent(body=payload, partition_id=str(i % 2))

        if self.error is not None:
            raise self.error

        while self.endless:
            await asyncio.sleep(self.interval or 0.005)
            yield InboundEvent(body=b"tick", partition_id="0")

    async def close(self) -> None:
        self.close_calls += 1
        self.is_open = False

    @property
    def session_calls(self) -> int:
        return self.open_calls + self.close_calls


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove reader environment variables and reset cached settings."""
    for var in (
        "EVENTHUB_CONNECTION_STRING",
        "EVENTHUB_NAME",
        "EVENTHUB_CONSUMER_GROUP",
        "EVENTHUB_TRANSPORT",
        "EVENTHUB_STARTING_POSITION",
        "EVENTHUB_PREFETCH",
        "EVENTHUB_CONNECTION_VERIFY",
        "READER_TIMEOUT_SECONDS",
        "READER_MAX_EVENTS",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def restore_logging():
    """Keep CLI logging setup from leaking handlers into other tests."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture()
def settings():
    """Settings built from the (cleaned) environment."""
    return Settings()


@pytest.fixture()
def fake_source_factory():
    """Factory for FakeEventSource instances."""
    return FakeEventSource
