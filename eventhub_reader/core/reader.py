# ==============================================================================
# Bounded Event Reader
# ==============================================================================
"""
Read events for a bounded time and count window.

The reader opens a session on an event source, then races the next event
against a countdown inside one asyncio.timeout() scope. The loop stops at
whichever comes first:

- the count limit is reached        -> Processed
- the source stops delivering       -> Processed
- the countdown expires             -> Canceled

The session is closed on every exit path, including transport failures,
which propagate to the caller after cleanup.
"""

import asyncio
import logging
from collections.abc import Callable
from contextlib import aclosing
from typing import TYPE_CHECKING

from eventhub_reader.core.models import InboundEvent, ReaderState, RunStatus

if TYPE_CHECKING:
    from eventhub_reader.base.source import EventSource

logger = logging.getLogger(__name__)

EventSink = Callable[[InboundEvent], None]


def print_event(event: InboundEvent) -> None:
    """Write one event payload to stdout."""
    print(f"\tReceived event: {event.text}", flush=True)


class BoundedEventReader:
    """
    One-shot reader over an event source.

    Args:
        source: Event source to read from (opened and closed by the reader)
        timeout: Time budget in seconds
        max_events: Maximum number of events to emit
        sink: Callable receiving each event as it arrives (default: stdout)
    """

    def __init__(
        self,
        source: "EventSource",
        timeout: float,
        max_events: int,
        sink: EventSink | None = None,
    ) -> None:
        if max_events < 1:
            raise ValueError(f"max_events must be positive, got {max_events}")

        self._source = source
        self._timeout = timeout
        self._max_events = max_events
        self._sink = sink or print_event

        self.state = ReaderState.IDLE
        self.events_read = 0
        self.status: RunStatus | None = None

    async def run(self) -> RunStatus:
        """
        Read until the count limit, the end of the stream or the countdown.

        Returns:
            RunStatus.PROCESSED or RunStatus.CANCELED

        Raises:
            RuntimeError: If the reader has already run
        """
        if self.state is not ReaderState.IDLE:
            raise RuntimeError("BoundedEventReader instances are one-shot")

        await self._source.open()
        self.state = ReaderState.SESSION_OPEN
        logger.info(
            "Reading up to %d events for %ss", self._max_events, self._timeout
        )

        try:
            self.status = await self._read()
        finally:
            self.state = ReaderState.CLOSING
            await self._source.close()
            self.state = ReaderState.DONE

        logger.info("%s after %d event(s)", self.status.value, self.events_read)
        return self.status

    async def _read(self) -> RunStatus:
        self.state = ReaderState.READING
        countdown = asyncio.timeout(self._timeout)
        try:
            async with countdown:
                async with aclosing(self._source.events()) as events:
                    async for event in events:
                        logger.debug(
                            "Event of %d bytes from partition %s",
                            len(event.body),
                            event.partition_id,
                        )
                        self._sink(event)
                        self.events_read += 1

                        if self.events_read >= self._max_events:
                            break
        except TimeoutError:
            # Only expiry of our own countdown is a cancellation
            if not countdown.expired():
                raise
            return RunStatus.CANCELED

        return RunStatus.PROCESSED


async def read_events(
    source: "EventSource",
    timeout: float,
    max_events: int,
    sink: EventSink | None = None,
) -> RunStatus:
    """
    Run a single bounded read over source.

    Args:
        source: Event source to read from
        timeout: Time budget in seconds
        max_events: Maximum number of events to emit
        sink: Optional event sink (default: stdout)

    Returns:
        Terminal RunStatus
    """
    reader = BoundedEventReader(source, timeout=timeout, max_events=max_events, sink=sink)
    return await reader.run()
