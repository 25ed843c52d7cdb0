# ==============================================================================
# Base Event Source Abstract Class
# ==============================================================================
"""
Base class for event sources.

An event source is the read side of a streaming transport. The bounded reader
only ever uses the three operations defined here, so any transport (or a test
double) can stand in for Azure Event Hubs.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from eventhub_reader.core.models import InboundEvent


class EventSource(ABC):
    """Base class for event sources."""

    @abstractmethod
    async def open(self) -> None:
        """
        Open the consumer session.

        Called once before events() is iterated.
        """
        ...

    @abstractmethod
    def events(self) -> AsyncIterator[InboundEvent]:
        """
        Yield events from any partition in arrival order.

        The iterator is lazy and cancelable. It ends when the transport
        stops delivering events; transport failures are raised from it.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """
        Close the consumer session.

        Must be safe to call when the session is already closed.
        """
        ...

    async def __aenter__(self) -> "EventSource":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
