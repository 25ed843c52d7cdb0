# ==============================================================================
# Azure Event Hubs Infrastructure
# ==============================================================================
"""
Event Hubs client configuration and the azure-eventhub event source.

This module consolidates all Event Hubs-related functionality:
- Client configuration (consumer group, transport, TLS verification)
- Connection string helpers
- An EventSource backed by the async EventHubConsumerClient

The SDK delivers events through a callback; EventHubSource turns that into
an async iterator by running receive() in a background task that feeds an
asyncio.Queue.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING

from eventhub_reader.base.source import EventSource
from eventhub_reader.core.models import InboundEvent, SessionParameters
from eventhub_reader.utils.config import get_settings

if TYPE_CHECKING:
    from eventhub_reader.utils.config import EventHubSettings

logger = logging.getLogger(__name__)

# Seconds to wait for the receive task to finish after the client closes
CLOSE_TIMEOUT_SECONDS = 5.0


# ==============================================================================
# Configuration
# ==============================================================================


def get_entity_path(connection_string: str) -> str | None:
    """
    Extract the EntityPath from a connection string.

    Entity-level connection strings name their event hub; namespace-level
    ones do not.

    Args:
        connection_string: Event Hubs connection string

    Returns:
        The event hub name, or None if the string carries no EntityPath
    """
    for part in connection_string.split(";"):
        key, sep, value = part.partition("=")
        if sep and key.strip().lower() == "entitypath" and value.strip():
            return value.strip()
    return None


def build_eventhub_config(
    params: SessionParameters,
    settings: "EventHubSettings | None" = None,
) -> dict:
    """
    Build EventHubConsumerClient.from_connection_string() arguments.

    Args:
        params: Session parameters for this run
        settings: EventHubSettings instance. If None, loads from get_settings().

    Returns:
        Dict with client configuration
    """
    from azure.eventhub import TransportType

    if settings is None:
        settings = get_settings().eventhub

    config: dict = {
        "conn_str": params.connection_string,
        "consumer_group": params.consumer_group,
    }

    # EntityPath in the connection string is used when no name is given
    if params.eventhub_name:
        config["eventhub_name"] = params.eventhub_name

    if settings.transport == "websocket":
        config["transport_type"] = TransportType.AmqpOverWebsocket
    else:
        config["transport_type"] = TransportType.Amqp

    if not settings.connection_verify:
        config["connection_verify"] = False

    return config


def build_receive_config(
    params: SessionParameters,
    settings: "EventHubSettings | None" = None,
) -> dict:
    """
    Build EventHubConsumerClient.receive() arguments (callbacks excluded).

    Args:
        params: Session parameters for this run
        settings: EventHubSettings instance. If None, loads from get_settings().

    Returns:
        Dict with receive configuration
    """
    if settings is None:
        settings = get_settings().eventhub

    return {
        "starting_position": params.starting_position,
        "prefetch": settings.prefetch,
    }


def _event_body(event) -> bytes:
    """Return the payload of an EventData as bytes."""
    body = event.body
    if isinstance(body, (bytes, bytearray)):
        return bytes(body)
    if isinstance(body, str):
        return body.encode("utf-8")
    # Multi-section data bodies come back as an iterable of bytes
    return b"".join(body)


def to_inbound_event(partition_id: str, event) -> InboundEvent:
    """
    Convert an azure EventData into an InboundEvent.

    Args:
        partition_id: Partition the event was read from
        event: azure.eventhub.EventData

    Returns:
        InboundEvent
    """
    return InboundEvent(
        body=_event_body(event),
        partition_id=partition_id,
        sequence_number=event.sequence_number,
        offset=str(event.offset) if event.offset is not None else None,
        enqueued_time=event.enqueued_time,
    )


# ==============================================================================
# Event Source
# ==============================================================================


class EventHubSource(EventSource):
    """
    Event source backed by azure-eventhub's async consumer client.

    Reads from every partition on the configured consumer group without
    checkpointing.

    Args:
        params: Session parameters for this run
        settings: EventHubSettings instance. If None, loads from get_settings().
    """

    def __init__(
        self,
        params: SessionParameters,
        settings: "EventHubSettings | None" = None,
    ) -> None:
        self._params = params
        self._settings = settings if settings is not None else get_settings().eventhub
        self._client = None
        self._queue: asyncio.Queue | None = None
        self._receive_task: asyncio.Task | None = None

    @property
    def target(self) -> str:
        """Event hub name this source reads from (for logging)."""
        return (
            self._params.eventhub_name
            or get_entity_path(self._params.connection_string)
            or "<unknown>"
        )

    async def open(self) -> None:
        """Create the consumer client and start receiving in the background."""
        from azure.eventhub.aio import EventHubConsumerClient

        if self._client is not None:
            raise RuntimeError("Event hub session is already open")

        self._client = EventHubConsumerClient.from_connection_string(
            **build_eventhub_config(self._params, self._settings)
        )
        self._queue = asyncio.Queue(maxsize=self._settings.prefetch)
        self._receive_task = asyncio.create_task(
            self._client.receive(
                on_event=self._on_event,
                on_error=self._on_error,
                **build_receive_config(self._params, self._settings),
            )
        )
        logger.info(
            "Opened event hub session: %s (consumer group %s)",
            self.target,
            self._params.consumer_group,
        )

    async def _on_event(self, partition_context, event) -> None:
        if event is None:
            return
        await self._queue.put(to_inbound_event(partition_context.partition_id, event))

    async def _on_error(self, partition_context, error: Exception) -> None:
        partition_id = partition_context.partition_id if partition_context else None
        logger.error("Receive error on partition %s: %s", partition_id, error)
        await self._queue.put(error)

    async def events(self) -> AsyncIterator[InboundEvent]:
        """
        Yield events in arrival order until the receive task finishes.

        Raises:
            RuntimeError: If the session is not open
            Exception: Any error reported by the SDK
        """
        if self._receive_task is None or self._queue is None:
            raise RuntimeError("open() must be called before events()")

        queue = self._queue
        receive_task = self._receive_task

        while True:
            getter = asyncio.ensure_future(queue.get())
            try:
                done, _ = await asyncio.wait(
                    {getter, receive_task}, return_when=asyncio.FIRST_COMPLETED
                )
            finally:
                if not getter.done():
                    getter.cancel()

            if getter in done:
                yield self._unwrap(getter.result())
                continue

            # Receive task ended: drain what is buffered, then surface its outcome
            while not queue.empty():
                yield self._unwrap(queue.get_nowait())
            receive_task.result()
            return

    @staticmethod
    def _unwrap(item) -> InboundEvent:
        if isinstance(item, BaseException):
            raise item
        return item

    async def close(self) -> None:
        """Close the client and wait for the receive task. Safe to call twice."""
        if self._client is None:
            return

        client, self._client = self._client, None
        receive_task, self._receive_task = self._receive_task, None

        try:
            await client.close()
        finally:
            if receive_task is not None:
                await asyncio.wait({receive_task}, timeout=CLOSE_TIMEOUT_SECONDS)
                if not receive_task.done():
                    receive_task.cancel()
                results = await asyncio.gather(receive_task, return_exceptions=True)
                if isinstance(results[0], Exception):
                    logger.debug("Receive task ended with: %s", results[0])

        logger.info("Closed event hub session: %s", self.target)


def create_event_source(
    params: SessionParameters,
    settings: "EventHubSettings | None" = None,
) -> EventSource:
    """
    Create the event source for a run.

    Args:
        params: Session parameters for this run
        settings: EventHubSettings instance. If None, loads from get_settings().

    Returns:
        EventSource instance (not yet opened)
    """
    return EventHubSource(params, settings)
