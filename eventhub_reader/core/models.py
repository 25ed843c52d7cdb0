# ==============================================================================
# Event Hub Reader Domain Models
# ==============================================================================
"""
Pydantic models for inbound events and read-session parameters.

These models are used for:
- Carrying events from the transport adapter to the output sink
- Resolving command-line and environment values into one immutable session
- Reporting the terminal status of a run

This module is part of the core domain layer. Its models depend only on
Pydantic; SessionParameters.from_options() also reads the settings layer
(pydantic-settings and .env loading) when no Settings instance is passed in.
"""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from eventhub_reader.utils.config import Settings

# Time budget defaults (seconds)
DEFAULT_TIMEOUT_SECONDS = 5
MIN_TIMEOUT_SECONDS = 5

# Count limit default
DEFAULT_MAX_EVENTS = 100

# Shared consumer group every hub has
DEFAULT_CONSUMER_GROUP = "$Default"


class ConfigurationError(ValueError):
    """Raised when required configuration is missing before a session opens."""


class RunStatus(str, Enum):
    """Terminal status of one bounded read."""

    PROCESSED = "Processed"
    CANCELED = "Canceled"


class ReaderState(str, Enum):
    """Lifecycle states of a bounded reader."""

    IDLE = "Idle"
    SESSION_OPEN = "SessionOpen"
    READING = "Reading"
    CLOSING = "Closing"
    DONE = "Done"


class InboundEvent(BaseModel):
    """
    Represents a single event received from the hub.

    Attributes:
        body: Raw payload bytes
        partition_id: Partition the event was read from
        sequence_number: Sequence number within the partition (if known)
        offset: Partition offset (if known)
        enqueued_time: Time the hub accepted the event (if known)
    """

    body: bytes = Field(..., description="Raw event payload")
    partition_id: str = Field(..., description="Source partition identifier")
    sequence_number: int | None = Field(None, description="Sequence number in the partition")
    offset: str | None = Field(None, description="Offset in the partition")
    enqueued_time: datetime | None = Field(None, description="Enqueued time (UTC)")

    model_config = {"frozen": True}

    @property
    def text(self) -> str:
        """Decode the payload as UTF-8, replacing undecodable bytes."""
        return self.body.decode("utf-8", errors="replace")


def resolve_timeout(value: int | None) -> int:
    """
    Resolve a requested time budget.

    Args:
        value: Requested seconds, or None for the default

    Returns:
        Seconds to read, never less than MIN_TIMEOUT_SECONDS
    """
    if value is None:
        value = DEFAULT_TIMEOUT_SECONDS
    return max(value, MIN_TIMEOUT_SECONDS)


class SessionParameters(BaseModel):
    """
    Immutable parameters for one bounded read.

    Build with from_options() so that the timeout floor and the required
    connection string are enforced.
    """

    connection_string: str = Field(..., min_length=1, description="Event Hubs connection string")
    eventhub_name: str | None = Field(None, description="Event hub name")
    consumer_group: str = Field(default=DEFAULT_CONSUMER_GROUP, description="Consumer group")
    timeout_seconds: int = Field(
        default=DEFAULT_TIMEOUT_SECONDS, ge=MIN_TIMEOUT_SECONDS, description="Time budget"
    )
    max_events: int = Field(default=DEFAULT_MAX_EVENTS, ge=1, description="Count limit")
    starting_position: str = Field(default="-1", description="Starting position per partition")

    model_config = {"frozen": True}

    @classmethod
    def from_options(
        cls,
        connection_string: str | None = None,
        eventhub_name: str | None = None,
        timeout: int | None = None,
        max_events: int | None = None,
        consumer_group: str | None = None,
        settings: "Settings | None" = None,
    ) -> "SessionParameters":
        """
        Merge explicit options over settings and validate them.

        Args:
            connection_string: Connection string from the command line
            eventhub_name: Event hub name from the command line
            timeout: Requested time budget in seconds
            max_events: Requested count limit
            consumer_group: Consumer group override
            settings: Settings instance. If None, loads from get_settings().

        Returns:
            SessionParameters ready for a reader

        Raises:
            ConfigurationError: If no connection string is available
        """
        if settings is None:
            from eventhub_reader.utils.config import get_settings

            settings = get_settings()

        eventhub = settings.eventhub
        conn_str = connection_string or eventhub.connection_string
        if not conn_str or not conn_str.strip():
            raise ConfigurationError("A connection string is required (-c/--connString)")

        if timeout is None:
            timeout = settings.reader.timeout_seconds
        if max_events is None:
            max_events = settings.reader.max_events
        if max_events < 1:
            raise ConfigurationError(f"max events must be positive, got {max_events}")

        return cls(
            connection_string=conn_str.strip(),
            eventhub_name=eventhub_name or eventhub.name or None,
            consumer_group=consumer_group or eventhub.consumer_group,
            timeout_seconds=resolve_timeout(timeout),
            max_events=max_events,
            starting_position=eventhub.starting_position,
        )
