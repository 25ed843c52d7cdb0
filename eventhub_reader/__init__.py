# ==============================================================================
# Event Hub Reader
# ==============================================================================
"""
Bounded Azure Event Hubs reader.

Reads events until a count limit or a time budget is reached and prints
each payload.
"""

from eventhub_reader.core.models import (
    ConfigurationError,
    InboundEvent,
    RunStatus,
    SessionParameters,
)
from eventhub_reader.core.reader import BoundedEventReader, read_events

__all__ = [
    "BoundedEventReader",
    "ConfigurationError",
    "InboundEvent",
    "RunStatus",
    "SessionParameters",
    "read_events",
]
