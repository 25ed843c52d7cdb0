# ==============================================================================
# Core Domain Layer
# ==============================================================================
"""
Core domain logic: models and the bounded event reader.
"""

from eventhub_reader.core.models import (
    ConfigurationError,
    InboundEvent,
    ReaderState,
    RunStatus,
    SessionParameters,
    resolve_timeout,
)
from eventhub_reader.core.reader import BoundedEventReader, print_event, read_events

__all__ = [
    "BoundedEventReader",
    "ConfigurationError",
    "InboundEvent",
    "ReaderState",
    "RunStatus",
    "SessionParameters",
    "print_event",
    "read_events",
    "resolve_timeout",
]
