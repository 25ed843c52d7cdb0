# ==============================================================================
# Infrastructure Layer
# ==============================================================================
"""
Transport adapters for the reader.

Currently Azure Event Hubs via the azure-eventhub SDK.
"""

from eventhub_reader.infrastructure.eventhub import (
    EventHubSource,
    build_eventhub_config,
    build_receive_config,
    create_event_source,
    get_entity_path,
    to_inbound_event,
)

__all__ = [
    "EventHubSource",
    "build_eventhub_config",
    "build_receive_config",
    "create_event_source",
    "get_entity_path",
    "to_inbound_event",
]
