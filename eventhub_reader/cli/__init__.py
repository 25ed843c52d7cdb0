# ==============================================================================
# CLI Commands Module
# ==============================================================================
"""
CLI commands for the event hub reader.

Commands are organized into separate modules for maintainability:
- shared.py: Colors, icons and logging setup
- read.py: The bounded read command
"""

from eventhub_reader.cli.shared import (
    LOG_FORMAT,
    C,
    Colors,
    I,
    Icons,
    configure_logging,
)

__all__ = [
    "LOG_FORMAT",
    "C",
    "Colors",
    "I",
    "Icons",
    "configure_logging",
]
