# ==============================================================================
# Shared Utilities for CLI Commands
# ==============================================================================
"""
Shared utilities and constants used across CLI command modules.

This module provides:
- ANSI color codes and status icons for user-facing messages
- Logging setup for the command-line entry point

Event payloads are written to stdout undecorated; colors are only used for
diagnostics.
"""

import logging
import sys

# ==============================================================================
# Constants
# ==============================================================================

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# ==============================================================================
# ANSI Colors and Icons
# ==============================================================================


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    DIM = "\033[2m"
    BRIGHT_RED = "\033[91m"


class Icons:
    """Status icons using Unicode symbols."""

    CROSS = "✗"


# Module-level aliases for convenience
C, I = Colors, Icons


# ==============================================================================
# Logging
# ==============================================================================


def configure_logging(level: str = "WARNING") -> None:
    """
    Configure root logging to stderr so stdout stays reserved for events.

    Args:
        level: Logging level name (e.g., "DEBUG", "INFO")
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )

    # Suppress noisy third-party loggers
    logging.getLogger("azure").setLevel(logging.WARNING)
