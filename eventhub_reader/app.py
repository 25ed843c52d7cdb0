# ==============================================================================
# Event Hub Reader CLI
# ==============================================================================
"""
Command-line interface for reading a bounded window of Event Hubs events.

Usage:
    eventhub-reader --help
    eventhub-reader -c "<connection string>" -n <event hub> -t 10
"""

import os
import warnings

import typer

# Suppress noisy warnings before any imports
warnings.filterwarnings("ignore", category=DeprecationWarning)

# ==============================================================================
# App Configuration
# ==============================================================================
# Set consistent terminal width for help output formatting
if "COLUMNS" not in os.environ:
    os.environ["COLUMNS"] = "115"

HELP_OPTION_NAMES = ["-h", "-?", "--help"]

app = typer.Typer(
    name="eventhub-reader",
    help="Read a bounded window of events from an Azure Event Hub",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": HELP_OPTION_NAMES},
)

# Register the read command from cli.read module
from eventhub_reader.cli.read import read_command

app.command(
    "read",
    context_settings={"help_option_names": HELP_OPTION_NAMES},
)(read_command)


# ==============================================================================
# Entry Point
# ==============================================================================


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
