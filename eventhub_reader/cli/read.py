# ==============================================================================
# Read Command
# ==============================================================================
"""
Bounded read command for the event hub reader CLI.

Connects to an event hub, prints up to --max-events payloads or stops after
--timeout seconds, then prints the terminal status (Processed or Canceled).
"""

import asyncio
import logging
from typing import Annotated

import typer

from eventhub_reader.cli.shared import C, I, configure_logging
from eventhub_reader.core.models import ConfigurationError, SessionParameters
from eventhub_reader.core.reader import read_events
from eventhub_reader.infrastructure.eventhub import create_event_source
from eventhub_reader.utils.config import get_settings
from eventhub_reader.utils.versions import (
    READER_DISTRIBUTION,
    SDK_DISTRIBUTION,
    get_package_version,
)

logger = logging.getLogger(__name__)


def read_command(
    ctx: typer.Context,
    conn_string: Annotated[
        str | None,
        typer.Option(
            "--connString",
            "-c",
            help="EventHub Connection String (or EVENTHUB_CONNECTION_STRING)",
            show_default=False,
        ),
    ] = None,
    name: Annotated[
        str | None,
        typer.Option(
            "--name",
            "-n",
            help="EventHub Name (optional when the connection string has EntityPath)",
            show_default=False,
        ),
    ] = None,
    timeout: Annotated[
        int | None,
        typer.Option(
            "--timeout",
            "-t",
            help="Seconds before cancelling the read (default: 5, minimum: 5)",
            show_default=False,
        ),
    ] = None,
    max_events: Annotated[
        int | None,
        typer.Option(
            "--max-events",
            "-m",
            help="Maximum number of events to print (default: 100)",
            show_default=False,
        ),
    ] = None,
    consumer_group: Annotated[
        str | None,
        typer.Option(
            "--consumer-group",
            "-g",
            help="Consumer group (default: $Default)",
            show_default=False,
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log debug output to stderr")
    ] = False,
) -> None:
    """Read events from an Event Hub and print their payloads.

    Stops after the timeout or after the maximum number of events,
    whichever comes first, and prints Processed or Canceled.

    Examples:
        eventhub-reader -c "Endpoint=sb://...;EntityPath=hub"
        eventhub-reader -c "Endpoint=sb://..." -n my-hub -t 30
    """
    settings = get_settings()
    configure_logging("DEBUG" if verbose else settings.log_level)

    try:
        params = SessionParameters.from_options(
            connection_string=conn_string,
            eventhub_name=name,
            timeout=timeout,
            max_events=max_events,
            consumer_group=consumer_group,
            settings=settings,
        )
    except ConfigurationError as e:
        print(f"{C.BRIGHT_RED}{I.CROSS} {e}{C.RESET}")
        print(ctx.get_usage())
        print(f"Try '{ctx.command_path} --help' for help.")
        raise typer.Exit(1)

    if timeout is not None and timeout != params.timeout_seconds:
        logger.debug("Timeout %ds raised to %ds", timeout, params.timeout_seconds)

    logger.info(
        "Event hub reader started | azure-eventhub v%s | eventhub-reader v%s",
        get_package_version(SDK_DISTRIBUTION),
        get_package_version(READER_DISTRIBUTION),
    )

    source = create_event_source(params, settings.eventhub)

    try:
        status = asyncio.run(
            read_events(
                source,
                timeout=params.timeout_seconds,
                max_events=params.max_events,
            )
        )
    except KeyboardInterrupt:
        print(f"{C.DIM}Interrupted{C.RESET}")
        raise typer.Exit(130)

    print(status.value)
