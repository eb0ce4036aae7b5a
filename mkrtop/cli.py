"""mkrtop CLI using Click."""

from __future__ import annotations

import logging
import sys
from importlib.metadata import version
from typing import IO

import click

from .cli_types import TopArgs
from .commands import cmd_top
from .constants import DEFAULT_INTERFACE, DEFAULT_INTERVAL_S, DEFAULT_MKR_COMMAND
from .exceptions import CommandFailureError, MkrTopError

# Module logger
logger = logging.getLogger("mkrtop")


def setup_logging(debug: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if debug else logging.WARNING
    logger.setLevel(level)
    if any(
        isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stderr
        for h in logger.handlers
    ):
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=version("mkrtop"), prog_name="mkrtop")
@click.option(
    "--service",
    "-s",
    required=True,
    help="The service name.",
)
@click.option(
    "--role",
    "-r",
    required=True,
    help="The role name.",
)
@click.option(
    "--interval",
    "-i",
    type=click.IntRange(min=1),
    default=DEFAULT_INTERVAL_S,
    show_default=True,
    help="The interval in seconds.",
)
@click.option(
    "--mkr",
    default=DEFAULT_MKR_COMMAND,
    show_default=True,
    help="mkr executable name or path.",
)
@click.option(
    "--interface",
    default=DEFAULT_INTERFACE,
    show_default=True,
    help="Network interface to show traffic for.",
)
@click.option(
    "--timeout",
    type=click.IntRange(min=1),
    default=None,
    help="Timeout in seconds for each mkr invocation (default: none).",
)
@click.option(
    "--raw-output",
    type=click.File("a"),
    default=None,
    help="Append raw mkr JSON output to this file ('-' for stdout).",
)
@click.option(
    "--once",
    is_flag=True,
    help="Print a single table and exit.",
)
@click.option(
    "--debug",
    "-d",
    is_flag=True,
    help="Enable debug logging to stderr.",
)
def cli(
    service: str,
    role: str,
    interval: int,
    mkr: str,
    interface: str,
    timeout: int | None,
    raw_output: IO[str] | None,
    once: bool,
    debug: bool,
):
    """mkrtop: show load, CPU, memory and traffic for hosts in a Mackerel service role."""
    setup_logging(debug=debug)
    if not service.strip() or not role.strip():
        raise click.UsageError("--service and --role must not be empty")

    args = TopArgs(
        service=service,
        role=role,
        interval=interval,
        mkr=mkr,
        interface=interface,
        timeout=timeout,
        once=once,
        raw_output=raw_output,
    )
    cmd_top(args)


def main():
    """Main entry point for the CLI.

    Every failure exits 1, whether it is a usage error or an mkr failure.
    """
    try:
        cli(standalone_mode=False)
    except click.exceptions.Abort:
        click.echo("ERROR: Interrupted", err=True)
        sys.exit(130)
    except click.ClickException as e:
        # Usage text and message go to stderr
        e.show()
        sys.exit(1)
    except CommandFailureError as e:
        # Command already printed its error message, just exit
        sys.exit(e.rc)
    except MkrTopError as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("ERROR: Interrupted", err=True)
        sys.exit(130)
