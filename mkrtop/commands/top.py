"""Top command: poll mkr and print a host metrics table on an interval."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

import click

from ..exceptions import CommandFailureError
from ..formatting import print_table
from ..metrics import apply_metrics, metric_names
from ..mkr import fetch_metrics, list_hosts
from ..models import Host

if TYPE_CHECKING:
    from ..cli_types import TopArgs

logger = logging.getLogger("mkrtop")


def poll_once(args: TopArgs) -> list[Host]:
    """Run one cycle: list hosts, fetch their metrics and map them onto the hosts.

    Raises:
        CommandFailureError: If no hosts match the service/role
        MkrTopError: If an mkr invocation fails
    """
    hosts = list_hosts(
        args.service,
        args.role,
        mkr=args.mkr,
        sink=args.raw_output,
        timeout_s=args.timeout,
    )
    if not hosts:
        click.echo(f"Couldn't find hosts in service({args.service}):role({args.role})")
        raise CommandFailureError(rc=1)

    response = fetch_metrics(
        hosts,
        metric_names(args.interface),
        mkr=args.mkr,
        sink=args.raw_output,
        timeout_s=args.timeout,
    )
    apply_metrics(hosts, response, interface=args.interface)
    return hosts


def cmd_top(args: TopArgs) -> None:
    """Print a fresh metrics table every interval until an error occurs."""
    cycle = 0
    while True:
        cycle += 1
        start_time = time.time()
        hosts = poll_once(args)
        print_table(hosts, interface=args.interface)
        logger.debug("Cycle %d took %.2fs", cycle, time.time() - start_time)

        if args.once:
            return
        time.sleep(args.interval)
