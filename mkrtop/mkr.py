"""mkr CLI execution: command runner, host listing and metric fetching."""

from __future__ import annotations

import json
import logging
import shlex
import subprocess
import time
from typing import IO, Any

from .constants import DEFAULT_MKR_COMMAND
from .exceptions import MkrTopError
from .models import Host, hosts_from_json

logger = logging.getLogger("mkrtop")


def run_command(
    command: str,
    args: list[str],
    *,
    sink: IO[str] | None = None,
    timeout_s: int | None = None,
) -> str:
    """
    Executes: command [args...]

    Returns captured stdout. If sink is given, stdout is also written to it.
    Raises MkrTopError if the command cannot be started, exits non-zero,
    or times out.
    """
    cmd = [command] + args
    logger.debug("Running: %s", shlex.join(cmd))

    start_time = time.time()
    try:
        p = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            timeout=timeout_s,
            check=False,
        )
    except subprocess.TimeoutExpired:
        elapsed = time.time() - start_time
        logger.debug("Timeout after %.2fs", elapsed)
        raise MkrTopError(f"{command} timed out after {timeout_s}s")
    except FileNotFoundError:
        raise MkrTopError(f"{command} not found on PATH.")
    except PermissionError:
        raise MkrTopError(f"{command} is not executable.")

    elapsed = time.time() - start_time
    logger.debug("Completed in %.2fs (rc=%d)", elapsed, p.returncode)

    stdout = p.stdout.decode("utf-8", "replace")
    if p.returncode != 0:
        stderr = p.stderr.decode("utf-8", "replace").strip()
        msg = f"{command} {args[0] if args else ''}".strip()
        if stderr:
            raise MkrTopError(f"{msg} failed (rc={p.returncode}): {stderr}")
        raise MkrTopError(f"{msg} failed (rc={p.returncode})")

    if sink is not None:
        sink.write(stdout)
        sink.flush()
    return stdout


def run_json(
    command: str,
    args: list[str],
    *,
    sink: IO[str] | None = None,
    timeout_s: int | None = None,
) -> Any:
    """Run a command and decode its stdout as JSON. Raw output is copied to sink."""
    out = run_command(command, args, sink=sink, timeout_s=timeout_s)
    try:
        return json.loads(out)
    except json.JSONDecodeError as e:
        raise MkrTopError(f"Invalid JSON from {command}: {e}")


def list_hosts(
    service: str,
    role: str,
    *,
    mkr: str = DEFAULT_MKR_COMMAND,
    sink: IO[str] | None = None,
    timeout_s: int | None = None,
) -> list[Host]:
    """List hosts in a service/role via `mkr hosts`."""
    payload = run_json(
        mkr,
        ["hosts", "--service", service, "--role", role],
        sink=sink,
        timeout_s=timeout_s,
    )
    hosts = hosts_from_json(payload)
    logger.debug("Found %d hosts in %s:%s", len(hosts), service, role)
    return hosts


def build_fetch_args(hosts: list[Host], metric_names: list[str]) -> list[str]:
    """Build `mkr fetch` arguments: -n per metric, then non-retired host ids."""
    args = ["fetch"]
    for name in metric_names:
        args += ["-n", name]
    args += [h.id for h in hosts if not h.is_retired]
    return args


def fetch_metrics(
    hosts: list[Host],
    metric_names: list[str],
    *,
    mkr: str = DEFAULT_MKR_COMMAND,
    sink: IO[str] | None = None,
    timeout_s: int | None = None,
) -> Any:
    """Fetch the latest metric values for non-retired hosts via `mkr fetch`.

    Returns the decoded JSON as-is (host id -> metric name -> {"value": ...}).
    Returns an empty dict without running mkr when every host is retired.
    """
    if all(h.is_retired for h in hosts):
        logger.debug("All hosts retired, skipping metric fetch")
        return {}
    return run_json(
        mkr,
        build_fetch_args(hosts, metric_names),
        sink=sink,
        timeout_s=timeout_s,
    )
