"""Text rendering and layout for the host metrics table."""

from __future__ import annotations

import datetime as dt
from collections.abc import Sequence

import click

from .constants import DEFAULT_INTERFACE, MEMORY_UNITS, TIME_FORMAT, TRAFFIC_UNITS, UNIT_STEP
from .models import Host

COLUMNS = [
    "host",
    "loadavg",
    "cpu_user",
    "cpu_sys",
    "cpu_idle",
    "mem_total",
    "mem_used",
    "mem_buffers",
    "mem_cached",
    "mem_free",
    "rx",
    "tx",
]


def human_readable(size: float, units: Sequence[str]) -> str:
    """Scale size by 1024 until it fits a unit, capped at the last unit."""
    i = 0
    units_limit = len(units) - 1
    while size >= UNIT_STEP and i < units_limit:
        size = size / UNIT_STEP
        i += 1
    return f"{size:.2f}{units[i]}"


def memory_human_readable(size: float) -> str:
    """Format a byte count, e.g. 1536 -> '1.50K'."""
    return human_readable(size, MEMORY_UNITS)


def traffic_human_readable(size: float) -> str:
    """Format a byte rate, e.g. 1536 -> '1.50K/s'."""
    return human_readable(size, TRAFFIC_UNITS)


def cpu_digits(val: float) -> str:
    """Format a percentage or load value with two decimals."""
    return f"{val:.2f}"


def now_string(now: dt.datetime | None = None) -> str:
    """Return local time as YYYY-MM-DD HH:MM:SS."""
    if now is None:
        now = dt.datetime.now()
    return now.strftime(TIME_FORMAT)


def column_labels(interface: str = DEFAULT_INTERFACE) -> dict[str, str]:
    """Return header labels keyed by column name."""
    return {
        "host": "Host",
        "loadavg": "LoadAvg",
        "cpu_user": "%CPU(user)",
        "cpu_sys": "%CPU(sys)",
        "cpu_idle": "%CPU(idle)",
        "mem_total": "Mem(total)",
        "mem_used": "Mem(used)",
        "mem_buffers": "Mem(buffers)",
        "mem_cached": "Mem(cached)",
        "mem_free": "Mem(free)",
        "rx": f"{interface}(rxBytes)",
        "tx": f"{interface}(txBytes)",
    }


def build_row_values(host: Host) -> dict[str, str]:
    """Format every column value for a host."""
    return {
        "host": host.id,
        "loadavg": cpu_digits(host.load_average.avg5),
        "cpu_user": cpu_digits(host.cpu.user),
        "cpu_sys": cpu_digits(host.cpu.system),
        "cpu_idle": cpu_digits(host.cpu.idle),
        "mem_total": memory_human_readable(host.memory.total),
        "mem_used": memory_human_readable(host.memory.used),
        "mem_buffers": memory_human_readable(host.memory.buffers),
        "mem_cached": memory_human_readable(host.memory.cached),
        "mem_free": memory_human_readable(host.memory.free),
        "rx": traffic_human_readable(host.interface.rx_bytes),
        "tx": traffic_human_readable(host.interface.tx_bytes),
    }


def compute_widths(labels: dict[str, str], rows: list[dict[str, str]]) -> dict[str, int]:
    """Compute each column's width as its widest cell, header included."""
    widths = {col: len(labels[col]) for col in COLUMNS}
    for values in rows:
        for col in COLUMNS:
            widths[col] = max(widths[col], len(values[col]))
    return widths


def format_row(values: dict[str, str], widths: dict[str, int], *, col_sep: str = "  ") -> str:
    """Format a single table row. Host is left aligned, numbers right aligned."""
    parts = []
    for col in COLUMNS:
        if col == "host":
            parts.append(values[col].ljust(widths[col]))
        else:
            parts.append(values[col].rjust(widths[col]))
    return col_sep.join(parts).rstrip()


def render_table(
    hosts: list[Host],
    *,
    now: dt.datetime | None = None,
    interface: str = DEFAULT_INTERFACE,
    col_sep: str = "  ",
) -> list[str]:
    """Render timestamp, header and one row per host in the given order."""
    labels = column_labels(interface)
    rows = [build_row_values(host) for host in hosts]
    widths = compute_widths(labels, rows)
    lines = [f"# {now_string(now)}", format_row(labels, widths, col_sep=col_sep)]
    lines += [format_row(values, widths, col_sep=col_sep) for values in rows]
    return lines


def print_table(
    hosts: list[Host],
    *,
    now: dt.datetime | None = None,
    interface: str = DEFAULT_INTERFACE,
) -> None:
    """Write the rendered table to stdout."""
    for line in render_table(hosts, now=now, interface=interface):
        click.echo(line)
