"""
mkrtop - top-like host metrics table for a Mackerel service role.

Design goals:
- No server, no storage: everything comes from the mkr CLI on each poll.
- Uses your existing mkr setup (API key, config), nothing to configure here.
- One table per interval on stdout, so output can be piped or logged.
"""

from __future__ import annotations

from .cli import main
from .exceptions import CommandFailureError, MkrTopError
from .models import CPU, Host, Interface, LoadAverage, Memory

__all__ = [
    "CPU",
    "CommandFailureError",
    "Host",
    "Interface",
    "LoadAverage",
    "Memory",
    "MkrTopError",
    "main",
]
