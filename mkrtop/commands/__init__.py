"""mkrtop command implementations."""

from __future__ import annotations

from .top import cmd_top, poll_once

__all__ = [
    "cmd_top",
    "poll_once",
]
