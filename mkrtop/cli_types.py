"""Type definitions for CLI command arguments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import IO


@dataclass
class TopArgs:
    """Arguments for the top command."""

    service: str
    role: str
    interval: int
    mkr: str
    interface: str
    timeout: int | None
    once: bool
    raw_output: IO[str] | None = None
