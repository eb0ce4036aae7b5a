"""mkrtop exception classes."""

from __future__ import annotations


class MkrTopError(RuntimeError):
    """Base exception for mkrtop errors."""


class CommandFailureError(MkrTopError):
    """Command failed - error message already printed, just need to exit.

    Raised when the command has already told the user what went wrong
    (for example, no hosts matched the service/role) and main() should
    exit without printing anything else.
    """

    def __init__(self, rc: int = 1):
        super().__init__("")
        self.rc = rc
