"""Exception hierarchy for osh."""

from __future__ import annotations


class OshError(Exception):
    """Base class for interpreter errors."""


class ParseError(OshError):
    """Raised when a line cannot be turned into a command chain."""


class TooManyArgumentsError(ParseError):
    def __init__(self, limit: int) -> None:
        super().__init__(f"more than {limit} arguments in one command")
        self.limit = limit


class ShellSyntaxError(ParseError):
    def __init__(self, message: str, position: int | None = None) -> None:
        super().__init__(message)
        self.position = position


class HistoryError(OshError):
    """Raised when a history repeat cannot be honoured."""


class ExecutionError(OshError):
    """Raised when a pipeline cannot be started."""


__all__ = [
    "OshError",
    "ParseError",
    "TooManyArgumentsError",
    "ShellSyntaxError",
    "HistoryError",
    "ExecutionError",
]
