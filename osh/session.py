"""Interactive session: read loop, one-slot history and line dispatch."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .command import Command
from .config import ShellConfig
from .exceptions import ExecutionError, HistoryError
from .executor import reap_children, spawn, wait_for
from .parser import ParseResult, ParseStatus, parse_line

logger = logging.getLogger(__name__)

_STATUS_MESSAGES = {
    ParseStatus.TOO_MANY_ARGUMENTS: "Too many arguments.",
    ParseStatus.SYNTAX_ERROR: "Syntax error.",
}


@dataclass(slots=True)
class LineResult:
    status: ParseStatus
    exit_code: int | None = None
    pid: int | None = None
    background: bool = False
    message: str | None = None

    @property
    def executed(self) -> bool:
        return self.pid is not None

    @property
    def failed(self) -> bool:
        """True when a diagnostic was shown and nothing ran."""

        return self.message is not None and not self.executed


class Session:
    """Drives the interpreter one input line at a time.

    ``history`` holds the last accepted line; an empty string means nothing
    has been run yet.
    """

    def __init__(self, config: ShellConfig | None = None, *, history: str = "") -> None:
        self.config = config or ShellConfig()
        self.history = history

    def _parse(self, line: str) -> ParseResult:
        return parse_line(line, max_args=self.config.max_args)

    def _recall(self) -> Command:
        if not self.history:
            raise HistoryError("No commands in history.")
        print(self.history)
        result = self._parse(self.history)
        if not result.ok or result.command is None:
            raise HistoryError("Error parsing history.")
        return result.command

    def run_line(self, line: str) -> LineResult:
        line = line.rstrip("\n")
        if len(line) > self.config.max_line:
            print("Input too long.")
            return LineResult(ParseStatus.SYNTAX_ERROR, message="Input too long.")

        result = self._parse(line)
        if not result.ok or result.command is None:
            message = _STATUS_MESSAGES.get(result.status)
            if message is not None:
                print(message)
            return LineResult(result.status, message=message)

        command = result.command
        if command.uses_history:
            command.release()
            try:
                command = self._recall()
            except HistoryError as exc:
                print(exc)
                return LineResult(ParseStatus.READY, message=str(exc))
        else:
            self.history = line

        try:
            return self._execute(command)
        finally:
            command.release()

    def _execute(self, command: Command) -> LineResult:
        background = command.background
        try:
            pid = spawn(command, file_mode=self.config.file_mode)
        except ExecutionError as exc:
            print(exc)
            return LineResult(ParseStatus.READY, message=str(exc))
        exit_code = None
        if not background:
            exit_code = wait_for(pid)
        reaped = reap_children()
        if reaped:
            logger.debug("reclaimed %d finished child(ren)", len(reaped))
        return LineResult(ParseStatus.READY, exit_code=exit_code, pid=pid, background=background)

    def loop(self) -> int:
        try:
            while True:
                line = input(self.config.prompt).rstrip("\n")
                if line == self.config.exit_command:
                    break
                self.run_line(line)
        except (EOFError, KeyboardInterrupt):
            print()
        print(self.config.farewell)
        return 0


__all__ = ["LineResult", "Session"]
