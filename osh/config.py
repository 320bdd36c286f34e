"""Runtime limits and user-facing strings."""

from __future__ import annotations

from dataclasses import dataclass

MAX_LINE = 80
MAX_ARGS = MAX_LINE // 2
PROMPT = "osh> "
FILE_MODE = 0o644


@dataclass
class ShellConfig:
    """Settings shared by the session driver, parser and executor."""

    prompt: str = PROMPT
    max_line: int = MAX_LINE
    max_args: int = MAX_ARGS
    file_mode: int = FILE_MODE
    farewell: str = "Ciao!"
    exit_command: str = "exit"

    def __post_init__(self) -> None:
        if self.max_line < 1:
            raise ValueError("max_line must be positive")
        if self.max_args < 1:
            raise ValueError("max_args must be positive")


__all__ = ["FILE_MODE", "MAX_ARGS", "MAX_LINE", "PROMPT", "ShellConfig"]
