"""osh package: a small line-oriented shell with pipes and redirections."""

from .command import Command
from .config import ShellConfig
from .exceptions import (
    ExecutionError,
    HistoryError,
    OshError,
    ParseError,
    ShellSyntaxError,
    TooManyArgumentsError,
)
from .executor import exec_pipeline, reap_children, spawn, wait_for
from .lexer import Lexer, Span, Token, TokenKind, tokenize
from .parser import ParseResult, ParseStatus, Parser, parse_line
from .session import LineResult, Session

__all__ = [
    "Command",
    "ShellConfig",
    "Lexer",
    "Span",
    "Token",
    "TokenKind",
    "tokenize",
    "Parser",
    "ParseResult",
    "ParseStatus",
    "parse_line",
    "exec_pipeline",
    "spawn",
    "wait_for",
    "reap_children",
    "Session",
    "LineResult",
    "OshError",
    "ParseError",
    "TooManyArgumentsError",
    "ShellSyntaxError",
    "HistoryError",
    "ExecutionError",
]
