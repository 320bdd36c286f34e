"""Command-line interface for osh."""

from __future__ import annotations

import argparse
import logging

from .config import MAX_ARGS, MAX_LINE, PROMPT, ShellConfig
from .parser import ParseStatus
from .session import Session

_PARSE_FAILURE = 2


def _add_common_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--prompt", default=PROMPT, help="Prompt shown before each line.")
    parser.add_argument(
        "--max-args",
        type=int,
        default=MAX_ARGS,
        help="Maximum number of words in one command.",
    )
    parser.add_argument(
        "--max-line",
        type=int,
        default=MAX_LINE,
        help="Maximum length of an input line.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Diagnostic log level (written to stderr).",
    )


def _build_config(args: argparse.Namespace) -> ShellConfig:
    return ShellConfig(prompt=args.prompt, max_args=args.max_args, max_line=args.max_line)


def _run_exec(args: argparse.Namespace, config: ShellConfig) -> int:
    session = Session(config)
    result = session.run_line(args.command)
    if result.status in (ParseStatus.TOO_MANY_ARGUMENTS, ParseStatus.SYNTAX_ERROR):
        return _PARSE_FAILURE
    if result.failed:
        return 1
    return result.exit_code or 0


def _run_shell(args: argparse.Namespace, config: ShellConfig) -> int:
    return Session(config).loop()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="osh")
    subparsers = parser.add_subparsers(dest="command_name", required=True)

    exec_parser = subparsers.add_parser("exec", help="Run a single command line")
    _add_common_flags(exec_parser)
    exec_parser.add_argument("command", help="Command line to execute")
    exec_parser.set_defaults(func=_run_exec)

    shell_parser = subparsers.add_parser("shell", help="Start an interactive shell")
    _add_common_flags(shell_parser)
    shell_parser.set_defaults(func=_run_shell)

    args = parser.parse_args(argv)
    try:
        config = _build_config(args)
    except ValueError as exc:
        parser.error(str(exc))
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    exit_code = args.func(args, config)
    raise SystemExit(exit_code)


__all__ = ["main"]
