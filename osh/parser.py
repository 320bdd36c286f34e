"""Pipeline parser: turns a token stream into a chain of commands."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .command import Command
from .config import MAX_ARGS
from .exceptions import ParseError, ShellSyntaxError, TooManyArgumentsError
from .lexer import Lexer, Token, TokenKind

logger = logging.getLogger(__name__)


class ParseStatus(Enum):
    READY = "ready"
    EMPTY = "empty"
    TOO_MANY_ARGUMENTS = "too-many-arguments"
    SYNTAX_ERROR = "syntax-error"


@dataclass(slots=True)
class ParseResult:
    status: ParseStatus
    command: Command | None = None
    error: ParseError | None = None

    @property
    def ok(self) -> bool:
        return self.status is ParseStatus.READY


class Parser:
    """Single left-to-right pass over the tokens of one line.

    Each ``|`` detaches the stage parsed so far and installs it as the
    predecessor of a fresh stage, so the returned head is the right-most
    stage of the pipeline.
    """

    def __init__(self, lexer: Lexer, *, max_args: int = MAX_ARGS) -> None:
        self.lexer = lexer
        self.max_args = max_args

    def _expect_eof(self, after: Token) -> None:
        token = self.lexer.next_token()
        if token.kind is not TokenKind.EOF:
            raise ShellSyntaxError(
                f"unexpected {token.describe()} after {after.kind.value}",
                token.span.start,
            )

    def _word(self, token: Token) -> str:
        word = token.word or ""
        if "\0" in word:
            raise ShellSyntaxError("embedded NUL in word", token.span.start + word.index("\0"))
        return word

    def _redirect_target(self, operator: Token) -> str:
        token = self.lexer.next_token()
        if token.kind is not TokenKind.WORD or token.word is None:
            raise ShellSyntaxError(
                f"expected a file name after {operator.kind.value}, got {token.describe()}",
                token.span.start,
            )
        return self._word(token)

    def _redirect(self, stage: Command, operator: Token) -> None:
        target = self._redirect_target(operator)
        if operator.kind is TokenKind.REDIRECT_IN:
            if stage.predecessor is not None:
                raise ShellSyntaxError(
                    "cannot redirect input of a command that reads from a pipe",
                    operator.span.start,
                )
            if stage.stdin is not None:
                raise ShellSyntaxError("duplicate input redirection", operator.span.start)
            stage.stdin = target
        else:
            if stage.stdout is not None:
                raise ShellSyntaxError("duplicate output redirection", operator.span.start)
            stage.stdout = target

    def _pipe(self, stage: Command, operator: Token) -> Command:
        if not stage.argv:
            raise ShellSyntaxError("missing command before |", operator.span.start)
        if stage.stdout is not None:
            raise ShellSyntaxError(
                "cannot pipe the output of a command that redirects to a file",
                operator.span.start,
            )
        return Command(predecessor=stage)

    def _close(self, stage: Command, token: Token) -> Command | None:
        if stage.is_empty() and stage.predecessor is None:
            return None
        if not stage.argv:
            raise ShellSyntaxError("missing command", token.span.start)
        return stage

    def parse(self) -> Command | None:
        """Parse the whole line.

        Returns ``None`` for blank input. Raises ``TooManyArgumentsError`` or
        ``ShellSyntaxError`` otherwise.
        """

        token = self.lexer.next_token()
        if token.kind is TokenKind.HISTORY:
            self._expect_eof(token)
            return Command(uses_history=True)

        stage = Command()
        while True:
            kind = token.kind
            if kind is TokenKind.WORD:
                if len(stage.argv) >= self.max_args:
                    raise TooManyArgumentsError(self.max_args)
                stage.argv.append(self._word(token))
            elif kind in (TokenKind.REDIRECT_IN, TokenKind.REDIRECT_OUT):
                self._redirect(stage, token)
            elif kind is TokenKind.PIPE:
                stage = self._pipe(stage, token)
            elif kind is TokenKind.AMP:
                if not stage.argv:
                    raise ShellSyntaxError("missing command before &", token.span.start)
                stage.background = True
                self._expect_eof(token)
                return stage
            elif kind is TokenKind.EOF:
                return self._close(stage, token)
            else:
                raise ShellSyntaxError(f"unexpected {token.describe()}", token.span.start)
            token = self.lexer.next_token()


def parse_line(line: str, *, max_args: int = MAX_ARGS) -> ParseResult:
    """Parse ``line`` and report the outcome as a status instead of raising."""

    try:
        command = Parser(Lexer(line), max_args=max_args).parse()
    except TooManyArgumentsError as exc:
        logger.debug("rejected %r: %s", line, exc)
        return ParseResult(ParseStatus.TOO_MANY_ARGUMENTS, error=exc)
    except ShellSyntaxError as exc:
        logger.debug("rejected %r: %s (at %s)", line, exc, exc.position)
        return ParseResult(ParseStatus.SYNTAX_ERROR, error=exc)
    if command is None:
        return ParseResult(ParseStatus.EMPTY)
    logger.debug("parsed %r into %d stage(s): %s", line, len(command), command.render())
    return ParseResult(ParseStatus.READY, command)


__all__ = ["ParseResult", "ParseStatus", "Parser", "parse_line"]
