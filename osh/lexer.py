"""Tokenizer for the osh command grammar."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

_WHITESPACE = frozenset(" \t\r")
_OPERATORS = frozenset("&><|")


class TokenKind(Enum):
    EOF = "end of input"
    AMP = "&"
    HISTORY = "!!"
    REDIRECT_OUT = ">"
    REDIRECT_IN = "<"
    PIPE = "|"
    WORD = "word"


_SINGLE_CHAR = {
    "&": TokenKind.AMP,
    ">": TokenKind.REDIRECT_OUT,
    "<": TokenKind.REDIRECT_IN,
    "|": TokenKind.PIPE,
}


@dataclass(frozen=True, slots=True)
class Span:
    start: int
    size: int

    @property
    def end(self) -> int:
        return self.start + self.size


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    span: Span
    word: str | None = None

    def describe(self) -> str:
        if self.kind is TokenKind.WORD:
            return repr(self.word)
        return self.kind.value


def _is_word_char(char: str) -> bool:
    return char != "\n" and char not in _WHITESPACE and char not in _OPERATORS


class Lexer:
    """Scans one input line into tokens.

    The only state is a cursor into the line. Once the end is reached every
    further call keeps returning an end-of-input token.
    """

    def __init__(self, line: str) -> None:
        self.line = line
        self.pos = 0

    def _peek(self, offset: int = 0) -> str | None:
        idx = self.pos + offset
        if idx >= len(self.line):
            return None
        return self.line[idx]

    def _take(self, kind: TokenKind, size: int) -> Token:
        token = Token(kind, Span(self.pos, size))
        self.pos = min(self.pos + size, len(self.line))
        return token

    def _skip_whitespace(self) -> None:
        while (char := self._peek()) is not None and char in _WHITESPACE:
            self.pos += 1

    def _read_word(self) -> Token:
        start = self.pos
        end = start + 1
        while end < len(self.line) and _is_word_char(self.line[end]):
            end += 1
        self.pos = end
        return Token(TokenKind.WORD, Span(start, end - start), self.line[start:end])

    def next_token(self) -> Token:
        self._skip_whitespace()
        char = self._peek()
        if char is None:
            return self._take(TokenKind.EOF, 0)
        if char == "\n":
            # A stray terminator ends the line; the cursor stays put so
            # stepping again yields another end-of-input token.
            return Token(TokenKind.EOF, Span(self.pos, 1))
        kind = _SINGLE_CHAR.get(char)
        if kind is not None:
            return self._take(kind, 1)
        if char == "!" and self._peek(1) == "!":
            return self._take(TokenKind.HISTORY, 2)
        return self._read_word()

    def tokens(self) -> Iterator[Token]:
        """Yield tokens up to and including the first end-of-input token."""

        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.EOF:
                return


def tokenize(line: str) -> list[Token]:
    return list(Lexer(line).tokens())


__all__ = ["Lexer", "Span", "Token", "TokenKind", "tokenize"]
