"""Tokens of a command line and the checks of their syntax."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence

from rmshell.lexer import is_operator

EXIT_SYNTAX = 258


class TokenType(IntEnum):
    """Kinds of tokens a command line is made of."""

    OPERATOR = -1
    PIPE = 0
    REDIRECTION = 1
    WORD = 2
    HEREDOC = 3
    LIMITER = 4
    FILE = 5


class ShellSyntaxError(ValueError):
    """Raised when a command line is not valid shell syntax."""

    exit_status = EXIT_SYNTAX

    def __init__(self, message: str = "syntax error") -> None:
        super().__init__(message)


def _classify(text: str) -> TokenType:
    if not text or not is_operator(text[0]):
        return TokenType.WORD
    if text == "|":
        return TokenType.PIPE
    if text in (">", ">>", "<"):
        return TokenType.REDIRECTION
    if text == "<<":
        return TokenType.HEREDOC
    return TokenType.OPERATOR


@dataclass
class Token:
    """One piece of a command line; its type is worked out from the text if not given."""

    text: str
    type: TokenType | None = None

    def __post_init__(self) -> None:
        if self.type is None:
            self.type = _classify(self.text)


def check_invalid_operator(tokens: Sequence[Token]) -> bool:
    """Return False if any operator is one the shell does not handle."""
    return all(token.type is not TokenType.OPERATOR for token in tokens)


def check_redirections(tokens: Sequence[Token]) -> bool:
    """Return True if every redirection and here-document is followed by a word."""
    for index, token in enumerate(tokens):
        if token.type in (TokenType.REDIRECTION, TokenType.HEREDOC):
            if index + 1 >= len(tokens) or tokens[index + 1].type is not TokenType.WORD:
                return False
    return True


def _word_after(tokens: Sequence[Token], pipe_index: int) -> bool:
    for token in tokens[pipe_index + 1 :]:
        if token.type is TokenType.PIPE:
            return False
        if token.type is TokenType.WORD:
            return True
    return False


def check_pipes(tokens: Sequence[Token]) -> bool:
    """Return True if every pipe has a word before it and a word after it."""
    word_before = False
    for index, token in enumerate(tokens):
        if token.type is TokenType.WORD:
            word_before = True
        if token.type is TokenType.PIPE:
            if not word_before or not _word_after(tokens, index):
                return False
            word_before = False
    return True


def validate(tokens: Sequence[Token]) -> None:
    """Raise ShellSyntaxError unless *tokens* form a valid command line."""
    if not check_invalid_operator(tokens):
        raise ShellSyntaxError("syntax error: unsupported operator")
    if not check_redirections(tokens):
        raise ShellSyntaxError("syntax error: redirection without a word")
    if not check_pipes(tokens):
        raise ShellSyntaxError("syntax error: pipe without a command")


def split_pipeline(tokens: Sequence[Token]) -> list[list[Token]]:
    """Split *tokens* at each pipe into the tokens of each command."""
    if not tokens:
        return []
    segments: list[list[Token]] = [[]]
    for token in tokens:
        if token.type is TokenType.PIPE:
            segments.append([])
        else:
            segments[-1].append(token)
    return segments