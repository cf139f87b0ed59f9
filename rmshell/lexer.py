"""Splitting a command line into words and operator runs."""

from __future__ import annotations

from typing import Iterable, Iterator

_BLANKS = " \t"
_QUOTES = "\"'"
_OPERATORS = "&;()><|"


class UnclosedQuoteError(ValueError):
    """Raised when a quote in a command line has no closing partner."""


def next_quote(line: str, start: int, quote: str) -> int:
    """Return the index of the next *quote* at or after *start*, or -1."""
    return line.find(quote, start)


def _word_end(line: str, start: int) -> int:
    """Return the index just past the word beginning at *start*."""
    index = start
    while index < len(line) and line[index] not in _BLANKS:
        char = line[index]
        if char in _QUOTES:
            closing = next_quote(line, index + 1, char)
            if closing == -1:
                raise UnclosedQuoteError(f"unclosed quote {char!r} in {line!r}")
            index = closing
        index += 1
    return index


def _iter_words(line: str) -> Iterator[str]:
    index = 0
    length = len(line)
    while True:
        while index < length and line[index] in _BLANKS:
            index += 1
        if index >= length:
            return
        end = _word_end(line, index)
        yield line[index:end]
        index = end


def word_count(line: str) -> int:
    """Count the blank-separated words of *line*, quotes kept together.

    Raises UnclosedQuoteError if a quote is left open.
    """
    return sum(1 for _ in _iter_words(line))


def split_by_blank(line: str) -> list[str]:
    """Split *line* on spaces and tabs outside quotes.

    Quotes stay part of the words.  Raises UnclosedQuoteError if a quote is
    left open.
    """
    return list(_iter_words(line))


def is_operator(char: str) -> bool:
    """Return True if *char* is one of the operator characters ``&;()><|``."""
    return len(char) == 1 and char in _OPERATORS


def position_of_operator(text: str) -> int:
    """Return the index of the first operator outside quotes, or -1."""
    index = 0
    while index < len(text):
        char = text[index]
        if char in _QUOTES:
            closing = next_quote(text, index + 1, char)
            if closing == -1:
                return -1
            index = closing + 1
            continue
        if is_operator(char):
            return index
        index += 1
    return -1


def _pieces(word: str) -> Iterator[str]:
    position = 0
    while position < len(word):
        rest = word[position:]
        found = position_of_operator(rest)
        if found == -1:
            piece = rest
        elif found == 0:
            run = 0
            while run < len(rest) and is_operator(rest[run]):
                run += 1
            piece = rest[:run]
        else:
            piece = rest[:found]
        yield piece
        position += len(piece)


def split_by_operator(words: Iterable[str]) -> list[str]:
    """Cut each word into plain text and runs of operator characters."""
    return [piece for word in words for piece in _pieces(word)]