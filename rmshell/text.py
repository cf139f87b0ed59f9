"""Character classes, string helpers and error reporting used across the shell."""

from __future__ import annotations

import sys
from typing import TextIO

_BLANKS = " \t\n\v\f\r"
_DIGITS = "0123456789"


def _is_alpha(char: str) -> bool:
    return len(char) == 1 and ("a" <= char <= "z" or "A" <= char <= "Z")


def _is_digit(char: str) -> bool:
    return len(char) == 1 and char in _DIGITS


def atoi(text: str) -> int:
    """Parse a leading decimal integer the way the C library does.

    Leading blanks are skipped, one optional sign is accepted and digits are
    read until the first non-digit.  Text without digits yields 0.
    """
    stripped = text.lstrip(_BLANKS)
    sign = 1
    if stripped[:1] in ("-", "+"):
        if stripped[0] == "-":
            sign = -1
        stripped = stripped[1:]
    digits = []
    for char in stripped:
        if not _is_digit(char):
            break
        digits.append(char)
    if not digits:
        return 0
    return sign * int("".join(digits))


def is_env_name(char: str) -> bool:
    """Return True if *char* may appear in a variable name."""
    return _is_alpha(char) or _is_digit(char) or char == "_"


def is_name_start(char: str) -> bool:
    """Return True if *char* may start a variable name."""
    return _is_alpha(char) or char == "_"


def is_all_digits(text: str) -> bool:
    """Return True if every character of *text* is an ASCII digit.

    An empty string counts as all digits.
    """
    return all(_is_digit(char) for char in text)


def split_nonempty(text: str | None, sep: str) -> list[str] | None:
    """Split *text* on *sep*, dropping empty pieces; None stays None."""
    if text is None:
        return None
    return [piece for piece in text.split(sep) if piece]


def join_sep(first: str | None, second: str | None, sep: str) -> str | None:
    """Join two strings with *sep* between them; None if either is missing."""
    if first is None or second is None:
        return None
    return f"{first}{sep}{second}"


def fatal(command: str, message: str, stream: TextIO | None = None) -> None:
    """Write a shell error message for *command* to *stream* (stderr by default)."""
    target = sys.stderr if stream is None else stream
    target.write(f"rmshell: {command}: {message}\n")
    target.flush()