"""Expansion of ``$NAME`` and ``$?`` in words and here-document lines."""

from __future__ import annotations

from typing import Sequence

from rmshell.environment import ShellState
from rmshell.text import is_env_name, is_name_start

# Stands in for a dollar sign that must not be expanded again.
_MARK = "\uffff"


def _char_at(token: Sequence[str], index: int) -> str:
    return token[index] if 0 <= index < len(token) else ""


def name_length(token: Sequence[str], index: int) -> int:
    """Length of the variable reference starting with the ``$`` at *index*.

    The count includes the dollar sign; ``$?`` has length 2 and a dollar
    sign not followed by a valid name start has length 0.
    """
    following = _char_at(token, index + 1)
    if following == "?":
        return 2
    if not is_name_start(following):
        return 0
    length = 1
    position = index + 1
    while is_env_name(_char_at(token, position)):
        position += 1
        length += 1
    return length


def _find_variable(chars: list[str], quote_aware: bool) -> tuple[int, int] | None:
    """Locate the next expandable reference, marking lone dollar signs."""
    in_double = False
    index = 0
    while index < len(chars):
        char = chars[index]
        if quote_aware:
            if char == '"':
                in_double = not in_double
            elif char == "'" and not in_double:
                try:
                    index = chars.index("'", index + 1) + 1
                except ValueError:
                    return None
                continue
        if char == "$":
            length = name_length(chars, index)
            if length:
                return index, length
            chars[index] = _MARK
        index += 1
    return None


def _expand(text: str, state: ShellState, quote_aware: bool) -> str:
    chars = list(text)
    while (found := _find_variable(chars, quote_aware)) is not None:
        start, length = found
        name = "".join(chars[start + 1 : start + length])
        value = state.env.lookup(name, state.exit_status)
        chars[start : start + length] = value.replace("$", _MARK)
    return "".join(chars).replace(_MARK, "$")


def expand_parameters(token: str, state: ShellState) -> str:
    """Expand variables in a word, leaving single-quoted parts alone.

    Quotes are kept; text substituted for a variable is never expanded again.
    """
    return _expand(token, state, quote_aware=True)


def expand_heredoc_line(line: str, state: ShellState) -> str:
    """Expand variables in a here-document line; quotes have no effect."""
    return _expand(line, state, quote_aware=False)