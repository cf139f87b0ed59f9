"""Commands the shell runs itself instead of starting a program."""

from __future__ import annotations

import os
import sys
from itertools import dropwhile
from typing import Sequence, TextIO

from rmshell.environment import ShellState
from rmshell.text import atoi, fatal, is_all_digits, is_env_name, is_name_start, join_sep

_BUILTINS = frozenset({"cd", "pwd", "echo", "export", "unset", "env", "exit"})


class ShellExit(Exception):
    """Raised by ``exit`` to end the shell with *status*."""

    def __init__(self, status: int) -> None:
        super().__init__(f"exit {status}")
        self.status = status & 0xFF


def is_builtin(name: str | None) -> bool:
    """Return True if *name* is a command the shell runs itself."""
    return name in _BUILTINS


def run_builtin(args: Sequence[str], state: ShellState, out: TextIO) -> int:
    """Run the builtin named by ``args[0]`` and return its exit status.

    ``exit`` raises ShellExit; when it refuses to exit, the status is 0.
    """
    name = args[0] if args else None
    if name == "cd":
        return cd(args, state, out)
    if name == "pwd":
        pwd(args, state, out)
    elif name == "echo":
        echo(args, out)
    elif name == "export":
        return export(args, state, out)
    elif name == "unset":
        return unset(args, state, out)
    elif name == "env":
        env(args, state, out)
    elif name == "exit":
        shell_exit(args, state)
    return 0


def is_flag_n(flag: str) -> bool:
    """Return True if *flag* is an ``echo`` option made only of ``n`` letters."""
    return flag.startswith("-") and set(flag[1:]) <= {"n"}


def echo(args: Sequence[str], out: TextIO) -> int:
    """Write the arguments separated by spaces; ``-n`` drops the newline."""
    words = list(args[1:])
    rest = list(dropwhile(is_flag_n, words))
    out.write(" ".join(rest))
    if len(rest) == len(words):
        out.write("\n")
    return 0


def _update_pwd(state: ShellState, new_path: str | None) -> None:
    state.env.update("OLDPWD", state.env.get("PWD"))
    try:
        cwd = os.getcwd()
    except OSError:
        state.env.update("PWD", join_sep(state.env.get("OLDPWD"), new_path, "/"))
        fatal("cd", "error retrieving current directory")
        return
    state.env.update("PWD", cwd)


def _change_dir(path: str) -> bool:
    try:
        os.chdir(path)
    except OSError:
        fatal("cd", "no such file or directory")
        return False
    return True


def cd(args: Sequence[str], state: ShellState, out: TextIO) -> int:
    """Change the working directory, to HOME when no argument is given."""
    if len(args) == 1:
        home = state.env.get("HOME")
        if home is None:
            fatal("cd", "HOME not set")
            status = 1
        else:
            status = 0 if _change_dir(home) else 1
        _update_pwd(state, home)
        return status
    if not _change_dir(args[1]):
        return 1
    _update_pwd(state, args[1])
    return 0


def pwd(args: Sequence[str], state: ShellState, out: TextIO) -> int:
    """Write the current directory, taken from PWD when it is set."""
    current = state.env.get("PWD")
    if current is None:
        try:
            out.write(os.getcwd())
        except OSError:
            fatal("pwd", "error retrieving current directory")
    else:
        out.write(current)
    out.write("\n")
    return 0


def env(args: Sequence[str], state: ShellState, out: TextIO) -> int:
    """Write every variable that has a value as ``NAME=VALUE``."""
    for name, value in state.env:
        if value is not None:
            out.write(f"{name}={value}\n")
    return 0


def is_export_valid(arg: str) -> int:
    """Check an ``export`` argument.

    Returns -1 for an invalid identifier, otherwise the index just past the
    ``=`` (or ``+=``), or the length of *arg* when it has no assignment.
    """
    if not is_name_start(arg[:1]):
        return -1
    for index, char in enumerate(arg):
        if char == "=":
            return index + 1
        if char == "+" and arg[index + 1 : index + 2] == "=":
            return index + 2
        if not is_env_name(char):
            return -1
    return len(arg)


def split_assignment(arg: str) -> tuple[str, str | None, bool]:
    """Split ``NAME=VALUE`` or ``NAME+=VALUE`` into name, value and append flag.

    The value is None when *arg* holds no assignment.
    """
    end = len(arg)
    for index, char in enumerate(arg):
        if char == "=" or (char == "+" and arg[index + 1 : index + 2] == "="):
            end = index
            break
    name = arg[:end]
    if end == len(arg):
        return name, None, False
    if arg[end] == "+":
        return name, arg[end + 2 :], True
    return name, arg[end + 1 :], False


def _print_export(state: ShellState, out: TextIO) -> int:
    for name, value in state.env.sorted_entries():
        if name == "_":
            continue
        if value is None:
            out.write(f"declare -x {name}\n")
        else:
            out.write(f'declare -x {name}="{value}"\n')
    return 0


def export(args: Sequence[str], state: ShellState, out: TextIO) -> int:
    """Set or list exported variables.

    Returns 0 if at least one argument was a valid identifier, else 1.
    """
    if len(args) < 2:
        return _print_export(state, out)
    status = 1
    for arg in args[1:]:
        if is_export_valid(arg) == -1:
            fatal("export", "not a valid identifier")
            continue
        status = 0
        name, value, append = split_assignment(arg)
        if not state.env.assign(name, value, append):
            state.env.add(name, value)
    return status


def _is_identifier(text: str) -> bool:
    return is_name_start(text[:1]) and all(is_env_name(char) for char in text[1:])


def unset(args: Sequence[str], state: ShellState, out: TextIO) -> int:
    """Remove variables; stops with status 1 at the first invalid name."""
    for name in args[1:]:
        if not _is_identifier(name):
            fatal("unset", "invalid identifier")
            return 1
        if name == "_":
            continue
        state.env.remove(name)
    return 0


def shell_exit(args: Sequence[str], state: ShellState) -> int:
    """Leave the shell by raising ShellExit.

    Without an argument the last exit status is used.  With more than one
    numeric argument nothing happens and 1 is returned.
    """
    sys.stderr.write("exit\n")
    sys.stderr.flush()
    if len(args) < 2:
        raise ShellExit(state.exit_status)
    if is_all_digits(args[1]):
        if len(args) == 2:
            raise ShellExit(atoi(args[1]))
        sys.stderr.write("too many arguments\n")
        sys.stderr.flush()
        return 1
    sys.stderr.write("numeric argument required\n")
    sys.stderr.flush()
    raise ShellExit(255)