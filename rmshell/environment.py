"""Shell variables and the global state of a running shell."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from rmshell.text import atoi, split_nonempty


@dataclass
class _Variable:
    name: str
    value: str | None


class Environment:
    """An ordered list of shell variables.

    A variable may have no value (``None``).  It is then exported by name
    only and is not shown by ``env``.
    """

    def __init__(self, entries: Iterable[tuple[str, str | None]] = ()) -> None:
        self._variables: list[_Variable] = [
            _Variable(name, value) for name, value in entries
        ]

    @classmethod
    def from_envp(cls, envp: Iterable[str] | None) -> Environment:
        """Build an environment from ``NAME=VALUE`` strings.

        Each string is cut at every ``=``, empty pieces dropped; the first
        piece is the name and the second, if any, the value.
        """
        environment = cls()
        for entry in envp or ():
            pieces = split_nonempty(entry, "=")
            if not pieces:
                continue
            environment.add(pieces[0], pieces[1] if len(pieces) > 1 else None)
        return environment

    def _find(self, name: str) -> _Variable | None:
        return next((var for var in self._variables if var.name == name), None)

    def add(self, name: str, value: str | None) -> None:
        """Append a variable at the end of the list."""
        self._variables.append(_Variable(name, value))

    def remove(self, name: str) -> None:
        """Remove the first variable called *name*, if there is one."""
        variable = self._find(name)
        if variable is not None:
            self._variables.remove(variable)

    def get(self, name: str) -> str | None:
        """Return the value of *name*, or None if it is unset or has no value."""
        variable = self._find(name)
        return None if variable is None else variable.value

    def lookup(self, name: str, exit_status: int = 0) -> str:
        """Return the text that ``$name`` expands to.

        ``?`` gives the last exit status; unknown or valueless names give "".
        """
        if name.startswith("?"):
            return str(exit_status)
        value = self.get(name)
        return "" if value is None else value

    def set(self, name: str, value: str | None) -> None:
        """Replace the value of an existing variable; unknown names are ignored."""
        variable = self._find(name)
        if variable is not None:
            variable.value = value

    def update(self, name: str | None, value: str | None) -> None:
        """Like :meth:`set`, but does nothing when name or value is missing."""
        if name is None or value is None:
            return
        self.set(name, value)

    def assign(self, name: str, value: str | None, append: bool = False) -> bool:
        """Assign to an existing variable, appending when *append* is true.

        Returns True if the variable existed and was changed, False if the
        caller still has to add it (also when *value* is None).
        """
        if value is None:
            return False
        variable = self._find(name)
        if variable is None:
            return False
        if append and variable.value is not None:
            variable.value = variable.value + value
        else:
            variable.value = value
        return True

    def to_envp(self) -> list[str]:
        """Return the variables as ``NAME=VALUE`` strings for a child process."""
        return [
            f"{var.name}={'' if var.value is None else var.value}"
            for var in self._variables
        ]

    def sorted_entries(self) -> list[tuple[str, str | None]]:
        """Return the variables ordered by name, one entry per distinct name."""
        seen: dict[str, str | None] = {}
        for var in self._variables:
            seen.setdefault(var.name, var.value)
        return sorted(seen.items(), key=lambda item: item[0])

    def __iter__(self) -> Iterator[tuple[str, str | None]]:
        return iter([(var.name, var.value) for var in self._variables])

    def __len__(self) -> int:
        return len(self._variables)

    def __contains__(self, name: object) -> bool:
        return any(var.name == name for var in self._variables)

    def __repr__(self) -> str:
        return f"Environment({list(self)!r})"


@dataclass
class ShellState:
    """Everything a shell session keeps between command lines."""

    env: Environment = field(default_factory=Environment)
    exit_status: int = 0
    heredoc_interrupted: bool = False


def init_state(envp: Iterable[str] | None) -> ShellState:
    """Create the starting state of a shell from its inherited environment.

    PATH defaults to ``/bin/``; SHLVL starts at 1 or is raised by one.
    """
    env = Environment.from_envp(envp)
    if env.get("PATH") is None:
        env.add("PATH", "/bin/")
    level = env.get("SHLVL")
    if level is None:
        env.add("SHLVL", "1")
    else:
        env.set("SHLVL", str(atoi(level) + 1))
    return ShellState(env=env)