import pytest

from rmshell.environment import Environment, ShellState, init_state


@pytest.fixture
def env():
    return Environment([("HOME", "/home/user"), ("EMPTY", None), ("PATH", "/usr/bin")])


def test_from_envp_splits_name_and_value():
    result = Environment.from_envp(["HOME=/home/user", "LANG=C"])
    assert list(result) == [("HOME", "/home/user"), ("LANG", "C")]


def test_from_envp_without_value_gives_none():
    result = Environment.from_envp(["FLAG="])
    assert result.get("FLAG") is None
    assert "FLAG" in result


def test_from_envp_none_is_empty():
    assert len(Environment.from_envp(None)) == 0


def test_add_appends_at_end(env):
    env.add("NEW", "x")
    assert list(env)[-1] == ("NEW", "x")
    assert len(env) == 4


def test_remove_drops_variable(env):
    env.remove("HOME")
    assert "HOME" not in env
    assert env.get("HOME") is None
    assert len(env) == 2


def test_remove_unknown_keeps_everything(env):
    before = list(env)
    env.remove("NOPE")
    assert list(env) == before


def test_lookup_question_mark_gives_status(env):
    assert env.lookup("?", 42) == "42"


def test_lookup_missing_and_valueless_are_empty(env):
    assert env.lookup("MISSING") == ""
    assert env.lookup("EMPTY") == ""
    assert env.lookup("HOME") == "/home/user"


def test_set_only_changes_existing(env):
    env.set("HOME", "/tmp")
    env.set("OTHER", "v")
    assert env.get("HOME") == "/tmp"
    assert "OTHER" not in env


def test_update_ignores_missing_value(env):
    env.update("HOME", None)
    env.update(None, "x")
    assert env.get("HOME") == "/home/user"
    env.update("HOME", "/root")
    assert env.get("HOME") == "/root"


def test_assign_replace_and_append(env):
    assert env.assign("PATH", "/bin") is True
    assert env.get("PATH") == "/bin"
    assert env.assign("PATH", ":/sbin", append=True) is True
    assert env.get("PATH") == "/bin" + ":/sbin"


def test_assign_append_to_valueless(env):
    assert env.assign("EMPTY", "abc", append=True) is True
    assert env.get("EMPTY") == "abc"


def test_assign_unknown_or_none_returns_false(env):
    assert env.assign("UNKNOWN", "v") is False
    assert env.assign("HOME", None) is False
    assert env.get("HOME") == "/home/user"


def test_to_envp_fills_missing_values(env):
    assert env.to_envp() == ["HOME=/home/user", "EMPTY=", "PATH=/usr/bin"]
    assert env.get("EMPTY") is None


def test_sorted_entries_is_sorted_and_unique():
    env = Environment([("b", "1"), ("A", "2"), ("a", "3"), ("b", "4")])
    entries = env.sorted_entries()
    names = [name for name, _ in entries]
    assert names == sorted(set(names))
    assert dict(entries)["b"] == "1"


def test_init_state_defaults():
    state = init_state([])
    assert state.env.get("PATH") == "/bin/"
    assert state.env.get("SHLVL") == "1"
    assert state.exit_status == 0
    assert state.heredoc_interrupted is False


def test_init_state_raises_shlvl_and_keeps_path():
    state = init_state(["PATH=/usr/bin", "SHLVL=2"])
    assert state.env.get("SHLVL") == "3"
    assert state.env.get("PATH") == "/usr/bin"


def test_shell_state_default_env_is_separate():
    first = ShellState()
    second = ShellState()
    first.env.add("X", "1")
    assert "X" not in second.env