# rmshell

Building blocks of a small shell, as a Python library. It splits a
command line into words and operators, checks the syntax of the
resulting tokens, expands `$NAME` and `$?`, keeps the shell's
variables and state, and runs the builtins `echo`, `cd`, `pwd`,
`export`, `unset`, `env` and `exit`.

## Modules

- `rmshell.text` – character classes and string helpers (`atoi`,
  `is_env_name`, `is_name_start`, `is_all_digits`, `split_nonempty`,
  `join_sep`) and `fatal`, which writes `rmshell: <command>: <message>`
  to stderr or a given stream.
- `rmshell.environment` – `Environment`, an ordered list of variables,
  `ShellState` (environment, last exit status, here-document flag) and
  `init_state`.
- `rmshell.lexer` – `split_by_blank`, `word_count`, `split_by_operator`,
  `position_of_operator`, `is_operator`, `next_quote` and
  `UnclosedQuoteError`.
- `rmshell.parser` – `Token`, `TokenType`, the checks
  `check_invalid_operator`, `check_redirections`, `check_pipes`,
  `validate` (raises `ShellSyntaxError`, whose `exit_status` is 258)
  and `split_pipeline`.
- `rmshell.expansion` – `expand_parameters`, `expand_heredoc_line` and
  `name_length`.
- `rmshell.builtins` – `run_builtin`, `is_builtin`, each builtin as a
  function, and `ShellExit`.

## What it understands

- Words separated by spaces and tabs; single and double quotes group
  text and stay part of the word. An unclosed quote raises
  `UnclosedQuoteError`.
- Runs of the characters `&;()><|` are cut out of words as operator
  tokens. `|` is a pipe, `<`, `>` and `>>` are redirections and `<<` a
  here-document; any other operator fails `validate`. Every
  redirection and here-document must be followed by a word, and every
  pipe needs a word before and after it.
- `$NAME` and `$?` are expanded outside single quotes by
  `expand_parameters`; quotes are kept, and substituted text is never
  expanded again. `expand_heredoc_line` expands regardless of quotes.

## Environment and state

`init_state(envp)` builds a `ShellState` from `NAME=value` strings. It
adds `PATH=/bin/` when no `PATH` is given and starts `SHLVL` at 1, or
raises an inherited `SHLVL` by one.

`Environment` keeps variables in insertion order; a variable may have
no value (`None`). It offers `add`, `remove`, `get`, `lookup` (what
`$name` expands to), `set`, `update`, `assign` (with optional
appending), `to_envp` and `sorted_entries` (the order `export` lists
in), and supports `len`, `in` and iteration over `(name, value)`
pairs.

## Example

```python
import io

from rmshell.builtins import run_builtin
from rmshell.environment import init_state
from rmshell.expansion import expand_parameters
from rmshell.lexer import split_by_blank, split_by_operator
from rmshell.parser import Token, split_pipeline, validate

state = init_state(["HOME=/home/user", "GREETING=hello"])

words = split_by_blank('echo "$GREETING world"|cat')
pieces = split_by_operator(words)   # ['echo', '"$GREETING world"', '|', 'cat']
tokens = [Token(piece) for piece in pieces]
validate(tokens)
commands = split_pipeline(tokens)   # tokens of each command

print(expand_parameters('"$GREETING" and \'$GREETING\'', state))
# "hello" and '$GREETING'

out = io.StringIO()
status = run_builtin(["echo", "-n", "hi"], state, out)
print(repr(out.getvalue()), status)   # 'hi' 0
```

`exit` raises `ShellExit`, whose `status` is the code to exit with
(taken modulo 256); with more than one numeric argument it writes
`too many arguments` and returns 1 instead.

## What it does not do

The package has no interactive prompt and no command to start. It
does not remove quotes from words, open redirection files, read
here-document bodies, set up pipes or start external programs:
commands that are not builtins are not run. A caller that wants a
working shell has to do those steps with the pieces above.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.