import pytest

from rmshell.lexer import split_by_blank, split_by_operator
from rmshell.parser import (
    ShellSyntaxError,
    Token,
    TokenType,
    check_invalid_operator,
    check_pipes,
    check_redirections,
    split_pipeline,
    validate,
)


def tokenize(line):
    return [Token(text) for text in split_by_operator(split_by_blank(line))]


@pytest.mark.parametrize(
    "text, expected",
    [
        ("|", TokenType.PIPE),
        (">", TokenType.REDIRECTION),
        (">>", TokenType.REDIRECTION),
        ("<", TokenType.REDIRECTION),
        ("<<", TokenType.HEREDOC),
        ("||", TokenType.OPERATOR),
        ("&&", TokenType.OPERATOR),
        (";", TokenType.OPERATOR),
        ("<>", TokenType.OPERATOR),
        ("ls", TokenType.WORD),
        ('"|"', TokenType.WORD),
    ],
)
def test_token_classification(text, expected):
    assert Token(text).type is expected


def test_explicit_type_is_kept():
    assert Token("EOF", TokenType.LIMITER).type is TokenType.LIMITER


@pytest.mark.parametrize(
    "line",
    ["ls", "ls -l | wc -l", "cat < in > out", "cat << EOF | grep x", "> out", "echo '|' \"&&\""],
)
def test_valid_lines_pass_every_check(line):
    tokens = tokenize(line)
    assert check_invalid_operator(tokens) is True
    assert check_redirections(tokens) is True
    assert check_pipes(tokens) is True


@pytest.mark.parametrize("line", ["ls && wc", "ls ; wc", "(ls)", "ls || wc"])
def test_unsupported_operators(line):
    tokens = tokenize(line)
    assert check_invalid_operator(tokens) is False
    with pytest.raises(ShellSyntaxError) as excinfo:
        validate(tokens)
    assert excinfo.value.exit_status == 258


@pytest.mark.parametrize("line", ["ls >", "cat <", "cat <<", "ls > | wc", "cat << > x"])
def test_redirection_without_word(line):
    tokens = tokenize(line)
    assert check_redirections(tokens) is False
    with pytest.raises(ShellSyntaxError):
        validate(tokens)


def test_split_pipeline_segments():
    segments = split_pipeline(tokenize("cat f | grep a | wc"))
    assert [[token.text for token in segment] for segment in segments] == [
        ["cat", "f"],
        ["grep", "a"],
        ["wc"],
    ]


def test_split_pipeline_keeps_all_non_pipe_tokens():
    tokens = tokenize("a > b | c < d")
    segments = split_pipeline(tokens)
    flattened = [token for segment in segments for token in segment]
    assert flattened == [token for token in tokens if token.type is not TokenType.PIPE]
    pipes = sum(token.type is TokenType.PIPE for token in tokens)
    assert len(segments) == pipes + 1


def test_split_pipeline_empty():
    assert split_pipeline([]) == []