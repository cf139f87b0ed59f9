"""Shell building blocks: lexing, syntax checks, expansion, environment and builtins."""

__version__ = "0.1.0"

__all__ = [
    "builtins",
    "environment",
    "expansion",
    "lexer",
    "parser",
    "text",
]