from __future__ import annotations


class BasescanError(Exception):
    """Base class for errors raised inside the detection pipeline."""


class GrammarLoadError(BasescanError):
    """A tree-sitter grammar could not be imported or initialised."""

    def __init__(self, grammar: str, cause: BaseException) -> None:
        super().__init__(f"grammar {grammar!r} unavailable: {cause}")
        self.grammar = grammar
        self.cause = cause


class DialectSyntaxError(BasescanError):
    """A script region did not parse cleanly."""

    def __init__(self, path: str, line: int, column: int, region: str = "script") -> None:
        super().__init__(f"{region} region of {path} has a syntax error near {line}:{column}")
        self.path = path
        self.line = line
        self.column = column
        self.region = region
