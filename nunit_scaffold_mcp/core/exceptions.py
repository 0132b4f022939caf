"""Exceptions raised by the scaffolding core."""

from __future__ import annotations


class ScaffoldError(Exception):
    """Base exception for scaffolding errors."""
    pass


class ParseError(ScaffoldError):
    """
    Raised when C# source text cannot be parsed.

    Attributes:
        line: 1-based line of the first syntax problem (None if unknown)
        column: 1-based column of the first syntax problem (None if unknown)
    """

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)


class UsageError(ScaffoldError):
    """Raised when the command line is malformed."""
    pass


class DuplicateOutputError(ScaffoldError):
    """Raised when two generated test classes share a qualified name."""

    def __init__(self, qualified_name: str):
        self.qualified_name = qualified_name
        super().__init__(f"Duplicate generated test class: {qualified_name}")


class PipelineStageError(ScaffoldError):
    """
    Raised when a pipeline stage fails on an item.

    Attributes:
        stage: Stage name ("read", "generate" or "write")
        item: Path or qualified name the stage was processing
    """

    def __init__(self, stage: str, item: str, cause: BaseException):
        self.stage = stage
        self.item = item
        self.cause = cause
        super().__init__(f"{stage} stage failed for {item}: {cause}")
