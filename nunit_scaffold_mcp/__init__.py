"""NUnit test scaffolding for C# sources, as a library, a CLI and an MCP server."""

__version__ = "0.1.0"

from .core import (
    DuplicateOutputError,
    ParseError,
    PipelineStageError,
    ScaffoldEngine,
    ScaffoldError,
    ScaffoldPipeline,
    UsageError,
    generate_tests,
    run_pipeline,
)

__all__ = [
    "__version__",
    "ScaffoldEngine",
    "ScaffoldPipeline",
    "generate_tests",
    "run_pipeline",
    "ScaffoldError",
    "ParseError",
    "UsageError",
    "DuplicateOutputError",
    "PipelineStageError",
]
