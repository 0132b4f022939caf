"""Core domain logic for NUnit scaffolding."""


from .analyzer import analyze_code, ClassInfo, CompilationUnitInfo, MethodInfo
from .exceptions import DuplicateOutputError, ParseError, PipelineStageError, ScaffoldError, UsageError
from .generators import generate_tests, GeneratedTestFile, ScaffoldEngine
from .pipeline import run_pipeline, PipelineReport, ScaffoldPipeline

__all__ = [
    # Analyzer
    "analyze_code",
    "CompilationUnitInfo",
    "ClassInfo",
    "MethodInfo",
    # Generators
    "generate_tests",
    "GeneratedTestFile",
    "ScaffoldEngine",
    # Pipeline
    "run_pipeline",
    "PipelineReport",
    "ScaffoldPipeline",
    # Errors
    "ScaffoldError",
    "ParseError",
    "UsageError",
    "PipelineStageError",
    "DuplicateOutputError",
]
