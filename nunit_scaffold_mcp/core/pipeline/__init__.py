"""Pipeline module - read, generate and write scaffolds concurrently."""

from .models import PipelineFailure, PipelineReport, SourceText
from .orchestrator import ScaffoldPipeline, run_pipeline

__all__ = [
    "ScaffoldPipeline",
    "run_pipeline",
    "PipelineReport",
    "PipelineFailure",
    "SourceText",
]
