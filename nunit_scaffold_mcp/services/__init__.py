"""Services package.

Exposes stateless service classes and shared result types used by the MCP
handlers and the command line.
"""


# Base utilities
from .base import (
    ErrorCode,
    ServiceError,
    ServiceResult,
)

# Code loading
from .code_loader import (
    CodeLoader,
    LoadedCode,
)

# Services
from .generation import GenerationResult, GenerationService
from .pipeline import PipelineService

__all__ = [
    # Base
    "ServiceResult",
    "ServiceError",
    "ErrorCode",
    # Code loading
    "CodeLoader",
    "LoadedCode",
    # Services
    "GenerationService",
    "GenerationResult",
    "PipelineService",
]
