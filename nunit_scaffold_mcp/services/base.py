"""
Service Layer Base - Result and error types shared by all services.

- ServiceResult: success-with-data or failure-with-error wrapper
- ServiceError: structured error information
- ErrorCode: machine-readable error codes
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class ErrorCode(str, Enum):
    """Error codes returned by services (string values for JSON output)."""
    # Input validation
    VALIDATION_ERROR = "validation_error"
    MISSING_INPUT = "missing_input"

    # File operations
    FILE_NOT_FOUND = "file_not_found"
    PERMISSION_DENIED = "permission_denied"
    FILE_TOO_LARGE = "file_too_large"
    INVALID_EXTENSION = "invalid_extension"

    # Scaffolding
    PARSE_ERROR = "parse_error"
    PIPELINE_ERROR = "pipeline_error"

    # General
    INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True)
class ServiceError:
    """
    Structured error information.

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable error message
        details: Optional additional context
    """
    code: ErrorCode
    message: str
    details: dict | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """
    Either success with data or failure with an error, never both.

    Usage:
        result = ServiceResult.ok(files)
        result = ServiceResult.fail(ErrorCode.PARSE_ERROR, "Syntax error")

        if result.success:
            use(result.data)
        else:
            report(result.error)
    """
    success: bool
    data: T | None = None
    error: ServiceError | None = None

    @classmethod
    def ok(cls, data: T) -> ServiceResult[T]:
        """Create a successful result."""
        return cls(success=True, data=data, error=None)

    @classmethod
    def fail(
        cls,
        code: ErrorCode,
        message: str,
        details: dict | None = None
    ) -> ServiceResult[T]:
        """Create a failed result."""
        return cls(
            success=False,
            data=None,
            error=ServiceError(code=code, message=message, details=details)
        )

    def map(self, func: Callable[[T], U]) -> ServiceResult[U]:
        """Transform the data if successful, otherwise pass the error through."""
        if self.success and self.data is not None:
            return ServiceResult.ok(func(self.data))
        return self  # type: ignore[return-value]

    def unwrap(self) -> T:
        """
        Get the data.

        Raises:
            ValueError: If the result is a failure
        """
        if not self.success or self.data is None:
            error_msg = self.error.message if self.error else "Unknown error"
            raise ValueError(f"Cannot unwrap failed result: {error_msg}")
        return self.data
