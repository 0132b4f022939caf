"""
Code Loader Service - Load C# source from a file path or a direct string.

Validates extension, existence and size before anything is parsed.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..constants import ALLOWED_EXTENSIONS, MAX_CODE_SIZE
from .base import ErrorCode, ServiceResult


@dataclass(frozen=True)
class LoadedCode:
    """
    Successfully loaded source.

    Attributes:
        content: The C# source code
        source_path: Original file path (None if loaded from string)
    """
    content: str
    source_path: str | None = None


class CodeLoader:
    """Loads C# code from files or direct input (stateless)."""

    def __init__(
        self,
        max_size: int = MAX_CODE_SIZE,
        allowed_extensions: frozenset[str] = ALLOWED_EXTENSIONS
    ):
        """
        Args:
            max_size: Maximum allowed code size in characters
            allowed_extensions: Set of allowed file extensions
        """
        self._max_size = max_size
        self._allowed_extensions = allowed_extensions

    def load(
        self,
        code: str | None = None,
        file_path: str | None = None
    ) -> ServiceResult[LoadedCode]:
        """
        Load code from file path (preferred) or direct input.

        Returns:
            ServiceResult with LoadedCode on success, error on failure
        """
        if file_path:
            return self._load_from_file(file_path)
        if code is not None:
            return self._check_size(LoadedCode(content=code), "Code")
        return ServiceResult.fail(
            ErrorCode.MISSING_INPUT,
            "Please provide either 'file_path' or 'code'"
        )

    def validate_path(self, file_path: str) -> ServiceResult[Path]:
        """Check extension and existence of a source path without reading it."""
        path = Path(file_path)

        if path.suffix not in self._allowed_extensions:
            return ServiceResult.fail(
                ErrorCode.INVALID_EXTENSION,
                f"Only C# files allowed (got {path.suffix or 'no extension'})",
                details={
                    "extension": path.suffix,
                    "allowed": sorted(self._allowed_extensions)
                }
            )

        if not path.exists():
            return ServiceResult.fail(
                ErrorCode.FILE_NOT_FOUND,
                f"File not found: {file_path}"
            )

        if not path.is_file():
            return ServiceResult.fail(
                ErrorCode.VALIDATION_ERROR,
                f"Path is not a file: {file_path}"
            )

        return ServiceResult.ok(path)

    def _load_from_file(self, file_path: str) -> ServiceResult[LoadedCode]:
        checked = self.validate_path(file_path)
        if not checked.success:
            return ServiceResult.fail(
                checked.error.code,
                checked.error.message,
                checked.error.details
            )

        try:
            content = checked.data.read_text(encoding="utf-8")
        except PermissionError:
            return ServiceResult.fail(
                ErrorCode.PERMISSION_DENIED,
                f"Permission denied: {file_path}"
            )
        except (OSError, UnicodeDecodeError) as e:
            return ServiceResult.fail(
                ErrorCode.INTERNAL_ERROR,
                f"Error reading file: {e}"
            )

        return self._check_size(LoadedCode(content=content, source_path=file_path), "File")

    def _check_size(self, loaded: LoadedCode, what: str) -> ServiceResult[LoadedCode]:
        size = len(loaded.content)
        if size > self._max_size:
            return ServiceResult.fail(
                ErrorCode.FILE_TOO_LARGE,
                f"{what} too large: {size:,} bytes (max: {self._max_size:,})",
                details={"size": size, "max_size": self._max_size}
            )
        return ServiceResult.ok(loaded)
