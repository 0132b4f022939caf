"""
Generation Service - Business logic for scaffolding a single source.

1. Load code (file or string)
2. Generate one NUnit test file per public class
3. Optionally save the files to a directory

Returns the existing GeneratedTestFile models - no duplication.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..constants import OUTPUT_EXTENSION
from ..core.exceptions import ParseError
from ..core.generators import GeneratedTestFile, ScaffoldEngine
from .base import ErrorCode, ServiceResult
from .code_loader import CodeLoader

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    """
    Complete result of scaffolding one source.

    Attributes:
        files: Generated test files, one per public class
        source_path: Path the code was loaded from (None for direct code)
        saved_to: Paths written when an output directory was given
        warnings: Non-fatal problems (e.g. a file that could not be saved)
    """
    files: list[GeneratedTestFile]
    source_path: str | None = None
    saved_to: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class GenerationService:
    """
    Service for generating NUnit scaffolds.

    This class is stateless - inject dependencies via __init__.
    """

    def __init__(
        self,
        code_loader: CodeLoader | None = None,
        engine: ScaffoldEngine | None = None
    ):
        self._loader = code_loader or CodeLoader()
        self._engine = engine or ScaffoldEngine()

    def generate(
        self,
        code: str | None = None,
        file_path: str | None = None,
        output_dir: str | None = None
    ) -> ServiceResult[GenerationResult]:
        """
        Generate test scaffolds for C# code.

        Args:
            code: Direct code string
            file_path: Path to a .cs file
            output_dir: Directory to save the generated files to

        Returns:
            ServiceResult containing GenerationResult

        Example:
            service = GenerationService()
            result = service.generate(code="public class A { public int Get() => 1; }")
            if result.success:
                print(result.data.files[0].to_code())
        """
        load_result = self._loader.load(code=code, file_path=file_path)
        if not load_result.success:
            return ServiceResult.fail(
                load_result.error.code,
                f"Cannot generate tests: {load_result.error.message}",
                load_result.error.details
            )

        loaded = load_result.data

        try:
            files = self._engine.generate_files(loaded.content)
        except ParseError as e:
            return ServiceResult.fail(
                ErrorCode.PARSE_ERROR,
                f"Cannot generate tests: {e}",
                details={"line": e.line, "column": e.column}
            )

        warnings = []
        if not files:
            warnings.append("No public classes found")

        saved_to = []
        if output_dir:
            for test_file in files:
                target = Path(output_dir) / f"{test_file.qualified_name}{OUTPUT_EXTENSION}"
                save_result = self._save_to_file(test_file.to_code(), target)
                if save_result.success:
                    saved_to.append(save_result.data)
                else:
                    # Keep the generated code; only the save failed
                    warnings.append(f"Could not save to file: {save_result.error.message}")

        logger.info(f"Generated {len(files)} test file(s) from {loaded.source_path or 'code'}")

        return ServiceResult.ok(GenerationResult(
            files=files,
            source_path=loaded.source_path,
            saved_to=saved_to,
            warnings=warnings
        ))

    def generate_code_only(
        self,
        code: str | None = None,
        file_path: str | None = None
    ) -> ServiceResult[list[tuple[str, str]]]:
        """Generate scaffolds and return (qualified name, code) pairs only."""
        result = self.generate(code=code, file_path=file_path)
        return result.map(
            lambda data: [(f.qualified_name, f.to_code()) for f in data.files]
        )

    def _save_to_file(self, content: str, path: Path) -> ServiceResult[str]:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
            return ServiceResult.ok(str(path))
        except PermissionError:
            return ServiceResult.fail(
                ErrorCode.PERMISSION_DENIED,
                f"Permission denied: {path}"
            )
        except OSError as e:
            return ServiceResult.fail(
                ErrorCode.INTERNAL_ERROR,
                f"Failed to save file: {e}"
            )
