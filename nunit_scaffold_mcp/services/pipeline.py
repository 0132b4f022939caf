"""Pipeline service.

Runs the Read -> Generate -> Write pipeline over many files and returns the
PipelineReport in a ServiceResult.
"""


from __future__ import annotations

from ..core.exceptions import PipelineStageError
from ..core.generators import ScaffoldEngine
from ..core.pipeline import PipelineReport, ScaffoldPipeline
from .base import ErrorCode, ServiceResult


class PipelineService:
    """Scaffold tests for many C# files with bounded parallelism."""

    def __init__(self, engine: ScaffoldEngine | None = None):
        self._engine = engine or ScaffoldEngine()

    async def run(
        self,
        paths: list[str],
        output_dir: str,
        read_workers: int = 1,
        generate_workers: int = 1,
        write_workers: int = 1,
        fail_fast: bool = True
    ) -> ServiceResult[PipelineReport]:
        """Run the pipeline and wrap its report (or first fault)."""

        # Step 1: Validate inputs
        validation_error = self._validate_inputs(paths, output_dir)
        if validation_error:
            return validation_error

        try:
            pipeline = ScaffoldPipeline(
                output_dir,
                read_workers=read_workers,
                generate_workers=generate_workers,
                write_workers=write_workers,
                engine=self._engine,
                fail_fast=fail_fast
            )
        except ValueError as e:
            return ServiceResult.fail(ErrorCode.VALIDATION_ERROR, str(e))

        # Step 2: Run
        try:
            report = await pipeline.run(paths)
        except PipelineStageError as e:
            return ServiceResult.fail(
                ErrorCode.PIPELINE_ERROR,
                str(e),
                details={"stage": e.stage, "item": e.item}
            )
        except OSError as e:
            return ServiceResult.fail(
                ErrorCode.PERMISSION_DENIED if isinstance(e, PermissionError) else ErrorCode.INTERNAL_ERROR,
                f"Cannot prepare output directory: {e}"
            )

        return ServiceResult.ok(report)

    def _validate_inputs(
        self,
        paths: list[str],
        output_dir: str
    ) -> ServiceResult[PipelineReport] | None:
        """Validate inputs and return error if invalid."""

        if not paths:
            return ServiceResult.fail(
                ErrorCode.MISSING_INPUT,
                "'paths' is required and cannot be empty"
            )

        if not output_dir or not output_dir.strip():
            return ServiceResult.fail(
                ErrorCode.MISSING_INPUT,
                "'output_dir' is required and cannot be empty"
            )

        return None
