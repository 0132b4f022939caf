"""
Tests for the Service Layer.

Services are tested without MCP infrastructure; failures come back as
ServiceResult errors instead of exceptions.
"""

from unittest.mock import Mock

import pytest

from nunit_scaffold_mcp.core.exceptions import ParseError
from nunit_scaffold_mcp.services import (
    # Base
    ServiceResult,
    ServiceError,
    ErrorCode,
    # Code loading
    CodeLoader,
    LoadedCode,
    # Services
    GenerationService,
    PipelineService,
)


# =============================================================================
# ServiceResult Tests
# =============================================================================

class TestServiceResult:
    """Tests for the ServiceResult pattern."""

    def test_ok_creates_success_result(self):
        """Test creating a successful result."""
        result = ServiceResult.ok({"key": "value"})

        assert result.success is True
        assert result.data == {"key": "value"}
        assert result.error is None

    def test_fail_creates_failure_result(self):
        """Test creating a failed result."""
        result = ServiceResult.fail(
            ErrorCode.PARSE_ERROR,
            "Syntax error",
            {"line": 3}
        )

        assert result.success is False
        assert result.data is None
        assert result.error.code == ErrorCode.PARSE_ERROR
        assert result.error.details == {"line": 3}

    def test_map_transforms_data(self):
        """map() applies only to successful results."""
        assert ServiceResult.ok(2).map(lambda x: x * 10).data == 20

        failed = ServiceResult.fail(ErrorCode.INTERNAL_ERROR, "boom")
        assert failed.map(lambda x: x * 10) is failed

    def test_unwrap(self):
        """unwrap() returns data or raises."""
        assert ServiceResult.ok("data").unwrap() == "data"

        with pytest.raises(ValueError, match="boom"):
            ServiceResult.fail(ErrorCode.INTERNAL_ERROR, "boom").unwrap()

    def test_error_to_dict(self):
        """ServiceError serializes its code value."""
        error = ServiceError(ErrorCode.FILE_NOT_FOUND, "missing")

        assert error.to_dict() == {"code": "file_not_found", "message": "missing"}


# =============================================================================
# CodeLoader Tests
# =============================================================================

class TestCodeLoader:
    """Tests for CodeLoader."""

    def test_load_from_string(self):
        """Direct code is returned as is."""
        result = CodeLoader().load(code="public class A { }")

        assert result.success
        assert result.data == LoadedCode(content="public class A { }")

    def test_load_from_file(self, tmp_path):
        """Files are read and their path recorded."""
        path = tmp_path / "A.cs"
        path.write_text("public class A { }", encoding="utf-8")

        result = CodeLoader().load(file_path=str(path))

        assert result.success
        assert result.data.source_path == str(path)

    def test_file_path_preferred(self, tmp_path):
        """file_path wins over code."""
        path = tmp_path / "A.cs"
        path.write_text("from file", encoding="utf-8")

        result = CodeLoader().load(code="from code", file_path=str(path))

        assert result.data.content == "from file"

    def test_missing_input(self):
        """Neither code nor path is an error."""
        result = CodeLoader().load()

        assert result.error.code == ErrorCode.MISSING_INPUT

    def test_invalid_extension(self, tmp_path):
        """Only .cs files are accepted."""
        path = tmp_path / "module.py"
        path.write_text("x = 1", encoding="utf-8")

        result = CodeLoader().load(file_path=str(path))

        assert result.error.code == ErrorCode.INVALID_EXTENSION

    def test_file_not_found(self, tmp_path):
        """Missing files are reported."""
        result = CodeLoader().load(file_path=str(tmp_path / "Nope.cs"))

        assert result.error.code == ErrorCode.FILE_NOT_FOUND

    def test_directory_rejected(self, tmp_path):
        """A directory with a .cs suffix is not a file."""
        folder = tmp_path / "Folder.cs"
        folder.mkdir()

        result = CodeLoader().validate_path(str(folder))

        assert result.error.code == ErrorCode.VALIDATION_ERROR

    def test_too_large(self):
        """Size limit is enforced."""
        result = CodeLoader(max_size=10).load(code="public class A { }")

        assert result.error.code == ErrorCode.FILE_TOO_LARGE
        assert result.error.details["max_size"] == 10


# =============================================================================
# GenerationService Tests
# =============================================================================

class TestGenerationService:
    """Tests for GenerationService."""

    def test_generate_from_code(self, program_text_3):
        """Generates one file per public class."""
        result = GenerationService().generate(code=program_text_3)

        assert result.success
        assert [f.qualified_name for f in result.data.files] == [
            "Bebra.Bebra1.Bebra2.Tests.BebraClassTests"
        ]
        assert result.data.warnings == []

    def test_generate_saves_files(self, tmp_path, program_text_1):
        """Files are saved under output_dir by qualified name."""
        result = GenerationService().generate(code=program_text_1, output_dir=str(tmp_path))

        target = tmp_path / "HelloWorld.Tests.ProgramTests.cs"
        assert result.data.saved_to == [str(target)]
        assert target.read_text(encoding="utf-8") == result.data.files[0].to_code()

    def test_no_classes_warning(self):
        """Sources without public classes succeed with a warning."""
        result = GenerationService().generate(code="internal class Hidden { }")

        assert result.success
        assert result.data.files == []
        assert "No public classes found" in result.data.warnings

    def test_parse_error(self):
        """Malformed code maps to PARSE_ERROR with its position."""
        result = GenerationService().generate(code="public class A {")

        assert result.error.code == ErrorCode.PARSE_ERROR
        assert "line" in result.error.details

    def test_loader_error_propagates(self):
        """Loader failures keep their code."""
        result = GenerationService().generate()

        assert result.error.code == ErrorCode.MISSING_INPUT
        assert result.error.message.startswith("Cannot generate tests")

    def test_injected_engine(self):
        """The engine is injectable."""
        engine = Mock()
        engine.generate_files.side_effect = ParseError("bad", 1, 2)

        result = GenerationService(engine=engine).generate(code="anything")

        engine.generate_files.assert_called_once_with("anything")
        assert result.error.details == {"line": 1, "column": 2}

    def test_generate_code_only(self, program_text_1):
        """Returns (qualified name, code) pairs."""
        result = GenerationService().generate_code_only(code=program_text_1)

        [(name, code)] = result.data
        assert name == "HelloWorld.Tests.ProgramTests"
        assert "public class ProgramTests" in code


# =============================================================================
# PipelineService Tests
# =============================================================================

class TestPipelineService:
    """Tests for PipelineService."""

    @pytest.mark.asyncio
    async def test_run_success(self, tmp_path, write_sources, program_text_1, program_text_2):
        """Successful runs return the report."""
        paths = write_sources(one=program_text_1, two=program_text_2)

        result = await PipelineService().run(paths, str(tmp_path / "out"), 2, 2, 2)

        assert result.success
        assert len(result.data.written) == 2

    @pytest.mark.asyncio
    async def test_missing_paths(self, tmp_path):
        """Empty path list is MISSING_INPUT."""
        result = await PipelineService().run([], str(tmp_path))

        assert result.error.code == ErrorCode.MISSING_INPUT

    @pytest.mark.asyncio
    async def test_missing_output_dir(self, write_sources, program_text_1):
        """Blank output directory is MISSING_INPUT."""
        result = await PipelineService().run(write_sources(one=program_text_1), "  ")

        assert result.error.code == ErrorCode.MISSING_INPUT

    @pytest.mark.asyncio
    async def test_invalid_workers(self, tmp_path, write_sources, program_text_1):
        """Worker counts below 1 are VALIDATION_ERROR."""
        paths = write_sources(one=program_text_1)

        result = await PipelineService().run(paths, str(tmp_path / "out"), read_workers=0)

        assert result.error.code == ErrorCode.VALIDATION_ERROR

    @pytest.mark.asyncio
    async def test_non_integer_workers(self, tmp_path, write_sources, program_text_1):
        """Worker counts that are not integers are VALIDATION_ERROR, not exceptions."""
        paths = write_sources(one=program_text_1)

        result = await PipelineService().run(paths, str(tmp_path / "out"), read_workers="2")

        assert result.error.code == ErrorCode.VALIDATION_ERROR
        assert "read_workers" in result.error.message

    @pytest.mark.asyncio
    async def test_stage_fault(self, tmp_path):
        """Stage faults are PIPELINE_ERROR with stage and item details."""
        missing = str(tmp_path / "Missing.cs")

        result = await PipelineService().run([missing], str(tmp_path / "out"))

        assert result.error.code == ErrorCode.PIPELINE_ERROR
        assert result.error.details == {"stage": "read", "item": missing}

    @pytest.mark.asyncio
    async def test_tolerant_run(self, tmp_path, write_sources, program_text_1):
        """With fail_fast off the run succeeds and lists failures."""
        paths = write_sources(one=program_text_1, bad="public class {")

        result = await PipelineService().run(paths, str(tmp_path / "out"), fail_fast=False)

        assert result.success
        assert len(result.data.failures) == 1
        assert result.data.failures[0].stage == "generate"
