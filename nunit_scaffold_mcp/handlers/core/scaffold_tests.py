"""MCP handler for scaffold_tests (delegates to GenerationService)."""

from __future__ import annotations

from mcp.types import TextContent, Tool

from ...services import GenerationResult, GenerationService, ServiceResult

# =============================================================================
# Tool Definition
# =============================================================================

TOOL_DEFINITION = Tool(
    name="scaffold_tests",
    description=(
        "Generate NUnit test scaffolds for C# code. "
        "Each public class gets a [TestFixture] with a [SetUp] that mocks "
        "interface-typed constructor dependencies with Moq, and one "
        "Arrange/Act/Assert skeleton per public method that fails until completed."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "file_path": {
                "type": "string",
                "description": "Path to the C# file to scaffold tests for"
            },
            "code": {
                "type": "string",
                "description": "C# code content (alternative to file_path)"
            },
            "output_dir": {
                "type": "string",
                "description": "Directory where to save the generated test files (optional)"
            }
        }
    }
)


# =============================================================================
# Handler
# =============================================================================

async def handle(arguments: dict) -> list[TextContent]:
    """Scaffold tests from 'code' or 'file_path' and return the generated files."""
    service = GenerationService()

    result = service.generate(
        code=arguments.get("code"),
        file_path=arguments.get("file_path"),
        output_dir=arguments.get("output_dir")
    )

    if not result.success:
        return _error_response(result)

    return [TextContent(type="text", text=format_generation_result(result.data))]


# =============================================================================
# Response Formatting
# =============================================================================

def format_generation_result(result: GenerationResult) -> str:
    """Format scaffolding result as readable text."""
    lines = [f"Generated {len(result.files)} test class(es)"]

    for test_file in result.files:
        lines.append(
            f"  - {test_file.qualified_name}: "
            f"{len(test_file.test_class.test_methods)} test method(s)"
        )

    if result.warnings:
        lines.append("")
        lines.append("Warnings/Notes:")
        for warning in result.warnings:
            lines.append(f"  - {warning}")

    if result.saved_to:
        lines.append("")
        lines.append("Saved to:")
        for path in result.saved_to:
            lines.append(f"  - {path}")

    for test_file in result.files:
        lines.extend([
            "",
            "=" * 60,
            f"{test_file.qualified_name}.cs",
            "=" * 60,
            "",
            test_file.to_code()
        ])

    return "\n".join(lines)


# =============================================================================
# Helpers
# =============================================================================

def _error_response(result: ServiceResult) -> list[TextContent]:
    """Create error response from failed ServiceResult."""
    return [TextContent(type="text", text=f"Error: {result.error.message}")]
