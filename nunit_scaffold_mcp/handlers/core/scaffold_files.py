"""MCP handler for scaffold_files (delegates to PipelineService)."""

from __future__ import annotations

import json

from mcp.types import TextContent, Tool

from ...services import PipelineService, ServiceResult

# =============================================================================
# Tool Definition
# =============================================================================

TOOL_DEFINITION = Tool(
    name="scaffold_files",
    description=(
        "Generate NUnit test scaffolds for many C# files concurrently. "
        "Files flow through read, generate and write stages, each with its own "
        "degree of parallelism; one <Namespace>.<Class>Tests.cs file is written "
        "per public class."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "paths": {
                "type": "array",
                "items": {"type": "string"},
                "description": "C# source files to scaffold"
            },
            "output_dir": {
                "type": "string",
                "description": "Directory receiving the generated test files"
            },
            "read_workers": {
                "type": "integer",
                "minimum": 1,
                "description": "Parallelism of the read stage (default: 1)"
            },
            "generate_workers": {
                "type": "integer",
                "minimum": 1,
                "description": "Parallelism of the generate stage (default: 1)"
            },
            "write_workers": {
                "type": "integer",
                "minimum": 1,
                "description": "Parallelism of the write stage (default: 1)"
            },
            "fail_fast": {
                "type": "boolean",
                "description": "Abort on the first failing file (default: true)"
            }
        },
        "required": ["paths", "output_dir"]
    }
)


# =============================================================================
# Handler
# =============================================================================

async def handle(arguments: dict) -> list[TextContent]:
    """Run the scaffolding pipeline and return a JSON report."""
    service = PipelineService()

    result = await service.run(
        paths=arguments.get("paths") or [],
        output_dir=arguments.get("output_dir", ""),
        read_workers=arguments.get("read_workers", 1),
        generate_workers=arguments.get("generate_workers", 1),
        write_workers=arguments.get("write_workers", 1),
        fail_fast=arguments.get("fail_fast", True)
    )

    if not result.success:
        return _error_response(result)

    return [TextContent(type="text", text=json.dumps(result.data.to_dict(), indent=2))]


# =============================================================================
# Helpers
# =============================================================================

def _error_response(result: ServiceResult) -> list[TextContent]:
    """Create error response from failed ServiceResult."""
    return [TextContent(type="text", text=f"Error: {result.error.message}")]
