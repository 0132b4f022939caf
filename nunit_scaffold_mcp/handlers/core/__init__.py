"""Registry for MCP tool definitions and handlers."""

# Tool definitions and handlers
from .scaffold_files import (
    TOOL_DEFINITION as SCAFFOLD_FILES_TOOL,
    handle as handle_scaffold_files,
)

from .scaffold_tests import (
    TOOL_DEFINITION as SCAFFOLD_TESTS_TOOL,
    handle as handle_scaffold_tests,
)


# All tool definitions
TOOLS = [
    SCAFFOLD_TESTS_TOOL,
    SCAFFOLD_FILES_TOOL,
]

# Tool name to handler mapping
HANDLERS = {
    "scaffold_tests": handle_scaffold_tests,
    "scaffold_files": handle_scaffold_files,
}


__all__ = [
    # Tool definitions
    "TOOLS",
    "SCAFFOLD_TESTS_TOOL",
    "SCAFFOLD_FILES_TOOL",
    # Handlers
    "HANDLERS",
    "handle_scaffold_tests",
    "handle_scaffold_files",
]
