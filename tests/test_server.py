"""Tests for the nunit-scaffold MCP server."""

import pytest
from mcp.types import TextContent


class TestServerBasics:
    """Basic server tests."""

    def test_version(self):
        """Test version is defined."""
        from nunit_scaffold_mcp import __version__
        assert __version__ == "0.1.0"

    def test_server_creation(self):
        """Test server can be created."""
        from nunit_scaffold_mcp.server import server
        assert server.name == "nunit-scaffold"

    def test_custom_server(self):
        """create_server builds independent instances."""
        from nunit_scaffold_mcp.server import create_server, server
        other = create_server(tools=[], handlers={})
        assert other is not server
        assert other.name == "nunit-scaffold"


class TestDispatch:
    """Tool routing."""

    @pytest.mark.asyncio
    async def test_unknown_tool(self):
        """Unknown tools return a message instead of raising."""
        from nunit_scaffold_mcp.server import dispatch
        result = await dispatch("nope", {})
        assert result[0].text == "Unknown tool: nope"

    @pytest.mark.asyncio
    async def test_routes_to_handler(self):
        """Known tools reach their handler."""
        from nunit_scaffold_mcp.server import dispatch
        result = await dispatch("scaffold_tests", {"code": "public class A { }"})
        assert "ATests" in result[0].text

    @pytest.mark.asyncio
    async def test_missing_arguments_become_empty_dict(self):
        """None arguments are passed as an empty dict."""
        from nunit_scaffold_mcp.server import dispatch
        received = []

        async def handler(arguments):
            received.append(arguments)
            return [TextContent(type="text", text="ok")]

        await dispatch("custom", None, {"custom": handler})
        assert received == [{}]
