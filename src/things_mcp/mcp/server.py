"""MCP server for Things 3.

Exposes every tool in a :class:`~things_mcp.tools.registry.ToolRegistry`
over the MCP stdio transport. Argument validation is done by the tool
handlers, so the SDK's own input validation is switched off and every
outcome, error or not, reaches the client as a ``CallToolResult``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, TextContent, Tool

if TYPE_CHECKING:
    from things_mcp.config.schema import ThingsConfig
    from things_mcp.tools.base import ToolDefinition, ToolResponse
    from things_mcp.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


def _to_mcp_tools(definitions: list[ToolDefinition]) -> list[Tool]:
    return [
        Tool(
            name=definition.name,
            description=definition.description,
            inputSchema=definition.parameters_schema,
        )
        for definition in definitions
    ]


def _to_call_result(response: ToolResponse) -> CallToolResult:
    return CallToolResult(
        content=[TextContent(type="text", text=c.text) for c in response.content],
        isError=response.is_error,
    )


def create_server(registry: ToolRegistry, name: str = "things-mcp") -> Server:
    """Create an MCP server that lists and dispatches *registry*'s tools."""
    server: Server = Server(name)
    tools = _to_mcp_tools(registry.list_definitions())

    @server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
    async def list_tools() -> list[Tool]:
        """List available MCP tools."""
        return tools

    @server.call_tool(validate_input=False)  # type: ignore[untyped-decorator]
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> CallToolResult:
        """Handle tool calls."""
        response = await registry.dispatch(name, arguments)
        return _to_call_result(response)

    return server


async def run_server(config: ThingsConfig | None = None) -> None:
    """Start the MCP server on stdio."""
    from things_mcp.config.schema import ThingsConfig as TConfig
    from things_mcp.executors import ScriptExecutor
    from things_mcp.tools.registry import build_registry

    config = config or TConfig()
    registry = build_registry(config)
    server = create_server(registry, config.server.name)

    if config.server.check_availability:
        scripts = ScriptExecutor(config.executors)
        if not await scripts.test_availability():
            logger.warning(
                "Things 3 does not appear to be running. "
                "Tools will fail until it is opened."
            )

    logger.info("Starting %s with %d tools", config.server.name, len(registry))
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )
