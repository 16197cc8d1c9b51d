"""Things 3 MCP server."""

__version__ = "0.4.0"
