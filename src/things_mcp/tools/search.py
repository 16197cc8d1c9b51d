"""Search tool."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from things_mcp.tools import params
from things_mcp.tools.base import ToolHandler, ToolSpec

if TYPE_CHECKING:
    from things_mcp.executors import UrlExecutor


def build_search_handler(urls: UrlExecutor) -> ToolHandler:
    async def search(args: dict[str, Any]) -> str:
        await urls.run_url("search", args)
        if args.get("query"):
            return f'🔍 Search opened with query: "{args["query"]}"'
        return "🔍 Search opened in Things"

    return ToolHandler(
        "search",
        [
            ToolSpec(
                name="things_search",
                description="Search in Things",
                schema=params.SEARCH,
                execute=search,
            ),
        ],
    )
