"""Navigation tool: open an item or list in the Things window."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from things_mcp.tools import params
from things_mcp.tools.base import ToolHandler, ToolSpec

if TYPE_CHECKING:
    from things_mcp.executors import UrlExecutor


def build_show_handler(urls: UrlExecutor) -> ToolHandler:
    async def show(args: dict[str, Any]) -> str:
        await urls.run_url("show", args)
        if args.get("id"):
            return "🔍 Navigated to item in Things"
        return f"🔍 Navigated to: {args['query']}"

    return ToolHandler(
        "show",
        [
            ToolSpec(
                name="things_show",
                description="Navigate to a specific item or list in Things",
                schema=params.SHOW,
                execute=show,
            ),
        ],
    )
