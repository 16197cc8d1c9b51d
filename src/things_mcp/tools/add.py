"""Create tools: new to-dos and projects through the JSON command."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from things_mcp.tools import params
from things_mcp.tools.base import ToolHandler, ToolSpec

if TYPE_CHECKING:
    from things_mcp.executors import UrlExecutor
    from things_mcp.things.payload import PayloadBuilder


def build_add_handler(urls: UrlExecutor, payloads: PayloadBuilder) -> ToolHandler:
    async def add_todo(args: dict[str, Any]) -> str:
        await urls.run_json([payloads.todo(args)])
        return f'✅ To-do created successfully: "{args["title"]}"'

    async def add_project(args: dict[str, Any]) -> str:
        await urls.run_json([payloads.project(args)])
        count = len(args.get("items") or ())
        suffix = f" ({count} items)" if count else ""
        return f'✅ Project created successfully: "{args["title"]}"{suffix}'

    return ToolHandler(
        "add",
        [
            ToolSpec(
                name="things_add_todo",
                description="Add a new to-do to Things",
                schema=params.ADD_TODO,
                execute=add_todo,
            ),
            ToolSpec(
                name="things_add_project",
                description=(
                    "Add a new project to Things, optionally with an ordered "
                    "list of to-dos and headings"
                ),
                schema=params.ADD_PROJECT,
                execute=add_project,
            ),
        ],
    )
