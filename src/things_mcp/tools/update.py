"""Update tools.

To-do and project fields go through the flat ``update`` and
``update-project`` commands. Appending items to a project needs the
structured form, so it goes through the JSON command as an update
record. All three require the auth token.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from things_mcp.tools import params
from things_mcp.tools.base import ToolHandler, ToolSpec

if TYPE_CHECKING:
    from things_mcp.executors import UrlExecutor
    from things_mcp.things.payload import PayloadBuilder


def _label(args: dict[str, Any]) -> str:
    return args.get("title") or f"ID {args['id']}"


def build_update_handler(urls: UrlExecutor, payloads: PayloadBuilder) -> ToolHandler:
    async def update_todo(args: dict[str, Any]) -> str:
        await urls.run_url("update", args)
        return f"✅ To-do updated successfully: {_label(args)}"

    async def update_project(args: dict[str, Any]) -> str:
        await urls.run_url("update-project", args)
        return f"✅ Project updated successfully: {_label(args)}"

    async def add_items_to_project(args: dict[str, Any]) -> str:
        record = payloads.add_to_project(args["project_id"], args["items"])
        await urls.run_json([record])
        return f"✅ Added {len(args['items'])} items to project {args['project_id']}"

    return ToolHandler(
        "update",
        [
            ToolSpec(
                name="things_update_todo",
                description="Update an existing to-do in Things",
                schema=params.UPDATE_TODO,
                execute=update_todo,
            ),
            ToolSpec(
                name="things_update_project",
                description="Update an existing project in Things",
                schema=params.UPDATE_PROJECT,
                execute=update_project,
            ),
            ToolSpec(
                name="things_add_items_to_project",
                description=(
                    "Add to-dos and headings to an existing project. Items are a "
                    "flat list where each heading groups the to-dos that follow it."
                ),
                schema=params.ADD_ITEMS_TO_PROJECT,
                execute=add_items_to_project,
            ),
        ],
    )
