"""Read tools: list queries and to-do details via AppleScript."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from things_mcp.things.parser import parse_record_list, parse_todo_details
from things_mcp.tools import params
from things_mcp.tools.base import ToolHandler, ToolSpec

if TYPE_CHECKING:
    from things_mcp.executors import ScriptExecutor
    from things_mcp.schema import ObjectField


@dataclass(frozen=True, slots=True)
class ListQuery:
    """A read tool backed by one script and one record parser."""

    tool: str
    script: str
    kind: str
    key: str
    description: str
    schema: ObjectField = params.GET_LIST
    id_param: str | None = None


LIST_QUERIES: tuple[ListQuery, ...] = (
    ListQuery("things_get_inbox", "get-inbox", "todo", "todos",
              "Get all to-dos in the Inbox"),
    ListQuery("things_get_today", "get-today", "todo", "todos",
              "Get all to-dos scheduled for Today"),
    ListQuery("things_get_upcoming", "get-upcoming", "todo", "todos",
              "Get all scheduled to-dos (with dates)"),
    ListQuery("things_get_anytime", "get-anytime", "todo", "todos",
              "Get all to-dos in Anytime"),
    ListQuery("things_get_someday", "get-someday", "todo", "todos",
              "Get all to-dos in Someday"),
    ListQuery("things_get_logbook", "get-logbook", "todo", "todos",
              "Get completed to-dos from the Logbook"),
    ListQuery("things_get_projects", "get-projects", "project", "projects",
              "Get all active projects"),
    ListQuery("things_get_areas", "get-areas", "area", "areas",
              "Get all areas", params.NO_PARAMS),
    ListQuery("things_get_tags", "get-tags", "tag", "tags",
              "Get all tags", params.NO_PARAMS),
    ListQuery("things_get_project", "get-project-todos", "todo", "todos",
              "Get all to-dos in a specific project",
              params.GET_PROJECT, "project_id"),
    ListQuery("things_get_area", "get-area-items", "todo", "todos",
              "Get all items in a specific area",
              params.GET_AREA, "area_id"),
)


def _dumps(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def build_get_handler(scripts: ScriptExecutor, *, strict: bool = False) -> ToolHandler:
    def list_tool(query: ListQuery) -> ToolSpec:
        async def execute(args: dict[str, Any]) -> str:
            script_args = [args[query.id_param]] if query.id_param else []
            output = await scripts.run(
                query.script,
                script_args,
                max_results=args.get("max_results"),
            )
            records = parse_record_list(output, query.kind, strict=strict)
            return _dumps({query.key: [r.to_json_dict() for r in records]})

        return ToolSpec(
            name=query.tool,
            description=query.description,
            schema=query.schema,
            execute=execute,
        )

    async def todo_details(args: dict[str, Any]) -> str:
        output = await scripts.run("get-todo-details", [args["id"]])
        return _dumps(parse_todo_details(output).to_json_dict())

    specs = [list_tool(query) for query in LIST_QUERIES]
    specs.append(
        ToolSpec(
            name="things_get_todo_details",
            description=(
                "Get detailed information about a specific to-do, including "
                "notes, dates, status, and project"
            ),
            schema=params.GET_TODO_DETAILS,
            execute=todo_details,
        )
    )
    return ToolHandler("get", specs)
