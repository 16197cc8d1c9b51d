"""Tool protocol, response envelope, and the schema-driven tool handler.

A :class:`ToolHandler` owns a group of :class:`ToolSpec` entries and runs
every call through the same pipeline: look up the spec, validate the
arguments against its schema, run its execute function, and wrap the
outcome in a :class:`ToolResponse`. Handlers are composed from specs,
not subclassed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal, Protocol, runtime_checkable

from things_mcp.core.errors import (
    ThingsError,
    ThingsUnknownToolError,
    ThingsValidationError,
)
from things_mcp.schema import ObjectField, describe, validate

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ToolDefinition:
    """Discovery entry for a tool, as advertised to MCP clients."""

    name: str
    description: str
    parameters_schema: dict[str, Any]


@dataclass(frozen=True, slots=True)
class TextContent:
    text: str
    type: Literal["text"] = "text"


@dataclass(frozen=True, slots=True)
class ToolResponse:
    """Uniform envelope for both outcomes; only ``is_error`` differs."""

    content: tuple[TextContent, ...] = field(default_factory=tuple)
    is_error: bool = False

    @classmethod
    def text(cls, message: str) -> ToolResponse:
        return cls(content=(TextContent(message),))

    @classmethod
    def error(cls, message: str) -> ToolResponse:
        return cls(content=(TextContent(message),), is_error=True)


@dataclass(frozen=True, slots=True)
class ToolSpec:
    """One tool: its name, description, schema, and execute function."""

    name: str
    description: str
    schema: ObjectField
    execute: Callable[[dict[str, Any]], Awaitable[str]]

    def definition(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.name,
            description=self.description,
            parameters_schema=describe(self.schema),
        )


@runtime_checkable
class ToolProvider(Protocol):
    """Anything the registry can list and dispatch to."""

    @property
    def name(self) -> str:
        """Handler name, used in logs."""
        ...

    @property
    def definitions(self) -> list[ToolDefinition]:
        """Discovery entries for every tool this provider serves."""
        ...

    async def handle(self, tool_name: str, args: Any) -> ToolResponse:
        """Run *tool_name* with raw *args*. Must never raise."""
        ...


def error_message(exc: BaseException) -> str:
    """Caller-facing text for *exc*: the headline only, never raw detail."""
    if isinstance(exc, ThingsValidationError):
        return f"Invalid parameters: {exc.message}"
    if isinstance(exc, ThingsError):
        return exc.message
    return str(exc) or "An unexpected error occurred"


class ToolHandler:
    """Serves a fixed group of tools through validate → execute → format."""

    def __init__(self, name: str, specs: Sequence[ToolSpec]) -> None:
        self._name = name
        self._specs = {spec.name: spec for spec in specs}
        self._definitions = [spec.definition() for spec in self._specs.values()]

    @property
    def name(self) -> str:
        return self._name

    @property
    def definitions(self) -> list[ToolDefinition]:
        return list(self._definitions)

    def __contains__(self, tool_name: str) -> bool:
        return tool_name in self._specs

    async def handle(self, tool_name: str, args: Any) -> ToolResponse:
        try:
            spec = self._specs.get(tool_name)
            if spec is None:
                raise ThingsUnknownToolError(tool_name)
            params = validate(spec.schema, {} if args is None else args)
            result = await spec.execute(params)
        except ThingsError as exc:
            logger.info("Tool %s failed [%s]: %s", tool_name, exc.code, exc.message)
            return ToolResponse.error(error_message(exc))
        except Exception as exc:
            logger.exception("Unexpected error in tool %s", tool_name)
            return ToolResponse.error(error_message(exc))
        return ToolResponse.text(result)
