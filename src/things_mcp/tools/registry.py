"""Tool registry: maps tool names to the handlers that serve them.

Provides registration, lookup, discovery listing, and dispatch for
handlers that implement the :class:`ToolProvider` protocol.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from things_mcp.core.errors import ThingsUnknownToolError
from things_mcp.tools.base import ToolResponse, error_message

if TYPE_CHECKING:
    from things_mcp.config.schema import ThingsConfig
    from things_mcp.tools.base import ToolDefinition, ToolProvider

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Registry of tool handlers.

    Built once at startup and read-only afterwards. A tool name served
    by more than one handler belongs to the one registered last.
    """

    def __init__(self) -> None:
        self._handlers: list[ToolProvider] = []
        self._owners: dict[str, ToolProvider] = {}

    def register(self, handler: ToolProvider) -> None:
        """Register a handler and index each of its tool names."""
        self._handlers.append(handler)
        for definition in handler.definitions:
            previous = self._owners.get(definition.name)
            if previous is not None:
                logger.warning(
                    "Tool %s re-registered: %s replaces %s",
                    definition.name,
                    handler.name,
                    previous.name,
                )
            self._owners[definition.name] = handler

    def get_handler(self, tool_name: str) -> ToolProvider:
        """Get the handler serving *tool_name*.

        Raises:
            ThingsUnknownToolError: If no handler serves the tool.
        """
        if tool_name not in self._owners:
            raise ThingsUnknownToolError(tool_name)
        return self._owners[tool_name]

    def list_definitions(self) -> list[ToolDefinition]:
        """Return discovery entries in handler registration order."""
        return [
            definition
            for handler in self._handlers
            for definition in handler.definitions
            if self._owners.get(definition.name) is handler
        ]

    async def dispatch(self, tool_name: str, args: Any) -> ToolResponse:
        """Route a call to its handler; unknown names yield an error response."""
        try:
            handler = self.get_handler(tool_name)
        except ThingsUnknownToolError as exc:
            return ToolResponse.error(error_message(exc))
        return await handler.handle(tool_name, args)

    def __len__(self) -> int:
        return len(self._owners)

    def __contains__(self, tool_name: str) -> bool:
        return tool_name in self._owners

    def list_names(self) -> list[str]:
        """Return names of all registered tools."""
        return [definition.name for definition in self.list_definitions()]


def build_registry(config: ThingsConfig | None = None) -> ToolRegistry:
    """Construct the executors once and register every Things tool handler."""
    from things_mcp.config.schema import ThingsConfig as TConfig
    from things_mcp.core.auth import AuthGate
    from things_mcp.executors import ScriptExecutor, UrlExecutor
    from things_mcp.things.payload import PayloadBuilder
    from things_mcp.tools.add import build_add_handler
    from things_mcp.tools.get import build_get_handler
    from things_mcp.tools.search import build_search_handler
    from things_mcp.tools.show import build_show_handler
    from things_mcp.tools.update import build_update_handler

    config = config or TConfig()
    auth = AuthGate(config.auth.token_env, config.auth.commands)
    scripts = ScriptExecutor(config.executors)
    urls = UrlExecutor(auth, config.executors)
    payloads = PayloadBuilder()

    registry = ToolRegistry()
    registry.register(build_add_handler(urls, payloads))
    registry.register(build_update_handler(urls, payloads))
    registry.register(build_get_handler(scripts, strict=config.parser.strict))
    registry.register(build_show_handler(urls))
    registry.register(build_search_handler(urls))
    return registry
