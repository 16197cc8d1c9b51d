"""Command executors: osascript scripts and the things:/// URL scheme."""

from things_mcp.executors.script import ScriptExecutor
from things_mcp.executors.url import UrlExecutor

__all__ = ["ScriptExecutor", "UrlExecutor"]
