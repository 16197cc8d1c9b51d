"""Exception hierarchy for things-mcp.

Every module imports from here. The hierarchy is:

    ThingsError(message, code, details)
    ├── ThingsNotFoundError(item_type, id)
    ├── ThingsScriptNotFoundError(script_name)
    ├── ThingsAuthError
    ├── ThingsValidationError(issues)
    ├── ThingsTimeoutError(operation, timeout_ms)
    ├── ThingsScriptError(script_name, error)
    ├── ThingsUrlTooLongError(length, max_length)
    ├── ThingsPayloadTooLargeError(length, max_length)
    ├── ThingsUnknownToolError(name)
    ├── ThingsParseError
    └── ConfigError

Only ``message`` is ever shown to a caller. Raw process output and
exception text are kept in ``details``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any


class ThingsError(Exception):
    """Base exception for all things-mcp errors."""

    def __init__(
        self,
        message: str,
        code: str = "THINGS_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": type(self).__name__,
            "message": self.message,
            "code": self.code,
            "details": self.details,
        }


# ─── Lookup Errors ────────────────────────────────────────────


class ThingsNotFoundError(ThingsError):
    """A referenced Things item does not exist."""

    def __init__(self, item_type: str, item_id: str) -> None:
        super().__init__(
            f"{item_type} not found: {item_id}",
            "NOT_FOUND",
            {"item_type": item_type, "id": item_id},
        )


class ThingsScriptNotFoundError(ThingsError):
    """A bundled AppleScript resource is missing (deployment defect)."""

    def __init__(self, script_name: str) -> None:
        self.script_name = script_name
        super().__init__(
            f"AppleScript not found: {script_name}",
            "NOT_FOUND",
            {"script_name": script_name},
        )


class ThingsUnknownToolError(ThingsError):
    """Dispatch to a tool name nobody registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}", "UNKNOWN_TOOL", {"name": name})


# ─── Auth Errors ──────────────────────────────────────────────


class ThingsAuthError(ThingsError):
    """Missing or malformed Things auth token."""

    def __init__(
        self,
        message: str = "Authentication failed",
        token_env: str = "THINGS_AUTH_TOKEN",
    ) -> None:
        super().__init__(
            f"{message}. Please check your {token_env} in MCP settings.",
            "AUTH_ERROR",
            {"token_env": token_env},
        )


# ─── Validation Errors ────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class FieldIssue:
    """One violated constraint, located by its dotted/indexed path."""

    path: str
    message: str

    def __str__(self) -> str:
        if not self.path:
            return self.message
        return f"{self.path}: {self.message}"


class ThingsValidationError(ThingsError):
    """Input failed schema or sanitizer checks.

    Accepts either a single message (with an optional field name) or the
    list of :class:`FieldIssue` produced by the schema engine.
    """

    def __init__(
        self,
        message: str | list[FieldIssue],
        field: str | None = None,
    ) -> None:
        if isinstance(message, list):
            self.issues = message
        else:
            self.issues = [FieldIssue(field or "", message)]
        text = ", ".join(str(issue) for issue in self.issues)
        super().__init__(
            text,
            "VALIDATION_ERROR",
            {"field": field, "issues": [str(i) for i in self.issues]},
        )


class ThingsParseError(ThingsError):
    """Malformed AppleScript output."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "PARSE_ERROR")


# ─── Execution Errors ─────────────────────────────────────────


class ThingsTimeoutError(ThingsError):
    """An external command exceeded its time budget."""

    def __init__(self, operation: str, timeout_ms: int) -> None:
        self.operation = operation
        self.timeout_ms = timeout_ms
        super().__init__(
            f"Operation timed out after {timeout_ms}ms: {operation}",
            "TIMEOUT",
            {"operation": operation, "timeout": timeout_ms},
        )


_EXECUTION_ERROR_RE = re.compile(r"execution error:\s*(.+?)\s*\(-?\d+\)")


class ThingsScriptError(ThingsError):
    """AppleScript exited with an error.

    The headline message is humanized from osascript's stderr; the raw
    text stays in ``details["error"]``.
    """

    def __init__(self, script_name: str, error: str) -> None:
        self.script_name = script_name
        super().__init__(
            self.parse_error_message(error, script_name),
            "SCRIPT_ERROR",
            {"script_name": script_name, "error": error},
        )

    @staticmethod
    def parse_error_message(error: str, script_name: str) -> str:
        # osascript format: /path/x.applescript:12:40: execution error: <msg> (-1728)
        match = _EXECUTION_ERROR_RE.search(error)
        if not match:
            return f"AppleScript execution failed: {script_name}"

        message = match.group(1)
        if "not found:" in message:
            return message
        if "Things3 is not running" in message or "isn't running" in message:
            return "Things 3 is not running. Please open Things 3 and try again."
        return message


class ThingsUrlTooLongError(ThingsError):
    """Assembled things:/// URL exceeds the flat-mode cap."""

    def __init__(self, length: int, max_length: int) -> None:
        super().__init__(
            "URL too long. Consider using fewer items or shorter text.",
            "URL_TOO_LONG",
            {"length": length, "max": max_length},
        )


class ThingsPayloadTooLargeError(ThingsError):
    """Encoded JSON payload exceeds the structured-mode cap."""

    def __init__(self, length: int, max_length: int) -> None:
        super().__init__(
            "JSON payload too large. Try splitting the request into smaller batches.",
            "PAYLOAD_TOO_LARGE",
            {"length": length, "max": max_length},
        )


# ─── Configuration Errors ─────────────────────────────────────


class ConfigError(ThingsError):
    """Invalid configuration."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "CONFIG_ERROR")
