"""Core errors, sanitizers, and the auth gate."""

from things_mcp.core.auth import AuthGate
from things_mcp.core.errors import (
    ConfigError,
    FieldIssue,
    ThingsAuthError,
    ThingsError,
    ThingsNotFoundError,
    ThingsParseError,
    ThingsPayloadTooLargeError,
    ThingsScriptError,
    ThingsScriptNotFoundError,
    ThingsTimeoutError,
    ThingsUnknownToolError,
    ThingsUrlTooLongError,
    ThingsValidationError,
)
from things_mcp.core.sanitize import (
    sanitize_for_url,
    sanitize_script_arg,
    validate_things_id,
)

__all__ = [
    "AuthGate",
    "ConfigError",
    "FieldIssue",
    "ThingsAuthError",
    "ThingsError",
    "ThingsNotFoundError",
    "ThingsParseError",
    "ThingsPayloadTooLargeError",
    "ThingsScriptError",
    "ThingsScriptNotFoundError",
    "ThingsTimeoutError",
    "ThingsUnknownToolError",
    "ThingsUrlTooLongError",
    "ThingsValidationError",
    "sanitize_for_url",
    "sanitize_script_arg",
    "validate_things_id",
]
