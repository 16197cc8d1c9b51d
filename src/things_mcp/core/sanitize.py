"""String sanitizers for arguments that cross a process boundary.

``sanitize_script_arg`` guards values placed on an osascript command
line; ``sanitize_for_url`` cleans values before percent-encoding.
"""

from __future__ import annotations

import re

from things_mcp.core.errors import ThingsValidationError

MAX_SCRIPT_ARG_LENGTH = 255

_SAFE_ARG_RE = re.compile(r"[\w\s\-.@]+", re.ASCII)
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")
_THINGS_ID_RE = re.compile(
    r"[0-9A-F]{8}-[0-9A-F]{4}-[0-9A-F]{4}-[0-9A-F]{4}-[0-9A-F]{12}", re.IGNORECASE
)


def sanitize_script_arg(value: str, field: str) -> str:
    """Validate an AppleScript argument against the safe character class.

    Only letters, digits, underscore, whitespace, hyphen, dot and ``@``
    are allowed, so shell metacharacters never reach the command line.

    Raises:
        ThingsValidationError: If the value is empty, too long, or unsafe.
    """
    if not value:
        raise ThingsValidationError(f"{field} cannot be empty", field)

    if len(value) > MAX_SCRIPT_ARG_LENGTH:
        msg = f"{field} is too long (max {MAX_SCRIPT_ARG_LENGTH} characters)"
        raise ThingsValidationError(msg, field)

    if not _SAFE_ARG_RE.fullmatch(value):
        msg = (
            f"{field} contains invalid characters. Only letters, numbers, "
            "spaces, hyphens, dots, and @ are allowed."
        )
        raise ThingsValidationError(msg, field)

    return value


def sanitize_for_url(value: str) -> str:
    """Strip control characters, keeping tab, newline and carriage return."""
    return _CONTROL_CHARS_RE.sub("", value)


def validate_things_id(item_id: str) -> str:
    """Check that *item_id* is a Things UUID: 8-4-4-4-12 hex groups."""
    if not _THINGS_ID_RE.fullmatch(item_id):
        raise ThingsValidationError(
            "Invalid Things ID format. "
            "Expected format: XXXXXXXX-XXXX-XXXX-XXXX-XXXXXXXXXXXX",
            "id",
        )
    return item_id
