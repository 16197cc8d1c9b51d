"""Things auth token lookup and the per-command auth policy.

Things requires an auth token for URL commands that modify existing
items. The token is read from the environment on every call and never
cached or logged.
"""

from __future__ import annotations

import os
import re
from typing import TYPE_CHECKING, Any

from things_mcp.core.errors import ThingsAuthError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

DEFAULT_TOKEN_ENV = "THINGS_AUTH_TOKEN"
DEFAULT_AUTH_COMMANDS = ("update", "update-project")

_MIN_TOKEN_LENGTH = 10
_TOKEN_RE = re.compile(r"[A-Za-z0-9\-_]+")


class AuthGate:
    """Single source of truth for whether a command needs the token.

    Both URL executor modes consult the same instance, so the flat
    and JSON paths can never disagree about the policy.
    """

    def __init__(
        self,
        token_env: str = DEFAULT_TOKEN_ENV,
        commands: Iterable[str] = DEFAULT_AUTH_COMMANDS,
    ) -> None:
        self._token_env = token_env
        self._commands = frozenset(commands)

    @property
    def token_env(self) -> str:
        return self._token_env

    def get_token(self) -> str:
        """Return the configured token.

        Raises:
            ThingsAuthError: If the token is unset, too short, or contains
                characters outside ``[A-Za-z0-9-_]``.
        """
        token = os.environ.get(self._token_env)
        if not token:
            msg = (
                f"{self._token_env} not configured. "
                "Get your token from Things → Settings → General → "
                "Enable Things URLs → Manage"
            )
            raise ThingsAuthError(msg, self._token_env)

        if len(token) < _MIN_TOKEN_LENGTH or not _TOKEN_RE.fullmatch(token):
            raise ThingsAuthError("Invalid auth token format", self._token_env)

        return token

    def requires_auth(self, command: str) -> bool:
        return command in self._commands

    def requires_auth_for_items(self, items: Iterable[Mapping[str, Any]]) -> bool:
        """JSON payloads need the token as soon as one item is an update."""
        return any(item.get("operation") == "update" for item in items)
