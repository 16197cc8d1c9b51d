"""Things URL scheme executor.

Two modes share one auth gate and one opener:

- flat: ``things:///<command>?key=value&...`` built from a parameter
  mapping, capped at ``max_url_length``;
- JSON: ``things:///json?data=<encoded JSON>`` built from an ordered list
  of ``{type, attributes}`` records, capped at four times that length.

URLs are built in full before the opener process is spawned.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from things_mcp.core.errors import (
    ThingsError,
    ThingsPayloadTooLargeError,
    ThingsUrlTooLongError,
)
from things_mcp.core.sanitize import sanitize_for_url

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from things_mcp.config.schema import ExecutorConfig
    from things_mcp.core.auth import AuthGate

logger = logging.getLogger(__name__)

SCHEME = "things"
JSON_COMMAND = "json"
JSON_LENGTH_FACTOR = 4

# Parameter key -> (query key, separator) for list values.
_ARRAY_KEYS: dict[str, tuple[str, str]] = {
    "tags": ("tags", ","),
    "tag_names": ("tags", ","),
    "filter": ("filter", ","),
    "checklist_items": ("checklist-items", "\n"),
    "todos": ("to-dos", "\n"),
}


def encode_component(value: str) -> str:
    """Percent-encode like JavaScript's ``encodeURIComponent``."""
    return quote(value, safe="-_.!~*'()")


def kebab(key: str) -> str:
    return key.replace("_", "-")


def _encode_param(key: str, value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        if not value:
            return None
        name, sep = _ARRAY_KEYS.get(key, (kebab(key), ","))
        joined = sep.join(sanitize_for_url(str(v)) for v in value)
        return f"{name}={encode_component(joined)}"
    if isinstance(value, bool):
        return f"{kebab(key)}={'true' if value else 'false'}"
    return f"{kebab(key)}={encode_component(sanitize_for_url(str(value)))}"


class UrlExecutor:
    """Builds things:/// URLs and hands them to the OS opener."""

    def __init__(self, auth: AuthGate, config: ExecutorConfig | None = None) -> None:
        from things_mcp.config.schema import ExecutorConfig as ExConfig

        self._auth = auth
        self._config = config or ExConfig()

    @property
    def max_url_length(self) -> int:
        return self._config.max_url_length

    @property
    def max_json_length(self) -> int:
        return self._config.max_url_length * JSON_LENGTH_FACTOR

    # ── Flat mode ─────────────────────────────────────────────

    def build_url(self, command: str, params: Mapping[str, Any]) -> str:
        """Return the flat-mode URL for *command*.

        Raises:
            ThingsAuthError: If *command* needs a token and none is usable.
            ThingsUrlTooLongError: If the URL exceeds ``max_url_length``.
        """
        query: list[str] = []
        if self._auth.requires_auth(command):
            query.append(f"auth-token={encode_component(self._auth.get_token())}")

        for key, value in params.items():
            encoded = _encode_param(key, value)
            if encoded is not None:
                query.append(encoded)

        url = f"{SCHEME}:///{command}?{'&'.join(query)}"
        if len(url) > self.max_url_length:
            raise ThingsUrlTooLongError(len(url), self.max_url_length)
        return url

    async def run_url(self, command: str, params: Mapping[str, Any]) -> str:
        url = self.build_url(command, params)
        await self._open(url, command, self._config.url_timeout_ms)
        return url

    # ── JSON mode ─────────────────────────────────────────────

    def build_json_url(self, items: Sequence[Mapping[str, Any]]) -> str:
        """Return the ``things:///json`` URL carrying *items* in order.

        The auth token, when needed, is a top-level query parameter; it
        is never copied into item attributes.

        Raises:
            ThingsAuthError: If an item is an update and no token is usable.
            ThingsPayloadTooLargeError: If the URL exceeds ``max_json_length``.
        """
        query: list[str] = []
        if self._auth.requires_auth_for_items(items):
            query.append(f"auth-token={encode_component(self._auth.get_token())}")

        payload = json.dumps(list(items), ensure_ascii=False, separators=(",", ":"))
        query.append(f"data={encode_component(payload)}")

        url = f"{SCHEME}:///{JSON_COMMAND}?{'&'.join(query)}"
        if len(url) > self.max_json_length:
            raise ThingsPayloadTooLargeError(len(url), self.max_json_length)
        return url

    async def run_json(self, items: Sequence[Mapping[str, Any]]) -> str:
        url = self.build_json_url(items)
        await self._open(url, JSON_COMMAND, self._config.json_timeout_ms)
        return url

    # ── Opener ────────────────────────────────────────────────

    async def _open(self, url: str, command: str, timeout_ms: int) -> None:
        """Hand *url* to the OS opener; any failure becomes a ThingsError."""
        try:
            proc = await asyncio.create_subprocess_exec(
                self._config.opener,
                url,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
            try:
                _, stderr = await asyncio.wait_for(
                    proc.communicate(),
                    timeout=timeout_ms / 1000,
                )
            except TimeoutError:
                proc.kill()
                await proc.communicate()
                error = f"timed out after {timeout_ms}ms"
            else:
                error = None
                if proc.returncode != 0:
                    error = (stderr or b"").decode(errors="replace").strip() or (
                        f"exit status {proc.returncode}"
                    )
        except OSError as exc:
            error = str(exc)

        if error is not None:
            logger.debug("Things URL command %s failed: %s", command, error)
            raise ThingsError(
                f"Failed to execute Things URL command: {command}",
                "URL_EXECUTION_FAILED",
                {"command": command, "error": error},
            )
