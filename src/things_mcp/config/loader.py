"""Load ``ThingsConfig`` from layered TOML sources.

Sources, lowest priority first:

=========  ===============================================
user       ``$XDG_CONFIG_HOME/things-mcp/config.toml``
project    ``./things-mcp.toml``
env        file named by ``$THINGS_MCP_CONFIG``
explicit   ``path`` argument (the CLI's ``--config``)
overrides  ``overrides`` argument
=========  ===============================================

Tables merge key by key; any other value replaces what came before.
The Things auth token never passes through here: ``auth.token_env``
only names the variable :class:`~things_mcp.core.auth.AuthGate` reads.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from things_mcp.core.errors import ConfigError

from .schema import ThingsConfig

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)

CONFIG_ENV = "THINGS_MCP_CONFIG"
APP_DIR = "things-mcp"
PROJECT_FILE = "things-mcp.toml"


def _optional_sources() -> Iterator[tuple[str, Path]]:
    xdg = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    yield "user", Path(xdg) / APP_DIR / "config.toml"
    yield "project", Path.cwd() / PROJECT_FILE


def _required_sources(path: str | Path | None) -> Iterator[tuple[str, Path]]:
    """Sources that were asked for by name and so must exist."""
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        if not Path(env_path).is_file():
            msg = f"{CONFIG_ENV} points to non-existent file: {env_path}"
            raise ConfigError(msg)
        yield "env", Path(env_path)
    if path is not None:
        if not Path(path).is_file():
            msg = f"Config file not found: {path}"
            raise ConfigError(msg)
        yield "explicit", Path(path)


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e


def _deep_merge(
    base: dict[str, Any], override: dict[str, Any], prefix: str = ""
) -> dict[str, Any]:
    """Merge *override* onto a copy of *base*, table by table.

    A table may not be replaced by a plain value or the reverse
    (``executors = 5``); the dotted key is reported.
    """
    merged = dict(base)
    for key, value in override.items():
        dotted = f"{prefix}{key}"
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value, f"{dotted}.")
        elif key in merged and isinstance(current, dict) != isinstance(value, dict):
            raise ConfigError(f"{dotted}: cannot mix a table with a plain value")
        else:
            merged[key] = value
    return merged


def _describe_errors(error: ValidationError) -> str:
    """One ``section.key: reason`` entry per failed field."""
    parts = []
    for issue in error.errors():
        where = ".".join(str(loc) for loc in issue["loc"]) or "config"
        parts.append(f"{where}: {issue['msg']}")
    return "; ".join(parts)


def load_config(
    path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> ThingsConfig:
    """Merge every config source and validate the result.

    Raises:
        ConfigError: A named file is missing, a file is not valid TOML,
            tables and values collide, or a field fails validation.
    """
    loaded: list[str] = []
    data: dict[str, Any] = {}

    sources = [
        (label, p) for label, p in _optional_sources() if p.is_file()
    ] + list(_required_sources(path))
    for label, source in sources:
        data = _deep_merge(data, _read_toml(source))
        loaded.append(str(source))
        logger.debug("Loaded %s config from %s", label, source)

    if overrides:
        data = _deep_merge(data, overrides)

    try:
        return ThingsConfig.model_validate(data)
    except ValidationError as e:
        origin = f" ({', '.join(loaded)})" if loaded else ""
        msg = f"Configuration validation failed{origin}: {_describe_errors(e)}"
        raise ConfigError(msg) from e
