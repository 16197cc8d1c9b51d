"""Pydantic models for things-mcp configuration."""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field, field_validator


class ExecutorConfig(BaseModel):
    """Timeouts, limits, and binaries for the command executors."""

    script_timeout_ms: int = 30_000
    availability_timeout_ms: int = 5_000
    url_timeout_ms: int = 5_000
    json_timeout_ms: int = 10_000
    max_url_length: int = 2048
    scripts_dir: str | None = None
    osascript: str = "osascript"
    opener: str = "open"


class AuthConfig(BaseModel):
    """Where the Things auth token lives and which commands need it.

    The token itself is never part of the config, only the name of the
    environment variable holding it.
    """

    token_env: str = "THINGS_AUTH_TOKEN"
    commands: list[str] = Field(default_factory=lambda: ["update", "update-project"])


class ParserConfig(BaseModel):
    """AppleScript output parsing."""

    strict: bool = False


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file: str = ""

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            msg = f"unknown log level {value!r}"
            raise ValueError(msg)
        return level


class ServerConfig(BaseModel):
    """MCP server settings."""

    name: str = "things-mcp"
    check_availability: bool = True


class ThingsConfig(BaseModel):
    """Top-level configuration for things-mcp."""

    executors: ExecutorConfig = Field(default_factory=ExecutorConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    parser: ParserConfig = Field(default_factory=ParserConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
