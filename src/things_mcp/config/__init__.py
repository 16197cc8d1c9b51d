"""Configuration loading and validation."""

from things_mcp.config.loader import load_config
from things_mcp.config.schema import (
    AuthConfig,
    ExecutorConfig,
    LoggingConfig,
    ParserConfig,
    ServerConfig,
    ThingsConfig,
)

__all__ = [
    "AuthConfig",
    "ExecutorConfig",
    "LoggingConfig",
    "ParserConfig",
    "ServerConfig",
    "ThingsConfig",
    "load_config",
]
