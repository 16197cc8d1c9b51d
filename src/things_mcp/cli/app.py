"""Main CLI application.

Click commands for the Things MCP server: serve, tools, check.
"""

from __future__ import annotations

import asyncio
import json as json_mod
import logging
import sys
from typing import TYPE_CHECKING

import click

from things_mcp import __version__
from things_mcp.config.loader import load_config
from things_mcp.core.errors import ConfigError

if TYPE_CHECKING:
    from things_mcp.config.schema import LoggingConfig, ThingsConfig

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


# ── Helpers ──────────────────────────────────────────────────────


def _error(msg: str) -> None:
    """Print an error message to stderr and exit."""
    click.echo(f"Error: {msg}", err=True)
    sys.exit(1)


def _load_config(config_path: str | None) -> ThingsConfig:
    """Load config with user-friendly error handling."""
    try:
        return load_config(path=config_path)
    except ConfigError as e:
        _error(str(e))
        raise  # unreachable, keeps mypy happy


def _setup_logging(config: LoggingConfig) -> None:
    """Route logs to stderr or a file; stdout belongs to the MCP transport."""
    handler: logging.Handler
    if config.file:
        handler = logging.FileHandler(config.file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(config.level.upper())


# ── CLI group ────────────────────────────────────────────────────


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="things-mcp")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True),
    default=None,
    help="Path to config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None) -> None:
    """things-mcp - MCP server for Things 3.

    Lets AI assistants read and write your Things 3 to-dos.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ── serve ────────────────────────────────────────────────────────


@cli.command()
@click.pass_context
def serve(ctx: click.Context) -> None:
    """Start the MCP server on stdio."""
    from things_mcp.mcp.server import run_server

    config = _load_config(ctx.obj["config_path"])
    _setup_logging(config.logging)
    asyncio.run(run_server(config))


# ── tools ────────────────────────────────────────────────────────


@cli.command()
@click.option("--json", "as_json", is_flag=True, default=False, help="Output JSON.")
@click.pass_context
def tools(ctx: click.Context, as_json: bool) -> None:
    """List the tools the server exposes."""
    from things_mcp.tools.registry import build_registry

    config = _load_config(ctx.obj["config_path"])
    definitions = build_registry(config).list_definitions()

    if as_json:
        click.echo(
            json_mod.dumps(
                [
                    {
                        "name": d.name,
                        "description": d.description,
                        "inputSchema": d.parameters_schema,
                    }
                    for d in definitions
                ],
                indent=2,
                ensure_ascii=False,
            )
        )
        return

    from things_mcp.cli.display import ToolDisplay

    ToolDisplay().tool_table(definitions)


# ── check ────────────────────────────────────────────────────────


@cli.command()
@click.pass_context
def check(ctx: click.Context) -> None:
    """Check whether Things 3 is running."""
    from things_mcp.cli.display import ToolDisplay
    from things_mcp.executors import ScriptExecutor

    config = _load_config(ctx.obj["config_path"])
    running = asyncio.run(ScriptExecutor(config.executors).test_availability())
    ToolDisplay().availability(running)
    if not running:
        sys.exit(1)
