"""Tests for the AppleScript executor."""

from __future__ import annotations

import shlex
from typing import TYPE_CHECKING, Any
from unittest.mock import AsyncMock, patch

import pytest

from things_mcp.config.schema import ExecutorConfig
from things_mcp.core.errors import (
    ThingsScriptError,
    ThingsScriptNotFoundError,
    ThingsTimeoutError,
    ThingsValidationError,
)
from things_mcp.executors.script import DEFAULT_SCRIPTS_DIR, ScriptExecutor, quote_arg

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

SHELL = "things_mcp.executors.script.asyncio.create_subprocess_shell"
EXEC = "things_mcp.executors.script.asyncio.create_subprocess_exec"

BUNDLED = (
    "get-inbox",
    "get-today",
    "get-upcoming",
    "get-anytime",
    "get-someday",
    "get-logbook",
    "get-projects",
    "get-areas",
    "get-tags",
    "get-project-todos",
    "get-area-items",
    "get-todo-details",
)


# ── Quoting ──────────────────────────────────────────────────────


class TestQuoteArg:
    def test_plain(self) -> None:
        assert quote_arg("abc") == "'abc'"

    def test_embedded_quote(self) -> None:
        assert quote_arg("it's") == "'it'\"'\"'s'"

    @pytest.mark.parametrize("value", ["a b", "it's", "$HOME", "a;b", ""])
    def test_shell_round_trip(self, value: str) -> None:
        assert shlex.split(quote_arg(value)) == [value]


# ── Command assembly ─────────────────────────────────────────────


class TestBuildCommand:
    def test_default_scripts_dir_is_packaged(self) -> None:
        assert ScriptExecutor().scripts_dir == DEFAULT_SCRIPTS_DIR

    @pytest.mark.parametrize("name", BUNDLED)
    def test_bundled_scripts_exist(self, name: str) -> None:
        assert ScriptExecutor().script_path(name).is_file()

    def test_quotes_path_and_args(
        self, executor_config: ExecutorConfig, scripts_dir: Path
    ) -> None:
        command = ScriptExecutor(executor_config).build_command(
            "get-project-todos", ["abc-123"], max_results=5
        )
        path = scripts_dir / "get-project-todos.applescript"
        assert command == f"osascript '{path}' 'abc-123' '5'"

    def test_missing_script(self, executor_config: ExecutorConfig) -> None:
        with pytest.raises(ThingsScriptNotFoundError):
            ScriptExecutor(executor_config).build_command("get-nothing")

    def test_unsafe_argument(self, executor_config: ExecutorConfig) -> None:
        with pytest.raises(ThingsValidationError, match=r"argument\[1\]"):
            ScriptExecutor(executor_config).build_command(
                "get-inbox", ["ok", "x'; rm -rf ~"]
            )

    def test_empty_argument(self, executor_config: ExecutorConfig) -> None:
        with pytest.raises(ThingsValidationError, match=r"argument\[0\] cannot be empty"):
            ScriptExecutor(executor_config).build_command("get-inbox", [""])


# ── Running ──────────────────────────────────────────────────────


class TestRun:
    async def test_returns_stripped_stdout(
        self,
        executor_config: ExecutorConfig,
        make_process: Callable[..., Any],
    ) -> None:
        proc = make_process(stdout=b"id1|Task|Area|\n\n")
        with patch(SHELL, AsyncMock(return_value=proc)) as spawn:
            out = await ScriptExecutor(executor_config).run("get-inbox", max_results=3)
        assert out == "id1|Task|Area|"
        command = spawn.call_args.args[0]
        assert command.endswith("'3'")

    async def test_spawn_not_called_for_bad_args(
        self, executor_config: ExecutorConfig
    ) -> None:
        with patch(SHELL, AsyncMock()) as spawn:
            with pytest.raises(ThingsValidationError):
                await ScriptExecutor(executor_config).run("get-inbox", ["$(id)"])
        spawn.assert_not_called()

    async def test_nonzero_exit(
        self,
        executor_config: ExecutorConfig,
        make_process: Callable[..., Any],
    ) -> None:
        proc = make_process(
            stderr=b"execution error: Things3 got an error: Things3 is not running. (-600)",
            returncode=1,
        )
        with patch(SHELL, AsyncMock(return_value=proc)):
            with pytest.raises(ThingsScriptError, match="Things 3 is not running"):
                await ScriptExecutor(executor_config).run("get-inbox")

    async def test_nonzero_exit_without_output(
        self,
        executor_config: ExecutorConfig,
        make_process: Callable[..., Any],
    ) -> None:
        proc = make_process(returncode=1)
        with patch(SHELL, AsyncMock(return_value=proc)):
            with pytest.raises(ThingsScriptError) as exc_info:
                await ScriptExecutor(executor_config).run("get-inbox")
        assert exc_info.value.details is not None
        assert exc_info.value.details["error"] == "Unknown error"

    async def test_timeout_kills_process(
        self,
        executor_config: ExecutorConfig,
        make_process: Callable[..., Any],
    ) -> None:
        proc = make_process(hang=True)
        with patch(SHELL, AsyncMock(return_value=proc)):
            with pytest.raises(ThingsTimeoutError) as exc_info:
                await ScriptExecutor(executor_config).run("get-inbox", timeout_ms=10)
        assert proc.killed
        assert exc_info.value.message == "Operation timed out after 10ms: get-inbox"

    async def test_zero_timeout_is_not_replaced_by_default(
        self,
        executor_config: ExecutorConfig,
        make_process: Callable[..., Any],
    ) -> None:
        proc = make_process(hang=True)
        with patch(SHELL, AsyncMock(return_value=proc)):
            with pytest.raises(ThingsTimeoutError) as exc_info:
                await ScriptExecutor(executor_config).run("get-inbox", timeout_ms=0)
        assert exc_info.value.details == {"operation": "get-inbox", "timeout": 0}

    async def test_os_error(self, executor_config: ExecutorConfig) -> None:
        with patch(SHELL, AsyncMock(side_effect=OSError("no shell"))):
            with pytest.raises(ThingsScriptError):
                await ScriptExecutor(executor_config).run("get-inbox")

    async def test_stderr_on_success_is_logged(
        self,
        executor_config: ExecutorConfig,
        make_process: Callable[..., Any],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        proc = make_process(stdout=b"ok", stderr=b"deprecated thing")
        with patch(SHELL, AsyncMock(return_value=proc)):
            assert await ScriptExecutor(executor_config).run("get-inbox") == "ok"
        assert "deprecated thing" in caplog.text


# ── Availability ─────────────────────────────────────────────────


class TestAvailability:
    async def test_running(self, make_process: Callable[..., Any]) -> None:
        proc = make_process(stdout=b"Finder, Things3, Safari")
        with patch(EXEC, AsyncMock(return_value=proc)) as spawn:
            assert await ScriptExecutor().test_availability() is True
        assert spawn.call_args.args[:2] == ("osascript", "-e")

    async def test_not_running(self, make_process: Callable[..., Any]) -> None:
        proc = make_process(stdout=b"Finder, Safari")
        with patch(EXEC, AsyncMock(return_value=proc)):
            assert await ScriptExecutor().test_availability() is False

    async def test_failure_is_false(self) -> None:
        with patch(EXEC, AsyncMock(side_effect=FileNotFoundError("osascript"))):
            assert await ScriptExecutor().test_availability() is False

    async def test_timeout_is_false(self, make_process: Callable[..., Any]) -> None:
        proc = make_process(hang=True)
        config = ExecutorConfig(availability_timeout_ms=10)
        with patch(EXEC, AsyncMock(return_value=proc)):
            assert await ScriptExecutor(config).test_availability() is False
        assert proc.killed
