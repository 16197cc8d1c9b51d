"""Shared test fixtures for things-mcp."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import pytest

from things_mcp.config.schema import ExecutorConfig

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

VALID_TOKEN = "test-token_1234567890"


class FakeProcess:
    """Stand-in for ``asyncio.subprocess.Process``."""

    def __init__(
        self,
        stdout: bytes = b"",
        stderr: bytes = b"",
        returncode: int = 0,
        hang: bool = False,
    ) -> None:
        self._stdout = stdout
        self._stderr = stderr
        self._hang = hang
        self.returncode: int | None = None if hang else returncode
        self._final_returncode = returncode
        self.killed = False

    async def communicate(self) -> tuple[bytes, bytes]:
        if self._hang and not self.killed:
            await asyncio.sleep(3600)
        self.returncode = -9 if self.killed else self._final_returncode
        return self._stdout, self._stderr

    def kill(self) -> None:
        self.killed = True


@pytest.fixture
def make_process() -> Callable[..., FakeProcess]:
    def _make(**kwargs: Any) -> FakeProcess:
        return FakeProcess(**kwargs)

    return _make


@pytest.fixture
def auth_token(monkeypatch: pytest.MonkeyPatch) -> str:
    monkeypatch.setenv("THINGS_AUTH_TOKEN", VALID_TOKEN)
    return VALID_TOKEN


@pytest.fixture
def no_auth_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("THINGS_AUTH_TOKEN", raising=False)


@pytest.fixture
def scripts_dir(tmp_path: Path) -> Path:
    """A scripts directory holding empty stand-ins for the bundled scripts."""
    directory = tmp_path / "scripts"
    directory.mkdir()
    for name in ("get-inbox", "get-project-todos", "get-todo-details"):
        (directory / f"{name}.applescript").write_text("on run argv\nend run\n")
    return directory


@pytest.fixture
def executor_config(scripts_dir: Path) -> ExecutorConfig:
    return ExecutorConfig(scripts_dir=str(scripts_dir))
