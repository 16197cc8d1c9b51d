"""AppleScript executor: runs bundled scripts through osascript.

Scripts live in ``things_mcp/scripts/<name>.applescript`` and print
pipe-delimited rows on stdout. Every argument is checked against the
safe character class and single-quoted before the command line is
assembled; the command is complete before the subprocess starts.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from things_mcp.core.errors import (
    ThingsScriptError,
    ThingsScriptNotFoundError,
    ThingsTimeoutError,
)
from things_mcp.core.sanitize import sanitize_script_arg

if TYPE_CHECKING:
    from collections.abc import Sequence

    from things_mcp.config.schema import ExecutorConfig

logger = logging.getLogger(__name__)

DEFAULT_SCRIPTS_DIR = Path(__file__).resolve().parent.parent / "scripts"

_AVAILABILITY_SCRIPT = (
    'tell application "System Events" to name of application processes'
)


def quote_arg(arg: str) -> str:
    """Single-quote *arg* for a POSIX shell, escaping embedded quotes."""
    return "'" + arg.replace("'", "'\"'\"'") + "'"


class ScriptExecutor:
    """Runs named AppleScript files with sanitized arguments."""

    def __init__(self, config: ExecutorConfig | None = None) -> None:
        from things_mcp.config.schema import ExecutorConfig as ExConfig

        self._config = config or ExConfig()
        self._scripts_dir = (
            Path(self._config.scripts_dir)
            if self._config.scripts_dir
            else DEFAULT_SCRIPTS_DIR
        )

    @property
    def scripts_dir(self) -> Path:
        return self._scripts_dir

    def script_path(self, script_name: str) -> Path:
        return self._scripts_dir / f"{script_name}.applescript"

    def build_command(
        self,
        script_name: str,
        args: Sequence[str] = (),
        max_results: int | None = None,
    ) -> str:
        """Assemble the full osascript command line.

        Raises:
            ThingsScriptNotFoundError: If the script file does not exist.
            ThingsValidationError: If any argument is unsafe.
        """
        path = self.script_path(script_name)
        if not path.is_file():
            raise ThingsScriptNotFoundError(script_name)

        safe_args = [
            sanitize_script_arg(arg, f"argument[{index}]")
            for index, arg in enumerate(args)
        ]
        if max_results is not None:
            safe_args.append(
                sanitize_script_arg(str(max_results), f"argument[{len(safe_args)}]")
            )

        parts = [self._config.osascript, quote_arg(str(path))]
        parts.extend(quote_arg(arg) for arg in safe_args)
        return " ".join(parts)

    async def run(
        self,
        script_name: str,
        args: Sequence[str] = (),
        *,
        timeout_ms: int | None = None,
        max_results: int | None = None,
    ) -> str:
        """Run a script and return its stripped stdout.

        Raises:
            ThingsScriptNotFoundError: Script resource missing.
            ThingsValidationError: An argument failed sanitization.
            ThingsTimeoutError: The script exceeded *timeout_ms*.
            ThingsScriptError: Non-zero exit or OS failure.
        """
        if timeout_ms is None:
            timeout_ms = self._config.script_timeout_ms
        command = self.build_command(script_name, args, max_results)

        try:
            proc = await asyncio.create_subprocess_shell(
                command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise ThingsScriptError(script_name, str(exc)) from None

        try:
            stdout, stderr = await asyncio.wait_for(
                proc.communicate(),
                timeout=timeout_ms / 1000,
            )
        except TimeoutError:
            proc.kill()
            await proc.communicate()
            raise ThingsTimeoutError(script_name, timeout_ms) from None

        out = stdout.decode(errors="replace") if stdout else ""
        err = stderr.decode(errors="replace") if stderr else ""

        if proc.returncode != 0:
            raise ThingsScriptError(script_name, err or out or "Unknown error")

        if err.strip():
            logger.warning("AppleScript warning (%s): %s", script_name, err.strip())

        return out.strip()

    async def test_availability(self) -> bool:
        """Return True if Things 3 is among the running processes.

        Never raises; any failure counts as "not running".
        """
        timeout = self._config.availability_timeout_ms / 1000
        try:
            proc = await asyncio.create_subprocess_exec(
                self._config.osascript,
                "-e",
                _AVAILABILITY_SCRIPT,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.DEVNULL,
            )
            try:
                stdout, _ = await asyncio.wait_for(proc.communicate(), timeout=timeout)
            except TimeoutError:
                proc.kill()
                await proc.communicate()
                return False
        except Exception as exc:  # noqa: BLE001
            logger.debug("Things availability probe failed: %s", exc)
            return False
        return proc.returncode == 0 and b"Things3" in (stdout or b"")
