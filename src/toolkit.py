"""Python wrapper around the ``ojet`` command line.

Exposes the task contract the acceptance harness drives::

    toolkit = Toolkit(cwd="/path/to/app", logs=False)
    await toolkit.execute(task="create", scope="component", parameters=["vcomp-1"])
    await toolkit.execute(task="add", parameters=["webpack"])
    await toolkit.execute(task="build", options={"release": True})

Every task runs to completion in a subprocess; a non-zero exit raises
``TaskError``.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any

from rich.markup import escape

from src.config import Config
from src.utils import console, format_duration, run_command

TASKS: tuple[str, ...] = ("create", "build", "add")


class TaskError(Exception):
    """Raised when an ``ojet`` task is unknown or exits unsuccessfully."""

    def __init__(self, task: str, message: str, returncode: int | None = None, stderr: str = ""):
        self.task = task
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


def _option_flags(options: dict[str, Any]) -> list[str]:
    flags: list[str] = []
    for name, value in options.items():
        if value is None or value is False:
            continue
        if value is True:
            flags.append(f"--{name}")
        else:
            flags.append(f"--{name}={value}")
    return flags


class Toolkit:
    """Runs ``ojet`` tasks inside an application directory."""

    def __init__(
        self,
        cwd: str | Path,
        logs: bool = True,
        command: list[str] | None = None,
        timeout: int | None = None,
    ) -> None:
        config = Config()
        self.cwd = Path(cwd)
        self.logs = logs
        self.command = list(command) if command else list(config.cli_command)
        self.timeout = timeout or config.task_timeout

    @classmethod
    def from_config(cls, config: Config, cwd: str | Path, logs: bool = True) -> "Toolkit":
        return cls(cwd, logs=logs, command=config.cli_command, timeout=config.task_timeout)

    def build_command(
        self,
        task: str,
        scope: str | None = None,
        parameters: list[str] | None = None,
        options: dict[str, Any] | None = None,
    ) -> list[str]:
        """Return the argv for a task invocation."""
        if task not in TASKS:
            raise TaskError(task, f"Unknown task '{task}'. Expected one of: {', '.join(TASKS)}")
        argv = [*self.command, task]
        if scope:
            argv.append(scope)
        argv.extend(parameters or [])
        argv.extend(_option_flags(options or {}))
        return argv

    async def execute(
        self,
        task: str,
        scope: str | None = None,
        parameters: list[str] | None = None,
        options: dict[str, Any] | None = None,
    ) -> str:
        """Run a task and return its stdout.

        Raises:
            TaskError: Unknown task, non-zero exit code or timeout.
        """
        argv = self.build_command(task, scope, parameters, options)
        cmd_str = " ".join(argv)
        if self.logs:
            console.print(f"[cyan]Running[/cyan] [bold]{escape(cmd_str)}[/bold] in {self.cwd}")

        start = time.monotonic()
        try:
            returncode, stdout, stderr = await run_command(
                argv, cwd=self.cwd, timeout=self.timeout
            )
        except OSError as exc:
            raise TaskError(task, f"Could not start {self.command[0]}: {exc}") from exc
        elapsed = format_duration(time.monotonic() - start)

        if returncode != 0:
            if self.logs:
                console.print(f"[red]{escape(cmd_str)} failed after {elapsed}[/red]")
            raise TaskError(
                task,
                f"Task '{task}' failed (exit {returncode}): {cmd_str}\n{stderr}".rstrip(),
                returncode=returncode,
                stderr=stderr,
            )

        if self.logs:
            console.print(f"[green]{escape(cmd_str)} finished in {elapsed}[/green]")
        return stdout
