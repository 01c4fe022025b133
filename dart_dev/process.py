"""
External tool execution for dart_dev.

Every task handler shells out through run_tool so that logging, output
relaying and failure handling are centralized. Output is streamed to
stdout as the tool produces it and captured in the returned TaskResult.
The exit code is reported exactly as the tool returned it.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
import sys
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .errors import ExternalToolFailure, ToolNotFoundError

LOG = logging.getLogger(__name__)

SHUTDOWN_TIMEOUT = 5.0


@dataclass(frozen=True)
class TaskResult:
    """
    Outcome of a single task run.

    command is empty for tasks that do not delegate to a tool.
    """

    exit_code: int
    command: Tuple[str, ...] = ()
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def check(self) -> "TaskResult":
        """Raise ExternalToolFailure if the tool exited non-zero."""

        if self.exit_code != 0:
            raise ExternalToolFailure(
                f"{shlex.join(self.command) or 'task'} exited with code {self.exit_code}",
                self.exit_code,
            )
        return self


def run_tool(
    command: Sequence[str],
    cwd: Optional[str] = None,
    echo: bool = True,
) -> TaskResult:
    """
    Run command to completion and return its result.

    There is no timeout; a hung tool hangs the run. On KeyboardInterrupt
    the child is stopped before the interrupt propagates.
    """

    cmd = list(command)
    LOG.info("Running: %s", shlex.join(cmd))
    try:
        proc = subprocess.Popen(
            cmd,
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
        )
    except FileNotFoundError as exc:
        raise ToolNotFoundError(cmd[0]) from exc
    except OSError as exc:
        raise ExternalToolFailure(f"failed to execute {cmd[0]}: {exc}", 126) from exc

    lines = []
    try:
        for line in proc.stdout:
            lines.append(line)
            if echo:
                sys.stdout.write(line)
                sys.stdout.flush()
        exit_code = proc.wait()
    except KeyboardInterrupt:
        LOG.info("Interrupted; stopping %s", cmd[0])
        stop_process(proc)
        raise
    finally:
        proc.stdout.close()

    LOG.debug("%s exited with code %d", cmd[0], exit_code)
    return TaskResult(exit_code=exit_code, command=tuple(cmd), output="".join(lines))


def stop_process(proc: subprocess.Popen, timeout: float = SHUTDOWN_TIMEOUT) -> None:
    """Terminate proc, escalating to kill if it does not exit in time."""

    if proc.poll() is not None:
        return
    proc.terminate()
    try:
        proc.wait(timeout=timeout)
    except subprocess.TimeoutExpired:
        LOG.warning("%s did not exit after %.0fs; killing it", proc.args[0], timeout)
        proc.kill()
        proc.wait()
