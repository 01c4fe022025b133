"""
Source formatting via dartfmt.

In check mode nothing is written: dartfmt lists the files that would
change and exits 1 if there are any. Without check, files are rewritten
in place, so a non-check run must not overlap with other tasks touching
the same sources.
"""

from __future__ import annotations

from typing import List

from ..config import FormatConfig, RunOptions
from ..paths import expand_entry_points
from ..process import TaskResult, run_tool

EXECUTABLE = "dartfmt"


def build_command(config: FormatConfig, root: str = ".") -> List[str]:
    cmd = [EXECUTABLE]
    if config.check:
        cmd.extend(["-n", "--set-exit-if-changed"])
    else:
        cmd.append("-w")
    cmd.extend(expand_entry_points(config.directories, root))
    return cmd


def run(config: FormatConfig, options: RunOptions) -> TaskResult:
    root = options.resolve_root()
    return run_tool(build_command(config, root), cwd=root)
