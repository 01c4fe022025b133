"""Static analysis via dartanalyzer."""

from __future__ import annotations

from typing import List

from ..config import AnalyzeConfig, RunOptions
from ..paths import expand_entry_points
from ..process import TaskResult, run_tool

EXECUTABLE = "dartanalyzer"


def build_command(config: AnalyzeConfig, root: str = ".") -> List[str]:
    cmd = [EXECUTABLE]
    if config.fatal_warnings:
        cmd.append("--fatal-warnings")
    cmd.append("--hints" if config.hints else "--no-hints")
    cmd.extend(expand_entry_points(config.entry_points, root))
    return cmd


def run(config: AnalyzeConfig, options: RunOptions) -> TaskResult:
    root = options.resolve_root()
    return run_tool(build_command(config, root), cwd=root)
