"""
Programmatic entry points, one per task.

These bypass argument parsing and tool/dev.toml entirely: the caller's
config (or the task defaults) is used as is. Each function returns the
task's exit code; with check=True a non-zero exit raises
ExternalToolFailure instead.
"""

from __future__ import annotations

from typing import Optional

from .config import (
    AnalyzeConfig,
    ExamplesConfig,
    FormatConfig,
    InitConfig,
    RunOptions,
    Task,
    TaskConfig,
    TestConfig,
    default_config,
)
from .dispatch import run_task


def _run(
    task: Task,
    config: Optional[TaskConfig],
    root: str,
    options: Optional[RunOptions],
    check: bool,
) -> int:
    if options is None:
        options = RunOptions(root=root)
    result = run_task(task, config if config is not None else default_config(task), options)
    if check:
        result.check()
    return result.exit_code


def analyze(
    config: Optional[AnalyzeConfig] = None,
    *,
    root: str = ".",
    options: Optional[RunOptions] = None,
    check: bool = False,
) -> int:
    return _run(Task.ANALYZE, config, root, options, check)


def examples(
    config: Optional[ExamplesConfig] = None,
    *,
    root: str = ".",
    options: Optional[RunOptions] = None,
    check: bool = False,
) -> int:
    return _run(Task.EXAMPLES, config, root, options, check)


def format(
    config: Optional[FormatConfig] = None,
    *,
    root: str = ".",
    options: Optional[RunOptions] = None,
    check: bool = False,
) -> int:
    return _run(Task.FORMAT, config, root, options, check)


def init(
    config: Optional[InitConfig] = None,
    *,
    root: str = ".",
    options: Optional[RunOptions] = None,
    check: bool = False,
) -> int:
    return _run(Task.INIT, config, root, options, check)


def test(
    config: Optional[TestConfig] = None,
    *,
    root: str = ".",
    options: Optional[RunOptions] = None,
    check: bool = False,
) -> int:
    return _run(Task.TEST, config, root, options, check)


# Keeps pytest from collecting api.test when imported into test modules.
test.__test__ = False
