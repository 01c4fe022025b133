"""Unit and integration tests via the pub test runner."""

from __future__ import annotations

from typing import List

from ..config import RunOptions, TestConfig
from ..errors import UsageError
from ..process import TaskResult, run_tool


def selected_tests(config: TestConfig) -> List[str]:
    tests: List[str] = []
    if config.unit:
        tests.extend(config.unit_tests)
    if config.integration:
        tests.extend(config.integration_tests)
    return tests


def build_command(config: TestConfig, color: bool = True) -> List[str]:
    tests = selected_tests(config)
    if not tests:
        raise UsageError(
            "No tests were selected. Include at least one of --unit or "
            "--integration, and make sure the selected suite lists test paths."
        )

    cmd = ["pub", "run", "test", *tests]
    for platform in config.platforms:
        cmd.extend(["-p", platform])
    if not color:
        cmd.append("--no-color")
    return cmd


def run(config: TestConfig, options: RunOptions) -> TaskResult:
    cmd = build_command(config, color=options.color)
    return run_tool(cmd, cwd=options.resolve_root())
