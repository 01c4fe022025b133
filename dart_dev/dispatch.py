"""
Routing of a resolved configuration to its task handler.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from .config import RunOptions, Task, TaskConfig, config_type
from .errors import ConfigTypeError, UnknownTaskError
from .process import TaskResult
from .tasks import analyze, examples, format, init, test

LOG = logging.getLogger(__name__)

Handler = Callable[[TaskConfig, RunOptions], TaskResult]

HANDLERS: Dict[Task, Handler] = {
    Task.ANALYZE: analyze.run,
    Task.EXAMPLES: examples.run,
    Task.FORMAT: format.run,
    Task.INIT: init.run,
    Task.TEST: test.run,
}


def run_task(task: Task, config: TaskConfig, options: Optional[RunOptions] = None) -> TaskResult:
    """Run the handler for task and return its full result."""

    handler = HANDLERS.get(task)
    if handler is None:
        raise UnknownTaskError(f"no handler registered for task {task!r}")

    expected = config_type(task)
    if not isinstance(config, expected):
        raise ConfigTypeError(
            f"{task.value} expects {expected.__name__}, got {type(config).__name__}"
        )

    LOG.debug("Dispatching %s with %r", task.value, config)
    return handler(config, options or RunOptions())


def dispatch(task: Task, config: TaskConfig, options: Optional[RunOptions] = None) -> int:
    """Run the handler for task and return its exit code unchanged."""

    return run_task(task, config, options).exit_code
