"""
Resolution of the final configuration for a single task run.

Precedence, lowest to highest: built-in defaults, the project file, the
command line. Overlays are applied field by field, so a project can set
entry_points in tool/dev.toml while the CLI only flips hints.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .config import Task, TaskConfig, config_type, merge
from .errors import ConfigTypeError


def resolve(
    task: Task,
    defaults: TaskConfig,
    file_overlay: Optional[Mapping[str, Any]] = None,
    cli_overlay: Optional[Mapping[str, Any]] = None,
) -> TaskConfig:
    """
    Return the resolved configuration for task.

    defaults is never modified; the result is a new frozen instance.
    """

    expected = config_type(task)
    if not isinstance(defaults, expected):
        raise ConfigTypeError(
            f"{task.value} expects {expected.__name__}, got {type(defaults).__name__}"
        )

    resolved = merge(defaults, file_overlay or {})
    return merge(resolved, cli_overlay or {})
