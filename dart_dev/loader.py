"""
Project configuration loading for dart_dev.

Projects may declare per-task overrides in tool/dev.toml. The file is
parsed, never executed. Only the tables and keys the project actually
wrote end up in the returned overlays, so unset options keep falling
through to the defaults.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict

from .config import Task, config_type, field_names
from .errors import ConfigLoadError

LOG = logging.getLogger(__name__)

CONFIG_PATH = "tool/dev.toml"

# Tasks that can be configured from the project file. init is CLI-only.
FILE_TASKS = (Task.ANALYZE, Task.EXAMPLES, Task.FORMAT, Task.TEST)


def config_file(root: str = ".") -> Path:
    return Path(root) / CONFIG_PATH


def load_project_config(root: str = ".") -> Dict[Task, Dict[str, Any]]:
    """
    Read tool/dev.toml under root and return one overlay per task.

    A missing file yields empty overlays. Anything that cannot be mapped
    unambiguously onto the configuration model raises ConfigLoadError.
    """

    overlays: Dict[Task, Dict[str, Any]] = {task: {} for task in FILE_TASKS}

    path = config_file(root)
    if not path.is_file():
        LOG.debug("No project configuration at %s; using defaults", path)
        return overlays

    LOG.debug("Loading project configuration from %s", path)
    try:
        with path.open("rb") as fh:
            raw = tomllib.load(fh)
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise ConfigLoadError(f"{path}: invalid TOML: {exc}") from exc
    except OSError as exc:
        raise ConfigLoadError(f"{path}: cannot be read: {exc}") from exc

    for section, values in raw.items():
        task = _section_task(path, section)
        if not isinstance(values, dict):
            raise ConfigLoadError(f"{path}: [{section}] must be a table")

        known = field_names(config_type(task))
        for key, value in values.items():
            if key not in known:
                raise ConfigLoadError(
                    f"{path}: unknown option {key!r} in [{section}] "
                    f"(expected one of: {', '.join(known)})"
                )
            overlays[task][key] = value

    return overlays


def _section_task(path: Path, section: str) -> Task:
    try:
        task = Task(section)
    except ValueError:
        task = None
    if task not in FILE_TASKS:
        allowed = ", ".join(t.value for t in FILE_TASKS)
        raise ConfigLoadError(f"{path}: unknown section [{section}] (expected one of: {allowed})")
    return task
