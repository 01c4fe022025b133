"""
Writing a starter tool/dev.toml for a project.

The template lists every configurable option with its default, commented
out, so a fresh file changes nothing until the user edits it.
"""

from __future__ import annotations

import json
import logging
from typing import Any, List

from ..config import InitConfig, RunOptions, config_type, default_config, field_names
from ..errors import ConfigExistsError, ConfigWriteError
from ..loader import CONFIG_PATH, FILE_TASKS, config_file
from ..process import TaskResult

LOG = logging.getLogger(__name__)

HEADER = """\
# dart_dev project configuration.
#
# Every option below is shown with its default value. Uncomment a line and
# edit it to override the default; options passed on the command line still
# take precedence over this file.
"""


def _toml_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, tuple):
        return "[" + ", ".join(json.dumps(item) for item in value) + "]"
    if isinstance(value, str):
        return json.dumps(value)
    return str(value)


def render_template() -> str:
    lines: List[str] = [HEADER]
    for task in FILE_TASKS:
        defaults = default_config(task)
        lines.append(f"[{task.value}]")
        for name in field_names(config_type(task)):
            lines.append(f"# {name} = {_toml_value(getattr(defaults, name))}")
        lines.append("")
    return "\n".join(lines)


def run(config: InitConfig, options: RunOptions) -> TaskResult:
    path = config_file(options.resolve_root())

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigWriteError(f"cannot create {path.parent}: {exc}") from exc

    # "x" makes the existence check and the create a single step.
    mode = "w" if config.force else "x"
    try:
        with path.open(mode) as fh:
            fh.write(render_template())
    except FileExistsError as exc:
        raise ConfigExistsError(
            f"{CONFIG_PATH} already exists; re-run with --force to overwrite it"
        ) from exc
    except OSError as exc:
        raise ConfigWriteError(f"cannot write {path}: {exc}") from exc

    LOG.info("Wrote %s", CONFIG_PATH)
    return TaskResult(exit_code=0, output=str(path))
