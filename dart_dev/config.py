"""
Configuration model for dart_dev.

Each task has a frozen dataclass holding its recognized options and their
defaults. Overlays (plain mappings holding only explicitly-set fields) are
applied with merge(), which always returns a new instance, so resolved
configuration can be passed down explicitly instead of living in global
state.
"""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Tuple, Type, Union, get_type_hints

from .errors import ConfigTypeError, UsageError


class Task(str, Enum):
    """The closed set of tasks dart_dev knows how to run."""

    ANALYZE = "analyze"
    EXAMPLES = "examples"
    FORMAT = "format"
    INIT = "init"
    TEST = "test"

    @classmethod
    def parse(cls, name: str) -> "Task":
        try:
            return cls(name)
        except ValueError:
            known = ", ".join(task.value for task in cls)
            raise UsageError(f"unknown task {name!r} (choose from {known})") from None


@dataclass(frozen=True)
class AnalyzeConfig:
    entry_points: Tuple[str, ...] = ("lib/",)
    fatal_warnings: bool = True
    hints: bool = True


@dataclass(frozen=True)
class ExamplesConfig:
    hostname: str = "localhost"
    port: int = 8080


@dataclass(frozen=True)
class FormatConfig:
    check: bool = False
    directories: Tuple[str, ...] = ("lib/",)


@dataclass(frozen=True)
class InitConfig:
    force: bool = False


@dataclass(frozen=True)
class TestConfig:
    # Keeps pytest from collecting this class when imported into test modules.
    __test__ = False

    integration_tests: Tuple[str, ...] = ()
    unit_tests: Tuple[str, ...] = ("test/",)
    platforms: Tuple[str, ...] = ()
    unit: bool = True
    integration: bool = False


TaskConfig = Union[AnalyzeConfig, ExamplesConfig, FormatConfig, InitConfig, TestConfig]

CONFIG_TYPES: Dict[Task, Type[Any]] = {
    Task.ANALYZE: AnalyzeConfig,
    Task.EXAMPLES: ExamplesConfig,
    Task.FORMAT: FormatConfig,
    Task.INIT: InitConfig,
    Task.TEST: TestConfig,
}

# Sequence fields that are meaningless when empty.
_NON_EMPTY = {"entry_points", "directories"}


@dataclass(frozen=True)
class RunOptions:
    """
    Global execution flags shared by every task.

    root is the project directory the external tools run in.
    """

    color: bool = True
    quiet: bool = False
    verbosity: int = 0
    root: str = "."

    def resolve_root(self) -> str:
        return os.path.abspath(self.root)


def config_type(task: Task) -> Type[Any]:
    return CONFIG_TYPES[task]


def default_config(task: Task) -> TaskConfig:
    """Return the built-in defaults for task."""

    return config_type(task)()


def field_names(config_cls: Type[Any]) -> Tuple[str, ...]:
    return tuple(f.name for f in dataclasses.fields(config_cls))


def merge(base: TaskConfig, overlay: Mapping[str, Any]) -> TaskConfig:
    """
    Return a copy of base with every field set in overlay replaced.

    Sequence values replace the base sequence wholesale. A value of the
    wrong kind, or a name that is not a field of base, raises
    ConfigTypeError.
    """

    if not overlay:
        return base

    hints = get_type_hints(type(base))
    changes: Dict[str, Any] = {}
    for name, value in overlay.items():
        if name not in hints:
            raise ConfigTypeError(f"{type(base).__name__} has no option {name!r}")
        changes[name] = _coerce(name, hints[name], value)

    return dataclasses.replace(base, **changes)


def _coerce(name: str, expected: Any, value: Any) -> Any:
    if expected is bool:
        if not isinstance(value, bool):
            raise ConfigTypeError(f"option {name!r} must be a boolean, got {value!r}")
        return value

    if expected is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigTypeError(f"option {name!r} must be an integer, got {value!r}")
        if name == "port" and not 0 < value < 65536:
            raise ConfigTypeError(f"option 'port' must be between 1 and 65535, got {value}")
        return value

    if expected is str:
        if not isinstance(value, str) or not value:
            raise ConfigTypeError(f"option {name!r} must be a non-empty string, got {value!r}")
        return value

    # Tuple[str, ...]
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ConfigTypeError(f"option {name!r} must be a list of strings, got {value!r}")
    if not all(isinstance(item, str) for item in value):
        raise ConfigTypeError(f"option {name!r} must contain only strings, got {value!r}")
    if name in _NON_EMPTY and not value:
        raise ConfigTypeError(f"option {name!r} must not be empty")
    return tuple(value)
