"""
Entry-point expansion for tools that take individual files.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Iterable, List

LOG = logging.getLogger(__name__)

DART_SUFFIX = ".dart"


def expand_entry_points(entries: Iterable[str], root: str = ".") -> List[str]:
    """
    Expand directory entries one level deep into the Dart files they hold.

    Entries are relative to root and the returned paths keep the entry's
    spelling ("lib/" yields "lib/a.dart"). Subdirectories are not
    descended. File entries, and entries that do not exist, pass through
    unchanged so the tool can report on them.
    """

    expanded: List[str] = []
    for entry in entries:
        path = Path(root) / entry
        if path.is_dir():
            names = sorted(
                child.name
                for child in path.iterdir()
                if child.is_file() and child.suffix == DART_SUFFIX
            )
            if not names:
                LOG.warning("No Dart files found directly in %s", entry)
            expanded.extend(str(PurePosixPath(entry) / name) for name in names)
        else:
            if not path.exists():
                LOG.warning("Entry point %s does not exist", entry)
            expanded.append(entry)
    return expanded
