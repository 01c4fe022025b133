"""
Serving the example/ directory via pub serve.

Unlike the other tasks this one does not run to completion: the server
keeps running until it exits on its own or dart_dev receives SIGINT or
SIGTERM. On either signal the server is stopped (closing its listening
socket) and the interrupt propagates to the caller.
"""

from __future__ import annotations

import contextlib
import logging
import signal
import threading
from typing import Iterator, List

from ..config import ExamplesConfig, RunOptions
from ..process import TaskResult, run_tool

LOG = logging.getLogger(__name__)

EXAMPLES_DIR = "example"


def build_command(config: ExamplesConfig) -> List[str]:
    return [
        "pub",
        "serve",
        EXAMPLES_DIR,
        "--hostname",
        config.hostname,
        "--port",
        str(config.port),
    ]


def _raise_interrupt(signum, frame):
    raise KeyboardInterrupt(f"received signal {signum}")


@contextlib.contextmanager
def _sigterm_as_interrupt() -> Iterator[None]:
    # Signal handlers can only be installed from the main thread.
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    previous = signal.signal(signal.SIGTERM, _raise_interrupt)
    try:
        yield
    finally:
        signal.signal(signal.SIGTERM, previous)


def run(config: ExamplesConfig, options: RunOptions) -> TaskResult:
    LOG.info("Serving examples on http://%s:%d (Ctrl+C to stop)", config.hostname, config.port)
    with _sigterm_as_interrupt():
        return run_tool(build_command(config), cwd=options.resolve_root())
