import logging

import pytest


@pytest.fixture(autouse=True)
def _restore_root_logger():
    # cli.main reconfigures the root logger; keep that from leaking between tests.
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
