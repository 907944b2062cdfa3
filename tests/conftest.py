import logging

import pytest


@pytest.fixture(autouse=True)
def _restore_treewalker_logger():
    """Undo handler/propagation changes made by setup_base_logger()."""
    base = logging.getLogger("treewalker")
    handlers, level, propagate = list(base.handlers), base.level, base.propagate
    yield
    base.handlers[:] = handlers
    base.setLevel(level)
    base.propagate = propagate
