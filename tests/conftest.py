"""
Root pytest configuration for themepack.

--suite restricts collection to one test directory (unit or e2e).
"""

import os
from pathlib import Path

# Auto-bootstrap logging for all tests
from themepack.build.config.logging import bootstrap_logging
bootstrap_logging()


def pytest_addoption(parser):
    """Add custom command line options for pytest."""
    parser.addoption(
        "--suite",
        action="store",
        help="Test suite to run (unit, e2e)"
    )


def pytest_collection_modifyitems(config, items):
    """Deselect tests outside the requested suite."""
    suite = config.getoption("--suite")
    if not suite:
        return
    suite_dir = Path(__file__).parent / suite
    selected, deselected = [], []
    for item in items:
        if str(item.fspath).startswith(str(suite_dir) + os.sep):
            selected.append(item)
        else:
            deselected.append(item)
    if deselected:
        config.hook.pytest_deselected(items=deselected)
        items[:] = selected
