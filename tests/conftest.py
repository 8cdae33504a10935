"""Session-wide test setup: config environment and directory-based markers."""

import os
from pathlib import Path

import pytest

# Marker applied to every test collected under a directory of this name
_DIRECTORY_MARKERS = {
    "domain": "domain",
    "application": "application",
    "integration": "integration",
    "caching": "domain",
    "bdd": "bdd",
}


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment (PROTEAN_ENV) to run tests under",
    )


def pytest_sessionstart(session):
    """Set PROTEAN_ENV before any domain module is imported, so logging picks the test level."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    for item in items:
        parts = Path(str(item.fspath)).parent.parts
        marker = next((_DIRECTORY_MARKERS[p] for p in reversed(parts) if p in _DIRECTORY_MARKERS), None)
        if marker is None:
            continue

        item.add_marker(getattr(pytest.mark, marker))
        if marker == "integration" and not any(m.name == "fast" for m in item.iter_markers()):
            item.add_marker(pytest.mark.slow)
