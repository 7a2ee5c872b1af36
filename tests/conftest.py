"""Shared fixtures for the modindex test-suite."""

import logging
from pathlib import Path

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo any logging configuration a test (or the CLI) installed."""
    yield
    structlog.reset_defaults()
    logging.root.handlers.clear()


@pytest.fixture
def make_tree():
    """Create files below a directory from a list of relative paths.

    Paths ending with "/" create empty directories.
    """

    def _make(root: Path, entries: list[str]) -> Path:
        for entry in entries:
            target = root / entry
            if entry.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(f"content of {entry}\n")
        return root

    return _make


@pytest.fixture
def make_symlink():
    """Create a directory symlink, skipping the test where unsupported."""

    def _link(target: Path, link: Path) -> Path:
        try:
            link.symlink_to(target, target_is_directory=True)
        except (OSError, NotImplementedError) as e:
            pytest.skip(f"symlinks not supported: {e}")
        return link

    return _link
