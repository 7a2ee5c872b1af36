"""
Directory walker — cycle-safe, hidden-aware depth-first traversal.

Walks one directory tree pre-order, following symbolic links with no
depth limit. Entries of a directory are visited in name order so that
two runs over the same tree produce the same sequence.

Hidden directories are pruned whole and hidden files are dropped; neither
counts as excluded. A directory reached through a link that resolves to
one of its own ancestors is a loop: it is reported as a warning and
skipped, the walk goes on. So is a link that never resolves because it
points back to itself. Any other OSError propagates to the caller.
"""

import errno
import os
import stat
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator

import structlog

from .errors import IndexingCancelled

logger = structlog.get_logger()

# Detect the attribute-based platform at import time
_WINDOWS = sys.platform == "win32"
FILE_ATTRIBUTE_HIDDEN = getattr(stat, "FILE_ATTRIBUTE_HIDDEN", 0x2)
_ERROR_CANT_RESOLVE_FILENAME = 1921


def _is_dot_hidden(path: Path) -> bool:
    name = path.name
    return name.startswith(".") and name not in (".", "..")


def is_hidden(path: Path) -> bool:
    """True if ``path`` is hidden to the user on this platform.

    On Windows the hidden attribute of the entry itself (links not
    followed) decides; if the platform does not expose file attributes
    the dot-name convention is used instead. Elsewhere a leading dot
    marks hidden entries.

    Raises:
        OSError: If the attributes of ``path`` cannot be read
    """
    if _WINDOWS:
        st = os.lstat(path)
        attributes = getattr(st, "st_file_attributes", None)
        if attributes is None:
            return _is_dot_hidden(path)
        return bool(attributes & FILE_ATTRIBUTE_HIDDEN)
    return _is_dot_hidden(path)


@dataclass
class _Frame:
    """A directory on the current walk path."""

    path: Path
    identity: tuple[int, int]
    entries: Iterator[os.DirEntry]


class DirectoryWalker:
    """Yields the visible files below a directory.

    Usage:
        walker = DirectoryWalker()
        for path in walker.walk(Path("src")):
            ...
    """

    def __init__(
        self,
        log=None,
        should_stop: Callable[[], bool] | None = None,
    ) -> None:
        """Initialize the walker.

        Args:
            log: structlog logger. Defaults to the module logger bound
                with component="walker".
            should_stop: Checked between directory entries. When it returns
                True the walk raises IndexingCancelled.
        """
        self._log = log or logger.bind(component="walker")
        self._should_stop = should_stop

    def walk(self, root: Path) -> Iterator[Path]:
        """Walk ``root`` and yield every visible non-directory entry.

        Args:
            root: Directory to walk

        Raises:
            OSError: On any read failure other than a symlink loop
            IndexingCancelled: If should_stop asked to stop
        """
        root = Path(os.path.normpath(root))
        if is_hidden(root):
            self._log.debug("walker.hidden_skipped", path=str(root))
            return

        stack = [self._open(root, _identity(root))]
        ancestors = {stack[0].identity}

        while stack:
            frame = stack[-1]
            entry = next(frame.entries, None)
            if entry is None:
                stack.pop()
                ancestors.discard(frame.identity)
                continue

            if self._should_stop is not None and self._should_stop():
                raise IndexingCancelled(f"Indexing cancelled while walking {frame.path}")

            path = Path(entry.path)
            try:
                is_dir = entry.is_dir()
            except OSError as e:
                # Links resolving to themselves fail to stat
                if not _is_link_loop(e):
                    raise
                self._warn_loop(path)
                continue

            if is_dir:
                if is_hidden(path):
                    self._log.debug("walker.hidden_skipped", path=str(path))
                    continue
                try:
                    identity = _identity(path)
                except OSError as e:
                    if not _is_link_loop(e):
                        raise
                    self._warn_loop(path)
                    continue
                if identity in ancestors:
                    self._warn_loop(path)
                    continue
                stack.append(self._open(path, identity))
                ancestors.add(identity)
            elif not is_hidden(path):
                yield path

    def _warn_loop(self, path: Path) -> None:
        self._log.warning(
            "walker.symlink_loop",
            path=str(path),
            message=f"Not indexing due to symlink loop: {path}",
        )

    def _open(self, path: Path, identity: tuple[int, int]) -> _Frame:
        with os.scandir(path) as it:
            entries = sorted(it, key=lambda e: e.name)
        return _Frame(path=path, identity=identity, entries=iter(entries))


def _identity(path: Path) -> tuple[int, int]:
    """Device and inode of ``path`` after following links."""
    st = os.stat(path)
    return st.st_dev, st.st_ino


def _is_link_loop(error: OSError) -> bool:
    """True if ``error`` reports a chain of links that never resolves."""
    return error.errno == errno.ELOOP or getattr(error, "winerror", None) == _ERROR_CANT_RESOLVE_FILENAME
