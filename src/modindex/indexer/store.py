"""
Component store — registry of the files accepted by an indexing run.

Records are keyed by absolute path. A path can only be registered once
per store; a second registration means two roots (or main and test
patterns) overlap, which is a configuration problem the run must not
silently hide.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .errors import DuplicateFileError


class FileType(Enum):
    """Kind of root a file was found under."""

    MAIN = "main"
    TEST = "test"


@dataclass(frozen=True)
class InputFile:
    """A file registered in the component store."""

    module_key: str
    relative_path: str           # Relative to the module base dir, '/' separated
    project_relative_path: str   # Relative to the root module base dir, '/' separated
    absolute_path: Path
    type: FileType
    language: str | None
    excluded_for_coverage: bool = False
    excluded_for_duplication: bool = False


class InputComponentStore:
    """In-memory store of InputFile records."""

    def __init__(self) -> None:
        self._files: dict[Path, InputFile] = {}

    def put(self, input_file: InputFile) -> None:
        """Register a file.

        Raises:
            DuplicateFileError: If the same absolute path is already registered
        """
        if input_file.absolute_path in self._files:
            raise DuplicateFileError(input_file.project_relative_path)
        self._files[input_file.absolute_path] = input_file

    def get_file(self, absolute_path: Path) -> InputFile | None:
        return self._files.get(absolute_path)

    def input_files(self) -> list[InputFile]:
        """All registered files, in registration order."""
        return list(self._files.values())

    def files_of(self, module_key: str) -> list[InputFile]:
        return [f for f in self._files.values() if f.module_key == module_key]

    def indexed_count(self) -> int:
        return len(self._files)

    def languages(self) -> dict[str, int]:
        """Count files per language, ordered by frequency."""
        counts: dict[str, int] = {}
        for info in self._files.values():
            if info.language:
                counts[info.language] = counts.get(info.language, 0) + 1
        return dict(sorted(counts.items(), key=lambda x: x[1], reverse=True))

    def clear(self) -> None:
        self._files.clear()
