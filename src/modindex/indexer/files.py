"""
File-level indexer — decides the fate of one candidate file.

A file is either rejected by the module's inclusion/exclusion filters
(and counted as excluded) or turned into an InputFile and registered in
the component store, after which the progress tracker advances.
"""

import os
from pathlib import Path

import structlog

from .filters import CoverageAndDuplicationExclusions, ExclusionFilters
from .languages import detect_language
from .modules import InputModule, relativize
from .progress import AtomicCounter, ProgressTracker
from .store import FileType, InputComponentStore, InputFile

logger = structlog.get_logger()


class FileIndexer:
    """Registers accepted files into an InputComponentStore."""

    def __init__(self, store: InputComponentStore, project_base_dir: Path, log=None) -> None:
        """Initialize the file indexer.

        Args:
            store: Store receiving the accepted files
            project_base_dir: Base dir of the root module, used for
                project-relative paths
            log: structlog logger. Defaults to the module logger bound
                with component="file_indexer".
        """
        self.store = store
        self.project_base_dir = project_base_dir
        self._log = log or logger.bind(component="file_indexer")

    def index_file(
        self,
        module: InputModule,
        filters: ExclusionFilters,
        coverage: CoverageAndDuplicationExclusions,
        path: Path,
        file_type: FileType,
        progress: ProgressTracker,
        excluded_counter: AtomicCounter,
    ) -> None:
        """Index one file of ``module``.

        Raises:
            DuplicateFileError: If the file is already in the store
        """
        path = Path(os.path.normpath(Path(path).absolute()))

        if not path.is_file():
            self._log.debug("file_indexer.not_a_file", path=str(path))
            return

        relative_path = relativize(module.base_dir, path)
        if relative_path is None:
            self._log.warning(
                "file_indexer.outside_basedir",
                path=str(path),
                base_dir=str(module.base_dir),
                message=(
                    f"File '{path}' is ignored. It is not located in "
                    f"module basedir '{module.base_dir}'."
                ),
            )
            return

        if not filters.accept(relative_path, file_type):
            excluded_counter.increment()
            self._log.debug(
                "file_indexer.excluded",
                module=module.key,
                path=relative_path,
                type=file_type.value,
            )
            return

        project_relative_path = relativize(self.project_base_dir, path) or path.as_posix()
        input_file = InputFile(
            module_key=module.key,
            relative_path=relative_path,
            project_relative_path=project_relative_path,
            absolute_path=path,
            type=file_type,
            language=detect_language(path),
            excluded_for_coverage=coverage.is_excluded_for_coverage(relative_path),
            excluded_for_duplication=coverage.is_excluded_for_duplication(relative_path),
        )
        self.store.put(input_file)
        progress.advance(last_path=project_relative_path)
