"""
Project file indexer — drives an indexing run over the module tree.

Modules are indexed post-order: every child (in ascending key order)
before its parent, so the log of a run reads the same every time. Each
module gets fresh filters built from its effective settings, then its
source roots are indexed as MAIN files and its test roots as TEST files.

The run is all-or-nothing. An OSError anywhere below is raised as
IndexingError with the OSError as cause; nothing is skipped to carry on.
"""

import time
from pathlib import Path

import structlog

from ..config.schema import AppConfig
from ..logging.human import HumanLog, files_label
from .errors import IndexingError
from .files import FileIndexer
from .filters import ExclusionFilterFactory, ExclusionFilterSet
from .modules import InputModule, ModuleHierarchy, relativize
from .progress import AtomicCounter, ProgressTracker
from .store import FileType, InputComponentStore
from .walker import DirectoryWalker

logger = structlog.get_logger()

# Path lists longer than this are abbreviated unless logging is verbose
PATHS_DISPLAY_WIDTH = 80


def abbreviate(text: str, width: int = PATHS_DISPLAY_WIDTH) -> str:
    """Cut ``text`` to ``width`` characters, ending with "..." when cut."""
    if len(text) <= width:
        return text
    return text[: width - 3] + "..."


def format_paths(base_dir: Path, paths: list[Path]) -> str:
    """Render roots relative to ``base_dir``, "." for the base dir itself."""
    rendered = []
    for path in paths:
        relative = relativize(base_dir, path)
        rendered.append(str(path) if relative is None else relative)
    return ", ".join(rendered)


class ProjectFileIndexer:
    """Indexes the files of every module of a project into a store.

    Usage:
        hierarchy = ModuleHierarchy.from_config(config.project)
        store = InputComponentStore()
        indexer = ProjectFileIndexer(hierarchy, store, config)
        total = indexer.index()
    """

    def __init__(
        self,
        hierarchy: ModuleHierarchy,
        store: InputComponentStore,
        app_config: AppConfig,
        file_indexer: FileIndexer | None = None,
        filter_factory: ExclusionFilterFactory | None = None,
        walker: DirectoryWalker | None = None,
        progress: ProgressTracker | None = None,
        verbose: bool = False,
        log=None,
    ) -> None:
        """Initialize the indexer.

        Args:
            hierarchy: Module tree to index
            store: Store receiving the indexed files
            app_config: Configuration holding global patterns and progress interval
            file_indexer: Per-file collaborator. Defaults to a FileIndexer on ``store``.
            filter_factory: Builds per-module filters. Defaults to one on ``app_config``.
            walker: Directory walker. Defaults to a plain DirectoryWalker.
            progress: Progress tracker for the run. A new one is created when None.
            verbose: If True, module path lists are logged in full at debug level
            log: structlog logger every component binds from
        """
        base_log = log or logger
        self.hierarchy = hierarchy
        self.store = store
        self.app_config = app_config
        self.file_indexer = file_indexer or FileIndexer(
            store, hierarchy.root.base_dir, log=base_log.bind(component="file_indexer")
        )
        self.filter_factory = filter_factory or ExclusionFilterFactory(app_config)
        self.walker = walker or DirectoryWalker(log=base_log.bind(component="walker"))
        self.progress = progress or ProgressTracker(
            interval=app_config.progress.interval_seconds,
            log=base_log.bind(component="progress"),
        )
        self.verbose = verbose
        self.excluded_by_patterns = AtomicCounter()
        self._has_pattern = False
        self._log = base_log.bind(component="indexer")
        self._hlog = HumanLog(self._log)

    @property
    def excluded_count(self) -> int:
        return self.excluded_by_patterns.get()

    def index(self) -> int:
        """Run the indexing over the whole module tree.

        Returns:
            Total number of files in the store at the end of the run

        Raises:
            IndexingError: On any traversal failure; the run is aborted
        """
        start = time.monotonic()
        self.progress.start("Indexing files...")
        try:
            self._hlog.project_config()
            project_filters = self.filter_factory.create(self.hierarchy.root)
            self._has_pattern = project_filters.general.has_pattern()
            project_filters.general.log(self._hlog)
            project_filters.coverage.log(self._hlog)

            self._index_recursively(self.hierarchy.root)
        except BaseException:
            self.progress.stop()
            raise

        total = self.store.indexed_count()
        self.progress.stop(f"{total} {files_label(total)} indexed")

        excluded = self.excluded_by_patterns.get()
        if self._has_pattern or excluded > 0:
            self._hlog.excluded(excluded)

        self._log.info(
            "indexer.run.complete",
            indexed=total,
            excluded=excluded,
            modules=len(self.hierarchy.all_modules()),
            duration_ms=round((time.monotonic() - start) * 1000, 1),
        )
        return total

    def _index_recursively(self, module: InputModule) -> None:
        for child in sorted(self.hierarchy.children(module), key=lambda m: m.key):
            self._index_recursively(child)
        self._index_module(module)

    def _index_module(self, module: InputModule) -> None:
        filters = self.filter_factory.create(module)
        self._has_pattern = self._has_pattern or filters.general.has_pattern()

        if len(self.hierarchy.all_modules()) > 1:
            self._hlog.module_start(module.name)
            self._hlog.base_dir(str(module.base_dir))
            self._log_paths("  Source paths: ", module.base_dir, module.sources)
            self._log_paths("  Test paths: ", module.base_dir, module.tests)
            filters.general.log(self._hlog)
            filters.coverage.log(self._hlog)

        self._log.debug("indexer.module.indexing", module=module.key)
        self.index_files(module, filters, module.sources, FileType.MAIN)
        self.index_files(module, filters, module.tests, FileType.TEST)

    def _log_paths(self, label: str, base_dir: Path, paths: list[Path]) -> None:
        if not paths:
            return
        rendered = format_paths(base_dir, paths)
        if self.verbose:
            self._log.debug("indexer.module.paths", label=label, paths=rendered)
        else:
            self._hlog.paths(label, abbreviate(label + rendered)[len(label):])

    def index_files(
        self,
        module: InputModule,
        filters: ExclusionFilterSet,
        roots: list[Path],
        file_type: FileType,
    ) -> None:
        """Index every root of ``roots`` in order.

        Directories are walked; any other root is handed to the file
        indexer as is.

        Raises:
            IndexingError: If reading the file system fails
        """
        try:
            for root in roots:
                if root.is_dir():
                    for path in self.walker.walk(root):
                        self._index_file(module, filters, path, file_type)
                else:
                    self._index_file(module, filters, root, file_type)
        except OSError as e:
            raise IndexingError("Failed to index files") from e

    def _index_file(
        self,
        module: InputModule,
        filters: ExclusionFilterSet,
        path: Path,
        file_type: FileType,
    ) -> None:
        self.file_indexer.index_file(
            module,
            filters.general,
            filters.coverage,
            path,
            file_type,
            self.progress,
            self.excluded_by_patterns,
        )
