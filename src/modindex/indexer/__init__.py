"""
Indexer module — multi-module project file indexing.

Walks the source and test roots of every module of a project, applies
each module's inclusion/exclusion filters and registers the surviving
files into a component store.
"""

from .errors import DuplicateFileError, IndexingCancelled, IndexingError
from .files import FileIndexer
from .filters import (
    CoverageAndDuplicationExclusions,
    ExclusionFilterFactory,
    ExclusionFilters,
    ExclusionFilterSet,
)
from .modules import InputModule, ModuleHierarchy
from .orchestrator import ProjectFileIndexer
from .progress import AtomicCounter, ProgressTracker
from .store import FileType, InputComponentStore, InputFile
from .walker import DirectoryWalker, is_hidden

__all__ = [
    "AtomicCounter",
    "CoverageAndDuplicationExclusions",
    "DirectoryWalker",
    "DuplicateFileError",
    "ExclusionFilterFactory",
    "ExclusionFilterSet",
    "ExclusionFilters",
    "FileIndexer",
    "FileType",
    "IndexingCancelled",
    "IndexingError",
    "InputComponentStore",
    "InputFile",
    "InputModule",
    "ModuleHierarchy",
    "ProgressTracker",
    "ProjectFileIndexer",
    "is_hidden",
]
