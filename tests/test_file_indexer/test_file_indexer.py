"""
Tests for the file-level indexer and the component store.

Covers:
- Accepted files become InputFile records and advance progress
- Rejected files only bump the excluded counter
- Files outside the module base dir and non-regular files
- Duplicate registration
- Language detection and coverage/duplication flags
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from structlog.testing import capture_logs

from modindex.config.resolver import ModuleSettings
from modindex.config.schema import ModuleConfig
from modindex.indexer.errors import DuplicateFileError
from modindex.indexer.files import FileIndexer
from modindex.indexer.filters import CoverageAndDuplicationExclusions, ExclusionFilters
from modindex.indexer.languages import detect_language
from modindex.indexer.modules import ModuleHierarchy
from modindex.indexer.progress import AtomicCounter
from modindex.indexer.store import FileType, InputComponentStore


# -- Fixtures ----------------------------------------------------------------


@pytest.fixture
def project(tmp_path: Path, make_tree) -> ModuleHierarchy:
    make_tree(tmp_path, ["core/src/app.py", "core/src/C.tmp", "core/src/gen/model.py", "outside.py"])
    config = ModuleConfig(
        key="acme",
        base_dir=tmp_path,
        modules=[ModuleConfig(key="core", base_dir=Path("core"), sources=[Path("src")])],
    )
    return ModuleHierarchy.from_config(config)


@pytest.fixture
def store() -> InputComponentStore:
    return InputComponentStore()


@pytest.fixture
def indexer(project: ModuleHierarchy, store: InputComponentStore) -> FileIndexer:
    return FileIndexer(store, project.root.base_dir)


def _filters(**settings) -> tuple[ExclusionFilters, CoverageAndDuplicationExclusions]:
    resolved = ModuleSettings(**settings)
    return ExclusionFilters(resolved), CoverageAndDuplicationExclusions(resolved)


# -- Tests -------------------------------------------------------------------


class TestFileIndexer:

    def test_accepted_file_is_registered(self, project, store, indexer, tmp_path):
        core = project.get("acme:core")
        general, coverage = _filters()
        progress = MagicMock()
        excluded = AtomicCounter()

        indexer.index_file(
            core, general, coverage, tmp_path / "core/src/app.py", FileType.MAIN, progress, excluded
        )

        [record] = store.input_files()
        assert record.module_key == "acme:core"
        assert record.relative_path == "src/app.py"
        assert record.project_relative_path == "core/src/app.py"
        assert record.absolute_path == tmp_path / "core/src/app.py"
        assert record.type is FileType.MAIN
        assert record.language == "python"
        progress.advance.assert_called_once_with(last_path="core/src/app.py")
        assert excluded.get() == 0

    def test_rejected_file_is_counted(self, project, store, indexer, tmp_path):
        core = project.get("acme:core")
        general, coverage = _filters(exclusions=("*.tmp",))
        progress = MagicMock()
        excluded = AtomicCounter()

        indexer.index_file(
            core, general, coverage, tmp_path / "core/src/C.tmp", FileType.MAIN, progress, excluded
        )

        assert store.indexed_count() == 0
        assert excluded.get() == 1
        progress.advance.assert_not_called()

    def test_file_outside_basedir_is_ignored(self, project, store, indexer, tmp_path):
        core = project.get("acme:core")
        general, coverage = _filters()
        excluded = AtomicCounter()

        with capture_logs() as logs:
            indexer.index_file(
                core, general, coverage, tmp_path / "outside.py", FileType.MAIN, MagicMock(), excluded
            )

        assert store.indexed_count() == 0
        assert excluded.get() == 0
        [warning] = [e for e in logs if e["event"] == "file_indexer.outside_basedir"]
        assert warning["log_level"] == "warning"
        assert "is not located in module basedir" in warning["message"]

    def test_missing_file_is_ignored(self, project, store, indexer, tmp_path):
        core = project.get("acme:core")
        general, coverage = _filters()
        indexer.index_file(
            core, general, coverage, tmp_path / "core/src/nope.py", FileType.MAIN, MagicMock(), AtomicCounter()
        )
        assert store.indexed_count() == 0

    def test_duplicate_registration_raises(self, project, indexer, tmp_path):
        core = project.get("acme:core")
        general, coverage = _filters()
        path = tmp_path / "core/src/app.py"
        indexer.index_file(core, general, coverage, path, FileType.MAIN, MagicMock(), AtomicCounter())

        with pytest.raises(DuplicateFileError, match="can't be indexed twice"):
            indexer.index_file(core, general, coverage, path, FileType.TEST, MagicMock(), AtomicCounter())

    def test_coverage_and_duplication_flags(self, project, store, indexer, tmp_path):
        core = project.get("acme:core")
        general, coverage = _filters(
            coverage_exclusions=("*/gen/*",), duplication_exclusions=("src/gen/*",)
        )
        indexer.index_file(
            core, general, coverage, tmp_path / "core/src/gen/model.py", FileType.MAIN, MagicMock(), AtomicCounter()
        )
        [record] = store.input_files()
        assert record.excluded_for_coverage is True
        assert record.excluded_for_duplication is True


class TestStore:

    def test_queries(self, project, store, indexer, tmp_path):
        core = project.get("acme:core")
        general, coverage = _filters()
        for name in ("app.py", "C.tmp", "gen/model.py"):
            indexer.index_file(
                core, general, coverage, tmp_path / "core/src" / name, FileType.MAIN, MagicMock(), AtomicCounter()
            )

        assert store.indexed_count() == 3
        assert len(store.files_of("acme:core")) == 3
        assert store.files_of("acme") == []
        assert store.languages() == {"python": 2}
        assert store.get_file(tmp_path / "core/src/app.py").relative_path == "src/app.py"

        store.clear()
        assert store.indexed_count() == 0


class TestDetectLanguage:

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("main.py", "python"),
            ("App.JAVA", "java"),
            ("Dockerfile", "docker"),
            ("notes.txt", None),
        ],
    )
    def test_detect(self, name, expected):
        assert detect_language(Path(name)) == expected
