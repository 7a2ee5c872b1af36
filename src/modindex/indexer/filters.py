"""
Inclusion/exclusion filters built per module.

Two filter sets come out of a module's resolved settings:
- ExclusionFilters decides whether a file is indexed at all.
- CoverageAndDuplicationExclusions flags indexed files so downstream
  analysis skips them for coverage or duplication; it never rejects.

Patterns are fnmatch globs matched against the module-relative path with
'/' separators, so "*.tmp" matches "src/C.tmp".
"""

import fnmatch
from dataclasses import dataclass

from ..config.resolver import ModuleSettings, resolve_module_settings
from ..config.schema import AppConfig
from .modules import InputModule
from .store import FileType


def _matches(relative_path: str, patterns: tuple[str, ...]) -> bool:
    return any(fnmatch.fnmatch(relative_path, p) for p in patterns)


class ExclusionFilters:
    """General inclusion/exclusion predicate of a module."""

    def __init__(self, settings: ModuleSettings) -> None:
        self.inclusions = settings.inclusions
        self.exclusions = settings.exclusions + settings.global_exclusions
        self.test_inclusions = settings.test_inclusions
        self.test_exclusions = settings.test_exclusions + settings.global_test_exclusions

    def accept(self, relative_path: str, file_type: FileType) -> bool:
        """True if a file of ``file_type`` at ``relative_path`` is indexed."""
        if file_type is FileType.MAIN:
            inclusions, exclusions = self.inclusions, self.exclusions
        else:
            inclusions, exclusions = self.test_inclusions, self.test_exclusions

        if inclusions and not _matches(relative_path, inclusions):
            return False
        return not _matches(relative_path, exclusions)

    def has_pattern(self) -> bool:
        return bool(
            self.inclusions or self.exclusions
            or self.test_inclusions or self.test_exclusions
        )

    def summary(self) -> list[tuple[str, tuple[str, ...]]]:
        """Labelled non-empty pattern lists, in display order."""
        entries = [
            ("Included sources", self.inclusions),
            ("Excluded sources", self.exclusions),
            ("Included tests", self.test_inclusions),
            ("Excluded tests", self.test_exclusions),
        ]
        return [(label, patterns) for label, patterns in entries if patterns]

    def log(self, hlog, indent: str = "  ") -> None:
        for label, patterns in self.summary():
            hlog.filters(label, list(patterns), indent=indent)


class CoverageAndDuplicationExclusions:
    """Coverage and duplication flags of a module's indexed files."""

    def __init__(self, settings: ModuleSettings) -> None:
        self.coverage_exclusions = settings.coverage_exclusions
        self.duplication_exclusions = settings.duplication_exclusions

    def is_excluded_for_coverage(self, relative_path: str) -> bool:
        return _matches(relative_path, self.coverage_exclusions)

    def is_excluded_for_duplication(self, relative_path: str) -> bool:
        return _matches(relative_path, self.duplication_exclusions)

    def summary(self) -> list[tuple[str, tuple[str, ...]]]:
        entries = [
            ("Excluded sources for coverage", self.coverage_exclusions),
            ("Excluded sources for duplication", self.duplication_exclusions),
        ]
        return [(label, patterns) for label, patterns in entries if patterns]

    def log(self, hlog, indent: str = "  ") -> None:
        for label, patterns in self.summary():
            hlog.filters(label, list(patterns), indent=indent)


@dataclass(frozen=True)
class ExclusionFilterSet:
    """The pair of filters a module is indexed with."""

    general: ExclusionFilters
    coverage: CoverageAndDuplicationExclusions


class ExclusionFilterFactory:
    """Builds the filter set of a module from its effective settings."""

    def __init__(self, app_config: AppConfig) -> None:
        self.app_config = app_config

    def create(self, module: InputModule) -> ExclusionFilterSet:
        settings = resolve_module_settings(self.app_config, module)
        return ExclusionFilterSet(
            general=ExclusionFilters(settings),
            coverage=CoverageAndDuplicationExclusions(settings),
        )
