"""
Module hierarchy — the tree of project modules an indexing run walks.

Each module owns its children; the parent link is a plain back
reference used for lookups (settings inheritance, key qualification).
The tree is built once from the configuration and only read afterwards.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from ..config.loader import ConfigError
from ..config.schema import ModuleConfig


@dataclass(eq=False)
class InputModule:
    """A node of the module tree."""

    key: str                     # Qualified: "<parent key>:<module key>"
    name: str
    base_dir: Path               # Absolute, normalized
    sources: list[Path]          # Absolute source roots, in configured order
    tests: list[Path]            # Absolute test roots, in configured order
    config: ModuleConfig
    parent: "InputModule | None" = field(default=None, repr=False)
    children: list["InputModule"] = field(default_factory=list, repr=False)


class ModuleHierarchy:
    """Rooted tree of InputModule with key lookups."""

    def __init__(self, root: InputModule) -> None:
        self.root = root
        self._by_key: dict[str, InputModule] = {}
        for module in self._iter(root):
            if module.key in self._by_key:
                raise ConfigError(f"Duplicate module key: {module.key}")
            self._by_key[module.key] = module

    @classmethod
    def from_config(cls, config: ModuleConfig, cwd: Path | None = None) -> "ModuleHierarchy":
        """Build the hierarchy from the ``project`` configuration section.

        Args:
            config: Root module configuration
            cwd: Directory relative root base dirs are resolved against.
                Defaults to the current working directory.

        Raises:
            ConfigError: If two modules end up with the same qualified key
        """
        anchor = (cwd or Path.cwd()).absolute()
        root = _build_module(config, anchor, parent=None)
        return cls(root)

    def children(self, module: InputModule) -> list[InputModule]:
        return list(module.children)

    def parent(self, module: InputModule) -> InputModule | None:
        return module.parent

    def get(self, key: str) -> InputModule | None:
        return self._by_key.get(key)

    def all_modules(self) -> list[InputModule]:
        return list(self._by_key.values())

    def _iter(self, module: InputModule) -> Iterator[InputModule]:
        yield module
        for child in module.children:
            yield from self._iter(child)


def _build_module(config: ModuleConfig, anchor: Path, parent: InputModule | None) -> InputModule:
    base_dir = _normalize(anchor / config.base_dir)
    key = config.key if parent is None else f"{parent.key}:{config.key}"
    module = InputModule(
        key=key,
        name=config.name or config.key,
        base_dir=base_dir,
        sources=[_normalize(base_dir / p) for p in config.sources],
        tests=[_normalize(base_dir / p) for p in config.tests],
        config=config,
        parent=parent,
    )
    module.children = [_build_module(child, base_dir, module) for child in config.modules]
    return module


def relativize(base_dir: Path, path: Path) -> str | None:
    """Path of ``path`` relative to ``base_dir`` with '/' separators.

    Returns:
        "." when both are the same directory, None when ``path`` is not
        located under ``base_dir``
    """
    try:
        return path.relative_to(base_dir).as_posix()
    except ValueError:
        return None


def _normalize(path: Path) -> Path:
    """Absolute path with '.' and '..' collapsed, symlinks left alone."""
    return Path(os.path.normpath(path.absolute()))
