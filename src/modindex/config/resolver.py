"""
Effective per-module settings.

A module inherits each pattern list from its closest ancestor that sets
it; the global exclusions of the application are appended last.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .schema import AppConfig

if TYPE_CHECKING:
    from ..indexer.modules import InputModule


PATTERN_KEYS: tuple[str, ...] = (
    "inclusions",
    "exclusions",
    "test_inclusions",
    "test_exclusions",
    "coverage_exclusions",
    "duplication_exclusions",
)


@dataclass(frozen=True)
class ModuleSettings:
    """Resolved pattern settings of one module."""

    inclusions: tuple[str, ...] = ()
    exclusions: tuple[str, ...] = ()
    test_inclusions: tuple[str, ...] = ()
    test_exclusions: tuple[str, ...] = ()
    coverage_exclusions: tuple[str, ...] = ()
    duplication_exclusions: tuple[str, ...] = ()
    global_exclusions: tuple[str, ...] = field(default=())
    global_test_exclusions: tuple[str, ...] = field(default=())


def resolve_module_settings(app_config: AppConfig, module: "InputModule") -> ModuleSettings:
    """Resolve the effective settings of ``module``.

    Args:
        app_config: Application configuration holding the global patterns
        module: Module whose ancestors are consulted for inherited values

    Returns:
        ModuleSettings with every list resolved
    """
    chain = []
    current = module
    while current is not None:
        chain.append(current)
        current = current.parent

    values: dict[str, tuple[str, ...]] = {}
    for key in PATTERN_KEYS:
        for candidate in chain:
            value = getattr(candidate.config, key)
            if value is not None:
                values[key] = tuple(p.strip() for p in value if p.strip())
                break
        else:
            values[key] = ()

    return ModuleSettings(
        **values,
        global_exclusions=tuple(app_config.global_exclusions),
        global_test_exclusions=tuple(app_config.global_test_exclusions),
    )
