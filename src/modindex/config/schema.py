"""
Pydantic models for modindex configuration.

Defines the project/module tree, the global pattern settings and the
logging and progress sections using Pydantic v2 for validation,
defaults, and serialization.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class ModuleConfig(BaseModel):
    """Configuration of one module of the project tree.

    Pattern lists left as None are inherited from the parent module.
    An explicit empty list clears the inherited value.
    """

    key: str
    name: str | None = None
    base_dir: Path = Path(".")
    sources: list[Path] = Field(default_factory=list)
    tests: list[Path] = Field(default_factory=list)

    inclusions: list[str] | None = Field(
        default=None,
        description="Glob patterns a main file must match to be indexed",
    )
    exclusions: list[str] | None = Field(
        default=None,
        description="Glob patterns excluding main files",
    )
    test_inclusions: list[str] | None = Field(
        default=None,
        description="Glob patterns a test file must match to be indexed",
    )
    test_exclusions: list[str] | None = Field(
        default=None,
        description="Glob patterns excluding test files",
    )
    coverage_exclusions: list[str] | None = Field(
        default=None,
        description="Files still indexed but flagged as excluded from coverage",
    )
    duplication_exclusions: list[str] | None = Field(
        default=None,
        description="Files still indexed but flagged as excluded from duplication detection",
    )

    modules: list["ModuleConfig"] = Field(default_factory=list)

    model_config = {"extra": "forbid"}

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("module key must not be empty")
        if ":" in v:
            raise ValueError(f"module key '{v}' must not contain ':'")
        return v


class ProgressConfig(BaseModel):
    """Progress report configuration."""

    interval_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Seconds between two progress status lines",
    )

    model_config = {"extra": "forbid"}


class LoggingConfig(BaseModel):
    """Logging system configuration."""

    level: Literal["debug", "info", "human", "warn", "error"] = "human"
    file: Path | None = None
    verbose: int = 0

    model_config = {"extra": "forbid"}


class AppConfig(BaseModel):
    """Complete application configuration.

    This is the root of the configuration tree. It combines all sections
    and is the entry point for validation.
    """

    project: ModuleConfig = Field(default_factory=lambda: ModuleConfig(key="project"))
    global_exclusions: list[str] = Field(
        default_factory=list,
        description="Main-file exclusions applied to every module",
    )
    global_test_exclusions: list[str] = Field(
        default_factory=list,
        description="Test-file exclusions applied to every module",
    )
    progress: ProgressConfig = Field(default_factory=ProgressConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"extra": "forbid"}
