"""
Main CLI for modindex using Click.

Commands:
    modindex index            Index every module of the configured project
    modindex validate-config  Validate a YAML configuration file
"""

import json
import logging
import sys
from pathlib import Path

import click

from .config import ConfigError, load_config
from .indexer import (
    IndexingError,
    InputComponentStore,
    ModuleHierarchy,
    ProjectFileIndexer,
)
from .logging import configure_logging, console_level

# Exit codes
EXIT_SUCCESS = 0
EXIT_FAILED = 1
EXIT_CONFIG_ERROR = 3
EXIT_INTERRUPTED = 130

# Current version
_VERSION = "0.3.0"


@click.group()
@click.version_option(version=_VERSION, prog_name="modindex")
def main() -> None:
    """modindex - Multi-module project file indexer.

    Walks the source and test roots of every module of a project,
    applies inclusion/exclusion patterns and reports what was indexed.
    """
    pass


@main.command()
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to the YAML configuration file",
)
@click.option(
    "-d",
    "--base-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Base directory of the root module",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Technical log verbosity (-v info, -vv debug and full path lists)",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    help="Write JSON logs to this file",
)
@click.option(
    "--progress-interval",
    type=float,
    help="Seconds between progress lines (default: 10)",
)
@click.option(
    "--quiet",
    is_flag=True,
    help="Silence the report and technical logs",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Print a JSON summary on stdout",
)
def index(config: Path | None, json_output: bool, quiet: bool, **kwargs) -> None:
    """Index the files of every module of the project."""
    cli_args = {
        "base_dir": kwargs.get("base_dir"),
        "log_file": kwargs.get("log_file"),
        "verbose": kwargs.get("verbose") or None,
        "progress_interval": kwargs.get("progress_interval"),
    }

    try:
        app_config = load_config(config_path=config, cli_args=cli_args)
        configure_logging(app_config.logging, json_output=json_output, quiet=quiet)
        hierarchy = ModuleHierarchy.from_config(app_config.project)
    except (FileNotFoundError, ConfigError) as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    store = InputComponentStore()
    # Full path lists go to debug only when the console shows debug records
    verbose = console_level(app_config.logging) <= logging.DEBUG
    indexer = ProjectFileIndexer(hierarchy, store, app_config, verbose=verbose)

    try:
        total = indexer.index()
    except KeyboardInterrupt:
        click.echo("\nInterrupted.", err=True)
        sys.exit(EXIT_INTERRUPTED)
    except IndexingError as e:
        cause = f": {e.__cause__}" if e.__cause__ else ""
        click.echo(f"Indexing failed: {e}{cause}", err=True)
        sys.exit(EXIT_FAILED)

    if json_output:
        summary = {
            "indexed": total,
            "excluded": indexer.excluded_count,
            "modules": len(hierarchy.all_modules()),
            "languages": store.languages(),
        }
        click.echo(json.dumps(summary, indent=2))
    sys.exit(EXIT_SUCCESS)


@main.command()
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to the configuration file to validate",
)
def validate_config(config: Path | None) -> None:
    """Validate a YAML configuration file."""
    try:
        app_config = load_config(config_path=config)
        hierarchy = ModuleHierarchy.from_config(app_config.project)
    except (FileNotFoundError, ConfigError) as e:
        click.echo(f"Invalid configuration: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    click.echo("Valid configuration")
    click.echo(f"  Project: {hierarchy.root.name} ({hierarchy.root.key})")
    click.echo(f"  Base dir: {hierarchy.root.base_dir}")
    click.echo(f"  Modules: {len(hierarchy.all_modules())}")
    for module in sorted(hierarchy.all_modules(), key=lambda m: m.key):
        click.echo(
            f"    {module.key:<30} sources={len(module.sources)} tests={len(module.tests)}"
        )


if __name__ == "__main__":
    main()
