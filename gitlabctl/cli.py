"""Command-line interface for gitlabctl.

Usage:
    gitlabctl get environments              # every visible project
    gitlabctl get environments -n my-group  # projects under my-group
"""
import asyncio
import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from gitlabctl import __version__
from gitlabctl.config import load_settings
from gitlabctl.errors import ConfigurationError, DecodeError, TransportError
from gitlabctl.logging_utils import configure_logging
from gitlabctl.pipeline import EnvironmentsPipeline
from gitlabctl.presentation import COLOR_RULES, ConsoleProgress, TableRenderer

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_CONFIG = 2
EXIT_INTERRUPTED = 130

app = typer.Typer(
    name="gitlabctl",
    help="gitlabctl controls gitlab from the command line",
    add_completion=False,
    no_args_is_help=True,
)
get_app = typer.Typer(help="Get resources from gitlab", no_args_is_help=True)
app.add_typer(get_app, name="get")


class ColorBy(str, Enum):
    environment = "environment"
    drift = "drift"
    none = "none"


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"gitlabctl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """gitlabctl - inspect GitLab deployment environments across projects."""


@get_app.command("environments")
def get_environments(
    namespace: Optional[str] = typer.Option(
        None,
        "--namespace",
        "-n",
        help=(
            "Only show projects under this namespace/group. Matches whole path segments, "
            "so team selects team/app and team/sub/app but not team-a/app."
        ),
    ),
    color_by: ColorBy = typer.Option(
        ColorBy.environment,
        "--color-by",
        help="Color environment names, whole rows by commit drift, or nothing.",
        case_sensitive=False,
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output."),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="TOML config file (default ~/.config/gitlab.toml).",
        envvar="GITLABCTL_CONFIG_FILE",
    ),
    server: Optional[str] = typer.Option(None, "--server", help="GitLab base URL."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests and pages."),
) -> None:
    """List every environment with its latest deployment, one row per environment."""
    color_system = None if no_color else "auto"
    stdout = Console(color_system=color_system, highlight=False)
    stderr = Console(stderr=True, color_system=color_system, highlight=False)

    try:
        settings = load_settings(config, server=server)
    except ConfigurationError as e:
        configure_logging("WARNING")
        stderr.print(f"Configuration error: {e}", markup=False)
        raise typer.Exit(EXIT_CONFIG)

    configure_logging("DEBUG" if verbose else settings.log_level)
    pipeline = EnvironmentsPipeline(settings, progress=ConsoleProgress(stdout))
    try:
        result = asyncio.run(pipeline.run(namespace))
    except (TransportError, DecodeError) as e:
        logger.debug("Project discovery failed", exc_info=True)
        stderr.print(f"Could not list projects: {e}", markup=False)
        raise typer.Exit(EXIT_FAILURE)
    except KeyboardInterrupt:
        stderr.print("Interrupted", markup=False)
        raise typer.Exit(EXIT_INTERRUPTED)

    renderer = TableRenderer(COLOR_RULES[color_by.value]())
    renderer.write(result.rows, stdout)


# Singular alias for `get environments`
get_app.command("environment", hidden=True)(get_environments)
