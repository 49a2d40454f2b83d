"""Typer-based CLI application for gitstamp."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from gitstamp import __version__
from gitstamp.config import GitstampSettings, load_settings
from gitstamp.core.provider import GitQuery, GitStatusProvider
from gitstamp.exceptions import ConfigError, GitStatusError

app = typer.Typer(
    name="gitstamp",
    help="Cached git repository metadata for build-time source transforms",
    add_completion=False,
)

PathArgument = Annotated[
    Optional[Path],
    typer.Argument(help="Working directory (default: current directory)"),
]
ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", help="YAML configuration file"),
]
LogLevelOption = Annotated[
    Optional[str],
    typer.Option(
        help="Logging level (debug, info, warn, error)",
        case_sensitive=False,
        hidden=True,  # Hide from --help
    ),
]


def version_callback(value: bool):
    """Display version and exit."""
    if value:
        typer.echo(f"gitstamp v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True),
    ] = None,
):
    """Gitstamp - Git metadata for build-time transforms.

    Reads branch, commit, author date, latest tag and working tree state
    once per run and serves them from a cache.
    """
    pass


def load_cli_settings(
    config: Optional[Path], path: Optional[Path], log_level: Optional[str]
) -> GitstampSettings:
    """Load settings from file and apply command-line overrides.

    Also configures logging from the resulting log level.

    Raises:
        typer.Exit: If the configuration is invalid
    """
    try:
        settings = load_settings(config)
        overrides = {}
        if path is not None:
            overrides["cwd"] = path
        if log_level is not None:
            overrides["log_level"] = log_level
        if overrides:
            settings = GitstampSettings(
                **{**settings.model_dump(), **overrides}
            )
    except (ConfigError, ValueError) as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1) from e

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format="%(message)s",
    )
    return settings


def build_provider(settings: GitstampSettings) -> GitStatusProvider:
    """Create a provider for the configured working directory.

    Raises:
        typer.Exit: If the working directory is invalid or git fails
    """
    cwd = (settings.cwd or Path.cwd()).expanduser().resolve()
    if not cwd.is_dir():
        typer.echo(f"❌ Not a directory: {cwd}", err=True)
        raise typer.Exit(1)

    try:
        return GitStatusProvider(cwd, git_executable=settings.git_executable)
    except GitStatusError as e:
        typer.echo(f"❌ Cannot read git status: {e}", err=True)
        raise typer.Exit(1) from e


@app.command()
def status(
    path: PathArgument = None,
    config: ConfigOption = None,
    log_level: LogLevelOption = None,
):
    """Show whether the directory is tracked by git and has uncommitted changes."""
    settings = load_cli_settings(config, path, log_level)
    provider = build_provider(settings)

    typer.echo(f"tracked: {str(provider.is_tracked()).lower()}")
    typer.echo(f"dirty: {str(provider.is_dirty()).lower()}")


@app.command()
def query(
    key: Annotated[GitQuery, typer.Argument(help="Property to resolve")],
    path: PathArgument = None,
    config: ConfigOption = None,
    log_level: LogLevelOption = None,
):
    """Print a single git property."""
    settings = load_cli_settings(config, path, log_level)
    provider = build_provider(settings)

    typer.echo(str(provider.query(key)))


@app.command()
def show(
    path: PathArgument = None,
    output_format: Annotated[
        Optional[str],
        typer.Option(
            "--format",
            help="Output format (json or yaml)",
            case_sensitive=False,
        ),
    ] = None,
    config: ConfigOption = None,
    log_level: LogLevelOption = None,
):
    """Print every git property."""
    settings = load_cli_settings(config, path, log_level)
    fmt = (output_format or settings.output_format).lower()
    if fmt not in ("json", "yaml"):
        typer.echo(f"❌ Invalid format: {fmt}. Must be json or yaml.", err=True)
        raise typer.Exit(1)

    provider = build_provider(settings)
    props = provider.props()

    if fmt == "yaml":
        typer.echo(props.to_yaml(), nl=False)
    else:
        typer.echo(props.to_json())


if __name__ == "__main__":
    app()
