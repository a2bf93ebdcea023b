"""Command line interface for remote-webdriver."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from .api.session import Session
from .config import ClientConfig, load_config
from .factory import build_session

LOGGER = logging.getLogger(__name__)

app = typer.Typer(help="Drive a remote WebDriver server from the command line")

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to YAML configuration."),
]
EnvFileOption = Annotated[
    Optional[Path],
    typer.Option("--env-file", help="Path to an .env file with default configuration values."),
]
ServerOption = Annotated[
    Optional[str],
    typer.Option("--server", help="Base URL of the remote WebDriver server."),
]
BrowserOption = Annotated[
    Optional[str],
    typer.Option("--browser", help="Value for the browserName capability."),
]


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Configure logging before executing any command."""

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


@app.command()
def version() -> None:
    """Print the package version."""

    try:
        typer.echo(get_version("remote-webdriver-api"))
    except PackageNotFoundError:  # pragma: no cover - when running from source tree
        typer.echo("0.0.0")


@app.command()
def screenshot(
    url: Annotated[str, typer.Argument(help="Page to capture.")],
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Where to write the PNG."),
    ] = Path("screenshot.png"),
    config_path: ConfigOption = None,
    env_file: EnvFileOption = None,
    server: ServerOption = None,
    browser: BrowserOption = None,
) -> None:
    """Navigate to a page and save a screenshot of it."""

    config = _load(config_path, env_file, server, browser)
    with _open(config) as session:
        session.set_url(url)
        image = session.get_screenshot()
    output.write_bytes(image)
    typer.echo(f"Saved {len(image)} bytes to {output}")


@app.command()
def inspect(
    url: Annotated[str, typer.Argument(help="Page to open.")],
    config_path: ConfigOption = None,
    env_file: EnvFileOption = None,
    server: ServerOption = None,
    browser: BrowserOption = None,
) -> None:
    """Navigate to a page and print its title and final URL."""

    config = _load(config_path, env_file, server, browser)
    with _open(config) as session:
        session.set_url(url)
        title = session.get_title()
        current_url = session.get_url()
    typer.echo(f"Title: {title}")
    typer.echo(f"URL: {current_url}")


@app.command()
def logs(
    log_type: Annotated[str, typer.Argument(help="Log type to drain, e.g. 'browser'.")] = "browser",
    config_path: ConfigOption = None,
    env_file: EnvFileOption = None,
    server: ServerOption = None,
    browser: BrowserOption = None,
) -> None:
    """Print the log entries the server has collected for a log type."""

    config = _load(config_path, env_file, server, browser)
    with _open(config) as session:
        available = session.get_log_types()
        if log_type not in available:
            typer.echo(f"Unknown log type {log_type!r}; available: {', '.join(available)}", err=True)
            raise typer.Exit(code=1)
        entries = session.new_logs(log_type)

    table = Table(title=f"{log_type} logs")
    table.add_column("Time")
    table.add_column("Level")
    table.add_column("Message")
    for entry in entries:
        table.add_row(entry.time.isoformat(), entry.level, entry.message)
    Console().print(table)


def _load(
    config_path: Optional[Path],
    env_file: Optional[Path],
    server: Optional[str],
    browser: Optional[str],
) -> ClientConfig:
    overrides: dict[str, Any] = {}
    if server:
        overrides["url"] = server
    if browser:
        overrides["capabilities"] = {"browserName": browser}
    return load_config(config_path, env_file=env_file, **overrides)


def _open(config: ClientConfig) -> Session:
    LOGGER.debug("Connecting to %s", config.url)
    return build_session(config)


if __name__ == "__main__":
    app()
