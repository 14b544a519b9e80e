"""hostfetch CLI - Main entry point."""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from hostfetch import __version__

console = Console(highlight=False)

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def _setup_logging(verbose: bool) -> None:
    """Send DEBUG logs to stderr when asked; otherwise leave logging unconfigured."""
    if not verbose:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(handler)


@click.command()
@click.version_option(version=__version__, prog_name="hostfetch")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Configuration file (default: ~/.config/hostfetch/config.yaml)",
)
@click.option(
    "--logo",
    type=click.Choice(["auto", "windows", "tux", "apple", "generic", "none"]),
    help="Logo to show beside the info column",
)
@click.option("--verbose", is_flag=True, help="Log probe failures to stderr")
def cli(config_path, logo, verbose):
    """Show host system information beside a logo."""
    from hostfetch.config.loader import ConfigError, load_hostfetch_config
    from hostfetch.logos import get_logo
    from hostfetch.providers.registry import get_provider
    from hostfetch.render import render
    from hostfetch.snapshot import collect_snapshot

    _setup_logging(verbose)

    try:
        config = load_hostfetch_config(config_path)
    except ConfigError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)

    provider = get_provider(command_timeout=config.command_timeout)
    snapshot = collect_snapshot(provider)
    render(
        snapshot,
        get_logo(logo or config.logo),
        console=console,
        width=config.logo_width,
        colors=config.colors,
        hidden=config.hidden_fields,
    )


if __name__ == "__main__":
    cli()
