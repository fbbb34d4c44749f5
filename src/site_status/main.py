"""
CLI entry point for the site status monitor.

Loads the site list, probes every site and writes the JSON snapshot read
by the status page.
"""

import asyncio
import logging
import sys
from typing import Optional

import click

from . import __version__
from .config import get_default_sites_path, load_sites
from .checkers.base_checker import DEFAULT_TIMEOUT
from .executor import SnapshotBuilder
from .reporter import DEFAULT_OUTPUT_PATH, Reporter
from .console.output import ConsoleManager


logger = logging.getLogger(__name__)

LOG_FILE = 'site-status.log'


def setup_logging(log_level: str, debug_mode: bool = False) -> None:
    """
    Configure logging with specified level and debug mode.

    Everything at log_level and above goes to the log file. The console
    handler stays silent unless debug_mode is set.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        debug_mode: If True, also display logs on the console
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    file_handler = logging.FileHandler(LOG_FILE, encoding='utf-8')
    file_handler.setLevel(numeric_level)
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    if debug_mode:
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
    else:
        console_handler.setLevel(logging.CRITICAL + 1)  # Suppress all logs

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logger.info(f"Logging initialized at {log_level} level (debug_mode={debug_mode})")


def resolve_sites_file(file_path: Optional[str]) -> str:
    """
    Resolve the site configuration path.

    Args:
        file_path: Path given on the command line, if any

    Returns:
        Path to the site configuration file

    Raises:
        click.ClickException: If no configuration file is found
    """
    if file_path:
        return file_path

    default_path = get_default_sites_path()
    if default_path is None:
        raise click.ClickException(
            "No site configuration found. Please either:\n"
            "  1. Create 'config/sites.json' (or sites.yaml) in the current directory, or\n"
            "  2. Specify a configuration file using the -f/--file option\n\n"
            "Example: site-status check -f /path/to/sites.yaml"
        )
    return default_path


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """
    Site Status Monitor

    Check HTTP reachability, TLS certificate expiry and domain registration
    expiry for a list of sites, and write a JSON snapshot for a status page.
    """
    pass


@cli.command(name='check')
@click.option(
    '-f', '--file',
    type=click.Path(exists=True),
    help='Path to site configuration (YAML/JSON)'
)
@click.option(
    '-o', '--output',
    type=click.Path(),
    default=DEFAULT_OUTPUT_PATH,
    show_default=True,
    help='Where to write the JSON snapshot'
)
@click.option(
    '--timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_TIMEOUT,
    show_default=True,
    help='Network timeout in seconds, applied to the HTTP, TLS and RDAP probes alike'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Logging level (default: INFO)'
)
@click.option(
    '--debug',
    is_flag=True,
    default=False,
    help='Enable debug mode with verbose console output'
)
@click.option(
    '--quiet',
    is_flag=True,
    default=False,
    help='Do not print the summary table'
)
def check_command(
    file: Optional[str],
    output: str,
    timeout: float,
    log_level: str,
    debug: bool,
    quiet: bool
) -> None:
    """
    Probe all configured sites and write the status snapshot.

    Examples:

        # Use config/sites.json and write public/status.json
        site-status check

        # Custom configuration and output location
        site-status check -f sites.yaml -o build/status.json

        # Shorter timeouts with verbose logging
        site-status check --timeout 5 --debug
    """
    setup_logging(log_level, debug_mode=debug)
    console_manager = ConsoleManager(debug_mode=debug)

    config_path = resolve_sites_file(file)

    try:
        logger.info(f"Loading sites from: {config_path}")
        sites = load_sites(config_path)

        if not quiet:
            console_manager.print_banner(
                version=__version__,
                config_path=config_path,
                site_count=len(sites),
                output_path=output
            )

        builder = SnapshotBuilder(
            sites,
            timeout=timeout,
            console_manager=None if quiet else console_manager
        )
        snapshot = asyncio.run(builder.build())

        reporter = Reporter(snapshot, console_manager=console_manager)
        if not quiet:
            reporter.display_table()

        written = reporter.write_json(output)
        console_manager.print_success(f"Snapshot written to: {written}")
        logger.info("Monitoring completed successfully")

    except Exception as e:
        error_msg = str(e) if str(e) else f"{type(e).__name__} occurred"
        logger.error(f"Run failed: {error_msg}", exc_info=True)

        console_manager.print_error(
            error_msg,
            details={
                'error_type': type(e).__name__,
                'log_file': LOG_FILE
            },
            exception=e
        )
        sys.exit(1)


def main() -> None:
    """Entry point for CLI."""
    cli()


if __name__ == '__main__':
    main()
