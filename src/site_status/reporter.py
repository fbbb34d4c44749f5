"""
Reporter layer for site monitoring.

Writes the snapshot JSON consumed by the status page and renders a
summary table in the console.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from rich.table import Table
from rich.text import Text

from .models import HttpResult, Snapshot
from .console.output import ConsoleManager
from .console.themes import ICONS, STATUS_COLORS


logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_PATH = 'public/status.json'


class Reporter:
    """
    Reporter for a site status snapshot.

    Handles the JSON export read by the status page and an optional
    console table.
    """

    def __init__(self, snapshot: Snapshot, console_manager: Optional[ConsoleManager] = None):
        """
        Initialize the reporter.

        Args:
            snapshot: Snapshot produced by SnapshotBuilder
            console_manager: ConsoleManager instance for Rich output
        """
        self.snapshot = snapshot
        self.console_manager = console_manager or ConsoleManager()
        self.console = self.console_manager.console

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable form of the snapshot."""
        return self.snapshot.to_dict()

    def write_json(self, file_path: str = DEFAULT_OUTPUT_PATH) -> Path:
        """
        Write the snapshot as 2-space indented JSON, replacing any old file.

        Parent directories are created as needed. Errors are logged and
        re-raised; a failed write must fail the run.

        Args:
            file_path: Destination path (default: public/status.json)

        Returns:
            Path that was written
        """
        output_path = Path(file_path)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)

            with open(output_path, 'w', encoding='utf-8') as f:
                json.dump(self.to_dict(), f, indent=2)

            logger.info(f"Snapshot written to {output_path} ({len(self.snapshot.sites)} site(s))")
            return output_path

        except Exception as e:
            logger.error(f"Failed to write snapshot to {file_path}: {str(e)}", exc_info=True)
            raise

    def display_table(self) -> None:
        """
        Display one row per site with the outcome of each probe.
        """
        table = Table(
            title="[bold magenta]Site Status[/bold magenta]",
            show_header=True,
            header_style="bold cyan",
        )
        table.add_column("Site", style="bold cyan", no_wrap=True)
        table.add_column("HTTP")
        table.add_column("TLS")
        table.add_column("Domain")

        for slug, status in self.snapshot.sites.items():
            table.add_row(
                Text(f"{status.site.name} ({slug})"),
                self._format_http(status.http),
                self._format_expiry(status.ssl),
                self._format_expiry(status.domain),
            )

        self.console.print()
        self.console.print(table)
        self.console.print()

    def _format_http(self, result: HttpResult) -> Text:
        color = STATUS_COLORS[result.ok]
        icon = ICONS['success'] if result.ok else ICONS['error']
        if result.status is None:
            return Text(f"{icon} {result.error}", style=color)
        return Text(f"{icon} {result.status} ({result.elapsed_ms} ms)", style=color)

    def _format_expiry(self, result: Optional[Any]) -> Text:
        """Format a CertResult or DomainResult; None renders as a dash."""
        if result is None:
            return Text("-", style=STATUS_COLORS[None])

        color = STATUS_COLORS[result.ok]
        if not result.ok:
            return Text(f"{ICONS['error']} {result.error or 'no expiry'}", style=color)

        expires = result.expires_at.strftime('%Y-%m-%d') if result.expires_at else '?'
        return Text(f"{ICONS['success']} {result.days_left}d ({expires})", style=color)
