"""Progress display for a snapshot run."""

from rich.console import Console
from rich.progress import (
    Progress,
    SpinnerColumn,
    BarColumn,
    MofNCompleteColumn,
    TimeElapsedColumn,
    TextColumn,
)
from rich.text import Text

from ..models import SiteStatus
from .themes import ICONS, STATUS_COLORS


class ProgressTracker:
    """사이트별 체크 진행 상황과 결과 요약 표시"""

    def __init__(self, console: Console, total_sites: int):
        """
        Args:
            console: Rich Console 인스턴스
            total_sites: 체크할 사이트 수
        """
        self.console = console
        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=console,
        )
        self.task_id = self.progress.add_task("[cyan]Checking sites...", total=total_sites, start=False)

    def start(self) -> None:
        self.progress.start()
        self.progress.start_task(self.task_id)

    def update_site(self, name: str) -> None:
        """Show which site is being probed."""
        self.progress.update(self.task_id, description=f"[cyan]Checking {name}...")

    def complete_site(self, status: SiteStatus) -> None:
        """
        Advance the bar and print a one-line outcome for the finished site.

        Args:
            status: Result of the site's probes
        """
        self.progress.advance(self.task_id, 1)
        self.progress.console.print(self.summarize(status))

    @staticmethod
    def summarize(status: SiteStatus) -> Text:
        """One line with the site name and the outcome of each probe."""
        line = Text("  ")
        line.append(f"{status.site.name}: ", style="bold")

        http = status.http
        http_text = f"{http.status} ({http.elapsed_ms} ms)" if http.status is not None else http.error
        line.append(f"HTTP {_icon(http.ok)} {http_text}", style=STATUS_COLORS[http.ok])

        for label, result in (("TLS", status.ssl), ("Domain", status.domain)):
            line.append("  ")
            if result is None:
                line.append(f"{label} -", style=STATUS_COLORS[None])
            elif result.ok:
                line.append(f"{label} {_icon(True)} {result.days_left}d", style=STATUS_COLORS[True])
            else:
                line.append(f"{label} {_icon(False)} {result.error or 'no expiry'}", style=STATUS_COLORS[False])
        return line

    def finish(self, total_time: float) -> None:
        """
        진행 표시 종료 후 전체 소요 시간 출력

        Args:
            total_time: 전체 실행 시간 (초)
        """
        self.progress.stop()
        self.console.print(
            f"\n[bold green]{ICONS['success']}[/bold green] Completed all checks in "
            f"[bold cyan]{total_time:.2f}[/bold cyan] seconds"
        )


def _icon(ok: bool) -> str:
    return ICONS['success'] if ok else ICONS['error']
