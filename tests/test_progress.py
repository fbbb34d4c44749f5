"""
Tests for the progress display.

Tests the per-site outcome lines and the builder wiring.
"""

from datetime import datetime, timezone

import pytest
from rich.console import Console

from site_status.console.output import ConsoleManager
from site_status.console.progress import ProgressTracker
from site_status.executor import SnapshotBuilder
from site_status.models import CertResult, DomainResult, HttpResult, Site, SiteStatus


SITE = Site(slug="ex", name="Example", url="https://example.test", host="example.test")


def recording_console():
    return Console(record=True, width=160)


class TestSummarize:
    """Tests for ProgressTracker.summarize."""

    def test_successful_probes(self):
        status = SiteStatus(
            site=SITE,
            http=HttpResult(ok=True, status=200, elapsed_ms=87),
            ssl=CertResult(ok=True, expires_at=datetime(2026, 12, 18, tzinfo=timezone.utc), days_left=60),
            domain=DomainResult(ok=True, days_left=400, source="https://rdap.example.test/"),
        )

        text = ProgressTracker.summarize(status).plain

        assert text == "  Example: HTTP ✓ 200 (87 ms)  TLS ✓ 60d  Domain ✓ 400d"

    def test_failed_probes_show_errors(self):
        status = SiteStatus(
            site=SITE,
            http=HttpResult(ok=False, error="ClientConnectorError: Cannot connect"),
            ssl=CertResult(ok=False, error="timeout"),
        )

        text = ProgressTracker.summarize(status).plain

        assert "HTTP ✗ ClientConnectorError: Cannot connect" in text
        assert "TLS ✗ timeout" in text
        assert "Domain -" in text


class TestProgressTracker:
    """Tests for the tracker lifecycle."""

    def test_prints_each_completed_site_and_total_time(self):
        console = recording_console()
        tracker = ProgressTracker(console, total_sites=1)
        status = SiteStatus(
            site=SITE,
            http=HttpResult(ok=False, status=503, elapsed_ms=12),
            ssl=CertResult(ok=False, error="timeout"),
        )

        tracker.start()
        tracker.update_site(SITE.name)
        tracker.complete_site(status)
        tracker.finish(1.5)

        text = console.export_text()
        assert "Example: HTTP ✗ 503 (12 ms)" in text
        assert "Completed all checks in 1.50 seconds" in text
        assert tracker.progress.tasks[0].completed == 1

    @pytest.mark.asyncio
    async def test_builder_reports_progress_per_site(self):
        console = recording_console()
        sites = [
            SITE,
            Site(slug="docs", name="Docs", url="https://docs.example.test", host="docs.example.test"),
        ]
        builder = SnapshotBuilder(sites, console_manager=ConsoleManager(console=console))

        async def http(target, **kwargs):
            return HttpResult(ok=True, status=200, elapsed_ms=5)

        async def ssl(target, **kwargs):
            return CertResult(ok=True, days_left=30)

        builder.checkers['http'].check = http
        builder.checkers['ssl'].check = ssl

        await builder.build()

        text = console.export_text()
        assert "Example: HTTP ✓ 200 (5 ms)  TLS ✓ 30d" in text
        assert "Docs: HTTP ✓ 200 (5 ms)" in text
        assert "Completed all checks in" in text
