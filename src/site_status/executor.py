"""
Executor layer for site monitoring.

Runs the HTTP, certificate and domain probes for every configured site
and assembles the results into a snapshot.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, TYPE_CHECKING

from .models import Site, SiteStatus, Snapshot
from .checkers.base_checker import DEFAULT_TIMEOUT, BaseChecker, describe_error
from .checkers.http import HTTPChecker
from .checkers.ssl import SSLChecker
from .checkers.rdap import RDAPChecker

if TYPE_CHECKING:
    from .console.output import ConsoleManager


logger = logging.getLogger(__name__)


class SnapshotBuilder:
    """
    Builds a status snapshot for a list of sites.

    Sites are checked strictly in list order and, for each site, the probes
    run one after another: HTTP, then certificate, then domain. A builder
    holds fresh checker instances, so per-run caches (such as the RDAP
    bootstrap directory) live exactly as long as the builder.
    """

    def __init__(
        self,
        sites: Sequence[Site],
        timeout: float = DEFAULT_TIMEOUT,
        console_manager: Optional['ConsoleManager'] = None
    ):
        """
        Initialize the builder.

        Args:
            sites: Sites to check, in output order
            timeout: Per-probe network timeout in seconds (default: 10)
            console_manager: Optional ConsoleManager for progress display
        """
        self.sites = list(sites)
        self.timeout = timeout
        self.console_manager = console_manager
        self.checkers = self._initialize_checkers()

    def _initialize_checkers(self) -> Dict[str, BaseChecker]:
        """
        Create one instance of each checker, reused for all sites.

        Returns:
            Dictionary mapping check type names to checker instances
        """
        return {
            'http': HTTPChecker(timeout=self.timeout),
            'ssl': SSLChecker(timeout=self.timeout),
            'domain': RDAPChecker(timeout=self.timeout),
        }

    async def build(self) -> Snapshot:
        """
        Check every site and return the assembled snapshot.

        generated_at is taken before the first probe starts. A site whose
        slug repeats an earlier one replaces it.

        Returns:
            Snapshot with one entry per distinct slug
        """
        snapshot = Snapshot(generated_at=datetime.now(timezone.utc))
        logger.info(f"Starting checks for {len(self.sites)} site(s)")
        start_time = time.time()

        progress_tracker = None
        if self.console_manager:
            from .console.progress import ProgressTracker
            progress_tracker = ProgressTracker(self.console_manager.console, len(self.sites))
            progress_tracker.start()

        try:
            for site in self.sites:
                if progress_tracker:
                    progress_tracker.update_site(site.name)

                status = await self.check_site(site)
                snapshot.sites[site.slug] = status

                if progress_tracker:
                    progress_tracker.complete_site(status)
        finally:
            total_time = time.time() - start_time
            if progress_tracker:
                progress_tracker.finish(total_time)

        logger.info(f"Completed all checks in {total_time:.2f}s")
        return snapshot

    async def check_site(self, site: Site) -> SiteStatus:
        """
        Run all probes for a single site, sequentially.

        Args:
            site: The site to check

        Returns:
            SiteStatus; domain is None when the site has no domain configured
        """
        logger.debug(f"Starting checks for site: {site.slug}")

        http = await safe_check(self.checkers['http'], site.url)
        ssl = await safe_check(self.checkers['ssl'], site.host)
        domain = None
        if site.domain:
            domain = await safe_check(self.checkers['domain'], site.domain)

        logger.debug(
            f"Site {site.slug}: http={http.ok} ssl={ssl.ok} "
            f"domain={domain.ok if domain is not None else 'n/a'}"
        )

        return SiteStatus(site=site, http=http, ssl=ssl, domain=domain)


async def build_snapshot(sites: Sequence[Site], timeout: float = DEFAULT_TIMEOUT) -> Snapshot:
    """
    Build a snapshot for sites without any console output.

    Args:
        sites: Sites to check, in output order
        timeout: Per-probe network timeout in seconds (default: 10)
    """
    return await SnapshotBuilder(sites, timeout=timeout).build()


async def safe_check(checker: BaseChecker, target: str, **kwargs):
    """
    Run a checker, turning any escaped exception into a failed result.

    Checkers already report their own failures; this keeps one misbehaving
    probe from aborting the remaining sites.

    Args:
        checker: The checker instance to execute
        target: URL, hostname or domain to check
        **kwargs: Additional parameters for the check

    Returns:
        The checker's result, or its failure result on exception
    """
    try:
        return await checker.check(target, **kwargs)
    except Exception as e:
        logger.error(f"{checker.check_type} check failed for {target}: {str(e)}", exc_info=True)
        return checker.failure(describe_error(e))
