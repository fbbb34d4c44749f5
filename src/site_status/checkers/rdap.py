"""
RDAP checker for domain registration expiry.

Looks up the RDAP service responsible for a domain's TLD in the IANA
bootstrap directory, queries it and extracts the expiration event.
"""

import asyncio
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import aiohttp

from ..models import DomainResult, days_until
from .base_checker import USER_AGENT, BaseChecker, describe_error

logger = logging.getLogger(__name__)

IANA_RDAP_DNS_BOOTSTRAP_URL = "https://data.iana.org/rdap/dns.json"

# eventAction values that carry the registration expiry date
EXPIRATION_ACTIONS = ("expiration", "expiry", "expires")

NO_SERVICE_ERROR = "No RDAP service for TLD"
NO_EXPIRATION_ERROR = "Expiration not provided via RDAP"

# Seconds fraction of any length; fromisoformat before 3.11 takes only 3 or 6 digits
FRACTION_PATTERN = re.compile(r"(:\d{2})\.(\d+)")


def parse_event_date(value: Any) -> Optional[datetime]:
    """
    Parse an RDAP eventDate into an aware UTC datetime.

    Accepts ISO-8601 with a 'Z' suffix or an explicit offset; values
    without an offset are taken as UTC.

    Returns:
        Parsed datetime, or None if the value is missing or unparseable
    """
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'
    text = FRACTION_PATTERN.sub(_normalize_fraction, text, count=1)

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _normalize_fraction(match: re.Match) -> str:
    return f"{match.group(1)}.{match.group(2)[:6].ljust(6, '0')}"


class RDAPChecker(BaseChecker):
    """
    Checker for domain registration expiry via RDAP.

    The bootstrap directory is fetched on first use and kept on the
    instance, so a checker created for one run fetches it once.
    """

    def __init__(self, timeout: float = 10, bootstrap_url: str = IANA_RDAP_DNS_BOOTSTRAP_URL):
        """
        Initialize the checker.

        Args:
            timeout: Maximum time in seconds for each HTTP fetch (default: 10)
            bootstrap_url: Location of the RDAP DNS bootstrap directory
        """
        super().__init__(timeout=timeout)
        self.bootstrap_url = bootstrap_url
        self._bootstrap: Optional[Dict[str, Any]] = None

    async def check(self, domain: str, **kwargs) -> DomainResult:
        """
        Check registration expiry for the specified domain.

        Args:
            domain: Registrable domain name, e.g. 'example.com'
            **kwargs: Additional parameters (unused)

        Returns:
            DomainResult with expiry and the RDAP base used, or an error
        """
        logger.debug(f"Starting RDAP check for domain: {domain}")

        try:
            bootstrap = await self._get_bootstrap()
            tld = domain.rsplit('.', 1)[-1].lower()
            rdap_base = self._find_service(bootstrap, tld)

            if rdap_base is None:
                logger.warning(f"No RDAP service found for TLD '{tld}' ({domain})")
                return self.failure(NO_SERVICE_ERROR)

            query_url = f"{rdap_base}domain/{domain}"
            logger.debug(f"Querying RDAP for {domain}: {query_url}")
            data = await self._fetch_json(query_url)

            expires_at = self._extract_expiration(data)
            if expires_at is None:
                logger.warning(f"RDAP response for {domain} has no usable expiration event")
                return self.failure(NO_EXPIRATION_ERROR)

            days_left = days_until(expires_at)
            logger.debug(f"Domain {domain} expires at {expires_at.isoformat()} ({days_left} days)")

            return DomainResult(
                ok=True,
                expires_at=expires_at,
                days_left=days_left,
                source=rdap_base,
            )

        except asyncio.TimeoutError as e:
            logger.warning(f"RDAP lookup for {domain} timed out after {self.timeout}s")
            return self.failure(describe_error(e))
        except (aiohttp.ClientError, ValueError) as e:
            logger.warning(f"RDAP lookup failed for {domain}: {str(e)}")
            return self.failure(describe_error(e))
        except Exception as e:
            logger.error(f"RDAP check failed for {domain}: {str(e)}", exc_info=True)
            return self.failure(describe_error(e))

    def failure(self, error: str) -> DomainResult:
        return DomainResult(ok=False, error=error)

    async def _get_bootstrap(self) -> Dict[str, Any]:
        """Return the bootstrap directory, fetching it on first use."""
        if self._bootstrap is None:
            logger.debug(f"Fetching RDAP bootstrap directory from {self.bootstrap_url}")
            self._bootstrap = await self._fetch_json(self.bootstrap_url)
        return self._bootstrap

    async def _fetch_json(self, url: str) -> Any:
        """
        GET a URL and decode the body as JSON.

        The status code is not checked: RDAP servers answer errors with
        JSON bodies too, which then simply lack the wanted fields.

        Raises:
            aiohttp.ClientError: If the request fails
            asyncio.TimeoutError: If the request times out
            ValueError: If the body is not valid JSON
        """
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        headers = {
            'User-Agent': USER_AGENT,
            'Accept': 'application/rdap+json, application/json',
        }

        async with aiohttp.ClientSession(timeout=timeout, headers=headers) as session:
            async with session.get(url, allow_redirects=True) as response:
                return await response.json(content_type=None)

    @staticmethod
    def _find_service(bootstrap: Dict[str, Any], tld: str) -> Optional[str]:
        """
        Find the first RDAP base URL serving the given TLD.

        Each bootstrap service entry is a pair of [tlds, base_urls].

        Returns:
            Base URL ending in '/', or None if no service lists the TLD
        """
        services: List[Any] = bootstrap.get('services') or []
        for service in services:
            tlds, urls = service[0], service[1]
            if tld in (str(t).lower() for t in tlds):
                if not urls:
                    return None
                base = urls[0]
                return base if base.endswith('/') else f"{base}/"
        return None

    @staticmethod
    def _extract_expiration(data: Any) -> Optional[datetime]:
        """
        Pick the expiration date out of an RDAP domain response.

        Only the first event with an expiration-like action is considered.

        Returns:
            Expiry datetime, or None if absent or unparseable
        """
        if not isinstance(data, dict):
            return None

        for event in data.get('events') or []:
            if not isinstance(event, dict):
                continue
            action = str(event.get('eventAction')).lower()
            if action in EXPIRATION_ACTIONS:
                return parse_event_date(event.get('eventDate'))
        return None
