"""Data models for site status snapshots."""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


SECONDS_PER_DAY = 86400


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Format a datetime as ISO-8601 UTC with milliseconds and a trailing Z.

    Naive datetimes are treated as UTC.

    Args:
        value: Datetime to format, or None

    Returns:
        String like '2026-10-19T12:00:00.000Z', or None if value is None
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def days_until(expires_at: datetime, now: Optional[datetime] = None) -> int:
    """Whole days until expires_at, rounding partial days up.

    A timestamp 12 hours out yields 1. Past timestamps yield zero or a
    negative number.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    delta = expires_at - now
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


@dataclass(frozen=True)
class Site:
    """A website to monitor."""
    slug: str  # Unique identifier and output key
    name: str  # Display name
    url: str  # HTTP endpoint
    host: str  # TLS target hostname
    domain: Optional[str] = None  # Registrable domain for RDAP lookup


@dataclass
class HttpResult:
    """Outcome of an HTTP reachability probe."""
    ok: bool
    status: Optional[int] = None
    elapsed_ms: Optional[int] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'ok': self.ok,
            'status': self.status,
            'elapsedMs': self.elapsed_ms,
            'error': self.error,
        }


@dataclass
class CertResult:
    """Outcome of a TLS certificate probe."""
    ok: bool
    expires_at: Optional[datetime] = None
    days_left: Optional[int] = None
    issuer: Optional[str] = None  # Issuer organization name
    subject: Optional[str] = None  # Subject common name
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        if self.error is not None:
            return {
                'ok': False,
                'expiresAt': None,
                'daysLeft': None,
                'error': self.error,
            }
        return {
            'ok': self.ok,
            'expiresAt': format_timestamp(self.expires_at),
            'daysLeft': self.days_left,
            'issuer': self.issuer,
            'subject': self.subject,
        }


@dataclass
class DomainResult:
    """Outcome of a domain registration expiry probe."""
    ok: bool
    expires_at: Optional[datetime] = None
    days_left: Optional[int] = None
    source: Optional[str] = None  # RDAP base URL that answered
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        if not self.ok:
            return {
                'ok': False,
                'expiresAt': None,
                'daysLeft': None,
                'error': self.error,
            }
        return {
            'ok': True,
            'expiresAt': format_timestamp(self.expires_at),
            'daysLeft': self.days_left,
            'source': self.source,
        }


@dataclass
class SiteStatus:
    """All probe results for a single site."""
    site: Site
    http: HttpResult
    ssl: CertResult
    domain: Optional[DomainResult] = None  # None when the site has no domain

    def to_dict(self) -> Dict[str, Any]:
        return {
            'meta': {'name': self.site.name, 'url': self.site.url},
            'http': self.http.to_dict(),
            'ssl': self.ssl.to_dict(),
            'domain': self.domain.to_dict() if self.domain is not None else None,
        }


@dataclass
class Snapshot:
    """Status of every configured site at a point in time."""
    generated_at: datetime
    sites: Dict[str, SiteStatus] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'generatedAt': format_timestamp(self.generated_at),
            'sites': {slug: status.to_dict() for slug, status in self.sites.items()},
        }
