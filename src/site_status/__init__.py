"""
Site Status Monitor

Polls a list of websites for HTTP reachability, TLS certificate expiry and
domain registration expiry (via RDAP), and writes a JSON snapshot for a
static status page.
"""

__version__ = "0.1.0"

from .models import Site, HttpResult, CertResult, DomainResult, SiteStatus, Snapshot
from .config import load_sites, validate_sites, get_default_sites_path
from .checkers import BaseChecker, HTTPChecker, SSLChecker, RDAPChecker
from .executor import SnapshotBuilder, build_snapshot, safe_check
from .reporter import Reporter

__all__ = [
    'Site',
    'HttpResult',
    'CertResult',
    'DomainResult',
    'SiteStatus',
    'Snapshot',
    'load_sites',
    'validate_sites',
    'get_default_sites_path',
    'BaseChecker',
    'HTTPChecker',
    'SSLChecker',
    'RDAPChecker',
    'SnapshotBuilder',
    'build_snapshot',
    'safe_check',
    'Reporter',
]
