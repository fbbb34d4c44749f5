"""
Checker modules for site monitoring.

Each checker module implements one independent health probe.
"""

from .base_checker import BaseChecker, describe_error
from .http import HTTPChecker
from .ssl import SSLChecker
from .rdap import RDAPChecker

__all__ = ['BaseChecker', 'describe_error', 'HTTPChecker', 'SSLChecker', 'RDAPChecker']
