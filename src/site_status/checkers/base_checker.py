"""
Base checker infrastructure for site monitoring.

Provides the abstract base class shared by the HTTP, certificate and
domain expiry probes.
"""

from abc import ABC, abstractmethod
from typing import Any


# Identifying client header sent with every outbound HTTP request
USER_AGENT = "StatusMonitor/1.0"

DEFAULT_TIMEOUT = 10


def describe_error(error: BaseException) -> str:
    """
    Render an exception as a short human-readable string.

    Args:
        error: The exception to describe

    Returns:
        '<ExceptionType>: <message>', or just the type name when the
        exception carries no message
    """
    message = str(error)
    if message:
        return f"{type(error).__name__}: {message}"
    return type(error).__name__


class BaseChecker(ABC):
    """
    Abstract base class for all site probes.

    Subclasses implement check() and must never let an exception escape it:
    every failure is reported through the returned result object.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        """
        Initialize the checker.

        Args:
            timeout: Maximum time in seconds to wait on the network (default: 10)
        """
        self.timeout = timeout

    @property
    def check_type(self) -> str:
        """Short name of the check, e.g. 'http' for HTTPChecker."""
        return self.__class__.__name__.replace('Checker', '').lower()

    @abstractmethod
    async def check(self, target: str, **kwargs) -> Any:
        """
        Execute the check against the specified target.

        Args:
            target: URL, hostname or domain depending on the check type
            **kwargs: Additional parameters specific to the check type

        Returns:
            A result dataclass from site_status.models
        """
        pass

    @abstractmethod
    def failure(self, error: str) -> Any:
        """
        Build a failed result of this checker's result type.

        Args:
            error: Human-readable failure description
        """
        pass
