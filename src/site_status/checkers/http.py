"""
HTTP reachability checker for site monitoring.

Sends one GET request per URL, follows redirects and records latency.
"""

import asyncio
import logging
import time
from typing import Tuple

import aiohttp

from ..models import HttpResult
from .base_checker import USER_AGENT, BaseChecker, describe_error

logger = logging.getLogger(__name__)


class HTTPChecker(BaseChecker):
    """
    Checker for HTTP/HTTPS reachability and latency.

    A response with a status code in [200, 400) counts as reachable. Any
    other status is reported with ok=False but keeps the status code and
    latency; network-level failures carry only an error string.
    """

    async def check(self, url: str, **kwargs) -> HttpResult:
        """
        Check HTTP reachability of the specified URL.

        Args:
            url: Absolute http:// or https:// URL
            **kwargs: Additional parameters (unused)

        Returns:
            HttpResult with status code and latency, or an error
        """
        logger.debug(f"Starting HTTP check for {url}")

        try:
            status_code, elapsed_ms = await self._make_request(url)

            logger.debug(f"HTTP request to {url} completed: status={status_code}, time={elapsed_ms}ms")

            return HttpResult(
                ok=self._is_success(status_code),
                status=status_code,
                elapsed_ms=elapsed_ms,
            )

        except asyncio.TimeoutError as e:
            logger.warning(f"HTTP request to {url} timed out after {self.timeout}s")
            return self.failure(describe_error(e))
        except aiohttp.ClientError as e:
            logger.warning(f"HTTP request failed for {url}: {str(e)}")
            return self.failure(describe_error(e))
        except Exception as e:
            logger.error(f"HTTP check failed for {url}: {str(e)}", exc_info=True)
            return self.failure(describe_error(e))

    def failure(self, error: str) -> HttpResult:
        return HttpResult(ok=False, status=None, elapsed_ms=None, error=error)

    async def _make_request(self, url: str) -> Tuple[int, int]:
        """
        Send an HTTP GET request and return the final status code and latency.

        Latency runs from sending the request until the final response
        headers arrive; the body is never read.

        The total timeout cancels the in-flight request and closes its
        connection when it fires.

        Args:
            url: The URL to request

        Returns:
            Tuple of (status code after redirects, latency in milliseconds)

        Raises:
            aiohttp.ClientError: If the request fails
            asyncio.TimeoutError: If the request times out
        """
        timeout = aiohttp.ClientTimeout(total=self.timeout)

        async with aiohttp.ClientSession(timeout=timeout, headers={'User-Agent': USER_AGENT}) as session:
            start = time.monotonic()
            async with session.get(url, allow_redirects=True) as response:
                elapsed_ms = int(round((time.monotonic() - start) * 1000))
                if response.history:
                    chain = [str(resp.url) for resp in response.history]
                    chain.append(str(response.url))
                    logger.debug(f"Redirect chain for {url}: {' -> '.join(chain)}")
                return response.status, elapsed_ms

    @staticmethod
    def _is_success(status_code: int) -> bool:
        """
        Decide reachability from a status code.

        2xx and 3xx count as reachable; 1xx, 4xx and 5xx do not.
        """
        return 200 <= status_code < 400
