"""
TLS certificate checker for site monitoring.

Reads the leaf certificate a server presents and reports when it expires.
"""

import asyncio
import logging
import socket
import ssl
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from OpenSSL import crypto

from ..models import CertResult, days_until
from .base_checker import BaseChecker, describe_error

logger = logging.getLogger(__name__)

# ASN.1 GeneralizedTime as returned by X509.get_notAfter(), e.g. b'20251105103000Z'
NOT_AFTER_FORMAT = '%Y%m%d%H%M%SZ'


class SSLChecker(BaseChecker):
    """
    Checker for TLS certificate expiration.

    Opens a TLS session with SNI set to the hostname and inspects the leaf
    certificate. The chain is not validated and the hostname is not matched
    against the certificate, so self-signed or mismatched certificates still
    yield an expiry reading once the handshake completes.
    """

    async def check(self, hostname: str, port: int = 443, **kwargs) -> CertResult:
        """
        Check the TLS certificate served by hostname:port.

        Args:
            hostname: Host to connect to, also sent as SNI server name
            port: TCP port (default: 443)
            **kwargs: Additional parameters (unused)

        Returns:
            CertResult with expiry, days left, issuer and subject
        """
        logger.debug(f"Starting SSL check for {hostname}:{port}")

        try:
            cert_dict = await self._get_certificate(hostname, port)
        except socket.gaierror as e:
            logger.warning(f"Failed to resolve {hostname}: {str(e)}")
            return self.failure(describe_error(e))
        except (socket.timeout, asyncio.TimeoutError):
            logger.warning(f"SSL connection to {hostname}:{port} timed out after {self.timeout}s")
            return self.failure("timeout")
        except (ssl.SSLError, OSError) as e:
            logger.warning(f"SSL connection to {hostname}:{port} failed: {str(e)}")
            return self.failure(describe_error(e))
        except Exception as e:
            logger.error(f"SSL check failed for {hostname}: {str(e)}", exc_info=True)
            return self.failure(describe_error(e))

        expires_at, issuer, subject = self._parse_certificate(cert_dict)
        days_left = days_until(expires_at) if expires_at is not None else None

        logger.debug(f"Certificate details for {hostname}:")
        logger.debug(f"  Issuer: {issuer}")
        logger.debug(f"  Subject: {subject}")
        logger.debug(f"  Expiration: {expires_at} ({days_left} days left)")

        return CertResult(
            ok=expires_at is not None,
            expires_at=expires_at,
            days_left=days_left,
            issuer=issuer,
            subject=subject,
        )

    def failure(self, error: str) -> CertResult:
        return CertResult(ok=False, error=error)

    async def _get_certificate(self, hostname: str, port: int = 443) -> Dict[str, Any]:
        """
        Establish a TLS connection and retrieve the leaf certificate.

        The blocking socket work runs in the default thread pool.

        Args:
            hostname: The host to connect to
            port: The port to connect to (default: 443)

        Returns:
            Dictionary with 'notAfter', 'issuer' and 'subject' entries, or
            an empty dict when the server presented no certificate

        Raises:
            socket.gaierror: If the host cannot be resolved
            socket.timeout: If the connection goes idle past the timeout
            ssl.SSLError: If the TLS handshake fails
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None,
            self._get_certificate_sync,
            hostname,
            port
        )

    def _get_certificate_sync(self, hostname: str, port: int) -> Dict[str, Any]:
        """
        Synchronous helper to get the certificate (runs in thread pool).

        Both sockets are closed on exit from the with blocks, on success,
        handshake failure or timeout alike.
        """
        context = ssl.create_default_context()
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE

        with socket.create_connection((hostname, port), timeout=self.timeout) as sock:
            with context.wrap_socket(sock, server_hostname=hostname) as ssock:
                cert_der = ssock.getpeercert(binary_form=True)

        if not cert_der:
            return {}
        return self._decode_certificate(cert_der)

    @staticmethod
    def _decode_certificate(cert_der: bytes) -> Dict[str, Any]:
        """
        Decode a DER certificate into a plain dictionary.

        Args:
            cert_der: Certificate in DER (ASN.1) encoding

        Returns:
            Dictionary with 'notAfter' (GeneralizedTime string or None) and
            'issuer'/'subject' component mappings keyed by short name
        """
        x509 = crypto.load_certificate(crypto.FILETYPE_ASN1, cert_der)

        subject = {}
        for key, value in x509.get_subject().get_components():
            subject[key.decode()] = value.decode()

        issuer = {}
        for key, value in x509.get_issuer().get_components():
            issuer[key.decode()] = value.decode()

        not_after = x509.get_notAfter()
        return {
            'notAfter': not_after.decode('ascii') if not_after else None,
            'issuer': issuer,
            'subject': subject,
        }

    @staticmethod
    def _parse_certificate(cert_dict: Dict[str, Any]) -> Tuple[Optional[datetime], Optional[str], Optional[str]]:
        """
        Extract expiry, issuer organization and subject common name.

        Missing or unparseable fields come back as None.

        Args:
            cert_dict: Dictionary produced by _decode_certificate()

        Returns:
            Tuple of (expires_at, issuer, subject)
        """
        expires_at = None
        not_after = cert_dict.get('notAfter')
        if not_after:
            try:
                expires_at = datetime.strptime(not_after, NOT_AFTER_FORMAT).replace(tzinfo=timezone.utc)
            except ValueError:
                logger.debug(f"Unparseable certificate notAfter: {not_after!r}")

        issuer = cert_dict.get('issuer', {}).get('O')
        subject = cert_dict.get('subject', {}).get('CN')
        return expires_at, issuer, subject
