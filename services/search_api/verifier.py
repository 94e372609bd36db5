"""
verifier.py - Credential Verifier
=================================
Cloudflare Turnstile token verification.

Failures of any kind (network, timeout, non-2xx, malformed body) are logged
and reported as a rejected token; the search layer answers them with a
"verification_failed" response instead of an empty result.
"""

import logging
from typing import Optional, Protocol

import httpx

logger = logging.getLogger(__name__)

DEFAULT_VERIFY_URL = "https://challenges.cloudflare.com/turnstile/v0/siteverify"


class CredentialVerifier(Protocol):
    """External check that a credential is genuine."""

    def verify(self, credential: str, remote_ip: Optional[str] = None) -> bool:
        ...


class TurnstileVerifier:
    """
    Verifies Turnstile tokens against the siteverify endpoint.

    Args:
        secret_key: Turnstile secret for this site
        verify_url: siteverify endpoint
        timeout: HTTP timeout in seconds
        client: Optional preconfigured httpx.Client (tests pass a MockTransport)
    """

    def __init__(
        self,
        secret_key: str,
        verify_url: str = DEFAULT_VERIFY_URL,
        timeout: float = 5.0,
        client: Optional[httpx.Client] = None,
    ):
        if not secret_key:
            raise ValueError("Turnstile secret key is required")
        self.secret_key = secret_key
        self.verify_url = verify_url
        self._client = client or httpx.Client(timeout=timeout)

    def verify(self, credential: str, remote_ip: Optional[str] = None) -> bool:
        """
        Ask Turnstile whether ``credential`` is valid.

        Returns:
            The ``success`` flag of the siteverify response; False on any failure
        """
        form = {"secret": self.secret_key, "response": credential}
        if remote_ip:
            form["remoteip"] = remote_ip

        try:
            response = self._client.post(self.verify_url, data=form)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as e:
            logger.warning(f"[TURNSTILE] Verification request failed: {type(e).__name__}: {e}")
            return False
        except ValueError as e:
            logger.warning(f"[TURNSTILE] Malformed verification response: {e}")
            return False

        success = isinstance(body, dict) and body.get("success") is True
        if not success and isinstance(body, dict):
            logger.info(f"[TURNSTILE] Token rejected: error-codes={body.get('error-codes', [])}")
        return success

    def close(self):
        self._client.close()
