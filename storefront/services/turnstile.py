"""Cloudflare Turnstile token verification"""

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


class TurnstileVerifier:
    """
    Server-side check of a Turnstile challenge token.

    See https://developers.cloudflare.com/turnstile/get-started/server-side-validation/
    """

    def __init__(
        self,
        secret_key: Optional[str],
        verify_url: str = "https://challenges.cloudflare.com/turnstile/v0/siteverify",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.secret_key = secret_key
        self.verify_url = verify_url
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

        if not secret_key:
            logger.warning("No Turnstile secret key configured - form submissions will be rejected")

    async def close(self) -> None:
        await self._http_client.aclose()

    async def verify(self, token: str, remote_ip: Optional[str] = None) -> bool:
        """True when Cloudflare accepts the token"""
        if not self.secret_key or not token:
            return False

        body = {"response": token, "secret": self.secret_key}
        if remote_ip:
            body["remoteip"] = remote_ip

        try:
            response = await self._http_client.post(self.verify_url, json=body)
            response.raise_for_status()
            result = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Turnstile verification failed: {e}")
            return False

        if not result.get("success"):
            logger.info(f"Turnstile rejected token: {result.get('error-codes')}")
            return False
        return True
