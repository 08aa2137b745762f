"""Outgoing notifications: Resend email and Mailchimp newsletter signup"""

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


class DeliveryError(Exception):
    """A message could not be handed to the provider"""
    pass


class ResendMailer:
    """Sends transactional email through the Resend HTTP API"""

    def __init__(
        self,
        api_key: Optional[str],
        api_url: str = "https://api.resend.com/emails",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        await self._http_client.aclose()

    async def send(self, sender: str, to: str, subject: str, html: str) -> str:
        """Send an HTML email and return the provider's message id"""
        if not self.api_key:
            raise DeliveryError("Email delivery is not configured")

        try:
            response = await self._http_client.post(
                self.api_url,
                headers={"Authorization": f"Bearer {self.api_key}"},
                json={"from": sender, "to": [to], "subject": subject, "html": html},
            )
            response.raise_for_status()
            message_id = response.json().get("id", "")
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            logger.error(f"Resend request failed: {e}")
            raise DeliveryError("Unable to send message") from e

        logger.info(f"Email sent: id={message_id} subject={subject!r}")
        return message_id


class NewsletterClient:
    """Subscribes shoppers through the Mailchimp hosted signup URL"""

    def __init__(
        self,
        subscribe_url: Optional[str],
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.subscribe_url = subscribe_url
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        await self._http_client.aclose()

    async def subscribe(self, email: str, first_name: str, last_name: str, gender: str) -> None:
        if not self.subscribe_url:
            raise DeliveryError("Newsletter signup is not configured")

        params = {
            "EMAIL": email,
            "FNAME": first_name,
            "LNAME": last_name,
            "GENDER": gender,
        }
        try:
            # The hosted form answers with HTML whatever the outcome
            await self._http_client.get(
                httpx.URL(self.subscribe_url).copy_merge_params(params),
                headers={"Accept": "*/*", "Cache-Control": "no-cache"},
            )
        except httpx.HTTPError as e:
            logger.error(f"Newsletter signup failed: {e}")
            raise DeliveryError("Unable to subscribe to the newsletter") from e

        logger.info("Newsletter signup submitted")
