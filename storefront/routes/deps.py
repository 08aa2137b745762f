"""Shared route dependencies and response headers"""

from typing import Optional

from ..core.config import settings
from ..core.session import SessionCodec
from ..services.cart_validation import CartValidator
from ..services.commerce_client import CommerceClient
from ..services.mailer import NewsletterClient, ResendMailer
from ..services.turnstile import TurnstileVerifier

CACHE_NONE = "no-cache, no-store, must-revalidate"

# Created on first use and closed on shutdown (overridden in tests)
session_codec: Optional[SessionCodec] = None
commerce_client: Optional[CommerceClient] = None
turnstile_verifier: Optional[TurnstileVerifier] = None
mailer: Optional[ResendMailer] = None
newsletter_client: Optional[NewsletterClient] = None


def get_session_codec() -> SessionCodec:
    """Get or create the session cookie codec"""
    global session_codec
    if session_codec is None:
        session_codec = SessionCodec(
            secrets=settings.session_secrets,
            cookie_name=settings.session_cookie_name,
            max_age=settings.session_max_age,
            secure=settings.session_cookie_secure,
        )
    return session_codec


def get_commerce_client() -> CommerceClient:
    """Get or create commerce client"""
    global commerce_client
    if commerce_client is None:
        commerce_client = CommerceClient(
            api_url=settings.storefront_api_url,
            access_token=settings.shopify_storefront_access_token,
            timeout=settings.commerce_timeout,
        )
    return commerce_client


def get_cart_validator() -> CartValidator:
    return CartValidator(get_commerce_client())


def get_turnstile_verifier() -> TurnstileVerifier:
    global turnstile_verifier
    if turnstile_verifier is None:
        turnstile_verifier = TurnstileVerifier(
            secret_key=settings.turnstile_secret_key,
            verify_url=settings.turnstile_verify_url,
        )
    return turnstile_verifier


def get_mailer() -> ResendMailer:
    global mailer
    if mailer is None:
        mailer = ResendMailer(api_key=settings.resend_api_key, api_url=settings.resend_api_url)
    return mailer


def get_newsletter_client() -> NewsletterClient:
    global newsletter_client
    if newsletter_client is None:
        newsletter_client = NewsletterClient(subscribe_url=settings.newsletter_subscribe_url)
    return newsletter_client


async def close_clients() -> None:
    """Close every outbound HTTP client that was opened"""
    global commerce_client, turnstile_verifier, mailer, newsletter_client
    for client in (commerce_client, turnstile_verifier, mailer, newsletter_client):
        if client is not None:
            await client.close()
    commerce_client = turnstile_verifier = mailer = newsletter_client = None


def client_ip(request) -> Optional[str]:
    """Best guess at the shopper's IP address behind proxies"""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None
