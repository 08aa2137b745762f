# Outbound integrations

from .commerce_client import CommerceClient, CommerceClientError
from .cart_validation import CartValidator
from .mailer import ResendMailer, NewsletterClient, DeliveryError
from .turnstile import TurnstileVerifier

__all__ = [
    "CommerceClient",
    "CommerceClientError",
    "CartValidator",
    "ResendMailer",
    "NewsletterClient",
    "DeliveryError",
    "TurnstileVerifier",
]
