"""
Cart session cookie.

The cart travels with the shopper in a single cookie. Its value is a
Fernet token (AES-CBC + HMAC-SHA256): the payload is unreadable to the
client and any modification is rejected on the way back in.
"""

import base64
import json
import logging
from typing import Optional, Sequence, Union

from cryptography.fernet import Fernet, InvalidToken, MultiFernet
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from starlette.requests import Request, cookie_parser
from starlette.responses import Response

from ..models.cart import Cart

logger = logging.getLogger(__name__)

CART_SESSION_KEY = "cart"


def derive_key(secret: str) -> bytes:
    """Derive a Fernet key from an arbitrary-length secret"""
    hkdf = HKDF(
        algorithm=hashes.SHA256(),
        length=32,
        salt=None,
        info=b"storefront.session",
    )
    return base64.urlsafe_b64encode(hkdf.derive(secret.encode()))


class SessionCodec:
    """
    Encodes a cart into a session cookie value and back.

    Usage:
        codec = SessionCodec(secrets=[settings.encryption_key])

        cart = codec.decode(request)
        response = JSONResponse({"type": "success"})
        codec.commit(response, cart)

    The first secret encrypts new cookies; all secrets are tried when
    decrypting, so a key can be rotated without emptying every cart.
    """

    def __init__(
        self,
        secrets: Sequence[str],
        cookie_name: str = "session",
        max_age: Optional[int] = None,
        secure: bool = False,
    ):
        """
        Args:
            secrets: Signing/encryption secrets, newest first
            cookie_name: Name of the session cookie
            max_age: Reject and stop sending cookies older than this many seconds
            secure: Only send the cookie over HTTPS
        """
        if not secrets or not all(secrets):
            raise ValueError("At least one non-empty session secret is required")

        self.cookie_name = cookie_name
        self.max_age = max_age
        self.secure = secure
        self._fernet = MultiFernet([Fernet(derive_key(secret)) for secret in secrets])

    def decode(self, source: Union[Request, str, None]) -> Cart:
        """
        Read the cart from a request or a raw ``Cookie`` header.

        Missing, tampered, expired or unreadable cookies all give an
        empty cart.
        """
        token = self._extract_token(source)
        if not token:
            return Cart()

        try:
            payload = self._fernet.decrypt(_pad(token).encode(), ttl=self.max_age)
        except InvalidToken:
            logger.debug("Discarding session cookie with invalid signature")
            return Cart()

        try:
            data = json.loads(payload)
            return Cart(lines=data.get(CART_SESSION_KEY, []))
        except (ValueError, AttributeError, TypeError) as e:
            # ValidationError is a ValueError
            logger.debug(f"Discarding unreadable session payload: {e}")
            return Cart()

    def encode(self, cart: Cart) -> str:
        """Serialize a cart into a cookie-safe token"""
        payload = {
            CART_SESSION_KEY: [
                line.model_dump(by_alias=True) for line in cart.lines
            ],
        }
        token = self._fernet.encrypt(json.dumps(payload, separators=(",", ":")).encode())
        # Padding would force the cookie value to be quoted
        return token.decode().rstrip("=")

    def commit(self, response: Response, cart: Cart) -> None:
        """Attach the cart to a response as ``Set-Cookie``"""
        response.set_cookie(
            key=self.cookie_name,
            value=self.encode(cart),
            max_age=self.max_age,
            path="/",
            secure=self.secure,
            httponly=True,
            samesite="lax",
        )

    def _extract_token(self, source: Union[Request, str, None]) -> Optional[str]:
        if source is None:
            return None
        if isinstance(source, str):
            return cookie_parser(source).get(self.cookie_name)
        return source.cookies.get(self.cookie_name)


def _pad(token: str) -> str:
    return token + "=" * (-len(token) % 4)
