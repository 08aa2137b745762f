"""
Cart validation against the commerce backend.

The session cart only knows variant ids and quantities. Prices, stock
and the checkout URL always come from the backend, so every page that
shows the cart runs it through ``CartValidator`` first.
"""

import logging

import httpx
from pydantic import ValidationError

from ..models.cart import Cart, CartEmpty, CartError, CartSuccess, ValidatedCartResult
from ..models.commerce import ResolvedCart
from .commerce_client import CommerceClient, CommerceClientError

logger = logging.getLogger(__name__)


class CartValidator:
    """Classifies a candidate cart as success, empty or error"""

    def __init__(self, client: CommerceClient):
        self.client = client

    async def validate(self, cart: Cart) -> ValidatedCartResult:
        """
        Resolve ``cart`` with the backend.

        Never raises for backend failures; those come back as ``CartError``.
        Nothing the shopper can see is changed, so candidates can be checked
        before they are committed.
        """
        if cart.is_empty:
            return CartEmpty()

        try:
            payload = await self.client.create_cart(cart.lines)
        except (httpx.HTTPError, CommerceClientError) as e:
            logger.warning(f"Cart validation request failed: {e}")
            return CartError(message=str(e))
        except ValueError as e:
            # Body was not JSON
            logger.warning(f"Cart validation returned malformed response: {e}")
            return CartError(message="Malformed response from commerce backend")

        user_errors = payload.get("userErrors") or []
        if not isinstance(user_errors, list) or not all(isinstance(error, dict) for error in user_errors):
            logger.warning(f"Cart validation returned unexpected userErrors: {user_errors!r}")
            return CartError(message="Malformed response from commerce backend")
        if user_errors:
            messages = "; ".join(str(error.get("message", "")) for error in user_errors)
            logger.info(f"Cart rejected by commerce backend: {messages}")
            return CartError(message=messages)

        raw_cart = payload.get("cart")
        if not raw_cart:
            logger.warning("Cart validation response did not include a cart")
            return CartError(message="Cart could not be resolved")

        try:
            resolved = ResolvedCart.model_validate(raw_cart)
        except ValidationError as e:
            logger.warning(f"Cart validation returned unexpected cart shape: {e}")
            return CartError(message="Malformed response from commerce backend")

        return CartSuccess(cart=resolved)
