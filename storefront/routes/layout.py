"""Data shared by every page: header cart badge and shop details"""

import asyncio
import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..core.session import SessionCodec
from ..models.cart import Cart, CartError
from ..models.commerce import Shop
from ..services.cart_validation import CartValidator
from ..services.commerce_client import CommerceClient, CommerceClientError
from .deps import CACHE_NONE, get_cart_validator, get_commerce_client, get_session_codec

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/layout", tags=["Layout"])


async def fetch_shop(client: CommerceClient) -> Optional[Shop]:
    """Shop details, or None when the backend cannot provide them"""
    try:
        return Shop.model_validate(await client.get_shop())
    except (httpx.HTTPError, CommerceClientError, ValueError) as e:
        logger.warning(f"Shop details unavailable: {e}")
        return None


@router.get("")
async def layout(
    request: Request,
    codec: SessionCodec = Depends(get_session_codec),
    validator: CartValidator = Depends(get_cart_validator),
    client: CommerceClient = Depends(get_commerce_client),
):
    """
    Cart count and shop details.

    The cart check and the shop query are independent and run
    concurrently. A failure in either one is settled here, so the
    page data is always returned.
    """
    cart = codec.decode(request)

    cart_result, shop = await asyncio.gather(
        validator.validate(cart),
        fetch_shop(client),
        return_exceptions=True,
    )

    if isinstance(cart_result, Exception):
        logger.error(f"Cart validation failed unexpectedly: {cart_result!r}")
        cart_result = CartError(message=str(cart_result))
    if isinstance(shop, Exception):
        logger.error(f"Shop lookup failed unexpectedly: {shop!r}")
        shop = None

    if isinstance(cart_result, CartError):
        logger.info("Resetting session cart after failed validation")
        cart = Cart()

    response = JSONResponse(
        {
            "cartCount": cart.total_quantity,
            "shop": shop.model_dump(mode="json") if shop else None,
        },
        headers={"Cache-Control": CACHE_NONE},
    )
    codec.commit(response, cart)
    return response
