"""Product page form actions"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from ..core.cart import add_item
from ..core.forms import ActionError, FormError, error_response, success_response, validate_form
from ..core.session import SessionCodec
from ..models.cart import CartSuccess
from ..models.forms import AddToCartForm
from ..services.cart_validation import CartValidator
from .deps import get_cart_validator, get_session_codec

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Products"])


@router.post("/{theme}/products/{handle}")
async def add_to_cart(
    theme: str,
    handle: str,
    request: Request,
    codec: SessionCodec = Depends(get_session_codec),
    validator: CartValidator = Depends(get_cart_validator),
) -> Response:
    """
    Add a variant to the cart.

    The cart with the new item is validated first and only committed if
    the backend accepts it, so an unavailable variant never reaches the
    session.
    """
    form = await request.form()
    cart = codec.decode(request)

    try:
        item = validate_form(AddToCartForm, form)
        candidate = add_item(cart, item.variant_id, item.quantity)
        result = await validator.validate(candidate)

        if not isinstance(result, CartSuccess):
            raise ActionError(
                "Unable to add item to cart. The item might be out of stock or unavailable."
            )
    except FormError as e:
        logger.info(f"Add to cart rejected for {theme}/{handle}: {e}")
        response = error_response(e)
        codec.commit(response, cart)
        return response

    logger.info(f"Added {item.quantity}x {item.variant_id} to cart from {theme}/{handle}")
    response = success_response()
    codec.commit(response, candidate)
    return response
