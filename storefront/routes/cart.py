"""Cart page and cart form actions"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response

from ..core.cart import remove_item, set_item_quantity
from ..core.forms import ActionError, FormError, error_response, success_response, validate_form
from ..core.session import SessionCodec
from ..models.cart import Cart, CartSuccess
from ..models.forms import CartIntent, CheckoutForm, QuantityForm, RemoveForm
from ..services.cart_validation import CartValidator
from .deps import CACHE_NONE, get_cart_validator, get_session_codec

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cart", tags=["Cart"])

INTENT = "intent"


@router.get("")
async def cart_page(
    request: Request,
    codec: SessionCodec = Depends(get_session_codec),
    validator: CartValidator = Depends(get_cart_validator),
):
    """
    Cart as the backend sees it.

    A cart the backend cannot resolve is emptied, so a stale or invalid
    session heals on the next view instead of lingering.
    """
    cart = codec.decode(request)
    result = await validator.validate(cart)

    if not isinstance(result, CartSuccess):
        if not cart.is_empty:
            logger.info(f"Resetting session cart after '{result.type}' validation result")
        cart = Cart()

    response = JSONResponse(
        result.model_dump(mode="json", by_alias=True),
        headers={"Cache-Control": CACHE_NONE},
    )
    codec.commit(response, cart)
    return response


@router.post("")
async def cart_action(
    request: Request,
    codec: SessionCodec = Depends(get_session_codec),
) -> Response:
    """
    Apply a cart form submission.

    ``increment`` and ``decrement`` carry the new absolute quantity. They
    and ``remove`` are committed without re-validation; the next cart view
    validates.
    """
    form = await request.form()
    cart = codec.decode(request)
    intent = form.get(INTENT)

    try:
        if intent == CartIntent.CHECKOUT.value:
            checkout = validate_form(CheckoutForm, form)
            return RedirectResponse(checkout.checkout_url, status_code=303)

        elif intent in (CartIntent.INCREMENT.value, CartIntent.DECREMENT.value):
            update = validate_form(QuantityForm, form)
            cart = set_item_quantity(cart, update.variant_id, update.quantity)

        elif intent == CartIntent.REMOVE.value:
            removal = validate_form(RemoveForm, form)
            cart = remove_item(cart, removal.variant_id)

        else:
            raise ActionError("Unexpected action")

    except FormError as e:
        logger.info(f"Cart action '{intent}' rejected: {e}")
        response = error_response(e)
        codec.commit(response, cart)
        return response

    response = success_response()
    codec.commit(response, cart)
    return response
