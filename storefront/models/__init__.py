# Storefront Models

from .cart import Cart, CartLineItem, CartSuccess, CartEmpty, CartError, ValidatedCartResult
from .commerce import ResolvedCart, ResolvedCartLine, Shop
from .forms import (
    CartIntent,
    CheckoutForm,
    QuantityForm,
    RemoveForm,
    AddToCartForm,
    ContactForm,
    NewsletterForm,
)

__all__ = [
    "Cart",
    "CartLineItem",
    "CartSuccess",
    "CartEmpty",
    "CartError",
    "ValidatedCartResult",
    "ResolvedCart",
    "ResolvedCartLine",
    "Shop",
    "CartIntent",
    "CheckoutForm",
    "QuantityForm",
    "RemoveForm",
    "AddToCartForm",
    "ContactForm",
    "NewsletterForm",
]
