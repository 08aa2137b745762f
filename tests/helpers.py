"""Builders shared by the test modules"""

from typing import Optional

from storefront.core.session import SessionCodec
from storefront.models.cart import Cart, CartLineItem, CartSuccess
from storefront.models.commerce import ResolvedCart


def make_cart(*lines: tuple[str, int]) -> Cart:
    """Cart from ``(variant_id, quantity)`` pairs"""
    return Cart(lines=[CartLineItem(variant_id=v, quantity=q) for v, q in lines])


def shopify_cart_payload(lines: list[tuple[str, int]], checkout_url: str = "https://shop.example.com/checkouts/c/abc123") -> dict:
    """A ``Cart`` object as the Storefront API returns it"""
    return {
        "id": "gid://shopify/Cart/abc123",
        "checkoutUrl": checkout_url,
        "totalQuantity": sum(q for _, q in lines),
        "cost": {
            "subtotalAmount": {"amount": f"{50 * sum(q for _, q in lines)}.0", "currencyCode": "AUD"},
            "totalAmount": {"amount": f"{50 * sum(q for _, q in lines)}.0", "currencyCode": "AUD"},
        },
        "lines": {
            "edges": [
                {
                    "node": {
                        "id": f"gid://shopify/CartLine/{index}",
                        "quantity": quantity,
                        "cost": {
                            "amountPerQuantity": {"amount": "50.0", "currencyCode": "AUD"},
                            "totalAmount": {"amount": f"{50 * quantity}.0", "currencyCode": "AUD"},
                        },
                        "merchandise": {
                            "id": variant_id,
                            "title": "Medium / Navy",
                            "quantityAvailable": 10,
                            "currentlyNotInStock": False,
                            "image": {"url": "https://cdn.example.com/polo.jpg", "altText": None},
                            "product": {
                                "handle": "ladies-polo",
                                "title": "Ladies Polo",
                                "tags": ["ladies"],
                            },
                        },
                    }
                }
                for index, (variant_id, quantity) in enumerate(lines)
            ]
        },
    }


def success_result(*lines: tuple[str, int]) -> CartSuccess:
    return CartSuccess(cart=ResolvedCart.model_validate(shopify_cart_payload(list(lines))))


def cookie_header(codec: SessionCodec, cart: Cart) -> dict[str, str]:
    return {"Cookie": f"{codec.cookie_name}={codec.encode(cart)}"}


def response_cart(codec: SessionCodec, response) -> Optional[Cart]:
    """Cart committed by a response, None when no cookie was set"""
    token = response.cookies.get(codec.cookie_name)
    if token is None:
        return None
    return codec.decode(f"{codec.cookie_name}={token}")


def cart_create_payload(*lines: tuple[str, int], user_errors: Optional[list] = None) -> dict:
    """``cartCreate`` payload accepting (or rejecting) the given lines"""
    if user_errors:
        return {"cart": None, "userErrors": user_errors}
    return {"cart": shopify_cart_payload(list(lines)), "userErrors": []}
