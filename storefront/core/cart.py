"""
Cart mutations.

Pure functions over the session cart. Each returns a new ``Cart`` and
leaves its input untouched, so a candidate cart can be validated before
anything is committed.
"""

from ..models.cart import Cart, CartLineItem


def add_item(cart: Cart, variant_id: str, quantity: int = 1) -> Cart:
    """Add ``quantity`` of a variant, merging into its existing line"""
    if quantity < 1:
        raise ValueError(f"Cannot add {quantity} of {variant_id}")

    existing = cart.get(variant_id)
    if existing is None:
        return Cart(lines=(*cart.lines, CartLineItem(variant_id=variant_id, quantity=quantity)))

    return _replace_line(cart, existing.model_copy(update={"quantity": existing.quantity + quantity}))


def set_item_quantity(cart: Cart, variant_id: str, quantity: int) -> Cart:
    """
    Set the absolute quantity of a variant.

    A variant not yet in the cart is appended. Zero or less removes the
    line, a stored cart never holds an empty line.
    """
    if quantity <= 0:
        return remove_item(cart, variant_id)

    if cart.get(variant_id) is None:
        return Cart(lines=(*cart.lines, CartLineItem(variant_id=variant_id, quantity=quantity)))

    return _replace_line(cart, CartLineItem(variant_id=variant_id, quantity=quantity))


def remove_item(cart: Cart, variant_id: str) -> Cart:
    """Drop a variant's line; removing an absent variant is a no-op"""
    return Cart(lines=tuple(line for line in cart.lines if line.variant_id != variant_id))


def clear_cart() -> Cart:
    return Cart()


def _replace_line(cart: Cart, updated: CartLineItem) -> Cart:
    return Cart(
        lines=tuple(
            updated if line.variant_id == updated.variant_id else line
            for line in cart.lines
        )
    )
