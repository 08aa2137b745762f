"""Tests for cart mutations."""

import pytest
from pydantic import ValidationError

from storefront.core.cart import add_item, clear_cart, remove_item, set_item_quantity
from storefront.models.cart import Cart, CartLineItem

from helpers import make_cart


class TestAddItem:
    def test_add_new_variant_appends_line(self):
        cart = make_cart(("A", 1), ("B", 2))
        updated = add_item(cart, "C", 3)
        assert updated == make_cart(("A", 1), ("B", 2), ("C", 3))

    def test_add_existing_variant_increases_quantity(self):
        cart = make_cart(("A", 1), ("B", 2))
        updated = add_item(cart, "A", 2)
        assert len(updated) == 2
        assert updated.get("A").quantity == 3
        assert updated.get("B").quantity == 2

    def test_add_is_additive(self):
        cart = add_item(add_item(Cart(), "A"), "A")
        assert cart == make_cart(("A", 2))

    def test_add_keeps_line_order(self):
        cart = make_cart(("A", 1), ("B", 1), ("C", 1))
        updated = add_item(cart, "B", 1)
        assert [line.variant_id for line in updated.lines] == ["A", "B", "C"]

    def test_add_does_not_modify_input(self):
        cart = make_cart(("A", 1))
        add_item(cart, "A", 5)
        add_item(cart, "B", 1)
        assert cart == make_cart(("A", 1))

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_add_rejects_non_positive_quantity(self, quantity):
        with pytest.raises(ValueError):
            add_item(Cart(), "A", quantity)


class TestSetItemQuantity:
    def test_set_overwrites_existing_quantity(self):
        cart = make_cart(("A", 1), ("B", 4))
        updated = set_item_quantity(cart, "A", 2)
        assert updated == make_cart(("A", 2), ("B", 4))

    def test_set_unknown_variant_appends_line(self):
        updated = set_item_quantity(make_cart(("A", 1)), "B", 3)
        assert updated == make_cart(("A", 1), ("B", 3))

    def test_set_zero_removes_line(self):
        updated = set_item_quantity(make_cart(("A", 1), ("B", 2)), "A", 0)
        assert updated == make_cart(("B", 2))
        assert updated.get("A") is None

    def test_set_negative_removes_line(self):
        assert set_item_quantity(make_cart(("A", 3)), "A", -1) == Cart()

    def test_set_zero_for_unknown_variant_is_noop(self):
        cart = make_cart(("A", 1))
        assert set_item_quantity(cart, "B", 0) == cart


class TestRemoveItem:
    def test_remove_existing_line(self):
        updated = remove_item(make_cart(("A", 1), ("B", 2)), "A")
        assert updated == make_cart(("B", 2))

    def test_remove_last_line_empties_cart(self):
        updated = remove_item(make_cart(("A", 1)), "A")
        assert updated.is_empty

    def test_remove_absent_variant_is_noop(self):
        cart = make_cart(("A", 1), ("B", 2))
        assert remove_item(cart, "Z") == cart

    def test_clear_cart(self):
        assert clear_cart() == Cart()


class TestCartModel:
    def test_duplicate_variants_rejected(self):
        with pytest.raises(ValidationError):
            Cart(lines=[
                CartLineItem(variant_id="A", quantity=1),
                CartLineItem(variant_id="A", quantity=2),
            ])

    def test_zero_quantity_line_rejected(self):
        with pytest.raises(ValidationError):
            CartLineItem(variant_id="A", quantity=0)

    def test_empty_variant_id_rejected(self):
        with pytest.raises(ValidationError):
            CartLineItem(variant_id="", quantity=1)

    def test_total_quantity(self):
        assert make_cart(("A", 2), ("B", 3)).total_quantity == 5
        assert Cart().total_quantity == 0

    def test_wire_names(self):
        line = CartLineItem.model_validate({"variantId": "gid://shopify/ProductVariant/1", "quantity": 2})
        assert line.variant_id == "gid://shopify/ProductVariant/1"
        assert line.model_dump(by_alias=True) == {
            "variantId": "gid://shopify/ProductVariant/1",
            "quantity": 2,
        }
