"""
Tests for Cart models
"""

from decimal import Decimal

import pytest

from rocketcart.cart import EMPTY_CART, Cart, CartItem
from rocketcart.models import Product


def make_item(product_id=1, amount=1, price="100.00"):
    return CartItem(
        id=product_id,
        name=f"Product {product_id}",
        price=Decimal(price),
        image_url=f"https://example.test/{product_id}.jpg",
        amount=amount,
    )


class TestCartItem:
    """Tests for CartItem dataclass."""

    def test_price_is_normalized_to_decimal(self):
        item = CartItem(id=1, name="Test", price=179.9, image_url="", amount=1)

        assert item.price == Decimal("179.9")

    def test_zero_amount_rejected(self):
        with pytest.raises(ValueError):
            make_item(amount=0)

    @pytest.mark.parametrize("price", ["Infinity", "-Infinity", "NaN"])
    def test_non_finite_price_rejected(self, price):
        with pytest.raises(ValueError):
            make_item(price=price)

    def test_total_price(self):
        item = make_item(amount=3, price="139.90")

        assert item.total_price == Decimal("419.70")

    def test_to_dict(self):
        data = make_item(amount=2, price="179.90").to_dict()

        assert data == {
            "id": 1,
            "name": "Product 1",
            "price": 179.9,
            "imageUrl": "https://example.test/1.jpg",
            "amount": 2,
        }

    def test_from_dict_accepts_catalog_keys(self):
        """Snapshots written by the storefront use title/image."""
        item = CartItem.from_dict({
            "id": 2,
            "title": "Tênis VR",
            "price": 139.9,
            "image": "https://example.test/2.jpg",
            "amount": 1,
        })

        assert item.name == "Tênis VR"
        assert item.image_url == "https://example.test/2.jpg"

    def test_from_product(self):
        product = Product.model_validate({
            "id": 3,
            "title": "Tênis Adidas Duramo Lite 2.0",
            "price": 219.9,
            "image": "https://example.test/3.jpg",
        })

        item = CartItem.from_product(product)

        assert item.id == 3
        assert item.amount == 1
        assert item.price == Decimal("219.9")

    def test_from_product_keyed_by_requested_id(self):
        product = Product(id=103, name="Tênis", price=Decimal("219.90"))

        item = CartItem.from_product(product, product_id=3)

        assert item.id == 3


class TestCart:
    """Tests for Cart dataclass."""

    def test_empty_cart(self):
        assert len(EMPTY_CART) == 0
        assert EMPTY_CART.total_items == 0
        assert EMPTY_CART.subtotal == Decimal("0.00")

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError):
            Cart((make_item(1), make_item(1)))

    def test_totals(self):
        cart = Cart((make_item(1, amount=2, price="100.00"), make_item(2, amount=1, price="50.50")))

        assert cart.size == 2
        assert cart.total_items == 3
        assert cart.subtotal == Decimal("250.50")
        assert cart.amounts == {1: 2, 2: 1}

    def test_with_item_appends(self):
        cart = Cart((make_item(2),)).with_item(make_item(1))

        assert [item.id for item in cart] == [2, 1]

    def test_with_amount_returns_new_cart(self):
        original = Cart((make_item(1), make_item(2)))

        updated = original.with_amount(2, 5)

        assert original.amounts == {1: 1, 2: 1}
        assert updated.amounts == {1: 1, 2: 5}

    def test_with_amount_unknown_id_is_unchanged(self):
        original = Cart((make_item(1),))

        assert original.with_amount(9, 5) == original

    def test_without(self):
        cart = Cart((make_item(1), make_item(2), make_item(3))).without(2)

        assert [item.id for item in cart] == [1, 3]
        assert 2 not in cart
        assert 1 in cart

    def test_snapshot_round_trip(self):
        cart = Cart((make_item(3, amount=2, price="219.90"), make_item(1)))

        assert Cart.from_list(cart.to_list()) == cart
