"""Tests for cart models and per-product aggregation."""

from __future__ import annotations

from hasoneproduct.domain.cart import (
    CartLine,
    Customer,
    ShoppingCartItem,
    ShoppingCartType,
    aggregate_cart,
)


def _item(
    product_id: int,
    quantity: int,
    *,
    store_id: int = 1,
    cart_type: ShoppingCartType = ShoppingCartType.SHOPPING_CART,
) -> ShoppingCartItem:
    return ShoppingCartItem(
        product_id=product_id,
        quantity=quantity,
        store_id=store_id,
        shopping_cart_type=cart_type,
    )


class TestAggregateCart:
    def test_sums_quantities_per_product(self) -> None:
        lines = aggregate_cart([_item(10, 1), _item(20, 4), _item(10, 2)], store_id=1)
        assert lines == [
            CartLine(product_id=10, total_quantity=3),
            CartLine(product_id=20, total_quantity=4),
        ]

    def test_limits_to_store(self) -> None:
        lines = aggregate_cart([_item(10, 1), _item(10, 5, store_id=2)], store_id=1)
        assert lines == [CartLine(product_id=10, total_quantity=1)]

    def test_excludes_wishlist(self) -> None:
        items = [_item(10, 1), _item(10, 7, cart_type=ShoppingCartType.WISHLIST)]
        assert aggregate_cart(items, store_id=1) == [CartLine(product_id=10, total_quantity=1)]

    def test_wishlist_can_be_requested(self) -> None:
        items = [_item(10, 1), _item(11, 7, cart_type=ShoppingCartType.WISHLIST)]
        lines = aggregate_cart(items, store_id=1, cart_type=ShoppingCartType.WISHLIST)
        assert lines == [CartLine(product_id=11, total_quantity=7)]

    def test_empty(self) -> None:
        assert aggregate_cart([], store_id=1) == []

    def test_order_does_not_change_totals(self) -> None:
        items = [_item(1, 1), _item(2, 2), _item(1, 3)]
        forward = {line.product_id: line.total_quantity for line in aggregate_cart(items, 1)}
        backward = {
            line.product_id: line.total_quantity for line in aggregate_cart(items[::-1], 1)
        }
        assert forward == backward == {1: 4, 2: 2}


class TestCartModels:
    def test_cart_type_defaults_to_shopping_cart(self) -> None:
        item = ShoppingCartItem(product_id=1, quantity=1, store_id=1)
        assert item.shopping_cart_type is ShoppingCartType.SHOPPING_CART

    def test_customer_from_json(self) -> None:
        customer = Customer.model_validate_json(
            '{"id": 4, "shopping_cart_items": '
            '[{"product_id": 9, "quantity": 2, "store_id": 1, "shopping_cart_type": "wishlist"}]}'
        )
        assert customer.shopping_cart_items[0].shopping_cart_type is ShoppingCartType.WISHLIST
