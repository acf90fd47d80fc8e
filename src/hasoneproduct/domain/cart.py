"""Shopping cart models and per-product aggregation.

A customer's cart may hold several items for the same product (for
example with distinct attribute combinations), so constraints are
checked against the total quantity per product.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class ShoppingCartType(StrEnum):
    """Kinds of cart a customer item can live in."""

    SHOPPING_CART = "shopping_cart"
    WISHLIST = "wishlist"


class ShoppingCartItem(BaseModel):
    """One item in a customer's cart."""

    model_config = {"frozen": True}

    product_id: int
    quantity: int
    store_id: int
    shopping_cart_type: ShoppingCartType = ShoppingCartType.SHOPPING_CART


class Customer(BaseModel):
    """A customer and the items they hold across stores and cart types."""

    model_config = {"frozen": True}

    id: int
    shopping_cart_items: list[ShoppingCartItem] = Field(default_factory=list)


class Store(BaseModel):
    """Store scope used to limit cart items."""

    model_config = {"frozen": True}

    id: int
    name: str = ""


class CartLine(BaseModel):
    """Aggregated cart entry: every shopping-cart item for one product."""

    model_config = {"frozen": True}

    product_id: int
    total_quantity: int


def aggregate_cart(
    items: list[ShoppingCartItem],
    store_id: int,
    cart_type: ShoppingCartType = ShoppingCartType.SHOPPING_CART,
) -> list[CartLine]:
    """Group *items* in *store_id* and *cart_type* by product, summing quantities.

    Lines are returned in the order each product first appears.
    """
    totals: dict[int, int] = {}
    for item in items:
        if item.store_id != store_id or item.shopping_cart_type != cart_type:
            continue
        totals[item.product_id] = totals.get(item.product_id, 0) + item.quantity
    return [
        CartLine(product_id=product_id, total_quantity=total)
        for product_id, total in totals.items()
    ]
