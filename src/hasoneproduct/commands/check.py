"""Command: check a requirement against a customer's cart."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click
from pydantic import ValidationError

from hasoneproduct.commands._base import RuleCommand
from hasoneproduct.domain.cart import Customer

if TYPE_CHECKING:
    from hasoneproduct.commands._context import AppContext


def _load_customer(path: Path) -> Customer:
    """Read a customer (id + shopping cart items) from a JSON file."""
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"cannot read cart file {path}: {exc}"
        raise click.BadParameter(msg, param_hint="--cart") from exc
    try:
        return Customer.model_validate_json(raw)
    except ValidationError as exc:
        raise click.BadParameter(f"invalid cart file {path}: {exc}", param_hint="--cart") from exc


@click.command(
    cls=RuleCommand,
    examples="""\
  hasoneproduct check 3 --cart cart.json
  hasoneproduct check 3 --cart cart.json --store 2
  hasoneproduct --json check 3 --cart cart.json
  hasoneproduct check 3                      # anonymous: no customer

cart.json:
  {"id": 1, "shopping_cart_items": [
    {"product_id": 77, "quantity": 2, "store_id": 1},
    {"product_id": 5, "quantity": 1, "store_id": 1, "shopping_cart_type": "wishlist"}]}""",
)
@click.argument("requirement_id", type=int)
@click.option(
    "--cart",
    "cart_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON file with the customer and their cart items.",
)
@click.option("--store", "store_id", type=int, default=None, help="Store ID (default from config).")
@click.pass_obj
def check(
    app: AppContext,
    requirement_id: int,
    cart_path: Path | None,
    store_id: int | None,
) -> None:
    """Check whether a cart satisfies discount requirement REQUIREMENT_ID."""
    customer = _load_customer(cart_path) if cart_path is not None else None
    app.emit(app.requirement_service().check(requirement_id, customer=customer, store_id=store_id))
