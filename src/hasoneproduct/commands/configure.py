"""Commands: configure and show a requirement's restricted products."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from hasoneproduct.commands._base import RuleCommand

if TYPE_CHECKING:
    from hasoneproduct.commands._context import AppContext


@click.command(
    cls=RuleCommand,
    examples="""\
  hasoneproduct configure 12 "77, 123:2, 156:3-8"
  hasoneproduct configure 12 "77" --requirement-id 3
  hasoneproduct configure 12 "" --requirement-id 3   # clear the restriction""",
)
@click.argument("discount_id", type=int)
@click.argument("products")
@click.option(
    "--requirement-id",
    type=int,
    default=None,
    help="Existing requirement to update (default: attach a new one).",
)
@click.pass_obj
def configure(
    app: AppContext, discount_id: int, products: str, requirement_id: int | None
) -> None:
    """Save the restricted PRODUCTS list for a requirement of DISCOUNT_ID."""
    svc = app.requirement_service()
    app.emit(svc.configure(discount_id, products, discount_requirement_id=requirement_id))


@click.command(
    cls=RuleCommand,
    examples="""\
  hasoneproduct show 3
  hasoneproduct --json show 3""",
)
@click.argument("requirement_id", type=int)
@click.pass_obj
def show(app: AppContext, requirement_id: int) -> None:
    """Show the restricted products stored for REQUIREMENT_ID."""
    app.emit(app.requirement_service().show(requirement_id))
