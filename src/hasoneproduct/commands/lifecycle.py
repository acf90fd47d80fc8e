"""Commands: install/uninstall the rule and print its configuration URL."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from hasoneproduct.commands._base import RuleCommand

if TYPE_CHECKING:
    from hasoneproduct.commands._context import AppContext


@click.command(cls=RuleCommand, examples="  hasoneproduct install")
@click.pass_obj
def install(app: AppContext) -> None:
    """Register the rule's localized resources."""
    app.emit(app.lifecycle_service().install())


@click.command(cls=RuleCommand, examples="  hasoneproduct uninstall")
@click.pass_obj
def uninstall(app: AppContext) -> None:
    """Delete the rule's requirements and localized resources."""
    app.emit(app.lifecycle_service().uninstall())


@click.command(
    cls=RuleCommand,
    examples="""\
  hasoneproduct url 12
  hasoneproduct url 12 --requirement-id 3""",
)
@click.argument("discount_id", type=int)
@click.option("--requirement-id", type=int, default=None, help="Requirement being edited.")
@click.pass_obj
def url(app: AppContext, discount_id: int, requirement_id: int | None) -> None:
    """Print the admin configuration URL for DISCOUNT_ID."""
    app.emit(app.lifecycle_service().configuration_url(discount_id, requirement_id))
