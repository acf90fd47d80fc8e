"""Rich/JSON output for ServiceResult.

Human mode renders per-operation views through Rich; ``--json`` dumps
the result model; ``--quiet`` prints one status line.
"""

from __future__ import annotations

import json as _json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from hasoneproduct.output.console import create_console, get_output

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from hasoneproduct.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return _status_text(result)

    console = create_console()
    if result.ok:
        _status_line(console, result)
        renderer = _OP_RENDERERS.get(result.op, _render_data)
        renderer(console, result.data)
        if settings.verbose and result.meta:
            console.print(Text("  meta: ", style="hop.key"), _compact(result.meta))
    else:
        console.print(Text("ERROR", style="hop.error"), Text(f"  {result.op}", style="hop.op"))
        message = result.error.message if result.error else "Unknown error"
        console.print(f"  {message}")
        if result.error and result.error.detail:
            _render_data(console, result.error.detail)
    return get_output(console).rstrip("\n")


def _status_text(result: ServiceResult) -> str:
    if result.ok:
        if "is_valid" in result.data:
            return "VALID" if result.data["is_valid"] else "INVALID"
        return f"OK: {result.op}"
    msg = result.error.message if result.error else "Unknown error"
    return f"ERROR: {result.op}: {msg}"


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="hop.ok"), Text(f"  {result.op}", style="hop.op"))


def _compact(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"))
    return str(value)


def _render_data(console: Console, data: dict[str, Any]) -> None:
    """Generic renderer: indented key-value pairs."""
    for key, value in data.items():
        console.print(Text(f"  {key}: ", style="hop.key"), _compact(value), sep="")


def _render_check(console: Console, data: dict[str, Any]) -> None:
    if data["is_valid"]:
        verdict = Text("VALID", style="hop.valid")
    else:
        verdict = Text("INVALID", style="hop.invalid")
    console.print(
        Text(f"  requirement {data['discount_requirement_id']}: "),
        verdict,
        sep="",
    )
    console.print(
        Text("  restricted products: ", style="hop.key"),
        data["restricted_products"] or "(none)",
        sep="",
    )
    if data["cart"]:
        table = Table("Product", "Quantity", box=None, padding=(0, 2))
        for line in data["cart"]:
            table.add_row(
                Text(str(line["product_id"]), style="hop.product"),
                str(line["total_quantity"]),
            )
        console.print(table)


def _render_show(console: Console, data: dict[str, Any]) -> None:
    _render_data(
        console,
        {
            key: data[key]
            for key in ("discount_requirement_id", "discount_id", "restricted_products")
        },
    )
    if data["constraints"]:
        table = Table("Product", "Kind", "Quantity", box=None, padding=(0, 2))
        for constraint in data["constraints"]:
            table.add_row(
                Text(str(constraint["product_id"]), style="hop.product"),
                constraint["kind"],
                _quantity_label(constraint),
            )
        console.print(table)


def _quantity_label(constraint: dict[str, Any]) -> str:
    if constraint["kind"] == "exact":
        return str(constraint["quantity"])
    if constraint["kind"] == "range":
        return f"{constraint['min_quantity']}-{constraint['max_quantity']}"
    return "any"


_OP_RENDERERS: dict[str, Callable[[Console, dict[str, Any]], None]] = {
    "check_requirement": _render_check,
    "show": _render_show,
}
