"""Restricted-product grammar — parse and match product constraints.

A configuration string is a comma-separated list of tokens, each in one
of three shapes::

    77            any quantity of product 77
    123:2         exactly 2 units of product 123
    156:3-8       between 3 and 8 units (inclusive) of product 156

Tokens parse into a tagged variant (:data:`Constraint`).  Pure functions,
no infrastructure dependencies.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Annotated, Literal

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from collections.abc import Iterable

    from hasoneproduct.domain.cart import CartLine

# Optional surrounding ASCII whitespace, optional sign, ASCII digits only.
_INTEGER_PATTERN = re.compile(r"^\s*[+-]?[0-9]+\s*$", re.ASCII)

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class ConstraintParseError(ValueError):
    """A restricted-product token could not be parsed.

    ``strict`` is True for quantity tokens (``id:qty`` and ``id:min-max``),
    whose parse failures invalidate the whole configuration.  Plain product
    id tokens are not strict: a malformed one is skipped.
    """

    def __init__(self, token: str, *, strict: bool) -> None:
        super().__init__(f"Malformed restricted product token: {token!r}")
        self.token = token
        self.strict = strict


def parse_int(value: str) -> int | None:
    """Parse a 32-bit signed decimal integer, returning None on failure.

    Accepts surrounding whitespace and a leading sign.  Rejects digit
    separators, non-ASCII digits and values outside the 32-bit range.
    """
    if not _INTEGER_PATTERN.match(value):
        return None
    number = int(value.strip())
    if number < INT32_MIN or number > INT32_MAX:
        return None
    return number


# ---------------------------------------------------------------------------
# Constraint variants
# ---------------------------------------------------------------------------


class AnyQuantity(BaseModel):
    """Product must be in the cart; quantity is ignored."""

    model_config = {"frozen": True}

    kind: Literal["any"] = "any"
    product_id: int

    def matches(self, line: CartLine) -> bool:
        return line.product_id == self.product_id

    def __str__(self) -> str:
        return str(self.product_id)


class ExactQuantity(BaseModel):
    """Product must be in the cart with exactly ``quantity`` units."""

    model_config = {"frozen": True}

    kind: Literal["exact"] = "exact"
    product_id: int
    quantity: int

    def matches(self, line: CartLine) -> bool:
        return line.product_id == self.product_id and line.total_quantity == self.quantity

    def __str__(self) -> str:
        return f"{self.product_id}:{self.quantity}"


class QuantityRange(BaseModel):
    """Product must be in the cart with ``min_quantity..max_quantity`` units.

    Both ends are inclusive.  A reversed range never matches.
    """

    model_config = {"frozen": True}

    kind: Literal["range"] = "range"
    product_id: int
    min_quantity: int
    max_quantity: int

    def matches(self, line: CartLine) -> bool:
        return (
            line.product_id == self.product_id
            and self.min_quantity <= line.total_quantity <= self.max_quantity
        )

    def __str__(self) -> str:
        return f"{self.product_id}:{self.min_quantity}-{self.max_quantity}"


Constraint = Annotated[AnyQuantity | ExactQuantity | QuantityRange, Field(discriminator="kind")]


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def split_tokens(restricted_products: str) -> list[str]:
    """Split a configuration string on commas, trimming and dropping empties."""
    tokens = (part.strip() for part in restricted_products.split(","))
    return [token for token in tokens if token]


def parse_token(token: str) -> Constraint:
    """Parse one trimmed token into a constraint.

    Raises:
        ConstraintParseError: if any numeric part is not a valid integer.
    """
    if ":" not in token:
        product_id = parse_int(token)
        if product_id is None:
            raise ConstraintParseError(token, strict=False)
        return AnyQuantity(product_id=product_id)

    # Segments beyond the second colon are ignored.
    parts = token.split(":")
    product_id = parse_int(parts[0])
    quantity_part = parts[1]

    if "-" in quantity_part:
        bounds = quantity_part.split("-")
        min_quantity = parse_int(bounds[0])
        max_quantity = parse_int(bounds[1])
        if product_id is None or min_quantity is None or max_quantity is None:
            raise ConstraintParseError(token, strict=True)
        return QuantityRange(
            product_id=product_id,
            min_quantity=min_quantity,
            max_quantity=max_quantity,
        )

    quantity = parse_int(quantity_part)
    if product_id is None or quantity is None:
        raise ConstraintParseError(token, strict=True)
    return ExactQuantity(product_id=product_id, quantity=quantity)


def parse_restricted_products(restricted_products: str) -> list[Constraint]:
    """Parse a whole configuration string, failing on the first malformed token.

    Used when saving configuration.  Evaluation goes through
    :func:`evaluate` instead, which tolerates malformed plain ids.
    """
    return [parse_token(token) for token in split_tokens(restricted_products)]


def format_restricted_products(constraints: Iterable[Constraint]) -> str:
    """Render constraints back to their canonical configuration string."""
    return ", ".join(str(constraint) for constraint in constraints)


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MatchOutcome:
    """Result of evaluating tokens against an aggregated cart."""

    matched: Constraint | None = None
    aborted_on: str | None = None  # strict token whose parse failure stopped evaluation
    skipped: list[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.matched is not None


def evaluate(tokens: Iterable[str], cart: list[CartLine]) -> MatchOutcome:
    """Find the first token satisfied by any cart line.

    Tokens are tried in order and the first match wins.  A malformed plain
    id is skipped, but a malformed quantity token aborts the evaluation
    and suppresses every later token.  With an empty cart no token is
    ever parsed, so nothing is skipped or aborted.
    """
    if not cart:
        return MatchOutcome()

    skipped: list[str] = []
    for token in tokens:
        try:
            constraint = parse_token(token)
        except ConstraintParseError as exc:
            if exc.strict:
                return MatchOutcome(aborted_on=token, skipped=skipped)
            skipped.append(token)
            continue

        for line in cart:
            if constraint.matches(line):
                return MatchOutcome(matched=constraint, skipped=skipped)

    return MatchOutcome(skipped=skipped)
