"""Service return contract.

Every public service method returns a :class:`ServiceResult`; failures
are values, not exceptions, so the CLI can render them uniformly and
choose the exit code.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    NOT_FOUND = "NOT_FOUND"
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"
    WRONG_RULE = "WRONG_RULE"
    UNKNOWN_RULE = "UNKNOWN_RULE"


class ServiceError(BaseModel):
    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: False when ``error`` is set.
        op: Operation name, e.g. ``"check_requirement"``.  Picks the
            human-mode renderer.
        data: Operation payload.  A failed requirement check is still
            ``ok``; the verdict lives in ``data["is_valid"]``.
        warnings: Non-fatal findings, printed to stderr by the CLI.
        error: Set on failure.
        meta: Extra diagnostics (the telemetry span tree).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        error = ServiceError(code=str(code), message=message, detail=detail)
        return cls(ok=False, op=op, error=error)
