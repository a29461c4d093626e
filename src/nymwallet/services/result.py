"""ServiceResult and ServiceError — the contract between services and UI.

INVARIANT: Every wallet operation returns a ServiceResult; typed failures
(backend unavailable, rejection, malformed reply, client-side validation)
are reported through ``error``, never raised to the UI.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ErrorCode(StrEnum):
    """Stable failure codes the UI can branch on."""

    BACKEND_UNAVAILABLE = "BACKEND_UNAVAILABLE"
    INVOCATION_REJECTED = "INVOCATION_REJECTED"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"
    INVALID_OPERATION_DATA = "INVALID_OPERATION_DATA"
    INVALID_CREDENTIAL = "INVALID_CREDENTIAL"
    CONVERSION_ERROR = "CONVERSION_ERROR"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel, Generic[T]):
    """Return type for all wallet operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"delegate"``).
        data: Typed reply on success (``None`` on failure).
        warnings: Non-fatal notes, such as the fee-estimate caveat.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (command name, telemetry).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: T | None = None
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
