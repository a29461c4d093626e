"""Typed failures raised by the command dispatcher and its transports."""

from __future__ import annotations

from typing import Any


class DispatchError(RuntimeError):
    """Base class for failures crossing the backend boundary."""

    code = "DISPATCH_ERROR"

    def __init__(
        self,
        message: str,
        *,
        command: str | None = None,
        detail: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.command = command
        self.detail = detail or {}


class BackendUnavailable(DispatchError):
    """The backend process could not be reached or went away mid-call."""

    code = "BACKEND_UNAVAILABLE"


class InvocationRejected(DispatchError):
    """The backend understood the command and refused it.

    ``reason`` is the backend's own text and is shown to the user as-is.
    """

    code = "INVOCATION_REJECTED"

    def __init__(self, reason: str, *, command: str | None = None) -> None:
        super().__init__(reason, command=command)
        self.reason = reason


class MalformedResponse(DispatchError):
    """The reply could not be decoded into the expected shape."""

    code = "MALFORMED_RESPONSE"
