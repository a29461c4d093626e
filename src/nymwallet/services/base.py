"""BaseService — shared plumbing for the wallet operation services.

Every service receives a :class:`Wallet` at construction time and talks
to the backend only through ``self._invoke``, which turns the
dispatcher's typed exceptions into failed ServiceResults.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from nymwallet.domain.coin import Balance
from nymwallet.domain.commands import GET_BALANCE
from nymwallet.domain.errors import WalletValidationError
from nymwallet.infrastructure.errors import DispatchError, InvocationRejected, MalformedResponse
from nymwallet.services.result import ErrorCode, ServiceError, ServiceResult
from nymwallet.services.telemetry import trace_span

if TYPE_CHECKING:
    from nymwallet.domain.session import WalletSession
    from nymwallet.infrastructure.wallet import Wallet

logger = logging.getLogger(__name__)

BALANCE_REFRESH_FAILED = "Balance refresh failed"


class BaseService:
    """Abstract base for the wallet services.

    Usage::

        class TransferService(BaseService):
            async def send(self, ...) -> ServiceResult[TxResult]:
                return await self._invoke("send", SEND, {...}, reply=TxResult)
    """

    def __init__(self, wallet: Wallet) -> None:
        self._wallet = wallet

    @property
    def _session(self) -> WalletSession:
        return self._wallet.session

    async def _invoke(
        self,
        op: str,
        command: str,
        params: Mapping[str, Any] | None = None,
        *,
        reply: Any = Any,
        rejected_code: ErrorCode = ErrorCode.INVOCATION_REJECTED,
        warnings: list[str] | None = None,
    ) -> ServiceResult[Any]:
        """Dispatch *command* and wrap the outcome as a ServiceResult.

        *rejected_code* lets an operation report a backend refusal under
        its own code (a refused mnemonic is an ``INVALID_CREDENTIAL``).
        The refusal text is kept verbatim either way.
        """
        with trace_span(f"invoke:{command}") as span:
            try:
                value = await self._wallet.dispatcher.invoke(command, params, reply=reply)
            except InvocationRejected as exc:
                if span is not None:
                    span.annotate("rejected", True)
                return self._failure(op, exc, code=rejected_code)
            except DispatchError as exc:
                return self._failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data=value,
            warnings=list(warnings or []),
            meta={"command": command},
        )

    def _failure(
        self,
        op: str,
        exc: DispatchError | WalletValidationError,
        *,
        code: ErrorCode | None = None,
    ) -> ServiceResult[Any]:
        """Build a failed result from a dispatcher or validation error."""
        detail: dict[str, Any] = {}
        message = str(exc)
        if isinstance(exc, DispatchError):
            detail = dict(exc.detail)
            if exc.command:
                detail["command"] = exc.command
            if isinstance(exc, MalformedResponse):
                logger.error("Operation %s got a malformed reply: %s", op, exc)
                message = "The wallet backend sent a reply this client could not read."
        logger.info("Operation %s failed: %s", op, code or exc.code)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=code or exc.code, message=message, detail=detail),
        )

    async def _fetch_balance(self, op: str) -> ServiceResult[Balance]:
        """Query the balance; on success replace the session snapshot."""
        result = await self._invoke(op, GET_BALANCE, reply=Balance)
        if result.ok:
            self._session.replace_balance(result.data)
        return result

    async def _refresh_balance_after(self, result: ServiceResult[Any]) -> ServiceResult[Any]:
        """Follow a successful balance-affecting operation with a balance query.

        The refreshed balance lands in ``meta["balance"]``.  A failed
        refresh is reported as a warning; the primary result stays
        successful.
        """
        if not result.ok:
            return result
        refreshed = await self._fetch_balance(result.op)
        if refreshed.ok:
            return self._with_meta(result, balance=refreshed.data.model_dump(mode="json"))
        reason = refreshed.error.message if refreshed.error else "unknown error"
        return result.model_copy(
            update={"warnings": [*result.warnings, f"{BALANCE_REFRESH_FAILED}: {reason}"]}
        )

    @staticmethod
    def _with_meta(result: ServiceResult[Any], **items: Any) -> ServiceResult[Any]:
        """Return a copy of *result* with *items* merged into its meta."""
        return result.model_copy(update={"meta": {**(result.meta or {}), **items}})
