"""TransferService — sending funds."""

from __future__ import annotations

from nymwallet.domain.coin import Coin
from nymwallet.domain.commands import SEND
from nymwallet.domain.errors import InvalidOperationData
from nymwallet.domain.results import TxResult
from nymwallet.services.base import BaseService
from nymwallet.services.result import ServiceResult
from nymwallet.services.telemetry import traced


class TransferService(BaseService):
    @traced
    async def send(
        self,
        amount: Coin,
        address: str,
        memo: str = "",
        *,
        refresh_balance: bool = False,
    ) -> ServiceResult[TxResult]:
        """Send *amount* to *address*.

        Backend refusals (insufficient funds, bad address) come back as
        ``INVOCATION_REJECTED`` with the backend's reason as the message.
        """
        op = "send"
        recipient = address.strip()
        if not recipient:
            return self._failure(op, InvalidOperationData("Recipient address is empty"))

        result = await self._invoke(
            op,
            SEND,
            {"amount": amount, "address": recipient, "memo": memo},
            reply=TxResult,
        )
        if refresh_balance:
            result = await self._refresh_balance_after(result)
        return result
