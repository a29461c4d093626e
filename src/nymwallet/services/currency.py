"""CurrencyService — denomination conversion and fee estimates.

The conversion factor between Major and Minor is owned by the backend
(it follows protocol parameters), so both conversions are backend
calls.  The client only checks what it can check without knowing the
exponent: inputs are non-negative decimals, minor amounts are integral
and replies come back in the requested denomination.  Minor inputs are
sent in canonical integer form (``"042"`` goes out as ``"42"``) so a
round trip through Major returns the amount that was sent.
"""

from __future__ import annotations

from nymwallet.domain.coin import AmountLike, Coin, canonical_minor, normalize_amount
from nymwallet.domain.commands import APPROXIMATE_FEE, MAJOR_TO_MINOR, MINOR_TO_MAJOR
from nymwallet.domain.errors import ConversionError, InvalidOperationData
from nymwallet.domain.types import Denom, Operation
from nymwallet.infrastructure.errors import MalformedResponse
from nymwallet.services.base import BaseService
from nymwallet.services.result import ErrorCode, ServiceResult
from nymwallet.services.telemetry import traced

FEE_ESTIMATE_WARNING = (
    "Approximate fee from default gas settings; the actual cost is simulated "
    "when the transaction is executed and may differ."
)


class CurrencyService(BaseService):
    """Unit conversion and fee estimation."""

    @traced
    async def minor_to_major(self, amount: AmountLike) -> ServiceResult[Coin]:
        return await self._convert(
            "minor_to_major", MINOR_TO_MAJOR, amount, source=Denom.MINOR, target=Denom.MAJOR
        )

    @traced
    async def major_to_minor(self, amount: AmountLike) -> ServiceResult[Coin]:
        return await self._convert(
            "major_to_minor", MAJOR_TO_MINOR, amount, source=Denom.MAJOR, target=Denom.MINOR
        )

    @traced
    async def get_gas_fee(self, operation: Operation | str) -> ServiceResult[Coin]:
        """Estimate the fee for *operation*.

        The figure is a display hint only; see ``FEE_ESTIMATE_WARNING``,
        which every successful result carries.
        """
        op = "get_gas_fee"
        try:
            operation = Operation(operation)
        except ValueError:
            return self._failure(op, InvalidOperationData(f"Unknown operation {operation!r}"))

        return await self._invoke(
            op,
            APPROXIMATE_FEE,
            {"operation": operation},
            reply=Coin,
            warnings=[FEE_ESTIMATE_WARNING],
        )

    async def _convert(
        self,
        op: str,
        command: str,
        amount: AmountLike,
        *,
        source: Denom,
        target: Denom,
    ) -> ServiceResult[Coin]:
        try:
            text = canonical_minor(amount) if source == Denom.MINOR else normalize_amount(amount)
        except ConversionError as exc:
            return self._failure(op, exc)

        result = await self._invoke(
            op,
            command,
            {"amount": text},
            reply=Coin,
            rejected_code=ErrorCode.CONVERSION_ERROR,
        )
        if not result.ok:
            return result

        coin: Coin = result.data
        if coin.denom != target or (target == Denom.MINOR and not coin.is_integral):
            return self._failure(
                op,
                MalformedResponse(
                    f"{command} answered {coin}, expected an amount in {target.value}",
                    command=command,
                    detail={"amount": coin.amount, "denom": coin.denom.value},
                ),
            )
        return result
