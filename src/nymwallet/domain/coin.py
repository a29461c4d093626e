"""Monetary values: Coin and Balance.

Amounts are kept as decimal strings end to end.  Floats are refused at
the model boundary so no binary rounding can enter a Coin; conversion
between denominations is done by the backend, which owns the exponent.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Self

from pydantic import BaseModel, field_validator

from nymwallet.domain.errors import ConversionError
from nymwallet.domain.types import Denom

_AMOUNT_RE = re.compile(r"^\d+(\.\d+)?$")

AmountLike = str | int | Decimal


def normalize_amount(value: AmountLike) -> str:
    """Return *value* as a non-negative decimal string.

    Accepts ``str``, ``int`` and finite ``Decimal``.  The string form is
    preserved as given (surrounding whitespace aside); see
    :func:`canonical_minor` for the form minor amounts are sent in.

    Raises:
        ConversionError: for floats, negatives, exponents or non-numbers.
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise ConversionError(f"Amount must be a decimal string, not {type(value).__name__}")
    if isinstance(value, int):
        text = str(value)
    elif isinstance(value, Decimal):
        if not value.is_finite():
            raise ConversionError(f"Amount is not finite: {value}")
        text = format(value, "f")
    elif isinstance(value, str):
        text = value.strip()
    else:
        raise ConversionError(f"Unsupported amount type: {type(value).__name__}")

    if not _AMOUNT_RE.match(text):
        raise ConversionError(f"Invalid amount {text!r}: expected a non-negative decimal")
    return text


def is_integral(amount: str) -> bool:
    """True when *amount* has no non-zero fractional digits."""
    _, _, fraction = amount.partition(".")
    return fraction.strip("0") == ""


def canonical_minor(amount: AmountLike) -> str:
    """Return an integral minor amount in its canonical integer form.

    ``"042"``, ``"42.0"`` and ``42`` all become ``"42"``, the form the
    backend answers with, so a minor -> major -> minor round trip gives
    back exactly what was sent.

    Raises:
        ConversionError: when the amount is invalid or has a fractional part.
    """
    text = normalize_amount(amount)
    if not is_integral(text):
        raise ConversionError(f"Minor amounts are indivisible, got {text!r}")
    return str(int(Decimal(text)))


class Coin(BaseModel):
    """An amount in one denomination of the native currency."""

    model_config = {"frozen": True}

    amount: str
    denom: Denom

    @field_validator("amount", mode="before")
    @classmethod
    def _check_amount(cls, value: object) -> str:
        return normalize_amount(value)  # type: ignore[arg-type]

    @classmethod
    def minor(cls, amount: AmountLike) -> Self:
        return cls(amount=normalize_amount(amount), denom=Denom.MINOR)

    @classmethod
    def major(cls, amount: AmountLike) -> Self:
        return cls(amount=normalize_amount(amount), denom=Denom.MAJOR)

    @property
    def is_integral(self) -> bool:
        return is_integral(self.amount)

    def as_decimal(self) -> Decimal:
        try:
            return Decimal(self.amount)
        except InvalidOperation as exc:  # pragma: no cover - guarded by validator
            raise ConversionError(str(exc)) from exc

    def __str__(self) -> str:
        return f"{self.amount} {self.denom.value}"


class Balance(BaseModel):
    """Account balance as reported by the backend.

    ``printable_balance`` is produced by the backend from the minor-unit
    value and is displayed as-is.
    """

    model_config = {"frozen": True}

    coin: Coin
    printable_balance: str
