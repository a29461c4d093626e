"""Backend reply envelopes.

These are passed through to the UI.  Only the fields the client or CLI
reads are declared; anything else the backend sends is kept
(``extra="allow"``) so nothing is lost on the way through.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from nymwallet.domain.coin import Coin
from nymwallet.domain.types import Denom

_ENVELOPE = {"frozen": True, "extra": "allow"}


class CreatedAccount(BaseModel):
    """Reply to ``create_new_account``."""

    model_config = _ENVELOPE

    mnemonic: str
    address: str | None = None


class ClientDetails(BaseModel):
    """Session descriptor returned after signing in."""

    model_config = _ENVELOPE

    client_address: str
    contract_address: str | None = None
    denom: Denom | None = None


class DelegationResult(BaseModel):
    """Reply to delegate/undelegate commands."""

    model_config = _ENVELOPE

    source_address: str
    target_address: str
    amount: Coin | None = None


class TxDetails(BaseModel):
    model_config = _ENVELOPE

    from_address: str | None = None
    to_address: str | None = None
    amount: Coin | None = None


class TxResult(BaseModel):
    """Reply to ``send``."""

    model_config = _ENVELOPE

    code: int = 0
    tx_hash: str
    gas_used: int | None = None
    gas_wanted: int | None = None
    details: TxDetails | None = None


class ContractSettings(BaseModel):
    """Mixnet contract parameters, read or written as a whole."""

    model_config = _ENVELOPE

    minimum_mixnode_bond: str | None = None
    minimum_gateway_bond: str | None = None
    mixnode_bond_reward_rate: str | None = None
    mixnode_delegation_reward_rate: str | None = None
    mixnode_rewarded_set_size: int | None = None
    mixnode_active_set_size: int | None = None


class DelegationPage(BaseModel):
    """One page of reverse delegations.

    ``start_next_after`` is an opaque cursor owned by the backend; pass it
    back unchanged to fetch the next page.
    """

    model_config = _ENVELOPE

    delegations: list[dict[str, Any]] = Field(default_factory=list)
    start_next_after: str | None = None
