"""StakingService — delegation, bonding and node ownership.

Command names come from the Operation Model table in
:mod:`nymwallet.domain.commands`; no method here builds a command
string itself.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from nymwallet.domain.coin import Coin
from nymwallet.domain.commands import (
    OWNERSHIP_COMMANDS,
    REVERSE_DELEGATION_COMMANDS,
    command_for,
)
from nymwallet.domain.errors import InvalidOperationData
from nymwallet.domain.nodes import GatewayBond, MixNodeBond, coerce_bond_data
from nymwallet.domain.results import DelegationPage, DelegationResult
from nymwallet.domain.types import NodeAction, NodeType
from nymwallet.services.base import BaseService
from nymwallet.services.result import ServiceResult
from nymwallet.services.telemetry import traced


def _node_type(value: NodeType | str) -> NodeType:
    try:
        return NodeType(value)
    except ValueError as exc:
        choices = ", ".join(t.value for t in NodeType)
        raise InvalidOperationData(f"Unknown node type {value!r}; expected {choices}") from exc


def _identity(value: str) -> str:
    identity = value.strip()
    if not identity:
        raise InvalidOperationData("Node identity is empty")
    return identity


class StakingService(BaseService):
    """Node-addressed operations for mixnodes and gateways."""

    @traced
    async def delegate(
        self,
        node_type: NodeType | str,
        identity: str,
        amount: Coin,
        *,
        refresh_balance: bool = False,
    ) -> ServiceResult[DelegationResult]:
        """Delegate *amount* to the node with *identity*.

        The backend's DelegationResult is returned unchanged.
        """
        op = "delegate"
        try:
            kind = _node_type(node_type)
            target = _identity(identity)
        except InvalidOperationData as exc:
            return self._failure(op, exc)

        result = await self._invoke(
            op,
            command_for(NodeAction.DELEGATE, kind),
            {"identity": target, "amount": amount},
            reply=DelegationResult,
        )
        if refresh_balance:
            result = await self._refresh_balance_after(result)
        return result

    @traced
    async def undelegate(
        self,
        node_type: NodeType | str,
        identity: str,
        *,
        refresh_balance: bool = False,
    ) -> ServiceResult[DelegationResult]:
        op = "undelegate"
        try:
            kind = _node_type(node_type)
            target = _identity(identity)
        except InvalidOperationData as exc:
            return self._failure(op, exc)

        result = await self._invoke(
            op,
            command_for(NodeAction.UNDELEGATE, kind),
            {"identity": target},
            reply=DelegationResult,
        )
        if refresh_balance:
            result = await self._refresh_balance_after(result)
        return result

    @traced
    async def bond(
        self,
        node_type: NodeType | str,
        data: MixNodeBond | GatewayBond | Mapping[str, Any],
        amount: Coin,
        *,
        refresh_balance: bool = False,
    ) -> ServiceResult[Any]:
        """Bond a node, pledging *amount*.

        *data* must be the variant for *node_type*; a mismatch fails with
        ``INVALID_OPERATION_DATA`` before anything is sent.  The reply is
        opaque and passed through; node type, identity and pledge are
        recorded in ``meta``.
        """
        op = "bond"
        try:
            kind = _node_type(node_type)
            node = coerce_bond_data(kind, data)
        except InvalidOperationData as exc:
            return self._failure(op, exc)

        result = await self._invoke(
            op,
            command_for(NodeAction.BOND, kind),
            {kind.value: node.to_wire(), "bond": amount},
        )
        if result.ok:
            result = self._with_meta(
                result,
                node_type=kind.value,
                identity=node.identity_key,
                bond=amount.model_dump(mode="json"),
            )
        if refresh_balance:
            result = await self._refresh_balance_after(result)
        return result

    @traced
    async def unbond(
        self,
        node_type: NodeType | str,
        *,
        refresh_balance: bool = False,
    ) -> ServiceResult[Any]:
        op = "unbond"
        try:
            kind = _node_type(node_type)
        except InvalidOperationData as exc:
            return self._failure(op, exc)

        result = await self._invoke(op, command_for(NodeAction.UNBOND, kind))
        if result.ok:
            result = self._with_meta(result, node_type=kind.value)
        if refresh_balance:
            result = await self._refresh_balance_after(result)
        return result

    @traced
    async def check_mixnode_ownership(self) -> ServiceResult[bool]:
        return await self._owns("check_mixnode_ownership", NodeType.MIXNODE)

    @traced
    async def check_gateway_ownership(self) -> ServiceResult[bool]:
        return await self._owns("check_gateway_ownership", NodeType.GATEWAY)

    @traced
    async def get_reverse_mix_delegations(
        self, start_after: str | None = None
    ) -> ServiceResult[DelegationPage]:
        return await self._reverse_delegations(
            "get_reverse_mix_delegations", NodeType.MIXNODE, start_after
        )

    @traced
    async def get_reverse_gateway_delegations(
        self, start_after: str | None = None
    ) -> ServiceResult[DelegationPage]:
        return await self._reverse_delegations(
            "get_reverse_gateway_delegations", NodeType.GATEWAY, start_after
        )

    async def _owns(self, op: str, node_type: NodeType) -> ServiceResult[bool]:
        return await self._invoke(op, OWNERSHIP_COMMANDS[node_type], reply=bool)

    async def _reverse_delegations(
        self, op: str, node_type: NodeType, start_after: str | None
    ) -> ServiceResult[DelegationPage]:
        # The cursor is the backend's; it is forwarded untouched and only when given.
        params = {"start_after": start_after} if start_after is not None else None
        return await self._invoke(
            op, REVERSE_DELEGATION_COMMANDS[node_type], params, reply=DelegationPage
        )
