"""Closed variant sets shared by the domain, services and CLI.

NodeType values are the lower-cased tags substituted into backend
command names (``bond_mixnode``, ``delegate_to_gateway``).  They carry
no behaviour of their own.
"""

from __future__ import annotations

from enum import StrEnum


class NodeType(StrEnum):
    """Kinds of network node an account can bond or delegate to."""

    MIXNODE = "mixnode"
    GATEWAY = "gateway"


class NodeAction(StrEnum):
    """Node-addressed actions whose backend command depends on NodeType."""

    BOND = "bond"
    UNBOND = "unbond"
    DELEGATE = "delegate"
    UNDELEGATE = "undelegate"


class Denom(StrEnum):
    """The two denominations of the native currency."""

    MAJOR = "Major"
    MINOR = "Minor"


class Operation(StrEnum):
    """Chain actions the backend can estimate a fee for."""

    UPLOAD = "Upload"
    INIT = "Init"
    MIGRATE = "Migrate"
    CHANGE_ADMIN = "ChangeAdmin"
    SEND = "Send"

    BOND_MIXNODE = "BondMixnode"
    BOND_MIXNODE_ON_BEHALF = "BondMixnodeOnBehalf"
    UNBOND_MIXNODE = "UnbondMixnode"
    UNBOND_MIXNODE_ON_BEHALF = "UnbondMixnodeOnBehalf"
    DELEGATE_TO_MIXNODE = "DelegateToMixnode"
    DELEGATE_TO_MIXNODE_ON_BEHALF = "DelegateToMixnodeOnBehalf"
    UNDELEGATE_FROM_MIXNODE = "UndelegateFromMixnode"
    UNDELEGATE_FROM_MIXNODE_ON_BEHALF = "UndelegateFromMixnodeOnBehalf"

    BOND_GATEWAY = "BondGateway"
    BOND_GATEWAY_ON_BEHALF = "BondGatewayOnBehalf"
    UNBOND_GATEWAY = "UnbondGateway"
    UNBOND_GATEWAY_ON_BEHALF = "UnbondGatewayOnBehalf"
    DELEGATE_TO_GATEWAY = "DelegateToGateway"
    DELEGATE_TO_GATEWAY_ON_BEHALF = "DelegateToGatewayOnBehalf"
    UNDELEGATE_FROM_GATEWAY = "UndelegateFromGateway"
    UNDELEGATE_FROM_GATEWAY_ON_BEHALF = "UndelegateFromGatewayOnBehalf"

    UPDATE_STATE_PARAMS = "UpdateStateParams"

    @classmethod
    def for_node(cls, action: NodeAction, node_type: NodeType) -> Operation:
        """Return the fee-estimation operation for a node-addressed action."""
        return NODE_OPERATIONS[action][node_type]


NODE_OPERATIONS: dict[NodeAction, dict[NodeType, Operation]] = {
    NodeAction.BOND: {
        NodeType.MIXNODE: Operation.BOND_MIXNODE,
        NodeType.GATEWAY: Operation.BOND_GATEWAY,
    },
    NodeAction.UNBOND: {
        NodeType.MIXNODE: Operation.UNBOND_MIXNODE,
        NodeType.GATEWAY: Operation.UNBOND_GATEWAY,
    },
    NodeAction.DELEGATE: {
        NodeType.MIXNODE: Operation.DELEGATE_TO_MIXNODE,
        NodeType.GATEWAY: Operation.DELEGATE_TO_GATEWAY,
    },
    NodeAction.UNDELEGATE: {
        NodeType.MIXNODE: Operation.UNDELEGATE_FROM_MIXNODE,
        NodeType.GATEWAY: Operation.UNDELEGATE_FROM_GATEWAY,
    },
}
