"""Backend command names for node-addressed actions.

The table is spelled out rather than interpolated so every
(NodeAction, NodeType) pair has exactly one reviewed command name.
``_check_command_table`` runs at import: a NodeType added without its
commands makes the package fail to import instead of producing an
unknown command string at call time.
"""

from __future__ import annotations

from nymwallet.domain.types import NODE_OPERATIONS, NodeAction, NodeType

COMMAND_PREFIXES: dict[NodeAction, str] = {
    NodeAction.BOND: "bond_",
    NodeAction.UNBOND: "unbond_",
    NodeAction.DELEGATE: "delegate_to_",
    NodeAction.UNDELEGATE: "undelegate_from_",
}

NODE_COMMANDS: dict[NodeAction, dict[NodeType, str]] = {
    NodeAction.BOND: {
        NodeType.MIXNODE: "bond_mixnode",
        NodeType.GATEWAY: "bond_gateway",
    },
    NodeAction.UNBOND: {
        NodeType.MIXNODE: "unbond_mixnode",
        NodeType.GATEWAY: "unbond_gateway",
    },
    NodeAction.DELEGATE: {
        NodeType.MIXNODE: "delegate_to_mixnode",
        NodeType.GATEWAY: "delegate_to_gateway",
    },
    NodeAction.UNDELEGATE: {
        NodeType.MIXNODE: "undelegate_from_mixnode",
        NodeType.GATEWAY: "undelegate_from_gateway",
    },
}

# Fixed commands (no node-type parameter).
CREATE_ACCOUNT = "create_new_account"
CONNECT_WITH_MNEMONIC = "connect_with_mnemonic"
MINOR_TO_MAJOR = "minor_to_major"
MAJOR_TO_MINOR = "major_to_minor"
APPROXIMATE_FEE = "get_approximate_fee"
SEND = "send"
GET_BALANCE = "get_balance"
GET_CONTRACT_SETTINGS = "get_contract_settings"
UPDATE_CONTRACT_SETTINGS = "update_contract_settings"

OWNERSHIP_COMMANDS: dict[NodeType, str] = {
    NodeType.MIXNODE: "owns_mixnode",
    NodeType.GATEWAY: "owns_gateway",
}

REVERSE_DELEGATION_COMMANDS: dict[NodeType, str] = {
    NodeType.MIXNODE: "get_reverse_mix_delegations_paged",
    NodeType.GATEWAY: "get_reverse_gateway_delegations_paged",
}


def command_for(action: NodeAction, node_type: NodeType) -> str:
    """Resolve the backend command for *action* against *node_type*."""
    return NODE_COMMANDS[action][node_type]


def _check_command_table() -> None:
    for action in NodeAction:
        row = NODE_COMMANDS.get(action)
        if row is None:
            raise RuntimeError(f"No commands registered for action {action!r}")
        for node_type in NodeType:
            name = row.get(node_type)
            expected = f"{COMMAND_PREFIXES[action]}{node_type.value}"
            if name != expected:
                raise RuntimeError(
                    f"Command for {action.value}/{node_type.value} is {name!r}, "
                    f"expected {expected!r}"
                )
            if node_type not in NODE_OPERATIONS.get(action, {}):
                raise RuntimeError(f"No fee operation for {action.value}/{node_type.value}")
    for table in (OWNERSHIP_COMMANDS, REVERSE_DELEGATION_COMMANDS):
        missing = set(NodeType) - set(table)
        if missing:
            raise RuntimeError(f"Missing node types in command table: {sorted(missing)}")


_check_command_table()
