"""Commands: delegation, bonding and node ownership."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from nymwallet.commands._base import AMOUNT, JSON_FILE, NODE_TYPE, WalletCommand, denom_option
from nymwallet.domain.coin import Coin
from nymwallet.domain.types import NodeType
from nymwallet.services.staking import StakingService

if TYPE_CHECKING:
    from nymwallet.commands._context import AppContext


@click.command(
    cls=WalletCommand,
    examples="""\
  nymwallet delegate mixnode 7sVjiMrPYZrDWRujku9QLxgE8noT7NTgBAqizCsu7AoK 1000000
  nymwallet delegate gateway GW1 2.5 --denom Major""",
)
@click.argument("node_type", metavar="TYPE", type=NODE_TYPE)
@click.argument("identity")
@click.argument("amount", type=AMOUNT)
@denom_option
@click.pass_obj
def delegate(app: AppContext, node_type: str, identity: str, amount: str, denom: str) -> None:
    """Delegate AMOUNT to the node with IDENTITY."""
    coin = Coin(amount=amount, denom=denom)
    app.run(
        lambda wallet: StakingService(wallet).delegate(
            node_type, identity, coin, refresh_balance=True
        )
    )


@click.command(
    cls=WalletCommand,
    examples="""\
  nymwallet undelegate mixnode 7sVjiMrPYZrDWRujku9QLxgE8noT7NTgBAqizCsu7AoK""",
)
@click.argument("node_type", metavar="TYPE", type=NODE_TYPE)
@click.argument("identity")
@click.pass_obj
def undelegate(app: AppContext, node_type: str, identity: str) -> None:
    """Withdraw the delegation from the node with IDENTITY."""
    app.run(
        lambda wallet: StakingService(wallet).undelegate(
            node_type, identity, refresh_balance=True
        )
    )


@click.command(
    cls=WalletCommand,
    examples="""\
  nymwallet delegations mixnode
  nymwallet delegations gateway --start-after <cursor>""",
)
@click.argument("node_type", metavar="TYPE", type=NODE_TYPE)
@click.option("--start-after", default=None, help="Cursor from the previous page.")
@click.pass_obj
def delegations(app: AppContext, node_type: str, start_after: str | None) -> None:
    """List the delegations this account has made to nodes of TYPE."""

    async def call(wallet: Any) -> Any:
        svc = StakingService(wallet)
        if NodeType(node_type) == NodeType.MIXNODE:
            return await svc.get_reverse_mix_delegations(start_after)
        return await svc.get_reverse_gateway_delegations(start_after)

    app.run(call)


@click.command(
    cls=WalletCommand,
    examples="""\
  nymwallet bond mixnode 100000000 --data mixnode.json
  nymwallet bond gateway 100 --denom Major --data gateway.json""",
)
@click.argument("node_type", metavar="TYPE", type=NODE_TYPE)
@click.argument("amount", type=AMOUNT)
@denom_option
@click.option(
    "--data",
    type=JSON_FILE,
    required=True,
    help="JSON object describing the node (mixnode or gateway fields).",
)
@click.pass_obj
def bond(app: AppContext, node_type: str, amount: str, denom: str, data: dict[str, Any]) -> None:
    """Bond a node of TYPE, pledging AMOUNT."""
    coin = Coin(amount=amount, denom=denom)
    app.run(
        lambda wallet: StakingService(wallet).bond(node_type, data, coin, refresh_balance=True)
    )


@click.command(
    cls=WalletCommand,
    examples="""\
  nymwallet unbond mixnode
  nymwallet unbond gateway""",
)
@click.argument("node_type", metavar="TYPE", type=NODE_TYPE)
@click.pass_obj
def unbond(app: AppContext, node_type: str) -> None:
    """Unbond this account's node of TYPE."""
    app.run(lambda wallet: StakingService(wallet).unbond(node_type, refresh_balance=True))


@click.command(
    cls=WalletCommand,
    examples="""\
  nymwallet owns mixnode
  nymwallet -q owns gateway""",
)
@click.argument("node_type", metavar="TYPE", type=NODE_TYPE)
@click.pass_obj
def owns(app: AppContext, node_type: str) -> None:
    """Check whether this account has bonded a node of TYPE."""

    async def call(wallet: Any) -> Any:
        svc = StakingService(wallet)
        if NodeType(node_type) == NodeType.MIXNODE:
            return await svc.check_mixnode_ownership()
        return await svc.check_gateway_ownership()

    app.run(call)
