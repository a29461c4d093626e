"""Command: send funds to an address."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from nymwallet.commands._base import AMOUNT, WalletCommand, denom_option
from nymwallet.domain.coin import Coin
from nymwallet.services.transfer import TransferService

if TYPE_CHECKING:
    from nymwallet.commands._context import AppContext


@click.command(
    cls=WalletCommand,
    examples="""\
  nymwallet send n1recipient 2500
  nymwallet send n1recipient 1.25 --denom Major --memo "rent"
  nymwallet -q send n1recipient 100""",
)
@click.argument("address")
@click.argument("amount", type=AMOUNT)
@denom_option
@click.option("--memo", default="", help="Transaction memo.")
@click.pass_obj
def send(app: AppContext, address: str, amount: str, denom: str, memo: str) -> None:
    """Send AMOUNT to ADDRESS, then refresh the balance."""
    coin = Coin(amount=amount, denom=denom)
    app.run(
        lambda wallet: TransferService(wallet).send(coin, address, memo, refresh_balance=True)
    )
