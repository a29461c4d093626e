"""Command: approximate fee for an operation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from nymwallet.commands._base import WalletCommand
from nymwallet.domain.types import Operation
from nymwallet.services.currency import CurrencyService

if TYPE_CHECKING:
    from nymwallet.commands._context import AppContext


@click.command(
    cls=WalletCommand,
    examples="""\
  nymwallet fee Send
  nymwallet fee DelegateToMixnode
  nymwallet --json fee BondGateway""",
)
@click.argument(
    "operation", metavar="OPERATION", type=click.Choice([op.value for op in Operation])
)
@click.pass_obj
def fee(app: AppContext, operation: str) -> None:
    """Estimate the fee for OPERATION.

    The figure comes from default gas settings and is a hint only.
    """
    app.run(lambda wallet: CurrencyService(wallet).get_gas_fee(operation))
