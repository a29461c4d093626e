"""Command group: denomination conversion."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from nymwallet.commands._base import AMOUNT, WalletGroup
from nymwallet.services.currency import CurrencyService

if TYPE_CHECKING:
    from nymwallet.commands._context import AppContext


@click.group(
    cls=WalletGroup,
    examples="""\
  nymwallet convert to-major 1500000
  nymwallet convert to-minor 1.5""",
)
def convert() -> None:
    """Convert amounts between Major and Minor units."""


@convert.command("to-major")
@click.argument("amount", type=AMOUNT)
@click.pass_obj
def to_major(app: AppContext, amount: str) -> None:
    """Convert a Minor AMOUNT to Major units."""
    app.run(lambda wallet: CurrencyService(wallet).minor_to_major(amount), sign_in=False)


@convert.command("to-minor")
@click.argument("amount", type=AMOUNT)
@click.pass_obj
def to_minor(app: AppContext, amount: str) -> None:
    """Convert a Major AMOUNT to Minor units."""
    app.run(lambda wallet: CurrencyService(wallet).major_to_minor(amount), sign_in=False)
