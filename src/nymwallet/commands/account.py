"""Commands: account creation, sign-in and balance."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from nymwallet.commands._base import WalletCommand, WalletGroup
from nymwallet.services.account import AccountService

if TYPE_CHECKING:
    from nymwallet.commands._context import AppContext


@click.group(
    cls=WalletGroup,
    examples="""\
  nymwallet account create
  nymwallet account sign-in
  NYMWALLET_MNEMONIC="..." nymwallet account sign-in""",
)
def account() -> None:
    """Create an account or check a recovery phrase."""


@account.command(
    "create",
    examples="""\
  nymwallet account create
  nymwallet --json account create""",
)
@click.pass_obj
def create(app: AppContext) -> None:
    """Create a new account and print its mnemonic once."""
    app.run(lambda wallet: AccountService(wallet).create_account(), sign_in=False)


@account.command(
    "sign-in",
    examples="""\
  nymwallet account sign-in
  NYMWALLET_MNEMONIC="word1 word2 ..." nymwallet account sign-in""",
)
@click.pass_obj
def sign_in(app: AppContext) -> None:
    """Sign in with a mnemonic and print the account details.

    Uses ``NYMWALLET_MNEMONIC`` when set, otherwise prompts without
    echoing.
    """
    if app.settings.mnemonic is not None:
        phrase = app.settings.mnemonic.get_secret_value()
    else:
        phrase = click.prompt("Mnemonic", hide_input=True)
    app.run(lambda wallet: AccountService(wallet).sign_in_with_mnemonic(phrase), sign_in=False)


@click.command(
    cls=WalletCommand,
    examples="""\
  nymwallet balance
  nymwallet -q balance""",
)
@click.pass_obj
def balance(app: AppContext) -> None:
    """Show the signed-in account's balance."""
    app.run(lambda wallet: AccountService(wallet).user_balance())
