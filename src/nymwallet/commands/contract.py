"""Command group: mixnet contract settings."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from nymwallet.commands._base import JSON_FILE, WalletGroup
from nymwallet.services.contract import ContractService

if TYPE_CHECKING:
    from nymwallet.commands._context import AppContext


@click.group(
    cls=WalletGroup,
    examples="""\
  nymwallet contract show
  nymwallet contract update --file params.json""",
)
def contract() -> None:
    """Read or update the mixnet contract settings."""


@contract.command("show")
@click.pass_obj
def show(app: AppContext) -> None:
    """Show the current contract settings."""
    app.run(lambda wallet: ContractService(wallet).get_contract_params())


@contract.command("update")
@click.option(
    "--file",
    "params",
    type=JSON_FILE,
    required=True,
    help="JSON object with the settings to write.",
)
@click.pass_obj
def update(app: AppContext, params: dict[str, Any]) -> None:
    """Write contract settings (admin only)."""
    app.run(lambda wallet: ContractService(wallet).set_contract_params(params))
