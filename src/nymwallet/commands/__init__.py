"""Subcommand modules for nymwallet.

Provides register_commands() which uses deferred imports to keep
``nymwallet --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from nymwallet.commands.account import account
    from nymwallet.commands.contract import contract
    from nymwallet.commands.convert import convert

    cli.add_command(account)
    cli.add_command(convert)
    cli.add_command(contract)

    # --- Standalone commands ---
    from nymwallet.commands.account import balance
    from nymwallet.commands.fee import fee
    from nymwallet.commands.send import send
    from nymwallet.commands.staking import (
        bond,
        delegate,
        delegations,
        owns,
        unbond,
        undelegate,
    )

    cli.add_command(balance)
    cli.add_command(fee)
    cli.add_command(send)
    cli.add_command(delegate)
    cli.add_command(undelegate)
    cli.add_command(delegations)
    cli.add_command(bond)
    cli.add_command(unbond)
    cli.add_command(owns)
