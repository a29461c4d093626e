"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Runs service coroutines against a fresh backend
connection and centralizes result emission (stdout/stderr routing +
exit codes).
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

import click

from nymwallet.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from nymwallet.config.settings import WalletSettings
    from nymwallet.infrastructure.wallet import Wallet
    from nymwallet.services.result import ServiceResult

WalletCall = Callable[["Wallet"], Awaitable["ServiceResult[Any]"]]


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  No backend process is
    started until a command calls :meth:`run`, so ``--help`` and
    ``--version`` never spawn one.
    """

    def __init__(self, settings: WalletSettings) -> None:
        self.settings = settings

        # Configure structured logging
        from nymwallet.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        # Enable telemetry context var when verbose
        if settings.verbose:
            from nymwallet.services.telemetry import enable_telemetry

            enable_telemetry()

    def run(self, call: WalletCall, *, sign_in: bool = True) -> None:
        """Run *call* against a new Wallet and emit its result.

        When a mnemonic is configured and *sign_in* is set, the session is
        signed in first; a failed sign-in is emitted instead of *call*.
        """
        self.emit(asyncio.run(self._run(call, sign_in=sign_in)))

    async def _run(self, call: WalletCall, *, sign_in: bool) -> ServiceResult[Any]:
        from nymwallet.infrastructure.wallet import Wallet
        from nymwallet.services.account import AccountService

        async with Wallet(self.settings) as wallet:
            if sign_in and self.settings.mnemonic is not None:
                phrase = self.settings.mnemonic.get_secret_value()
                signed = await AccountService(wallet).sign_in_with_mnemonic(phrase)
                if not signed.ok:
                    return signed
            return await call(wallet)

    def emit(self, result: ServiceResult[Any]) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
