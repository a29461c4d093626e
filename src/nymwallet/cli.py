"""Root CLI group for nymwallet with global flags and command registration."""

from __future__ import annotations

import click

from nymwallet import __version__
from nymwallet.commands import register_commands
from nymwallet.commands._context import AppContext
from nymwallet.config.settings import WalletSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="nymwallet")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
# Hidden: a phrase passed here lands in shell history and the process list.
@click.option(
    "--mnemonic",
    default=None,
    hidden=True,
    help="Recovery phrase to sign in with. Discouraged; use NYMWALLET_MNEMONIC.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    mnemonic: str | None,
) -> None:
    """nymwallet — Nym wallet command-line client."""
    ctx.ensure_object(dict)
    settings = WalletSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        mnemonic=mnemonic,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
