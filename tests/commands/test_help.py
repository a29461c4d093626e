"""Parametrized help and --examples tests for all CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from nymwallet.cli import cli

# (CLI args, expected keywords in output)
HELP_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["account", "--help"], ["create", "sign-in"]),
    (["convert", "--help"], ["to-major", "to-minor"]),
    (["contract", "--help"], ["show", "update"]),
    (["contract", "update", "--help"], ["--file"]),
    (["balance", "--help"], []),
    (["fee", "--help"], ["OPERATION"]),
    (["delegate", "--help"], ["TYPE", "IDENTITY", "AMOUNT", "--denom"]),
    (["undelegate", "--help"], ["TYPE", "IDENTITY"]),
    (["delegations", "--help"], ["--start-after"]),
    (["bond", "--help"], ["--data", "--denom"]),
    (["unbond", "--help"], ["TYPE"]),
    (["owns", "--help"], ["TYPE"]),
    (["send", "--help"], ["ADDRESS", "AMOUNT", "--memo"]),
]

EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["account", "--examples"], ["nymwallet account create"]),
    (["account", "create", "--examples"], ["nymwallet account create"]),
    (["account", "sign-in", "--examples"], ["NYMWALLET_MNEMONIC"]),
    (["balance", "--examples"], ["nymwallet balance"]),
    (["convert", "--examples"], ["to-major 1500000"]),
    (["fee", "--examples"], ["DelegateToMixnode"]),
    (["delegate", "--examples"], ["--denom Major"]),
    (["undelegate", "--examples"], ["nymwallet undelegate"]),
    (["delegations", "--examples"], ["--start-after"]),
    (["bond", "--examples"], ["--data mixnode.json"]),
    (["unbond", "--examples"], ["unbond gateway"]),
    (["owns", "--examples"], ["owns mixnode"]),
    (["send", "--examples"], ["--memo"]),
    (["contract", "--examples"], ["contract update --file"]),
]


def _cmd_id(item: tuple[list[str], list[str]]) -> str:
    """Generate a readable test ID from args."""
    args, _ = item
    return "_".join(a for a in args if not a.startswith("--"))


@pytest.mark.parametrize(
    "args,expected_keywords",
    HELP_COMMANDS,
    ids=[_cmd_id(item) for item in HELP_COMMANDS],
)
def test_command_help(cli_runner: CliRunner, args: list[str], expected_keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    for kw in expected_keywords:
        assert kw in result.output, f"Expected '{kw}' in help output for {args}"


@pytest.mark.parametrize(
    "args,expected_keywords",
    EXAMPLES_COMMANDS,
    ids=[_cmd_id(item) for item in EXAMPLES_COMMANDS],
)
def test_examples_flag(
    cli_runner: CliRunner, args: list[str], expected_keywords: list[str]
) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    for kw in expected_keywords:
        assert kw in result.output, f"Expected '{kw}' in examples output for {args}"
