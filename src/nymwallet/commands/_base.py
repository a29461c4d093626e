"""Custom Click base classes and parameter types.

WalletCommand and WalletGroup accept an ``examples`` parameter.  When
``--examples`` is passed, the command prints usage examples and exits,
which keeps ``--help`` concise.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click

from nymwallet.domain.coin import normalize_amount
from nymwallet.domain.errors import ConversionError
from nymwallet.domain.types import Denom, NodeType


def _add_examples_option(cmd: click.Command | click.Group, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class WalletCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class WalletGroup(click.Group):
    """Click Group subclass that supports an ``--examples`` flag.

    Sets ``command_class = WalletCommand`` so all subcommands automatically
    accept the ``examples`` parameter without explicit ``cls=`` each time.
    """

    command_class = WalletCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class AmountType(click.ParamType):
    """A non-negative decimal amount, kept as its string form."""

    name = "amount"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> str:
        try:
            return normalize_amount(str(value))
        except ConversionError as exc:
            self.fail(str(exc), param, ctx)


class JsonFileType(click.Path):
    """An existing file whose content must be a JSON object."""

    name = "json-file"

    def __init__(self) -> None:
        super().__init__(exists=True, dir_okay=False, path_type=Path)

    def convert(  # type: ignore[override]
        self, value: Any, param: click.Parameter | None, ctx: click.Context | None
    ) -> dict[str, Any]:
        path = super().convert(value, param, ctx)
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            self.fail(f"{value} is not valid JSON: {exc}", param, ctx)
        if not isinstance(data, dict):
            self.fail(f"{value} must contain a JSON object", param, ctx)
        return data


AMOUNT = AmountType()
JSON_FILE = JsonFileType()
NODE_TYPE = click.Choice([t.value for t in NodeType])

denom_option = click.option(
    "--denom",
    type=click.Choice([d.value for d in Denom]),
    default=Denom.MINOR.value,
    show_default=True,
    help="Denomination of AMOUNT.",
)
