"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from nymwallet.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from nymwallet.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult[Any], *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
        _render_warnings(console, result)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult[Any]) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    data = result.data
    if isinstance(data, bool):
        return "yes" if data else "no"
    if hasattr(data, "printable_balance"):
        return str(data.printable_balance)
    if hasattr(data, "amount") and hasattr(data, "denom"):
        return f"{data.amount} {data.denom}"
    if hasattr(data, "tx_hash"):
        return str(data.tx_hash)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _as_dict(data: Any) -> dict[str, Any]:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", exclude_none=True)
    if isinstance(data, dict):
        return data
    if data is None:
        return {}
    return {"value": data}


def _status_line(console: Console, result: ServiceResult[Any]) -> None:
    """Print the OK status line."""
    label = Text("OK", style="wallet.ok")
    op = Text(f"  {result.op}", style="wallet.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="wallet.key")
    if key.endswith("address"):
        v = Text(str(value), style="wallet.address")
    elif key in ("amount", "printable_balance", "fee", "bond", "balance"):
        v = Text(str(value), style="wallet.amount")
    elif isinstance(value, (dict, list)):
        v = Text(json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _coin_text(coin: Any) -> str:
    if isinstance(coin, dict):
        return f"{coin.get('amount', '?')} {coin.get('denom', '')}".strip()
    return str(coin)


def _render_meta(console: Console, result: ServiceResult[Any]) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        elif k == "balance":
            continue
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _render_warnings(console: Console, result: ServiceResult[Any]) -> None:
    for warning in result.warnings:
        console.print(Text("  warning: ", style="wallet.warning"), warning, sep="")


def _render_refreshed_balance(console: Console, result: ServiceResult[Any]) -> None:
    """Print the balance queried after a balance-affecting operation, if any."""
    balance = (result.meta or {}).get("balance")
    if balance:
        printable = balance.get("printable_balance") or _coin_text(balance.get("coin", {}))
        _field(console, "balance", printable)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult[Any], console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="wallet.error")
    op = Text(f"  {result.op}", style="wallet.op")
    code = Text(f" [{err.code}]" if err else "", style="dim")
    sep = Text(" — ")
    console.print(label, op, code, sep, msg)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Account renderers ─────────────────────────────────────────────────


def _render_balance(result: ServiceResult[Any], console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = _as_dict(result.data)
    _field(console, "printable_balance", d.get("printable_balance", ""))
    if verbose:
        _field(console, "amount", _coin_text(d.get("coin")))
        _render_meta(console, result)


def _render_created_account(
    result: ServiceResult[Any], console: Console, *, verbose: bool = False
) -> None:
    d = _as_dict(result.data)
    lines = [f"[wallet.secret]{d.get('mnemonic', '')}[/wallet.secret]"]
    if d.get("address"):
        lines.append(f"\naddress: [wallet.address]{d['address']}[/wallet.address]")
    lines.append("\nWrite the mnemonic down now; it is the only way to recover this account.")
    console.print(Panel("\n".join(lines), title="New account", border_style="wallet.ok", expand=False))
    if verbose:
        _render_meta(console, result)


# ── Amount renderers ──────────────────────────────────────────────────


def _render_coin(result: ServiceResult[Any], console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    key = "fee" if result.op == "get_gas_fee" else "amount"
    _field(console, key, _coin_text(_as_dict(result.data)))
    if verbose:
        _render_meta(console, result)


def _render_bool(result: ServiceResult[Any], console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "owns", "yes" if result.data else "no")
    if verbose:
        _render_meta(console, result)


# ── Staking renderers ─────────────────────────────────────────────────


def _render_delegation(
    result: ServiceResult[Any], console: Console, *, verbose: bool = False
) -> None:
    _status_line(console, result)
    d = _as_dict(result.data)
    _field(console, "source_address", d.get("source_address", ""))
    _field(console, "target_address", d.get("target_address", ""))
    if d.get("amount"):
        _field(console, "amount", _coin_text(d["amount"]))
    _render_refreshed_balance(console, result)
    if verbose:
        _render_meta(console, result)


def _render_delegation_page(
    result: ServiceResult[Any], console: Console, *, verbose: bool = False
) -> None:
    d = _as_dict(result.data)
    delegations: list[dict[str, Any]] = d.get("delegations", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Owner", style="wallet.address", no_wrap=True)
    table.add_column("Node")
    table.add_column("Amount", style="wallet.amount", justify="right")
    if verbose:
        table.add_column("Height", style="dim")

    for item in delegations:
        row = [
            str(item.get("owner", item.get("delegator", ""))),
            str(item.get("node_identity", item.get("identity", ""))),
            _coin_text(item.get("amount", "")),
        ]
        if verbose:
            row.append(str(item.get("block_height", "")))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{len(delegations)} delegations")
    if d.get("start_next_after"):
        console.print(f"next page: --start-after {d['start_next_after']}")


def _render_tx(result: ServiceResult[Any], console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = _as_dict(result.data)
    _field(console, "tx_hash", d.get("tx_hash", ""))
    details = d.get("details") or {}
    if details.get("to_address"):
        _field(console, "to_address", details["to_address"])
    if details.get("amount"):
        _field(console, "amount", _coin_text(details["amount"]))
    _render_refreshed_balance(console, result)
    if verbose:
        for key in ("code", "gas_used", "gas_wanted"):
            if key in d:
                _field(console, key, d[key])
        _render_meta(console, result)


def _render_bond(result: ServiceResult[Any], console: Console, *, verbose: bool = False) -> None:
    """Bonding complete: node, pledge and the balance left afterwards."""
    meta = result.meta or {}
    _status_line(console, result)
    if meta.get("node_type"):
        _field(console, "node_type", meta["node_type"])
    if meta.get("identity"):
        _field(console, "identity", meta["identity"])
    if meta.get("bond"):
        _field(console, "bond", _coin_text(meta["bond"]))
    _render_refreshed_balance(console, result)
    if verbose:
        for key, value in _as_dict(result.data).items():
            _field(console, key, value)
        _render_meta(console, result)


def _render_unbond(result: ServiceResult[Any], console: Console, *, verbose: bool = False) -> None:
    meta = result.meta or {}
    _status_line(console, result)
    if meta.get("node_type"):
        _field(console, "node_type", meta["node_type"])
    _render_refreshed_balance(console, result)
    if verbose:
        _render_meta(console, result)


# ── Fallback ──────────────────────────────────────────────────────────


def _render_generic(result: ServiceResult[Any], console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in _as_dict(result.data).items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Account
    "create_account": _render_created_account,
    "sign_in": _render_generic,
    "user_balance": _render_balance,
    # Amounts
    "minor_to_major": _render_coin,
    "major_to_minor": _render_coin,
    "get_gas_fee": _render_coin,
    # Staking
    "delegate": _render_delegation,
    "undelegate": _render_delegation,
    "bond": _render_bond,
    "unbond": _render_unbond,
    "check_mixnode_ownership": _render_bool,
    "check_gateway_ownership": _render_bool,
    "get_reverse_mix_delegations": _render_delegation_page,
    "get_reverse_gateway_delegations": _render_delegation_page,
    # Transfers
    "send": _render_tx,
}
