"""Shared pytest fixtures and test helpers for nymwallet tests."""

from __future__ import annotations

import copy
import logging
import sys
import textwrap
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from nymwallet.config.settings import WalletSettings
from nymwallet.infrastructure.errors import InvocationRejected
from nymwallet.infrastructure.wallet import Wallet
from nymwallet.services.telemetry import _current_span, disable_telemetry

BALANCE_REPLY = {
    "coin": {"amount": "1500000", "denom": "Minor"},
    "printable_balance": "1.5 NYM",
}
CLIENT_DETAILS = {
    "client_address": "n1clientaddress",
    "contract_address": "n1contract",
    "denom": "Minor",
}
MNEMONIC_12 = " ".join(["abandon"] * 11 + ["about"])


class FakeTransport:
    """In-memory transport with scripted replies.

    ``script(command, *values)`` queues replies for *command*; the last
    queued value is repeated once the others are used up.  A value that
    is an exception instance is raised instead of returned.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.closed = False
        self._replies: dict[str, list[Any]] = {}

    def script(self, command: str, *values: Any) -> FakeTransport:
        self._replies.setdefault(command, []).extend(values)
        return self

    @property
    def commands(self) -> list[str]:
        return [command for command, _ in self.calls]

    async def request(self, command: str, params: dict[str, Any]) -> Any:
        self.calls.append((command, params))
        queue = self._replies.get(command)
        if not queue:
            raise InvocationRejected(f"unknown command {command}", command=command)
        value = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(value, BaseException):
            raise value
        return copy.deepcopy(value)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    """AppContext enables telemetry for -v; keep it from leaking between tests."""
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture(autouse=True)
def _restore_root_handlers() -> Generator[None]:
    """AppContext points logging at CliRunner's stderr; undo that after each test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    yield
    root.handlers = handlers


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def wallet(transport: FakeTransport, tmp_path: Path) -> Wallet:
    """Wallet wired to the scripted in-memory transport."""
    settings = WalletSettings.from_cli(start=tmp_path)
    return Wallet(settings, transport=transport)


# ---------------------------------------------------------------------------
# Subprocess backend used by transport and CLI tests
# ---------------------------------------------------------------------------

FAKE_BACKEND = textwrap.dedent(
    '''
    import json
    import sys
    from decimal import Decimal

    FACTOR = Decimal(1000000)
    held = []


    def answer(request_id, result=None, error=None, ok=True):
        message = {"id": request_id, "ok": ok}
        if ok:
            message["result"] = result
        else:
            message["error"] = error
        sys.stdout.write(json.dumps(message) + "\\n")
        sys.stdout.flush()


    for line in sys.stdin:
        request = json.loads(line)
        rid, cmd, args = request["id"], request["cmd"], request["args"]
        if cmd == "get_balance":
            answer(rid, {"coin": {"amount": "1500000", "denom": "Minor"},
                         "printable_balance": "1.5 NYM"})
        elif cmd == "connect_with_mnemonic":
            if args["mnemonic"].split()[0] == "wrong":
                answer(rid, error="invalid mnemonic", ok=False)
            else:
                answer(rid, {"client_address": "n1clientaddress", "denom": "Minor"})
        elif cmd == "create_new_account":
            answer(rid, {"mnemonic": "fresh words", "address": "n1fresh"})
        elif cmd == "minor_to_major":
            value = Decimal(args["amount"]) / FACTOR
            answer(rid, {"amount": format(value.normalize(), "f"), "denom": "Major"})
        elif cmd == "major_to_minor":
            value = Decimal(args["amount"]) * FACTOR
            answer(rid, {"amount": format(value.quantize(1), "f"), "denom": "Minor"})
        elif cmd == "get_approximate_fee":
            answer(rid, {"amount": "5000", "denom": "Minor"})
        elif cmd == "send":
            if int(args["amount"]["amount"]) > 1500000:
                answer(rid, error="insufficient funds", ok=False)
            else:
                answer(rid, {"code": 0, "tx_hash": "ABC123",
                             "details": {"to_address": args["address"],
                                         "amount": args["amount"]}})
        elif cmd in ("delegate_to_mixnode", "delegate_to_gateway"):
            answer(rid, {"source_address": "n1clientaddress",
                         "target_address": args["identity"],
                         "amount": args["amount"]})
        elif cmd == "bond_mixnode":
            answer(rid, None)
        elif cmd in ("owns_mixnode", "owns_gateway"):
            answer(rid, cmd == "owns_mixnode")
        elif cmd == "get_reverse_mix_delegations_paged":
            answer(rid, {"delegations": [{"owner": "n1clientaddress",
                                          "node_identity": "MIX1",
                                          "amount": {"amount": "10", "denom": "Minor"}}],
                         "start_next_after": None})
        elif cmd == "bad_envelope":
            sys.stdout.write(json.dumps({"id": rid, "status": "weird"}) + "\\n")
            sys.stdout.flush()
        elif cmd == "noise_then_answer":
            sys.stdout.write("not json\\n")
            sys.stdout.write(json.dumps({"id": 9999, "ok": True, "result": 1}) + "\\n")
            answer(rid, "after noise")
        elif cmd == "hold":
            held.append(rid)
        elif cmd == "release":
            answer(rid, "released")
            for hid in reversed(held):
                answer(hid, {"held": hid})
            held.clear()
        elif cmd == "crash":
            sys.exit(3)
        else:
            answer(rid, error="unknown command " + cmd, ok=False)
    '''
)


@pytest.fixture
def backend_script(tmp_path: Path) -> Path:
    """Write the JSON-lines fake backend to *tmp_path*."""
    script = tmp_path / "fake_backend.py"
    script.write_text(FAKE_BACKEND, encoding="utf-8")
    return script


@pytest.fixture
def backend_argv(backend_script: Path) -> list[str]:
    return [sys.executable, str(backend_script)]


@pytest.fixture
def wallet_home(
    tmp_path: Path, backend_argv: list[str], monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Working directory with a nymwallet.toml pointing at the fake backend."""
    home = tmp_path / "home"
    home.mkdir()
    command = ", ".join(f'"{Path(arg).as_posix()}"' for arg in backend_argv)
    (home / "nymwallet.toml").write_text(f"[backend]\ncommand = [{command}]\n", encoding="utf-8")
    monkeypatch.chdir(home)
    monkeypatch.delenv("NYMWALLET_CONFIG", raising=False)
    monkeypatch.delenv("NYMWALLET_MNEMONIC", raising=False)
    return home
