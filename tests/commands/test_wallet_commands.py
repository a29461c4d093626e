"""End-to-end command tests against the JSON-lines fake backend."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner, Result

from nymwallet.cli import cli
from nymwallet.services.currency import FEE_ESTIMATE_WARNING
from tests.conftest import MNEMONIC_12


def _json(result: Result, *, stream: str = "stdout") -> dict[str, Any]:
    return json.loads(getattr(result, stream))


@pytest.mark.usefixtures("wallet_home")
class TestAccountCommands:
    def test_balance_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "balance"])
        assert result.exit_code == 0, result.output
        payload = _json(result)
        assert payload["op"] == "user_balance"
        assert payload["data"]["printable_balance"] == "1.5 NYM"

    def test_balance_human(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["balance"])
        assert result.exit_code == 0
        assert "1.5 NYM" in result.stdout

    def test_balance_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "balance"])
        assert result.stdout.strip() == "1.5 NYM"

    def test_mnemonic_signs_in_first(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "--mnemonic", MNEMONIC_12, "balance"])
        assert result.exit_code == 0
        assert _json(result)["ok"] is True

    def test_refused_mnemonic_stops_command(self, cli_runner: CliRunner) -> None:
        phrase = " ".join(["wrong"] * 12)
        result = cli_runner.invoke(cli, ["--json", "--mnemonic", phrase, "balance"])
        assert result.exit_code == 1
        payload = _json(result, stream="stderr")
        assert payload["op"] == "sign_in"
        assert payload["error"]["code"] == "INVALID_CREDENTIAL"
        assert payload["error"]["message"] == "invalid mnemonic"
        assert result.stdout == ""

    def test_mnemonic_from_env(
        self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("NYMWALLET_MNEMONIC", " ".join(["wrong"] * 12))
        result = cli_runner.invoke(cli, ["--json", "balance"])
        assert result.exit_code == 1
        assert _json(result, stream="stderr")["op"] == "sign_in"

    def test_account_create(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "account", "create"])
        assert result.exit_code == 0
        assert _json(result)["data"]["mnemonic"] == "fresh words"

    def test_sign_in_prompts(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "account", "sign-in"], input=MNEMONIC_12 + "\n"
        )
        assert result.exit_code == 0
        assert MNEMONIC_12 not in result.stdout
        payload = json.loads(result.stdout[result.stdout.index("{") :])
        assert payload["data"]["client_address"] == "n1clientaddress"


@pytest.mark.usefixtures("wallet_home")
class TestAmountCommands:
    def test_to_major(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "convert", "to-major", "1500000"])
        assert result.exit_code == 0
        assert _json(result)["data"] == {"amount": "1.5", "denom": "Major"}

    def test_to_minor(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "convert", "to-minor", "1.5"])
        assert result.stdout.strip() == "1500000 Minor"

    def test_bad_amount_is_usage_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["convert", "to-major", "-5"])
        assert result.exit_code == 2

    def test_fee_carries_warning(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "fee", "Send"])
        assert result.exit_code == 0
        payload = _json(result)
        assert payload["data"] == {"amount": "5000", "denom": "Minor"}
        assert payload["warnings"] == [FEE_ESTIMATE_WARNING]

    def test_fee_unknown_operation(self, cli_runner: CliRunner) -> None:
        assert cli_runner.invoke(cli, ["fee", "Teleport"]).exit_code == 2


@pytest.mark.usefixtures("wallet_home")
class TestTransferCommands:
    def test_send(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "send", "n1to", "10", "--memo", "rent"])
        assert result.exit_code == 0
        payload = _json(result)
        assert payload["data"]["tx_hash"] == "ABC123"
        assert payload["data"]["details"]["to_address"] == "n1to"
        assert payload["warnings"] == []
        assert payload["meta"]["balance"]["printable_balance"] == "1.5 NYM"

    def test_send_shows_balance_afterwards(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["send", "n1recipient", "2500"])
        assert result.exit_code == 0
        assert "tx_hash: ABC123" in result.stdout
        assert "balance: 1.5 NYM" in result.stdout

    def test_send_rejected(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "send", "n1to", "2000000"])
        assert result.exit_code == 1
        error = _json(result, stream="stderr")["error"]
        assert error["code"] == "INVOCATION_REJECTED"
        assert error["message"] == "insufficient funds"

    def test_send_rejected_human(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["send", "n1to", "2000000"])
        assert result.exit_code == 1
        assert "insufficient funds" in result.stderr


@pytest.mark.usefixtures("wallet_home")
class TestStakingCommands:
    def test_delegate_to_gateway(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "delegate", "gateway", "GW1", "100"])
        assert result.exit_code == 0
        data = _json(result)["data"]
        assert data["target_address"] == "GW1"
        assert data["amount"] == {"amount": "100", "denom": "Minor"}

    def test_unknown_node_type_is_usage_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["delegate", "validator", "X", "1"])
        assert result.exit_code == 2

    def test_owns(self, cli_runner: CliRunner) -> None:
        assert cli_runner.invoke(cli, ["-q", "owns", "mixnode"]).stdout.strip() == "yes"
        assert cli_runner.invoke(cli, ["-q", "owns", "gateway"]).stdout.strip() == "no"

    def test_delegations(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["delegations", "mixnode"])
        assert result.exit_code == 0
        assert "MIX1" in result.stdout

    def test_unbond_rejected_by_backend(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "unbond", "mixnode"])
        assert result.exit_code == 1
        error = _json(result, stream="stderr")["error"]
        assert error["message"] == "unknown command unbond_mixnode"
        assert error["detail"]["command"] == "unbond_mixnode"

    def test_bond_variant_mismatch(self, cli_runner: CliRunner, wallet_home: Path) -> None:
        data = wallet_home / "gateway.json"
        data.write_text(
            json.dumps(
                {
                    "node_type": "gateway",
                    "identity_key": "GW1",
                    "sphinx_key": "S",
                    "host": "gw.example.org",
                    "mix_port": 1789,
                    "clients_port": 9000,
                    "location": "Lisbon",
                    "version": "1.1.0",
                }
            )
        )
        result = cli_runner.invoke(cli, ["--json", "bond", "mixnode", "100", "--data", str(data)])
        assert result.exit_code == 1
        assert _json(result, stream="stderr")["error"]["code"] == "INVALID_OPERATION_DATA"

    def test_bond_complete(self, cli_runner: CliRunner, wallet_home: Path) -> None:
        data = wallet_home / "mixnode.json"
        data.write_text(
            json.dumps(
                {
                    "identity_key": "MIX1",
                    "sphinx_key": "S",
                    "host": "1.2.3.4",
                    "mix_port": 1789,
                    "verloc_port": 1790,
                    "http_api_port": 8000,
                    "version": "1.1.0",
                    "profit_margin_percent": 10,
                }
            )
        )
        result = cli_runner.invoke(cli, ["bond", "mixnode", "100", "--data", str(data)])
        assert result.exit_code == 0, result.stderr
        assert "identity: MIX1" in result.stdout
        assert "bond: 100 Minor" in result.stdout
        assert "balance: 1.5 NYM" in result.stdout

    def test_delegate_shows_balance_afterwards(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["delegate", "mixnode", "MIX1", "10"])
        assert result.exit_code == 0
        assert "balance: 1.5 NYM" in result.stdout

    def test_bond_data_must_be_json(self, cli_runner: CliRunner, wallet_home: Path) -> None:
        data = wallet_home / "broken.json"
        data.write_text("{not json")
        result = cli_runner.invoke(cli, ["bond", "mixnode", "100", "--data", str(data)])
        assert result.exit_code == 2


class TestBackendUnavailable:
    def test_missing_backend(
        self, cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "nymwallet.toml").write_text(
            f'[backend]\ncommand = ["{(tmp_path / "no-such-backend").as_posix()}"]\n'
        )
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("NYMWALLET_CONFIG", raising=False)
        monkeypatch.delenv("NYMWALLET_MNEMONIC", raising=False)
        result = cli_runner.invoke(cli, ["--json", "balance"])
        assert result.exit_code == 1
        assert _json(result, stream="stderr")["error"]["code"] == "BACKEND_UNAVAILABLE"


@pytest.mark.usefixtures("wallet_home")
class TestVerbose:
    def test_json_includes_telemetry(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-v", "--json", "balance"])
        assert result.exit_code == 0
        meta = _json(result)["meta"]
        assert meta["command"] == "get_balance"
        assert meta["telemetry"]["name"] == "AccountService.user_balance"
        assert meta["telemetry"]["children"][0]["name"] == "invoke:get_balance"
