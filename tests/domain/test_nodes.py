"""Tests for bond payload models and variant checking."""

from typing import Any

import pytest

from nymwallet.domain.errors import InvalidOperationData
from nymwallet.domain.nodes import GatewayBond, MixNodeBond, coerce_bond_data
from nymwallet.domain.types import NodeType

MIXNODE_FIELDS: dict[str, Any] = {
    "identity_key": "MIX1",
    "sphinx_key": "SPHINX1",
    "host": "1.2.3.4",
    "mix_port": 1789,
    "verloc_port": 1790,
    "http_api_port": 8000,
    "version": "1.1.0",
    "profit_margin_percent": 10,
}

GATEWAY_FIELDS: dict[str, Any] = {
    "identity_key": "GW1",
    "sphinx_key": "SPHINX2",
    "host": "gw.example.org",
    "mix_port": 1789,
    "clients_port": 9000,
    "location": "Lisbon",
    "version": "1.1.0",
}


class TestCoerceBondData:
    def test_mapping_for_mixnode(self) -> None:
        node = coerce_bond_data(NodeType.MIXNODE, MIXNODE_FIELDS)
        assert isinstance(node, MixNodeBond)
        assert node.identity_key == "MIX1"

    def test_mapping_for_gateway(self) -> None:
        node = coerce_bond_data(NodeType.GATEWAY, GATEWAY_FIELDS)
        assert isinstance(node, GatewayBond)
        assert node.location == "Lisbon"

    def test_model_passes_through(self) -> None:
        gateway = GatewayBond(**GATEWAY_FIELDS)
        assert coerce_bond_data(NodeType.GATEWAY, gateway) is gateway

    def test_model_variant_mismatch(self) -> None:
        gateway = GatewayBond(**GATEWAY_FIELDS)
        with pytest.raises(InvalidOperationData, match="for a gateway, not a mixnode"):
            coerce_bond_data(NodeType.MIXNODE, gateway)

    def test_tagged_mapping_mismatch(self) -> None:
        tagged = {**GATEWAY_FIELDS, "node_type": "gateway"}
        with pytest.raises(InvalidOperationData, match="not a mixnode"):
            coerce_bond_data(NodeType.MIXNODE, tagged)

    def test_gateway_fields_under_mixnode_tag_are_invalid(self) -> None:
        with pytest.raises(InvalidOperationData, match="Invalid mixnode bond data"):
            coerce_bond_data(NodeType.MIXNODE, GATEWAY_FIELDS)

    @pytest.mark.parametrize(
        "override",
        [{"mix_port": 0}, {"mix_port": 70000}, {"host": ""}, {"profit_margin_percent": 101}],
    )
    def test_field_constraints(self, override: dict[str, Any]) -> None:
        with pytest.raises(InvalidOperationData):
            coerce_bond_data(NodeType.MIXNODE, {**MIXNODE_FIELDS, **override})

    def test_unsupported_type(self) -> None:
        with pytest.raises(InvalidOperationData, match="Unsupported"):
            coerce_bond_data(NodeType.MIXNODE, ["not", "a", "mapping"])  # type: ignore[arg-type]


class TestWireForm:
    def test_drops_discriminator(self) -> None:
        wire = MixNodeBond(**MIXNODE_FIELDS).to_wire()
        assert "node_type" not in wire
        assert wire == MIXNODE_FIELDS
