"""Bonding payloads, a tagged union keyed on NodeType.

The ``node_type`` discriminator lets pydantic pick the right model from
a plain mapping and lets the staking service refuse a payload whose
variant disagrees with the requested node type.  It is dropped from the
wire form: the backend receives ``{"mixnode": {...}}`` or
``{"gateway": {...}}``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from nymwallet.domain.errors import InvalidOperationData
from nymwallet.domain.types import NodeType


class _NodeBond(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    identity_key: str = Field(min_length=1)
    sphinx_key: str = Field(min_length=1)
    host: str = Field(min_length=1)
    mix_port: int = Field(gt=0, lt=65536)
    version: str

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude={"node_type"})


class MixNodeBond(_NodeBond):
    """Registration details for a mixnode."""

    node_type: Literal["mixnode"] = "mixnode"
    verloc_port: int = Field(gt=0, lt=65536)
    http_api_port: int = Field(gt=0, lt=65536)
    profit_margin_percent: int = Field(ge=0, le=100)


class GatewayBond(_NodeBond):
    """Registration details for a gateway."""

    node_type: Literal["gateway"] = "gateway"
    clients_port: int = Field(gt=0, lt=65536)
    location: str


BondData = Annotated[MixNodeBond | GatewayBond, Field(discriminator="node_type")]

_BOND_DATA: TypeAdapter[MixNodeBond | GatewayBond] = TypeAdapter(BondData)


def coerce_bond_data(
    node_type: NodeType,
    data: MixNodeBond | GatewayBond | Mapping[str, Any],
) -> MixNodeBond | GatewayBond:
    """Return *data* as the bond model for *node_type*.

    Mappings without a ``node_type`` key are validated against the model
    for *node_type*; mappings with one go through the tagged union.

    Raises:
        InvalidOperationData: variant mismatch or invalid fields.
    """
    if isinstance(data, Mapping):
        payload = dict(data)
        payload.setdefault("node_type", node_type.value)
        try:
            data = _BOND_DATA.validate_python(payload)
        except ValidationError as exc:
            raise InvalidOperationData(
                f"Invalid {node_type.value} bond data: {exc.error_count()} error(s)"
            ) from exc

    if not isinstance(data, (MixNodeBond, GatewayBond)):
        raise InvalidOperationData(f"Unsupported bond data type: {type(data).__name__}")

    if data.node_type != node_type:
        raise InvalidOperationData(
            f"Bond data is for a {data.node_type}, not a {node_type.value}"
        )
    return data
