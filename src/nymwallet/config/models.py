"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, nymwallet.toml only contains
overrides.  Usually only ``[backend] command`` needs setting.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class BackendConfig(BaseModel):
    """[backend] section — how to start the backend process.

    ``env`` entries are added on top of the client's own environment.
    ``shutdown_grace_s`` bounds how long closing the wallet waits for
    the backend to exit; it is not a per-call timeout.
    """

    model_config = {"frozen": True}

    command: list[str] = Field(default_factory=lambda: ["nym-wallet-backend", "--stdio"])
    cwd: Path | None = None
    env: dict[str, str] = Field(default_factory=dict)
    shutdown_grace_s: float = Field(default=5.0, gt=0)
