"""Config file discovery.

Lookup order: ``NYMWALLET_CONFIG`` env var, then nymwallet.toml walking
up from the working directory (like git finds .git/), then the per-user
file under ``$XDG_CONFIG_HOME/nymwallet/``.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "nymwallet.toml"
CONFIG_ENV_VAR = "NYMWALLET_CONFIG"


def user_config_path() -> Path:
    """Per-user config location (``~/.config/nymwallet/nymwallet.toml``)."""
    base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base) / "nymwallet" / CONFIG_FILENAME


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file to use, or None when there is none.

    An explicit ``NYMWALLET_CONFIG`` that does not exist yields None
    rather than falling through to discovery.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        explicit = Path(env_path).expanduser()
        return explicit if explicit.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate

    fallback = user_config_path()
    return fallback if fallback.is_file() else None
