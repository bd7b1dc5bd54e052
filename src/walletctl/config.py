"""Configuration system for walletctl.

Loads settings from ``~/.walletctl/config.yaml`` (or an explicit path),
supports environment variable expansion, and applies a handful of
``WALLETCTL_*`` environment overrides on top.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator


# ---------------------------------------------------------------------------
# Environment-variable expansion helper
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)\}")


def _expand_env_vars(value: str) -> str:
    """Replace ``${VAR_NAME}`` placeholders with their environment values.

    If the variable is not set the placeholder is left as-is.
    """

    def _replace(match: re.Match) -> str:
        var_name = match.group(1)
        return os.environ.get(var_name, match.group(0))

    return _ENV_VAR_RE.sub(_replace, value)


def _expand_env_recursive(obj: object) -> object:
    """Walk an arbitrary nested structure and expand env vars in strings."""
    if isinstance(obj, str):
        return _expand_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _expand_env_recursive(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_recursive(item) for item in obj]
    return obj


# ---------------------------------------------------------------------------
# Pydantic v2 models
# ---------------------------------------------------------------------------


class NetworkOverride(BaseModel):
    """Per-network overrides of the built-in endpoints."""

    rpc_url: Optional[str] = None
    api_base_url: Optional[str] = None
    explorer_base_url: Optional[str] = None


class ExplorerConfig(BaseModel):
    """Explorer verification API settings."""

    timeout: float = 30.0
    max_retries: int = 10
    retry_delay: float = 4.0  # seconds between status polls


class WalletCtlConfig(BaseModel):
    """Root configuration object."""

    wallet_file: Path = Field(default_factory=lambda: get_home_dir() / "wallet.json")
    testnet: NetworkOverride = Field(default_factory=NetworkOverride)
    mainnet: NetworkOverride = Field(default_factory=NetworkOverride)
    explorer: ExplorerConfig = Field(default_factory=ExplorerConfig)

    @field_validator("wallet_file")
    @classmethod
    def _expand_user(cls, value: Path) -> Path:
        return value.expanduser()


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------


def get_home_dir() -> Path:
    """Return the ``~/.walletctl/`` directory (no auto-create)."""
    return Path.home() / ".walletctl"


def default_config_path() -> Path:
    return get_home_dir() / "config.yaml"


def _apply_env_overrides(data: dict) -> dict:
    wallet_file = os.environ.get("WALLETCTL_WALLET_FILE")
    if wallet_file:
        data["wallet_file"] = wallet_file
    for network in ("testnet", "mainnet"):
        rpc_url = os.environ.get(f"WALLETCTL_{network.upper()}_RPC_URL")
        if rpc_url:
            section = dict(data.get(network) or {})
            section["rpc_url"] = rpc_url
            data[network] = section
    return data


def load_config(path: Path | None = None) -> WalletCtlConfig:
    """Load and validate the configuration.

    A missing file is not an error: defaults are used. Unparseable YAML
    raises ``yaml.YAMLError`` and invalid settings raise ``ValueError``
    (pydantic's ``ValidationError`` included). Environment variable
    placeholders (``${VAR}``) are expanded before validation, then
    ``WALLETCTL_*`` overrides are applied.
    """
    if path is None:
        path = default_config_path()
    raw_data: dict = {}
    if path.exists():
        raw_data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        if not isinstance(raw_data, dict):
            raise ValueError(f"{path} must contain a mapping at the top level")
    expanded = _expand_env_recursive(raw_data)
    return WalletCtlConfig.model_validate(_apply_env_overrides(dict(expanded)))
