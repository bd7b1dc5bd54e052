"""Wallet store file: the saved wallets and which one is active."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from walletctl.outcome import LoadResult

logger = logging.getLogger("walletctl.wallet.store")

NO_WALLET_FILE = "No saved wallet found. Please create a wallet first."
INVALID_STORE = "No valid wallet found. Please create or import a wallet first."
MISSING_ADDRESS = "No valid address found in the saved wallet."


class WalletRecord(BaseModel):
    """A single saved wallet. Unknown keys are kept as-is."""

    model_config = ConfigDict(extra="allow")

    address: str = ""
    encrypted_private_key: Optional[Any] = Field(default=None, alias="encryptedPrivateKey")


class WalletStore(BaseModel):
    model_config = ConfigDict(extra="allow")

    current_wallet: str = Field(alias="currentWallet")
    wallets: dict[str, WalletRecord]


@dataclass(frozen=True)
class ActiveWallet:
    """The wallet selected by the store's ``currentWallet`` key."""

    name: str
    record: WalletRecord

    @property
    def address(self) -> str:
        return self.record.address


def load_wallet_store(path: Path) -> LoadResult[WalletStore]:
    """Read and validate the wallet store file.

    Never raises: every problem is returned as a failed result whose
    ``reason`` is the message to show the user.
    """
    if not path.exists():
        return LoadResult.failure(NO_WALLET_FILE)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.debug(f"Could not read wallet store {path}: {exc}")
        return LoadResult.failure(INVALID_STORE)

    if not isinstance(data, dict) or not data.get("currentWallet") or not data.get("wallets"):
        return LoadResult.failure(INVALID_STORE)
    if not isinstance(data["wallets"], dict):
        return LoadResult.failure(INVALID_STORE)

    wallets: dict[str, WalletRecord] = {}
    for name, raw in data["wallets"].items():
        if not isinstance(raw, dict):
            raw = {}
        wallets[name] = WalletRecord.model_validate(
            {**raw, "address": str(raw.get("address") or "")}
        )
    return LoadResult.success(
        WalletStore(currentWallet=data["currentWallet"], wallets=wallets)
    )


def load_active_wallet(path: Path) -> LoadResult[ActiveWallet]:
    """Load the store and resolve the active wallet with a usable address."""
    result = load_wallet_store(path)
    if not result.ok:
        return LoadResult.failure(result.reason)

    store = result.value
    record = store.wallets.get(store.current_wallet)
    if record is None or not record.address:
        return LoadResult.failure(MISSING_ADDRESS)
    return LoadResult.success(ActiveWallet(name=store.current_wallet, record=record))
