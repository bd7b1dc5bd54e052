"""Resolve a signing account for the active wallet using eth-account."""

from __future__ import annotations

import json
import logging
from typing import Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount

from walletctl.wallet.store import ActiveWallet

logger = logging.getLogger("walletctl.wallet.keystore")


def decrypt_key(keystore: dict | str, password: str) -> bytes:
    """Decrypt a v3 keystore (as a dict or JSON string).

    Raises
    ------
    ValueError
        If the keystore is malformed or the password is incorrect.
    """
    if isinstance(keystore, str):
        try:
            keystore = json.loads(keystore)
        except ValueError as exc:
            raise ValueError(f"Keystore is not valid JSON: {exc}") from exc
    try:
        return Account.decrypt(keystore, password)
    except Exception as exc:
        raise ValueError(f"Failed to decrypt keystore: {exc}") from exc


def resolve_account(wallet: ActiveWallet, password: str | None) -> Optional[LocalAccount]:
    """Return the signing account for *wallet*, or ``None`` if unavailable.

    ``None`` covers a record with no encrypted key, a missing password, a
    wrong password, and a key that does not belong to the stored address.
    """
    encrypted = wallet.record.encrypted_private_key
    if not encrypted:
        logger.debug(f"Wallet '{wallet.name}' has no encrypted key")
        return None
    if password is None:
        return None

    try:
        key = decrypt_key(encrypted, password)
    except ValueError as exc:
        logger.warning(str(exc))
        return None

    account = Account.from_key(key)
    if account.address.lower() != wallet.address.lower():
        logger.warning(
            f"Decrypted key for '{wallet.name}' belongs to {account.address}, "
            f"not {wallet.address}"
        )
        return None
    return account
