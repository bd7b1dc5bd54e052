"""Tests for the wallet store, signing account resolution, and unit conversion."""

import json
import tempfile
import unittest
from decimal import Decimal
from pathlib import Path

from eth_account import Account
from helpers import write_json

from walletctl.wallet.keystore import decrypt_key, resolve_account
from walletctl.wallet.provider import ether_to_wei, wei_to_ether
from walletctl.wallet.store import (
    INVALID_STORE,
    MISSING_ADDRESS,
    NO_WALLET_FILE,
    ActiveWallet,
    WalletRecord,
    load_active_wallet,
    load_wallet_store,
)


class WalletStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.path = Path(self._tmp.name) / "wallet.json"

    def test_missing_file(self) -> None:
        result = load_wallet_store(self.path)
        self.assertFalse(result.ok)
        self.assertEqual(result.reason, NO_WALLET_FILE)

    def test_invalid_shapes(self) -> None:
        for data in ([], {"currentWallet": "a"}, {"currentWallet": "a", "wallets": ["a"]}):
            with self.subTest(data=data):
                write_json(self.path, data)
                result = load_wallet_store(self.path)
                self.assertFalse(result.ok)
                self.assertEqual(result.reason, INVALID_STORE)

    def test_extra_fields_are_kept(self) -> None:
        write_json(
            self.path,
            {
                "currentWallet": "main",
                "wallets": {"main": {"address": "0xabc", "label": "hot"}},
            },
        )
        result = load_wallet_store(self.path)
        self.assertTrue(result.ok)
        record = result.value.wallets["main"]
        self.assertEqual(record.address, "0xabc")
        self.assertEqual(record.model_extra["label"], "hot")

    def test_active_wallet(self) -> None:
        write_json(
            self.path,
            {
                "currentWallet": "b",
                "wallets": {"a": {"address": "0x1"}, "b": {"address": "0x2"}},
            },
        )
        result = load_active_wallet(self.path)
        self.assertTrue(result.ok)
        self.assertEqual(result.value.name, "b")
        self.assertEqual(result.value.address, "0x2")

    def test_current_wallet_not_in_store(self) -> None:
        write_json(self.path, {"currentWallet": "zzz", "wallets": {"a": {"address": "0x1"}}})
        result = load_active_wallet(self.path)
        self.assertFalse(result.ok)
        self.assertEqual(result.reason, MISSING_ADDRESS)


class KeystoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self.account = Account.create()
        self.keystore = Account.encrypt(self.account.key, "hunter2", kdf="pbkdf2", iterations=2)

    def _wallet(self, **fields) -> ActiveWallet:
        record = WalletRecord.model_validate({"address": self.account.address, **fields})
        return ActiveWallet(name="main", record=record)

    def test_decrypt_key_accepts_json_string(self) -> None:
        key = decrypt_key(json.dumps(self.keystore), "hunter2")
        self.assertEqual(key, self.account.key)

    def test_decrypt_key_wrong_password(self) -> None:
        with self.assertRaises(ValueError):
            decrypt_key(self.keystore, "wrong")

    def test_resolve_account(self) -> None:
        wallet = self._wallet(encryptedPrivateKey=self.keystore)
        account = resolve_account(wallet, "hunter2")
        self.assertIsNotNone(account)
        self.assertEqual(account.address, self.account.address)

    def test_unresolvable_accounts(self) -> None:
        other = Account.create()
        cases = {
            "no key": (self._wallet(), "hunter2"),
            "no password": (self._wallet(encryptedPrivateKey=self.keystore), None),
            "wrong password": (self._wallet(encryptedPrivateKey=self.keystore), "nope"),
            "address mismatch": (
                ActiveWallet(
                    name="main",
                    record=WalletRecord.model_validate(
                        {"address": other.address, "encryptedPrivateKey": self.keystore}
                    ),
                ),
                "hunter2",
            ),
        }
        for label, (wallet, password) in cases.items():
            with self.subTest(label):
                self.assertIsNone(resolve_account(wallet, password))


class UnitConversionTests(unittest.TestCase):
    def test_wei_to_ether(self) -> None:
        self.assertEqual(wei_to_ether(2_500_000_000_000_000_000), Decimal("2.5"))
        self.assertEqual(wei_to_ether(0), Decimal("0"))
        self.assertEqual(wei_to_ether(1), Decimal("0.000000000000000001"))

    def test_ether_to_wei(self) -> None:
        self.assertEqual(ether_to_wei(Decimal("2.5")), 2_500_000_000_000_000_000)
        self.assertEqual(ether_to_wei("2"), 2_000_000_000_000_000_000)

    def test_ether_to_wei_rejects_fractions_of_a_wei(self) -> None:
        for amount in ("1.0000000000000000005", "0.0000000000000000001", Decimal("1E-19")):
            with self.subTest(amount=amount):
                with self.assertRaises(ValueError):
                    ether_to_wei(amount)

    def test_ether_to_wei_large_amounts(self) -> None:
        self.assertEqual(
            ether_to_wei("123456789012345678901234.000000000000000001"),
            123456789012345678901234 * 10**18 + 1,
        )

    def test_round_trip_is_exact(self) -> None:
        for wei in (2_500_000_000_000_000_000, 10**18, 123_456_789_000_000_000_000, 1):
            with self.subTest(wei=wei):
                self.assertEqual(ether_to_wei(wei_to_ether(wei)), wei)


if __name__ == "__main__":
    unittest.main()
