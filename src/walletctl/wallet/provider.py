"""Web3 chain client scoped to a single network."""

from __future__ import annotations

import logging
from decimal import Decimal, localcontext
from typing import Any

from eth_account.signers.local import LocalAccount
from web3 import Web3

from walletctl.wallet.networks import Network

logger = logging.getLogger("walletctl.wallet.provider")


def wei_to_ether(value_wei: int) -> Decimal:
    """Convert the smallest integer unit to ETH (divide by 10**18)."""
    return Decimal(str(Web3.from_wei(int(value_wei), "ether")))


def ether_to_wei(amount: Decimal | str | int | float) -> int:
    """Convert ETH to wei (multiply by 10**18).

    Raises ``ValueError`` if the amount is not a whole number of wei.
    """
    value = Decimal(str(amount))
    with localcontext() as ctx:
        ctx.prec = 999
        fractional = (value * 10**18) % 1
    if fractional:
        raise ValueError(f"{amount} ETH is not a whole number of wei")
    return Web3.to_wei(value, "ether")


class Web3Provider:
    """Balance lookups, transfers, and receipt waits on one network."""

    def __init__(self, network: Network, w3: Web3 | None = None) -> None:
        self.network = network
        self.w3 = w3 if w3 is not None else Web3(Web3.HTTPProvider(network.rpc_url))

    @property
    def chain_id(self) -> int:
        return self.network.chain_id

    def get_balance(self, address: str) -> int:
        """Return the balance of *address* in wei."""
        checksum = Web3.to_checksum_address(address)
        balance = self.w3.eth.get_balance(checksum)
        logger.debug(f"Balance of {checksum} on {self.network.name}: {balance} wei")
        return int(balance)

    def send_transaction(self, account: LocalAccount, to_address: str, value_wei: int) -> str:
        """Build, sign, and send a native-token transfer.

        Uses EIP-1559 fee parameters with a legacy gas price fallback.

        Returns the transaction hash as a ``0x``-prefixed hex string.
        """
        w3 = self.w3
        tx: dict[str, Any] = {
            "from": account.address,
            "to": Web3.to_checksum_address(to_address),
            "value": int(value_wei),
            "nonce": w3.eth.get_transaction_count(account.address),
            "chainId": self.chain_id,
        }

        latest = w3.eth.get_block("latest")
        base_fee = latest.get("baseFeePerGas")
        if base_fee is not None:
            max_priority = Web3.to_wei(1.5, "gwei")
            tx["maxFeePerGas"] = base_fee * 2 + max_priority
            tx["maxPriorityFeePerGas"] = max_priority
        else:
            tx["gasPrice"] = w3.eth.gas_price
        tx["gas"] = w3.eth.estimate_gas(tx)

        signed = account.sign_transaction(tx)
        tx_hash = w3.eth.send_raw_transaction(signed.raw_transaction)
        hex_hash = Web3.to_hex(tx_hash)
        logger.info(f"Sent {value_wei} wei to {tx['to']} on {self.network.name}: {hex_hash}")
        return hex_hash

    def wait_for_receipt(self, tx_hash: str, timeout: float = 120) -> dict[str, Any]:
        """Block until the transaction is mined and return its receipt.

        The ``status`` field is normalised to ``"success"`` or ``"reverted"``.
        """
        receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)
        return {
            "status": "success" if receipt["status"] == 1 else "reverted",
            "blockNumber": receipt["blockNumber"],
            "gasUsed": receipt["gasUsed"],
        }
