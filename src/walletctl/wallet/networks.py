"""Network definitions for the two supported Ethereum networks."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from walletctl.config import WalletCtlConfig


@dataclass(frozen=True)
class Network:
    """Everything a command needs to know about the chosen network."""

    name: str
    chain_id: int
    rpc_url: str
    api_base_url: str
    explorer_base_url: str
    native_symbol: str = "ETH"

    @property
    def is_testnet(self) -> bool:
        return self.name == "testnet"

    def tx_url(self, tx_hash: str) -> str:
        return f"{self.explorer_base_url}/tx/{tx_hash}"

    def address_url(self, address: str) -> str:
        return f"{self.explorer_base_url}/address/{address}"


NETWORKS: dict[str, Network] = {
    "testnet": Network(
        name="testnet",
        chain_id=11155111,
        rpc_url="https://ethereum-sepolia-rpc.publicnode.com",
        api_base_url="https://sepolia.etherscan.io",
        explorer_base_url="https://sepolia.etherscan.io",
    ),
    "mainnet": Network(
        name="mainnet",
        chain_id=1,
        rpc_url="https://eth.llamarpc.com",
        api_base_url="https://etherscan.io",
        explorer_base_url="https://etherscan.io",
    ),
}


def get_network(name: str) -> Network:
    """Get a network by name. Raises ``KeyError`` if not found."""
    if name not in NETWORKS:
        raise KeyError(f"Unknown network '{name}'. Available: {list(NETWORKS)}")
    return NETWORKS[name]


def resolve_network(testnet: bool, config: WalletCtlConfig | None = None) -> Network:
    """Pick testnet or mainnet and apply any configured endpoint overrides."""
    network = get_network("testnet" if testnet else "mainnet")
    if config is None:
        return network
    override = config.testnet if testnet else config.mainnet
    changes = {k: v for k, v in override.model_dump().items() if v}
    if not changes:
        return network
    return replace(network, **changes)
