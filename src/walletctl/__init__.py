"""walletctl - transfer ETH from a stored wallet and verify contracts on the explorer."""

__version__ = "0.1.0"
