"""Wallet store, signing account resolution, and the web3 chain client."""
