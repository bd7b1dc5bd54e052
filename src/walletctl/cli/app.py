"""CLI for walletctl - transfer ETH and verify contracts from the terminal."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from walletctl.config import WalletCtlConfig, load_config

app = typer.Typer(
    name="walletctl",
    help="Transfer ETH from your saved wallet and verify contracts on Etherscan.",
    no_args_is_help=True,
)
console = Console()

_config: WalletCtlConfig | None = None


def _version_callback(value: bool):
    if value:
        from walletctl import __version__
        console.print(f"walletctl {__version__}")
        raise typer.Exit()


def _setup_logging(verbose: bool) -> None:
    root = logging.getLogger("walletctl")
    root.handlers.clear()
    root.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _load_config(path: Path | None = None) -> WalletCtlConfig:
    try:
        return load_config(path)
    except (yaml.YAMLError, ValueError, OSError) as exc:
        console.print(f"[red]Invalid configuration:[/red] [yellow]{escape(str(exc))}[/yellow]")
        raise typer.Exit(1)


def _get_config() -> WalletCtlConfig:
    global _config
    if _config is None:
        _config = _load_config()
    return _config


@app.callback()
def main(
    config: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config.yaml (default: ~/.walletctl/config.yaml)",
        envvar="WALLETCTL_CONFIG",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Transfer ETH from your saved wallet and verify contracts on Etherscan."""
    global _config
    _setup_logging(verbose)
    _config = _load_config(config)


def _parse_amount(value: str) -> Decimal:
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise typer.BadParameter(f"'{value}' is not a number.", param_hint="AMOUNT")
    if not amount.is_finite() or amount <= 0:
        raise typer.BadParameter("Amount must be greater than zero.", param_hint="AMOUNT")
    return amount


# ------------------------------------------------------------------
# transfer
# ------------------------------------------------------------------


@app.command()
def transfer(
    recipient: str = typer.Argument(help="Recipient address (0x...)"),
    amount: str = typer.Argument(help="Amount of ETH to send (e.g. 0.01)"),
    testnet: bool = typer.Option(False, "--testnet/--mainnet", help="Use Sepolia instead of mainnet"),
    wallet_file: Path = typer.Option(None, "--wallet-file", "-w", help="Wallet store JSON file"),
    password: str = typer.Option(
        None, "--password", "-p", help="Wallet password", envvar="WALLETCTL_PASSWORD"
    ),
):
    """Send ETH from the active wallet to RECIPIENT."""
    from walletctl.commands.transfer import transfer_command
    from walletctl.wallet.keystore import resolve_account
    from walletctl.wallet.networks import resolve_network

    config = _get_config()
    value = _parse_amount(amount)
    network = resolve_network(testnet, config)

    def _resolve(wallet):
        secret = password
        if secret is None and wallet.record.encrypted_private_key:
            secret = console.input(f"[bold]Password for '{wallet.name}': [/bold]", password=True)
        return resolve_account(wallet, secret)

    outcome = transfer_command(
        network,
        recipient,
        value,
        wallet_file=wallet_file or config.wallet_file,
        account_resolver=_resolve,
        console=console,
    )
    if not outcome.ok:
        raise typer.Exit(1)


# ------------------------------------------------------------------
# verify
# ------------------------------------------------------------------


@app.command()
def verify(
    artifact: Path = typer.Argument(help="JSON Standard Input artifact (compiler output)"),
    address: str = typer.Argument(help="Deployed contract address"),
    name: str = typer.Argument(help="Contract name"),
    constructor_args: Optional[list[str]] = typer.Argument(
        None, help="Constructor arguments, in order"
    ),
    testnet: bool = typer.Option(False, "--testnet/--mainnet", help="Use Sepolia instead of mainnet"),
):
    """Verify the contract deployed at ADDRESS on Etherscan."""
    from walletctl.commands.verify import verify_command
    from walletctl.explorer.client import ExplorerClient
    from walletctl.wallet.networks import resolve_network

    config = _get_config()
    network = resolve_network(testnet, config)

    with ExplorerClient(network.api_base_url, timeout=config.explorer.timeout) as explorer:
        outcome = verify_command(
            artifact,
            address,
            name,
            network,
            constructor_args or [],
            explorer=explorer,
            console=console,
            max_retries=config.explorer.max_retries,
            retry_delay=config.explorer.retry_delay,
        )
    if not outcome.ok:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
