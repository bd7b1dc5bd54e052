"""Transfer native currency from the active wallet to a recipient."""

from __future__ import annotations

import logging
from decimal import Decimal
from pathlib import Path
from typing import Callable, Optional

from eth_account.signers.local import LocalAccount
from rich.console import Console
from rich.markup import escape
from web3.exceptions import Web3Exception

from walletctl.errors import ErrorKind, WalletCtlError
from walletctl.outcome import CommandOutcome
from walletctl.wallet.networks import Network
from walletctl.wallet.provider import Web3Provider, ether_to_wei, wei_to_ether
from walletctl.wallet.store import ActiveWallet, load_active_wallet

logger = logging.getLogger("walletctl.commands.transfer")

ACCOUNT_UNAVAILABLE = (
    "Failed to retrieve the account. Please ensure your wallet is correctly set up."
)

AccountResolver = Callable[[ActiveWallet], Optional[LocalAccount]]
ProviderFactory = Callable[[Network], Web3Provider]


def transfer_command(
    network: Network,
    recipient: str,
    amount: Decimal,
    *,
    wallet_file: Path,
    account_resolver: AccountResolver,
    provider_factory: ProviderFactory | None = None,
    console: Console | None = None,
) -> CommandOutcome:
    """Send *amount* ETH from the active wallet in *wallet_file* to *recipient*.

    Never raises: each stop is printed and returned as a failed
    :class:`CommandOutcome`.
    """
    console = console or Console()
    try:
        return _transfer(
            network,
            recipient,
            Decimal(str(amount)),
            wallet_file=wallet_file,
            account_resolver=account_resolver,
            provider_factory=provider_factory or Web3Provider,
            console=console,
        )
    except WalletCtlError as exc:
        console.print(f"[red]Error during transfer:[/red] [yellow]{escape(exc.message)}[/yellow]")
        return CommandOutcome.failed(exc.kind, exc.message)
    except (Web3Exception, OSError, ValueError) as exc:
        logger.debug("Transfer failed", exc_info=True)
        console.print(f"[red]Error during transfer:[/red] [yellow]{escape(str(exc))}[/yellow]")
        return CommandOutcome.failed(ErrorKind.NETWORK, str(exc))
    except Exception:
        logger.debug("Transfer failed with an unexpected error", exc_info=True)
        console.print("[red]An unknown error occurred.[/red]")
        return CommandOutcome.failed(ErrorKind.UNKNOWN, "An unknown error occurred.")


def _transfer(
    network: Network,
    recipient: str,
    amount: Decimal,
    *,
    wallet_file: Path,
    account_resolver: AccountResolver,
    provider_factory: ProviderFactory,
    console: Console,
) -> CommandOutcome:
    loaded = load_active_wallet(wallet_file)
    if not loaded.ok:
        console.print(f"[red]{loaded.reason}[/red]")
        return CommandOutcome.failed(ErrorKind.PRECONDITION, loaded.reason)
    wallet = loaded.value

    provider = provider_factory(network)
    balance = wei_to_ether(provider.get_balance(wallet.address))

    console.print(f"Wallet Address: [green]{wallet.address}[/green]")
    console.print(f"Recipient Address: [green]{recipient}[/green]")
    console.print(f"Amount to Transfer: [green]{amount} {network.native_symbol}[/green]")
    console.print(f"Current Balance: [green]{balance} {network.native_symbol}[/green]")

    if balance < amount:
        message = f"Insufficient balance to transfer {amount} {network.native_symbol}."
        console.print(f"[red]{message}[/red]")
        return CommandOutcome.failed(ErrorKind.INSUFFICIENT_FUNDS, message, balance=balance)

    account = account_resolver(wallet)
    if account is None:
        console.print(f"[red]{ACCOUNT_UNAVAILABLE}[/red]")
        return CommandOutcome.failed(ErrorKind.PRECONDITION, ACCOUNT_UNAVAILABLE)

    try:
        value_wei = ether_to_wei(amount)
    except ValueError as exc:
        console.print(f"[red]Error during transfer:[/red] [yellow]{escape(str(exc))}[/yellow]")
        return CommandOutcome.failed(ErrorKind.VALIDATION, str(exc))

    tx_hash = provider.send_transaction(account, recipient, value_wei)
    console.print(f"Transaction initiated. TxHash: [green]{tx_hash}[/green]")

    with console.status("Waiting for confirmation..."):
        receipt = provider.wait_for_receipt(tx_hash)

    if receipt["status"] != "success":
        console.print("[red]Transaction failed.[/red]")
        return CommandOutcome.failed(
            ErrorKind.ON_CHAIN_FAILURE, "Transaction failed.", tx_hash=tx_hash, receipt=receipt
        )

    explorer_url = network.tx_url(tx_hash)
    console.print("[green]Transaction confirmed successfully![/green]")
    console.print(f"Block Number: [green]{receipt['blockNumber']}[/green]")
    console.print(f"Gas Used: [green]{receipt['gasUsed']}[/green]")
    console.print(f"View on Explorer: [dim]{explorer_url}[/dim]")
    logger.info(f"Transfer {tx_hash} confirmed in block {receipt['blockNumber']}")
    return CommandOutcome.succeeded(
        "Transaction confirmed successfully!",
        tx_hash=tx_hash,
        block_number=receipt["blockNumber"],
        gas_used=receipt["gasUsed"],
        explorer_url=explorer_url,
    )
