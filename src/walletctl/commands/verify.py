"""Submit a JSON Standard Input artifact for contract verification."""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, Callable, Sequence

from rich.console import Console

from walletctl.errors import ErrorKind
from walletctl.explorer.client import ExplorerClient
from walletctl.explorer.polling import poll_verification_result
from walletctl.outcome import CommandOutcome, LoadResult, VerificationOutcome
from walletctl.wallet.networks import Network

logger = logging.getLogger("walletctl.commands.verify")

CHECK_ARTIFACT = "Please check your JSON Standard Input file and try again."
VERIFICATION_ERROR = "Error during contract verification."
NO_MATCH = "JSON Standard Input verification didn't match."

MAX_RETRIES = 10
RETRY_DELAY = 4.0


def read_artifact(path: Path) -> LoadResult[Any]:
    """Read and JSON-parse an artifact file without checking its fields."""
    try:
        return LoadResult.success(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, ValueError) as exc:
        logger.debug(f"Could not load artifact {path}: {exc}")
        return LoadResult.failure(CHECK_ARTIFACT)


def validate_artifact(parsed: Any) -> LoadResult[dict[str, Any]]:
    """Check the artifact carries ``solcLongVersion`` and an ``input`` object."""
    if not isinstance(parsed, dict):
        return LoadResult.failure(CHECK_ARTIFACT)
    if "solcLongVersion" not in parsed or "input" not in parsed:
        return LoadResult.failure(CHECK_ARTIFACT)
    if not isinstance(parsed["input"], dict):
        return LoadResult.failure(CHECK_ARTIFACT)
    return LoadResult.success(parsed)


def load_artifact(path: Path) -> LoadResult[dict[str, Any]]:
    """Read and validate a JSON Standard Input artifact."""
    read = read_artifact(path)
    if not read.ok:
        return LoadResult.failure(read.reason)
    return validate_artifact(read.value)


def build_request_body(
    artifact: dict[str, Any],
    address: str,
    name: str,
    constructor_args: Sequence[Any] = (),
) -> dict[str, Any]:
    source_input = artifact["input"]
    request: dict[str, Any] = {
        "address": address.lower(),
        "name": name,
        "version": artifact["solcLongVersion"],
        "language": source_input.get("language"),
        "sources": source_input.get("sources"),
        "settings": source_input.get("settings"),
    }
    if constructor_args:
        request["constructorArguments"] = list(constructor_args)
    return {
        "module": "contractVerifier",
        "action": "verify",
        "getDelayed": True,
        "params": {"request": request},
    }


def verify_command(
    artifact_path: Path,
    address: str,
    name: str,
    network: Network,
    constructor_args: Sequence[Any] = (),
    *,
    explorer: ExplorerClient,
    console: Console | None = None,
    sleep: Callable[[float], None] = time.sleep,
    max_retries: int = MAX_RETRIES,
    retry_delay: float = RETRY_DELAY,
) -> CommandOutcome:
    """Verify the contract at *address* against the artifact at *artifact_path*.

    Never raises; the returned outcome's ``verification`` field says whether
    the contract was already verified, matched, or did not match.
    """
    console = console or Console()
    console.print(f"[blue]Initializing verification on {network.name}...[/blue]")

    try:
        existing = explorer.get_verification(address)
    except Exception as exc:
        logger.debug(f"Verification lookup failed: {exc}", exc_info=True)
        console.print(f"[red]{VERIFICATION_ERROR}[/red]")
        return CommandOutcome.failed(ErrorKind.NETWORK, VERIFICATION_ERROR)

    if existing is not None:
        console.print(f"[green]Contract {address} is already verified.[/green]")
        outcome = CommandOutcome.succeeded("Contract is already verified.")
        outcome.verification = VerificationOutcome.ALREADY_VERIFIED
        return outcome

    console.print(f"[blue]Reading JSON Standard Input from {artifact_path}...[/blue]")
    read = read_artifact(Path(artifact_path))
    if not read.ok:
        console.print(f"[red]{read.reason}[/red]")
        return CommandOutcome.failed(ErrorKind.VALIDATION, read.reason)

    console.print(f"Verifying contract [green]{name}[/green] deployed at [green]{address}[/green]..")

    loaded = validate_artifact(read.value)
    if not loaded.ok:
        console.print(f"[red]{loaded.reason}[/red]")
        return CommandOutcome.failed(ErrorKind.VALIDATION, loaded.reason)

    try:
        body = build_request_body(loaded.value, address, name, constructor_args)
        if constructor_args:
            joined = ", ".join(str(arg) for arg in constructor_args)
            console.print(f"[blue]Using constructor arguments: {joined}[/blue]")

        job_id = explorer.submit_verification(body)
        console.print("[green]Contract verification request sent![/green]")

        with console.status("Waiting for verification confirmation..."):
            match = poll_verification_result(
                explorer, job_id, max_retries, retry_delay, sleep=sleep, console=console
            )
    except Exception as exc:
        logger.debug(f"Verification failed: {exc}", exc_info=True)
        console.print(f"[red]{VERIFICATION_ERROR}[/red]")
        return CommandOutcome.failed(ErrorKind.NETWORK, VERIFICATION_ERROR)

    if not match:
        console.print(f"[red]{NO_MATCH}[/red]")
        outcome = CommandOutcome.failed(ErrorKind.VALIDATION, NO_MATCH, job_id=job_id)
        outcome.verification = VerificationOutcome.NO_MATCH
        return outcome

    explorer_url = network.address_url(address)
    console.print("[green]Contract verified successfully![/green]")
    console.print(f"View on Explorer: [dim]{explorer_url}[/dim]")
    outcome = CommandOutcome.succeeded(
        "Contract verified successfully!", job_id=job_id, explorer_url=explorer_url
    )
    outcome.verification = VerificationOutcome.MATCH
    return outcome
