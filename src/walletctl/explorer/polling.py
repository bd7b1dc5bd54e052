"""Bounded polling for the result of a verification job."""

from __future__ import annotations

import logging
import time
from typing import Callable

from rich.console import Console

from walletctl.errors import NetworkError
from walletctl.explorer.client import ExplorerClient

logger = logging.getLogger("walletctl.explorer.polling")


def poll_verification_result(
    explorer: ExplorerClient,
    job_id: str,
    max_retries: int,
    retry_delay: float,
    *,
    sleep: Callable[[float], None] = time.sleep,
    console: Console | None = None,
) -> bool:
    """Poll the job status until it reports a match verdict.

    Makes at most *max_retries* requests, sleeping *retry_delay* seconds
    after each one that yields no verdict. Returns the first defined
    ``data.match``. Exhausting the retries also returns ``False``, so a
    timeout looks the same as a "no match" to the caller.
    """
    console = console or Console()
    for attempt in range(max_retries):
        try:
            resp = explorer.get_verification_result(job_id)
        except NetworkError as exc:
            logger.debug(f"Attempt {attempt + 1}/{max_retries} for job {job_id}: {exc}")
            resp = None

        if resp is None or not resp.is_success:
            console.print("[yellow]Error fetching verification status, retrying...[/yellow]")
        else:
            data = resp.json().get("data")
            if not isinstance(data, dict):
                raise NetworkError(f"Unexpected verification status for job {job_id}: {data!r}")
            # An explicit null counts as a verdict (no match); only a missing key is pending.
            if "match" in data:
                match = data["match"]
                logger.debug(f"Job {job_id} resolved after {attempt + 1} attempt(s): match={match}")
                return bool(match)
            logger.debug(f"Job {job_id} still pending (attempt {attempt + 1}/{max_retries})")

        sleep(retry_delay)

    console.print(
        "[red]Maximum retries reached, verification status could not be confirmed.[/red]"
    )
    return False
