"""Shared fakes for the walletctl tests."""

from __future__ import annotations

import io
import json
from pathlib import Path
from typing import Any, Callable

import httpx
from rich.console import Console

from walletctl.explorer.client import ExplorerClient


def make_console() -> tuple[Console, io.StringIO]:
    buf = io.StringIO()
    return Console(file=buf, width=200, color_system=None), buf


def write_json(path: Path, data: Any) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class FakeProvider:
    """Stands in for :class:`Web3Provider` and records what it was asked to do."""

    def __init__(self, network, balance_wei: int, receipt_status: str = "success") -> None:
        self.network = network
        self.balance_wei = balance_wei
        self.receipt_status = receipt_status
        self.balance_queries: list[str] = []
        self.sent: list[dict] = []
        self.receipt_waits: list[str] = []

    def get_balance(self, address: str) -> int:
        self.balance_queries.append(address)
        return self.balance_wei

    def send_transaction(self, account, to_address: str, value_wei: int) -> str:
        self.sent.append({"account": account, "to": to_address, "value": value_wei})
        return "0xfeed"

    def wait_for_receipt(self, tx_hash: str) -> dict:
        self.receipt_waits.append(tx_hash)
        return {"status": self.receipt_status, "blockNumber": 1234, "gasUsed": 21000}


class RecordingExplorer:
    """Builds an :class:`ExplorerClient` backed by ``httpx.MockTransport``.

    *responder* receives each request and returns an ``httpx.Response``;
    every request is kept in ``requests``.
    """

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []
        self._responder = responder

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    def client(self, base_url: str = "https://sepolia.etherscan.io") -> ExplorerClient:
        return ExplorerClient(base_url, transport=httpx.MockTransport(self._handle))

    def count(self, method: str, action: str | None = None) -> int:
        return sum(
            1
            for r in self.requests
            if r.method == method and (action is None or r.url.params.get("action") == action)
        )


def explorer_responder(
    *,
    existing: Any = None,
    submit_status: int = 200,
    job_id: str = "job1",
    poll_results: list[Any] | None = None,
) -> Callable[[httpx.Request], httpx.Response]:
    """Script the three explorer endpoints.

    *poll_results* items are either an ``httpx.Response`` or the value of
    ``data.match`` (``None`` meaning still pending). Once exhausted the job
    stays pending.
    """
    pending = list(poll_results or [])

    def respond(request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            if submit_status != 200:
                return httpx.Response(submit_status, json={"error": "rejected"})
            return httpx.Response(200, json={"data": {"_id": job_id}})
        action = request.url.params.get("action")
        if action == "getVerification":
            return httpx.Response(200, json={"data": existing})
        if action == "getVerificationResult":
            item = pending.pop(0) if pending else None
            if isinstance(item, httpx.Response):
                return item
            data = {} if item is None else {"match": item}
            return httpx.Response(200, json={"data": data})
        return httpx.Response(404)

    return respond
