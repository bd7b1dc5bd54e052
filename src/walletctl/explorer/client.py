"""HTTP client for the block explorer's contract verification API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from walletctl.errors import NetworkError

logger = logging.getLogger("walletctl.explorer.client")

USER_AGENT = "walletctl/0.1"


class ExplorerClient:
    """Thin wrapper over the three verification endpoints.

    Use as a context manager so the underlying connection pool is closed.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
            transport=transport,
        )

    def __enter__(self) -> ExplorerClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _get(self, params: dict[str, str]) -> httpx.Response:
        try:
            return self._client.get("/api", params=params)
        except httpx.HTTPError as exc:
            raise NetworkError(f"GET {self.base_url}/api failed: {exc}") from exc

    @staticmethod
    def _json(resp: httpx.Response) -> dict[str, Any]:
        try:
            payload = resp.json()
        except ValueError as exc:
            raise NetworkError(f"Explorer returned invalid JSON: {exc}", resp.status_code) from exc
        if not isinstance(payload, dict):
            raise NetworkError(f"Unexpected explorer response: {payload!r}", resp.status_code)
        return payload

    def get_verification(self, address: str) -> Any:
        """Return the existing verification record for *address*, or ``None``."""
        resp = self._get(
            {
                "module": "verificationResults",
                "action": "getVerification",
                "address": address.lower(),
            }
        )
        if not resp.is_success:
            raise NetworkError(
                f"Verification lookup failed with HTTP {resp.status_code}", resp.status_code
            )
        return self._json(resp).get("data")

    def submit_verification(self, body: dict[str, Any]) -> str:
        """POST a verification request and return the job id."""
        try:
            resp = self._client.post("/api", json=body)
        except httpx.HTTPError as exc:
            raise NetworkError(f"POST {self.base_url}/api failed: {exc}") from exc
        if not resp.is_success:
            raise NetworkError(
                f"Verification request rejected with HTTP {resp.status_code}", resp.status_code
            )
        data = self._json(resp).get("data")
        if not isinstance(data, dict) or "_id" not in data:
            raise NetworkError(f"Verification response has no job id: {data!r}", resp.status_code)
        logger.debug(f"Verification job {data['_id']} created")
        return str(data["_id"])

    def get_verification_result(self, job_id: str) -> httpx.Response:
        """Fetch the status of a verification job.

        The raw response is returned so the poller can treat a non-OK status
        as a transient failure rather than an error.
        """
        return self._get(
            {
                "module": "contractVerifier",
                "action": "getVerificationResult",
                "id": job_id,
            }
        )
