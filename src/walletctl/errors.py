"""Error kinds and exceptions shared by the walletctl commands."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    PRECONDITION = "precondition"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    NETWORK = "network"
    ON_CHAIN_FAILURE = "on_chain_failure"
    VALIDATION = "validation"
    UNKNOWN = "unknown"


class WalletCtlError(Exception):
    """Base error carrying the :class:`ErrorKind` it belongs to."""

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NetworkError(WalletCtlError):
    kind = ErrorKind.NETWORK

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
