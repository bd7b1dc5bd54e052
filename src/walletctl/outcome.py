"""Tagged results returned by commands and fallible loaders."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from walletctl.errors import ErrorKind

T = TypeVar("T")


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


class VerificationOutcome(str, Enum):
    ALREADY_VERIFIED = "already_verified"
    MATCH = "match"
    NO_MATCH = "no_match"


@dataclass(frozen=True)
class LoadResult(Generic[T]):
    """Either ``ok`` with a value or not ``ok`` with a reason."""

    ok: bool
    value: Optional[T] = None
    reason: str = ""

    @classmethod
    def success(cls, value: T) -> LoadResult[T]:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, reason: str) -> LoadResult[T]:
        return cls(ok=False, reason=reason)


@dataclass
class CommandOutcome:
    """What a command did, in a form callers can inspect without parsing output."""

    status: OutcomeStatus
    message: str = ""
    kind: Optional[ErrorKind] = None
    verification: Optional[VerificationOutcome] = None
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS

    @classmethod
    def succeeded(cls, message: str = "", **data: Any) -> CommandOutcome:
        return cls(status=OutcomeStatus.SUCCESS, message=message, data=data)

    @classmethod
    def failed(cls, kind: ErrorKind, message: str, **data: Any) -> CommandOutcome:
        return cls(status=OutcomeStatus.FAILED, message=message, kind=kind, data=data)
