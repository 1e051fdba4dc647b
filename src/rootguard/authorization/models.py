"""Data models for the authorization workflow."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class AuthorizationStatus(str, Enum):
    """Lifecycle state of an authorization request.

    ``pending`` is the only non-terminal state.
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        return self is not AuthorizationStatus.PENDING


class AuthorizationRequest(BaseModel):
    """One request for human sign-off on a critical operation."""

    id: str
    operation: str
    params: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    expires_at: datetime
    status: AuthorizationStatus = AuthorizationStatus.PENDING
    rejection_reason: str | None = None

    @property
    def timeout(self) -> float:
        return (self.expires_at - self.created_at).total_seconds()

    def is_due(self, now: datetime) -> bool:
        """Return whether a pending request should be expired at *now*."""
        return self.status is AuthorizationStatus.PENDING and now >= self.expires_at

    def remaining(self, now: datetime) -> float:
        """Seconds left before expiry (never negative)."""
        return max(0.0, (self.expires_at - now).total_seconds())


class QueueConfig(BaseModel):
    """Configuration for the authorization queue."""

    default_timeout: float = Field(
        default=300.0,
        gt=0,
        description="Seconds a request stays pending when no timeout is given.",
    )
    cleanup_interval: float = Field(
        default=60.0,
        gt=0,
        description="Seconds between background cleanup sweeps.",
    )
    retention: float = Field(
        default=3600.0,
        gt=0,
        description="Seconds terminal requests are kept (from creation) for inspection.",
    )


class CleanupReport(BaseModel):
    """Outcome of one cleanup sweep."""

    expired: list[str] = Field(default_factory=list)
    purged: int = 0
