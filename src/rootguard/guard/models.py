"""Data models for the root guard."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DangerLevel(str, Enum):
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class CriticalOperation(BaseModel):
    """A registered critical operation."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    danger_level: DangerLevel


class GuardConfig(BaseModel):
    """Configuration for the root guard."""

    enabled: bool = Field(default=True, description="Master switch for authorization checks.")
    default_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Seconds to wait for an approver when no timeout is given; unset defers to the queue.",
    )
