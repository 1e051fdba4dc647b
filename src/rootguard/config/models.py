"""Pydantic models for the ``rootguard.yaml`` settings file."""

from __future__ import annotations

from pydantic import BaseModel, Field

from rootguard.access.models import AccessPolicy
from rootguard.access.roles import DEFAULT_CHANNEL_ROLES, Role
from rootguard.authorization.models import QueueConfig
from rootguard.guard.models import GuardConfig


class ChannelSettings(BaseModel):
    """Channel identifier -> role mapping used to classify inbound callers."""

    roles: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_CHANNEL_ROLES))
    default_role: str = Role.PUBLIC.value


class ApproverSettings(BaseModel):
    """Who may resolve authorization requests."""

    id: str | None = Field(
        default=None,
        description="Opaque approver identifier supplied by the delivery channel.",
    )


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    otlp_endpoint: str | None = None


class RootGuardSettings(BaseModel):
    """Top-level settings parsed from YAML."""

    version: str = "1"
    access: AccessPolicy = Field(default_factory=AccessPolicy)
    channels: ChannelSettings = Field(default_factory=ChannelSettings)
    authorization: QueueConfig = Field(default_factory=QueueConfig)
    guard: GuardConfig = Field(default_factory=GuardConfig)
    approver: ApproverSettings = Field(default_factory=ApproverSettings)
    telemetry: TelemetrySettings | None = None
