"""Settings models, YAML loading and component wiring."""

from rootguard.config.loader import Components, SettingsLoader, build_components
from rootguard.config.models import (
    ApproverSettings,
    ChannelSettings,
    RootGuardSettings,
    TelemetrySettings,
)

__all__ = [
    "ApproverSettings",
    "ChannelSettings",
    "Components",
    "RootGuardSettings",
    "SettingsLoader",
    "TelemetrySettings",
    "build_components",
]
