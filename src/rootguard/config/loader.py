"""Settings loading and component wiring."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from rootguard.access.filter import ToolAccessFilter
from rootguard.access.roles import RoleResolver
from rootguard.authorization.delivery import ApprovalChannel, ChannelDelivery
from rootguard.authorization.queue import AuthorizationQueue
from rootguard.config.models import RootGuardSettings
from rootguard.errors import ConfigError
from rootguard.guard.guard import RootGuard
from rootguard.utils.telemetry import configure_telemetry


class SettingsLoader:
    """Load and validate a settings YAML file into :class:`RootGuardSettings`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> RootGuardSettings:
        """Read YAML, interpolate env vars, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before YAML parsing.  An empty file
        yields the defaults.

        Raises:
            ConfigError: On read errors, YAML parse errors or schema validation failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise ConfigError(f"YAML parse error: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Settings YAML must be a mapping")

        try:
            return RootGuardSettings.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc


@dataclass
class Components:
    """Application-wide instances built once at startup and passed around."""

    settings: RootGuardSettings
    access_filter: ToolAccessFilter
    resolver: RoleResolver
    queue: AuthorizationQueue
    guard: RootGuard

    def channel_delivery(self, channel: ApprovalChannel, *, install: bool = True) -> ChannelDelivery:
        """Build a :class:`ChannelDelivery` for *channel* bound to the configured approver.

        Callbacks from anyone other than ``settings.approver.id`` are refused
        when that id is set.  With *install* the adapter also becomes the
        guard's strategy.
        """
        delivery = ChannelDelivery(self.queue, channel, approver_id=self.settings.approver.id)
        if install:
            self.guard.set_strategy(delivery)
        return delivery


def build_components(settings: RootGuardSettings | None = None) -> Components:
    """Wire filter, resolver, queue and guard from *settings*.

    The guard uses the default queue strategy until an approver channel is
    attached with :meth:`Components.channel_delivery`.
    """
    settings = settings or RootGuardSettings()
    queue = AuthorizationQueue(settings.authorization)

    if settings.telemetry and settings.telemetry.enabled:
        configure_telemetry(otlp_endpoint=settings.telemetry.otlp_endpoint)

    return Components(
        settings=settings,
        access_filter=ToolAccessFilter(settings.access),
        resolver=RoleResolver(settings.channels.roles, default_role=settings.channels.default_role),
        queue=queue,
        guard=RootGuard(queue, config=settings.guard),
    )
