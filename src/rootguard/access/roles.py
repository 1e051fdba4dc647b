"""Roles and channel-to-role resolution."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum


class Role(str, Enum):
    """Known caller roles.

    Roles are opaque strings everywhere in the API; this enum only names the
    ones shipped with the default policy.  ``superadmin`` bypasses all
    filtering.
    """

    SUPERADMIN = "superadmin"
    PUBLIC = "public"
    SUPPORT = "support"
    PURCHASING = "purchasing"
    INTERNAL = "internal"


DEFAULT_CHANNEL_ROLES: dict[str, str] = {
    "telegram": Role.SUPERADMIN.value,
    "whatsapp": Role.PUBLIC.value,
    "discord": Role.PUBLIC.value,
    "slack": Role.INTERNAL.value,
    "signal": Role.PUBLIC.value,
    "web": Role.PUBLIC.value,
}


def is_superadmin(role: str) -> bool:
    return role == Role.SUPERADMIN


class RoleResolver:
    """Map an inbound channel identifier to a role.

    Lookups are case-insensitive.  Unknown channels resolve to
    *default_role*, which should be the least-privileged role.
    """

    def __init__(
        self,
        mapping: Mapping[str, str] | None = None,
        *,
        default_role: str = Role.PUBLIC.value,
    ) -> None:
        source = DEFAULT_CHANNEL_ROLES if mapping is None else mapping
        self._mapping = {channel.lower(): str(role) for channel, role in source.items()}
        self._default_role = str(default_role)

    @property
    def default_role(self) -> str:
        return self._default_role

    def resolve(self, channel_id: str) -> str:
        """Return the role for *channel_id*, or the default role."""
        return self._mapping.get(channel_id.lower(), self._default_role)

    def channels(self) -> dict[str, str]:
        """Return a copy of the channel mapping."""
        return dict(self._mapping)
