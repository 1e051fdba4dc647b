"""Access subsystem — role-based tool filtering."""

from rootguard.access.filter import ToolAccessFilter, tool_name_of
from rootguard.access.messages import denial_message, denial_message_with_alternatives
from rootguard.access.models import AccessPolicy
from rootguard.access.patterns import matches, matches_any
from rootguard.access.roles import DEFAULT_CHANNEL_ROLES, Role, RoleResolver, is_superadmin

__all__ = [
    "DEFAULT_CHANNEL_ROLES",
    "AccessPolicy",
    "Role",
    "RoleResolver",
    "ToolAccessFilter",
    "denial_message",
    "denial_message_with_alternatives",
    "is_superadmin",
    "matches",
    "matches_any",
    "tool_name_of",
]
