"""ToolAccessFilter — decides which tools a role may use.

Pure logic, no I/O.  Resolution order for every role except ``superadmin``
(which bypasses filtering entirely):

1. ``forbidden`` — any match denies, even if an allow pattern also matches.
2. role allow-list — any match allows.
3. default deny.

The pattern lists are copied at construction and never mutated afterwards,
so a single filter can be shared freely.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from rootguard.access.messages import denial_message, log_prohibited_attempt
from rootguard.access.models import AccessPolicy
from rootguard.access.patterns import matches_any
from rootguard.access.roles import is_superadmin
from rootguard.errors import AccessDeniedError
from rootguard.utils.telemetry import ATTR_OUTCOME, ATTR_ROLE, ATTR_TOOL_NAME, get_tracer

_tracer = get_tracer(__name__)

T = TypeVar("T")


def tool_name_of(item: Any) -> str:
    """Return the ``name`` of a tool descriptor (attribute or mapping key)."""
    if isinstance(item, Mapping):
        return str(item.get("name", ""))
    return str(getattr(item, "name", ""))


class ToolAccessFilter:
    """Role-based allow/deny filter over tool names."""

    def __init__(self, policy: AccessPolicy | None = None) -> None:
        policy = policy or AccessPolicy()
        self._forbidden: tuple[str, ...] = tuple(policy.forbidden)
        self._allowed: dict[str, tuple[str, ...]] = {
            role: tuple(patterns) for role, patterns in policy.allowed.items()
        }
        self._fallback_role = policy.fallback_role

    def _allowed_for(self, role: str) -> tuple[str, ...]:
        if role in self._allowed:
            return self._allowed[role]
        return self._allowed.get(self._fallback_role, ())

    def can_use_tool(self, role: str, tool_name: str) -> bool:
        """Return whether *role* may invoke *tool_name*."""
        if is_superadmin(role):
            return True

        if matches_any(tool_name, self._forbidden):
            return False

        return matches_any(tool_name, self._allowed_for(role))

    def check_tool(self, role: str, tool_name: str, *, user_id: str | None = None) -> None:
        """Raise :class:`AccessDeniedError` if *role* may not invoke *tool_name*."""
        with _tracer.start_as_current_span("rootguard.access.check") as span:
            span.set_attribute(ATTR_ROLE, role)
            span.set_attribute(ATTR_TOOL_NAME, tool_name)
            allowed = self.can_use_tool(role, tool_name)
            span.set_attribute(ATTR_OUTCOME, "allowed" if allowed else "denied")

        if allowed:
            return
        log_prohibited_attempt(tool_name, role, user_id)
        raise AccessDeniedError(tool_name, role, denial_message(tool_name, role))

    def filter_tools_for_role(self, role: str, tools: Iterable[T]) -> list[T]:
        """Return the tools *role* may use, in input order.

        Items only need a ``name`` (attribute or key); they are returned as-is.
        """
        if is_superadmin(role):
            return list(tools)
        return [tool for tool in tools if self.can_use_tool(role, tool_name_of(tool))]

    def get_allowed_tool_patterns(self, role: str) -> list[str]:
        if is_superadmin(role):
            return ["*"]
        return list(self._allowed_for(role))

    def get_forbidden_tool_patterns(self, role: str) -> list[str]:
        if is_superadmin(role):
            return []
        return list(self._forbidden)
