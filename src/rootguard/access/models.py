"""Data models for the tool access filter."""

from __future__ import annotations

from pydantic import BaseModel, Field

from rootguard.access.roles import Role

DEFAULT_FORBIDDEN_TOOLS: list[str] = [
    "bash",
    "run_command",
    "file_delete",
    "file_write",
    "write_to_file",
    "replace_file_content",
    "multi_replace_file_content",
    "browser",
    "browser_subagent",
    "system_*",
    "config_*",
    "command_*",
]

PUBLIC_ALLOWED_TOOLS: list[str] = [
    # Configured enterprise APIs (stock, orders, appointments, ...)
    "enterprise_*",
    "api_*",
    # Read-only business tools
    "view_catalog",
    "view_inventory",
    "check_stock",
    "get_price",
    "create_order",
    "check_order_status",
    "view_appointment",
]

SUPPORT_ALLOWED_TOOLS: list[str] = [
    *PUBLIC_ALLOWED_TOOLS,
    "create_ticket",
    "update_ticket",
    "view_ticket",
    "search_faq",
    "escalate_to_dev",
    "log_bug_report",
]

PURCHASING_ALLOWED_TOOLS: list[str] = [
    *PUBLIC_ALLOWED_TOOLS,
    "supplier_*",
    "create_purchase_order",
    "check_supplier_status",
    "contact_supplier",
    "update_inventory",
]


def _default_allowed() -> dict[str, list[str]]:
    return {
        Role.PUBLIC.value: list(PUBLIC_ALLOWED_TOOLS),
        Role.SUPPORT.value: list(SUPPORT_ALLOWED_TOOLS),
        Role.PURCHASING.value: list(PURCHASING_ALLOWED_TOOLS),
    }


class AccessPolicy(BaseModel):
    """Allow/deny patterns for every non-superadmin role.

    ``forbidden`` is shared by all roles and always wins over ``allowed``.
    """

    forbidden: list[str] = Field(
        default_factory=lambda: list(DEFAULT_FORBIDDEN_TOOLS),
        description="Patterns denied to every non-superadmin role.",
    )
    allowed: dict[str, list[str]] = Field(
        default_factory=_default_allowed,
        description="Role name -> patterns that role may use.",
    )
    fallback_role: str = Field(
        default=Role.PUBLIC.value,
        description="Role whose allow-list applies to roles without their own entry.",
    )
