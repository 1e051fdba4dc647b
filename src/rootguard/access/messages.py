"""User-facing messages for tools refused by the access filter."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from rootguard.access.roles import Role

logger = logging.getLogger(__name__)


def prohibited_tool_message(tool_name: str, role: str) -> str:
    base = f"Tool not available: `{tool_name}`"
    if role == Role.PUBLIC:
        return (
            f"{base}\n\n"
            "This tool is restricted for public users for security reasons.\n\n"
            "Tools available for your role:\n"
            "- Configured business APIs\n"
            "- Read-only queries\n\n"
            "Contact the administrator if you need advanced functionality."
        )
    return f"{base}\n\nThis tool is not available in your current configuration."


def file_operation_denied_message(operation: str) -> str:
    return (
        f"File operation blocked: `{operation}`\n\n"
        "Modifying files is restricted for public users.\n\n"
        "Write or delete operations require administrator authorization."
    )


def config_operation_denied_message() -> str:
    return (
        "Configuration change blocked\n\n"
        "Only the administrator may change the system configuration."
    )


def system_operation_denied_message(operation: str) -> str:
    return (
        f"System operation blocked: `{operation}`\n\n"
        "System operations (restart, shutdown, ...) are restricted.\n\n"
        "Only the administrator may run critical system operations."
    )


_SPECIFIC_MESSAGES: dict[str, Callable[[], str]] = {
    "file_delete": lambda: file_operation_denied_message("file deletion"),
    "file_write": lambda: file_operation_denied_message("file write"),
    "config_modify": config_operation_denied_message,
    "system_restart": lambda: system_operation_denied_message("system restart"),
    "system_shutdown": lambda: system_operation_denied_message("system shutdown"),
    "database_drop": lambda: system_operation_denied_message("database drop"),
}


def denial_message(tool_name: str, role: str) -> str:
    """Return the message shown to a caller whose *role* may not use *tool_name*."""
    specific = _SPECIFIC_MESSAGES.get(tool_name)
    if specific is not None:
        return specific()
    return prohibited_tool_message(tool_name, role)


def denial_message_with_alternatives(tool_name: str, alternatives: list[str]) -> str:
    alt_list = "\n".join(f"- `{alt}`" for alt in alternatives)
    return (
        f"Tool not available: `{tool_name}`\n\n"
        f"Alternative tools you can use:\n{alt_list}"
    )


def log_prohibited_attempt(tool_name: str, role: str, user_id: str | None = None) -> None:
    logger.warning(
        "Prohibited tool attempt: tool=%s role=%s user=%s at=%s",
        tool_name,
        role,
        user_id or "unknown",
        datetime.now(UTC).isoformat(),
    )
