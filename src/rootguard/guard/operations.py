"""Registry of critical operations that always require human approval."""

from __future__ import annotations

from enum import Enum

from rootguard.guard.models import CriticalOperation, DangerLevel


class RootOperation(str, Enum):
    """Canonical identifiers of critical operations."""

    FILE_DELETE = "file_delete"
    FILE_WRITE = "file_write"
    CONFIG_MODIFY = "config_modify"
    SYSTEM_RESTART = "system_restart"
    SYSTEM_SHUTDOWN = "system_shutdown"
    DATABASE_DROP = "database_drop"
    USER_DELETE = "user_delete"
    PERMISSION_GRANT = "permission_grant"


CRITICAL_OPERATIONS: tuple[CriticalOperation, ...] = (
    CriticalOperation(
        id=RootOperation.CONFIG_MODIFY.value,
        name="Modify Configuration",
        description="Modifies system configuration settings",
        danger_level=DangerLevel.HIGH,
    ),
    CriticalOperation(
        id=RootOperation.FILE_DELETE.value,
        name="Delete File/Directory",
        description="Deletes files or directories from the system",
        danger_level=DangerLevel.HIGH,
    ),
    CriticalOperation(
        id=RootOperation.FILE_WRITE.value,
        name="Write File",
        description="Writes content to files",
        danger_level=DangerLevel.MEDIUM,
    ),
    CriticalOperation(
        id=RootOperation.USER_DELETE.value,
        name="Delete User/Session",
        description="Deletes user sessions or accounts",
        danger_level=DangerLevel.HIGH,
    ),
    CriticalOperation(
        id=RootOperation.PERMISSION_GRANT.value,
        name="Grant Permissions",
        description="Grants additional permissions to a user",
        danger_level=DangerLevel.HIGH,
    ),
    CriticalOperation(
        id=RootOperation.DATABASE_DROP.value,
        name="Drop Database",
        description="Permanently drops a database",
        danger_level=DangerLevel.CRITICAL,
    ),
    CriticalOperation(
        id=RootOperation.SYSTEM_RESTART.value,
        name="Restart System",
        description="Restarts the gateway service",
        danger_level=DangerLevel.CRITICAL,
    ),
    CriticalOperation(
        id=RootOperation.SYSTEM_SHUTDOWN.value,
        name="Shutdown System",
        description="Shuts down the gateway service",
        danger_level=DangerLevel.CRITICAL,
    ),
)

_BY_ID: dict[str, CriticalOperation] = {op.id: op for op in CRITICAL_OPERATIONS}


def get_critical_operation_info(operation_id: str) -> CriticalOperation | None:
    return _BY_ID.get(operation_id)


def is_critical_operation(operation_id: str) -> bool:
    return operation_id in _BY_ID
