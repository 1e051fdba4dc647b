"""Root guard subsystem — human approval for critical operations."""

from rootguard.guard.critical import CriticalOperations
from rootguard.guard.guard import RootGuard
from rootguard.guard.models import CriticalOperation, DangerLevel, GuardConfig
from rootguard.guard.operations import (
    CRITICAL_OPERATIONS,
    RootOperation,
    get_critical_operation_info,
    is_critical_operation,
)

__all__ = [
    "CRITICAL_OPERATIONS",
    "CriticalOperation",
    "CriticalOperations",
    "DangerLevel",
    "GuardConfig",
    "RootGuard",
    "RootOperation",
    "get_critical_operation_info",
    "is_critical_operation",
]
