"""Authorization subsystem — human-in-the-loop approval queue."""

from rootguard.authorization.delivery import (
    ApprovalChannel,
    AuthorizationStrategy,
    ChannelDelivery,
    ConsoleDelivery,
    QueueDelivery,
    approve_action,
    format_request,
    reject_action,
)
from rootguard.authorization.models import (
    AuthorizationRequest,
    AuthorizationStatus,
    CleanupReport,
    QueueConfig,
)
from rootguard.authorization.queue import AuthorizationQueue
from rootguard.authorization.store import AuthorizationRequestStore

__all__ = [
    "ApprovalChannel",
    "AuthorizationQueue",
    "AuthorizationRequest",
    "AuthorizationRequestStore",
    "AuthorizationStatus",
    "AuthorizationStrategy",
    "ChannelDelivery",
    "CleanupReport",
    "ConsoleDelivery",
    "QueueConfig",
    "QueueDelivery",
    "approve_action",
    "format_request",
    "reject_action",
]
