"""Shared error types for the access filter and the authorization workflow."""

from __future__ import annotations


class RootGuardError(Exception):
    """Base error for all rootguard failures."""


class AccessDeniedError(RootGuardError):
    """The access filter refused a tool for the caller's role."""

    code = "ACCESS_DENIED"

    def __init__(self, tool_name: str, role: str, message: str = "") -> None:
        self.tool_name = tool_name
        self.role = role
        super().__init__(message or f"Tool {tool_name!r} is not available for role {role!r}")


class AuthorizationError(RootGuardError):
    """Base error for the human approval workflow."""

    code = "AUTHORIZATION_ERROR"

    def __init__(self, operation: str, message: str) -> None:
        self.operation = operation
        super().__init__(message)


class AuthorizationRejectedError(AuthorizationError):
    """An approver explicitly rejected the operation."""

    code = "AUTHORIZATION_REJECTED"

    def __init__(self, operation: str, reason: str = "") -> None:
        self.reason = reason
        msg = f'Operation "{operation}" was rejected by the approver'
        if reason:
            msg += f": {reason}"
        super().__init__(operation, msg)


class AuthorizationTimeoutError(AuthorizationError):
    """Nobody answered the authorization request before it expired."""

    code = "AUTHORIZATION_TIMEOUT"

    def __init__(self, operation: str, timeout: float, request_id: str | None = None) -> None:
        self.timeout = timeout
        self.request_id = request_id
        super().__init__(
            operation,
            f"Authorization request for {operation!r} expired after {timeout}s",
        )


class AuthorizationCancelledError(AuthorizationError):
    """The request was dropped before anyone answered it (queue cleared)."""

    code = "AUTHORIZATION_CANCELLED"

    def __init__(self, operation: str, request_id: str | None = None) -> None:
        self.request_id = request_id
        super().__init__(
            operation,
            f"Authorization request for {operation!r} was cancelled: queue cleared",
        )


class AuthorizationFailedError(AuthorizationError):
    """The authorization strategy failed; wraps the underlying cause."""

    code = "AUTHORIZATION_FAILED"

    def __init__(self, operation: str, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(
            operation,
            f'Authorization request for "{operation}" failed: {cause}',
        )

    @property
    def timed_out(self) -> bool:
        """True when nobody responded in time, as opposed to a delivery failure."""
        return isinstance(self.cause, AuthorizationTimeoutError)


class ConfigError(RootGuardError):
    """Raised when a settings file fails parsing or validation."""
