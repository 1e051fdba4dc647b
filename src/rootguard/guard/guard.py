"""RootGuard — blocks critical operations until an approver signs off.

Every sensitive operation calls :meth:`RootGuard.require_authorization`
with its canonical identifier and a descriptive params bag *before* any side
effect, and lets the raised error propagate::

    async def delete_file(path: Path) -> None:
        await guard.require_authorization("file_delete", {"path": str(path)})
        path.unlink()

The guard holds no per-request state; one instance can be shared by every
caller.  Approval itself is delegated to an injected
:class:`~rootguard.authorization.delivery.AuthorizationStrategy`, which
defaults to :class:`~rootguard.authorization.delivery.QueueDelivery`.
"""

from __future__ import annotations

import functools
import inspect
import logging
import threading
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, ParamSpec, TypeVar

from rootguard.authorization.delivery import AuthorizationStrategy, QueueDelivery
from rootguard.authorization.models import QueueConfig
from rootguard.authorization.queue import AuthorizationQueue
from rootguard.errors import (
    AuthorizationFailedError,
    AuthorizationRejectedError,
    AuthorizationTimeoutError,
)
from rootguard.guard.models import GuardConfig
from rootguard.guard.operations import is_critical_operation
from rootguard.utils.telemetry import ATTR_OPERATION, ATTR_OUTCOME, ATTR_TIMEOUT, get_tracer

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

P = ParamSpec("P")
R = TypeVar("R")


class RootGuard:
    """Require human authorization for critical operations."""

    def __init__(
        self,
        queue: AuthorizationQueue | None = None,
        *,
        config: GuardConfig | None = None,
        request_authorization: AuthorizationStrategy | None = None,
    ) -> None:
        self._config = config or GuardConfig()
        self._enabled = threading.Event()
        if self._config.enabled:
            self._enabled.set()

        if queue is None:
            queue_config = QueueConfig()
            if self._config.default_timeout is not None:
                queue_config = QueueConfig(default_timeout=self._config.default_timeout)
            queue = AuthorizationQueue(queue_config)
        self._queue = queue
        self._strategy: AuthorizationStrategy = request_authorization or QueueDelivery(self._queue)

    @property
    def config(self) -> GuardConfig:
        return self._config

    @property
    def queue(self) -> AuthorizationQueue:
        return self._queue

    def set_strategy(self, request_authorization: AuthorizationStrategy) -> None:
        """Install the delivery adapter used for subsequent requests."""
        self._strategy = request_authorization
        logger.info("Root guard configured with %s", type(request_authorization).__name__)

    def is_root_operation(self, operation: str) -> bool:
        return is_critical_operation(operation)

    def set_enabled(self, enabled: bool) -> None:
        if enabled:
            self._enabled.set()
        else:
            self._enabled.clear()
        logger.info("Root guard %s", "enabled" if enabled else "disabled")

    def is_enabled(self) -> bool:
        return self._enabled.is_set()

    async def require_authorization(
        self,
        operation: str,
        params: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> None:
        """Wait for approval of *operation*; raise if it is not granted.

        Raises:
            AuthorizationRejectedError: The approver refused the operation.
            AuthorizationFailedError: No answer in time (``timed_out``) or the
                strategy failed; the original exception is ``cause``.
        """
        if not self.is_enabled():
            logger.debug("Root guard disabled, allowing operation: %s", operation)
            return

        effective = timeout if timeout is not None else self._config.default_timeout
        logger.info("Requesting authorization for: %s", operation)

        with _tracer.start_as_current_span("rootguard.authorization.require") as span:
            span.set_attribute(ATTR_OPERATION, operation)
            if effective is not None:
                span.set_attribute(ATTR_TIMEOUT, effective)

            try:
                approved = await self._strategy(operation, dict(params or {}), effective)
            except AuthorizationRejectedError:
                span.set_attribute(ATTR_OUTCOME, "rejected")
                logger.warning("Authorization rejected for: %s", operation)
                raise
            except Exception as exc:
                timed_out = isinstance(exc, AuthorizationTimeoutError)
                span.set_attribute(ATTR_OUTCOME, "timeout" if timed_out else "failed")
                logger.error("Authorization failed for %s: %s", operation, exc)
                raise AuthorizationFailedError(operation, exc) from exc

            if not approved:
                span.set_attribute(ATTR_OUTCOME, "rejected")
                logger.warning("Authorization rejected for: %s", operation)
                raise AuthorizationRejectedError(operation)

            span.set_attribute(ATTR_OUTCOME, "approved")
            logger.info("Authorization approved for: %s", operation)

    async def execute(
        self,
        operation: str,
        action: Callable[[], Awaitable[R]],
        params: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> R:
        """Run *action* only after *operation* has been authorized."""
        await self.require_authorization(operation, params, timeout)
        return await action()

    def guarded(
        self,
        operation: str,
        describe: Callable[..., Mapping[str, Any]] | None = None,
    ) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
        """Wrap an async callable so each call requires authorization first.

        The params bag shown to the approver is ``describe(*args, **kwargs)``
        when given, otherwise the call's bound arguments (minus ``self``).
        """

        def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
            signature = inspect.signature(func)

            @functools.wraps(func)
            async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
                if describe is not None:
                    params = dict(describe(*args, **kwargs))
                else:
                    bound = signature.bind(*args, **kwargs)
                    bound.apply_defaults()
                    params = {k: v for k, v in bound.arguments.items() if k not in ("self", "cls")}
                await self.require_authorization(operation, params)
                return await func(*args, **kwargs)

            return wrapper

        return decorator
