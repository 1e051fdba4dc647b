"""AuthorizationQueue — public API over the request store.

Callers enqueue a request and await the returned future; an approver (via a
delivery adapter) later calls :meth:`approve` or :meth:`reject`.  The future
resolves ``True`` on approval, ``False`` on rejection, and raises
:class:`~rootguard.errors.AuthorizationTimeoutError` when nobody answers in
time.  Approve/reject on unknown or already-resolved ids return ``False``.

A background task sweeps the table every ``cleanup_interval`` seconds.  It is
started lazily by the first :meth:`submit` (a running loop is required) and
stopped by :meth:`stop_cleanup` or :meth:`clear`.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from rootguard.authorization.models import AuthorizationRequest, CleanupReport, QueueConfig
from rootguard.authorization.store import AuthorizationRequestStore, Clock
from rootguard.utils.telemetry import ATTR_OPERATION, ATTR_REQUEST_ID, ATTR_TIMEOUT, get_tracer

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class AuthorizationQueue:
    """In-memory queue of authorization requests for critical operations."""

    def __init__(self, config: QueueConfig | None = None, *, clock: Clock | None = None) -> None:
        self._config = config or QueueConfig()
        self._store = AuthorizationRequestStore(retention=self._config.retention, clock=clock)
        self._cleanup_task: asyncio.Task[None] | None = None

    @property
    def config(self) -> QueueConfig:
        return self._config

    @property
    def cleanup_running(self) -> bool:
        return self._cleanup_task is not None and not self._cleanup_task.done()

    def submit(
        self,
        operation: str,
        params: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> tuple[AuthorizationRequest, asyncio.Future[bool]]:
        """Create a pending request and return its snapshot and future."""
        effective = self._config.default_timeout if timeout is None else timeout
        if effective <= 0:
            msg = f"timeout must be positive, got {effective}"
            raise ValueError(msg)

        with _tracer.start_as_current_span("rootguard.authorization.enqueue") as span:
            request, future = self._store.create(operation, params or {}, effective)
            span.set_attribute(ATTR_OPERATION, operation)
            span.set_attribute(ATTR_REQUEST_ID, request.id)
            span.set_attribute(ATTR_TIMEOUT, effective)

        self.start_cleanup()
        return request, future

    def enqueue(
        self,
        operation: str,
        params: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> asyncio.Future[bool]:
        """Create a pending request and return the future of its decision.

        The request is registered immediately, before the future is awaited.
        """
        _, future = self.submit(operation, params, timeout)
        return future

    def approve(self, request_id: str) -> bool:
        return self._store.approve(request_id)

    def reject(self, request_id: str, reason: str | None = None) -> bool:
        return self._store.reject(request_id, reason)

    def get_status(self, request_id: str) -> AuthorizationRequest | None:
        return self._store.get(request_id)

    def get_pending(self) -> list[AuthorizationRequest]:
        """Pending requests, oldest first."""
        return self._store.pending()

    def get_all(self) -> list[AuthorizationRequest]:
        """All requests, newest first."""
        return self._store.all()

    def cleanup(self) -> CleanupReport:
        """Expire overdue pending requests, then purge old terminal ones."""
        expired = self._store.expire_due()
        purged = self._store.purge_old()
        return CleanupReport(expired=expired, purged=purged)

    def start_cleanup(self) -> None:
        """Start the periodic sweep on the running loop (no-op if running)."""
        if self.cleanup_running:
            return
        loop = asyncio.get_running_loop()
        self._cleanup_task = loop.create_task(self._cleanup_loop(), name="rootguard-cleanup")
        logger.debug("Cleanup sweep started (every %ss)", self._config.cleanup_interval)

    def stop_cleanup(self) -> None:
        if self._cleanup_task is not None:
            self._cleanup_task.cancel()
            self._cleanup_task = None
            logger.debug("Cleanup sweep stopped")

    def clear(self) -> None:
        """Remove every request and stop the sweep (shutdown/test teardown)."""
        self._store.clear()
        self.stop_cleanup()

    async def _cleanup_loop(self) -> None:
        while True:
            await asyncio.sleep(self._config.cleanup_interval)
            try:
                report = self.cleanup()
            except Exception:
                logger.exception("Authorization cleanup sweep failed")
                continue
            if report.expired or report.purged:
                logger.debug(
                    "Cleanup sweep: %d expired, %d purged",
                    len(report.expired),
                    report.purged,
                )
