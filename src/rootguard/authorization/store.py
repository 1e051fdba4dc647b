"""AuthorizationRequestStore — the in-memory table of authorization requests.

The store exclusively owns every :class:`AuthorizationRequest`, the future
handed to whoever is waiting on it, and its expiry timer.  It implements the
state machine::

    pending -> approved | rejected | expired

All three targets are terminal.  The first transition out of ``pending``
wins; later attempts are no-ops that return ``False``.

Expiry is enforced three ways, all idempotent:

- an eager per-request timer (``loop.call_later``);
- :meth:`expire_due`, called by the periodic sweep;
- every observation (``get``/``pending``/``all``/``approve``/``reject``)
  first expires an overdue request, so a ``pending`` status always implies
  ``now < expires_at``.

The store is not thread-safe: every method must run on the event loop that
created the requests.  No method awaits, so each call is atomic with respect
to other coroutines on that loop.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

from rootguard.authorization.models import AuthorizationRequest, AuthorizationStatus
from rootguard.errors import AuthorizationCancelledError, AuthorizationTimeoutError

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(UTC)


def new_request_id() -> str:
    return f"auth_{uuid4().hex}"


def _snapshot(request: AuthorizationRequest) -> AuthorizationRequest:
    return request.model_copy(update={"params": dict(request.params)})


class AuthorizationRequestStore:
    """Owns authorization requests, their futures and their expiry timers."""

    def __init__(self, *, retention: float = 3600.0, clock: Clock | None = None) -> None:
        self._retention = timedelta(seconds=retention)
        self._clock = clock or _utcnow
        self._requests: dict[str, AuthorizationRequest] = {}
        self._futures: dict[str, asyncio.Future[bool]] = {}
        self._timers: dict[str, asyncio.TimerHandle] = {}

    def __len__(self) -> int:
        return len(self._requests)

    def now(self) -> datetime:
        return self._clock()

    # -- creation ------------------------------------------------------------

    def create(
        self,
        operation: str,
        params: Mapping[str, Any],
        timeout: float,
    ) -> tuple[AuthorizationRequest, asyncio.Future[bool]]:
        """Register a new pending request and schedule its expiry.

        Must be called with a running event loop.
        """
        loop = asyncio.get_running_loop()
        now = self._clock()
        request = AuthorizationRequest(
            id=new_request_id(),
            operation=operation,
            params=dict(params),
            created_at=now,
            expires_at=now + timedelta(seconds=timeout),
        )
        future: asyncio.Future[bool] = loop.create_future()

        self._requests[request.id] = request
        self._futures[request.id] = future
        self._timers[request.id] = loop.call_later(timeout, self._on_timer, request.id)

        logger.info(
            "Authorization request %s created for %s (expires in %ss)",
            request.id,
            operation,
            timeout,
        )
        return _snapshot(request), future

    # -- transitions ---------------------------------------------------------

    def approve(self, request_id: str) -> bool:
        """Move a pending request to ``approved`` and resolve its future with ``True``."""
        request = self._observe(request_id)
        if request is None or request.status is not AuthorizationStatus.PENDING:
            logger.debug("Ignoring approve for %s: not pending", request_id)
            return False

        request.status = AuthorizationStatus.APPROVED
        future = self._settle(request_id)
        if future is not None and not future.done():
            future.set_result(True)

        logger.info("Authorization request %s approved (%s)", request_id, request.operation)
        return True

    def reject(self, request_id: str, reason: str | None = None) -> bool:
        """Move a pending request to ``rejected`` and resolve its future with ``False``."""
        request = self._observe(request_id)
        if request is None or request.status is not AuthorizationStatus.PENDING:
            logger.debug("Ignoring reject for %s: not pending", request_id)
            return False

        request.status = AuthorizationStatus.REJECTED
        request.rejection_reason = reason
        future = self._settle(request_id)
        if future is not None and not future.done():
            future.set_result(False)

        logger.info(
            "Authorization request %s rejected (%s): %s",
            request_id,
            request.operation,
            reason or "no reason given",
        )
        return True

    def expire(self, request_id: str) -> bool:
        """Move a pending request to ``expired`` and fail its future."""
        request = self._requests.get(request_id)
        if request is None or request.status is not AuthorizationStatus.PENDING:
            return False

        request.status = AuthorizationStatus.EXPIRED
        future = self._settle(request_id)
        if future is not None and not future.done():
            future.set_exception(
                AuthorizationTimeoutError(request.operation, request.timeout, request_id)
            )

        logger.info("Authorization request %s expired (%s)", request_id, request.operation)
        return True

    # -- sweeps --------------------------------------------------------------

    def expire_due(self) -> list[str]:
        """Expire every pending request whose deadline has passed."""
        now = self._clock()
        due = [rid for rid, request in self._requests.items() if request.is_due(now)]
        return [rid for rid in due if self.expire(rid)]

    def purge_old(self) -> int:
        """Remove terminal requests created more than ``retention`` ago.

        Pending requests are never removed.
        """
        cutoff = self._clock() - self._retention
        stale = [
            rid
            for rid, request in self._requests.items()
            if request.status.is_terminal and request.created_at < cutoff
        ]
        for rid in stale:
            del self._requests[rid]
            self._settle(rid)

        if stale:
            logger.info("Purged %d old authorization request(s)", len(stale))
        return len(stale)

    # -- reads ---------------------------------------------------------------

    def get(self, request_id: str) -> AuthorizationRequest | None:
        request = self._observe(request_id)
        return _snapshot(request) if request is not None else None

    def pending(self) -> list[AuthorizationRequest]:
        """Pending requests, oldest first."""
        self.expire_due()
        pending = [r for r in self._requests.values() if r.status is AuthorizationStatus.PENDING]
        pending.sort(key=lambda r: r.created_at)
        return [_snapshot(r) for r in pending]

    def all(self) -> list[AuthorizationRequest]:
        """Every request regardless of status, newest first."""
        self.expire_due()
        # Reverse insertion order first so equal timestamps also come out newest first.
        requests = list(reversed(self._requests.values()))
        requests.sort(key=lambda r: r.created_at, reverse=True)
        return [_snapshot(r) for r in requests]

    def clear(self) -> None:
        """Drop every request and cancel timers.

        Outstanding futures fail with :class:`AuthorizationCancelledError`.
        """
        for timer in self._timers.values():
            timer.cancel()
        for request_id, future in self._futures.items():
            if not future.done():
                operation = self._requests[request_id].operation
                future.set_exception(AuthorizationCancelledError(operation, request_id))
        self._timers.clear()
        self._futures.clear()
        self._requests.clear()

    # -- internals -----------------------------------------------------------

    def _observe(self, request_id: str) -> AuthorizationRequest | None:
        request = self._requests.get(request_id)
        if request is not None and request.is_due(self._clock()):
            self.expire(request_id)
        return request

    def _settle(self, request_id: str) -> asyncio.Future[bool] | None:
        timer = self._timers.pop(request_id, None)
        if timer is not None:
            timer.cancel()
        return self._futures.pop(request_id, None)

    def _on_timer(self, request_id: str) -> None:
        self._timers.pop(request_id, None)
        self.expire(request_id)
