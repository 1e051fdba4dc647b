"""Delivery adapters — how an authorization request reaches a human.

- ``AuthorizationStrategy`` — the callable contract the guard depends on.
- ``QueueDelivery`` — enqueue and wait; someone else resolves the request
  (default, useful for local testing and for UIs polling ``get_pending()``).
- ``ChannelDelivery`` — renders the request and sends it through an
  :class:`ApprovalChannel` (e.g. a chat bot with approve/reject buttons),
  then bridges the approver's callback back into the queue.
- ``ConsoleDelivery`` — prompts at the terminal.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
import threading
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from rootguard.errors import AuthorizationRejectedError

if TYPE_CHECKING:
    from rootguard.authorization.models import AuthorizationRequest
    from rootguard.authorization.queue import AuthorizationQueue

logger = logging.getLogger(__name__)

APPROVE_PREFIX = "auth_approve_"
REJECT_PREFIX = "auth_reject_"

SEND_FAILED_REASON = "Failed to send request"
CALLBACK_REJECT_REASON = "Rejected by approver"


@runtime_checkable
class AuthorizationStrategy(Protocol):
    """Ask a human to approve *operation*; resolve ``True``/``False``."""

    async def __call__(
        self,
        operation: str,
        params: Mapping[str, Any],
        timeout: float | None = None,
    ) -> bool: ...


@runtime_checkable
class ApprovalChannel(Protocol):
    """Transport that presents a rendered request to the approver."""

    async def send(self, request: AuthorizationRequest, message: str) -> None: ...


async def _await_decision(
    request: AuthorizationRequest,
    future: asyncio.Future[bool],
    queue: AuthorizationQueue,
) -> bool:
    approved = await future
    if not approved:
        final = queue.get_status(request.id)
        reason = final.rejection_reason if final is not None else None
        raise AuthorizationRejectedError(request.operation, reason or "")
    return True


class QueueDelivery:
    """Enqueue the request and wait for someone to resolve it.

    Satisfies the :class:`AuthorizationStrategy` protocol.  Rejections are
    raised as :class:`AuthorizationRejectedError` so the stored rejection
    reason reaches the caller.
    """

    def __init__(self, queue: AuthorizationQueue) -> None:
        self._queue = queue

    async def __call__(
        self,
        operation: str,
        params: Mapping[str, Any],
        timeout: float | None = None,
    ) -> bool:
        logger.info("Authorization requested for operation: %s", operation)
        request, future = self._queue.submit(operation, params, timeout)
        return await _await_decision(request, future, self._queue)


# ---------------------------------------------------------------------------
# Message rendering
# ---------------------------------------------------------------------------


def _truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    return text[:max_len] + "..."


def format_params(params: Mapping[str, Any]) -> str:
    """Render a params bag as bullet lines; long values are truncated."""
    lines: list[str] = []
    for key, value in params.items():
        if isinstance(value, str):
            formatted = _truncate(value, 100)
        elif isinstance(value, (dict, list, tuple)):
            formatted = _truncate(json.dumps(value, indent=2, default=str), 200)
        else:
            formatted = str(value)
        lines.append(f"  - {key}: {formatted}")
    return "\n".join(lines)


def format_request(request: AuthorizationRequest, *, now: datetime | None = None) -> str:
    """Render *request* for the approver."""
    remaining = int(request.remaining(now or datetime.now(UTC)))
    minutes, seconds = divmod(remaining, 60)
    parts = [
        "AUTHORIZATION REQUEST",
        "",
        f"Operation: {request.operation}",
        "",
        "Parameters:",
        format_params(request.params) or "  (none)",
        "",
        f"Expires in: {minutes}m {seconds}s",
        f"ID: {request.id}",
    ]
    return "\n".join(parts)


def approve_action(request_id: str) -> str:
    return f"{APPROVE_PREFIX}{request_id}"


def reject_action(request_id: str) -> str:
    return f"{REJECT_PREFIX}{request_id}"


# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------


class ChannelDelivery:
    """Send requests to an approver through an :class:`ApprovalChannel`.

    Satisfies the :class:`AuthorizationStrategy` protocol.  The channel is
    expected to offer the approver two actions, :func:`approve_action` and
    :func:`reject_action`, and to route the chosen one to
    :meth:`handle_callback`.

    *approver_id* is an opaque identifier supplied by the channel; when set,
    callbacks from any other id are refused.
    """

    def __init__(
        self,
        queue: AuthorizationQueue,
        channel: ApprovalChannel,
        *,
        approver_id: str | None = None,
        default_timeout: float | None = None,
    ) -> None:
        self._queue = queue
        self._channel = channel
        self._approver_id = approver_id
        self._default_timeout = default_timeout

    async def __call__(
        self,
        operation: str,
        params: Mapping[str, Any],
        timeout: float | None = None,
    ) -> bool:
        request, future = self._queue.submit(
            operation,
            params,
            timeout if timeout is not None else self._default_timeout,
        )

        try:
            await self._channel.send(request, format_request(request))
        except Exception as exc:
            logger.error("Failed to send authorization request %s: %s", request.id, exc)
            self._queue.reject(request.id, SEND_FAILED_REASON)
            raise

        logger.info("Authorization request sent to approver: %s", request.id)
        return await _await_decision(request, future, self._queue)

    def handle_callback(self, data: str, approver_id: str | None = None) -> str:
        """Apply an approve/reject action and return the acknowledgement text."""
        if self._approver_id is not None and approver_id != self._approver_id:
            logger.warning("Ignoring authorization callback from unexpected approver %s", approver_id)
            return "You are not allowed to resolve this request"

        if data.startswith(APPROVE_PREFIX):
            request_id = data[len(APPROVE_PREFIX) :]
            if self._queue.approve(request_id):
                logger.info("Authorization approved: %s", request_id)
                return "Operation approved"
        elif data.startswith(REJECT_PREFIX):
            request_id = data[len(REJECT_PREFIX) :]
            if self._queue.reject(request_id, CALLBACK_REJECT_REASON):
                logger.info("Authorization rejected: %s", request_id)
                return "Operation rejected"
        else:
            logger.debug("Unrecognised authorization callback: %s", data)
            return "Unknown action"

        return "Request already processed or expired"


class ConsoleDelivery:
    """Prompt at the terminal for approval.

    Satisfies the :class:`AuthorizationStrategy` protocol.

    Reads stdin on a daemon thread so the event loop is never blocked.  The
    queue's expiry still bounds the wait.  Each instance runs at most one
    reader: a thread left blocked by an expired prompt answers the next
    prompt instead of competing with a new reader.  Prompts on one instance
    are expected to be sequential.
    """

    def __init__(self, queue: AuthorizationQueue) -> None:
        self._queue = queue
        self._lock = threading.Lock()
        self._reading = False
        self._waiter: tuple[asyncio.AbstractEventLoop, asyncio.Future[str]] | None = None

    async def __call__(
        self,
        operation: str,
        params: Mapping[str, Any],
        timeout: float | None = None,
    ) -> bool:
        request, future = self._queue.submit(operation, params, timeout)
        self._print_summary(request)

        answer = self._next_answer(asyncio.get_running_loop())
        try:
            await asyncio.wait({future, answer}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            self._release(answer)

        if answer.done() and not future.done():
            if answer.result().strip().lower() in ("y", "yes"):
                self._queue.approve(request.id)
            else:
                self._queue.reject(request.id, "denied by user")

        return await _await_decision(request, future, self._queue)

    def _next_answer(self, loop: asyncio.AbstractEventLoop) -> asyncio.Future[str]:
        """Return a future for the next console line, starting a reader if none is running."""
        answer: asyncio.Future[str] = loop.create_future()
        with self._lock:
            self._waiter = (loop, answer)
            if not self._reading:
                self._reading = True
                threading.Thread(target=self._reader, name="rootguard-console", daemon=True).start()
        return answer

    def _release(self, answer: asyncio.Future[str]) -> None:
        with self._lock:
            if self._waiter is not None and self._waiter[1] is answer:
                self._waiter = None

    def _reader(self) -> None:
        try:
            text = self._read_input()
        except EOFError:
            text = ""

        with self._lock:
            self._reading = False
            waiter, self._waiter = self._waiter, None

        if waiter is None:
            logger.debug("Discarding console answer with no prompt waiting")
            return

        loop, answer = waiter
        try:
            loop.call_soon_threadsafe(_deliver_answer, answer, text)
        except RuntimeError:
            logger.debug("Console answer arrived after the event loop closed")

    @staticmethod
    def _print_summary(request: AuthorizationRequest) -> None:
        """Print a human-readable request summary to stdout."""
        sep = "-" * 60
        sys.stdout.write(f"\n{sep}\n")
        sys.stdout.write(format_request(request))
        sys.stdout.write(f"\n{sep}\n")
        sys.stdout.write("  Approve? [y/N]: ")
        sys.stdout.flush()

    @staticmethod
    def _read_input() -> str:
        """Blocking read from stdin (runs on the reader thread)."""
        return input()


def _deliver_answer(answer: asyncio.Future[str], text: str) -> None:
    if not answer.done():
        answer.set_result(text)
