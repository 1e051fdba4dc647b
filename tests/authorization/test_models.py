"""Tests for authorization data models."""

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError

from rootguard.authorization.models import (
    AuthorizationRequest,
    AuthorizationStatus,
    CleanupReport,
    QueueConfig,
)

T0 = datetime(2026, 1, 1, tzinfo=UTC)


def _request(**overrides: object) -> AuthorizationRequest:
    data: dict[str, object] = {
        "id": "auth_1",
        "operation": "file_delete",
        "created_at": T0,
        "expires_at": T0 + timedelta(seconds=300),
    }
    data.update(overrides)
    return AuthorizationRequest(**data)  # type: ignore[arg-type]


class TestAuthorizationStatus:
    def test_only_pending_is_non_terminal(self) -> None:
        assert AuthorizationStatus.PENDING.is_terminal is False
        for status in (
            AuthorizationStatus.APPROVED,
            AuthorizationStatus.REJECTED,
            AuthorizationStatus.EXPIRED,
        ):
            assert status.is_terminal is True

    def test_values(self) -> None:
        assert AuthorizationStatus("expired") is AuthorizationStatus.EXPIRED


class TestAuthorizationRequest:
    def test_defaults(self) -> None:
        req = _request()
        assert req.status is AuthorizationStatus.PENDING
        assert req.params == {}
        assert req.rejection_reason is None
        assert req.timeout == 300.0

    def test_is_due(self) -> None:
        req = _request()
        assert req.is_due(T0) is False
        assert req.is_due(T0 + timedelta(seconds=299)) is False
        assert req.is_due(T0 + timedelta(seconds=300)) is True

    def test_terminal_request_is_never_due(self) -> None:
        req = _request(status=AuthorizationStatus.APPROVED)
        assert req.is_due(T0 + timedelta(days=1)) is False

    def test_remaining_never_negative(self) -> None:
        req = _request()
        assert req.remaining(T0 + timedelta(seconds=100)) == 200.0
        assert req.remaining(T0 + timedelta(seconds=900)) == 0.0

    def test_serialization(self) -> None:
        req = _request(params={"path": "/tmp/x"})
        data = req.model_dump(mode="json")
        assert data["status"] == "pending"
        assert data["params"] == {"path": "/tmp/x"}


class TestQueueConfig:
    def test_defaults(self) -> None:
        config = QueueConfig()
        assert config.default_timeout == 300.0
        assert config.cleanup_interval == 60.0
        assert config.retention == 3600.0

    @pytest.mark.parametrize("field", ["default_timeout", "cleanup_interval", "retention"])
    def test_rejects_non_positive(self, field: str) -> None:
        with pytest.raises(ValidationError):
            QueueConfig(**{field: 0})


def test_cleanup_report_defaults() -> None:
    report = CleanupReport()
    assert report.expired == []
    assert report.purged == 0
