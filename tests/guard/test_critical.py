"""Tests for CriticalOperations."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock

import pytest
import yaml

from rootguard.errors import AuthorizationRejectedError
from rootguard.guard.critical import CriticalOperations, set_dotted
from rootguard.guard.guard import RootGuard


def _ops(
    approved: bool, tmp_path: Path, **handlers: AsyncMock
) -> tuple[CriticalOperations, AsyncMock]:
    strategy = AsyncMock(return_value=approved)
    guard = RootGuard(request_authorization=strategy)
    return CriticalOperations(guard, sessions_dir=tmp_path / "sessions", **handlers), strategy


class TestFiles:
    async def test_delete_file_approved(self, tmp_path: Path) -> None:
        target = tmp_path / "notes.txt"
        target.write_text("x")
        ops, strategy = _ops(True, tmp_path)

        await ops.delete_file(target)

        assert not target.exists()
        operation, params, _ = strategy.await_args.args
        assert operation == "file_delete"
        assert params["path"] == str(target)
        assert "timestamp" in params

    async def test_delete_file_rejected_leaves_file(self, tmp_path: Path) -> None:
        target = tmp_path / "notes.txt"
        target.write_text("x")
        ops, _ = _ops(False, tmp_path)

        with pytest.raises(AuthorizationRejectedError):
            await ops.delete_file(target)
        assert target.read_text() == "x"

    async def test_delete_missing_file(self, tmp_path: Path) -> None:
        ops, strategy = _ops(True, tmp_path)
        with pytest.raises(FileNotFoundError):
            await ops.delete_file(tmp_path / "missing.txt")
        strategy.assert_awaited_once()

    async def test_write_file(self, tmp_path: Path) -> None:
        target = tmp_path / "out.txt"
        ops, strategy = _ops(True, tmp_path)

        await ops.write_file(target, "hello")

        assert target.read_text() == "hello"
        params = strategy.await_args.args[1]
        assert params["content_length"] == 5

    async def test_write_file_rejected(self, tmp_path: Path) -> None:
        target = tmp_path / "out.txt"
        ops, _ = _ops(False, tmp_path)
        with pytest.raises(AuthorizationRejectedError):
            await ops.write_file(target, "hello")
        assert not target.exists()

    async def test_delete_directory(self, tmp_path: Path) -> None:
        target = tmp_path / "data"
        (target / "nested").mkdir(parents=True)
        (target / "nested" / "f.txt").write_text("x")
        ops, strategy = _ops(True, tmp_path)

        await ops.delete_directory(target)

        assert not target.exists()
        assert strategy.await_args.args[1]["is_directory"] is True


class TestConfig:
    async def test_modify_config_sets_dotted_key(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("guard:\n  enabled: true\n")
        ops, strategy = _ops(True, tmp_path)

        await ops.modify_config(config_file, "guard.default_timeout", 60)

        data = yaml.safe_load(config_file.read_text())
        assert data == {"guard": {"enabled": True, "default_timeout": 60}}
        params = strategy.await_args.args[1]
        assert params["path"] == "guard.default_timeout"
        assert params["value"] == 60

    async def test_modify_config_creates_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "new.yaml"
        ops, _ = _ops(True, tmp_path)
        await ops.modify_config(config_file, "a.b", "c")
        assert yaml.safe_load(config_file.read_text()) == {"a": {"b": "c"}}

    async def test_modify_config_rejects_non_mapping(self, tmp_path: Path) -> None:
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- 1\n- 2\n")
        ops, _ = _ops(True, tmp_path)
        with pytest.raises(ValueError, match="must contain a mapping"):
            await ops.modify_config(config_file, "a", 1)

    async def test_modify_config_rejected(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("a: 1\n")
        ops, _ = _ops(False, tmp_path)
        with pytest.raises(AuthorizationRejectedError):
            await ops.modify_config(config_file, "a", 2)
        assert yaml.safe_load(config_file.read_text()) == {"a": 1}


class TestSessions:
    async def test_delete_existing_session(self, tmp_path: Path) -> None:
        sessions = tmp_path / "sessions"
        sessions.mkdir()
        (sessions / "abc.jsonl").write_text("{}\n")
        ops, strategy = _ops(True, tmp_path)

        assert await ops.delete_agent_session("abc") is True
        assert not (sessions / "abc.jsonl").exists()
        assert strategy.await_args.args[0] == "user_delete"

    async def test_delete_missing_session(self, tmp_path: Path) -> None:
        ops, _ = _ops(True, tmp_path)
        assert await ops.delete_agent_session("nope") is False


class TestHandlers:
    async def test_handlers_called_after_approval(self, tmp_path: Path) -> None:
        restart = AsyncMock()
        shutdown = AsyncMock()
        drop = AsyncMock()
        grant = AsyncMock()
        ops, strategy = _ops(
            True,
            tmp_path,
            restart_handler=restart,
            shutdown_handler=shutdown,
            drop_database_handler=drop,
            grant_permissions_handler=grant,
        )

        await ops.restart_system("deploy")
        await ops.shutdown_system()
        await ops.drop_database("orders")
        await ops.grant_permissions("u1", ["admin"])

        restart.assert_awaited_once_with()
        shutdown.assert_awaited_once_with()
        drop.assert_awaited_once_with("orders")
        grant.assert_awaited_once_with("u1", ["admin"])
        assert [c.args[0] for c in strategy.await_args_list] == [
            "system_restart",
            "system_shutdown",
            "database_drop",
            "permission_grant",
        ]

    async def test_handlers_not_called_when_rejected(self, tmp_path: Path) -> None:
        restart = AsyncMock()
        drop = AsyncMock()
        ops, _ = _ops(False, tmp_path, restart_handler=restart, drop_database_handler=drop)

        with pytest.raises(AuthorizationRejectedError):
            await ops.restart_system()
        with pytest.raises(AuthorizationRejectedError):
            await ops.drop_database("orders")

        restart.assert_not_awaited()
        drop.assert_not_awaited()

    async def test_no_handler_is_fine(self, tmp_path: Path) -> None:
        ops, _ = _ops(True, tmp_path)
        await ops.restart_system()
        await ops.grant_permissions("u1", ["read"])


class TestSetDotted:
    def test_nested(self) -> None:
        data: dict = {"a": {"x": 1}}
        set_dotted(data, "a.b.c", 2)
        assert data == {"a": {"x": 1, "b": {"c": 2}}}

    def test_replaces_scalar_parent(self) -> None:
        data: dict = {"a": 1}
        set_dotted(data, "a.b", 2)
        assert data == {"a": {"b": 2}}

    def test_top_level(self) -> None:
        data: dict = {}
        set_dotted(data, "key", "v")
        assert data == {"key": "v"}
