"""Critical operations protected by the root guard.

Each method asks for authorization first and only then touches the system.
Authorization errors propagate unchanged so the operation aborts entirely.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from rootguard.guard.operations import RootOperation

if TYPE_CHECKING:
    from rootguard.guard.guard import RootGuard

logger = logging.getLogger(__name__)

Handler = Callable[..., Awaitable[None]]


def _timestamp() -> str:
    return datetime.now(UTC).isoformat()


def set_dotted(data: dict[str, Any], key: str, value: Any) -> None:
    """Set ``data["a"]["b"]`` for key ``"a.b"``, creating mappings as needed."""
    parts = key.split(".")
    node = data
    for part in parts[:-1]:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child
    node[parts[-1]] = value


class CriticalOperations:
    """File, config, user and system operations gated by a :class:`RootGuard`.

    Operations without a natural local implementation (dropping a database,
    granting permissions, restarting or shutting down the service) delegate
    to injected async handlers; without a handler they only log.
    """

    def __init__(
        self,
        guard: RootGuard,
        *,
        sessions_dir: Path | None = None,
        restart_handler: Handler | None = None,
        shutdown_handler: Handler | None = None,
        drop_database_handler: Handler | None = None,
        grant_permissions_handler: Handler | None = None,
    ) -> None:
        self._guard = guard
        self._sessions_dir = sessions_dir or Path.home() / ".rootguard" / "sessions"
        self._restart_handler = restart_handler
        self._shutdown_handler = shutdown_handler
        self._drop_database_handler = drop_database_handler
        self._grant_permissions_handler = grant_permissions_handler

    async def delete_file(self, path: Path) -> None:
        await self._guard.require_authorization(
            RootOperation.FILE_DELETE.value,
            {"path": str(path), "timestamp": _timestamp()},
        )
        if not path.exists():
            msg = f"File not found: {path}"
            raise FileNotFoundError(msg)
        path.unlink()
        logger.info("File deleted with authorization: %s", path)

    async def write_file(self, path: Path, content: str) -> None:
        await self._guard.require_authorization(
            RootOperation.FILE_WRITE.value,
            {"path": str(path), "content_length": len(content), "timestamp": _timestamp()},
        )
        path.write_text(content, encoding="utf-8")
        logger.info("File written with authorization: %s", path)

    async def delete_directory(self, path: Path) -> None:
        await self._guard.require_authorization(
            RootOperation.FILE_DELETE.value,
            {"path": str(path), "is_directory": True, "timestamp": _timestamp()},
        )
        if not path.is_dir():
            msg = f"Directory not found: {path}"
            raise FileNotFoundError(msg)
        shutil.rmtree(path)
        logger.info("Directory deleted with authorization: %s", path)

    async def modify_config(self, config_file: Path, key: str, value: Any) -> None:
        """Set dotted *key* to *value* in the YAML file *config_file*."""
        await self._guard.require_authorization(
            RootOperation.CONFIG_MODIFY.value,
            {"file": str(config_file), "path": key, "value": value, "timestamp": _timestamp()},
        )
        data: Any = {}
        if config_file.exists():
            data = yaml.safe_load(config_file.read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            msg = f"Config file {config_file} must contain a mapping"
            raise ValueError(msg)

        set_dotted(data, key, value)
        config_file.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        logger.info("Config modified with authorization: %s", key)

    async def delete_agent_session(self, session_key: str) -> bool:
        """Delete a stored agent session; returns ``False`` if none existed."""
        await self._guard.require_authorization(
            RootOperation.USER_DELETE.value,
            {"session_key": session_key, "type": "agent_session", "timestamp": _timestamp()},
        )
        session_file = self._sessions_dir / f"{session_key}.jsonl"
        if not session_file.exists():
            logger.warning("Session file not found: %s", session_file)
            return False
        session_file.unlink()
        logger.info("Agent session deleted with authorization: %s", session_key)
        return True

    async def grant_permissions(self, user_id: str, permissions: list[str]) -> None:
        await self._guard.require_authorization(
            RootOperation.PERMISSION_GRANT.value,
            {"user_id": user_id, "permissions": list(permissions), "timestamp": _timestamp()},
        )
        if self._grant_permissions_handler is not None:
            await self._grant_permissions_handler(user_id, list(permissions))
        logger.info("Permissions granted to user %s: %s", user_id, ", ".join(permissions))

    async def drop_database(self, database_name: str) -> None:
        await self._guard.require_authorization(
            RootOperation.DATABASE_DROP.value,
            {"database_name": database_name, "timestamp": _timestamp()},
        )
        if self._drop_database_handler is not None:
            await self._drop_database_handler(database_name)
        logger.info("Database dropped with authorization: %s", database_name)

    async def restart_system(self, reason: str = "Manual restart requested") -> None:
        await self._guard.require_authorization(
            RootOperation.SYSTEM_RESTART.value,
            {"service": "gateway", "reason": reason, "timestamp": _timestamp()},
        )
        logger.info("System restart authorized")
        if self._restart_handler is not None:
            await self._restart_handler()

    async def shutdown_system(self, reason: str = "Manual shutdown requested") -> None:
        await self._guard.require_authorization(
            RootOperation.SYSTEM_SHUTDOWN.value,
            {"service": "gateway", "reason": reason, "timestamp": _timestamp()},
        )
        logger.info("System shutdown authorized")
        if self._shutdown_handler is not None:
            await self._shutdown_handler()
