"""rootguard — two-stage guard for dangerous operations.

A static role-based tool filter decides whether a caller may request a tool
at all; an asynchronous approval queue pauses critical operations until a
human approver signs off.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from rootguard.access.filter import ToolAccessFilter as ToolAccessFilter
    from rootguard.access.roles import RoleResolver as RoleResolver
    from rootguard.authorization.queue import AuthorizationQueue as AuthorizationQueue
    from rootguard.config.loader import build_components as build_components
    from rootguard.guard.guard import RootGuard as RootGuard

_LAZY_EXPORTS = {
    "ToolAccessFilter": "rootguard.access.filter",
    "RoleResolver": "rootguard.access.roles",
    "AuthorizationQueue": "rootguard.authorization.queue",
    "RootGuard": "rootguard.guard.guard",
    "build_components": "rootguard.config.loader",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'rootguard' has no attribute {name!r}")
