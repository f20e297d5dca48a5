"""Module contract: optional lifecycle hooks and dispatch helpers.

A module is any value. Each hook is looked up by attribute name and called
only when present and callable, so classes, instances, imported Python
modules and plain namespaces all qualify. Values that are themselves plain
functions never receive lifecycle calls.
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any, Callable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .registry import ModuleRegistry

HOOK_SETUP = "setup"
HOOK_INIT = "init"
HOOK_START = "start"
HOOK_DESTROY = "destroy"

LIFECYCLE_HOOKS = (HOOK_SETUP, HOOK_INIT, HOOK_START, HOOK_DESTROY)


@runtime_checkable
class SupportsSetup(Protocol):
    def setup(self) -> None: ...


@runtime_checkable
class SupportsInit(Protocol):
    def init(self, registry: "ModuleRegistry", name: str) -> None: ...


@runtime_checkable
class SupportsStart(Protocol):
    def start(self) -> None: ...


@runtime_checkable
class SupportsDestroy(Protocol):
    def destroy(self) -> None: ...


def lifecycle_hook(module: Any, hook: str) -> Callable[..., Any] | None:
    """Return the bound hook for *module*, or ``None`` when it does not define one."""

    if hook not in LIFECYCLE_HOOKS:
        raise ValueError(f"Unknown lifecycle hook: {hook}")
    if module is None or inspect.isfunction(module) or inspect.isbuiltin(module):
        return None
    func = getattr(module, hook, None)
    if func is None or not callable(func):
        return None
    return func


def hooks_of(module: Any) -> list[str]:
    return [hook for hook in LIFECYCLE_HOOKS if lifecycle_hook(module, hook) is not None]
