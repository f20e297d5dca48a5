"""Module registry and lifecycle drivers."""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from .context import RegistryContext, RegistryState
from .errors import (
    DuplicateRegistrationError,
    InvalidArgumentError,
    ModuleLoadError,
    ModuleLookupError,
    NilModuleError,
    RegistryError,
)
from .loader import ModuleLoader, ModuleRef, load_module
from .logging_utils import get_logger
from .module import HOOK_DESTROY, HOOK_INIT, HOOK_SETUP, HOOK_START, lifecycle_hook
from .observability.metrics import (
    lifecycle_calls_total,
    lifecycle_failures_total,
    module_load_failures_total,
    module_registrations_total,
)


class ModuleRegistry:
    """Stores modules by name and drives their lifecycle in bulk.

    Typical use::

        registry = ModuleRegistry("server")
        registry.register("store", store_module, "core")
        registry.register(ModuleRef("app.services.audio"), ModuleRef("app.services.audio"))
        registry.init_all()
        registry.start_ordered(["core", "services"])

    Lookups by :class:`ModuleRef` try the reference's path first and fall
    back to its bare name. Hooks raising inside a pass are not caught; the
    pass stops at the failing module.
    """

    def __init__(
        self,
        context: RegistryContext | str,
        *,
        loader: ModuleLoader | None = None,
    ) -> None:
        self._context = RegistryContext.parse(context)
        self._loader = loader or load_module
        self._modules: dict[str, Any] = {}
        self._modules_by_path: dict[str, Any] = {}
        self._paths: dict[str, str] = {}
        self._categories: dict[str, str] = {}
        self._state = RegistryState.CONSTRUCTED
        self._init_passes = 0
        self._log = get_logger("registry", registry=self._context.value)

    @property
    def context(self) -> RegistryContext:
        return self._context

    @property
    def state(self) -> RegistryState:
        return self._state

    def register(
        self,
        name_or_ref: str | ModuleRef,
        module_source: Any,
        category: str | None = None,
    ) -> None:
        if module_source is None:
            raise NilModuleError("Module cannot be None")

        path: str | None = None
        if isinstance(name_or_ref, ModuleRef):
            name = name_or_ref.name
            path = name_or_ref.path
        else:
            if not isinstance(name_or_ref, str) or not name_or_ref.strip():
                raise InvalidArgumentError("Module name must be a non-empty string or ModuleRef")
            name = name_or_ref
        if path is None and isinstance(module_source, ModuleRef):
            path = module_source.path

        if category is not None and (not isinstance(category, str) or not category.strip()):
            raise InvalidArgumentError("Category must be a non-empty string when given")

        if name in self._modules:
            raise DuplicateRegistrationError(name)
        if path is not None and path in self._modules_by_path:
            raise DuplicateRegistrationError(path, key="path")

        module = module_source
        if isinstance(module_source, ModuleRef):
            module = self._load(module_source)
            if module is None:
                raise NilModuleError(f"Module reference '{module_source}' resolved to None")

        if self._state is not RegistryState.CONSTRUCTED:
            self._log.warning(
                "Late registration of '{}' after {}; its earlier lifecycle hooks will not run",
                name,
                self._state.value,
            )

        self._modules[name] = module
        if path is not None:
            self._modules_by_path[path] = module
            self._paths[name] = path
        if category is not None:
            self._categories[name] = category
        module_registrations_total.labels(category or "").inc()
        self._log.debug(
            "Registered '{}' (category={}, path={}) in {} registry",
            name,
            category,
            path,
            self._context.value,
        )

    def get(self, name_or_ref: str | ModuleRef) -> Any:
        if isinstance(name_or_ref, ModuleRef):
            if name_or_ref.path in self._modules_by_path:
                return self._modules_by_path[name_or_ref.path]
            name = name_or_ref.name
        else:
            name = name_or_ref
        try:
            return self._modules[name]
        except (KeyError, TypeError) as err:
            raise ModuleLookupError(str(name)) from err

    def names(self) -> list[str]:
        return list(self._modules)

    def category_of(self, name: str) -> str | None:
        self._require(name)
        return self._categories.get(name)

    def path_of(self, name: str) -> str | None:
        self._require(name)
        return self._paths.get(name)

    def modules_in(self, category: str) -> list[tuple[str, Any]]:
        return [
            (name, module)
            for name, module in self._modules.items()
            if self._categories.get(name) == category
        ]

    def items(self) -> Iterator[tuple[str, Any]]:
        return iter(list(self._modules.items()))

    def __contains__(self, name: object) -> bool:
        if isinstance(name, ModuleRef):
            return name.path in self._modules_by_path or name.name in self._modules
        return isinstance(name, str) and name in self._modules

    def __len__(self) -> int:
        return len(self._modules)

    def setup_all(self) -> None:
        for name, module in self.items():
            self._dispatch(name, module, HOOK_SETUP)

    def init_all(self) -> None:
        """Call ``init(registry, name)`` on every module that defines it.

        Every module is reachable through :meth:`get` from the moment it is
        registered, so an ``init`` may look up any other module regardless of
        registration order. Whether that module has itself been initialized
        yet is up to the caller. A second call runs every ``init`` again.
        """

        if self._init_passes:
            self._log.warning("init_all called again; re-running init on every module")
        self._init_passes += 1
        for name, module in self.items():
            self._dispatch(name, module, HOOK_INIT, self, name)
        if self._state is RegistryState.CONSTRUCTED:
            self._state = RegistryState.INITIALIZED

    def start_module(self, module: Any, name: str | None = None) -> None:
        self._dispatch(name or "<anonymous>", module, HOOK_START)

    def start_all(self) -> None:
        for name, module in self.items():
            self.start_module(module, name)
        self._state = RegistryState.STARTED

    def start_ordered(self, category_order: Iterable[str]) -> None:
        """Start modules category by category, in the given order.

        Modules without a category, or whose category is not listed, are not
        started.
        """

        if isinstance(category_order, str):
            raise InvalidArgumentError("category_order must be a sequence of category names")
        for category in category_order:
            for name, module in self.modules_in(category):
                self.start_module(module, name)
        self._state = RegistryState.STARTED

    def destroy_all(self) -> None:
        for name, module in reversed(list(self._modules.items())):
            self._dispatch(name, module, HOOK_DESTROY)

    def _dispatch(self, name: str, module: Any, hook: str, *args: Any) -> None:
        func = lifecycle_hook(module, hook)
        if func is None:
            return
        lifecycle_calls_total.labels(hook).inc()
        try:
            func(*args)
        except Exception:
            lifecycle_failures_total.labels(hook).inc()
            self._log.error("Module '{}' failed during {}", name, hook)
            raise

    def _load(self, ref: ModuleRef) -> Any:
        try:
            return self._loader(ref)
        except RegistryError:
            module_load_failures_total.inc()
            raise
        except Exception as exc:
            module_load_failures_total.inc()
            raise ModuleLoadError(ref, f"{type(exc).__name__}: {exc}") from exc

    def _require(self, name: str) -> None:
        if name not in self._modules:
            raise ModuleLookupError(name)
