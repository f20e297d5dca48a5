"""Bring a registry up from a host manifest."""

from __future__ import annotations

from typing import Iterable

from .config import HostConfig
from .loader import ModuleLoader
from .logging_utils import get_logger
from .module import hooks_of
from .registry import ModuleRegistry

_log = get_logger("host")


def build_registry(config: HostConfig, *, loader: ModuleLoader | None = None) -> ModuleRegistry:
    registry = ModuleRegistry(config.context, loader=loader)
    for spec in config.modules:
        if spec.name:
            registry.register(spec.name, spec.ref, spec.category)
        else:
            registry.register(spec.ref, spec.ref, spec.category)
    _log.info(
        "Built {} registry with {} module(s)",
        registry.context.value,
        len(registry),
    )
    return registry


class ModuleHost:
    def __init__(
        self,
        registry: ModuleRegistry,
        *,
        start_order: Iterable[str] | None = None,
        run_setup: bool = True,
    ) -> None:
        self._registry = registry
        self._start_order = list(start_order or [])
        self._run_setup = run_setup

    @classmethod
    def from_config(cls, config: HostConfig, *, loader: ModuleLoader | None = None) -> "ModuleHost":
        return cls(
            build_registry(config, loader=loader),
            start_order=config.start_order,
            run_setup=config.run_setup,
        )

    @property
    def registry(self) -> ModuleRegistry:
        return self._registry

    def start(self) -> None:
        if self._run_setup:
            self._registry.setup_all()
        self._registry.init_all()
        if self._start_order:
            self._registry.start_ordered(self._start_order)
            skipped = [
                name
                for name in self._registry.names()
                if self._registry.category_of(name) not in self._start_order
            ]
            if skipped:
                _log.info("Not started (no listed category): {}", ", ".join(skipped))
        else:
            self._registry.start_all()
        _log.info("Started {} module(s)", len(self._registry))

    def stop(self) -> None:
        self._registry.destroy_all()

    def health(self) -> dict[str, dict]:
        report: dict[str, dict] = {}
        for name, module in self._registry.items():
            report[name] = {
                "category": self._registry.category_of(name),
                "path": self._registry.path_of(name),
                "hooks": hooks_of(module),
            }
        return report
