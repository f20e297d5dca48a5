"""Registry error types."""

from __future__ import annotations

from typing import Any


class RegistryError(RuntimeError):
    """Base error for the module registry."""


class InvalidArgumentError(RegistryError, ValueError):
    """Malformed registration argument (empty name, bad category, bad context)."""


class NilModuleError(RegistryError, ValueError):
    """No module value was supplied, or the loader resolved to nothing."""


class DuplicateRegistrationError(RegistryError):
    """A module is already registered under the given name or path."""

    def __init__(self, name: str, *, key: str = "name") -> None:
        super().__init__(f"Duplicate module registration ({key}): {name}")
        self.name = name
        self.key = key


class ModuleLookupError(RegistryError, LookupError):
    """No module registered under the requested name or path."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Module not found: {identifier}")
        self.identifier = identifier


class ModuleLoadError(RegistryError):
    """The loader failed to resolve a module reference."""

    def __init__(self, ref: Any, reason: str) -> None:
        super().__init__(f"Failed to load module '{ref}': {reason}")
        self.ref = ref


class HostConfigError(RegistryError):
    """Invalid host manifest."""
