"""modhost: a module registry that drives components through setup, init and start."""

from __future__ import annotations

from .config import HostConfig, ModuleSpec, load_config
from .context import RegistryContext, RegistryState
from .errors import (
    DuplicateRegistrationError,
    HostConfigError,
    InvalidArgumentError,
    ModuleLoadError,
    ModuleLookupError,
    NilModuleError,
    RegistryError,
)
from .host import ModuleHost, build_registry
from .loader import ModuleRef, load_module
from .logging_utils import configure_logging, get_logger
from .registry import ModuleRegistry

__all__ = [
    "DuplicateRegistrationError",
    "HostConfig",
    "HostConfigError",
    "InvalidArgumentError",
    "ModuleHost",
    "ModuleLoadError",
    "ModuleLookupError",
    "ModuleRef",
    "ModuleRegistry",
    "ModuleSpec",
    "NilModuleError",
    "RegistryContext",
    "RegistryError",
    "RegistryState",
    "build_registry",
    "configure_logging",
    "get_logger",
    "load_config",
    "load_module",
]
