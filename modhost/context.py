"""Execution context tags for a registry."""

from __future__ import annotations

from enum import Enum

from .errors import InvalidArgumentError


class RegistryContext(str, Enum):
    SERVER = "server"
    CLIENT = "client"
    SHARED = "shared"

    @classmethod
    def parse(cls, value: "RegistryContext | str") -> "RegistryContext":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        choices = ", ".join(item.value for item in cls)
        raise InvalidArgumentError(f"Unknown registry context {value!r} (expected one of: {choices})")


class RegistryState(str, Enum):
    CONSTRUCTED = "constructed"
    INITIALIZED = "initialized"
    STARTED = "started"
