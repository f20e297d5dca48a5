"""Module references and the import-based loader."""

from __future__ import annotations

import importlib
import re
from dataclasses import dataclass
from typing import Any, Callable

from .errors import InvalidArgumentError, ModuleLoadError

_DOTTED_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")

ModuleLoader = Callable[["ModuleRef"], Any]


@dataclass(frozen=True)
class ModuleRef:
    """Opaque reference to a loadable module.

    ``entrypoint`` is ``"package.module"`` or ``"package.module:attr"``; the
    attribute may itself be dotted. ``path`` is the fully-qualified location
    and ``name`` the bare name of the referenced value.
    """

    entrypoint: str

    def __post_init__(self) -> None:
        if not isinstance(self.entrypoint, str):
            raise InvalidArgumentError("Module reference must be a string entrypoint")
        entrypoint = self.entrypoint.strip()
        module_name, sep, attr = entrypoint.partition(":")
        if not _DOTTED_RE.match(module_name) or (sep and not _DOTTED_RE.match(attr)):
            raise InvalidArgumentError(f"Invalid module reference '{self.entrypoint}'")
        object.__setattr__(self, "entrypoint", entrypoint)

    @classmethod
    def parse(cls, value: "ModuleRef | str") -> "ModuleRef":
        if isinstance(value, cls):
            return value
        return cls(value)

    @property
    def module_name(self) -> str:
        return self.entrypoint.partition(":")[0]

    @property
    def attribute(self) -> str | None:
        return self.entrypoint.partition(":")[2] or None

    @property
    def path(self) -> str:
        return self.entrypoint

    @property
    def name(self) -> str:
        attr = self.attribute
        if attr:
            return attr.rsplit(".", 1)[-1]
        return self.module_name.rsplit(".", 1)[-1]

    def __str__(self) -> str:
        return self.entrypoint


def load_module(ref: ModuleRef) -> Any:
    try:
        value: Any = importlib.import_module(ref.module_name)
    except Exception as exc:
        raise ModuleLoadError(ref, f"{type(exc).__name__}: {exc}") from exc
    attr = ref.attribute
    if attr:
        for part in attr.split("."):
            try:
                value = getattr(value, part)
            except AttributeError as exc:
                raise ModuleLoadError(ref, f"missing attribute '{part}'") from exc
    return value
