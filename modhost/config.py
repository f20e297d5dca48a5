"""Host manifest loading and validation using Pydantic models."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .context import RegistryContext
from .errors import HostConfigError, InvalidArgumentError
from .loader import ModuleRef

CONTEXT_ENV = "MODHOST_CONTEXT"


class ModuleSpec(BaseModel):
    name: Optional[str] = Field(
        None,
        description="Registered name; defaults to the entrypoint's bare name.",
    )
    entrypoint: str = Field(..., description="Import path, 'package.module[:attr]'.")
    category: Optional[str] = Field(None, description="Start-order category.")

    @field_validator("name", "category")
    @classmethod
    def _validate_label(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("must be a non-empty string")
        return value

    @field_validator("entrypoint")
    @classmethod
    def _validate_entrypoint(cls, value: str) -> str:
        try:
            return ModuleRef(value).entrypoint
        except InvalidArgumentError as exc:
            raise ValueError(str(exc)) from exc

    @property
    def ref(self) -> ModuleRef:
        return ModuleRef.parse(self.entrypoint)

    @property
    def registered_name(self) -> str:
        return self.name or self.ref.name


class HostConfig(BaseModel):
    context: RegistryContext = RegistryContext.SHARED
    start_order: list[str] = Field(
        default_factory=list,
        description="Category start order; empty starts every module.",
    )
    run_setup: bool = Field(True, description="Call setup() on every module before init.")
    modules: list[ModuleSpec] = Field(default_factory=list)

    @field_validator("context", mode="before")
    @classmethod
    def _parse_context(cls, value: Any) -> RegistryContext:
        try:
            return RegistryContext.parse(value)
        except InvalidArgumentError as exc:
            raise ValueError(str(exc)) from exc

    @model_validator(mode="after")
    def _validate_names(self) -> "HostConfig":
        seen: set[str] = set()
        entrypoints: set[str] = set()
        for spec in self.modules:
            name = spec.registered_name
            if name in seen:
                raise ValueError(f"Duplicate module name: {name}")
            if spec.entrypoint in entrypoints:
                raise ValueError(f"Duplicate module entrypoint: {spec.entrypoint}")
            seen.add(name)
            entrypoints.add(spec.entrypoint)
        return self


def parse_config(payload: Any) -> HostConfig:
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise HostConfigError("Host manifest must be a mapping")
    override = os.environ.get(CONTEXT_ENV)
    if override:
        payload = {**payload, "context": override}
    try:
        return HostConfig.model_validate(payload)
    except ValidationError as exc:
        raise HostConfigError(str(exc)) from exc


def load_config(path: Path | str) -> HostConfig:
    """Load a YAML host manifest from disk."""

    config_path = Path(path)
    try:
        with config_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except OSError as exc:
        raise HostConfigError(f"Cannot read host manifest {config_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise HostConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
    return parse_config(data)
