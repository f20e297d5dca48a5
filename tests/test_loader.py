from __future__ import annotations

import pytest

from modhost import (
    DuplicateRegistrationError,
    InvalidArgumentError,
    ModuleLoadError,
    ModuleLookupError,
    ModuleRef,
    ModuleRegistry,
    NilModuleError,
    load_module,
)


def test_ref_name_and_path() -> None:
    ref = ModuleRef("modhost_fixtures.services:cache")
    assert ref.path == "modhost_fixtures.services:cache"
    assert ref.name == "cache"
    assert ref.module_name == "modhost_fixtures.services"
    assert ModuleRef("modhost_fixtures.audio").name == "audio"
    assert ModuleRef("pkg.mod:Outer.inner").name == "inner"
    assert ModuleRef(" pkg.mod ").path == "pkg.mod"


def test_ref_parse_accepts_strings_and_refs() -> None:
    ref = ModuleRef("pkg.mod:attr")
    assert ModuleRef.parse(ref) is ref
    assert ModuleRef.parse("pkg.mod:attr") == ref
    with pytest.raises(InvalidArgumentError):
        ModuleRef.parse("not valid")


@pytest.mark.parametrize("entrypoint", ["", "pkg..mod", "pkg.mod:", ":attr", "1pkg", "pkg mod"])
def test_ref_rejects_malformed_entrypoints(entrypoint: str) -> None:
    with pytest.raises(InvalidArgumentError):
        ModuleRef(entrypoint)


def test_load_module_resolves_attribute_and_module() -> None:
    import modhost_fixtures.audio as audio
    import modhost_fixtures.services as services

    assert load_module(ModuleRef("modhost_fixtures.services:cache")) is services.cache
    assert load_module(ModuleRef("modhost_fixtures.audio")) is audio


def test_load_module_failures_are_wrapped() -> None:
    with pytest.raises(ModuleLoadError):
        load_module(ModuleRef("modhost_fixtures.does_not_exist"))
    with pytest.raises(ModuleLoadError) as excinfo:
        load_module(ModuleRef("modhost_fixtures.services:missing"))
    assert isinstance(excinfo.value.__cause__, AttributeError)


def test_register_ref_derives_name_and_path() -> None:
    import modhost_fixtures.services as services

    registry = ModuleRegistry("server")
    ref = ModuleRef("modhost_fixtures.services:cache")
    registry.register(ref, ref, "core")
    assert registry.get("cache") is services.cache
    assert registry.get(ref) is services.cache
    assert registry.path_of("cache") == ref.path
    assert ref in registry


def test_string_name_with_ref_source_records_source_path() -> None:
    import modhost_fixtures.services as services

    registry = ModuleRegistry("server")
    registry.register("cache_service", ModuleRef("modhost_fixtures.services:cache"))
    assert registry.get("cache_service") is services.cache
    assert registry.path_of("cache_service") == "modhost_fixtures.services:cache"
    assert registry.get(ModuleRef("modhost_fixtures.services:cache")) is services.cache


def test_ref_lookup_prefers_path_over_name() -> None:
    by_name = object()
    by_path = object()
    registry = ModuleRegistry("shared", loader=lambda ref: by_path)
    registry.register("cache", by_name)
    registry.register("cache_by_path", ModuleRef("pkg.mod:cache"))
    assert registry.get(ModuleRef("pkg.mod:cache")) is by_path
    assert registry.get("cache") is by_name


def test_ref_lookup_falls_back_to_bare_name() -> None:
    registry = ModuleRegistry("shared")
    module = object()
    registry.register("cache", module)
    assert registry.get(ModuleRef("somewhere.else:cache")) is module
    with pytest.raises(ModuleLookupError) as excinfo:
        registry.get(ModuleRef("somewhere.else:audio"))
    assert excinfo.value.identifier == "audio"


def test_loader_runs_once_per_registration() -> None:
    calls: list[ModuleRef] = []
    module = object()

    def loader(ref: ModuleRef) -> object:
        calls.append(ref)
        return module

    registry = ModuleRegistry("server", loader=loader)
    ref = ModuleRef("pkg.store")
    registry.register(ref, ref)
    assert calls == [ref]
    assert registry.get("store") is module


def test_duplicate_never_invokes_loader() -> None:
    calls: list[ModuleRef] = []

    def loader(ref: ModuleRef) -> object:
        calls.append(ref)
        return object()

    registry = ModuleRegistry("server", loader=loader)
    registry.register("store", object())
    with pytest.raises(DuplicateRegistrationError):
        registry.register("store", ModuleRef("pkg.store"))
    assert calls == []
    assert registry.path_of("store") is None


def test_duplicate_path_rejected() -> None:
    registry = ModuleRegistry("server", loader=lambda ref: object())
    registry.register("first", ModuleRef("pkg.store"))
    with pytest.raises(DuplicateRegistrationError) as excinfo:
        registry.register("second", ModuleRef("pkg.store"))
    assert excinfo.value.key == "path"
    assert "second" not in registry


def test_loader_returning_none_is_nil_module() -> None:
    registry = ModuleRegistry("server")
    with pytest.raises(NilModuleError):
        registry.register("nothing", ModuleRef("modhost_fixtures.services:nothing"))
    assert "nothing" not in registry
    with pytest.raises(ModuleLookupError):
        registry.get(ModuleRef("modhost_fixtures.services:nothing"))


def test_failed_load_leaves_registry_unchanged() -> None:
    registry = ModuleRegistry("server")
    with pytest.raises(ModuleLoadError):
        registry.register("ghost", ModuleRef("modhost_fixtures.services:ghost"), "core")
    assert len(registry) == 0
    assert registry.modules_in("core") == []


def test_python_module_hooks_are_dispatched() -> None:
    registry = ModuleRegistry("client")
    cache_ref = ModuleRef("modhost_fixtures.services:cache")
    audio_ref = ModuleRef("modhost_fixtures.audio")
    registry.register(cache_ref, cache_ref)
    registry.register(audio_ref, audio_ref, "media")
    registry.init_all()
    registry.start_ordered(["media"])
    audio = registry.get("audio")
    assert audio.calls == [("init", "audio"), ("start", "audio")]
    assert registry.get("cache").calls == ["init:cache"]


def test_import_time_error_is_wrapped() -> None:
    registry = ModuleRegistry("server")
    with pytest.raises(ModuleLoadError) as excinfo:
        registry.register("broken", ModuleRef("modhost_fixtures.broken"))
    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert "broken fixture refuses to import" in str(excinfo.value)
    assert "broken" not in registry


def test_custom_loader_errors_are_wrapped() -> None:
    def loader(ref: ModuleRef) -> object:
        raise ValueError("nope")

    registry = ModuleRegistry("server", loader=loader)
    ref = ModuleRef("pkg.store")
    with pytest.raises(ModuleLoadError) as excinfo:
        registry.register(ref, ref)
    assert excinfo.value.ref == ref
    assert isinstance(excinfo.value.__cause__, ValueError)
    assert len(registry) == 0


def test_custom_loader_registry_errors_pass_through() -> None:
    def loader(ref: ModuleRef) -> object:
        raise ModuleLoadError(ref, "unavailable")

    registry = ModuleRegistry("server", loader=loader)
    with pytest.raises(ModuleLoadError) as excinfo:
        registry.register("store", ModuleRef("pkg.store"))
    assert excinfo.value.__cause__ is None
