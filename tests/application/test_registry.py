from __future__ import annotations

import pytest

from lib_dynamodb_config.application.registry import ComponentRegistry
from lib_dynamodb_config.domain.errors import MisconfigurationError


def test_register_and_get() -> None:
    registry = ComponentRegistry("main")
    component = object()
    assert registry.register("client", component) is component
    assert registry.get("client") is component
    assert registry.contains("client")
    assert registry.names() == ["client"]
    assert list(registry) == ["client"]


def test_register_if_missing_keeps_existing_component() -> None:
    registry = ComponentRegistry("main")
    host_component = object()
    registry.register("repository", host_component)
    assert registry.register_if_missing("repository", object()) is host_component


def test_missing_component_is_a_wiring_error() -> None:
    registry = ComponentRegistry("bootstrap")
    with pytest.raises(MisconfigurationError, match="bootstrap"):
        registry.get("client")


def test_registries_are_independent() -> None:
    main, bootstrap = ComponentRegistry("main"), ComponentRegistry("bootstrap")
    main.register("client", "main-client")
    bootstrap.register("client", "bootstrap-client")
    assert (main.get("client"), bootstrap.get("client")) == ("main-client", "bootstrap-client")
