"""Tests for the override registry."""

from __future__ import annotations

import pytest

from eventdecl.models import MemberEntry
from eventdecl.overrides import OverrideRegistry


def _generator(member: MemberEntry) -> list[str]:
    return [member.name]


def test_lookup_returns_registered_generator() -> None:
    registry = OverrideRegistry()
    registry.register("StartupEvents", "registry", _generator)

    assert registry.lookup("StartupEvents", "registry") is _generator
    assert registry.lookup("StartupEvents", "init") is None
    assert registry.lookup("ServerEvents", "registry") is None
    assert ("StartupEvents", "registry") in registry
    assert len(registry) == 1


def test_duplicate_registration_is_rejected() -> None:
    registry = OverrideRegistry()
    registry.register("G", "m", _generator)

    with pytest.raises(ValueError):
        registry.register("G", "m", _generator)


def test_frozen_registry_rejects_registration() -> None:
    registry = OverrideRegistry().freeze()

    assert registry.frozen
    with pytest.raises(RuntimeError):
        registry.register("G", "m", _generator)


def test_generator_must_be_callable() -> None:
    with pytest.raises(TypeError):
        OverrideRegistry().register("G", "m", "not callable")  # type: ignore[arg-type]
