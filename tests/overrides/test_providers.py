"""Tests for the built-in listing overrides."""

from __future__ import annotations

from pathlib import Path

from eventdecl.config import EventDeclConfig
from eventdecl.formatting import TypeFormatter
from eventdecl.models import ExtraParameter, MemberEntry
from eventdecl.overrides import OverrideRegistry, install_builtin_overrides, registry_listing, tag_listing


def test_registry_listing_emits_one_overload_per_registry(snapshot_builder) -> None:
    snapshot = snapshot_builder.add_class("x.RegistryEvent", type_parameters=["T"]).build()
    generator = registry_listing(["minecraft:block", "minecraft:item"], TypeFormatter(snapshot.graph))

    lines = generator(MemberEntry(name="registry", event_class="x.RegistryEvent"))

    assert lines == [
        '    registry(type: "minecraft:block", handler: (event: Internal.RegistryEvent<any>) => void):void,',
        '    registry(type: "minecraft:item", handler: (event: Internal.RegistryEvent<any>) => void):void,',
    ]


def test_tag_listing_uses_literal_extra_argument(snapshot_builder) -> None:
    snapshot = snapshot_builder.build()
    generator = tag_listing(["item"], TypeFormatter(snapshot.graph, namespace=None), indent=2)

    lines = generator(MemberEntry(name="tags", event_class="x.TagEvent", extra=ExtraParameter.REQUIRED))

    assert lines == ['  tags(extra: "item", handler: (event: TagEvent) => void):void,']


def test_install_registers_only_listings_with_names(snapshot_builder, tmp_path: Path) -> None:
    snapshot_builder.registries = ["minecraft:item"]
    snapshot = snapshot_builder.build()
    config = EventDeclConfig.defaults(tmp_path)
    registry = OverrideRegistry()

    install_builtin_overrides(registry, snapshot, config, TypeFormatter(snapshot.graph))

    assert registry.lookup("StartupEvents", "registry") is not None
    assert registry.lookup("ServerEvents", "tags") is None


def test_install_honours_disabled_targets(snapshot_builder, tmp_path: Path) -> None:
    snapshot_builder.registries = ["minecraft:item"]
    snapshot_builder.tags = ["item"]
    snapshot = snapshot_builder.build()
    config = EventDeclConfig.defaults(tmp_path)
    config.overrides.registry = None
    config.overrides.tags = "CustomEvents.tagged"
    registry = OverrideRegistry()

    install_builtin_overrides(registry, snapshot, config, TypeFormatter(snapshot.graph))

    assert list(registry) == [("CustomEvents", "tagged")]
