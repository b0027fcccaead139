"""Tests for nearest-ancestor metadata resolution."""

from __future__ import annotations

from eventdecl.comments import CommentFragment
from eventdecl.graph import TypeGraph
from eventdecl.models import COMMENT, EXTRA_TYPE, ClassDescriptor
from eventdecl.resolver import PropertyResolver


def _cls(name: str, parent: str | None = None, interfaces=(), **metadata) -> ClassDescriptor:
    return ClassDescriptor(
        name=name,
        parent=parent,
        interfaces=tuple(interfaces),
        metadata={kind: tuple(values) for kind, values in metadata.items()},
    )


def test_find_property_returns_none_without_metadata() -> None:
    graph = TypeGraph(
        [_cls("a.Base"), _cls("a.Child", parent="a.Base", interfaces=["a.Iface"]), _cls("a.Iface")]
    )
    resolver = PropertyResolver(graph)

    assert resolver.find_property("a.Child", EXTRA_TYPE) is None


def test_find_property_prefers_own_fragment() -> None:
    graph = TypeGraph(
        [
            _cls("a.Base", extra_type=["base"]),
            _cls("a.Child", parent="a.Base", extra_type=["own", "second"]),
        ]
    )

    assert PropertyResolver(graph).find_property("a.Child", EXTRA_TYPE) == "own"


def test_parent_takes_priority_over_interfaces() -> None:
    graph = TypeGraph(
        [
            _cls("a.Parent", extra_type=["parent"]),
            _cls("a.Iface", extra_type=["iface"]),
            _cls("a.Child", parent="a.Parent", interfaces=["a.Iface"]),
        ]
    )

    assert PropertyResolver(graph).find_property("a.Child", EXTRA_TYPE) == "parent"


def test_later_interface_found_after_earlier_subtree_exhausted() -> None:
    graph = TypeGraph(
        [
            _cls("a.Parent"),
            _cls("a.First", parent="a.FirstBase"),
            _cls("a.FirstBase"),
            _cls("a.Second", extra_type=["second"]),
            _cls("a.Child", parent="a.Parent", interfaces=["a.First", "a.Second"]),
        ]
    )

    assert PropertyResolver(graph).find_property("a.Child", EXTRA_TYPE) == "second"


def test_interface_declaration_order_decides() -> None:
    graph = TypeGraph(
        [
            _cls("a.First", extra_type=["first"]),
            _cls("a.Second", extra_type=["second"]),
            _cls("a.Child", interfaces=["a.First", "a.Second"]),
        ]
    )

    assert PropertyResolver(graph).find_property("a.Child", EXTRA_TYPE) == "first"


def test_grandparent_fragment_beats_parent_interface() -> None:
    graph = TypeGraph(
        [
            _cls("a.Grand", extra_type=["grand"]),
            _cls("a.Iface", extra_type=["iface"]),
            _cls("a.Parent", parent="a.Grand", interfaces=["a.Iface"]),
            _cls("a.Child", parent="a.Parent"),
        ]
    )

    assert PropertyResolver(graph).find_property("a.Child", EXTRA_TYPE) == "grand"


def test_unresolvable_ancestors_end_the_walk() -> None:
    graph = TypeGraph([_cls("a.Child", parent="java.lang.Object", interfaces=["missing.Iface"])])

    assert PropertyResolver(graph).find_property("a.Child", EXTRA_TYPE) is None
    assert PropertyResolver(graph).find_property("not.In.Snapshot", EXTRA_TYPE) is None


def test_three_class_cycle_terminates() -> None:
    graph = TypeGraph(
        [
            _cls("a.A", parent="a.B"),
            _cls("a.B", parent="a.C"),
            _cls("a.C", parent="a.A"),
        ]
    )
    resolver = PropertyResolver(graph)

    assert resolver.find_property("a.A", EXTRA_TYPE) is None
    assert resolver.collect("a.A", COMMENT) == []


def test_cycle_branch_does_not_hide_other_interfaces() -> None:
    graph = TypeGraph(
        [
            _cls("a.Loop", interfaces=["a.Child"]),
            _cls("a.Found", extra_type=["found"]),
            _cls("a.Child", interfaces=["a.Loop", "a.Found"]),
        ]
    )

    assert PropertyResolver(graph).find_property("a.Child", EXTRA_TYPE) == "found"


def test_collect_orders_own_then_parent_then_interfaces() -> None:
    own = CommentFragment(("own",))
    parent = CommentFragment(("parent",))
    grand = CommentFragment(("grand",))
    iface = CommentFragment(("iface",))
    graph = TypeGraph(
        [
            _cls("a.Grand", comment=[grand]),
            _cls("a.Parent", parent="a.Grand", comment=[parent]),
            _cls("a.Iface", parent="a.Grand", comment=[iface]),
            _cls("a.Child", parent="a.Parent", interfaces=["a.Iface"], comment=[own]),
        ]
    )

    collected = PropertyResolver(graph).collect("a.Child", COMMENT)

    # The shared ancestor contributes once, when first reached through the parent.
    assert collected == [own, parent, grand, iface]
