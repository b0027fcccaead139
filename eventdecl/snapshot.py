"""Loading of reflected class and event group snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

from .comments import CommentFragment
from .formatting import TypeFormatError, parse_type_ref
from .graph import TypeGraph
from .logging import get_logger
from .models import COMMENT, EXTRA_TYPE, ClassDescriptor, ExtraParameter, Group, MemberEntry

_YAML_SUFFIXES = {".yml", ".yaml"}

logger = get_logger("snapshot")


class SnapshotError(RuntimeError):
    """Raised when a snapshot document is missing or malformed."""


@dataclass
class Snapshot:
    """Point-in-time view of the host's types and event registrations."""

    graph: TypeGraph
    groups: Dict[str, Group] = field(default_factory=dict)
    registries: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)


def load_snapshot(path: Path) -> Snapshot:
    """Read a JSON or YAML snapshot from disk."""
    path = Path(path).expanduser()
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SnapshotError(f"Snapshot not found: {path}") from exc

    try:
        if path.suffix.lower() in _YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise SnapshotError(f"Failed to parse {path.name}: {exc}") from exc

    snapshot = parse_snapshot(data or {})
    logger.debug(
        "Loaded snapshot %s: %d classes, %d groups",
        path,
        len(snapshot.graph),
        len(snapshot.groups),
    )
    return snapshot


def parse_snapshot(data: Any) -> Snapshot:
    """Build a :class:`Snapshot` from its decoded document."""
    if not isinstance(data, dict):
        raise SnapshotError("Snapshot must contain a mapping at the root")

    classes = data.get("classes") or []
    if not isinstance(classes, list):
        raise SnapshotError("'classes' must be a list")
    try:
        graph = TypeGraph(_parse_class(entry) for entry in classes)
    except ValueError as exc:
        raise SnapshotError(str(exc)) from exc

    groups_data = data.get("groups") or {}
    if not isinstance(groups_data, dict):
        raise SnapshotError("'groups' must map group names to members")
    groups = {name: _parse_group(str(name), members) for name, members in groups_data.items()}

    return Snapshot(
        graph=graph,
        groups=groups,
        registries=_as_str_list(data.get("registries"), "registries"),
        tags=_as_str_list(data.get("tags"), "tags"),
    )


def _parse_class(entry: Any) -> ClassDescriptor:
    if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
        raise SnapshotError(f"Class entry requires a 'name': {entry!r}")
    name = entry["name"]

    metadata: Dict[str, Tuple[Any, ...]] = {}
    comments = _parse_comments(entry.get("comment"), name)
    if comments:
        metadata[COMMENT] = comments
    if entry.get("extra_type") is not None:
        try:
            metadata[EXTRA_TYPE] = (parse_type_ref(entry["extra_type"]),)
        except TypeFormatError as exc:
            raise SnapshotError(f"Invalid extra_type on {name}: {exc}") from exc

    parent = entry.get("parent")
    if parent is not None and not isinstance(parent, str):
        raise SnapshotError(f"Parent of {name} must be a class name")

    return ClassDescriptor(
        name=name,
        parent=parent or None,
        interfaces=tuple(_as_str_list(entry.get("interfaces"), f"{name}.interfaces")),
        type_parameters=tuple(
            _as_str_list(entry.get("type_parameters"), f"{name}.type_parameters")
        ),
        metadata=metadata,
    )


def _parse_comments(value: Any, owner: str) -> Tuple[CommentFragment, ...]:
    # A string is one fragment; in a list each item is a fragment, itself a
    # string or a list of lines.
    if value is None:
        return ()
    if isinstance(value, str):
        return (CommentFragment.of(value),)
    if not isinstance(value, list):
        raise SnapshotError(f"Comment of {owner} must be a string or a list")
    fragments = []
    for item in value:
        if isinstance(item, (str, list)):
            fragments.append(CommentFragment.of(item))
        else:
            raise SnapshotError(f"Unsupported comment fragment on {owner}: {item!r}")
    return tuple(fragments)


def _parse_group(name: str, members: Any) -> Group:
    if not isinstance(members, dict):
        raise SnapshotError(f"Group '{name}' must map member names to handlers")
    group = Group(name=name)
    for member_name, payload in members.items():
        group.add(_parse_member(name, str(member_name), payload))
    return group


def _parse_member(group: str, name: str, payload: Any) -> MemberEntry:
    if not isinstance(payload, dict) or not isinstance(payload.get("event"), str):
        raise SnapshotError(f"Member {group}.{name} requires an 'event' class name")
    try:
        extra = ExtraParameter.parse(payload.get("extra"))
    except ValueError as exc:
        raise SnapshotError(f"Member {group}.{name}: {exc}") from exc
    return MemberEntry(
        name=name,
        event_class=payload["event"],
        extra=extra,
        contexts=tuple(_as_str_list(payload.get("contexts"), f"{group}.{name}.contexts")),
        cancellable=_as_bool(payload.get("cancellable"), f"{group}.{name}.cancellable"),
    )


def _as_bool(value: Any, label: str) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    raise SnapshotError(f"'{label}' must be a boolean")


def _as_str_list(value: Any, label: str) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    raise SnapshotError(f"'{label}' must be a list of strings")


__all__ = ["Snapshot", "SnapshotError", "load_snapshot", "parse_snapshot"]
