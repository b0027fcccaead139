"""Built-in overrides enumerating dynamically discovered names."""

from __future__ import annotations

import json
from typing import List, Sequence

from ..config import EventDeclConfig, split_member_key
from ..formatting import TypeFormatter
from ..logging import get_logger
from ..models import MemberEntry
from ..snapshot import Snapshot
from .registry import OverrideGenerator, OverrideRegistry

logger = get_logger("overrides")


def _listing(
    names: Sequence[str], formatter: TypeFormatter, indent: int, parameter: str
) -> OverrideGenerator:
    frozen_names = tuple(names)
    pad = " " * indent

    def _generate(member: MemberEntry) -> List[str]:
        event_type = formatter.format_class(member.event_class)
        return [
            f"{pad}{member.name}({parameter}: {json.dumps(name)}, "
            f"handler: (event: {event_type}) => void):void,"
            for name in frozen_names
        ]

    return _generate


def registry_listing(
    names: Sequence[str], formatter: TypeFormatter, indent: int = 4
) -> OverrideGenerator:
    """One overload per registry, keyed by its literal registry name."""
    return _listing(names, formatter, indent, "type")


def tag_listing(
    names: Sequence[str], formatter: TypeFormatter, indent: int = 4
) -> OverrideGenerator:
    """One overload per taggable registry, passed as the literal extra argument."""
    return _listing(names, formatter, indent, "extra")


def install_builtin_overrides(
    registry: OverrideRegistry,
    snapshot: Snapshot,
    config: EventDeclConfig,
    formatter: TypeFormatter,
) -> OverrideRegistry:
    """Register the registry and tag listings for members named in the config.

    A listing is only installed when the snapshot actually carries names for
    it; otherwise the member keeps its default declaration.
    """
    indent = config.emit.indent
    targets = (
        (config.overrides.registry, snapshot.registries, registry_listing),
        (config.overrides.tags, snapshot.tags, tag_listing),
    )
    for target, names, factory in targets:
        if not target or not names:
            continue
        group, member = split_member_key(target)
        registry.register(group, member, factory(names, formatter, indent))
        logger.debug("Registered listing override for %s with %d names", target, len(names))
    return registry


__all__ = ["install_builtin_overrides", "registry_listing", "tag_listing"]
