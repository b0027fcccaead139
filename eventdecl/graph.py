"""Read-only view over the reflected class snapshot."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Set, Tuple

from .models import ClassDescriptor, Group


class TypeGraph:
    """Name-keyed lookup of class descriptors and their ancestry edges.

    Parent and interface references are plain class names resolved lazily, so a
    reference to a class outside the snapshot simply resolves to ``None``.
    """

    def __init__(self, descriptors: Iterable[ClassDescriptor] = ()) -> None:
        self._descriptors: Dict[str, ClassDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.name in self._descriptors:
                raise ValueError(f"Duplicate class descriptor: {descriptor.name}")
            self._descriptors[descriptor.name] = descriptor

    def descriptor_for(self, name: Optional[str]) -> Optional[ClassDescriptor]:
        if not name:
            return None
        return self._descriptors.get(name)

    def parent_of(self, descriptor: ClassDescriptor) -> Optional[str]:
        return descriptor.parent or None

    def interfaces_of(self, descriptor: ClassDescriptor) -> Tuple[str, ...]:
        return tuple(descriptor.interfaces)

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __iter__(self) -> Iterator[ClassDescriptor]:
        return iter(self._descriptors.values())

    def __len__(self) -> int:
        return len(self._descriptors)


def collect_event_classes(groups: Mapping[str, Group]) -> List[str]:
    """Return the distinct event class names referenced by all groups, first-seen order."""
    seen: Set[str] = set()
    ordered: List[str] = []
    for group in groups.values():
        for member in group:
            if member.event_class in seen:
                continue
            seen.add(member.event_class)
            ordered.append(member.event_class)
    return ordered


__all__ = ["TypeGraph", "collect_event_classes"]
