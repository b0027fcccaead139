"""Core data models shared across eventdecl components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

# Metadata kinds attachable to a class descriptor.
COMMENT = "comment"
EXTRA_TYPE = "extra_type"


class ExtraParameter(Enum):
    """Whether an event handler registration takes an extra leading argument."""

    ABSENT = "absent"
    OPTIONAL = "optional"
    REQUIRED = "required"

    @classmethod
    def parse(cls, value: object) -> "ExtraParameter":
        if value is None or value is False:
            return cls.ABSENT
        if value is True:
            return cls.REQUIRED
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise ValueError(f"Unknown extra parameter mode: {value!r}")


@dataclass(frozen=True)
class ClassDescriptor:
    """Read-only snapshot of one reflected class and its attached metadata."""

    name: str
    parent: Optional[str] = None
    interfaces: Tuple[str, ...] = ()
    type_parameters: Tuple[str, ...] = ()
    metadata: Mapping[str, Tuple[Any, ...]] = field(default_factory=dict)

    def fragments(self, kind: str) -> Tuple[Any, ...]:
        """Return the fragments of ``kind`` declared directly on this class."""
        return tuple(self.metadata.get(kind, ()))


@dataclass(frozen=True)
class MemberEntry:
    """One declarable event handler inside a group."""

    name: str
    event_class: str
    extra: ExtraParameter = ExtraParameter.ABSENT
    contexts: Tuple[str, ...] = ()
    cancellable: bool = False


@dataclass
class Group:
    """Named, insertion-ordered collection of members."""

    name: str
    members: Dict[str, MemberEntry] = field(default_factory=dict)

    def add(self, member: MemberEntry) -> None:
        if member.name in self.members:
            raise ValueError(f"Group '{self.name}' already declares member '{member.name}'")
        self.members[member.name] = member

    def __iter__(self) -> Iterator[MemberEntry]:
        return iter(self.members.values())

    def __len__(self) -> int:
        return len(self.members)
