"""Lookup table of per-member emission overrides."""

from __future__ import annotations

from typing import Callable, Dict, Iterator, Optional, Sequence, Tuple

from ..models import MemberEntry

OverrideGenerator = Callable[[MemberEntry], Sequence[str]]
OverrideKey = Tuple[str, str]


class OverrideRegistry:
    """Maps ``(group, member)`` pairs to generators replacing default emission.

    Populated during initialization, then frozen; generation only reads it.
    """

    def __init__(self) -> None:
        self._entries: Dict[OverrideKey, OverrideGenerator] = {}
        self._frozen = False

    def register(self, group: str, member: str, generator: OverrideGenerator) -> None:
        if self._frozen:
            raise RuntimeError("Override registry is frozen; register overrides before generation")
        if not callable(generator):
            raise TypeError(f"Override for {group}.{member} must be callable")
        key = (group, member)
        if key in self._entries:
            raise ValueError(f"Override already registered for {group}.{member}")
        self._entries[key] = generator

    def lookup(self, group: str, member: str) -> Optional[OverrideGenerator]:
        return self._entries.get((group, member))

    def freeze(self) -> "OverrideRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[OverrideKey]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["OverrideGenerator", "OverrideKey", "OverrideRegistry"]
