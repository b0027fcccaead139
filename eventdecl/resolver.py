"""Nearest-ancestor metadata lookup over the type graph."""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Set, Tuple

from .graph import TypeGraph
from .logging import get_logger
from .models import ClassDescriptor


class PropertyResolver:
    """Walks a class's ancestry to locate attached metadata fragments.

    Walks are depth-first: the class itself, then its parent chain, then each
    declared interface in declaration order. Names already visited on the
    current walk are dead ends, so malformed cyclic hierarchies terminate.
    """

    def __init__(self, graph: TypeGraph) -> None:
        self.graph = graph
        self.logger = get_logger("resolver")
        self._cache: Dict[Tuple[str, str], Optional[Any]] = {}

    def find_property(self, start: str, kind: str) -> Optional[Any]:
        """Return the first fragment of ``kind`` found walking out from ``start``."""
        key = (start, kind)
        if key in self._cache:
            return self._cache[key]
        found = self._find(start, kind, set())
        if found is None:
            self.logger.debug("No '%s' metadata reachable from %s", kind, start)
        self._cache[key] = found
        return found

    def collect(self, start: str, kind: str) -> List[Any]:
        """Return every fragment of ``kind`` from ``start`` and its ancestors.

        Fragments come in walk order, each class contributing its own fragments
        once, so a descendant's documentation precedes what it inherits.
        """
        collected: List[Any] = []
        for descriptor in self._walk(start, set()):
            collected.extend(descriptor.fragments(kind))
        return collected

    def _find(self, name: str, kind: str, visited: Set[str]) -> Optional[Any]:
        descriptor = self._enter(name, visited)
        if descriptor is None:
            return None

        own = descriptor.fragments(kind)
        if own:
            return own[0]

        parent = self.graph.parent_of(descriptor)
        if parent is not None:
            found = self._find(parent, kind, visited)
            if found is not None:
                return found

        for interface in self.graph.interfaces_of(descriptor):
            found = self._find(interface, kind, visited)
            if found is not None:
                return found

        return None

    def _walk(self, name: str, visited: Set[str]) -> Iterator[ClassDescriptor]:
        descriptor = self._enter(name, visited)
        if descriptor is None:
            return
        yield descriptor
        parent = self.graph.parent_of(descriptor)
        if parent is not None:
            yield from self._walk(parent, visited)
        for interface in self.graph.interfaces_of(descriptor):
            yield from self._walk(interface, visited)

    def _enter(self, name: str, visited: Set[str]) -> Optional[ClassDescriptor]:
        if name in visited:
            self.logger.debug("Ancestry cycle detected at %s; pruning branch", name)
            return None
        descriptor = self.graph.descriptor_for(name)
        if descriptor is None:
            return None
        visited.add(name)
        return descriptor


__all__ = ["PropertyResolver"]
