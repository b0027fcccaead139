"""Declaration emission for event groups."""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional, Sequence, Union

from .comments import CommentFragment, CommentMerger
from .formatting import TypeFormatter, TypeRef
from .graph import TypeGraph
from .logging import get_logger
from .models import COMMENT, EXTRA_TYPE, ExtraParameter, Group, MemberEntry
from .overrides.registry import OverrideRegistry
from .resolver import PropertyResolver

DEFAULT_EXTRA_TYPE = "string"
CONTEXT_SEPARATOR = ", "
CANCELLABLE_TAG = "@cancellable"


class UnresolvedClassError(RuntimeError):
    """Raised when a member's event class is missing from the snapshot."""

    def __init__(self, group: str, member: str, class_name: str) -> None:
        super().__init__(
            f"Cannot resolve event class '{class_name}' for {group}.{member}; "
            "the class snapshot is incomplete"
        )
        self.group = group
        self.member = member
        self.class_name = class_name


class DeclarationEmitter:
    """Builds ``declare const`` blocks for groups of event handlers.

    Members with a registered override are emitted verbatim from the override;
    every other member gets a merged doc comment followed by one or two call
    signatures depending on its extra parameter mode.
    """

    def __init__(
        self,
        graph: TypeGraph,
        overrides: Optional[OverrideRegistry] = None,
        *,
        resolver: Optional[PropertyResolver] = None,
        merger: Optional[CommentMerger] = None,
        formatter: Optional[TypeFormatter] = None,
        indent: int = 4,
        default_extra_type: str = DEFAULT_EXTRA_TYPE,
    ) -> None:
        self.graph = graph
        self.overrides = overrides if overrides is not None else OverrideRegistry().freeze()
        self.resolver = resolver or PropertyResolver(graph)
        self.merger = merger or CommentMerger()
        self.formatter = formatter or TypeFormatter(graph)
        self.indent = indent
        self.default_extra_type = default_extra_type
        self.logger = get_logger("emitter")

    def emit(self, groups: Union[Mapping[str, Group], Iterable[Group]]) -> List[List[str]]:
        """Return the output lines of every group, in iteration order."""
        ordered = groups.values() if isinstance(groups, Mapping) else groups
        return [self.emit_group(group) for group in ordered]

    def emit_group(self, group: Group) -> List[str]:
        self.logger.debug("Emitting group %s (%d members)", group.name, len(group))
        lines = [f"declare const {group.name}: {{"]
        for member in group:
            lines.extend(self.emit_member(group.name, member))
        lines.append("};")
        return lines

    def emit_member(self, group: str, member: MemberEntry) -> List[str]:
        override = self.overrides.lookup(group, member.name)
        if override is not None:
            self.logger.debug("Using override for %s.%s", group, member.name)
            return list(override(member))

        if self.graph.descriptor_for(member.event_class) is None:
            raise UnresolvedClassError(group, member.name, member.event_class)

        pad = " " * self.indent
        lines = self.merger.format_lines(self.build_comment(member), self.indent)
        event_type = self.formatter.format_class(member.event_class)
        handler = f"handler: (event: {event_type}) => void"

        if member.extra is not ExtraParameter.ABSENT:
            extra_type = self._extra_type(member)
            lines.append(f"{pad}{member.name}(extra: {extra_type}, {handler}):void,")
        if member.extra is not ExtraParameter.REQUIRED:
            lines.append(f"{pad}{member.name}({handler}):void,")
        return lines

    def build_comment(self, member: MemberEntry) -> CommentFragment:
        """Merge inherited documentation with the synthesized member annotations."""
        inherited: Sequence[CommentFragment] = self.resolver.collect(member.event_class, COMMENT)
        annotations: List[CommentFragment] = []
        if member.contexts:
            contexts = CONTEXT_SEPARATOR.join(member.contexts)
            annotations.append(CommentFragment((f"@at *{contexts}*",)))
        if member.cancellable:
            annotations.append(CommentFragment((CANCELLABLE_TAG,)))
        return self.merger.merge(*inherited, *annotations)

    def _extra_type(self, member: MemberEntry) -> str:
        found = self.resolver.find_property(member.event_class, EXTRA_TYPE)
        if found is None:
            return self.default_extra_type
        ref = found if isinstance(found, TypeRef) else TypeRef.raw(str(found))
        return self.formatter.format(ref)


def render_document(references: Sequence[str], blocks: Sequence[Sequence[str]]) -> str:
    """Join the reference preamble and group blocks into one declaration document."""
    preamble = [f'/// <reference path="./{reference}" />' for reference in references]
    sections = ["\n".join(preamble)] if preamble else []
    sections.extend("\n".join(block) for block in blocks)
    return "\n\n".join(sections) + "\n"


__all__ = [
    "DeclarationEmitter",
    "UnresolvedClassError",
    "render_document",
]
