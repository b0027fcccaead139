"""Documentation comment fragments and block-comment rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple, Union


@dataclass(frozen=True)
class CommentFragment:
    """Ordered lines forming one documentation unit."""

    lines: Tuple[str, ...] = ()

    @classmethod
    def of(cls, text: Union[str, Iterable[str]]) -> "CommentFragment":
        """Build a fragment from a multi-line string or an iterable of lines."""
        if isinstance(text, str):
            return cls(tuple(text.splitlines()))
        return cls(tuple(str(line) for line in text))

    def __bool__(self) -> bool:
        return bool(self.lines)


EMPTY_COMMENT = CommentFragment()


class CommentMerger:
    """Combines comment fragments and renders them as ``/** ... */`` blocks."""

    OPEN = "/**"
    PREFIX = " *"
    CLOSE = " */"

    def merge(self, *fragments: CommentFragment) -> CommentFragment:
        """Concatenate fragment lines in the order the fragments were supplied."""
        lines: List[str] = []
        for fragment in fragments:
            lines.extend(fragment.lines)
        return CommentFragment(tuple(lines))

    def format_lines(self, fragment: CommentFragment, indent: int) -> List[str]:
        """Render ``fragment`` as a block comment; an empty fragment renders nothing."""
        if not fragment.lines:
            return []
        pad = " " * indent
        output = [f"{pad}{self.OPEN}"]
        for line in fragment.lines:
            text = line.rstrip()
            output.append(f"{pad}{self.PREFIX} {text}" if text else f"{pad}{self.PREFIX}")
        output.append(f"{pad}{self.CLOSE}")
        return output


__all__ = ["CommentFragment", "CommentMerger", "EMPTY_COMMENT"]
