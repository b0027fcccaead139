"""Rendering of type references as TypeScript type literals."""

from __future__ import annotations

from dataclasses import dataclass
import json
from typing import Any, Optional, Tuple

from .graph import TypeGraph

RAW = "raw"
CLASS = "class"
LITERAL = "literal"
UNION = "union"
ARRAY = "array"
PARAMETERIZED = "parameterized"

_KINDS = {RAW, CLASS, LITERAL, UNION, ARRAY, PARAMETERIZED}


class TypeFormatError(ValueError):
    """Raised when a type reference cannot be parsed or rendered."""


@dataclass(frozen=True)
class TypeRef:
    """Semantic type reference.

    ``value`` holds the raw text, class name or literal value; ``args`` holds
    union members, the array element or the type arguments of a
    parameterized base.
    """

    kind: str
    value: Any = None
    args: Tuple["TypeRef", ...] = ()

    @classmethod
    def raw(cls, text: str) -> "TypeRef":
        return cls(RAW, text)

    @classmethod
    def of_class(cls, name: str) -> "TypeRef":
        return cls(CLASS, name)

    @classmethod
    def literal(cls, value: Any) -> "TypeRef":
        return cls(LITERAL, value)

    @classmethod
    def union(cls, *members: "TypeRef") -> "TypeRef":
        return cls(UNION, None, tuple(members))

    @classmethod
    def array(cls, element: "TypeRef") -> "TypeRef":
        return cls(ARRAY, None, (element,))

    @classmethod
    def parameterized(cls, base: "TypeRef", *arguments: "TypeRef") -> "TypeRef":
        return cls(PARAMETERIZED, None, (base, *arguments))


def parse_type_ref(payload: object) -> TypeRef:
    """Build a :class:`TypeRef` from its snapshot encoding.

    A bare string is a raw TypeScript type. Mappings carry exactly one of the
    keys ``raw``, ``class``, ``literal``, ``union``, ``array`` or
    ``parameterized`` (the latter with an ``args`` list).
    """
    if isinstance(payload, TypeRef):
        return payload
    if isinstance(payload, str):
        return TypeRef.raw(payload)
    if not isinstance(payload, dict):
        raise TypeFormatError(f"Unsupported type reference: {payload!r}")

    kinds = [key for key in payload if key in _KINDS]
    if len(kinds) != 1:
        raise TypeFormatError(f"Type reference must declare exactly one kind: {payload!r}")
    kind = kinds[0]
    value = payload[kind]

    if kind == RAW:
        return TypeRef.raw(str(value))
    if kind == CLASS:
        if not isinstance(value, str) or not value:
            raise TypeFormatError("Class type reference requires a class name")
        return TypeRef.of_class(value)
    if kind == LITERAL:
        return TypeRef.literal(value)
    if kind == UNION:
        if not isinstance(value, list) or not value:
            raise TypeFormatError("Union type reference requires a non-empty list")
        return TypeRef.union(*(parse_type_ref(item) for item in value))
    if kind == ARRAY:
        return TypeRef.array(parse_type_ref(value))
    arguments = payload.get("args") or []
    if not isinstance(arguments, list):
        raise TypeFormatError("Parameterized type arguments must be a list")
    return TypeRef.parameterized(
        parse_type_ref(value), *(parse_type_ref(item) for item in arguments)
    )


class TypeFormatter:
    """Formats type references against the class snapshot."""

    def __init__(self, graph: TypeGraph, namespace: Optional[str] = "Internal") -> None:
        self.graph = graph
        self.namespace = namespace

    def format(self, ref: TypeRef) -> str:
        if ref.kind == RAW:
            return str(ref.value)
        if ref.kind == CLASS:
            return self.format_class(ref.value)
        if ref.kind == LITERAL:
            return json.dumps(ref.value)
        if ref.kind == UNION:
            return " | ".join(self.format(member) for member in ref.args)
        if ref.kind == ARRAY:
            element = self.format(ref.args[0])
            if " | " in element:
                element = f"({element})"
            return f"{element}[]"
        if ref.kind == PARAMETERIZED:
            head = ref.args[0]
            base = self._qualified(head.value) if head.kind == CLASS else self.format(head)
            arguments = ", ".join(self.format(arg) for arg in ref.args[1:])
            return f"{base}<{arguments}>" if arguments else base
        raise TypeFormatError(f"Unknown type reference kind: {ref.kind}")

    def format_class(self, name: str) -> str:
        """Render a class name, filling declared type parameters with ``any``."""
        qualified = self._qualified(name)
        descriptor = self.graph.descriptor_for(name)
        if descriptor is None or not descriptor.type_parameters:
            return qualified
        fillers = ", ".join("any" for _ in descriptor.type_parameters)
        return f"{qualified}<{fillers}>"

    def _qualified(self, name: str) -> str:
        simple = name.rsplit(".", 1)[-1]
        return f"{self.namespace}.{simple}" if self.namespace else simple


__all__ = ["TypeFormatError", "TypeFormatter", "TypeRef", "parse_type_ref"]
