"""Types definitions for parsed varlink interface descriptions."""

from __future__ import annotations

from dataclasses import dataclass, field


class VarlinkKind:
    """Kinds of varlink types."""

    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    ENUM = "enum"
    OBJECT = "object"
    ARRAY = "array"
    MAP = "map"
    MAYBE = "maybe"
    ALIAS = "alias"
    STRUCT = "struct"


# Kinds that wrap exactly one element type.
CONTAINER_KINDS = frozenset({VarlinkKind.ARRAY, VarlinkKind.MAP, VarlinkKind.MAYBE})


@dataclass(frozen=True)
class Field:
    """A named member of a struct type."""

    name: str
    type: Type


@dataclass(frozen=True)
class Type:
    """A node of a varlink type tree.

    Only the attributes that belong to the node's kind are set: `element_type` for arrays, maps and maybes,
    `alias` for alias references, `fields` for structs and `enum_values` for enums.
    """

    kind: str
    element_type: Type | None = None
    alias: str = ""
    fields: tuple[Field, ...] = ()
    enum_values: tuple[str, ...] = ()

    def contains(self, kind: str) -> bool:
        """Whether this type, or any type nested inside it, is of the given kind."""
        if self.kind == kind:
            return True

        if self.element_type is not None and self.element_type.contains(kind):
            return True

        return any(f.type.contains(kind) for f in self.fields)


@dataclass(frozen=True)
class Alias:
    """A named type declaration (`type Name ...`)."""

    name: str
    type: Type


@dataclass(frozen=True)
class Method:
    """A method declaration with its input and output structs."""

    name: str
    in_type: Type
    out_type: Type


@dataclass(frozen=True)
class ErrorType:
    """An error declaration with the struct it carries."""

    name: str
    type: Type


@dataclass(frozen=True)
class Interface:
    """A complete, parsed varlink interface."""

    name: str
    description: str
    aliases: tuple[Alias, ...] = field(default_factory=tuple)
    methods: tuple[Method, ...] = field(default_factory=tuple)
    errors: tuple[ErrorType, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.name:
            raise ValueError("An interface needs a name.")

    def uses_kind(self, kind: str) -> bool:
        """Whether any declaration of the interface refers to a type of the given kind."""
        types = [a.type for a in self.aliases]
        types.extend(t for m in self.methods for t in (m.in_type, m.out_type))
        types.extend(e.type for e in self.errors)
        return any(t.contains(kind) for t in types)


def new_struct(*fields: Field) -> Type:
    """Shorthand for a struct type made of the given fields."""
    return Type(VarlinkKind.STRUCT, fields=tuple(fields))


def new_element(kind: str, element_type: Type) -> Type:
    """Shorthand for an array, map or maybe type around `element_type`."""
    if kind not in CONTAINER_KINDS:
        raise ValueError(f"Kind '{kind}' does not take an element type.")
    return Type(kind, element_type=element_type)
