"""Translation of varlink types into Go type expressions."""

from __future__ import annotations

from varlink_go_generator import helper
from varlink_go_generator.idl_types import Type, VarlinkKind

VARLINK_TYPE_TO_GO = {
    VarlinkKind.BOOL: "bool",
    VarlinkKind.INT: "int64",
    VarlinkKind.FLOAT: "float64",
    VarlinkKind.STRING: "string",
    VarlinkKind.ENUM: "string",
    VarlinkKind.OBJECT: "json.RawMessage",
}

GO_CONTAINER_PREFIX = {
    VarlinkKind.ARRAY: "[]",
    VarlinkKind.MAP: "map[string]",
    VarlinkKind.MAYBE: "*",
}

# Kinds whose plain and json renderings are distinct Go types, so values need an explicit conversion.
CONVERTED_KINDS = frozenset({VarlinkKind.STRUCT, VarlinkKind.ARRAY, VarlinkKind.MAP})


def go_type(varlink_type: Type, json: bool, indent: int = 0) -> str:
    """Render a varlink type as a Go type expression.

    Struct members get their exported (title-cased) names. With `json` set, every member additionally carries a
    `json:"<name>"` tag with the original field name, and maybe-typed members are marked `omitempty`.

    Args:
        varlink_type (Type): The type to render.
        json (bool): Whether struct members carry json tags.
        indent (int): The nesting level of the line the type starts on. Members are indented one level deeper.

    Returns:
        str: The Go type expression.
    """
    kind = varlink_type.kind

    try:
        return VARLINK_TYPE_TO_GO[kind]

    except KeyError:
        pass

    if kind in GO_CONTAINER_PREFIX:
        assert varlink_type.element_type is not None, f"A {kind} type needs an element type."
        return GO_CONTAINER_PREFIX[kind] + go_type(varlink_type.element_type, json, indent)

    if kind == VarlinkKind.ALIAS:
        return varlink_type.alias

    if kind == VarlinkKind.STRUCT:
        return _go_struct(varlink_type, json, indent)

    raise ValueError(f"Unknown varlink type kind '{kind}'.")


def _go_struct(varlink_type: Type, json: bool, indent: int) -> str:
    if not varlink_type.fields:
        return "struct{}"

    lines = ["struct {"]
    for field in varlink_type.fields:
        member = f"{helper.indent(indent + 1)}{helper.title_case(field.name)} {go_type(field.type, json, indent + 1)}"
        if json:
            member += f" {json_tag(field.name, field.type)}"
        lines.append(member)
    lines.append(f"{helper.indent(indent)}}}")

    return "\n".join(lines)


def json_tag(name: str, varlink_type: Type) -> str:
    """The struct tag that maps a Go member back to its wire name.

    Args:
        name (str): The original field name.
        varlink_type (Type): The field type; maybe-typed fields are omitted when nil.

    Returns:
        str: The tag, including its backquotes.
    """
    options = ",omitempty" if varlink_type.kind == VarlinkKind.MAYBE else ""
    return f'`json:"{name}{options}"`'


def needs_conversion(varlink_type: Type) -> bool:
    """Whether assigning between the plain and json renderings of a type requires a Go conversion."""
    return varlink_type.kind in CONVERTED_KINDS


def convert(varlink_type: Type, expression: str, json: bool, indent: int = 0) -> str:
    """Convert an expression to the plain or json rendering of its type, where the two differ.

    Args:
        varlink_type (Type): The type of the expression.
        expression (str): The Go expression to convert.
        json (bool): Whether to convert to the json-tagged rendering.
        indent (int): The nesting level of the line the conversion is written on.

    Returns:
        str: A conversion for struct, array and map types, otherwise the expression itself.
    """
    if not needs_conversion(varlink_type):
        return expression

    return f"{go_type(varlink_type, json, indent)}({expression})"
