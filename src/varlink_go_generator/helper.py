"""Helper functionality that is used in other modules of this package."""

from __future__ import annotations

import json

GO_KEYWORDS = frozenset(
    {
        "break",
        "case",
        "chan",
        "const",
        "continue",
        "default",
        "defer",
        "else",
        "fallthrough",
        "for",
        "func",
        "go",
        "goto",
        "if",
        "import",
        "interface",
        "map",
        "package",
        "range",
        "return",
        "select",
        "struct",
        "switch",
        "type",
        "var",
    }
)


def sanitize_name(name: str) -> str:
    """Sanitize a name to avoid Go keywords.

    If the name is a Go keyword, append an underscore.
    E.g. 'type' becomes 'type_', 'range' becomes 'range_'.

    Args:
        name (str): The original name.

    Returns:
        str: The sanitized name.
    """
    if name in GO_KEYWORDS:
        return f"{name}_"
    return name


def title_case(name: str) -> str:
    """Upper-case the first letter of a field name, which makes it an exported Go struct member.

    Only the first letter changes: `fooBar` becomes `FooBar` and `foo_bar` becomes `Foo_bar`.

    Args:
        name (str): The field name.

    Returns:
        str: The exported member name.
    """
    return name[:1].upper() + name[1:]


def unit_name(interface_name: str) -> str:
    """The Go package name for an interface: its name with every '.' and '-' removed.

    For example, `org.example.ping` becomes `orgexampleping` and `org.example.foo-bar` becomes `orgexamplefoobar`.
    """
    return interface_name.replace(".", "").replace("-", "")


def qualified_name(interface_name: str, member_name: str) -> str:
    """The name of a method or error on the wire, e.g. `org.example.ping.Ping`."""
    return f"{interface_name}.{member_name}"


def go_string_literal(text: str) -> str:
    """Quote text as a Go string literal.

    Raw (backtick) literals keep multi-line descriptions readable. Text that contains a backtick cannot be a raw
    literal, so it falls back to an interpreted literal, whose escapes are a superset of what `json.dumps` emits.

    Args:
        text (str): The text to quote.

    Returns:
        str: The Go literal.
    """
    if "`" not in text:
        return f"`{text}`"
    return json.dumps(text, ensure_ascii=False)


def indent(level: int) -> str:
    """Tab indentation for the given nesting level."""
    return "\t" * level


def join_parameters(parameters: list[str] | None) -> str:
    """Joins parameters by means of ', '.

    Args:
        parameters (list[str] | None): The parameters to join.

    Returns:
        str: The joined parameters.
    """
    if parameters:
        return ", ".join(p for p in parameters if p)

    else:
        return ""


def new_function(
    name: str,
    parameters: list[str] | None = None,
    return_type: str | None = None,
    receiver: str | None = None,
) -> str:
    """Create the opening line of a Go function, up to and including the opening brace.

    Args:
        name (str): The function name.
        parameters (list[str] | None, optional): The function parameters, if any. Defaults to None.
        return_type (str | None, optional): The function's result list. Defaults to None (no result).
        receiver (str | None, optional): The method receiver, e.g. `c *VarlinkCall`. Defaults to None.

    Returns:
        str: The function heading.
    """
    heading = "func "
    if receiver:
        heading += f"({receiver}) "

    heading += f"{name}({join_parameters(parameters)})"

    if return_type:
        heading += f" {return_type}"

    return heading + " {"
