"""Reader for varlink interface descriptions.

Turns the text of a `.varlink` file into the read-only `Interface` model. Only the syntax is checked; semantic
problems such as duplicate member names or undeclared aliases are left to the consumer of the generated code.
"""

from __future__ import annotations

import re

from varlink_go_generator.idl_types import (
    Alias,
    ErrorType,
    Field,
    Interface,
    Method,
    Type,
    VarlinkKind,
    new_element,
    new_struct,
)

_WHITESPACE_AND_COMMENTS = re.compile(r"(?:\s+|#[^\n]*)*")

INTERFACE_NAME = re.compile(r"[A-Za-z](?:-*[A-Za-z0-9])*(?:\.[A-Za-z0-9](?:-*[A-Za-z0-9])*)+\b")
MEMBER_NAME = re.compile(r"[A-Z][A-Za-z0-9]*\b")
FIELD_NAME = re.compile(r"[A-Za-z](?:_?[A-Za-z0-9])*\b")

_PATTERN_NAMES = {
    INTERFACE_NAME: "interface name",
    MEMBER_NAME: "member name",
    FIELD_NAME: "field name",
}

_TOKENS = {
    "[]": re.compile(r"\[\s*\]"),
    "[string]": re.compile(r"\[\s*string\s*\]"),
}

_PRIMITIVE_KINDS = {
    "bool": VarlinkKind.BOOL,
    "int": VarlinkKind.INT,
    "float": VarlinkKind.FLOAT,
    "string": VarlinkKind.STRING,
    "object": VarlinkKind.OBJECT,
}


class VarlinkSyntaxError(Exception):
    """Raised when an interface description is not valid varlink."""

    def __init__(self, message: str, line: int, column: int):
        super().__init__(f"{message} at line {line}, column {column}")
        self.line = line
        self.column = column


def _compile_token(token: str | re.Pattern[str]) -> re.Pattern[str]:
    if isinstance(token, re.Pattern):
        return token

    if token in _TOKENS:
        return _TOKENS[token]

    if token[-1].isalnum():
        # Keywords must not match the start of a longer word.
        return re.compile(re.escape(token) + r"\b")

    return re.compile(re.escape(token))


class Scanner:
    """Scans an interface description token by token, skipping whitespace and comments."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def _skip(self):
        match = _WHITESPACE_AND_COMMENTS.match(self.text, self.pos)
        if match:
            self.pos = match.end()

    def at_end(self) -> bool:
        """Whether only whitespace and comments are left."""
        self._skip()
        return self.pos >= len(self.text)

    def peek(self, token: str | re.Pattern[str]) -> bool:
        """Whether the next token matches, without consuming it."""
        self._skip()
        return _compile_token(token).match(self.text, self.pos) is not None

    def get(self, token: str | re.Pattern[str]) -> str | None:
        """Consume and return the next token if it matches, otherwise return None.

        Args:
            token (str | re.Pattern[str]): A literal token or a pattern.

        Returns:
            str | None: The matched text.
        """
        self._skip()
        match = _compile_token(token).match(self.text, self.pos)
        if match is None:
            return None

        self.pos = match.end()
        return match.group()

    def expect(self, token: str | re.Pattern[str]) -> str:
        """Consume the next token, which must match.

        Raises:
            VarlinkSyntaxError: If the next token does not match.
        """
        value = self.get(token)
        if value is None:
            expected = _PATTERN_NAMES.get(token, f"'{token}'") if isinstance(token, re.Pattern) else f"'{token}'"
            raise self.error(f"Expected {expected}")
        return value

    def error(self, message: str) -> VarlinkSyntaxError:
        """An error located at the current position."""
        self._skip()
        line = self.text.count("\n", 0, self.pos) + 1
        column = self.pos - (self.text.rfind("\n", 0, self.pos) + 1) + 1
        if self.pos >= len(self.text):
            message += ", found end of input"
        return VarlinkSyntaxError(message, line, column)


class Parser:
    """Builds an `Interface` from the text of a varlink interface description."""

    def __init__(self, description: str):
        self.description = description
        self.scanner = Scanner(description)

    def parse(self) -> Interface:
        """Parse the whole description.

        Returns:
            Interface: The parsed interface, with members in declaration order.

        Raises:
            VarlinkSyntaxError: If the description is malformed.
        """
        scanner = self.scanner
        scanner.expect("interface")
        name = scanner.expect(INTERFACE_NAME)

        aliases: list[Alias] = []
        methods: list[Method] = []
        errors: list[ErrorType] = []

        while not scanner.at_end():
            if scanner.get("type"):
                alias_name = scanner.expect(MEMBER_NAME)
                aliases.append(Alias(alias_name, self.read_struct_or_enum()))

            elif scanner.get("method"):
                method_name = scanner.expect(MEMBER_NAME)
                in_type = self.read_struct()
                scanner.expect("->")
                out_type = self.read_struct()
                methods.append(Method(method_name, in_type, out_type))

            elif scanner.get("error"):
                error_name = scanner.expect(MEMBER_NAME)
                errors.append(ErrorType(error_name, self.read_struct()))

            else:
                raise scanner.error("Expected 'type', 'method' or 'error'")

        return Interface(
            name=name,
            description=self.description,
            aliases=tuple(aliases),
            methods=tuple(methods),
            errors=tuple(errors),
        )

    def read_type(self, allow_maybe: bool = True) -> Type:
        """Read a type expression.

        Args:
            allow_maybe (bool): Whether a leading '?' is valid here; '??' is not.

        Returns:
            Type: The parsed type.
        """
        scanner = self.scanner

        if scanner.peek("?"):
            if not allow_maybe:
                raise scanner.error("A maybe type cannot be optional again")
            scanner.expect("?")
            return new_element(VarlinkKind.MAYBE, self.read_type(allow_maybe=False))

        if scanner.get("[]"):
            return new_element(VarlinkKind.ARRAY, self.read_type())

        if scanner.get("[string]"):
            return new_element(VarlinkKind.MAP, self.read_type())

        for keyword, kind in _PRIMITIVE_KINDS.items():
            if scanner.get(keyword):
                return Type(kind)

        alias = scanner.get(MEMBER_NAME)
        if alias:
            return Type(VarlinkKind.ALIAS, alias=alias)

        if scanner.peek("("):
            return self.read_struct_or_enum()

        raise scanner.error("Expected a type")

    def read_struct(self) -> Type:
        """Read a struct, as required for method parameters and errors."""
        struct_type = self.read_struct_or_enum()
        if struct_type.kind != VarlinkKind.STRUCT:
            raise self.scanner.error("Expected a struct, found an enum")
        return struct_type

    def read_struct_or_enum(self) -> Type:
        """Read a parenthesized list: a struct when its entries carry types, an enum when they are bare names."""
        scanner = self.scanner
        scanner.expect("(")

        if scanner.get(")"):
            return new_struct()

        fields: list[Field] = []
        enum_values: list[str] = []
        is_enum = None

        while True:
            name = scanner.expect(FIELD_NAME)

            if is_enum is None:
                is_enum = not scanner.peek(":")

            if is_enum:
                enum_values.append(name)
            else:
                scanner.expect(":")
                fields.append(Field(name, self.read_type()))

            if scanner.get(")"):
                break
            scanner.expect(",")

        if is_enum:
            return Type(VarlinkKind.ENUM, enum_values=tuple(enum_values))

        return new_struct(*fields)


def parse_interface(description: str) -> Interface:
    """Parse a varlink interface description.

    Args:
        description (str): The text of a `.varlink` file.

    Returns:
        Interface: The parsed interface. Its description is the text itself.

    Raises:
        VarlinkSyntaxError: If the description is malformed.
    """
    return Parser(description).parse()
