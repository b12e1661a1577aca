"""Data Transfer Objects for writer.py.

A varlink field is spelled three ways in the generated Go code: as a local identifier (parameters, out-pointers),
as an exported struct member and as the wire name inside the json tag. `FieldBinding` keeps the three together so
that every emission site agrees on them.
"""

from __future__ import annotations

from dataclasses import dataclass

from varlink_go_generator import go_types, helper
from varlink_go_generator.idl_types import Field, Type


@dataclass(frozen=True)
class FieldBinding:
    """All spellings of one struct field, plus its type.

    Attributes:
        wire_name: The field name as declared in the interface and sent on the wire (e.g. "type")
        local_name: The Go identifier for parameters and out-pointers (e.g. "type_")
        member_name: The exported Go struct member (e.g. "Type")
        type: The varlink type of the field
    """

    wire_name: str
    local_name: str
    member_name: str
    type: Type

    @classmethod
    def create(cls, field: Field) -> FieldBinding:
        """Factory method deriving the Go spellings from a parsed field.

        Args:
            field: The field of a method, error or alias struct

        Returns:
            The binding for this field
        """
        return cls(
            wire_name=field.name,
            local_name=helper.sanitize_name(field.name),
            member_name=helper.title_case(field.name),
            type=field.type,
        )

    @property
    def needs_conversion(self) -> bool:
        """Whether values of this field need a Go conversion between plain and json struct shapes."""
        return go_types.needs_conversion(self.type)

    def parameter(self, indent: int = 1, pointer: bool = False) -> str:
        """The parameter declaration for this field, e.g. `ping string` or `ping *string`."""
        prefix = "*" if pointer else ""
        return f"{self.local_name} {prefix}{go_types.go_type(self.type, False, indent)}"

    def assign_to_wire(self, target: str, indent: int = 1) -> str:
        """The statement copying the local value into the member of a json-tagged struct variable."""
        value = go_types.convert(self.type, self.local_name, True, indent)
        return f"{helper.indent(indent)}{target}.{self.member_name} = {value}"

    def from_wire(self, source: str, indent: int = 1) -> str:
        """The expression reading this field from a json-tagged struct variable as its plain Go type."""
        return go_types.convert(self.type, f"{source}.{self.member_name}", False, indent)


def bind_fields(struct_type: Type) -> list[FieldBinding]:
    """Bindings for all fields of a struct type, in declaration order."""
    return [FieldBinding.create(field) for field in struct_type.fields]
