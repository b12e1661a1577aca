"""Generate Go bindings for varlink interface descriptions."""

from varlink_go_generator.go_types import go_type
from varlink_go_generator.idl_types import Alias, ErrorType, Field, Interface, Method, Type, VarlinkKind
from varlink_go_generator.parser import VarlinkSyntaxError, parse_interface
from varlink_go_generator.run import GoFormatError, generate_bindings, generate_file, generate_template
from varlink_go_generator.writer import Writer

__all__ = [
    "Alias",
    "ErrorType",
    "Field",
    "GoFormatError",
    "Interface",
    "Method",
    "Type",
    "VarlinkKind",
    "VarlinkSyntaxError",
    "Writer",
    "generate_bindings",
    "generate_file",
    "generate_template",
    "go_type",
    "parse_interface",
]
