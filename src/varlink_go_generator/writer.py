"""Generate Go bindings for parsed varlink interfaces.

Note: The generated code requires the github.com/varlink/go/varlink runtime package.
"""

from __future__ import annotations

import logging

from varlink_go_generator import go_types, helper
from varlink_go_generator.idl_types import Interface, Method, Type, VarlinkKind
from varlink_go_generator.writer_dto import FieldBinding, bind_fields

logger = logging.getLogger(__name__)

VARLINK_IMPORT = '"github.com/varlink/go/varlink"'
JSON_IMPORT = '"encoding/json"'


class Writer:
    """A class that handles writing the Go source file, based on a parsed interface."""

    def __init__(self, interface: Interface):
        """Initialize the writer with an interface definition.

        Args:
            interface (Interface): The parsed interface to write bindings for.
        """
        self._interface = interface
        self.unit_name = helper.unit_name(interface.name)
        self.lines: list[str] = []

        self._imports: list[str] = []
        self._add_import(VARLINK_IMPORT)

        if interface.uses_kind(VarlinkKind.OBJECT):
            self._add_import(JSON_IMPORT)

        self.header = "// Generated with varlink-go-interface-generator"

    @property
    def interface_type_name(self) -> str:
        """The name of the Go interface a service backend implements, e.g. `orgexamplepingInterface`."""
        return f"{self.unit_name}Interface"

    def _add_import(self, import_path: str):
        """Add an imported package, given as a quoted Go import path."""
        # Preserve insertion order while avoiding duplicates
        if import_path not in self._imports:
            self._imports.append(import_path)

    @property
    def imports(self) -> list[str]:
        """The lines of the Go import declaration.

        Returns:
            list[str]: A single-line import for one package, an import block otherwise.
        """
        if len(self._imports) == 1:
            return [f"import {self._imports[0]}"]

        return ["import ("] + [f"\t{path}" for path in self._imports] + [")"]

    def add(self, line: str):
        """Append a line (or several, joined by newlines) to the output."""
        self.lines.append(line)

    def _qualified(self, member_name: str) -> str:
        return helper.qualified_name(self._interface.name, member_name)

    def _add_wire_struct(self, variable: str, struct_type: Type, indent: int) -> list[FieldBinding]:
        """Declare a json-tagged struct variable and return the bindings of its fields."""
        self.add(f"{helper.indent(indent)}var {variable} {go_types.go_type(struct_type, True, indent)}")
        return bind_fields(struct_type)

    def _fill_wire_struct(self, variable: str, struct_type: Type) -> None:
        """Declare a json-tagged struct variable and copy every local parameter into it."""
        for binding in self._add_wire_struct(variable, struct_type, 1):
            self.add(binding.assign_to_wire(variable, 1))

    # ===== Sections =====

    def gen_aliases(self):
        """Generate the type declarations for all aliases."""
        self.add("// Type declarations")
        for alias in self._interface.aliases:
            self.add(f"type {alias.name} {go_types.go_type(alias.type, True, 0)}")
            self.add("")

    def gen_client_call(self, method: Method):
        """Generate the client function that sends a call of `method`.

        Args:
            method (Method): The method to generate the call for.
        """
        parameters = ["c_ *varlink.Connection", "more_ bool", "oneway_ bool"]
        parameters.extend(b.parameter() for b in bind_fields(method.in_type))
        self.add(helper.new_function(method.name, parameters, "error"))

        qualified = self._qualified(method.name)
        if method.in_type.fields:
            self._fill_wire_struct("in", method.in_type)
            self.add(f'\treturn c_.Send("{qualified}", in, more_, oneway_)')
        else:
            self.add(f'\treturn c_.Send("{qualified}", nil, more_, oneway_)')

        self.add("}")
        self.add("")

    def gen_reply_reader(self, method: Method):
        """Generate the client function that receives a reply of `method`.

        Every output field gets an optional out-pointer; nil pointers are skipped.

        Args:
            method (Method): The method to generate the reader for.
        """
        bindings = bind_fields(method.out_type)
        parameters = ["c *varlink.Connection"] + [b.parameter(pointer=True) for b in bindings]
        self.add(helper.new_function(f"Read{method.name}_", parameters, "(bool, error)"))

        if bindings:
            self._add_wire_struct("out", method.out_type, 1)
            self.add("\tcontinues_, err := c.Receive(&out)")
        else:
            self.add("\tcontinues_, err := c.Receive(nil)")

        self.add("\tif err != nil {")
        self.add("\t\treturn false, err")
        self.add("\t}")

        for binding in bindings:
            self.add(f"\tif {binding.local_name} != nil {{")
            self.add(f"\t\t*{binding.local_name} = {binding.from_wire('out', 2)}")
            self.add("\t}")

        self.add("\treturn continues_, nil")
        self.add("}")
        self.add("")

    def gen_client_methods(self):
        """Generate call and reply reader functions for all methods."""
        self.add("// Client method calls and reply readers")
        for method in self._interface.methods:
            self.gen_client_call(method)
            self.gen_reply_reader(method)

    def _server_parameters(self, method: Method) -> list[str]:
        return ["c VarlinkCall"] + [b.parameter() for b in bind_fields(method.in_type)]

    def gen_service_interface(self):
        """Generate the Go interface that lists every method a service implements."""
        self.add("// Service interface with all methods")
        self.add(f"type {self.interface_type_name} interface {{")
        for method in self._interface.methods:
            self.add(f"\t{method.name}({helper.join_parameters(self._server_parameters(method))}) error")
        self.add("}")
        self.add("")

    def gen_call_wrapper(self):
        """Generate the call type that carries the reply methods."""
        self.add("// Service object with all methods")
        self.add("type VarlinkCall struct{ varlink.Call }")
        self.add("")

    def _gen_reply(self, name: str, struct_type: Type, reply_call: str, nil_reply_call: str):
        """Generate one reply method on `VarlinkCall`.

        Args:
            name (str): The name of the reply method.
            struct_type (Type): The struct whose fields become the parameters.
            reply_call (str): The runtime call returning the filled `out` struct.
            nil_reply_call (str): The runtime call used when the struct has no fields.
        """
        parameters = [b.parameter() for b in bind_fields(struct_type)]
        self.add(helper.new_function(name, parameters, "error", receiver="c *VarlinkCall"))

        if struct_type.fields:
            self._fill_wire_struct("out", struct_type)
            self.add(f"\treturn {reply_call}")
        else:
            self.add(f"\treturn {nil_reply_call}")

        self.add("}")
        self.add("")

    def gen_error_replies(self):
        """Generate reply methods for all errors."""
        self.add("// Reply methods for all varlink errors")
        for error in self._interface.errors:
            qualified = self._qualified(error.name)
            self._gen_reply(
                f"Reply{error.name}",
                error.type,
                f'c.ReplyError("{qualified}", &out)',
                f'c.ReplyError("{qualified}", nil)',
            )

    def gen_method_replies(self):
        """Generate reply methods for all methods."""
        self.add("// Reply methods for all varlink methods")
        for method in self._interface.methods:
            self._gen_reply(f"Reply{method.name}", method.out_type, "c.Reply(&out)", "c.Reply(nil)")

    def gen_dummy_methods(self):
        """Generate the default implementations, which reply that a method is not implemented."""
        self.add("// Dummy methods for all varlink methods")
        for method in self._interface.methods:
            heading = helper.new_function(
                method.name, self._server_parameters(method), "error", receiver="s *VarlinkInterface"
            )
            self.add(heading)
            self.add(f'\treturn c.ReplyMethodNotImplemented("{method.name}")')
            self.add("}")
            self.add("")

    def gen_dispatch_case(self, method: Method):
        """Generate the dispatcher branch for one method.

        The branch decodes the call parameters into a json-tagged struct and forwards them to the service.

        Args:
            method (Method): The method to dispatch.
        """
        self.add(f'\tcase "{method.name}":')

        arguments = ["VarlinkCall{call}"]
        if method.in_type.fields:
            bindings = self._add_wire_struct("in", method.in_type, 2)
            self.add("\t\terr := call.GetParameters(&in)")
            self.add("\t\tif err != nil {")
            self.add('\t\t\treturn call.ReplyInvalidParameter("parameters")')
            self.add("\t\t}")
            arguments.extend(b.from_wire("in", 2) for b in bindings)

        self.add(f"\t\treturn s.{self.interface_type_name}.{method.name}({helper.join_parameters(arguments)})")
        self.add("")

    def gen_dispatcher(self):
        """Generate the dispatcher that routes a method name to the service."""
        self.add("// Method call dispatcher")
        self.add(
            helper.new_function(
                "VarlinkDispatch",
                ["call varlink.Call", "methodname string"],
                "error",
                receiver="s *VarlinkInterface",
            )
        )
        self.add("\tswitch methodname {")

        for method in self._interface.methods:
            self.gen_dispatch_case(method)

        self.add("\tdefault:")
        self.add("\t\treturn call.ReplyMethodNotFound(methodname)")
        self.add("\t}")
        self.add("}")
        self.add("")

    def gen_interface_accessors(self):
        """Generate the name and description accessors, the service type and its constructor."""
        receiver = "s *VarlinkInterface"

        self.add("// Varlink interface name")
        self.add(helper.new_function("VarlinkGetName", return_type="string", receiver=receiver))
        self.add(f"\treturn {helper.go_string_literal(self._interface.name)}")
        self.add("}")
        self.add("")

        description = self._interface.description + "\n"
        self.add("// Varlink interface description")
        self.add(helper.new_function("VarlinkGetDescription", return_type="string", receiver=receiver))
        self.add(f"\treturn {helper.go_string_literal(description)}")
        self.add("}")
        self.add("")

        self.add("// Service interface")
        self.add("type VarlinkInterface struct {")
        self.add(f"\t{self.interface_type_name}")
        self.add("}")
        self.add("")

        self.add(helper.new_function("VarlinkNew", [f"m {self.interface_type_name}"], "*VarlinkInterface"))
        self.add("\treturn &VarlinkInterface{m}")
        self.add("}")

    def generate_all(self):
        """Generate all sections, in the order in which they appear in the Go file."""
        self.lines = []

        self.gen_aliases()
        self.gen_client_methods()
        self.gen_service_interface()
        self.gen_call_wrapper()
        self.gen_error_replies()
        self.gen_method_replies()
        self.gen_dummy_methods()
        self.gen_dispatcher()
        self.gen_interface_accessors()

        logger.debug(
            "Generated bindings for '%s': %d method(s), %d error(s), %d alias(es).",
            self._interface.name,
            len(self._interface.methods),
            len(self._interface.errors),
            len(self._interface.aliases),
        )

    def dumps(self) -> str:
        """Generates string output for the Go source file.

        Returns:
            str: The output string, not yet formatted by gofmt.
        """
        out = [self.header, f"package {self.unit_name}", ""]
        out.extend(self.imports)
        out.append("")
        out.extend(self.lines)
        return "\n".join(out) + "\n"
