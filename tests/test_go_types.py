"""Tests for translating varlink types into Go types."""

from __future__ import annotations

import pytest

from varlink_go_generator.go_types import convert, go_type, json_tag, needs_conversion
from varlink_go_generator.idl_types import Field, Type, VarlinkKind, new_element, new_struct

STRING = Type(VarlinkKind.STRING)
INT = Type(VarlinkKind.INT)


class TestScalarTypes:
    """Scalars render the same in plain and json mode."""

    @pytest.mark.parametrize(
        "kind, expected",
        [
            (VarlinkKind.BOOL, "bool"),
            (VarlinkKind.INT, "int64"),
            (VarlinkKind.FLOAT, "float64"),
            (VarlinkKind.STRING, "string"),
            (VarlinkKind.OBJECT, "json.RawMessage"),
        ],
    )
    @pytest.mark.parametrize("json", [True, False])
    def test_scalar(self, kind, expected, json):
        assert go_type(Type(kind), json) == expected

    def test_enum_is_a_string(self):
        assert go_type(Type(VarlinkKind.ENUM, enum_values=("a", "b")), True) == "string"

    def test_alias(self):
        assert go_type(Type(VarlinkKind.ALIAS, alias="State"), True) == "State"


class TestContainerTypes:
    """Test arrays, maps and maybes."""

    def test_array(self):
        assert go_type(new_element(VarlinkKind.ARRAY, INT), False) == "[]int64"

    def test_map(self):
        assert go_type(new_element(VarlinkKind.MAP, STRING), False) == "map[string]string"

    def test_maybe(self):
        assert go_type(new_element(VarlinkKind.MAYBE, STRING), False) == "*string"

    def test_deep_nesting(self):
        inner = new_element(VarlinkKind.MAYBE, Type(VarlinkKind.ALIAS, alias="Item"))
        nested = new_element(VarlinkKind.MAP, new_element(VarlinkKind.ARRAY, inner))
        assert go_type(nested, True) == "map[string][]*Item"


class TestStructTypes:
    """Test struct bodies, member names and json tags."""

    def test_empty_struct(self):
        assert go_type(new_struct(), True) == "struct{}"
        assert go_type(new_struct(), False) == "struct{}"

    def test_plain_struct(self):
        struct = new_struct(Field("name", STRING), Field("count", INT))
        assert go_type(struct, False) == "struct {\n\tName string\n\tCount int64\n}"

    def test_json_struct(self):
        struct = new_struct(Field("name", STRING), Field("count", INT))
        assert go_type(struct, True) == 'struct {\n\tName string `json:"name"`\n\tCount int64 `json:"count"`\n}'

    def test_maybe_fields_are_omitempty(self):
        struct = new_struct(Field("opt", new_element(VarlinkKind.MAYBE, INT)), Field("req", INT))
        rendered = go_type(struct, True)

        assert 'Opt *int64 `json:"opt,omitempty"`' in rendered
        assert 'Req int64 `json:"req"`' in rendered

    def test_array_of_maybe_is_not_omitempty(self):
        field_type = new_element(VarlinkKind.ARRAY, new_element(VarlinkKind.MAYBE, INT))
        assert json_tag("values", field_type) == '`json:"values"`'

    def test_member_names_keep_wire_names_in_tags(self):
        struct = new_struct(Field("type", STRING), Field("fooBar", STRING), Field("foo_bar", STRING))
        rendered = go_type(struct, True)

        assert 'Type string `json:"type"`' in rendered
        assert 'FooBar string `json:"fooBar"`' in rendered
        assert 'Foo_bar string `json:"foo_bar"`' in rendered

    def test_nested_struct_indentation(self):
        inner = new_struct(Field("x", INT))
        struct = new_struct(Field("items", new_element(VarlinkKind.ARRAY, inner)))

        assert go_type(struct, False, 1) == "struct {\n\t\tItems []struct {\n\t\t\tX int64\n\t\t}\n\t}"

    def test_nested_struct_tags(self):
        inner = new_struct(Field("x", INT))
        struct = new_struct(Field("point", inner))

        assert go_type(struct, True) == 'struct {\n\tPoint struct {\n\t\tX int64 `json:"x"`\n\t} `json:"point"`\n}'

    def test_plain_and_json_differ_only_in_tags(self):
        inner = new_struct(Field("key", STRING), Field("value", new_element(VarlinkKind.MAYBE, INT)))
        struct = new_struct(
            Field("entries", new_element(VarlinkKind.MAP, inner)),
            Field("list", new_element(VarlinkKind.ARRAY, new_struct(Field("n", INT)))),
        )

        plain = go_type(struct, False, 2)
        tagged = go_type(struct, True, 2)

        assert "`" not in plain
        stripped = "\n".join(line.split(" `json:")[0] for line in tagged.split("\n"))
        assert stripped == plain

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown varlink type kind"):
            go_type(Type("tuple"), True)


class TestConversions:
    """Test which kinds need an explicit conversion between plain and json shapes."""

    @pytest.mark.parametrize(
        "varlink_type, expected",
        [
            (new_struct(Field("a", INT)), True),
            (new_element(VarlinkKind.ARRAY, INT), True),
            (new_element(VarlinkKind.MAP, INT), True),
            (new_element(VarlinkKind.MAYBE, INT), False),
            (Type(VarlinkKind.ALIAS, alias="State"), False),
            (STRING, False),
            (Type(VarlinkKind.OBJECT), False),
        ],
    )
    def test_needs_conversion(self, varlink_type, expected):
        assert needs_conversion(varlink_type) is expected

    def test_convert_scalar_is_identity(self):
        assert convert(STRING, "name", True) == "name"

    def test_convert_array_of_struct(self):
        list_type = new_element(VarlinkKind.ARRAY, new_struct(Field("n", INT)))

        assert convert(list_type, "items", True) == '[]struct {\n\tN int64 `json:"n"`\n}(items)'
        assert convert(list_type, "in.Items", False) == "[]struct {\n\tN int64\n}(in.Items)"
