"""Unit tests for the type model (cgen.types).

Tests cover:
- Primitive spellings and the integer width fallback
- Named, tagged and template types
- Declarator composition for pointers, references and arrays
- const/volatile placement
- Value semantics (frozen models, derivations never alias)
- Validation of names and sizes
"""

from __future__ import annotations

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from cgen.types import (
    ArrayType,
    NamedType,
    PointerType,
    PrimitiveKind,
    PrimitiveType,
    TypeTag,
    bool_type,
    char_type,
    cstr_type,
    double_type,
    enum_type,
    float_type,
    int_type,
    named_type,
    size_type,
    std_string_type,
    struct_type,
    template_type,
    uint_type,
    uintptr_type,
    union_type,
    void_type,
)


def _int() -> NamedType:
    return named_type("int")


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------


class TestPrimitiveTypes:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "ty, expected",
        [
            (void_type(), "void"),
            (bool_type(), "bool"),
            (char_type(), "char"),
            (char_type(signed=False), "unsigned char"),
            (int_type(8), "int8_t"),
            (int_type(), "int32_t"),
            (uint_type(16), "uint16_t"),
            (uint_type(64), "uint64_t"),
            (size_type(), "size_t"),
            (uintptr_type(), "uintptr_t"),
            (float_type(), "float"),
            (double_type(), "double"),
        ],
    )
    def test_spelling(self, ty, expected):
        assert ty.render() == expected
        assert str(ty) == expected

    @pytest.mark.unit
    def test_unsupported_width_falls_back_to_64(self):
        with patch("cgen.types.print_warning") as warn:
            ty = int_type(12)
        assert ty.width == 64
        assert ty.render() == "int64_t"
        warn.assert_called_once()
        assert "12" in warn.call_args[0][0]

    @pytest.mark.unit
    def test_supported_width_does_not_warn(self):
        with patch("cgen.types.print_warning") as warn:
            uint_type(8)
        warn.assert_not_called()

    @pytest.mark.unit
    def test_negative_width_rejected(self):
        with pytest.raises(ValidationError):
            PrimitiveType(kind=PrimitiveKind.INT, width=-8)

    @pytest.mark.unit
    def test_is_integer(self):
        assert int_type().is_integer()
        assert size_type().is_integer()
        assert not float_type().is_integer()
        assert not cstr_type().is_integer()


# ---------------------------------------------------------------------------
# Named and template types
# ---------------------------------------------------------------------------


class TestNamedTypes:
    @pytest.mark.unit
    def test_plain_name(self):
        assert named_type("StateBase").render() == "StateBase"

    @pytest.mark.unit
    def test_tagged(self):
        assert struct_type("Foo").render() == "struct Foo"
        assert union_type("Bar").render() == "union Bar"
        assert enum_type("Color").render() == "enum Color"
        assert named_type("Foo", TypeTag.STRUCT) == struct_type("Foo")

    @pytest.mark.unit
    def test_std_string(self):
        assert std_string_type().render() == "std::string"

    @pytest.mark.unit
    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            named_type("")

    @pytest.mark.unit
    def test_multiline_name_rejected(self):
        with pytest.raises(ValidationError):
            NamedType(name="Foo\nBar")


class TestTemplateTypes:
    @pytest.mark.unit
    def test_single_argument(self):
        assert template_type("std::vector", int_type()).render() == "std::vector<int32_t>"

    @pytest.mark.unit
    def test_multiple_arguments(self):
        ty = template_type("std::map", std_string_type(), cstr_type())
        assert ty.render() == "std::map<std::string, char *>"

    @pytest.mark.unit
    def test_no_arguments(self):
        assert template_type("Thing").render() == "Thing"

    @pytest.mark.unit
    def test_pointer_to_template(self):
        ty = template_type("std::vector", int_type()).pointer()
        assert ty.declare("items") == "std::vector<int32_t> * items"


# ---------------------------------------------------------------------------
# Declarators
# ---------------------------------------------------------------------------


class TestDeclarators:
    @pytest.mark.unit
    def test_pointer(self):
        assert _int().pointer().render() == "int *"
        assert _int().pointer().declare("p") == "int * p"

    @pytest.mark.unit
    def test_pointer_to_pointer(self):
        assert _int().pointer().pointer().render() == "int **"
        assert _int().pointer().pointer().declare("pp") == "int ** pp"

    @pytest.mark.unit
    def test_char_pointer_field(self):
        assert cstr_type().declare("two") == "char * two"

    @pytest.mark.unit
    def test_array_of_pointers(self):
        ty = _int().pointer().array(4)
        assert ty.render() == "int *[4]"
        assert ty.declare("p") == "int * p[4]"

    @pytest.mark.unit
    def test_pointer_to_array(self):
        ty = _int().array(4).pointer()
        assert ty.render() == "int (*)[4]"
        assert ty.declare("p") == "int (* p)[4]"

    @pytest.mark.unit
    def test_array(self):
        assert _int().array(4).render() == "int[4]"
        assert _int().array(4).declare("xs") == "int xs[4]"

    @pytest.mark.unit
    def test_unsized_array(self):
        assert _int().array().declare("xs") == "int xs[]"

    @pytest.mark.unit
    def test_multidimensional_array(self):
        # array of 2 arrays of 3 ints
        assert _int().array(3).array(2).declare("m") == "int m[2][3]"

    @pytest.mark.unit
    def test_reference(self):
        assert _int().reference().render() == "int &"
        assert _int().reference().declare("r") == "int & r"

    @pytest.mark.unit
    def test_reference_to_pointer(self):
        assert _int().pointer().reference().declare("r") == "int *& r"

    @pytest.mark.unit
    def test_rvalue_reference(self):
        ty = named_type("Foo").reference(rvalue=True)
        assert ty.rvalue
        assert ty.render() == "Foo &&"
        assert ty.declare("o") == "Foo && o"

    @pytest.mark.unit
    def test_const_lvalue_reference(self):
        assert named_type("Foo").const().reference().declare("o") == "const Foo & o"

    @pytest.mark.unit
    def test_is_pointer(self):
        assert _int().pointer().is_pointer()
        assert not _int().is_pointer()
        assert not _int().pointer().array(2).is_pointer()

    @pytest.mark.unit
    def test_negative_array_size_rejected(self):
        with pytest.raises(ValidationError):
            ArrayType(inner=_int(), size=-1)


# ---------------------------------------------------------------------------
# Qualifiers
# ---------------------------------------------------------------------------


class TestQualifiers:
    @pytest.mark.unit
    def test_pointer_to_const(self):
        assert _int().const().pointer().render() == "const int *"

    @pytest.mark.unit
    def test_const_pointer(self):
        assert _int().pointer().const().render() == "int * const"
        assert _int().pointer(const=True).declare("p") == "int * const p"

    @pytest.mark.unit
    def test_const_pointer_to_const(self):
        assert _int().const().pointer().const().render() == "const int * const"

    @pytest.mark.unit
    def test_volatile(self):
        assert _int().const().volatile().render() == "const volatile int"
        assert _int().pointer().volatile().render() == "int * volatile"

    @pytest.mark.unit
    def test_const_cstr(self):
        assert char_type().const().pointer().declare("name") == "const char * name"


# ---------------------------------------------------------------------------
# Value semantics
# ---------------------------------------------------------------------------


class TestValueSemantics:
    @pytest.mark.unit
    def test_frozen(self):
        ty = int_type()
        with pytest.raises(ValidationError):
            ty.width = 8

    @pytest.mark.unit
    def test_derivations_do_not_mutate(self):
        base = int_type()
        base.const()
        base.pointer()
        assert base.is_const is False
        assert base.render() == "int32_t"

    @pytest.mark.unit
    def test_structural_equality(self):
        assert int_type() == int_type()
        assert int_type().pointer() == int_type().pointer()
        assert int_type() != uint_type()

    @pytest.mark.unit
    def test_validates_from_dict(self):
        ty = PointerType.model_validate(
            {"inner": {"variant": "primitive", "kind": "int", "width": 16}}
        )
        assert ty.render() == "int16_t *"
