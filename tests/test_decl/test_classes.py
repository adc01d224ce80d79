"""Unit tests for C++ classes (cgen.decl.classes).

Tests cover:
- Header rendering with single and multiple bases
- Visibility grouping (one label per visibility, first-use order)
- Member ordering inside a group
- Constructors, destructor replacement and member lookups
- Renaming a class renames its constructors and destructor
- Live handles returned by the new_* builders
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from cgen.decl import BaseClass, Class, Method
from cgen.types import Visibility, int_type, named_type, size_type, uint_type


class TestClassHeader:
    @pytest.mark.unit
    def test_single_public_base(self):
        cls = Class(name="MyClass").set_base("StateBase", Visibility.PUBLIC)
        cls.new_attribute("name", uint_type(64)).public()
        assert cls.to_string() == (
            "class MyClass : public StateBase {\n"
            "public:\n"
            "    uint64_t name;\n"
            "};\n"
        )

    @pytest.mark.unit
    def test_no_bases_no_members(self):
        assert Class(name="Empty").to_string() == "class Empty {\n};\n"

    @pytest.mark.unit
    def test_multiple_bases(self):
        cls = Class(name="C").set_base("A").add_base("B", Visibility.PROTECTED)
        assert cls.header() == "class C : public A, protected B"

    @pytest.mark.unit
    def test_set_base_replaces(self):
        cls = Class(name="C").set_base("A").set_base("B", Visibility.PRIVATE)
        assert cls.header() == "class C : private B"

    @pytest.mark.unit
    def test_base_class_render(self):
        assert BaseClass(name="Base").render() == "public Base"

    @pytest.mark.unit
    def test_empty_base_rejected(self):
        with pytest.raises(ValidationError):
            Class(name="C").set_base("")

    @pytest.mark.unit
    def test_doc(self):
        cls = Class(name="Widget").push_doc_str("A widget.")
        assert cls.to_string().splitlines()[:2] == ["/// A widget.", "class Widget {"]


class TestVisibilityGroups:
    @pytest.mark.unit
    def test_groups_in_first_use_order(self):
        cls = Class(name="Widget")
        cls.new_attribute("size_", size_type())
        cls.new_constructor()
        method = cls.new_method("size", size_type()).public().set_const()
        method.push_line("return size_;")
        cls.new_destructor().set_virtual()
        assert cls.visibility_groups() == [Visibility.PRIVATE, Visibility.PUBLIC]
        assert cls.to_string() == (
            "class Widget {\n"
            "private:\n"
            "    size_t size_;\n"
            "\n"
            "public:\n"
            "    Widget();\n"
            "    virtual ~Widget();\n"
            "    size_t size() const {\n"
            "        return size_;\n"
            "    }\n"
            "};\n"
        )

    @pytest.mark.unit
    def test_one_label_per_visibility(self):
        cls = Class(name="C")
        cls.new_attribute("a", int_type()).public()
        cls.new_attribute("b", int_type()).protected()
        cls.new_attribute("c", int_type()).public()
        text = cls.to_string()
        assert text.count("public:") == 1
        assert text.count("protected:") == 1
        assert text.index("    int32_t c;") < text.index("protected:")

    @pytest.mark.unit
    def test_attributes_before_methods(self):
        cls = Class(name="C")
        cls.new_method("f").public()
        cls.new_attribute("x", int_type()).public()
        assert cls.to_string() == "class C {\npublic:\n    int32_t x;\n    void f();\n};\n"

    @pytest.mark.unit
    def test_visibility_change_after_creation(self):
        cls = Class(name="C")
        attr = cls.new_attribute("x", int_type())
        assert "private:" in cls.to_string()
        attr.public()
        assert "public:" in cls.to_string()
        assert "private:" not in cls.to_string()


class TestClassMembers:
    @pytest.mark.unit
    def test_constructor_takes_class_name(self):
        cls = Class(name="Foo")
        ctor = cls.new_constructor()
        assert ctor.name == "Foo"
        assert cls.constructors == [ctor]

    @pytest.mark.unit
    def test_new_destructor_replaces(self):
        cls = Class(name="Foo")
        cls.new_attribute("x", int_type())
        first = cls.new_destructor()
        second = cls.new_destructor().set_virtual()
        assert cls.destructor is second
        assert first is not second
        assert len(cls.members) == 2
        assert cls.to_string().count("~Foo()") == 1

    @pytest.mark.unit
    def test_destructor_absent(self):
        assert Class(name="Foo").destructor is None

    @pytest.mark.unit
    def test_lookups(self):
        cls = Class(name="Foo")
        attr = cls.new_attribute("x", int_type())
        method = cls.new_method("get", int_type())
        assert cls.attribute_by_name("x") is attr
        assert cls.attribute_by_name("get") is None
        assert cls.method_by_name("get") is method
        assert cls.attributes == [attr]
        assert cls.methods == [method]

    @pytest.mark.unit
    def test_push_method(self):
        cls = Class(name="Foo").push_method(Method(name="run").public().set_pure())
        assert "    virtual void run() = 0;" in cls.to_string().splitlines()

    @pytest.mark.unit
    def test_to_type(self):
        assert Class(name="Foo").to_type() == named_type("Foo")

    @pytest.mark.unit
    def test_rename_updates_constructors_and_destructor(self):
        cls = Class(name="A")
        cls.new_constructor()
        cls.new_constructor().set_copy()
        cls.new_destructor().set_virtual()
        cls.name = "B"
        lines = cls.to_string().splitlines()
        assert lines[0] == "class B {"
        assert "    B();" in lines
        assert "    B(const B & other);" in lines
        assert "    virtual ~B();" in lines
        assert not any("A(" in line for line in lines)

    @pytest.mark.unit
    def test_invalid_rename_keeps_members(self):
        cls = Class(name="A")
        ctor = cls.new_constructor()
        with pytest.raises(ValidationError):
            cls.name = ""
        assert cls.name == "A"
        assert ctor.name == "A"
