"""End-to-end tests: build complete source files and write them to disk.

These tests exercise the whole pipeline -- builder API, rendering with a
shared formatter, nested scopes and the async file writer -- against
realistic headers and implementation files.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from cgen import (
    FormatConfig,
    Scope,
    Visibility,
    bool_type,
    char_type,
    int_type,
    size_type,
    template_type,
    uint_type,
    write_scope,
)


EXPECTED_HEADER = """\
/// State machine support types.

#ifndef STATE_H
#define STATE_H 1

#include <stdint.h>
#include <stddef.h>

struct Foo {
    size_t one;
    char * two;
};

class MyClass : public StateBase {
public:
    uint64_t name;
};

int32_t state_count(struct Foo * foo);

#endif // STATE_H
"""


@pytest.mark.integration
def test_header_renders_exactly(header_scope):
    assert header_scope.render() == EXPECTED_HEADER


@pytest.mark.integration
@pytest.mark.asyncio
async def test_header_written_to_disk(header_scope, tmp_output_dir: Path):
    written = await write_scope(header_scope, output_dir=tmp_output_dir)
    assert written.name == "state.h"
    assert written.read_text(encoding="utf-8") == EXPECTED_HEADER


@pytest.mark.integration
def test_cpp_class_file():
    scope = Scope().set_filename("buffer.hpp")
    scope.new_include("vector", system=True)
    scope.new_include("cstdint", system=True)

    scope.new_comment("Buffer", heading=True)
    cls = scope.new_class("Buffer").set_base("Resource", Visibility.PUBLIC)
    cls.push_doc_str("Growable byte buffer.")

    ctor = cls.new_constructor().set_explicit()
    ctor.new_param("capacity", size_type())
    ctor.push_initializer("data_(capacity)")

    cls.new_destructor().set_virtual().set_default()

    size = cls.new_method("size", size_type()).public().set_const()
    size.push_line("return data_.size();")

    cls.new_method("flush", bool_type()).protected().set_pure()

    cls.new_attribute("data_", template_type("std::vector", uint_type(8)))

    text = scope.render(FormatConfig(heading_width=20))
    assert text == (
        "#include <vector>\n"
        "#include <cstdint>\n"
        "\n"
        "////////////////////\n"
        "// Buffer\n"
        "////////////////////\n"
        "\n"
        "/// Growable byte buffer.\n"
        "class Buffer : public Resource {\n"
        "public:\n"
        "    explicit Buffer(size_t capacity) : data_(capacity) {\n"
        "    }\n"
        "    virtual ~Buffer() = default;\n"
        "    size_t size() const {\n"
        "        return data_.size();\n"
        "    }\n"
        "\n"
        "protected:\n"
        "    virtual bool flush() = 0;\n"
        "\n"
        "private:\n"
        "    std::vector<uint8_t> data_;\n"
        "};\n"
    )


@pytest.mark.integration
def test_c_implementation_file():
    scope = Scope()
    scope.new_include("state.h")
    counter = scope.new_variable("counter", int_type())
    counter.set_static().set_value("0")

    fn = scope.new_function("state_count", int_type())
    fn.new_param("name", char_type().const().pointer())
    fn.push_line("(void)name;")
    fn.push_line("return counter++;")

    assert scope.render(FormatConfig(indent_width=2, void_params=True)) == (
        '#include "state.h"\n'
        "\n"
        "static int32_t counter = 0;\n"
        "\n"
        "int32_t state_count(const char * name) {\n"
        "  (void)name;\n"
        "  return counter++;\n"
        "}\n"
    )
