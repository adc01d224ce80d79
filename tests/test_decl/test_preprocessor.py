"""Unit tests for preprocessor directives (cgen.decl.preprocessor).

Tests cover:
- Include: system vs local, trailing comment, path validation
- Macro: object-like, function-like, multi-line continuation, doc
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from cgen.decl import Include, Macro


class TestInclude:
    @pytest.mark.unit
    def test_system(self):
        assert Include(path="stdio.h", system=True).to_string() == "#include <stdio.h>\n"

    @pytest.mark.unit
    def test_local(self):
        assert Include(path="foo.h").to_string() == '#include "foo.h"\n'

    @pytest.mark.unit
    def test_set_system(self):
        include = Include(path="stdint.h")
        assert include.set_system() is include
        assert include.to_string() == "#include <stdint.h>\n"

    @pytest.mark.unit
    def test_comment(self):
        include = Include(path="foo.h").set_comment("for Foo")
        assert include.to_string() == '#include "foo.h"  // for Foo\n'

    @pytest.mark.unit
    def test_empty_path_rejected(self):
        with pytest.raises(ValidationError):
            Include(path="")


class TestMacro:
    @pytest.mark.unit
    def test_flag(self):
        assert Macro(name="ENABLE_FOO").to_string() == "#define ENABLE_FOO\n"

    @pytest.mark.unit
    def test_value(self):
        assert Macro(name="MAX").set_value("10").to_string() == "#define MAX 10\n"

    @pytest.mark.unit
    def test_function_like(self):
        macro = Macro(name="MIN").new_arg("a").new_arg("b").set_value("((a) < (b) ? (a) : (b))")
        assert macro.to_string() == "#define MIN(a, b) ((a) < (b) ? (a) : (b))\n"

    @pytest.mark.unit
    def test_multiline_value(self):
        macro = Macro(name="M", value="do {\nfoo();\n} while (0)")
        assert macro.to_string() == "#define M do { \\\n    foo(); \\\n    } while (0)\n"

    @pytest.mark.unit
    def test_doc(self):
        macro = Macro(name="MAX", value="10").push_doc_str("Upper bound.")
        assert macro.to_string() == "/// Upper bound.\n#define MAX 10\n"

    @pytest.mark.unit
    def test_empty_arg_rejected(self):
        with pytest.raises(ValueError):
            Macro(name="F").new_arg("")

    @pytest.mark.unit
    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            Macro(name="")
