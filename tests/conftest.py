"""Shared pytest fixtures for the cgen test suite.

Provides reusable fixtures for:
- Formatting configurations (default and customised)
- A fresh, empty ``Scope``
- A ``Formatter`` bound to the default configuration
- A pre-built header scope exercising most entity kinds
- Temporary output directories for file-writing tests
"""

from __future__ import annotations

from pathlib import Path

import pytest

from cgen import (
    FormatConfig,
    Formatter,
    Scope,
    Visibility,
    cstr_type,
    int_type,
    size_type,
    uint_type,
)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def default_config() -> FormatConfig:
    """``FormatConfig`` with every setting at its default."""
    return FormatConfig()


@pytest.fixture
def narrow_config() -> FormatConfig:
    """Two-space indentation with a short wrap column."""
    return FormatConfig(indent_width=2, doc_width=20, heading_width=20)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every ``CGEN_*`` variable from the environment."""
    for name in (
        "CGEN_INDENT_WIDTH",
        "CGEN_DOC_WIDTH",
        "CGEN_HEADING_WIDTH",
        "CGEN_VOID_PARAMS",
        "CGEN_BLANK_LINES",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

@pytest.fixture
def scope() -> Scope:
    """A fresh, empty scope."""
    return Scope()


@pytest.fixture
def fmt() -> Formatter:
    """A formatter using the default configuration."""
    return Formatter()


@pytest.fixture
def header_scope() -> Scope:
    """A small header: guard, includes, a struct, a class and a prototype."""
    scope = Scope().set_filename("state.h")
    scope.push_doc_str("State machine support types.")

    guard = scope.new_include_guard("STATE_H")
    body = guard.then_scope()
    body.new_include("stdint.h", system=True)
    body.new_include("stddef.h", system=True)

    foo = body.new_struct("Foo")
    foo.new_field("one", size_type())
    foo.new_field("two", cstr_type())

    cls = body.new_class("MyClass").set_base("StateBase", Visibility.PUBLIC)
    cls.new_attribute("name", uint_type(64)).public()

    fn = body.new_function("state_count", int_type(32))
    fn.new_param("foo", foo.to_type().pointer())
    return scope


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_output_dir(tmp_path: Path) -> Path:
    """Temporary directory that receives generated sources (auto-cleanup)."""
    output_dir = tmp_path / "generated"
    output_dir.mkdir()
    yield output_dir
