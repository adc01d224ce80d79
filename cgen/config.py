"""cgen formatting configuration.

Centralised, typed configuration for the renderer. All settings use Pydantic
v2 models so they can be validated at construction time and serialised to/from
JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


_TRUTHY = {"1", "true", "yes", "on"}


class FormatConfig(BaseModel):
    """Layout knobs shared by every renderer.

    Instances are typically created once by the caller and passed to
    ``Scope.render``.  When omitted, the defaults below are used.
    """

    indent_width: int = Field(default=4, ge=1, description="Spaces per indentation level")
    doc_width: int = Field(
        default=90, ge=20, description="Column at which doc and comment text is wrapped"
    )
    heading_width: int = Field(
        default=100, ge=10, description="Width of the ``////`` rules around heading comments"
    )
    void_params: bool = Field(
        default=False, description="Render empty parameter lists as ``(void)``"
    )
    blank_lines: int = Field(
        default=1, ge=0, description="Blank lines between top-level declarations"
    )

    @property
    def indent_unit(self) -> str:
        """The whitespace emitted for a single indentation level."""
        return " " * self.indent_width

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Parent directories are created.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "FormatConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "FormatConfig":
        """Build a ``FormatConfig`` from environment variables.

        Recognised variables (all optional):
            CGEN_INDENT_WIDTH, CGEN_DOC_WIDTH, CGEN_HEADING_WIDTH,
            CGEN_VOID_PARAMS, CGEN_BLANK_LINES.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CGEN_INDENT_WIDTH"):
            kwargs["indent_width"] = int(os.environ["CGEN_INDENT_WIDTH"])
        if os.environ.get("CGEN_DOC_WIDTH"):
            kwargs["doc_width"] = int(os.environ["CGEN_DOC_WIDTH"])
        if os.environ.get("CGEN_HEADING_WIDTH"):
            kwargs["heading_width"] = int(os.environ["CGEN_HEADING_WIDTH"])
        if os.environ.get("CGEN_VOID_PARAMS"):
            kwargs["void_params"] = os.environ["CGEN_VOID_PARAMS"].strip().lower() in _TRUTHY
        if os.environ.get("CGEN_BLANK_LINES"):
            kwargs["blank_lines"] = int(os.environ["CGEN_BLANK_LINES"])
        return cls(**kwargs)
