"""Shared building blocks for declaration entities.

Every entity is a mutable Pydantic model with ``validate_assignment`` turned
on, so an invalid name is rejected both at construction and when it is
re-assigned later.  Each entity renders itself onto a ``Formatter``.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field as PydanticField, field_validator

from cgen.config import FormatConfig
from cgen.formatter import Formatter
from cgen.utils import comment_lines, validate_identifier


class Entity(BaseModel):
    """Base class of everything that can be rendered."""

    model_config = ConfigDict(validate_assignment=True)

    def render(self, fmt: Formatter) -> None:
        raise NotImplementedError

    def to_string(self, config: FormatConfig | None = None) -> str:
        """Render this entity on its own, outside of any scope."""
        fmt = Formatter(config)
        self.render(fmt)
        return fmt.getvalue()

    def __str__(self) -> str:
        return self.to_string()


class Doc(Entity):
    """A documentation comment, rendered as ``///`` lines.

    Text is kept as pushed and wrapped at render time, so the same tree can be
    rendered with different ``doc_width`` settings.
    """

    kind: Literal["doc"] = "doc"
    texts: list[str] = PydanticField(default_factory=list)

    def add_text(self, text: str) -> "Doc":
        self.texts.append(text)
        return self

    def lines(self, config: FormatConfig) -> list[str]:
        result: list[str] = []
        for text in self.texts:
            result.extend(comment_lines(text, config.doc_width))
        return result

    def render(self, fmt: Formatter) -> None:
        for line in self.lines(fmt.config):
            fmt.line(f"/// {line}" if line else "///")


class NamedEntity(Entity):
    """An entity identified by a non-empty name."""

    name: str

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return validate_identifier(value)


class DocumentedEntity(NamedEntity):
    """A named entity that may carry a documentation comment."""

    doc: Optional[Doc] = None

    def push_doc_str(self, text: str):
        """Append *text* to the documentation comment, creating it if needed."""
        if self.doc is None:
            self.doc = Doc()
        self.doc.add_text(text)
        return self

    def _render_doc(self, fmt: Formatter) -> None:
        if self.doc is not None:
            self.doc.render(fmt)
