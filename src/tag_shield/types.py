"""Core types."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum


class TagKind(Enum):
    TAG = "tag"              # {% ... %}
    VARIABLE = "variable"    # {{ ... }}
    COMMENT = "comment"      # {# ... #}


class Context(Enum):
    """Lexical region an offset falls within."""
    PLAIN = "plain"
    IN_STRING = "in_string"
    IN_TEMPLATE_TEXT = "in_template_text"
    IN_TEMPLATE_EXPR = "in_template_expr"
    IN_COMMENT = "in_comment"

    @property
    def is_protected(self) -> bool:
        """True when the offset is string data from the host language's view."""
        return self is Context.IN_STRING or self is Context.IN_TEMPLATE_TEXT


@dataclass(frozen=True, slots=True)
class TagSpan:
    """A single template tag, delimiters included."""
    start: int
    end: int               # half-open
    kind: TagKind
    text: str


@dataclass(frozen=True, slots=True)
class WrappedTagSpan:
    """A tag neutralized as ``/* <tag> */``."""
    outer_start: int
    outer_end: int
    inner: TagSpan

    @property
    def text(self) -> str:
        return self.inner.text


@dataclass(frozen=True, slots=True)
class Placeholder:
    """Formatter-safe stand-in for one masked tag."""
    key: str
    original: str


@dataclass(slots=True)
class MaskedText:
    """Result of masking a document."""
    text: str                                              # masked text with keys
    placeholders: list[Placeholder] = field(default_factory=list)

    @property
    def key_map(self) -> dict[str, str]:
        return {p.key: p.original for p in self.placeholders}
