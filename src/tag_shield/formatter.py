"""Formatting with tags preserved: mask, run the formatter, restore.

Usage:
    fmt = MaskedFormatter.create()
    pretty = fmt.format(source, ParserKind.TYPESCRIPT)

The formatter is any callable ``(text, parser) -> text``; prettier is the
default.  If it raises, or loses a placeholder, the original text comes
back unchanged and the failure is logged.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath
from typing import Callable

from .masking import mask, restore
from .prettier_layer import FormatterError, PrettierFormatter

logger = logging.getLogger(__name__)

Formatter = Callable[[str, str], str]

__all__ = [
    "Formatter",
    "FormatterError",
    "MaskedFormatter",
    "ParserKind",
    "format_with_tags",
    "format_template",
    "format_js",
    "format_ts",
    "format_xml",
]


class ParserKind(Enum):
    """Downstream parser; values are prettier parser identifiers."""
    HTML = "html"
    BABEL = "babel"
    TYPESCRIPT = "typescript"
    XML = "xml"

    @property
    def masks_tags(self) -> bool:
        # HTML templates go to the formatter as-is
        return self is not ParserKind.HTML

    @classmethod
    def for_language(cls, language_id: str) -> "ParserKind | None":
        return _LANGUAGE_PARSERS.get(language_id)


_LANGUAGE_PARSERS: dict[str, ParserKind] = {
    "django-html": ParserKind.HTML,
    "jinja-html": ParserKind.HTML,
    "html": ParserKind.HTML,
    "javascript": ParserKind.BABEL,
    "javascriptreact": ParserKind.BABEL,
    "typescript": ParserKind.TYPESCRIPT,
    "typescriptreact": ParserKind.TYPESCRIPT,
    "xml": ParserKind.XML,
}


def format_with_tags(text: str, kind: ParserKind, formatter: Formatter | None = None) -> str:
    """Format text with the given parser, keeping template tags intact."""
    formatter = formatter or PrettierFormatter()

    if not kind.masks_tags:
        try:
            return formatter(text, kind.value)
        except Exception:
            logger.exception("formatting with parser %r failed", kind.value)
            return text

    masked = mask(text)
    try:
        formatted = formatter(masked.text, kind.value)
    except Exception:
        logger.exception("formatting with parser %r failed", kind.value)
        return text

    lost = [p.key for p in masked.placeholders if p.key not in formatted]
    if lost:
        logger.warning("formatter dropped %d placeholder(s), keeping original text", len(lost))
        return text
    return restore(formatted, masked.placeholders)


def format_template(text: str, formatter: Formatter | None = None) -> str:
    return format_with_tags(text, ParserKind.HTML, formatter)


def format_js(text: str, formatter: Formatter | None = None) -> str:
    return format_with_tags(text, ParserKind.BABEL, formatter)


def format_ts(text: str, formatter: Formatter | None = None) -> str:
    return format_with_tags(text, ParserKind.TYPESCRIPT, formatter)


def format_xml(text: str, formatter: Formatter | None = None) -> str:
    return format_with_tags(text, ParserKind.XML, formatter)


@dataclass
class MaskedFormatter:
    """Formatting entry point for an editor integration."""

    formatter: Formatter
    enabled: bool = True
    # Non-template-language files are only formatted under these folders
    template_folder_names: list[str] = field(default_factory=lambda: ["templates", "template"])

    @classmethod
    def create(cls, **prettier_options) -> "MaskedFormatter":
        """A formatter backed by prettier."""
        return cls(formatter=PrettierFormatter(**prettier_options))

    def format(self, text: str, kind: ParserKind) -> str:
        return format_with_tags(text, kind, self.formatter)

    def applies_to(self, path: str, language_id: str) -> bool:
        """Whether a document should be formatted at all."""
        if not self.enabled or ParserKind.for_language(language_id) is None:
            return False
        if language_id in ("django-html", "jinja-html"):
            return True
        return any(part in self.template_folder_names for part in PurePath(path).parent.parts)

    def format_document(self, path: str, language_id: str, text: str) -> str | None:
        """Return the formatted text, or None if nothing should change."""
        if not self.applies_to(path, language_id):
            return None
        formatted = self.format(text, ParserKind.for_language(language_id))
        if not formatted or formatted == text:
            return None
        return formatted
