"""tag-shield — keep Django/Jinja template tags safe from JS/TS code formatters."""

from .scanner import LexicalContextScanner, ScannerState, classify_context, classify_offsets, is_inside_string
from .patterns import find_tags, find_wrapped_tags, has_tags, has_unwrapped_tags, has_wrapped_tags
from .wrapper import tags_in_strings, unwrap, wrap
from .vault import PlaceholderVault
from .masking import mask, restore
from .formatter import FormatterError, MaskedFormatter, ParserKind, format_with_tags
from .session import TagWrapSession
from .config import create_formatter, create_session, load_config, load_from_yaml
from .types import Context, MaskedText, Placeholder, TagKind, TagSpan, WrappedTagSpan

__all__ = [
    "LexicalContextScanner", "ScannerState",
    "classify_context", "classify_offsets", "is_inside_string",
    "find_tags", "find_wrapped_tags",
    "has_tags", "has_unwrapped_tags", "has_wrapped_tags",
    "wrap", "unwrap", "tags_in_strings",
    "PlaceholderVault", "mask", "restore",
    "FormatterError", "MaskedFormatter", "ParserKind", "format_with_tags",
    "TagWrapSession",
    "create_formatter", "create_session", "load_config", "load_from_yaml",
    "Context", "MaskedText", "Placeholder", "TagKind", "TagSpan", "WrappedTagSpan",
]
__version__ = "0.1.0"
