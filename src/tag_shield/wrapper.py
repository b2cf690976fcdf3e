"""Wrap / unwrap — neutralize tags as block comments for the host language.

Usage:
    from tag_shield import wrap, unwrap

    wrapped = wrap("const x = {{ name }};")
    print(wrapped)           # "const x = /* {{ name }} */;"
    print(unwrap(wrapped))   # "const x = {{ name }};"

Tags inside strings and template-literal text are data and stay as they
are; so do tags that already sit in a comment.
"""

from __future__ import annotations
import logging

from .patterns import WRAPPED_TAG_RE, find_tags, find_wrapped_tags
from .scanner import LexicalContextScanner
from .types import Context, TagSpan

logger = logging.getLogger(__name__)

# A tag starting this close to an already-wrapped tag counts as wrapped
WRAPPED_PROXIMITY = 5

_WRAP_FMT = "/* {tag} */"
_WRAP_TARGETS = frozenset({Context.PLAIN, Context.IN_TEMPLATE_EXPR})


def wrap(text: str) -> str:
    """Enclose every tag in code position in ``/* ... */``."""
    wrapped_starts = [w.inner.start for w in find_wrapped_tags(text)]
    scanner = LexicalContextScanner(text)

    parts: list[str] = []
    last = 0
    count = 0
    for span in find_tags(text):
        parts.append(text[last:span.start])
        already = any(abs(pos - span.start) < WRAPPED_PROXIMITY for pos in wrapped_starts)
        if scanner.classify_span(span.start, span.end) not in _WRAP_TARGETS or already:
            parts.append(span.text)
        else:
            parts.append(_WRAP_FMT.format(tag=span.text))
            count += 1
        last = span.end
    parts.append(text[last:])

    logger.debug("wrapped %d tag(s)", count)
    return "".join(parts)


def unwrap(text: str) -> str:
    """Strip the comment wrapper from every wrapped tag."""
    return WRAPPED_TAG_RE.sub(lambda m: m.group(1), text)


def tags_in_strings(text: str) -> list[TagSpan]:
    """Return the tags that sit inside strings or template-literal text."""
    scanner = LexicalContextScanner(text)
    return [span for span in find_tags(text) if scanner.classify_span(span.start, span.end).is_protected]
