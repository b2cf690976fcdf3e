"""Tag matching for ``{{ }}``, ``{% %}`` and ``{# #}`` spans.

Matching is non-greedy and may cross line boundaries.  An opening
delimiter with no closing one before end-of-input is simply not a tag.
"""

from __future__ import annotations
import re
from typing import Iterator

from .types import TagKind, TagSpan, WrappedTagSpan

_TAG_BODY = r"\{%[\s\S]*?%\}|\{\{[\s\S]*?\}\}|\{#[\s\S]*?#\}"

TAG_RE = re.compile(f"({_TAG_BODY})")
WRAPPED_TAG_RE = re.compile(rf"/\*\s*({_TAG_BODY})\s*\*/")

_KINDS: dict[str, TagKind] = {
    "{%": TagKind.TAG,
    "{{": TagKind.VARIABLE,
    "{#": TagKind.COMMENT,
}

# How far around a tag has_unwrapped_tags looks for comment delimiters
_WRAPPER_LOOKAROUND = 10


def tag_kind(tag: str) -> TagKind:
    """Return the kind of a tag from its opening delimiter."""
    return _KINDS[tag[:2]]


def find_tags(text: str) -> Iterator[TagSpan]:
    """Yield every tag span in ``text``, left to right, never overlapping."""
    for m in TAG_RE.finditer(text):
        yield TagSpan(
            start=m.start(),
            end=m.end(),
            kind=tag_kind(m.group()),
            text=m.group(),
        )


def find_wrapped_tags(text: str) -> Iterator[WrappedTagSpan]:
    """Yield every ``/* <tag> */`` comment with the location of its tag."""
    for m in WRAPPED_TAG_RE.finditer(text):
        inner = m.group(1)
        yield WrappedTagSpan(
            outer_start=m.start(),
            outer_end=m.end(),
            inner=TagSpan(
                start=m.start(1),
                end=m.end(1),
                kind=tag_kind(inner),
                text=inner,
            ),
        )


def has_tags(text: str) -> bool:
    """Check if text has any tags (wrapped or not)."""
    return TAG_RE.search(text) is not None


def has_wrapped_tags(text: str) -> bool:
    return WRAPPED_TAG_RE.search(text) is not None


def has_unwrapped_tags(text: str) -> bool:
    """Check if text has a tag not enclosed by ``/*`` and ``*/``.

    Only the few characters around each tag are inspected, so a tag
    inside a longer comment still counts as wrapped.
    """
    for span in find_tags(text):
        before = text[max(0, span.start - _WRAPPER_LOOKAROUND):span.start]
        if not before.rstrip().endswith("/*"):
            return True
        after = text[span.end:span.end + _WRAPPER_LOOKAROUND]
        if not after.lstrip().startswith("*/"):
            return True
    return False
