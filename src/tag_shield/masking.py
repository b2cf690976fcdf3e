"""Masking — hide every tag from an external formatter, then put it back.

Usage:
    from tag_shield import mask, restore

    result = mask("const x = {{ name }};")
    print(result.text)                    # "const x = __DJANGO_PLACEHOLDER_0__;"

    formatted = some_formatter(result.text)
    print(restore(formatted, result.placeholders))

Unlike wrapping, masking ignores lexical context: tags inside string
literals are masked too, since the formatter must never see tag syntax.
"""

from __future__ import annotations
import logging

from .patterns import TAG_RE, WRAPPED_TAG_RE
from .types import MaskedText, Placeholder
from .vault import BARE, WRAPPED, PlaceholderVault, restore_placeholders

logger = logging.getLogger(__name__)


def mask(text: str, vault: PlaceholderVault | None = None) -> MaskedText:
    """Replace wrapped tags, then bare tags, with unique placeholder keys.

    Pass a vault to share its counter across calls; by default each call
    gets its own.
    """
    vault = vault if vault is not None else PlaceholderVault()
    first = vault.size

    # --- Pass 1: wrapped tags, comment delimiters included ---
    masked = WRAPPED_TAG_RE.sub(lambda m: vault.create(WRAPPED, m.group()).key, text)

    # --- Pass 2: whatever bare tags remain ---
    masked = TAG_RE.sub(lambda m: vault.create(BARE, m.group()).key, masked)

    placeholders = vault.placeholders[first:]
    logger.debug("masked %d tag(s)", len(placeholders))
    return MaskedText(text=masked, placeholders=placeholders)


def restore(formatted: str, placeholders: list[Placeholder]) -> str:
    """Put the original tags back into formatter output."""
    return restore_placeholders(formatted, placeholders)
