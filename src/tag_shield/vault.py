"""Vault — per-call mapping between placeholder keys and masked tags.

Design goals:
  - Unique: every masked occurrence gets its own key, even repeated tags
  - Formatter-safe: keys are plain identifiers a JS/TS/XML formatter keeps intact
  - Restore-safe: no key is a substring of another key (trailing ``__``)
"""

from __future__ import annotations

from .types import Placeholder

# Key format: __DJANGO_<KIND>_<n>__, identifier-shaped and improbable in real text
_KEY_FMT = "__DJANGO_{kind}_{idx}__"

WRAPPED = "WRAPPED"
BARE = "PLACEHOLDER"


class PlaceholderVault:
    """Placeholder store with its own counter; create one per masking call."""

    __slots__ = ("_placeholders", "_key_to_original", "_counter")

    def __init__(self) -> None:
        self._placeholders: list[Placeholder] = []
        self._key_to_original: dict[str, str] = {}   # __DJANGO_WRAPPED_0__ → "/* {{ x }} */"
        self._counter = 0

    # ------------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------------

    def create(self, kind: str, original: str) -> Placeholder:
        """Mint a fresh key for this occurrence of ``original``."""
        key = _KEY_FMT.format(kind=kind, idx=self._counter)
        self._counter += 1

        placeholder = Placeholder(key=key, original=original)
        self._placeholders.append(placeholder)
        self._key_to_original[key] = original
        return placeholder

    def rehydrate(self, text: str) -> str:
        """Replace all keys in text with their original tags."""
        return restore_placeholders(text, self._placeholders)

    def lookup_key(self, key: str) -> str | None:
        return self._key_to_original.get(key)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def placeholders(self) -> list[Placeholder]:
        return list(self._placeholders)

    @property
    def size(self) -> int:
        return len(self._placeholders)

    def dump(self) -> dict[str, str]:
        """Return a copy of the key→original mapping (for debugging)."""
        return dict(self._key_to_original)

    def clear(self) -> None:
        self._placeholders.clear()
        self._key_to_original.clear()
        self._counter = 0


def restore_placeholders(text: str, placeholders: list[Placeholder]) -> str:
    """Replace every occurrence of each key with its original text."""
    result = text
    # Keys never nest, so order is irrelevant; longest first keeps it stable
    for p in sorted(placeholders, key=lambda p: len(p.key), reverse=True):
        if p.key in result:
            result = result.replace(p.key, p.original)
    return result
