"""Per-editor-session wrap tracking for an editor's document hooks.

Usage:

    session = TagWrapSession()

    # Document opened: apply the returned text if not None
    new_text = session.on_open(uri, "typescript", text)

    # Before writing to disk: tags go back to their bare form
    new_text = session.on_will_save(uri, "typescript", text)

    # After writing: wrap again for editing
    new_text = session.on_did_save(uri, "typescript", text)

The session owns which documents are currently wrapped; nothing is
shared between sessions.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

from .patterns import has_unwrapped_tags
from .wrapper import unwrap, wrap

logger = logging.getLogger(__name__)

DEFAULT_TARGET_LANGUAGES = frozenset({
    "typescript",
    "javascript",
    "typescriptreact",
    "javascriptreact",
})


@dataclass
class TagWrapSession:
    """Wraps tags while a document is open and unwraps them around saves."""

    enabled: bool = True
    target_languages: frozenset[str] = DEFAULT_TARGET_LANGUAGES
    _wrapped: set[str] = field(default_factory=set, repr=False)
    _saving: bool = field(default=False, repr=False)

    def is_target_language(self, language_id: str) -> bool:
        return language_id in self.target_languages

    def is_wrapped(self, doc_id: str) -> bool:
        return doc_id in self._wrapped

    def forget(self, doc_id: str) -> None:
        """Drop a closed document's record."""
        self._wrapped.discard(doc_id)

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------

    def on_open(self, doc_id: str, language_id: str, text: str) -> str | None:
        """Wrap a freshly opened document; None means leave it alone."""
        if not self.enabled or self._saving:
            return None
        if not self.is_target_language(language_id):
            return None
        return self._rewrap(doc_id, text)

    def on_will_save(self, doc_id: str, language_id: str, text: str) -> str | None:
        """Unwrap before the document hits disk."""
        if not self.enabled or not self.is_target_language(language_id):
            return None
        if doc_id not in self._wrapped:
            return None

        self._saving = True
        unwrapped = unwrap(text)
        return unwrapped if unwrapped != text else None

    def on_did_save(self, doc_id: str, language_id: str, text: str) -> str | None:
        """Re-wrap once the save has gone through."""
        if not self.enabled or not self._saving:
            return None
        if not self.is_target_language(language_id):
            return None

        self._saving = False
        return self._rewrap(doc_id, text)

    # ------------------------------------------------------------------
    # Manual commands
    # ------------------------------------------------------------------

    def wrap_document(self, doc_id: str, text: str) -> tuple[str, bool]:
        """Wrap regardless of the enabled flag.  Returns (text, changed)."""
        wrapped = wrap(text)
        if wrapped == text:
            return text, False
        self._wrapped.add(doc_id)
        return wrapped, True

    def unwrap_document(self, doc_id: str, text: str) -> tuple[str, bool]:
        unwrapped = unwrap(text)
        if unwrapped == text:
            return text, False
        self._wrapped.discard(doc_id)
        return unwrapped, True

    def _rewrap(self, doc_id: str, text: str) -> str | None:
        if not has_unwrapped_tags(text):
            return None
        wrapped = wrap(text)
        if wrapped == text:
            return None
        self._wrapped.add(doc_id)
        logger.debug("wrapped tags in %s", doc_id)
        return wrapped
