"""Lexical context scanner for C-like source text.

Walks the text once, left to right, tracking quotes, comments and
template literals (including ``${...}`` substitutions), so that callers
can ask what region a given offset falls within.

Usage:
    scanner = LexicalContextScanner(source)
    for span in find_tags(source):
        if scanner.classify_span(span.start, span.end).is_protected:
            ...   # tag is string data, leave it alone

The scanner only moves forward.  Asking about an offset behind the
cursor resets it and rescans from the start, so unsorted queries are
correct, just slower.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .types import Context

_LINE_TERMINATORS = frozenset("\n\r\u2028\u2029")


@dataclass(slots=True)
class ScannerState:
    """Cursor and open-region flags.  The zero value is 'start of text'."""
    position: int = 0
    in_single_quote: bool = False
    in_double_quote: bool = False
    in_template_literal: bool = False
    # Unmatched '{' inside a ${...} substitution; 0 means literal text
    template_expr_depth: int = 0
    in_line_comment: bool = False
    in_block_comment: bool = False
    # Expression depths of enclosing template literals (`a ${ `b` } c`)
    template_stack: list[int] = field(default_factory=list)

    @property
    def context(self) -> Context:
        if self.in_line_comment or self.in_block_comment:
            return Context.IN_COMMENT
        if self.in_single_quote or self.in_double_quote:
            return Context.IN_STRING
        if self.in_template_literal:
            if self.template_expr_depth == 0:
                return Context.IN_TEMPLATE_TEXT
            return Context.IN_TEMPLATE_EXPR
        return Context.PLAIN


class LexicalContextScanner:
    """Single-pass, forward-only context classifier over one text."""

    __slots__ = ("_text", "_state")

    def __init__(self, text: str) -> None:
        self._text = text
        self._state = ScannerState()

    @property
    def text(self) -> str:
        return self._text

    @property
    def state(self) -> ScannerState:
        return self._state

    def reset(self) -> None:
        self._state = ScannerState()

    def advance_to(self, offset: int) -> Context:
        """Consume every character before ``offset`` and classify it.

        A two-character token (escape pair, ``${``, ``//``, ``/*``, ``*/``)
        straddling ``offset`` is left unread, so ``${{ x }}`` in template
        text classifies the tag as template text.
        """
        if offset < 0 or offset > len(self._text):
            raise ValueError(f"offset {offset} outside text of length {len(self._text)}")
        if offset < self._state.position:
            self.reset()
        while self._state.position < offset:
            if self._state.position == offset - 1 and self._at_pair():
                break
            self._step()
        return self._state.context

    def skip_to(self, offset: int) -> None:
        """Move the cursor to ``offset`` without reading the text in between."""
        if offset > self._state.position:
            self._state.position = offset

    def classify_span(self, start: int, end: int) -> Context:
        """Classify ``start`` and move past ``text[start:end]`` as one token.

        Quotes and comment markers inside the span are not read.  Spans
        inside a comment are scanned normally, since they may end it.
        Give spans in ascending order; going back rescans without skips.
        """
        context = self.advance_to(start)
        if context is Context.IN_COMMENT:
            self.advance_to(end)
        else:
            self.skip_to(end)
        return context

    def _at_pair(self) -> bool:
        """Whether the next step would consume two characters."""
        s = self._state
        text = self._text
        i = s.position
        if i + 1 >= len(text):
            return False
        ch, nxt = text[i], text[i + 1]
        if s.in_line_comment:
            return False
        if s.in_block_comment:
            return ch == "*" and nxt == "/"
        if s.in_single_quote or s.in_double_quote:
            return ch == "\\"
        if s.in_template_literal and s.template_expr_depth == 0:
            return ch == "\\" or (ch == "$" and nxt == "{")
        return ch == "/" and nxt in "/*"

    def _step(self) -> None:
        s = self._state
        text = self._text
        i = s.position
        ch = text[i]
        nxt = text[i + 1] if i + 1 < len(text) else ""

        if s.in_line_comment:
            if ch in _LINE_TERMINATORS:
                s.in_line_comment = False
            s.position = i + 1
            return

        if s.in_block_comment:
            if ch == "*" and nxt == "/":
                s.in_block_comment = False
                s.position = i + 2
            else:
                s.position = i + 1
            return

        if s.in_single_quote or s.in_double_quote:
            if ch == "\\":
                s.position = min(i + 2, len(text))
                return
            if ch == "'" and s.in_single_quote:
                s.in_single_quote = False
            elif ch == '"' and s.in_double_quote:
                s.in_double_quote = False
            s.position = i + 1
            return

        if s.in_template_literal and s.template_expr_depth == 0:
            # Literal text: only escapes, ${ and the closing backtick matter
            if ch == "\\":
                s.position = min(i + 2, len(text))
                return
            if ch == "$" and nxt == "{":
                s.template_expr_depth = 1
                s.position = i + 2
                return
            if ch == "`":
                if s.template_stack:
                    s.template_expr_depth = s.template_stack.pop()
                else:
                    s.in_template_literal = False
            s.position = i + 1
            return

        # Code: top level or inside a ${...} substitution
        if ch == "/" and nxt == "/":
            s.in_line_comment = True
            s.position = i + 2
            return
        if ch == "/" and nxt == "*":
            s.in_block_comment = True
            s.position = i + 2
            return

        if ch == "'":
            s.in_single_quote = True
        elif ch == '"':
            s.in_double_quote = True
        elif ch == "`":
            if s.in_template_literal:
                s.template_stack.append(s.template_expr_depth)
            s.in_template_literal = True
            s.template_expr_depth = 0
        elif s.in_template_literal:
            if ch == "{":
                s.template_expr_depth += 1
            elif ch == "}":
                s.template_expr_depth -= 1
        s.position = i + 1


def classify_context(text: str, offset: int) -> Context:
    """Classify a single offset with a fresh scanner."""
    return LexicalContextScanner(text).advance_to(offset)


def classify_offsets(text: str, offsets: list[int]) -> list[Context]:
    """Classify many offsets with one scanner, in the order given."""
    scanner = LexicalContextScanner(text)
    return [scanner.advance_to(o) for o in offsets]


def is_inside_string(text: str, offset: int) -> bool:
    """Check if an offset is inside a string or template-literal text."""
    return classify_context(text, offset).is_protected
