"""Tests for the lexical context scanner."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from tag_shield import Context, LexicalContextScanner, classify_context, classify_offsets
from tag_shield.scanner import ScannerState, is_inside_string


def _ctx_at_tag(text: str, nth: int = 0) -> Context:
    """Classify the start of the nth '{{' / '{%' occurrence."""
    starts = [i for i in range(len(text) - 1) if text[i] == "{" and text[i + 1] in "{%"]
    return classify_context(text, starts[nth])


# ── Plain code and quotes ────────────────────────────────────────────

def test_plain_code():
    assert _ctx_at_tag("const x = {{ name }};") is Context.PLAIN


def test_double_quoted_string():
    assert _ctx_at_tag('const s = "hi {{ name }}";') is Context.IN_STRING


def test_single_quoted_string():
    assert _ctx_at_tag("const s = 'hi {{ name }}';") is Context.IN_STRING


def test_string_closed_before_tag():
    assert _ctx_at_tag('const s = "hi"; {{ name }}') is Context.PLAIN


def test_escaped_quote_does_not_close_string():
    assert _ctx_at_tag('const s = "it\\"s {{ x }}";') is Context.IN_STRING


def test_escaped_quote_then_close():
    assert _ctx_at_tag('const s = "a\\"b"; {{ x }}') is Context.PLAIN


def test_other_quote_kind_is_literal():
    assert _ctx_at_tag('const s = "it\'s"; {{ x }}') is Context.PLAIN
    assert _ctx_at_tag("const s = 'say \"hi'; {{ x }}") is Context.PLAIN


# ── Comments ─────────────────────────────────────────────────────────

def test_line_comment():
    assert _ctx_at_tag("// {% if x %}") is Context.IN_COMMENT


def test_line_comment_hides_quotes():
    assert _ctx_at_tag("// it's\n{{ x }}") is Context.PLAIN


def test_block_comment_hides_quotes():
    assert _ctx_at_tag('/* "unterminated */ {{ x }}') is Context.PLAIN


def test_inside_block_comment():
    assert _ctx_at_tag("/* note {{ x }} */") is Context.IN_COMMENT


def test_comment_markers_inside_string_are_text():
    assert _ctx_at_tag('const u = "http://x"; {{ x }}') is Context.PLAIN


# ── Template literals ────────────────────────────────────────────────

def test_template_literal_text():
    assert _ctx_at_tag("`Hello {{ name }}!`") is Context.IN_TEMPLATE_TEXT


def test_template_expression():
    assert _ctx_at_tag("`${ {{ x }} }`") is Context.IN_TEMPLATE_EXPR


def test_template_back_to_text_after_expression():
    assert _ctx_at_tag("`${ a } {{ b }}`") is Context.IN_TEMPLATE_TEXT


def test_template_after_close():
    assert _ctx_at_tag("`a`; {{ b }}") is Context.PLAIN


def test_object_literal_inside_expression():
    assert _ctx_at_tag("`${ {a: 1} } {{ x }}`") is Context.IN_TEMPLATE_TEXT


def test_comment_not_recognized_in_template_text():
    assert _ctx_at_tag("`// {{ x }}`") is Context.IN_TEMPLATE_TEXT


def test_comment_recognized_in_template_expression():
    assert _ctx_at_tag("`${ a /* } */ }` {{ x }}") is Context.PLAIN


def test_string_inside_template_expression():
    assert _ctx_at_tag('`${ "{{ x }}" }`') is Context.IN_STRING


def test_nested_template_literal():
    assert _ctx_at_tag("`a ${ `b ${ c }` } {{ x }}`") is Context.IN_TEMPLATE_TEXT


def test_escaped_dollar_in_template_text():
    assert _ctx_at_tag("`\\${ {{ x }} }`") is Context.IN_TEMPLATE_TEXT


def test_template_text_dollar_before_tag():
    text = "`Total: ${{ total }}`"
    assert classify_context(text, text.index("{{")) is Context.IN_TEMPLATE_TEXT


def test_spaced_substitution_still_expression():
    text = "`${ {{ x }} }`"
    assert classify_context(text, text.index("{{")) is Context.IN_TEMPLATE_EXPR


# ── Tag spans ────────────────────────────────────────────────────────

def test_skip_to_keeps_flags():
    scanner = LexicalContextScanner("`abc'def`")
    scanner.advance_to(2)
    before = scanner.state.context
    scanner.skip_to(6)
    assert scanner.state.position == 6
    assert scanner.state.context is before is Context.IN_TEMPLATE_TEXT


def test_skip_to_never_moves_back():
    scanner = LexicalContextScanner("abcdef")
    scanner.advance_to(4)
    scanner.skip_to(2)
    assert scanner.state.position == 4


def test_span_body_quote_is_opaque():
    text = "{# don't touch #}\nconst y = {{ b }};"
    scanner = LexicalContextScanner(text)
    first = text.index("{#")
    second = text.index("{{")
    assert scanner.classify_span(first, text.index("#}") + 2) is Context.PLAIN
    assert scanner.classify_span(second, second + len("{{ b }}")) is Context.PLAIN


def test_span_body_slashes_are_opaque():
    text = "const x = {{ a // 2 }}; const y = {{ b }};"
    scanner = LexicalContextScanner(text)
    first = text.index("{{ a")
    second = text.index("{{ b")
    assert scanner.classify_span(first, first + len("{{ a // 2 }}")) is Context.PLAIN
    assert scanner.classify_span(second, second + len("{{ b }}")) is Context.PLAIN


def test_span_in_comment_can_close_it():
    text = "/* {{ x */ }} {{ y }}"
    scanner = LexicalContextScanner(text)
    assert scanner.classify_span(3, text.index("}}") + 2) is Context.IN_COMMENT
    assert scanner.classify_span(text.index("{{ y"), len(text)) is Context.PLAIN


# ── Failure semantics ────────────────────────────────────────────────

def test_unterminated_string_stays_open():
    assert _ctx_at_tag('const s = "abc {{ x }}') is Context.IN_STRING


def test_trailing_backslash():
    text = '"abc\\'
    scanner = LexicalContextScanner(text)
    assert scanner.advance_to(len(text)) is Context.IN_STRING
    assert scanner.state.position == len(text)


def test_offset_past_end_raises():
    with pytest.raises(ValueError):
        classify_context("abc", 4)


def test_offset_at_end_allowed():
    assert classify_context("abc", 3) is Context.PLAIN


# ── Cursor behaviour ─────────────────────────────────────────────────

def test_out_of_order_queries_reset():
    text = 'a = {{ x }}; b = "{{ y }}"; c = `{{ z }}`;'
    offsets = [text.index("{{ z"), text.index("{{ x"), text.index("{{ y")]
    assert classify_offsets(text, offsets) == [
        Context.IN_TEMPLATE_TEXT,
        Context.PLAIN,
        Context.IN_STRING,
    ]


def test_incremental_matches_fresh_scan():
    text = '`${ "q" } x` // c\n/* d */ \'e\' f'
    scanner = LexicalContextScanner(text)
    for offset in range(len(text) + 1):
        assert scanner.advance_to(offset) is classify_context(text, offset)


def test_reset_returns_zero_state():
    scanner = LexicalContextScanner('"abc')
    scanner.advance_to(3)
    scanner.reset()
    assert scanner.state == ScannerState()


def test_is_inside_string():
    assert is_inside_string('"{{ x }}"', 1)
    assert is_inside_string("`{{ x }}`", 1)
    assert not is_inside_string("`${ {{ x }} }`", 4)
    assert not is_inside_string("// {{ x }}", 3)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
