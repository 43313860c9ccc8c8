"""Tests for structural block splitting."""

from __future__ import annotations

from mdblocks.models import BlockSpan
from mdblocks.splitter import split_blocks


def _layout(text):
    return [(s.start_line, s.line_count) for s in split_blocks(text)]


class TestBlankLineSplitting:
    def test_empty_document(self):
        assert split_blocks("") == []

    def test_blank_only_document(self):
        assert split_blocks("\n\n   \n\t\n") == []

    def test_simple_paragraphs(self):
        spans = split_blocks("# Title\n\nPara 1\n\nPara 2")
        assert spans == [
            BlockSpan("# Title", 0, 1),
            BlockSpan("Para 1", 2, 1),
            BlockSpan("Para 2", 4, 1),
        ]

    def test_multi_line_block_and_wide_gap(self):
        spans = split_blocks("a\nb\n\n\nc")
        assert spans == [BlockSpan("a\nb", 0, 2), BlockSpan("c", 4, 1)]

    def test_leading_blank_lines_shift_start(self):
        assert split_blocks("\n\nx") == [BlockSpan("x", 2, 1)]

    def test_trailing_blank_lines_are_not_counted(self):
        assert split_blocks("x\n\n\n") == [BlockSpan("x", 0, 1)]

    def test_whitespace_only_line_separates(self):
        assert _layout("a\n   \nb") == [(0, 1), (2, 1)]

    def test_crlf_separator_is_blank(self):
        spans = split_blocks("a\r\n\r\nb")
        assert spans == [BlockSpan("a\r", 0, 1), BlockSpan("b", 2, 1)]


class TestCodeFences:
    def test_blank_lines_inside_fence_do_not_split(self):
        text = "```py\na\n\nb\n```\n\nafter"
        spans = split_blocks(text)
        assert spans == [
            BlockSpan("```py\na\n\nb\n```", 0, 5),
            BlockSpan("after", 6, 1),
        ]

    def test_shorter_closer_does_not_close(self):
        text = "````\nx\n```\n\ny\n````"
        assert _layout(text) == [(0, 6)]

    def test_other_fence_char_does_not_close(self):
        text = "~~~\n```\n\n~~~\n\nz"
        assert _layout(text) == [(0, 4), (5, 1)]

    def test_closer_with_info_string_does_not_close(self):
        text = "```\na\n```js\n\nstill code\n```"
        assert _layout(text) == [(0, 6)]

    def test_inline_triple_backticks_are_not_a_fence(self):
        assert _layout("```x```\n\nnext") == [(0, 1), (2, 1)]

    def test_fence_opening_mid_block(self):
        text = "para\n```\na\n\nb\n```"
        assert _layout(text) == [(0, 6)]

    def test_indented_fence(self):
        assert _layout("  ```\n  a\n\n  ```\n\nb") == [(0, 4), (5, 1)]

    def test_unterminated_fence_swallows_rest(self):
        text = "para\n\n```\ncode\n\n\nmore"
        spans = split_blocks(text)
        assert spans == [
            BlockSpan("para", 0, 1),
            BlockSpan("```\ncode\n\n\nmore", 2, 5),
        ]

    def test_unterminated_fence_drops_trailing_blanks(self):
        assert split_blocks("```\ncode\n\n") == [BlockSpan("```\ncode", 0, 2)]


class TestOtherFencedRegions:
    def test_display_math(self):
        assert _layout("$$\na\n\nb\n$$\n\nc") == [(0, 5), (6, 1)]

    def test_front_matter(self):
        text = "---\ntitle: x\n\nfoo: y\n---\n\n# H"
        assert _layout(text) == [(0, 5), (6, 1)]

    def test_rule_after_first_line_is_not_front_matter(self):
        assert _layout("a\n\n---\n\nb") == [(0, 1), (2, 1), (4, 1)]
