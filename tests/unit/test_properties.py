"""Property-based tests for mdblocks using Hypothesis.

These tests check invariants of the splitter, the matcher and the
document update cycle over randomly generated documents and edit
sequences.  They complement the example-based unit tests.
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from mdblocks.applier import BlockContainer
from mdblocks.diff.matcher import order_preserving_match
from mdblocks.document import MarkdownDocument
from mdblocks.models import CommandType
from mdblocks.splitter import split_blocks

# ---------------------------------------------------------------------------
# Reusable strategies
# ---------------------------------------------------------------------------

# A small vocabulary keeps duplicate and reordered blocks frequent.
_block_st = st.sampled_from([
    "# Title",
    "## Section",
    "para one",
    "para two\ncontinued",
    "- item\n- item",
    "```\ncode\n\nmore\n```",
    "$$\nx^2\n$$",
    "> quote",
])

_separator_st = st.sampled_from(["\n\n", "\n\n\n", "\n \n"])


@st.composite
def _markdown_st(draw):
    blocks = draw(st.lists(_block_st, max_size=8))
    if not blocks:
        return ""
    out = blocks[0]
    for block in blocks[1:]:
        out += draw(_separator_st) + block
    return out


_line_st = st.text(alphabet="ab`~$- \t\r", max_size=6)
_raw_text_st = st.lists(_line_st, max_size=15).map("\n".join)


# ---------------------------------------------------------------------------
# Splitter
# ---------------------------------------------------------------------------

class TestSplitterProperties:
    @given(text=_raw_text_st)
    def test_spans_are_exact_slices(self, text):
        lines = text.split("\n")
        previous_end = 0
        for span in split_blocks(text):
            assert span.start_line >= previous_end
            assert span.line_count >= 1
            piece = lines[span.start_line : span.start_line + span.line_count]
            assert span.content == "\n".join(piece)
            assert piece[0].strip() and piece[-1].strip()
            previous_end = span.start_line + span.line_count

    @given(text=st.text())
    def test_never_raises(self, text):
        split_blocks(text)


# ---------------------------------------------------------------------------
# Matcher
# ---------------------------------------------------------------------------

_hashes_st = st.lists(st.sampled_from("abcdef"), max_size=12)


def _lcs_length(old, new):
    row = [0] * (len(new) + 1)
    for value in old:
        diagonal = 0
        for j, other in enumerate(new, start=1):
            above = row[j]
            row[j] = diagonal + 1 if value == other else max(row[j], row[j - 1])
            diagonal = above
    return row[-1]


class TestMatcherProperties:
    @given(old=_hashes_st, new=_hashes_st)
    def test_kept_pairs_are_increasing_and_equal(self, old, new):
        result = order_preserving_match(old, new)
        for (o1, n1), (o2, n2) in zip(result.kept, result.kept[1:]):
            assert o1 < o2 and n1 < n2
        for o, n in result.kept:
            assert old[o] == new[n]
        for n, o in result.moved.items():
            assert old[o] == new[n]

    @given(old=_hashes_st, new=_hashes_st)
    def test_kept_set_is_a_longest_common_subsequence(self, old, new):
        assert len(order_preserving_match(old, new).kept) == _lcs_length(old, new)

    @given(old=_hashes_st, new=_hashes_st)
    def test_fallback_keeps_as_many(self, old, new):
        exact = order_preserving_match(old, new)
        patience = order_preserving_match(old, new, window=1)
        assert len(exact.kept) == len(patience.kept)


# ---------------------------------------------------------------------------
# Document update cycle
# ---------------------------------------------------------------------------

class TestDocumentProperties:
    @given(text=st.text())
    def test_raw_content_round_trip(self, text):
        assert MarkdownDocument(text).get_raw_content() == text

    @given(texts=st.lists(_markdown_st(), min_size=1, max_size=5))
    @settings(max_examples=200)
    def test_replaying_commands_reproduces_document(self, texts):
        doc = MarkdownDocument()
        container = BlockContainer()
        for text in texts:
            previous_count = doc.block_count
            result = doc.update(text)
            container.apply(result.commands)

            assert container.block_ids() == doc.get_block_ids()
            for block in doc.get_blocks():
                assert container.get(block.id).attrs == doc.block_attrs(block)

            stats = result.stats
            assert stats.kept + stats.removed == previous_count
            assert stats.kept + stats.inserted == doc.block_count

    @given(texts=st.lists(_markdown_st(), min_size=1, max_size=5))
    def test_ids_unique_and_never_reused(self, texts):
        doc = MarkdownDocument()
        seen: set[str] = set()
        for text in texts:
            before = set(doc.get_block_ids())
            doc.update(text)
            ids = doc.get_block_ids()
            assert len(ids) == len(set(ids))
            retired = seen - before
            assert not retired & set(ids)
            seen |= set(ids)

    @given(text=_markdown_st())
    def test_update_is_idempotent(self, text):
        doc = MarkdownDocument(text)
        ids = doc.get_block_ids()
        result = doc.update(text)
        assert result.stats.inserted == 0
        assert result.stats.removed == 0
        assert result.stats.kept == doc.block_count
        assert all(c.type == CommandType.UPDATE_ATTRS for c in result.commands)
        assert doc.get_block_ids() == ids

    @given(text=_markdown_st())
    def test_line_round_trip(self, text):
        doc = MarkdownDocument(text)
        for block in doc.get_blocks():
            position = doc.get_line_position(block.start_line)
            line = doc.get_line_from_position(position.index, position.progress)
            assert line == pytest.approx(block.start_line)

    @given(text=_markdown_st(), line=st.floats(allow_nan=True, allow_infinity=True))
    def test_line_position_progress_in_range(self, text, line):
        position = MarkdownDocument(text).get_line_position(line)
        if position is not None:
            assert 0.0 <= position.progress < 1.0
