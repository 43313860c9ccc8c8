"""Tests for title, heading and chunk extraction."""

from __future__ import annotations

import pytest

from mdblocks.document import MarkdownDocument
from mdblocks.models import Block
from mdblocks.outline import (
    HeadingInfo,
    chunk_blocks,
    extract_headings,
    extract_title,
    slugify,
)


class TestExtractTitle:
    def test_first_h1(self):
        assert extract_title("# Hello World\n\nText\n\n# Second") == "Hello World"

    def test_no_h1(self):
        assert extract_title("Intro\n\n## Sub") is None
        assert extract_title("") is None

    def test_heading_inside_code_fence_ignored(self):
        assert extract_title("```\n# not a heading\n```\n\n# Real") == "Real"

    def test_inline_markup_reduced_to_text(self):
        assert extract_title("# The *new* `API`") == "The new API"


class TestSlugify:
    @pytest.mark.parametrize(
        ("text", "slug"),
        [
            ("Getting Started", "getting-started"),
            ("What's new?", "whats-new"),
            ("  spaced   out  ", "spaced-out"),
            ("!!!", ""),
        ],
    )
    def test_slugify(self, text, slug):
        assert slugify(text) == slug


class TestExtractHeadings:
    def test_levels_lines_and_dedup(self):
        doc = MarkdownDocument("# Intro\n\n## Setup\n\ntext\n\n## Setup")
        assert extract_headings(doc.get_blocks()) == [
            HeadingInfo(level=1, text="Intro", id="intro", line=0),
            HeadingInfo(level=2, text="Setup", id="setup", line=2),
            HeadingInfo(level=2, text="Setup", id="setup-1", line=6),
        ]

    def test_empty_slug_falls_back(self):
        doc = MarkdownDocument("## !!!\n\n## ???")
        assert [h.id for h in extract_headings(doc.get_blocks())] == ["heading", "heading-1"]

    def test_paragraphs_have_no_headings(self):
        doc = MarkdownDocument("just text\n\n```\n# code\n```")
        assert extract_headings(doc.get_blocks()) == []


def _blocks(count):
    return [
        Block(id=f"b{i}", content="x", start_line=2 * i, line_count=1, hash="h")
        for i in range(count)
    ]


class TestChunkBlocks:
    def test_target_doubles(self):
        chunks = chunk_blocks(_blocks(10), initial_chunk_size=2)
        assert [c.start_index for c in chunks] == [0, 2, 6]
        assert [len(c.blocks) for c in chunks] == [2, 4, 4]

    def test_chunks_cover_all_blocks_in_order(self):
        blocks = _blocks(25)
        chunks = chunk_blocks(blocks, initial_chunk_size=3)
        assert [b for c in chunks for b in c.blocks] == blocks

    def test_empty(self):
        assert chunk_blocks([]) == []

    def test_invalid_size(self):
        with pytest.raises(ValueError, match="initial_chunk_size"):
            chunk_blocks(_blocks(1), initial_chunk_size=0)
