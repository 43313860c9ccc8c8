"""Tests for DOM command generation."""

from __future__ import annotations

from mdblocks.config import DocumentConfig
from mdblocks.diff.commands import block_attrs
from mdblocks.document import MarkdownDocument
from mdblocks.models import PENDING_HTML, Block, Command, CommandType


def _types(result):
    return [c.type for c in result.commands]


class TestBlockAttrs:
    def test_full_attribute_set(self):
        block = Block(id="b1", content="x", start_line=4, line_count=2, hash="h")
        assert block_attrs(block) == {
            "data-block-id": "b1",
            "data-block-hash": "h",
            "data-line": 4,
            "data-line-count": 2,
        }

    def test_line_count_optional(self):
        block = Block(id="b1", content="x", start_line=4, line_count=2, hash="h")
        assert "data-line-count" not in block_attrs(block, include_line_count=False)

    def test_config_controls_line_count(self):
        doc = MarkdownDocument(config=DocumentConfig(emit_line_count_attr=False))
        result = doc.update("a")
        assert "data-line-count" not in result.commands[1].attrs


class TestFirstPopulation:
    def test_clear_then_appends(self, document):
        result = document.update("# Title\n\nPara 1")
        assert _types(result) == [CommandType.CLEAR, CommandType.APPEND, CommandType.APPEND]
        assert [c.block_id for c in result.commands[1:]] == ["block-1", "block-2"]
        assert all(c.html == PENDING_HTML and c.needs_render for c in result.commands[1:])

    def test_empty_update_of_empty_document_emits_nothing(self, document):
        assert document.update("").commands == []

    def test_clear_again_after_document_emptied(self, document):
        document.update("a")
        assert _types(document.update("")) == [CommandType.REMOVE]
        assert _types(document.update("b"))[0] == CommandType.CLEAR


class TestIncrementalCommands:
    def test_append_at_end(self):
        doc = MarkdownDocument("# Title\n\nPara 1")
        result = doc.update("# Title\n\nPara 1\n\nNew para")
        assert result.commands == [
            Command(
                type=CommandType.APPEND,
                block_id="block-3",
                html=PENDING_HTML,
                attrs={
                    "data-block-id": "block-3",
                    "data-block-hash": doc.get_block(2).hash,
                    "data-line": 4,
                    "data-line-count": 1,
                },
            )
        ]

    def test_reversal(self):
        doc = MarkdownDocument("Block A\n\nBlock B\n\nBlock C")
        result = doc.update("Block C\n\nBlock B\n\nBlock A")
        assert [(c.type, c.block_id, c.ref_id) for c in result.commands] == [
            (CommandType.REMOVE, "block-1", None),
            (CommandType.REMOVE, "block-3", None),
            (CommandType.INSERT_BEFORE, "block-4", "block-2"),
            (CommandType.APPEND, "block-5", None),
        ]

    def test_insert_anchors_on_next_kept_block(self):
        doc = MarkdownDocument("A\n\nB\n\nC\n\nD\n\nE")
        result = doc.update("A\n\nD\n\nX\n\nB\n\nE")
        assert [(c.type, c.block_id, c.ref_id) for c in result.commands] == [
            (CommandType.REMOVE, "block-2", None),
            (CommandType.REMOVE, "block-3", None),
            (CommandType.UPDATE_ATTRS, "block-4", None),
            (CommandType.INSERT_BEFORE, "block-6", "block-5"),
            (CommandType.INSERT_BEFORE, "block-7", "block-5"),
        ]
        assert result.commands[2].attrs["data-line"] == 2

    def test_update_attrs_after_size_shift(self):
        doc = MarkdownDocument("A\n\nB\n\nC")
        result = doc.update("A\nA2\n\nB\n\nC")
        assert [(c.type, c.block_id) for c in result.commands] == [
            (CommandType.REMOVE, "block-1"),
            (CommandType.INSERT_BEFORE, "block-4"),
            (CommandType.UPDATE_ATTRS, "block-2"),
            (CommandType.UPDATE_ATTRS, "block-3"),
        ]
        assert result.commands[1].ref_id == "block-2"
        assert [c.attrs["data-line"] for c in result.commands[2:]] == [3, 5]

    def test_moved_block_insert_carries_pending_html(self):
        doc = MarkdownDocument("Block A\n\nBlock B\n\nBlock C")
        for i, name in enumerate("ABC"):
            doc.set_block_html(i, f"<p>{name}</p>")
        result = doc.update("Block C\n\nBlock B\n\nBlock A")
        inserts = [c for c in result.commands if c.type != CommandType.REMOVE]
        assert [c.html for c in inserts] == [PENDING_HTML, PENDING_HTML]
        assert all(c.needs_render for c in inserts)
        assert doc.get_block(1).html == "<p>B</p>"


class TestCommandSerialisation:
    def test_to_dict_uses_wire_names(self):
        command = Command(
            type=CommandType.INSERT_BEFORE,
            block_id="b2",
            html="",
            ref_id="b1",
            attrs={"data-line": 3},
        )
        assert command.to_dict() == {
            "type": "insertBefore",
            "blockId": "b2",
            "html": "",
            "refId": "b1",
            "attrs": {"data-line": 3},
        }

    def test_clear_to_dict(self):
        assert Command(type=CommandType.CLEAR).to_dict() == {"type": "clear"}
