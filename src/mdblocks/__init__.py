"""mdblocks: incremental block model for live Markdown previews.

Public re-exports
-----------------

* **Document:** :class:`MarkdownDocument`
* **Configuration:** :class:`DocumentConfig`
* **Errors:** Every :class:`MdBlocksError` subclass and :class:`ErrorCode`
* **Models:** Blocks, DOM commands, diff results and line-position types
* **Helpers:** block splitting, id generators, the reference DOM applier
  and outline extraction

Usage::

    from mdblocks import BlockContainer, MarkdownDocument

    doc = MarkdownDocument()
    preview = BlockContainer()
    preview.apply(doc.update("# Hello\\n\\nWorld").commands)
    preview.apply(doc.update("# Hello\\n\\nWorld\\n\\nMore").commands)
"""

from __future__ import annotations

# ── Reference applier ───────────────────────────────────────────────────
from mdblocks.applier import BlockContainer, BlockNode, wrap_html

# ── Configuration ───────────────────────────────────────────────────────
from mdblocks.config import DEFAULT_PLACEHOLDER_MARKER, DocumentConfig

# ── Identity ────────────────────────────────────────────────────────────
from mdblocks.diff import CounterIdGenerator, IdGenerator, compute_signature

# ── Document ────────────────────────────────────────────────────────────
from mdblocks.document import MarkdownDocument

# ── Errors ──────────────────────────────────────────────────────────────
from mdblocks.errors import (
    ErrorCode,
    MdBlocksCommandError,
    MdBlocksDuplicateIdError,
    MdBlocksError,
    MdBlocksValidationError,
)

# ── Models ──────────────────────────────────────────────────────────────
from mdblocks.models import (
    PENDING_HTML,
    Block,
    BlockAttrs,
    BlockPosition,
    BlockSpan,
    Command,
    CommandType,
    DiffOp,
    DiffOpType,
    DiffResult,
    DiffStats,
    IndexedBlock,
    LinePosition,
    SurroundingBlocks,
)

# ── Outline ─────────────────────────────────────────────────────────────
from mdblocks.outline import (
    Chunk,
    HeadingInfo,
    chunk_blocks,
    extract_headings,
    extract_title,
)

# ── Splitting ───────────────────────────────────────────────────────────
from mdblocks.splitter import split_blocks

# ── Public surface ──────────────────────────────────────────────────────

__all__ = [
    # Document
    "MarkdownDocument",
    # Configuration
    "DocumentConfig",
    "DEFAULT_PLACEHOLDER_MARKER",
    # Error base + code enum
    "MdBlocksError",
    "ErrorCode",
    # Errors
    "MdBlocksValidationError",
    "MdBlocksDuplicateIdError",
    "MdBlocksCommandError",
    # Models: blocks
    "Block",
    "BlockSpan",
    "BlockAttrs",
    "IndexedBlock",
    # Models: diff and commands
    "DiffOp",
    "DiffOpType",
    "DiffStats",
    "DiffResult",
    "Command",
    "CommandType",
    "PENDING_HTML",
    # Models: line positions
    "LinePosition",
    "BlockPosition",
    "SurroundingBlocks",
    # Splitting and identity
    "split_blocks",
    "compute_signature",
    "IdGenerator",
    "CounterIdGenerator",
    # Reference applier
    "BlockContainer",
    "BlockNode",
    "wrap_html",
    # Outline
    "HeadingInfo",
    "Chunk",
    "extract_title",
    "extract_headings",
    "chunk_blocks",
]
