"""Public data models for mdblocks.

This module contains the block model, the diff and DOM-command types,
and the small result types returned by line-position queries.  Blocks are
the only mutable type: a document rewrites their ids, positions and cached
HTML in place as updates arrive.  Everything else is a frozen value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

BlockAttrs = dict[str, Union[str, int]]
"""DOM attributes for a block element (``data-block-id``, ``data-line``...)."""

PENDING_HTML = ""
"""HTML carried by a command whose block has no cached render yet."""


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class DiffOpType(str, Enum):
    """Classification emitted by the diff planner for each block."""

    KEEP = "keep"
    """Previous block matched in order; stays in the DOM untouched."""

    INSERT = "insert"
    """New block (or moved content) that must be inserted."""

    REMOVE = "remove"
    """Previous block that is absent from the new sequence or moved."""


class CommandType(str, Enum):
    """DOM mutation command kinds, valued with their wire names."""

    CLEAR = "clear"
    APPEND = "append"
    INSERT_BEFORE = "insertBefore"
    REMOVE = "remove"
    UPDATE_ATTRS = "updateAttrs"


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BlockSpan:
    """A raw span produced by the block splitter, before hashing.

    Attributes
    ----------
    content:
        The span's lines joined with ``"\\n"``, without leading or trailing
        blank lines.
    start_line:
        0-based line of the span's first line in the full document.
    line_count:
        Number of lines from the first to the last non-blank line,
        including blank lines inside a fenced region.
    """

    content: str
    start_line: int
    line_count: int


@dataclass
class Block:
    """A block of the live document.

    Attributes
    ----------
    id:
        Stable identifier, unique within a document.  Empty until the
        identity assigner runs.
    content:
        Raw Markdown text of the block.
    start_line:
        0-based line of the block in the full document.
    line_count:
        Number of source lines the block occupies.
    hash:
        Content fingerprint; a pure function of ``content``.
    html:
        Cached render, or ``None`` when the block has not been rendered.
    has_placeholder:
        ``True`` while ``html`` holds provisional output awaiting an async
        render.  Always ``False`` when ``html`` is ``None``.
    """

    id: str
    content: str
    start_line: int
    line_count: int
    hash: str
    html: str | None = None
    has_placeholder: bool = False

    @property
    def end_line(self) -> int:
        """Exclusive end of the block's line range."""
        return self.start_line + self.line_count


@dataclass(frozen=True)
class IndexedBlock:
    """A block together with its position in the document's block list."""

    index: int
    block: Block


# ---------------------------------------------------------------------------
# Diff engine types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DiffOp:
    """A single classification in a diff plan.

    Attributes
    ----------
    op_type:
        Keep, insert, or remove.
    old_index:
        Index into the previous block list (``KEEP``, ``REMOVE``).
    new_index:
        Index into the new block list (``KEEP``, ``INSERT``).
    source_index:
        For an ``INSERT`` whose content already existed in the previous
        list but could not be kept without reordering, the previous index
        it was matched to.  ``None`` for genuinely new content.  Only
        informational: ids and cached HTML are never taken from it.
    """

    op_type: DiffOpType
    old_index: int | None = None
    new_index: int | None = None
    source_index: int | None = None

    @property
    def is_move(self) -> bool:
        return self.op_type == DiffOpType.INSERT and self.source_index is not None


@dataclass
class DiffStats:
    """Counts of kept, inserted and removed blocks for one update."""

    kept: int = 0
    inserted: int = 0
    removed: int = 0


@dataclass(frozen=True)
class Command:
    """A platform-agnostic DOM mutation instruction.

    Attributes
    ----------
    type:
        The command kind.
    block_id:
        Target block (all kinds except ``CLEAR``).
    html:
        Block HTML for ``APPEND`` / ``INSERT_BEFORE``: the cached render,
        or :data:`PENDING_HTML` when the consumer must request one.
    ref_id:
        For ``INSERT_BEFORE``, the kept block to insert in front of.
    attrs:
        The complete attribute set for the block (``APPEND``,
        ``INSERT_BEFORE``, ``UPDATE_ATTRS``).
    """

    type: CommandType
    block_id: str | None = None
    html: str | None = None
    ref_id: str | None = None
    attrs: BlockAttrs | None = None

    @property
    def needs_render(self) -> bool:
        """True when the command inserts a block that has no cached HTML."""
        return (
            self.type in (CommandType.APPEND, CommandType.INSERT_BEFORE)
            and not self.html
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise with the wire key names a DOM applier expects."""
        out: dict[str, Any] = {"type": self.type.value}
        if self.block_id is not None:
            out["blockId"] = self.block_id
        if self.html is not None:
            out["html"] = self.html
        if self.ref_id is not None:
            out["refId"] = self.ref_id
        if self.attrs is not None:
            out["attrs"] = dict(self.attrs)
        return out


@dataclass
class DiffResult:
    """Result of :meth:`MarkdownDocument.update`.

    Attributes
    ----------
    stats:
        Kept / inserted / removed block counts.
    commands:
        Ordered DOM commands; replaying them in order transforms the
        previous rendering into the new one.
    """

    stats: DiffStats = field(default_factory=DiffStats)
    commands: list[Command] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Line-position results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LinePosition:
    """A line resolved to a block index and an in-block offset in ``[0, 1)``."""

    index: int
    block: Block
    progress: float


@dataclass(frozen=True)
class BlockPosition:
    """A line resolved to a stable block id and an in-block offset."""

    block_id: str
    progress: float


@dataclass(frozen=True)
class SurroundingBlocks:
    """Nearest blocks at or before, and strictly after, a line."""

    previous: IndexedBlock | None = None
    next: IndexedBlock | None = None
