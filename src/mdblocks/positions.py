"""Bidirectional mapping between source lines and block positions.

Each block owns the half-open line range ``[start_line, start_line +
line_count)``.  A (possibly fractional) source line resolves to the block
containing it plus a normalised offset ``progress`` in ``[0, 1)``; the
inverse is plain linear interpolation, ``start_line + progress *
line_count``.  Lines in the blank gap before a block resolve to that
block with ``progress == 0``, so a cursor parked on a separator still
maps to something visible.

The index is rebuilt wholesale after every update: one block growing by a
line shifts the start of every block after it, and a rebuild is a single
linear pass whereas the diff that precedes it is not.
"""

from __future__ import annotations

import math
from bisect import bisect_right
from typing import Iterable

from mdblocks.models import (
    Block,
    BlockPosition,
    IndexedBlock,
    LinePosition,
    SurroundingBlocks,
)


class LinePositionIndex:
    """Line lookups over an ordered block list.

    Parameters
    ----------
    blocks:
        Blocks in document order with non-decreasing ``start_line``.
    """

    __slots__ = ("_blocks", "_by_id", "_starts")

    def __init__(self, blocks: Iterable[Block] = ()) -> None:
        self._blocks: list[Block] = []
        self._starts: list[int] = []
        self._by_id: dict[str, int] = {}
        self.rebuild(blocks)

    def rebuild(self, blocks: Iterable[Block]) -> None:
        self._blocks = list(blocks)
        self._starts = [block.start_line for block in self._blocks]
        self._by_id = {block.id: i for i, block in enumerate(self._blocks)}

    def __len__(self) -> int:
        return len(self._blocks)

    @property
    def total_line_count(self) -> int:
        """Line just past the last block (0 for an empty document)."""
        if not self._blocks:
            return 0
        return self._blocks[-1].end_line

    def index_of(self, block_id: str) -> int | None:
        return self._by_id.get(block_id)

    def _last_starting_at_or_before(self, line: float) -> int:
        return bisect_right(self._starts, line) - 1

    # ── line -> block ───────────────────────────────────────────────────

    def containing(self, line: float) -> IndexedBlock | None:
        """Return the block whose range strictly contains *line*."""
        if not math.isfinite(line):
            return None
        i = self._last_starting_at_or_before(line)
        if i >= 0 and line < self._blocks[i].end_line:
            return IndexedBlock(i, self._blocks[i])
        return None

    def locate(self, line: float) -> LinePosition | None:
        """Resolve *line* to a block index and in-block progress.

        Returns ``None`` for negative or non-finite lines and for lines at
        or past the end of the last block.
        """
        if not self._blocks or not math.isfinite(line) or line < 0:
            return None

        i = self._last_starting_at_or_before(line)
        if i >= 0:
            block = self._blocks[i]
            if line < block.end_line:
                progress = (line - block.start_line) / block.line_count
                return LinePosition(index=i, block=block, progress=progress)

        following = i + 1
        if following < len(self._blocks):
            return LinePosition(index=following, block=self._blocks[following], progress=0.0)
        return None

    def block_position(self, line: float) -> BlockPosition | None:
        """Like :meth:`locate` but addressed by the block's stable id."""
        position = self.locate(line)
        if position is None:
            return None
        return BlockPosition(block_id=position.block.id, progress=position.progress)

    def surrounding(self, line: float) -> SurroundingBlocks:
        """Nearest block starting at or before *line* and first block after it."""
        if not self._blocks or math.isnan(line):
            return SurroundingBlocks()
        i = self._last_starting_at_or_before(line)
        previous = IndexedBlock(i, self._blocks[i]) if i >= 0 else None
        following = i + 1
        nxt = (
            IndexedBlock(following, self._blocks[following])
            if following < len(self._blocks)
            else None
        )
        return SurroundingBlocks(previous=previous, next=nxt)

    # ── block -> line ───────────────────────────────────────────────────

    def line_at(self, index: int, progress: float) -> float | None:
        """Interpolate the source line at *progress* through block *index*.

        *progress* is clamped to ``[0, 1]``; ``1`` gives the block's
        exclusive end line.
        """
        if not 0 <= index < len(self._blocks) or not math.isfinite(progress):
            return None
        block = self._blocks[index]
        clamped = min(1.0, max(0.0, progress))
        return block.start_line + clamped * block.line_count

    def line_for_block_id(self, block_id: str, progress: float) -> float | None:
        index = self._by_id.get(block_id)
        if index is None:
            return None
        return self.line_at(index, progress)
