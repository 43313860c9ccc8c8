"""Diff planner: classify blocks as kept, inserted or removed.

Given the previous block list of a document (with ids) and a freshly split
and hashed block list (without ids), the planner produces an ordered list
of :class:`DiffOp` values:

* every ``REMOVE`` first, in previous-document order;
* then one ``KEEP`` or ``INSERT`` per new block, in new-document order.

That is the order in which the DOM must be mutated, so the command
generator can walk the plan front to back.
"""

from __future__ import annotations

from mdblocks.config import DocumentConfig
from mdblocks.models import Block, DiffOp, DiffOpType, DiffStats

from .matcher import order_preserving_match


class DiffPlanner:
    """Plans the keep / insert / remove classification for an update.

    Parameters
    ----------
    config:
        Document configuration (``reorder_window`` tunes the matcher).
    """

    def __init__(self, config: DocumentConfig) -> None:
        self._config = config

    def plan(self, previous: list[Block], new: list[Block]) -> list[DiffOp]:
        """Compute the diff operations that turn *previous* into *new*.

        Blocks match only on exact hash equality.  Kept blocks form the
        largest order-preserving subset, so they never need a DOM move; a
        block whose content survives but whose order flips against the
        kept set is removed and re-inserted (its ``INSERT`` records the
        matched previous index in ``source_index`` for diagnostics).

        Parameters
        ----------
        previous:
            The document's current blocks.
        new:
            Blocks split from the new text, ids not yet assigned.

        Returns
        -------
        list[DiffOp]
            Ordered operations: removals, then the new sequence.
        """
        if not previous and not new:
            return []

        # Fast path: nothing previous, everything is new.
        if not previous:
            return [
                DiffOp(op_type=DiffOpType.INSERT, new_index=i)
                for i in range(len(new))
            ]

        # Fast path: everything was deleted.
        if not new:
            return [
                DiffOp(op_type=DiffOpType.REMOVE, old_index=i)
                for i in range(len(previous))
            ]

        match = order_preserving_match(
            [b.hash for b in previous],
            [b.hash for b in new],
            window=self._config.reorder_window,
        )
        return self._build_ops(len(previous), len(new), match.kept, match.moved)

    def _build_ops(
        self,
        old_count: int,
        new_count: int,
        kept: list[tuple[int, int]],
        moved: dict[int, int],
    ) -> list[DiffOp]:
        kept_by_new: dict[int, int] = {new_idx: old_idx for old_idx, new_idx in kept}
        kept_old: set[int] = set(kept_by_new.values())

        ops: list[DiffOp] = [
            DiffOp(op_type=DiffOpType.REMOVE, old_index=old_idx)
            for old_idx in range(old_count)
            if old_idx not in kept_old
        ]

        for new_idx in range(new_count):
            old_idx = kept_by_new.get(new_idx)
            if old_idx is not None:
                ops.append(
                    DiffOp(op_type=DiffOpType.KEEP, old_index=old_idx, new_index=new_idx)
                )
            else:
                ops.append(
                    DiffOp(
                        op_type=DiffOpType.INSERT,
                        new_index=new_idx,
                        source_index=moved.get(new_idx),
                    )
                )
        return ops


def summarize(ops: list[DiffOp]) -> DiffStats:
    """Count the kept, inserted and removed operations of a plan."""
    stats = DiffStats()
    for op in ops:
        if op.op_type == DiffOpType.KEEP:
            stats.kept += 1
        elif op.op_type == DiffOpType.INSERT:
            stats.inserted += 1
        elif op.op_type == DiffOpType.REMOVE:
            stats.removed += 1
    return stats
