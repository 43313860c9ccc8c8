"""DOM command generation from a diff plan.

Turns the planner's classification into an ordered list of
:class:`~mdblocks.models.Command` values that a DOM applier can replay
verbatim:

1. ``clear`` -- only when an empty document is populated.
2. ``remove`` for every previous block that is not kept.
3. Walking the new sequence: ``updateAttrs`` for kept blocks whose
   attributes shifted, and ``insertBefore`` / ``append`` for everything
   else.

Inserted blocks are anchored on the nearest *kept* block that follows them
in the new order.  Kept blocks are already in the DOM and never move, so
the anchor is guaranteed to exist when the command is applied, and
inserting successive blocks before the same anchor yields them in
document order.  An inserted block never has cached HTML yet, so its
command always carries the pending marker.
"""

from __future__ import annotations

from mdblocks.config import DocumentConfig
from mdblocks.models import (
    PENDING_HTML,
    Block,
    BlockAttrs,
    Command,
    CommandType,
    DiffOp,
    DiffOpType,
)


def block_attrs(block: Block, include_line_count: bool = True) -> BlockAttrs:
    """Return the full DOM attribute set for *block*."""
    attrs: BlockAttrs = {
        "data-block-id": block.id,
        "data-block-hash": block.hash,
        "data-line": block.start_line,
    }
    if include_line_count:
        attrs["data-line-count"] = block.line_count
    return attrs


class CommandGenerator:
    """Generate DOM commands for an assigned diff plan.

    Parameters
    ----------
    config:
        Document configuration (controls the attribute set).
    """

    def __init__(self, config: DocumentConfig) -> None:
        self._config = config

    def attrs_for(self, block: Block) -> BlockAttrs:
        return block_attrs(block, self._config.emit_line_count_attr)

    def generate(
        self,
        previous: list[Block],
        new: list[Block],
        ops: list[DiffOp],
    ) -> list[Command]:
        """Build the command list.

        Parameters
        ----------
        previous:
            Blocks before the update (ids and positions as rendered).
        new:
            Blocks after the update, ids already assigned.
        ops:
            The plan from :class:`~mdblocks.diff.planner.DiffPlanner`.

        Returns
        -------
        list[Command]
        """
        commands: list[Command] = []

        if not previous and new:
            commands.append(Command(type=CommandType.CLEAR))

        kept_new: set[int] = set()
        for op in ops:
            if op.op_type == DiffOpType.REMOVE:
                commands.append(
                    Command(type=CommandType.REMOVE, block_id=previous[op.old_index].id)
                )
            elif op.op_type == DiffOpType.KEEP:
                kept_new.add(op.new_index)

        # anchors[i] is the id of the first kept block at or after i.
        anchors: list[str | None] = [None] * (len(new) + 1)
        for i in range(len(new) - 1, -1, -1):
            anchors[i] = new[i].id if i in kept_new else anchors[i + 1]

        for op in ops:
            if op.op_type == DiffOpType.KEEP:
                block = new[op.new_index]
                attrs = self.attrs_for(block)
                if attrs != self.attrs_for(previous[op.old_index]):
                    commands.append(
                        Command(
                            type=CommandType.UPDATE_ATTRS,
                            block_id=block.id,
                            attrs=attrs,
                        )
                    )
            elif op.op_type == DiffOpType.INSERT:
                commands.append(self._insert_command(new[op.new_index], anchors[op.new_index + 1]))

        return commands

    def _insert_command(self, block: Block, ref_id: str | None) -> Command:
        attrs = self.attrs_for(block)
        if ref_id is None:
            return Command(
                type=CommandType.APPEND,
                block_id=block.id,
                html=PENDING_HTML,
                attrs=attrs,
            )
        return Command(
            type=CommandType.INSERT_BEFORE,
            block_id=block.id,
            html=PENDING_HTML,
            ref_id=ref_id,
            attrs=attrs,
        )
