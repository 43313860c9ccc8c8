"""Reference DOM applier: replay commands onto an in-memory container.

:class:`BlockContainer` models the preview element that a real DOM
applier mutates.  It executes :class:`~mdblocks.models.Command` lists in
order and is strict about it: a command that references a block the
container does not hold raises :class:`~mdblocks.errors.MdBlocksCommandError`
instead of being skipped, which makes it useful for verifying that a
command stream is order-correct.
"""

from __future__ import annotations

import html as html_lib
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable

from mdblocks.errors import MdBlocksCommandError
from mdblocks.models import BlockAttrs, Command, CommandType
from mdblocks.observability import NoopMetricsHook

BLOCK_CLASS = "md-block"


def wrap_html(inner_html: str, attrs: BlockAttrs) -> str:
    """Wrap *inner_html* in a ``<div class="md-block">`` carrying *attrs*."""
    rendered = " ".join(
        f'{key}="{html_lib.escape(str(value), quote=True)}"'
        for key, value in attrs.items()
    )
    return f'<div class="{BLOCK_CLASS}" {rendered}>{inner_html}</div>'


@dataclass
class BlockNode:
    """One block element inside a :class:`BlockContainer`."""

    block_id: str
    html: str
    attrs: dict[str, Any] = field(default_factory=dict)

    def to_html(self) -> str:
        return wrap_html(self.html, self.attrs)


class BlockContainer:
    """In-memory stand-in for the preview's block container element.

    Parameters
    ----------
    metrics:
        Optional metrics hook; ``mdblocks.commands_applied_total`` is
        incremented per command type after each :meth:`apply`.
    """

    def __init__(self, metrics: Any | None = None) -> None:
        self._nodes: list[BlockNode] = []
        self._metrics = metrics if metrics is not None else NoopMetricsHook()

    def __len__(self) -> int:
        return len(self._nodes)

    def block_ids(self) -> list[str]:
        return [node.block_id for node in self._nodes]

    def get(self, block_id: str) -> BlockNode | None:
        for node in self._nodes:
            if node.block_id == block_id:
                return node
        return None

    def set_html(self, block_id: str, html: str) -> bool:
        """Swap in a finished render for *block_id*; ``False`` if absent."""
        node = self.get(block_id)
        if node is None:
            return False
        node.html = html
        return True

    def to_html(self) -> str:
        return "\n".join(node.to_html() for node in self._nodes)

    def apply(self, commands: Iterable[Command]) -> None:
        """Execute *commands* in order.

        Raises
        ------
        MdBlocksCommandError
            If a command targets a block that is missing (``remove``,
            ``updateAttrs``, the ``refId`` of ``insertBefore``) or inserts
            an id the container already holds.
        """
        counts: Counter[str] = Counter()
        for command in commands:
            counts[command.type.value] += 1

            if command.type == CommandType.CLEAR:
                self._nodes.clear()

            elif command.type == CommandType.APPEND:
                self._nodes.append(self._new_node(command))

            elif command.type == CommandType.INSERT_BEFORE:
                node = self._new_node(command)
                self._nodes.insert(self._position(command.ref_id, command), node)

            elif command.type == CommandType.REMOVE:
                del self._nodes[self._position(command.block_id, command)]

            elif command.type == CommandType.UPDATE_ATTRS:
                target = self._nodes[self._position(command.block_id, command)]
                target.attrs.update(command.attrs or {})

        for command_type, count in counts.items():
            self._metrics.increment(
                "mdblocks.commands_applied_total", count, tags={"command": command_type},
            )

    def _new_node(self, command: Command) -> BlockNode:
        if command.block_id is None or self.get(command.block_id) is not None:
            raise MdBlocksCommandError(
                f"cannot insert block {command.block_id!r}: id missing or already present",
                context={"command": command.type.value, "block_id": command.block_id},
            )
        return BlockNode(
            block_id=command.block_id,
            html=command.html or "",
            attrs=dict(command.attrs or {}),
        )

    def _position(self, block_id: str | None, command: Command) -> int:
        for i, node in enumerate(self._nodes):
            if node.block_id == block_id:
                return i
        raise MdBlocksCommandError(
            f"{command.type.value}: block {block_id!r} is not in the container",
            context={
                "command": command.type.value,
                "block_id": command.block_id,
                "ref_id": command.ref_id,
            },
        )
