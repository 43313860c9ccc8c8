"""Stable block identity.

Kept blocks inherit the id of the previous block they were matched to,
together with its cached HTML.  Every other new block, moved content
included, receives a fresh id from an injectable :class:`IdGenerator` and
starts with an empty cache, so ids are never resurrected for content that
disappears and later reappears.

Id generation is explicit per-document state rather than a module-level
counter: two documents never share a sequence unless the caller hands them
the same generator, and tests can seed a deterministic one.
"""

from __future__ import annotations

import re
from typing import Iterable, Protocol, runtime_checkable

from mdblocks.cache import HtmlCache
from mdblocks.errors import MdBlocksDuplicateIdError
from mdblocks.models import Block, DiffOp, DiffOpType


@runtime_checkable
class IdGenerator(Protocol):
    """Anything that can hand out a new, never-before-seen block id."""

    def next_id(self) -> str:
        ...


class CounterIdGenerator:
    """Monotonic ``<prefix><n>`` id generator.

    Parameters
    ----------
    prefix:
        Text placed before the counter value.
    start:
        Last value already handed out; the first id is ``start + 1``.
    """

    def __init__(self, prefix: str = "block-", start: int = 0) -> None:
        if start < 0:
            raise ValueError(f"start must be >= 0, got {start}")
        self._prefix = prefix
        self._counter = start
        self._suffix_re = re.compile(rf"^{re.escape(prefix)}(\d+)$")

    @property
    def counter(self) -> int:
        return self._counter

    def next_id(self) -> str:
        self._counter += 1
        return f"{self._prefix}{self._counter}"

    def advance_past(self, ids: Iterable[str]) -> None:
        """Move the counter beyond every ``<prefix><n>`` id in *ids*.

        Used when restoring persisted state so that new ids cannot collide
        with restored ones.
        """
        for block_id in ids:
            match = self._suffix_re.match(block_id)
            if match:
                self._counter = max(self._counter, int(match.group(1)))

    def __repr__(self) -> str:
        return f"CounterIdGenerator(prefix={self._prefix!r}, counter={self._counter})"


class IdentityAssigner:
    """Assign ids (and carry cached HTML) to a freshly planned block list.

    Parameters
    ----------
    generator:
        Source of fresh ids.
    cache:
        HTML cache policy used to carry renders across the update.
    """

    def __init__(self, generator: IdGenerator, cache: HtmlCache) -> None:
        self._generator = generator
        self._cache = cache

    @property
    def generator(self) -> IdGenerator:
        return self._generator

    def assign(self, previous: list[Block], new: list[Block], ops: list[DiffOp]) -> None:
        """Fill in ``id``, ``html`` and ``has_placeholder`` of every new block.

        * ``KEEP`` -- inherit the matched previous block's id and cache.
        * ``INSERT`` -- fresh id, empty cache.  This includes content that
          was only moved: it is a new DOM node and must be rendered again.

        Raises
        ------
        MdBlocksDuplicateIdError
            If the generator returns an id that is already in use by a
            previous or new block.
        """
        taken: set[str] = {block.id for block in previous}

        for op in ops:
            if op.op_type == DiffOpType.KEEP:
                source = previous[op.old_index]
                target = new[op.new_index]
                target.id = source.id
                self._cache.carry_over(source, target)

        for op in ops:
            if op.op_type != DiffOpType.INSERT:
                continue
            target = new[op.new_index]
            target.id = self._fresh_id(taken)
            self._cache.clear(target)

    def _fresh_id(self, taken: set[str]) -> str:
        block_id = self._generator.next_id()
        if block_id in taken:
            raise MdBlocksDuplicateIdError(
                f"id generator produced an id that is already in use: {block_id!r}",
                context={"block_id": block_id},
            )
        taken.add(block_id)
        return block_id
