"""Block content fingerprints for diff matching.

Two blocks whose signatures are equal are treated as unchanged by the diff
planner.  The signature depends on nothing but the block's raw content, so
it is stable across processes and survives a ``to_json`` / ``from_json``
round-trip.  Collisions between unrelated contents are accepted: a
colliding block is simply kept instead of re-rendered.
"""

from __future__ import annotations

from mdblocks.models import Block, BlockSpan
from mdblocks.utils.hashing import md5_hash


def compute_signature(content: str) -> str:
    """Return the fingerprint of a block's raw Markdown *content*.

    Examples
    --------
    >>> compute_signature("# Title") == compute_signature("# Title")
    True
    >>> compute_signature("# Title") == compute_signature("# Title ")
    False
    """
    return md5_hash(content)


def build_blocks(spans: list[BlockSpan]) -> list[Block]:
    """Hash freshly split spans into id-less :class:`Block` values.

    The ids are left empty; the identity assigner fills them in once the
    diff against the previous version is known.
    """
    return [
        Block(
            id="",
            content=span.content,
            start_line=span.start_line,
            line_count=span.line_count,
            hash=compute_signature(span.content),
        )
        for span in spans
    ]
