"""Per-block rendered-HTML cache.

A block's cache is the pair ``(html, has_placeholder)`` stored on the
:class:`~mdblocks.models.Block` itself.  ``html is None`` is the empty
state; ``has_placeholder`` is only ever ``True`` alongside a non-empty
``html`` value.

The cache is keyed on the block's content hash: it may only move from one
block to another when both carry the same hash, and it is emptied whenever
that is not the case.
"""

from __future__ import annotations

from mdblocks.models import Block


class HtmlCache:
    """Store, carry over and invalidate cached block HTML.

    Parameters
    ----------
    placeholder_marker:
        Substring that flags HTML as provisional.
    """

    __slots__ = ("_marker",)

    def __init__(self, placeholder_marker: str) -> None:
        self._marker = placeholder_marker

    def is_placeholder(self, html: str) -> bool:
        return self._marker in html

    def store(self, block: Block, html: str, placeholder: bool | None = None) -> None:
        """Cache *html* on *block*.

        When *placeholder* is ``None`` it is inferred from the configured
        marker.
        """
        block.html = html
        block.has_placeholder = (
            self.is_placeholder(html) if placeholder is None else placeholder
        )

    @staticmethod
    def clear(block: Block) -> None:
        block.html = None
        block.has_placeholder = False

    def carry_over(self, source: Block, target: Block) -> None:
        """Copy *source*'s cache onto *target* iff their hashes are equal."""
        if source.hash == target.hash and source.html is not None:
            target.html = source.html
            target.has_placeholder = source.has_placeholder
        else:
            self.clear(target)

    @staticmethod
    def needs_render(block: Block, include_placeholders: bool = False) -> bool:
        """True when *block* has no cached HTML (or, optionally, only a placeholder)."""
        if block.html is None:
            return True
        return include_placeholders and block.has_placeholder
