"""Live, incrementally updatable Markdown document.

:class:`MarkdownDocument` owns the ordered block list of one Markdown
source and turns every edit into the minimal, order-correct list of DOM
commands a preview needs:

1. **Split** -- :func:`~mdblocks.splitter.split_blocks` produces spans.
2. **Hash** -- each span gets a content signature.
3. **Plan** -- :class:`~mdblocks.diff.DiffPlanner` classifies blocks as
   kept / inserted / removed against the previous state.
4. **Assign** -- :class:`~mdblocks.diff.IdentityAssigner` carries ids and
   cached HTML over to kept blocks.
5. **Index** -- the :class:`~mdblocks.positions.LinePositionIndex` is
   rebuilt.
6. **Emit** -- :class:`~mdblocks.diff.CommandGenerator` produces the
   commands returned in a :class:`~mdblocks.models.DiffResult`.

A document is single-threaded: ``update`` mutates it in place and must
not be called concurrently on the same instance.  Async renders report
back through :meth:`MarkdownDocument.set_block_html_by_id`, which always
targets the block's *current* state and silently drops writes for ids
that no longer exist.

Usage::

    from mdblocks import MarkdownDocument

    doc = MarkdownDocument("# Title\\n\\nPara 1")
    result = doc.update("# Title\\n\\nPara 1\\n\\nNew para")
    result.stats            # DiffStats(kept=2, inserted=1, removed=0)
    result.commands[0].type  # CommandType.APPEND
"""

from __future__ import annotations

import time
from collections import Counter
from typing import Any, Mapping

from mdblocks.applier import wrap_html
from mdblocks.cache import HtmlCache
from mdblocks.config import DocumentConfig
from mdblocks.diff import (
    CommandGenerator,
    CounterIdGenerator,
    DiffPlanner,
    IdentityAssigner,
    IdGenerator,
    build_blocks,
    summarize,
)
from mdblocks.errors import MdBlocksValidationError
from mdblocks.models import (
    Block,
    BlockAttrs,
    BlockPosition,
    DiffResult,
    IndexedBlock,
    LinePosition,
    SurroundingBlocks,
)
from mdblocks.observability import NoopMetricsHook, get_logger
from mdblocks.positions import LinePositionIndex
from mdblocks.splitter import split_blocks

log = get_logger("mdblocks.document")


def _require_text(value: Any, argument: str) -> str:
    if not isinstance(value, str):
        raise MdBlocksValidationError(
            f"{argument} must be a str, got {type(value).__name__}",
            context={
                "argument": argument,
                "expected": "str",
                "actual": type(value).__name__,
            },
        )
    return value


class MarkdownDocument:
    """In-memory block model of a Markdown document.

    Parameters
    ----------
    text:
        Optional initial Markdown source.  When non-empty the document is
        populated immediately (the resulting commands are discarded; call
        :meth:`update` on an empty document to receive them).
    config:
        Document configuration.  Defaults to :class:`DocumentConfig`.
    id_generator:
        Source of fresh block ids.  Defaults to a
        :class:`~mdblocks.diff.CounterIdGenerator` private to this
        document, using ``config.id_prefix``.
    """

    def __init__(
        self,
        text: str = "",
        *,
        config: DocumentConfig | None = None,
        id_generator: IdGenerator | None = None,
    ) -> None:
        self._config = config or DocumentConfig()
        self._metrics = (
            self._config.metrics if self._config.metrics is not None else NoopMetricsHook()
        )
        self._id_generator: IdGenerator = id_generator or CounterIdGenerator(
            prefix=self._config.id_prefix
        )
        self._cache = HtmlCache(self._config.placeholder_marker)
        self._planner = DiffPlanner(self._config)
        self._assigner = IdentityAssigner(self._id_generator, self._cache)
        self._commands = CommandGenerator(self._config)
        self._index = LinePositionIndex()

        self._blocks: list[Block] = []
        self._raw_content: str = ""

        if _require_text(text, "text"):
            self.update(text)

    # ── Accessors ───────────────────────────────────────────────────────

    @property
    def config(self) -> DocumentConfig:
        return self._config

    @property
    def id_generator(self) -> IdGenerator:
        return self._id_generator

    @property
    def block_count(self) -> int:
        return len(self._blocks)

    def get_raw_content(self) -> str:
        return self._raw_content

    def get_blocks(self) -> tuple[Block, ...]:
        """All blocks in document order."""
        return tuple(self._blocks)

    def get_block(self, index: int) -> Block | None:
        """Block at *index*, or ``None`` when out of range (negative included)."""
        if 0 <= index < len(self._blocks):
            return self._blocks[index]
        return None

    def get_block_by_id(self, block_id: str) -> Block | None:
        index = self._index.index_of(block_id)
        return None if index is None else self._blocks[index]

    def get_block_ids(self) -> list[str]:
        return [block.id for block in self._blocks]

    # ── Update ──────────────────────────────────────────────────────────

    def update(self, text: str) -> DiffResult:
        """Replace the document source with *text*.

        Returns
        -------
        DiffResult
            Kept / inserted / removed counts and the ordered DOM commands
            that bring a rendering of the previous state up to date.

        Raises
        ------
        MdBlocksValidationError
            If *text* is not a string.  Malformed Markdown never raises.
        """
        _require_text(text, "text")
        started = time.perf_counter()

        previous = self._blocks
        new = build_blocks(split_blocks(text))
        ops = self._planner.plan(previous, new)
        self._assigner.assign(previous, new, ops)
        commands = self._commands.generate(previous, new, ops)

        self._raw_content = text
        self._blocks = new
        self._index.rebuild(new)

        result = DiffResult(stats=summarize(ops), commands=commands)
        self._observe(result, (time.perf_counter() - started) * 1000.0)
        return result

    def _observe(self, result: DiffResult, duration_ms: float) -> None:
        stats = result.stats
        self._metrics.increment("mdblocks.updates_total")
        self._metrics.increment("mdblocks.blocks_kept_total", stats.kept)
        self._metrics.increment("mdblocks.blocks_inserted_total", stats.inserted)
        self._metrics.increment("mdblocks.blocks_removed_total", stats.removed)
        for command_type, count in Counter(c.type.value for c in result.commands).items():
            self._metrics.increment(
                "mdblocks.commands_total", count, tags={"command": command_type},
            )
        self._metrics.timing("mdblocks.update_duration_ms", duration_ms)
        self._metrics.gauge("mdblocks.block_count", len(self._blocks))

        log.debug(
            "document updated",
            extra={"extra_fields": {
                "kept": stats.kept,
                "inserted": stats.inserted,
                "removed": stats.removed,
                "blocks": len(self._blocks),
                "duration_ms": round(duration_ms, 3),
            }},
        )
        if self._config.debug_dump_diff:
            log.info(
                "diff commands",
                extra={"extra_fields": {
                    "commands": [c.to_dict() for c in result.commands],
                }},
            )

    # ── HTML cache ──────────────────────────────────────────────────────

    def set_block_html(self, index: int, html: str) -> None:
        """Cache rendered *html* for the block at *index* (ignored if out of range)."""
        block = self.get_block(index)
        if block is not None:
            self._cache.store(block, html)

    def set_block_html_by_id(
        self,
        block_id: str,
        html: str,
        expected_hash: str | None = None,
    ) -> bool:
        """Cache rendered *html* for the block currently holding *block_id*.

        Unknown ids are treated as stale async callbacks and ignored.  When
        *expected_hash* is given (the hash the render was started for) and
        the block's hash no longer matches, the write is discarded too.

        Returns
        -------
        bool
            ``True`` when the HTML was stored.
        """
        block = self.get_block_by_id(block_id)
        if block is None or (expected_hash is not None and expected_hash != block.hash):
            self._metrics.increment("mdblocks.stale_html_writes_total")
            log.debug(
                "discarded stale block html",
                extra={"extra_fields": {"block_id": block_id}},
            )
            return False
        self._cache.store(block, html)
        return True

    def clear_html_cache(self) -> None:
        for block in self._blocks:
            self._cache.clear(block)

    def get_blocks_needing_render(
        self, include_placeholders: bool = False,
    ) -> list[IndexedBlock]:
        """Blocks without cached HTML, optionally including placeholders."""
        return [
            IndexedBlock(index, block)
            for index, block in enumerate(self._blocks)
            if self._cache.needs_render(block, include_placeholders)
        ]

    def block_attrs(self, block: Block) -> BlockAttrs:
        return self._commands.attrs_for(block)

    def wrap_block_html(self, block: Block) -> str:
        """Wrap a block's cached HTML in its ``md-block`` container element."""
        return wrap_html(block.html or "", self.block_attrs(block))

    def get_full_html(self) -> str:
        """Concatenate the wrapped HTML of every rendered block."""
        return "\n".join(
            self.wrap_block_html(block) if block.html is not None else ""
            for block in self._blocks
        )

    # ── Line mapping ────────────────────────────────────────────────────

    def get_total_line_count(self) -> int:
        return self._index.total_line_count

    def find_block_by_line(self, line: float) -> IndexedBlock | None:
        """Block whose line range contains *line* exactly (no gap snapping)."""
        return self._index.containing(line)

    def get_line_position(self, line: float) -> LinePosition | None:
        return self._index.locate(line)

    def get_line_from_position(self, index: int, progress: float) -> float | None:
        return self._index.line_at(index, progress)

    def get_line_from_block_id(self, block_id: str, progress: float) -> float | None:
        return self._index.line_for_block_id(block_id, progress)

    def get_block_position_from_line(self, line: float) -> BlockPosition | None:
        return self._index.block_position(line)

    def get_surrounding_blocks(self, line: float) -> SurroundingBlocks:
        return self._index.surrounding(line)

    # ── Persistence ─────────────────────────────────────────────────────

    def to_json(self) -> dict[str, Any]:
        """Serialise the document state (cached HTML is deliberately omitted)."""
        return {
            "rawContent": self._raw_content,
            "blocks": [
                {
                    "id": block.id,
                    "content": block.content,
                    "startLine": block.start_line,
                    "lineCount": block.line_count,
                    "hash": block.hash,
                }
                for block in self._blocks
            ],
        }

    @classmethod
    def from_json(
        cls,
        data: Mapping[str, Any],
        *,
        config: DocumentConfig | None = None,
        id_generator: IdGenerator | None = None,
    ) -> MarkdownDocument:
        """Restore a document from :meth:`to_json` output.

        The block list is trusted as-is.  With the default id generator the
        counter is advanced past every restored ``<prefix><n>`` id so that
        later updates cannot collide with restored ids.
        """
        if not isinstance(data, Mapping):
            raise MdBlocksValidationError(
                f"data must be a mapping, got {type(data).__name__}",
                context={
                    "argument": "data",
                    "expected": "mapping",
                    "actual": type(data).__name__,
                },
            )
        doc = cls(config=config, id_generator=id_generator)
        doc._raw_content = data.get("rawContent", "")
        doc._blocks = [
            Block(
                id=entry["id"],
                content=entry["content"],
                start_line=entry["startLine"],
                line_count=entry["lineCount"],
                hash=entry["hash"],
            )
            for entry in data.get("blocks", [])
        ]
        doc._index.rebuild(doc._blocks)
        if isinstance(doc._id_generator, CounterIdGenerator):
            doc._id_generator.advance_past(block.id for block in doc._blocks)
        return doc

    def __repr__(self) -> str:
        return f"MarkdownDocument(blocks={len(self._blocks)}, lines={self.get_total_line_count()})"
