"""Document configuration for mdblocks.

:class:`DocumentConfig` captures every tuneable knob of a
:class:`~mdblocks.document.MarkdownDocument`.  A single instance may be
shared by any number of documents; it carries no per-document state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DEFAULT_PLACEHOLDER_MARKER = "async-placeholder"
"""Substring identifying provisional HTML awaiting an async render."""


# ---------------------------------------------------------------------------
# Configuration dataclass
# ---------------------------------------------------------------------------

@dataclass
class DocumentConfig:
    """Complete configuration for a markdown document model.

    Parameters
    ----------
    placeholder_marker:
        When rendered HTML handed to ``set_block_html`` contains this
        substring the block is flagged ``has_placeholder`` until a final
        render replaces it.
    id_prefix:
        Prefix used by the default counter id generator (``"block-"``
        yields ``block-1``, ``block-2``, ...).
    reorder_window:
        Largest number of hash-matched candidates for which the exact,
        displacement-aware order-preserving match runs.  Larger candidate
        sets fall back to an ``O(n log n)`` longest increasing subsequence
        that still keeps the maximum number of blocks but breaks ties
        arbitrarily.
    emit_line_count_attr:
        Include ``data-line-count`` in the attributes of every command.
    metrics:
        Optional :class:`~mdblocks.observability.MetricsHook` backend.
    debug_dump_diff:
        Log the full generated command list at INFO level on each update.
    """

    # ── Rendering cache ─────────────────────────────────────────────────
    placeholder_marker: str = DEFAULT_PLACEHOLDER_MARKER

    # ── Identity ────────────────────────────────────────────────────────
    id_prefix: str = "block-"

    # ── Diff ────────────────────────────────────────────────────────────
    reorder_window: int = 1000

    # ── Commands ────────────────────────────────────────────────────────
    emit_line_count_attr: bool = True

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_diff: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.placeholder_marker:
            raise ValueError("placeholder_marker must be a non-empty string")
        if self.reorder_window < 1:
            raise ValueError(f"reorder_window must be >= 1, got {self.reorder_window}")
