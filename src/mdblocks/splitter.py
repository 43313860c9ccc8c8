"""Structural block splitting.

Splits raw Markdown into ordered :class:`BlockSpan` values separated by
one or more blank lines.  Splitting is purely structural: a block is any
run of non-blank lines, except that blank lines inside a fenced region
(backtick/tilde code fences, ``$$`` display math, front matter) do not end
the block.

Line bookkeeping is exact so that spans can be mapped back to editor
lines: ``start_line`` is the 0-based index of the span's first line and
``line_count`` covers everything up to its last non-blank line.  Trailing
blank separators are never part of a span.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from mdblocks.models import BlockSpan

_FENCE_OPEN_RE = re.compile(r"^(`{3,}|~{3,})(.*)$")
_FENCE_CLOSE_RE = re.compile(r"^(`{3,}|~{3,})\s*$")

_MATH_DELIMITER = "$$"
_FRONT_MATTER_DELIMITER = "---"


@dataclass(frozen=True)
class _Fence:
    """An open fenced region and the rule that closes it."""

    kind: str
    marker: str

    def closes(self, stripped: str) -> bool:
        if self.kind == "code":
            match = _FENCE_CLOSE_RE.match(stripped)
            return (
                match is not None
                and match.group(1)[0] == self.marker[0]
                and len(match.group(1)) >= len(self.marker)
            )
        return stripped == self.marker


def _open_fence(stripped: str, line_index: int) -> _Fence | None:
    """Return the fence opened by *stripped*, or ``None``."""
    if line_index == 0 and stripped == _FRONT_MATTER_DELIMITER:
        return _Fence("front_matter", _FRONT_MATTER_DELIMITER)
    if stripped == _MATH_DELIMITER:
        return _Fence("math", _MATH_DELIMITER)
    match = _FENCE_OPEN_RE.match(stripped)
    if match is None:
        return None
    marker, info = match.group(1), match.group(2)
    # A backtick fence's info string may not itself contain backticks,
    # otherwise the line is inline code (```x```), not a fence.
    if marker[0] == "`" and "`" in info:
        return None
    return _Fence("code", marker)


def split_blocks(text: str) -> list[BlockSpan]:
    """Split *text* into ordered block spans.

    Parameters
    ----------
    text:
        Full Markdown source.  Lines are separated by ``"\\n"``; a
        trailing ``"\\r"`` is kept in the content but ignored when
        deciding whether a line is blank.

    Returns
    -------
    list[BlockSpan]
        Spans in document order.  An empty or all-blank document yields
        an empty list.  An unterminated fence swallows the remainder of
        the document into a single span.
    """
    lines = text.split("\n")
    total = len(lines)
    spans: list[BlockSpan] = []

    i = 0
    while i < total:
        if not lines[i].strip():
            i += 1
            continue

        start = i
        last_content = i
        fence: _Fence | None = None
        while i < total:
            stripped = lines[i].strip()
            if fence is None:
                if not stripped:
                    break
                fence = _open_fence(stripped, i)
            elif fence.closes(stripped):
                fence = None
            if stripped:
                last_content = i
            i += 1

        spans.append(
            BlockSpan(
                content="\n".join(lines[start : last_content + 1]),
                start_line=start,
                line_count=last_content - start + 1,
            )
        )

    return spans
