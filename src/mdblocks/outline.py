"""Document outline helpers: title, table of contents, streaming chunks.

Headings are recognised with mistune's AST renderer rather than a line
regex, so ``# comment`` lines inside fenced code are not mistaken for
headings and inline markup (``## The *new* API``) is reduced to its plain
text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Sequence

import mistune

from mdblocks.models import Block

_SLUG_STRIP_RE = re.compile(r"[^\w\s-]")
_SLUG_SPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class HeadingInfo:
    """A heading entry for a table of contents.

    Attributes
    ----------
    level:
        Heading level, 1-6.
    text:
        Plain text of the heading.
    id:
        Slug, unique within one :func:`extract_headings` call.
    line:
        Start line of the block holding the heading.
    """

    level: int
    text: str
    id: str
    line: int


@dataclass
class Chunk:
    """A contiguous run of blocks for progressive rendering."""

    blocks: list[Block] = field(default_factory=list)
    start_index: int = 0


class HeadingParser:
    """Extract heading tokens from Markdown with mistune."""

    def __init__(self) -> None:
        self._parser = mistune.create_markdown(
            renderer="ast",
            plugins=["strikethrough", "math"],
        )

    def headings(self, markdown: str) -> list[tuple[int, str]]:
        """Return ``(level, text)`` for each top-level heading in *markdown*."""
        tokens = self._parser(markdown)
        if isinstance(tokens, str):
            return []
        found: list[tuple[int, str]] = []
        for token in tokens:
            if token.get("type") == "heading":
                level = int(token.get("attrs", {}).get("level", 1))
                found.append((level, _plain_text(token.get("children", [])).strip()))
        return found


def _plain_text(tokens: Iterable[dict]) -> str:
    parts: list[str] = []
    for token in tokens:
        token_type = token.get("type")
        if token_type in ("softbreak", "linebreak"):
            parts.append(" ")
        elif "children" in token:
            parts.append(_plain_text(token["children"]))
        else:
            parts.append(token.get("raw", ""))
    return "".join(parts)


_default_parser: HeadingParser | None = None


def _parser() -> HeadingParser:
    global _default_parser
    if _default_parser is None:
        _default_parser = HeadingParser()
    return _default_parser


def slugify(text: str) -> str:
    """Lower-case, drop punctuation and hyphenate whitespace."""
    slug = _SLUG_STRIP_RE.sub("", text.lower())
    return _SLUG_SPACE_RE.sub("-", slug.strip())


def extract_title(markdown: str) -> str | None:
    """Return the text of the first level-1 heading, or ``None``."""
    for level, text in _parser().headings(markdown):
        if level == 1 and text:
            return text
    return None


def extract_headings(blocks: Sequence[Block]) -> list[HeadingInfo]:
    """Collect headings from *blocks* with de-duplicated slug ids.

    Repeated slugs get ``-1``, ``-2``... suffixes; a heading whose slug is
    empty falls back to ``heading``.
    """
    headings: list[HeadingInfo] = []
    seen: set[str] = set()
    for block in blocks:
        for level, text in _parser().headings(block.content):
            base = slugify(text)
            slug = base or "heading"
            counter = 1
            while slug in seen:
                slug = f"{base or 'heading'}-{counter}"
                counter += 1
            seen.add(slug)
            headings.append(HeadingInfo(level=level, text=text, id=slug, line=block.start_line))
    return headings


def chunk_blocks(blocks: Sequence[Block], initial_chunk_size: int = 50) -> list[Chunk]:
    """Split *blocks* into chunks for progressive rendering.

    A chunk closes once it spans at least its target number of source
    lines; the target starts at *initial_chunk_size* and doubles for each
    subsequent chunk, so the first screenful renders fast and later chunks
    amortise the per-chunk overhead.

    Raises
    ------
    ValueError
        If *initial_chunk_size* is less than 1.
    """
    if initial_chunk_size < 1:
        raise ValueError(f"initial_chunk_size must be >= 1, got {initial_chunk_size}")

    chunks: list[Chunk] = []
    current: list[Block] = []
    line_total = 0
    start_index = 0

    for i, block in enumerate(blocks):
        current.append(block)
        line_total += block.line_count
        if line_total >= initial_chunk_size * 2 ** len(chunks):
            chunks.append(Chunk(blocks=current, start_index=start_index))
            start_index = i + 1
            current = []
            line_total = 0

    if current:
        chunks.append(Chunk(blocks=current, start_index=start_index))
    return chunks
