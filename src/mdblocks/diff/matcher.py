"""Order-preserving matching over block signatures.

Finds the largest set of previous blocks that reappear, unchanged by hash,
in the new sequence *without changing their relative order*.  Those blocks
can stay in the DOM untouched; every other block is removed and, when its
content still exists, re-inserted at its new position.

The algorithm runs in three passes:

1. Anchor the common prefix and common suffix, which covers the vast
   majority of edits (typing inside one block).
2. For the remaining window, take the longest common subsequence of the
   two hash lists.  Among equally long subsequences the one with the
   smallest total index displacement wins, then the one that keeps earlier
   new blocks.  Above ``window`` candidate pairs a patience-sort variant
   is used instead, which is still maximal but breaks ties arbitrarily.
3. Re-bind the chosen new blocks to previous blocks left to right, each
   taking the first still-available previous block with its hash.  This
   never changes which new blocks are kept, only which of several
   identical previous blocks they inherit from.
"""

from __future__ import annotations

from bisect import bisect_left
from collections import defaultdict, deque
from dataclasses import dataclass, field


@dataclass(frozen=True)
class HashMatch:
    """Result of :func:`order_preserving_match`.

    Attributes
    ----------
    kept:
        ``(old_index, new_index)`` pairs that stay in place, sorted by both
        indices.
    moved:
        Mapping of ``new_index`` to the ``old_index`` whose content it
        repeats, for hash matches that had to be dropped to preserve order.
        Informational only: moved content is re-inserted like new content.
    """

    kept: list[tuple[int, int]] = field(default_factory=list)
    moved: dict[int, int] = field(default_factory=dict)


def order_preserving_match(
    old_hashes: list[str],
    new_hashes: list[str],
    window: int = 1000,
) -> HashMatch:
    """Match *old_hashes* against *new_hashes* preserving relative order.

    Parameters
    ----------
    old_hashes:
        Signatures of the previous blocks, in document order.
    new_hashes:
        Signatures of the new blocks, in document order.
    window:
        Maximum number of candidate pairs for the exact, displacement-aware
        selection.

    Returns
    -------
    HashMatch
    """
    m = len(old_hashes)
    n = len(new_hashes)

    prefix = 0
    while prefix < m and prefix < n and old_hashes[prefix] == new_hashes[prefix]:
        prefix += 1

    suffix = 0
    while (
        suffix < m - prefix
        and suffix < n - prefix
        and old_hashes[m - 1 - suffix] == new_hashes[n - 1 - suffix]
    ):
        suffix += 1

    # Every equal-hash pair inside the unanchored window, by new index.
    positions: dict[str, list[int]] = defaultdict(list)
    for old_idx in range(prefix, m - suffix):
        positions[old_hashes[old_idx]].append(old_idx)

    candidates: list[tuple[int, int]] = []
    for new_idx in range(prefix, n - suffix):
        for old_idx in positions.get(new_hashes[new_idx], ()):
            candidates.append((old_idx, new_idx))

    if len(candidates) <= window:
        chosen = _min_displacement_lcs(candidates)
    else:
        chosen = _patience_lcs(candidates)

    kept_new = list(range(prefix))
    kept_new.extend(new_idx for _, new_idx in chosen)
    kept_new.extend(range(n - suffix, n))

    kept = _bind_first_available(old_hashes, new_hashes, kept_new)
    return HashMatch(kept=kept, moved=_pair_leftovers(old_hashes, new_hashes, kept))


def _bind_first_available(
    old_hashes: list[str],
    new_hashes: list[str],
    kept_new: list[int],
) -> list[tuple[int, int]]:
    """Embed the kept new blocks into the previous list, leftmost first.

    The hashes at *kept_new* form a subsequence of *old_hashes*, so the
    greedy scan always finds a slot for each of them.
    """
    pairs: list[tuple[int, int]] = []
    old_idx = 0
    for new_idx in kept_new:
        wanted = new_hashes[new_idx]
        while old_hashes[old_idx] != wanted:
            old_idx += 1
        pairs.append((old_idx, new_idx))
        old_idx += 1
    return pairs


def _pair_leftovers(
    old_hashes: list[str],
    new_hashes: list[str],
    kept: list[tuple[int, int]],
) -> dict[int, int]:
    kept_old = {old for old, _ in kept}
    kept_new = {new for _, new in kept}

    available: dict[str, deque[int]] = defaultdict(deque)
    for old_idx, value in enumerate(old_hashes):
        if old_idx not in kept_old:
            available[value].append(old_idx)

    moved: dict[int, int] = {}
    for new_idx, value in enumerate(new_hashes):
        if new_idx in kept_new:
            continue
        queue = available.get(value)
        if queue:
            moved[new_idx] = queue.popleft()
    return moved


def _min_displacement_lcs(pairs: list[tuple[int, int]]) -> list[tuple[int, int]]:
    """Longest chain increasing in both indices, least displaced first.

    *pairs* is ordered by new index, then old index.  Quadratic in
    ``len(pairs)``.
    """
    count = len(pairs)
    if count == 0:
        return []

    lengths = [1] * count
    costs = [abs(old - new) for old, new in pairs]
    parents = [-1] * count

    for i in range(count):
        old_i, new_i = pairs[i]
        own_cost = abs(old_i - new_i)
        for j in range(i):
            old_j, new_j = pairs[j]
            if old_j >= old_i or new_j >= new_i:
                continue
            length = lengths[j] + 1
            cost = costs[j] + own_cost
            if length > lengths[i] or (length == lengths[i] and cost < costs[i]):
                lengths[i] = length
                costs[i] = cost
                parents[i] = j

    best = 0
    for i in range(1, count):
        if lengths[i] > lengths[best] or (
            lengths[i] == lengths[best] and costs[i] < costs[best]
        ):
            best = i

    chain: list[tuple[int, int]] = []
    while best != -1:
        chain.append(pairs[best])
        best = parents[best]
    chain.reverse()
    return chain


def _patience_lcs(pairs: list[tuple[int, int]]) -> list[tuple[int, int]]:
    """Longest chain increasing in both indices in ``O(n log n)``.

    Pairs sharing a new index are visited with descending old index so at
    most one of them can join a strictly increasing run.
    """
    ordered = sorted(pairs, key=lambda pair: (pair[1], -pair[0]))
    tails: list[int] = []
    tail_positions: list[int] = []
    parents = [-1] * len(ordered)

    for i, (old_idx, _) in enumerate(ordered):
        slot = bisect_left(tails, old_idx)
        if slot == len(tails):
            tails.append(old_idx)
            tail_positions.append(i)
        else:
            tails[slot] = old_idx
            tail_positions[slot] = i
        parents[i] = tail_positions[slot - 1] if slot > 0 else -1

    chain: list[tuple[int, int]] = []
    pos = tail_positions[-1] if tail_positions else -1
    while pos != -1:
        chain.append(ordered[pos])
        pos = parents[pos]
    chain.reverse()
    return chain
