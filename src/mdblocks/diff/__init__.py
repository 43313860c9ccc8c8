"""Diff engine for incremental document updates.

Exports
-------
DiffPlanner
    Classifies previous/new blocks as kept, inserted or removed.
IdentityAssigner
    Carries ids and cached HTML onto the new block list.
CommandGenerator
    Turns a plan into ordered DOM mutation commands.
CounterIdGenerator / IdGenerator
    Injectable block id sources.
compute_signature
    Content fingerprint used for matching.
order_preserving_match
    The underlying hash matcher.
"""

from .commands import CommandGenerator, block_attrs
from .identity import CounterIdGenerator, IdentityAssigner, IdGenerator
from .matcher import HashMatch, order_preserving_match
from .planner import DiffPlanner, summarize
from .signature import build_blocks, compute_signature

__all__ = [
    "CommandGenerator",
    "CounterIdGenerator",
    "DiffPlanner",
    "HashMatch",
    "IdGenerator",
    "IdentityAssigner",
    "block_attrs",
    "build_blocks",
    "compute_signature",
    "order_preserving_match",
    "summarize",
]
