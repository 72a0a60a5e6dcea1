"""
MemberStore - Dual-Partition Storage Backend

================================================================================
STORAGE FORMAT
================================================================================

    ┌──────────────────────────────┬──────────────────────────────────────┐
    │ scalar partition (dict)      │ structural partition (list)          │
    │ hashable, non-Set members    │ Sets, lists, dicts, other unhashable │
    │ membership: O(1) hash lookup │ membership: O(n) equality scan       │
    └──────────────────────────────┴──────────────────────────────────────┘

Cardinality = len(scalar partition) + len(structural partition).

The store is deliberately dumb: it never checks for duplicates and knows
nothing about deep equality. Set (properset.core) decides WHAT goes in;
MemberStore only decides WHERE it goes.
"""

from __future__ import annotations
from typing import Any, Dict, Iterator, List
from itertools import chain


def is_scalar(value: Any) -> bool:
    """
    True if ``value`` belongs in the scalar partition.

    A value is scalar iff it is hashable. Sets define ``__eq__`` without
    ``__hash__`` and are therefore always structural.
    """
    try:
        hash(value)
    except TypeError:
        return False
    return True


class MemberStore:
    """
    Storage for the members of one set.

    Scalars are kept as dict keys (values are unused), structural members
    in insertion order. Iteration yields scalars first, then structural
    members.
    """

    __slots__ = ('scalars', 'structural')

    def __init__(self):
        self.scalars: Dict[Any, bool] = {}
        self.structural: List[Any] = []

    # -------------------------------------------------------------------------
    # Unchecked mutation
    # -------------------------------------------------------------------------

    def insert(self, value: Any) -> None:
        """Store ``value`` without checking whether it is already present."""
        if is_scalar(value):
            self.scalars[value] = True
        else:
            self.structural.append(value)

    def discard_scalar(self, value: Any) -> bool:
        """Delete a scalar; returns whether it was present."""
        return self.scalars.pop(value, None) is not None

    def pop_structural(self, index: int) -> Any:
        return self.structural.pop(index)

    def clear(self) -> None:
        # Rebinding is O(1); live iterators keep the old containers.
        self.scalars = {}
        self.structural = []

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def has_scalar(self, value: Any) -> bool:
        return value in self.scalars

    def __len__(self) -> int:
        return len(self.scalars) + len(self.structural)

    def __iter__(self) -> Iterator[Any]:
        return chain(self.scalars, self.structural)

    def copy(self) -> MemberStore:
        """Shallow copy: new partitions, same member objects."""
        dup = MemberStore()
        dup.scalars = dict(self.scalars)
        dup.structural = list(self.structural)
        return dup

    def __repr__(self) -> str:
        return f"MemberStore(scalars={len(self.scalars)}, structural={len(self.structural)})"


__all__ = [
    'MemberStore',
    'is_scalar',
]
