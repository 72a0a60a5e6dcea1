"""
Visited Guard - Termination for Recursive Traversals

Sets may contain themselves transitively:

    a = Set([1])
    b = Set([a])
    a.add([b])          # a ∈ b ∈ a

Every recursive traversal (equality, rank, rendering, flattening, table
conversion, rank filtering) therefore carries a VisitedGuard. A guard is
created fresh by the top-level call and threaded through nested calls;
it is never stored on a set and never shared between unrelated calls.

Keys are compared by IDENTITY, not by value. Two distinct but equal sets
are two different entries. A key may be a single object or a pair of
objects (equality guards the pair being compared, not either side alone).
The guard holds a reference to every keyed object so that ids cannot be
recycled while the traversal is running, the same trick ``copy.deepcopy``
uses for its memo.
"""

from __future__ import annotations
from typing import Any, Dict, Optional, Tuple


def _identity(objs: Tuple[Any, ...]) -> Tuple[int, ...]:
    return tuple(id(obj) for obj in objs)


class VisitedGuard:
    """
    Identity-keyed map of objects seen during one traversal.

    Used as a plain "seen" marker (``mark`` / ``seen`` / ``in``) and as a
    memo from a visited object to an already-produced result
    (``guard[obj]``).

    Example:
        >>> guard = VisitedGuard()
        >>> a, b = [], []
        >>> guard.mark(a, b)
        >>> guard.seen(a, b), guard.seen(b, a)
        (True, False)
    """

    __slots__ = ('_entries',)

    def __init__(self):
        self._entries: Dict[Tuple[int, ...], Tuple[Tuple[Any, ...], Any]] = {}

    # -------------------------------------------------------------------------
    # Marker interface (one object or a tuple of objects)
    # -------------------------------------------------------------------------

    def mark(self, *objs: Any, value: Any = True) -> None:
        """Record ``objs`` as visited, optionally with an associated value."""
        self._entries[_identity(objs)] = (objs, value)

    def unmark(self, *objs: Any) -> None:
        """Forget ``objs``; used by traversals that only guard the current path."""
        self._entries.pop(_identity(objs), None)

    def seen(self, *objs: Any) -> bool:
        return _identity(objs) in self._entries

    # -------------------------------------------------------------------------
    # Memo interface (single objects)
    # -------------------------------------------------------------------------

    def __contains__(self, obj: Any) -> bool:
        return (id(obj),) in self._entries

    def __getitem__(self, obj: Any) -> Any:
        try:
            return self._entries[(id(obj),)][1]
        except KeyError:
            raise KeyError(obj) from None

    def __setitem__(self, obj: Any, value: Any) -> None:
        self.mark(obj, value=value)

    def __repr__(self) -> str:
        return f"VisitedGuard({len(self._entries)} visited)"


def ensure_guard(guard: Optional[VisitedGuard]) -> VisitedGuard:
    """Return ``guard``, or a fresh one when the caller is a top-level call."""
    return guard if guard is not None else VisitedGuard()


__all__ = [
    'VisitedGuard',
    'ensure_guard',
]
