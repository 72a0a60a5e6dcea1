"""
Set - Sets with Structural Equality

Design principles:
- Members are compared by VALUE, not identity: {1, {2}} == {1, {2}}
  even when the inner sets are different objects
- Sets of sets, sets of lists and sets that (transitively) contain
  themselves are all supported
- Every derived operation returns a NEW set; only add, remove and clear
  change a set in place
- Mutable and frozen sets share one representation; freezing is a flag
  checked by the mutators, not a different class

Usage Pattern:
    a = Set([1, 2, 2, 3])            # {1, 2, 3}
    b = Set.of(1, Set.of(2, 3))      # {1, {2, 3}}
    b.has(Set([3, 2]))               # True (structural)
    b.power()                        # {{}, {1}, {{2, 3}}, {1, {2, 3}}}

    a.freeze()
    a.add([4])                       # ImmutabilityError: set is frozen.

================================================================================
EQUALITY ENGINE
================================================================================

    equals(a, b)   = is_set(b) and |a| == |b| and subset(a, b)
    subset(a, b)   = every member of a is a member of b
    has(b, v)      = O(1) dict lookup        if v is scalar
                     O(n) == scan            if v is structural, not a Set
                     O(n) deep-equality scan if v is a Set

Deep equality runs under a VisitedGuard holding the PAIRS of sets on the
current comparison path. Meeting a pair again means the comparison has
come round a membership cycle; the pair is then assumed equal, which is
the only consistent answer and guarantees termination.

All other relations (strict subset, superset, ...) derive from subset,
so they can never disagree with equality.
"""

from __future__ import annotations
from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple, Union
from collections import deque
from collections.abc import Mapping
from contextlib import contextmanager
from functools import cmp_to_key
from itertools import count, islice
import copy as _copy
import logging

from .config import SetConfig, DEFAULT_CONFIG
from .constants import SET_LABEL_FORMAT, UNBOUNDED
from .errors import (
    ImmutabilityError,
    InvalidArgumentError,
    PreconditionError,
    SelfMembershipError,
)
from .guard import VisitedGuard, ensure_guard
from .storage import MemberStore, is_scalar

LOGGER = logging.getLogger(__name__)

# Identity tokens are issued once per instance and never reused.
_next_token = count(1).__next__

Rank = Union[int, float]


# =============================================================================
# SET CONTRACT
# =============================================================================

def is_set(obj: Any) -> bool:
    """Whether ``obj`` implements the Set contract."""
    return isinstance(obj, Set)


def assert_set(obj: Any) -> Set:
    """
    Return ``obj`` unchanged if it is a Set.

    Raises:
        InvalidArgumentError: "expected a Set, got a <type>."
    """
    if not isinstance(obj, Set):
        raise InvalidArgumentError.not_a_set(obj)
    return obj


def _iter_elements(elements: Iterable[Any]) -> Iterator[Any]:
    """
    Iterate an input collection by its defined entries.

    Mappings are treated as (possibly sparse) sequences and yield their
    values; everything else is iterated directly.
    """
    if isinstance(elements, Mapping):
        return iter(list(elements.values()))
    try:
        return iter(elements)
    except TypeError as err:
        raise InvalidArgumentError(
            f"expected an iterable of members, got a {type(elements).__name__}."
        ) from err


class Set:
    """
    Set with value-based (structural) equality.

    Members are kept in two partitions (see properset.storage): hashable
    values in a dict, everything else (including nested Sets) in an
    insertion-ordered list. No two members are ever equal.

    Sets are unhashable: their equality depends on mutable content.
    """

    # Class-level default configuration
    _default_config: SetConfig = DEFAULT_CONFIG

    __hash__ = None

    def __init__(self, iterable: Optional[Iterable[Any]] = None,
                 frozen: bool = False,
                 config: Optional[SetConfig] = None):
        """
        Create a set.

        Args:
            iterable: Initial members; duplicates collapse silently
            frozen: Start in the frozen state (after seeding)
            config: Explicit config (defaults to the class-level default)
        """
        self._store = MemberStore()
        self._frozen = False
        self._config = config if config is not None else type(self)._default_config
        self._token = _next_token()

        if iterable is not None:
            self.add(iterable)
        self._frozen = bool(frozen)

    @classmethod
    def of(cls, *members: Any, frozen: bool = False,
           config: Optional[SetConfig] = None) -> Set:
        """
        Shorthand constructor taking members as arguments.

        Example:
            >>> Set.of(1, Set.of(2, 3))
            {1, {2, 3}}
        """
        return cls(members, frozen=frozen, config=config)

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    @property
    def config(self) -> SetConfig:
        return self._config

    @classmethod
    def get_default_config(cls) -> SetConfig:
        """Get the default configuration."""
        return cls._default_config

    @classmethod
    def set_default_config(cls, config: SetConfig):
        """
        Set the default configuration.

        Affects sets created afterwards; existing sets keep theirs.
        """
        cls._default_config = config

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------

    @property
    def token(self) -> int:
        """Stable per-instance identity token (not a memory address)."""
        return self._token

    def label(self) -> str:
        """Identity as text, e.g. ``Set: 0x2a``."""
        return SET_LABEL_FORMAT.format(token=self._token)

    # -------------------------------------------------------------------------
    # Mutators
    # -------------------------------------------------------------------------

    def _check_mutable(self):
        if self._frozen:
            raise ImmutabilityError()

    def add(self, elements: Iterable[Any]) -> None:
        """
        Add every element of ``elements`` that is not already a member.

        Don't add members to a set while iterating over it.

        Raises:
            ImmutabilityError: The set is frozen
            SelfMembershipError: An element is this very set
        """
        self._check_mutable()
        forbid_self = self._config.forbid_self_membership
        for value in _iter_elements(elements):
            if value is self and forbid_self:
                raise SelfMembershipError()
            if not self.has(value):
                self._store.insert(value)

    def remove(self, elements: Iterable[Any]) -> None:
        """
        Remove every element of ``elements`` that is a member.

        Elements that are not members are ignored.

        Raises:
            ImmutabilityError: The set is frozen
        """
        self._check_mutable()
        store = self._store
        # Materialise first: ``elements`` may be this set.
        for value in list(_iter_elements(elements)):
            if is_scalar(value):
                store.discard_scalar(value)
                continue
            index = self._structural_index(value)
            if index is not None:
                store.pop_structural(index)

    def clear(self) -> None:
        """Remove all members."""
        self._check_mutable()
        self._store.clear()

    # -------------------------------------------------------------------------
    # Membership
    # -------------------------------------------------------------------------

    def _matches(self, member: Any, value: Any, guard: VisitedGuard) -> bool:
        if member is value:
            return True
        if isinstance(value, Set):
            return isinstance(member, Set) and value._equals(member, guard)
        return not isinstance(member, Set) and member == value

    def _structural_index(self, value: Any,
                          guard: Optional[VisitedGuard] = None) -> Optional[int]:
        guard = ensure_guard(guard)
        for index, member in enumerate(self._store.structural):
            if self._matches(member, value, guard):
                return index
        return None

    def has(self, value: Any, guard: Optional[VisitedGuard] = None) -> bool:
        """
        Whether ``value`` is a member of the set.

        Args:
            value: Any object
            guard: Guard of an enclosing traversal (internal use)
        """
        if is_scalar(value):
            return self._store.has_scalar(value)
        return self._structural_index(value, guard) is not None

    def is_empty(self) -> bool:
        return len(self._store) == 0

    def cardinality(self) -> int:
        """Number of members."""
        return len(self._store)

    # -------------------------------------------------------------------------
    # Iteration
    # -------------------------------------------------------------------------

    def members(self) -> Iterator[Any]:
        """
        Iterate over the members.

        Scalars come first (in no particular order), then structural
        members in insertion order. Each call starts a new traversal.
        """
        return iter(self._store)

    def items(self) -> Iterator[Tuple[int, Any]]:
        """Iterate over ``(position, member)`` pairs, positions from 0."""
        return enumerate(self._store)

    def nth(self, index: int) -> Any:
        """
        Member at ``index`` in iteration order.

        Raises:
            IndexError: ``index`` is outside ``range(len(self))``
        """
        if not 0 <= index < len(self._store):
            raise IndexError("set index out of range")
        scalars = self._store.scalars
        if index < len(scalars):
            return next(islice(scalars, index, None))
        return self._store.structural[index - len(scalars)]

    # -------------------------------------------------------------------------
    # Equality & Order
    # -------------------------------------------------------------------------

    def _subset_of(self, other: Set, guard: VisitedGuard) -> bool:
        has = other.has
        for member in self._store:
            if not has(member, guard):
                return False
        return True

    def _equals(self, other: Any, guard: VisitedGuard) -> bool:
        if not isinstance(other, Set):
            return False
        if self is other:
            return True
        if len(self._store) != len(other._store):
            return False
        # Back on a pair already being compared (either way round): a
        # membership cycle, assumed equal for the rest of this path.
        if guard.seen(self, other) or guard.seen(other, self):
            return True
        guard.mark(self, other)
        guard.mark(other, self)
        try:
            # Under that assumption two members of self may match one member
            # of other, so equal size plus one inclusion is not enough.
            return self._subset_of(other, guard) and other._subset_of(self, guard)
        finally:
            guard.unmark(self, other)
            guard.unmark(other, self)

    def equals(self, other: Any) -> bool:
        """Structural equality; False for anything that is not a Set."""
        return self._equals(other, VisitedGuard())

    def is_subset(self, other: Set) -> bool:
        """self ⊆ other."""
        assert_set(other)
        return self._subset_of(other, VisitedGuard())

    def is_strict_subset(self, other: Set) -> bool:
        """self ⊂ other."""
        assert_set(other)
        return len(self) < len(other) and self._subset_of(other, VisitedGuard())

    def is_superset(self, other: Set) -> bool:
        """self ⊇ other."""
        return assert_set(other).is_subset(self)

    def is_strict_superset(self, other: Set) -> bool:
        """self ⊃ other."""
        return assert_set(other).is_strict_subset(self)

    # -------------------------------------------------------------------------
    # Capability (mutable / frozen)
    # -------------------------------------------------------------------------

    @property
    def frozen(self) -> bool:
        return self._frozen

    def is_frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> Set:
        """Reject add, remove and clear from now on. Returns the set."""
        if not self._frozen:
            LOGGER.debug("freezing %s", self.label())
        self._frozen = True
        return self

    def unfreeze(self) -> Set:
        """Allow add, remove and clear again. Returns the set."""
        if self._frozen:
            LOGGER.debug("unfreezing %s", self.label())
        self._frozen = False
        return self

    def _spawn(self) -> Set:
        """Empty, mutable set of the same type and config."""
        return type(self)(config=self._config)

    def _seal(self, result: Set) -> Set:
        """Give a freshly built result this set's capability."""
        result._frozen = self._frozen
        return result

    # -------------------------------------------------------------------------
    # Copies
    # -------------------------------------------------------------------------

    def copy(self) -> Set:
        """Shallow copy: new storage, same member objects, same capability."""
        dup = self._spawn()
        dup._store = self._store.copy()
        return self._seal(dup)

    def __copy__(self) -> Set:
        return self.copy()

    def __deepcopy__(self, memo: dict) -> Set:
        dup = self._spawn()
        memo[id(self)] = dup
        for member in self._store:
            # Copies of distinct members stay distinct; no re-check needed.
            dup._store.insert(_copy.deepcopy(member, memo))
        return self._seal(dup)

    # -------------------------------------------------------------------------
    # Derived Algorithms
    # -------------------------------------------------------------------------

    def power(self) -> Set:
        """
        The power set.

        Runs in O(2^n): starting from {∅}, every member doubles the list
        of subsets produced so far. Sets beyond ~20 members are not
        practical; a warning is logged above ``config.power_warn_size``.

        Returns:
            A set of 2^n sets, with this set's capability

        Example:
            >>> Set.of(0, 1).power()
            {{}, {0}, {1}, {0, 1}}
        """
        n = len(self._store)
        if n > self._config.power_warn_size:
            LOGGER.warning("power set of %s has 2^%d subsets", self.label(), n)

        subsets = [self._spawn()]
        for value in self._store:
            for i in range(len(subsets)):
                subset = subsets[i].copy()
                subset._store.insert(value)
                subsets.append(subset)

        result = self._spawn()
        for subset in subsets:
            result._store.insert(subset)
        return self._seal(result)

    def rank(self) -> Rank:
        """Rank of this set; see ``rank``."""
        return rank(self)

    def of_rank(self, n: Rank, recursive: bool = False,
                guard: Optional[VisitedGuard] = None) -> Set:
        """
        Members of rank ``n``.

        ``s.of_rank(0, recursive=True)`` and ``s.flatten()`` are equivalent.

        Args:
            n: Rank to select (non-negative integer, or UNBOUNDED)
            recursive: Also search members of members, and so on
            guard: Guard of an enclosing traversal (internal use)

        Example:
            >>> s = Set.of(1, Set.of(2, Set.of(3, 4), Set.of(5)), Set.of(6))
            >>> s.of_rank(1)
            {{6}}
            >>> s.of_rank(1, recursive=True)
            {{6}, {3, 4}, {5}}
        """
        if n != UNBOUNDED and (isinstance(n, bool) or not isinstance(n, int) or n < 0):
            raise PreconditionError(f"rank must be a non-negative integer, got {n!r}")
        if n == 0 and recursive:
            return self.flatten()

        guard = ensure_guard(guard)
        guard.mark(self)
        result = self._spawn()
        for member in self._store:
            if rank(member) == n:
                result.add([member])
            if recursive and isinstance(member, Set) and member not in guard:
                result.add(member.of_rank(n, recursive, guard))
        return self._seal(result)

    def at_level(self, n: int) -> Set:
        """
        Members at nesting level ``n``.

        Level 1 is the members of the set, level 2 the members of its
        member sets, and so on.

        Raises:
            PreconditionError: Unless ``n`` >= 1
        """
        if isinstance(n, bool) or not isinstance(n, int) or n < 1:
            raise PreconditionError(f"'n' must be greater than 0, got {n!r}")
        if n == 1:
            return self.copy()
        result = self._spawn()
        for member in self._store.structural:
            if isinstance(member, Set):
                result.add(member.at_level(n - 1))
        return self._seal(result)

    def map(self, func: Callable[[Any], Any]) -> Set:
        """Set of ``func(member)``; colliding results collapse."""
        result = self._spawn()
        for member in self._store:
            result.add([func(member)])
        return self._seal(result)

    def filter(self, predicate: Callable[[Any], bool]) -> Set:
        """Members for which ``predicate`` is true."""
        result = self._spawn()
        for member in self._store:
            if predicate(member):
                # Members of a set are already distinct.
                result._store.insert(member)
        return self._seal(result)

    def totable(self, recursive: bool = False,
                guard: Optional[VisitedGuard] = None) -> List[Any]:
        """
        The members as a list, in iteration order.

        With ``recursive``, member sets are converted too. A set met
        again is represented by the list already produced for it, so
        shared and cyclic structure becomes shared and cyclic lists.
        """
        guard = ensure_guard(guard)
        table: List[Any] = []
        guard[self] = table
        for member in self._store:
            if recursive and isinstance(member, Set):
                if member in guard:
                    table.append(guard[member])
                else:
                    table.append(member.totable(recursive, guard))
            else:
                table.append(member)
        return table

    def flatten(self) -> Set:
        """
        All non-set values reachable through member sets.

        Example:
            >>> Set.of(1, Set.of(2, 3), 4).power().flatten()
            {1, 2, 3, 4}
        """
        result = self._spawn()
        visited = VisitedGuard()
        visited.mark(self)
        queue = deque(self._store)
        while queue:
            value = queue.popleft()
            if isinstance(value, Set):
                if value not in visited:
                    visited.mark(value)
                    queue.extend(value._store)
            else:
                result.add([value])
        return self._seal(result)

    def sorted(self, key: Optional[Callable[[Any], Any]] = None,
               reverse: bool = False, recursive: bool = False,
               cmp: Optional[Callable[[Any, Any], int]] = None) -> List[Any]:
        """
        The members as a sorted list.

        Without ``key`` or ``cmp`` members are compared directly, which
        requires them to be mutually orderable. ``cmp`` is an old-style
        comparator (negative, zero or positive) and is wrapped with
        ``functools.cmp_to_key``.

        Raises:
            PreconditionError: Both ``key`` and ``cmp`` were given
        """
        if cmp is not None:
            if key is not None:
                raise PreconditionError("pass either 'key' or 'cmp', not both")
            key = cmp_to_key(cmp)
        table = self.totable(recursive)
        table.sort(key=key, reverse=reverse)
        return table

    def concat(self, sep: str = "") -> str:
        """``str()`` of every member, joined with ``sep``."""
        return sep.join(str(member) for member in self._store)

    def stringify(self, guard: Optional[VisitedGuard] = None) -> str:
        """
        Render as ``{m1, m2, ...}``.

        A member set that is already being rendered further up is shown as
        ``config.cycle_placeholder`` (by default ``(cycle: 0x<token>)``).
        Only the current path counts: a set shared by two sibling members
        is not a cycle and is rendered in full under each of them.
        """
        guard = ensure_guard(guard)
        guard.mark(self)
        parts = []
        try:
            for member in self._store:
                if not isinstance(member, Set):
                    parts.append(repr(member))
                elif member in guard:
                    LOGGER.debug("cycle through %s while rendering %s",
                                 member.label(), self.label())
                    parts.append(self._config.render_cycle(member.token))
                else:
                    parts.append(member.stringify(guard))
        finally:
            guard.unmark(self)
        return "{" + self._config.separator.join(parts) + "}"

    # -------------------------------------------------------------------------
    # Set Arithmetic (see properset.arithmetic)
    # -------------------------------------------------------------------------

    def union(self, *others: Set) -> Set:
        from .arithmetic import union
        return union([self, *others])

    def intersection(self, *others: Set) -> Set:
        from .arithmetic import intersection
        return intersection([self, *others])

    def complement(self, other: Set) -> Set:
        """Members of this set that are not in ``other``."""
        from .arithmetic import complement
        return complement(self, other)

    def symmetric_difference(self, *others: Set) -> Set:
        from .arithmetic import difference
        return difference([self, *others])

    def is_disjoint(self, *others: Set) -> bool:
        from .arithmetic import disjoint
        return disjoint([self, *others])

    # -------------------------------------------------------------------------
    # Python Protocols
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._store)

    def __iter__(self) -> Iterator[Any]:
        return self.members()

    def __contains__(self, value: Any) -> bool:
        return self.has(value)

    def __eq__(self, other: Any) -> bool:
        return self.equals(other)

    def __ne__(self, other: Any) -> bool:
        return not self.equals(other)

    def __le__(self, other: Set) -> bool:
        return self.is_subset(other)

    def __lt__(self, other: Set) -> bool:
        return self.is_strict_subset(other)

    def __ge__(self, other: Set) -> bool:
        return self.is_superset(other)

    def __gt__(self, other: Set) -> bool:
        return self.is_strict_superset(other)

    def __add__(self, other: Set) -> Set:
        return self.union(other)

    __or__ = __add__

    def __sub__(self, other: Set) -> Set:
        return self.complement(other)

    def __and__(self, other: Set) -> Set:
        return self.intersection(other)

    def __xor__(self, other: Set) -> Set:
        return self.symmetric_difference(other)

    def __repr__(self) -> str:
        return self.stringify()

    __str__ = __repr__


# =============================================================================
# MODULE FUNCTIONS
# =============================================================================

def rank(obj: Any, guard: Optional[VisitedGuard] = None) -> Rank:
    """
    Nesting depth of an object.

    Ranks:
        0 = anything that is not a set
        1 = sets that contain no sets
        2 = sets that contain sets, but only of rank 1
        n = 1 + highest rank among member sets

    A set that reaches itself through its members has rank UNBOUNDED.

    Example:
        >>> rank("not a set")
        0
        >>> rank(Set.of(Set.of(Set())))
        3
    """
    if not isinstance(obj, Set):
        return 0
    guard = ensure_guard(guard)
    if obj in guard:
        LOGGER.debug("%s lies on a membership cycle; rank is unbounded", obj.label())
        return UNBOUNDED
    guard.mark(obj)
    try:
        depth: Rank = 0
        for member in obj._store.structural:
            if isinstance(member, Set):
                depth = max(depth, rank(member, guard))
                if depth == UNBOUNDED:
                    break
        return depth + 1
    finally:
        guard.unmark(obj)


def deepcopy(obj: Any) -> Any:
    """
    Recursive copy of an arbitrary object.

    Handles cycles and shared structure: an object reachable along two
    paths is copied once. Copied sets keep their capability.
    """
    return _copy.deepcopy(obj)


@contextmanager
def thawed(s: Set):
    """
    Temporarily unfreeze ``s``; its capability is restored on exit.

    Usage:
        with thawed(result):
            result.add(other)
    """
    was_frozen = s.is_frozen()
    if was_frozen:
        s.unfreeze()
    try:
        yield s
    finally:
        if was_frozen:
            s.freeze()


# The empty set: one frozen instance, created once at import.
EMPTY_SET = Set(frozen=True)


__all__ = [
    'Set',
    'EMPTY_SET',
    'is_set',
    'assert_set',
    'rank',
    'deepcopy',
    'thawed',
]
