"""
Set Arithmetic - N-ary Operations

All functions take a LIST of sets (or, for complement, two sets) and
return a new set. Inputs are never modified.

    union:        S₁ ∪ S₂ ∪ ... ∪ Sₖ
    intersection: S₁ ∩ S₂ ∩ ... ∩ Sₖ
    complement:   A \\ B
    difference:   ((S₁ Δ S₂) Δ S₃) Δ ... Sₖ
    disjoint:     Sᵢ ∩ Sⱼ = ∅ for every i < j

Results take the capability (mutable/frozen) of the FIRST set.

================================================================================
SYMMETRIC DIFFERENCE OF MORE THAN TWO SETS
================================================================================

``difference`` folds the binary symmetric difference from left to right:

    (A Δ B) Δ C

It is NOT the complement of the union and the intersection of all sets,

    (A ∪ B ∪ C) \\ (A ∩ B ∩ C)

which gives a different answer as soon as there are three sets:

    >>> difference([Set.of(1, 2), Set.of(1, 3), Set.of(1, 2, 3, 4)])
    {1, 4}

(The naive formula would give {2, 3, 4}.)
"""

from __future__ import annotations
from typing import Iterable, List

import numpy as np

from .core import Set, assert_set, thawed
from .errors import PreconditionError


def _check_sets(sets: Iterable[Set]) -> List[Set]:
    """Materialise ``sets``, raising InvalidArgumentError on a non-set."""
    checked = list(sets)
    for s in checked:
        assert_set(s)
    return checked


def _overlaps(a: Set, b: Set) -> bool:
    has = b.has
    return any(has(member) for member in a)


def union(sets: Iterable[Set]) -> Set:
    """
    The union of the given sets.

    ``union([a, b])`` and ``a + b`` are equivalent. The union of no sets
    is a new, empty set.

    Example:
        >>> union([Set.of(1), Set.of(2), Set.of(3)])
        {1, 2, 3}
    """
    sets = _check_sets(sets)
    if not sets:
        return Set()
    with thawed(sets[0].copy()) as result:
        for other in sets[1:]:
            result.add(other)
    return result


def intersection(sets: Iterable[Set]) -> Set:
    """
    The intersection of the given sets.

    Folds from the left, keeping the members of the running result that
    the next set also has; stops early once the result is empty.

    Raises:
        PreconditionError: No sets were given (the result is undefined)

    Example:
        >>> intersection([Set.of(1), Set.of(1, 2), Set.of(1, 3)])
        {1}
    """
    sets = _check_sets(sets)
    if not sets:
        raise PreconditionError("intersection of no sets is undefined")
    acc = sets[0].copy()
    for other in sets[1:]:
        acc = acc.filter(other.has)
        if acc.is_empty():
            break
    return acc


def complement(a: Set, b: Set) -> Set:
    """
    The members of ``a`` that are not members of ``b``.

    ``complement(a, b)`` and ``a - b`` are equivalent.
    """
    assert_set(a)
    assert_set(b)
    has = b.has
    return a.filter(lambda member: not has(member))


def difference(sets: Iterable[Set]) -> Set:
    """
    The symmetric difference of the given sets, folded from the left.

    See the module docstring for why this differs from
    ``(S₁ ∪ ... ∪ Sₖ) \\ (S₁ ∩ ... ∩ Sₖ)``.
    """
    sets = _check_sets(sets)
    if not sets:
        return Set()
    first = sets[0]
    result = type(first)(config=first.config)
    for other in sets:
        result = complement(union([result, other]), intersection([result, other]))
    if first.is_frozen():
        result.freeze()
    return result


def disjoint(sets: Iterable[Set]) -> bool:
    """
    Whether no two of the given sets share a member.

    Checks all k(k-1)/2 pairs, returning on the first overlap.

    Example:
        >>> disjoint([Set.of(1), Set.of(2), Set.of(3)])
        True
    """
    sets = _check_sets(sets)
    for i, a in enumerate(sets):
        for b in sets[i + 1:]:
            if _overlaps(a, b):
                return False
    return True


def overlap_matrix(sets: Iterable[Set]) -> np.ndarray:
    """
    Pairwise intersection cardinalities.

    Returns:
        np.ndarray of shape (k, k), dtype int64, where entry (i, j) is
        |Sᵢ ∩ Sⱼ|. Symmetric; the diagonal holds |Sᵢ|. All off-diagonal
        entries are zero exactly when ``disjoint(sets)``.
    """
    sets = _check_sets(sets)
    k = len(sets)
    matrix = np.zeros((k, k), dtype=np.int64)
    for i, a in enumerate(sets):
        matrix[i, i] = len(a)
        for j in range(i + 1, k):
            has = sets[j].has
            matrix[i, j] = matrix[j, i] = sum(1 for member in a if has(member))
    return matrix


__all__ = [
    'union',
    'intersection',
    'complement',
    'difference',
    'disjoint',
    'overlap_matrix',
]
