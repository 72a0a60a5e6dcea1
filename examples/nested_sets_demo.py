"""
Demonstration of Properset

This script walks through what sets with structural equality can do:
1. Deduplicate composite values, including sets of sets
2. Decompose nested sets by rank and by level
3. Survive sets that contain themselves
"""

import logging

import numpy as np
from properset import (
    Set,
    EMPTY_SET,
    difference,
    disjoint,
    overlap_matrix,
    rank,
)


def print_section(title):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def demonstrate_structural_equality():
    """Equal composites collapse; order is irrelevant."""
    print_section("1: Structural Equality")

    a = Set.of(Set.of(1, 2), Set.of(2, 1), [3, 4], [3, 4])
    print(f"\nSet.of({{1, 2}}, {{2, 1}}, [3, 4], [3, 4]) = {a}")
    print(f"  cardinality: {len(a)}")
    print(f"  {{1, 2}} in a: {Set.of(1, 2) in a}")

    p = Set.of(0, 1, 2).power()
    print(f"\nPower set of {{0, 1, 2}} has {len(p)} members")
    print(f"  every member is a subset: {all(s <= Set.of(0, 1, 2) for s in p)}")
    print(f"  contains the empty set: {EMPTY_SET in p}")

    sets = [Set.of(1, 2), Set.of(1, 3), Set.of(1, 2, 3, 4)]
    print(f"\nSymmetric difference (left fold) of {sets}:")
    print(f"  {difference(sets)}")
    print(f"  disjoint: {disjoint(sets)}")
    print("  overlap matrix:")
    print(np.array2string(overlap_matrix(sets), prefix="    "))


def demonstrate_decomposition():
    """Rank and level views of the same nested set."""
    print_section("2: Rank and Level Decomposition")

    s = Set.of(1, Set.of(2, Set.of(3, 4), Set.of(5)), Set.of(6))
    print(f"\ns = {s}, rank {rank(s)}")
    for n in range(4):
        print(f"  of_rank({n}) = {s.of_rank(n)}    recursive: {s.of_rank(n, recursive=True)}")
    for n in range(1, 5):
        print(f"  at_level({n}) = {s.at_level(n)}")
    print(f"  flatten() = {s.flatten()}")


def demonstrate_cycles():
    """Sets reachable from themselves."""
    print_section("3: Membership Cycles")

    a = Set.of(1)
    b = Set.of(a)
    a.add([b])
    print(f"\na = {a}")
    print(f"  rank(a) = {rank(a)}")
    print(f"  a.flatten() = {a.flatten()}")

    c = Set.of(1)
    c.add([Set.of(c)])
    print(f"  a == c (independently built, same shape): {a == c}")


def main():
    """Run the complete demonstration."""
    logging.basicConfig(level=logging.WARNING)

    print("\n" + "=" * 70)
    print("  PROPERSET - DEMONSTRATION")
    print("=" * 70)

    demonstrate_structural_equality()
    demonstrate_decomposition()
    demonstrate_cycles()

    print("\n" + "=" * 70 + "\n")


if __name__ == "__main__":
    main()
