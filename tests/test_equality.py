"""
Tests for structural equality, subset relations and cycle safety
"""

import logging

import pytest

from properset import (
    Set,
    SetConfig,
    InvalidArgumentError,
    UNBOUNDED,
    deepcopy,
    rank,
)


def make_cycle():
    """a = {1, b} and b = {a}: a reaches itself through b."""
    a = Set.of(1)
    b = Set.of(a)
    a.add([b])
    return a, b


class TestEquality:
    def test_order_does_not_matter(self):
        a = Set.of(1, 2, 3)
        b = Set.of(3, 1, 2)
        c = Set.of(1, 2)
        assert a == b
        assert b == a
        assert a != c
        assert c != a

    def test_nested(self):
        a = Set.of(1, Set.of(2, Set.of(3, 4)), [5])
        b = Set.of([5], Set.of(Set.of(4, 3), 2), 1)
        assert a == b
        assert a != Set.of(1, Set.of(2, Set.of(3)), [5])

    def test_non_sets_are_never_equal(self):
        a = Set.of(1)
        assert a != 1
        assert a != [1]
        assert a != {1}
        assert not a.equals(None)

    def test_equal_implies_same_cardinality(self):
        a = Set.of(Set.of(1), Set.of(2))
        b = Set.of(Set.of(2), Set.of(1))
        assert a == b
        assert len(a) == len(b)

    def test_same_cardinality_not_sufficient(self):
        assert len(Set.of(1, 2)) == len(Set.of(1, 3))
        assert Set.of(1, 2) != Set.of(1, 3)


class TestOrder:
    def test_subset(self):
        a = Set.of(1, 2)
        b = Set.of(1)
        c = Set.of(1, 2)
        assert b <= a
        assert not a <= b
        assert c <= a

    def test_superset(self):
        a = Set.of(1, 2)
        b = Set.of(1)
        c = Set.of(1, 2)
        assert a >= b
        assert not b >= a
        assert a >= c

    def test_strict_subset(self):
        a = Set.of(1, 2)
        b = Set.of(1)
        c = Set.of(1, 2)
        assert b < a
        assert not a < b
        assert not c < a

    def test_strict_superset(self):
        a = Set.of(1, 2)
        b = Set.of(1)
        c = Set.of(1, 2)
        assert a > b
        assert not b > a
        assert not a > c

    def test_reflexive_never_strict(self):
        s = Set.of(1, Set.of(2), [3])
        assert s <= s
        assert not s < s

    def test_antisymmetry(self):
        s = Set.of(1, Set.of(2))
        t = Set.of(Set.of(2), 1)
        u = Set.of(1)
        assert s <= t and t <= s
        assert s == t
        assert u <= s and not s <= u
        assert u != s

    def test_nested_subset(self):
        assert Set.of(Set.of(1)) <= Set.of(Set.of(1), Set.of(2))
        assert not Set.of(Set.of(3)) <= Set.of(Set.of(1), Set.of(2))

    @pytest.mark.parametrize("other", [1, [1], {1}, None, "abc"])
    def test_relations_reject_non_sets(self, other):
        s = Set.of(1)
        with pytest.raises(InvalidArgumentError):
            s <= other
        with pytest.raises(InvalidArgumentError):
            s < other
        with pytest.raises(InvalidArgumentError):
            s >= other
        with pytest.raises(InvalidArgumentError):
            s > other

    def test_non_set_left_operand(self):
        with pytest.raises(InvalidArgumentError):
            1 <= Set.of(1)


class TestCycles:
    def test_equality_terminates(self):
        a, b = make_cycle()
        c, d = make_cycle()
        assert a == a
        assert a == c
        assert b == d
        assert a != b
        assert a != Set.of(1, Set.of(Set.of(1)))

    def test_membership_terminates(self):
        a, b = make_cycle()
        c, _ = make_cycle()
        holder = Set.of(a)
        assert c in holder
        assert b not in holder

    def test_subset_terminates(self):
        a, b = make_cycle()
        c, _ = make_cycle()
        assert a <= c
        assert not a < c

    def test_rank_unbounded(self):
        a, b = make_cycle()
        assert rank(a) == UNBOUNDED
        assert b.rank() == UNBOUNDED
        assert rank(Set.of(1, a)) == UNBOUNDED

    def test_stringify_emits_placeholder(self):
        a, b = make_cycle()
        text = str(a)
        assert text == "{1, {(cycle: 0x%x)}}" % a.token
        assert f"(cycle: 0x{b.token:x})" in str(b)

    def test_stringify_logs_cycle(self, caplog):
        a, _ = make_cycle()
        with caplog.at_level(logging.DEBUG, logger="properset.core"):
            str(a)
        assert any("cycle" in record.getMessage() for record in caplog.records)

    def test_shared_subset_is_not_a_cycle(self):
        shared = Set.of(1)
        s = Set.of(Set.of(shared), Set.of(shared, 2))
        assert "cycle" not in str(s)
        assert str(s) == "{{{1}}, {2, {1}}}"
        assert rank(s) == 3

    def test_flatten_terminates(self):
        a, _ = make_cycle()
        assert a.flatten() == Set.of(1)

    def test_totable_preserves_cycle(self):
        a, _ = make_cycle()
        table = a.totable(recursive=True)
        assert table[0] == 1
        assert table[1][0] is table

    def test_of_rank_terminates(self):
        a, _ = make_cycle()
        assert a.of_rank(1, recursive=True).is_empty()
        assert a.of_rank(UNBOUNDED) == Set.of(Set.of(a))

    def test_deepcopy_preserves_cycle(self):
        a, _ = make_cycle()
        c = deepcopy(a)
        assert c is not a
        assert c == a
        inner = c.nth(1)
        assert inner.nth(0) is c

    def test_equality_is_symmetric_on_distinct_cycles(self):
        # s5 = {s2, {}}, s2 = {s5}, s3 = {s0, s2}, s0 = {s3}
        s0, s2, s3, s5 = Set(), Set(), Set(), Set()
        s5.add([Set()])
        s2.add([s5])
        s5.add([s2])
        s3.add([s0, s2])
        s0.add([s3])
        assert len(s3) == 2 and len(s5) == 2
        assert s3 != s5
        assert s5 != s3
        assert not s3 <= s5
        assert not s5 <= s3
        assert s3 not in Set.of(s5)
        assert s5 not in Set.of(s3)

    def test_equality_agrees_both_ways_on_cycles(self):
        a, b = make_cycle()
        c, d = make_cycle()
        nodes = [a, b, c, d, Set.of(1), Set.of(a, 1)]
        for x in nodes:
            for y in nodes:
                assert (x == y) == (y == x)
                assert (x == y) == (x <= y and y <= x)

    def test_direct_self_membership_when_allowed(self):
        cfg = SetConfig(forbid_self_membership=False)
        s = Set.of(1, config=cfg)
        s.add([s])
        assert len(s) == 2
        assert s == s
        assert rank(s) == UNBOUNDED
        assert str(s) == "{1, (cycle: 0x%x)}" % s.token


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
