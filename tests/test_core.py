"""
Tests for Set storage, mutation and queries
"""

import pytest

from properset import (
    Set,
    EMPTY_SET,
    ImmutabilityError,
    InvalidArgumentError,
    SelfMembershipError,
    is_set,
    assert_set,
)


class TestConstruction:
    def test_duplicates_collapse(self):
        a = Set([1, 2, 2, 3, 3, 3])
        assert len(a) == 3
        assert a == Set([1, 2, 3])
        assert str(a) == "{1, 2, 3}"

    def test_shorthand(self):
        assert Set.of(1, 2, 2) == Set([1, 2])
        assert Set.of() == Set()
        assert Set() == EMPTY_SET

    def test_nested_duplicates_collapse(self):
        a = Set.of(Set.of(1, 2), Set.of(2, 1))
        assert len(a) == 1

    def test_sparse_input(self):
        # Mappings are read as sparse sequences: only defined entries count
        a = Set({1: "a", 5: "b", 9: "c"})
        assert len(a) == 3
        assert "b" in a
        assert 5 not in a

    def test_non_iterable_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Set(5)

    def test_tokens_are_unique(self):
        a, b = Set(), Set()
        assert a.token != b.token
        assert a.label() == f"Set: 0x{a.token:x}"


class TestAddRemove:
    def test_add(self):
        a = Set.of(1, 2, 3)
        a.add([4, 5])
        assert sorted(a) == [1, 2, 3, 4, 5]

    def test_add_is_idempotent(self):
        a = Set.of(1)
        inner = Set.of(2, 3)
        a.add([inner])
        a.add([Set.of(3, 2)])
        a.add([1])
        assert len(a) == 2

    def test_add_other_set_adds_its_members(self):
        a = Set.of(1)
        a.add(Set.of(2, 3))
        assert a == Set.of(1, 2, 3)

    def test_add_unhashable_values(self):
        a = Set([[1, 2], [1, 2], {"k": 1}, {"k": 1}])
        assert len(a) == 2
        assert [1, 2] in a
        assert {"k": 1} in a

    def test_add_self_rejected(self):
        a = Set.of(1)
        with pytest.raises(SelfMembershipError):
            a.add([a])
        with pytest.raises(InvalidArgumentError):
            a.add([2, a])
        # Elements before the offending one were added
        assert a == Set.of(1, 2)

    def test_add_own_members_is_noop(self):
        a = Set.of(1, Set.of(2))
        a.add(a)
        assert len(a) == 2

    def test_remove(self):
        a = Set.of(1, 2, 3)
        a.remove([2, 3])
        assert a == Set.of(1)

    def test_remove_structural(self):
        a = Set.of(1, Set.of(2), [3])
        a.remove([Set.of(2), [3]])
        assert a == Set.of(1)

    def test_remove_sparse_input(self):
        a = Set.of(1, 2, Set.of(3), Set.of(4))
        a.remove({1: 2, 7: Set.of(3)})
        assert a == Set.of(1, Set.of(4))

    def test_remove_missing_is_ignored(self):
        a = Set.of(1, Set.of(2))
        a.remove([99, Set.of(3), [4]])
        assert len(a) == 2

    def test_remove_all_members_of_self(self):
        a = Set.of(1, Set.of(2))
        a.remove(a)
        assert a.is_empty()

    def test_clear(self):
        a = Set.of(1, Set.of(2), [3])
        a.clear()
        assert a.is_empty()
        assert len(a) == 0
        a.add([1])
        assert a == Set.of(1)


class TestQueries:
    def test_has(self):
        a = Set.of(1)
        assert a.has(1)
        assert not a.has(2)

    def test_has_structural(self):
        a = Set.of(1, Set.of(2, Set.of(3)))
        assert Set.of(Set.of(3), 2) in a
        assert Set.of(2, Set.of(4)) not in a
        assert Set.of(2) not in a

    def test_has_does_not_leak_between_candidates(self):
        a = Set.of(Set.of(Set.of(2)), Set.of(Set.of(4)))
        assert Set.of(Set.of(3)) not in a
        assert Set.of(Set.of(4)) in a

    def test_is_empty_and_cardinality(self):
        assert Set().is_empty()
        assert EMPTY_SET.is_empty()
        b = Set.of(1, [2], Set())
        assert not b.is_empty()
        assert b.cardinality() == 3 == len(b)

    def test_scalar_partition_uses_python_equality(self):
        a = Set.of(1, 1.0, True)
        assert len(a) == 1


class TestIteration:
    def test_members(self):
        a = Set.of(1, 2, 3)
        assert sorted(a.members()) == [1, 2, 3]

    def test_members_is_restartable(self):
        a = Set.of(1, Set.of(2))
        assert list(a.members()) == list(a.members())
        assert list(a) == list(a.members())

    def test_scalars_before_structural(self):
        a = Set([Set.of(1), "a", [2], "b"])
        assert list(a)[:2] == ["a", "b"]

    def test_items(self):
        a = Set.of("a", "b", "c")
        positions = dict(a.items())
        assert sorted(positions) == [0, 1, 2]
        assert sorted(positions.values()) == ["a", "b", "c"]

    def test_nth(self):
        a = Set(["a", "b", Set.of(1)])
        assert [a.nth(i) for i in range(len(a))] == list(a)
        with pytest.raises(IndexError):
            a.nth(3)
        with pytest.raises(IndexError):
            a.nth(-1)


class TestSetContract:
    def test_is_set(self):
        assert is_set(Set.of(1))
        assert not is_set(0)
        assert not is_set({1})

    def test_assert_set(self):
        a = Set.of(1)
        assert assert_set(a) is a
        with pytest.raises(InvalidArgumentError, match="expected a Set, got a int."):
            assert_set(0)

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Set())


class TestEmptySet:
    def test_singleton(self):
        import properset
        from properset.core import EMPTY_SET as core_empty
        assert properset.EMPTY_SET is core_empty
        assert properset.EMPTY_SET is EMPTY_SET

    def test_empty_and_frozen(self):
        assert len(EMPTY_SET) == 0
        assert EMPTY_SET == Set()
        assert EMPTY_SET.is_frozen()
        with pytest.raises(ImmutabilityError):
            EMPTY_SET.add([1])
        assert len(EMPTY_SET) == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
