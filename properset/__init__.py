"""
Properset - Sets with Structural Equality

Sets whose members are compared by value, so that sets of sets, sets of
lists and even sets that contain themselves behave the way set theory
says they should.

    >>> from properset import Set, EMPTY_SET
    >>> a = Set([1, 2, 2, 3, 3, 3])
    >>> a
    {1, 2, 3}
    >>> Set.of(Set.of(1), Set.of(1))
    {{1}}
    >>> Set.of(0, 1).power() == Set.of(Set.of(0, 1), Set.of(0), Set.of(1), EMPTY_SET)
    True

Modules:
- core: Set, rank, the empty set
- arithmetic: n-ary union, intersection, complement, symmetric difference
- storage: dual-partition member storage
- guard: visited guard for cycle-safe traversal
- config: SetConfig
- errors: exception taxonomy
"""

__version__ = "0.3.0"

from .config import SetConfig, DEFAULT_CONFIG
from .constants import UNBOUNDED
from .errors import (
    PropersetError,
    InvalidArgumentError,
    ImmutabilityError,
    PreconditionError,
    SelfMembershipError,
)
from .core import Set, EMPTY_SET, is_set, assert_set, rank, deepcopy
from .arithmetic import (
    union,
    intersection,
    complement,
    difference,
    disjoint,
    overlap_matrix,
)

__all__ = [
    # Core
    "Set",
    "EMPTY_SET",
    "is_set",
    "assert_set",
    "rank",
    "deepcopy",
    "UNBOUNDED",
    # Arithmetic
    "union",
    "intersection",
    "complement",
    "difference",
    "disjoint",
    "overlap_matrix",
    # Configuration
    "SetConfig",
    "DEFAULT_CONFIG",
    # Errors
    "PropersetError",
    "InvalidArgumentError",
    "ImmutabilityError",
    "PreconditionError",
    "SelfMembershipError",
]
