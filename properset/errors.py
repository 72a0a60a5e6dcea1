"""
Exceptions raised by properset.

Every error derives from PropersetError and from the closest built-in
exception, so ``except TypeError`` keeps working for callers that do not
know about this package.
"""

# Message formats
NOT_A_SET_MSG = "expected a Set, got a {type_name}."
FROZEN_MSG = "set is frozen."
SELF_MEMBER_MSG = "a set cannot be a member of itself."


class PropersetError(Exception):
    """Base class for all properset errors."""


class InvalidArgumentError(PropersetError, TypeError):
    """An operand does not satisfy the Set contract."""

    @classmethod
    def not_a_set(cls, obj) -> "InvalidArgumentError":
        return cls(NOT_A_SET_MSG.format(type_name=type(obj).__name__))


class ImmutabilityError(PropersetError, TypeError):
    """add, remove or clear was called on a frozen set."""

    def __init__(self, message: str = FROZEN_MSG):
        super().__init__(message)


class PreconditionError(PropersetError, ValueError):
    """A rank or level argument lies outside its domain."""


class SelfMembershipError(InvalidArgumentError):
    """A set was added to itself."""

    def __init__(self, message: str = SELF_MEMBER_MSG):
        super().__init__(message)


__all__ = [
    'PropersetError',
    'InvalidArgumentError',
    'ImmutabilityError',
    'PreconditionError',
    'SelfMembershipError',
]
