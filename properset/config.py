"""
Set Configuration

A single immutable configuration object controls how sets render
themselves and how they react to expensive or ill-formed requests.

    from properset.config import SetConfig, DEFAULT_CONFIG

    cfg = SetConfig(separator="; ", power_warn_size=16)
    s = Set([1, 2], config=cfg)
    str(s)   # "{1; 2}"

The process-wide default lives on the Set class and can be swapped with
``Set.set_default_config`` (typically once, at application startup).
"""

from __future__ import annotations
from dataclasses import dataclass, replace

from .constants import (
    DEFAULT_CYCLE_PLACEHOLDER,
    DEFAULT_SEPARATOR,
    POWER_SET_CEILING,
)


@dataclass(frozen=True)
class SetConfig:
    """
    Behavioural settings shared by sets.

    Attributes:
        cycle_placeholder: Format string rendered in place of a set that is
            already being rendered further up; receives ``token``
        separator: Text placed between members when rendering
        power_warn_size: Cardinality above which power() logs a warning
        forbid_self_membership: Raise when a set is added to itself

    Example:
        >>> cfg = SetConfig(cycle_placeholder="<loop {token}>")
        >>> cfg.render_cycle(7)
        '<loop 7>'
    """
    cycle_placeholder: str = DEFAULT_CYCLE_PLACEHOLDER
    separator: str = DEFAULT_SEPARATOR
    power_warn_size: int = POWER_SET_CEILING
    forbid_self_membership: bool = True

    def __post_init__(self):
        if self.power_warn_size < 0:
            raise ValueError(f"power_warn_size must be >= 0, got {self.power_warn_size}")

    def render_cycle(self, token: int) -> str:
        """Placeholder text for the set with the given identity token."""
        return self.cycle_placeholder.format(token=token)

    def with_options(self, **changes) -> SetConfig:
        """Copy of this config with some fields replaced."""
        return replace(self, **changes)


# Default configuration used by every set created without ``config=``
DEFAULT_CONFIG = SetConfig()


__all__ = [
    'SetConfig',
    'DEFAULT_CONFIG',
]
