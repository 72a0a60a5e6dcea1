# properset/constants.py
"""
Properset Constants

This module defines constants used throughout the properset package:

LAYER 1: Rank Constants
- UNBOUNDED: Rank reported for sets that (transitively) contain themselves

LAYER 2: Rendering Constants
- DEFAULT_SEPARATOR: Member separator in "{a, b, c}"
- DEFAULT_CYCLE_PLACEHOLDER: Stand-in rendered instead of a revisited set

LAYER 3: Cost Constants
- POWER_SET_CEILING: Practical cardinality limit for power sets
"""
import math


# =============================================================================
# LAYER 1: Rank Constants
# =============================================================================

# A set on a membership cycle has no finite nesting depth.
UNBOUNDED = math.inf


# =============================================================================
# LAYER 2: Rendering Constants
# =============================================================================

DEFAULT_SEPARATOR = ", "

# Formatted with the revisited set's identity token.
DEFAULT_CYCLE_PLACEHOLDER = "(cycle: 0x{token:x})"

SET_LABEL_FORMAT = "Set: 0x{token:x}"


# =============================================================================
# LAYER 3: Cost Constants
# =============================================================================

# power() builds 2^n subsets; above this it still runs but logs a warning.
POWER_SET_CEILING = 20

assert POWER_SET_CEILING > 0, "POWER_SET_CEILING must be positive"
