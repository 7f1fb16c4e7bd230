# rigkit/core/scalar.py
"""
Scalar helpers and the thresholds shared by every degenerate-input check.
"""

from __future__ import annotations
import math

# =============================================================================
# Thresholds
# =============================================================================

# Smallest squared length treated as non-degenerate. Each call site picks its
# own comparator (>= or >) against this value.
EPSILON = 0.00001


# =============================================================================
# Utility Functions
# =============================================================================

def clamp(value: float, min_val: float, max_val: float) -> float:
    return max(min_val, min(value, max_val))

def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t

def frac(value: float) -> float:
    """Fractional part, keeping the sign of ``value`` like the C runtime."""
    return value - math.trunc(value)

def sinc(x: float) -> float:
    if x == 0.0:
        return 1.0
    return math.sin(x) / x

# Above this cosine, slerp blends linearly: sin(theta) is too small to divide by.
SLERP_LINEAR_THRESHOLD = 0.9995
