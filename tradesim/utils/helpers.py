"""
Simulator Utility Helpers
Math and formatting helpers shared by the engine and the API layer.
"""

import math
from typing import Union

Number = Union[int, float]


# ============================================================================
# Math Helpers
# ============================================================================

def clamp(value: Number, lower: Number, upper: Number) -> float:
    """
    Clamp a value into the closed interval [lower, upper].

    NaN is treated as the lower bound so a bad input can never leak
    through as a probability or risk fraction.

    Args:
        value: Value to clamp.
        lower: Lower bound.
        upper: Upper bound.

    Returns:
        float: Clamped value.
    """
    if isinstance(value, float) and math.isnan(value):
        return float(lower)
    return float(max(lower, min(upper, value)))


def safe_divide(numerator: Number, denominator: Number, default: Number = 0.0) -> float:
    """
    Safely divide two numbers, returning default if denominator is zero.

    Args:
        numerator: Numerator.
        denominator: Denominator.
        default: Default value if division by zero.

    Returns:
        float: Division result or default.
    """
    if denominator == 0:
        return float(default)
    return numerator / denominator


def is_finite_number(value: object) -> bool:
    """Check that a value is a real, finite number (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


# ============================================================================
# Formatting Helpers
# ============================================================================

def format_money(value: Number) -> str:
    """
    Format a monetary amount with thousands separators and two decimals.

    Example:
        >>> format_money(1040)
        '1,040.00'
    """
    return f"{value:,.2f}"


def format_r(value: Number, precision: int = 2) -> str:
    """Format an R-multiple, e.g. 0.8 -> '0.80R'."""
    return f"{value:.{precision}f}R"


__all__ = [
    # Math helpers
    "clamp",
    "safe_divide",
    "is_finite_number",
    # Formatting helpers
    "format_money",
    "format_r",
]
