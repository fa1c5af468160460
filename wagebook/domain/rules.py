"""
Legal break rules (German ArbZG style).

More than 6h of work require a 30 minute break, more than 9h require 45
minutes. Crossing a threshold by at most the tolerance does not count as
extra work: the day collapses back to the threshold instead.
"""

SIX_HOURS = 6 * 3600
NINE_HOURS = 9 * 3600
TOLERANCE_SECONDS = 15 * 60

BREAK_AFTER_SIX_HOURS = 30 * 60
BREAK_AFTER_NINE_HOURS = 45 * 60

BREAK_THRESHOLDS = (SIX_HOURS, NINE_HOURS)


def legal_minimum_break_seconds(worked_seconds: int) -> int:
    """Required break for a net worked duration, tolerance band included."""
    if worked_seconds > NINE_HOURS + TOLERANCE_SECONDS:
        return BREAK_AFTER_NINE_HOURS
    if worked_seconds > SIX_HOURS + TOLERANCE_SECONDS:
        return BREAK_AFTER_SIX_HOURS
    return 0


def apply_tolerance_correction(worked_seconds: int) -> int:
    """
    Collapse (6h, 6h15m] to 6h and (9h, 9h15m] to 9h.

    The upper edge is inclusive. Idempotent: both thresholds are fixed points.
    """
    correction = 0
    for threshold in BREAK_THRESHOLDS:
        if threshold < worked_seconds <= threshold + TOLERANCE_SECONDS:
            correction += worked_seconds - threshold
    return max(0, worked_seconds - correction)


def round_half_away(numerator: int, denominator: int) -> int:
    """Integer division rounded to nearest, halves away from zero."""
    if denominator < 0:
        numerator, denominator = -numerator, -denominator
    quotient, remainder = divmod(abs(numerator), denominator)
    if remainder * 2 >= denominator:
        quotient += 1
    return quotient if numerator >= 0 else -quotient


def ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)
