"""
Small numeric helpers shared by the scorers
"""
import math
from datetime import date
from typing import Optional


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    """Clamp into [low, high]; non-finite values collapse to ``low``"""
    if not math.isfinite(value):
        return low
    return max(low, min(high, value))


def safe_rate(part: int, whole: int) -> float:
    """part / whole * 100, or 0 when there is nothing to divide by"""
    if whole <= 0:
        return 0.0
    return part / whole * 100


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (2.5 -> 3), unlike round()"""
    if not math.isfinite(value):
        return 0
    return int(math.floor(value + 0.5))


def iso(d: Optional[date]) -> Optional[str]:
    return d.isoformat() if d else None
