from math import pi

from elasticbending.config import ROUND_TO


def deg2rad(degrees: float) -> float:
    return degrees * pi / 180

def rad2deg(radians: float) -> float:
    return radians * 180 / pi

def is_zero(value: float, digits: int = ROUND_TO) -> bool:
    """True if `value` rounds to zero at `digits` decimal places."""
    return round(value, digits) == 0

def snap_to_zero(value: float, digits: int = ROUND_TO) -> float:
    """Return exactly 0.0 when `value` rounds to zero, else `value` unchanged."""
    return 0.0 if is_zero(value, digits) else value
