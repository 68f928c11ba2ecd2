"""
Floating-Point Formats

A format fixes the rounding unit added to every derived error bound
(the relative error of one final rounding step) and the largest finite
magnitude before a result is considered overflowed.
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class FloatFormat:
    """
    Parameters of a target floating-point format.

    Attributes:
        name: Short identifier ("single", "double", ...)
        rounding_unit: Relative error of a single rounding, 2^-p for a
            p-bit significand
        max_value: Largest finite magnitude
    """
    name: str
    rounding_unit: float
    max_value: float

    def __post_init__(self):
        if not 0.0 < self.rounding_unit < 1.0:
            raise ValueError(f"Rounding unit must lie in (0, 1): {self.rounding_unit}")
        if self.max_value <= 0.0:
            raise ValueError(f"Max value must be positive: {self.max_value}")

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "rounding_unit": self.rounding_unit,
            "max_value": self.max_value,
        }


HALF = FloatFormat("half", 2.0 ** -11, 65504.0)
SINGLE = FloatFormat("single", 2.0 ** -24, (2.0 - 2.0 ** -23) * 2.0 ** 127)
DOUBLE = FloatFormat("double", 2.0 ** -53, 1.7976931348623157e308)

# The model's reference instance is single precision
DEFAULT_FORMAT = SINGLE

FORMATS: Dict[str, FloatFormat] = {
    fmt.name: fmt for fmt in (HALF, SINGLE, DOUBLE)
}


def get_format(name: str) -> FloatFormat:
    """Look up a format by name."""
    try:
        return FORMATS[name]
    except KeyError:
        raise ValueError(
            f"Unknown format '{name}'. Available: {sorted(FORMATS)}"
        ) from None
