"""
Abstract Floats

An abstract float stands for every real number that a genuine
floating-point computation could have produced at some point of a
program. It is one of two variants:

- ANY: the result could be any bit pattern (overflowed, NaN-producing,
  or simply too imprecise to say anything about)
- Valued(value, error): the closed interval of reals within relative
  distance `error` of `value`

    value > 0:  [(1 - error) * value, (1 + error) * value]
    value < 0:  [(1 + error) * value, (1 - error) * value]
    value == 0: {0}

Valued instances always satisfy 0 <= error < 1, and a zero value always
carries a zero error. Values are immutable; operations build new ones
through make_float, which normalizes bounds that are too loose (ANY) and
rejects negative bounds.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .errors import InvalidConstructionError
from .formats import FloatFormat


class _ArithmeticMixin:
    """Python operators over abstract floats, using the default format."""

    def __neg__(self):
        from ..ops.unary import negate
        return negate(self)

    def __abs__(self):
        from ..ops.unary import fabs
        return fabs(self)

    def __add__(self, other):
        return _dispatch("add", self, other)

    def __radd__(self, other):
        return _dispatch("add", other, self)

    def __sub__(self, other):
        return _dispatch("sub", self, other)

    def __rsub__(self, other):
        return _dispatch("sub", other, self)

    def __mul__(self, other):
        return _dispatch("mul", self, other)

    def __rmul__(self, other):
        return _dispatch("mul", other, self)

    def __truediv__(self, other):
        return _dispatch("div", self, other)

    def __rtruediv__(self, other):
        return _dispatch("div", other, self)


@dataclass(frozen=True)
class AnyFloat(_ArithmeticMixin):
    """A result about which nothing is known."""

    @property
    def is_any(self) -> bool:
        return True

    def to_canonical(self) -> Dict[str, Any]:
        return {"type": "any"}

    def __repr__(self) -> str:
        return "ANY"


@dataclass(frozen=True)
class Valued(_ArithmeticMixin):
    """
    A center value with a relative error bound.

    Attributes:
        value: The exact-precision result
        error: Upper bound on the relative distance of the real result
    """
    value: float
    error: float

    def __post_init__(self):
        if not math.isfinite(self.value):
            raise InvalidConstructionError(f"Value must be finite: {self.value}")
        if not 0.0 <= self.error < 1.0:
            raise InvalidConstructionError(f"Error must lie in [0, 1): {self.error}")
        if self.value == 0 and self.error != 0:
            raise InvalidConstructionError("Zero must carry a zero error")

    @property
    def is_any(self) -> bool:
        return False

    @property
    def is_exact(self) -> bool:
        return self.error == 0

    @property
    def lower(self) -> float:
        """Smallest real in the modeled interval."""
        if self.value >= 0:
            return self.value * (1.0 - self.error)
        return self.value * (1.0 + self.error)

    @property
    def upper(self) -> float:
        """Largest real in the modeled interval."""
        if self.value >= 0:
            return self.value * (1.0 + self.error)
        return self.value * (1.0 - self.error)

    def contains(self, r: float, rel_tol: float = 0.0) -> bool:
        slack = rel_tol * abs(self.value)
        return self.lower - slack <= r <= self.upper + slack

    def to_canonical(self) -> Dict[str, Any]:
        return {"type": "valued", "value": self.value, "error": self.error}

    def __repr__(self) -> str:
        return f"Valued({self.value!r}, {self.error:.6g})"


AbstractFloat = Union[AnyFloat, Valued]

ANY = AnyFloat()


def make_float(
    value: float,
    error: float,
    fmt: Optional[FloatFormat] = None
) -> AbstractFloat:
    """
    Build an abstract float from a computed value and error bound.

    Args:
        value: Center of the result
        error: Relative error bound, must not be negative
        fmt: When given, results whose interval reaches past the
            format's largest finite value are treated as overflowed

    Returns:
        A Valued satisfying all invariants, or ANY when the bound is
        too loose (error >= 1) or the value is not a finite number

    Raises:
        InvalidConstructionError: If error < 0
    """
    value = float(value)
    error = float(error)

    if error < 0:
        raise InvalidConstructionError(f"Error bound cannot be negative: {error}")
    if math.isnan(error) or error >= 1.0 or not math.isfinite(value):
        return ANY
    if value == 0:
        return Valued(0.0, 0.0)
    if fmt is not None and abs(value) * (1.0 + error) > fmt.max_value:
        return ANY
    return Valued(value, error)


def fl(value: float) -> AbstractFloat:
    """An exact literal: the real `value` with no rounding history."""
    return make_float(value, 0.0)


def _coerce(other) -> AbstractFloat:
    if isinstance(other, (AnyFloat, Valued)):
        return other
    if isinstance(other, (int, float)):
        return fl(other)
    return NotImplemented


def _dispatch(op_name: str, left, right):
    from ..ops import binary

    left, right = _coerce(left), _coerce(right)
    if left is NotImplemented or right is NotImplemented:
        return NotImplemented
    return getattr(binary, op_name)(left, right)
