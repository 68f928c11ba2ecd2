"""
Failure kinds of the floating-point error model.

Only two conditions are signalled as exceptions:
- InvalidConstructionError: a caller asked for a negative error bound
- InvariantViolationError: the addition rule reached a state the
  exact-cancellation check should have excluded (a defect in the model)

Everything else (possibly-zero denominators, square roots of possibly
negative values, overlapping comparisons) is a legitimate result and is
returned as ANY or Tri.UNCERTAIN.
"""


class FloatModelError(Exception):
    """Base class for errors raised by the model."""


class InvalidConstructionError(FloatModelError, ValueError):
    """An abstract float was built with an impossible error bound."""


class InvariantViolationError(FloatModelError, AssertionError):
    """An internal invariant of an error derivation does not hold."""
