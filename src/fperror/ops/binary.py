"""
Binary Operations

Addition, subtraction, multiplication, division and min/max over
abstract floats. ANY absorbs everything, except that an exact zero
factor makes a product exactly zero whatever the other operand is.
"""

import math

from ..choice import FAIR, ChoiceSource, resolve
from ..core.errors import InvariantViolationError
from ..core.formats import DEFAULT_FORMAT, FloatFormat
from ..core.value import ANY, AbstractFloat, AnyFloat, fl
from ._rounding import rounded
from .compare import less_than
from .unary import negate


def combined_error(vx: float, ex: float, vy: float, ey: float) -> float:
    """
    Relative error of vx + vy before rounding, for nonzero operands that
    are not exact opposites.

    Same signs: the sum's relative error is a weighted average of ex and
    ey, bounded here by max(ex, ey). The exact weighted average
    (|vx| ex + |vy| ey) / |vx + vy| is tighter but not used.

    Opposite signs: with z = 1 + vy/vx the absolute spread |vx|(ex + ey)
    is divided by |vx + vy| = |vx| z. When z < 0 the roles swap and
    z' = 1 + vx/vy is used. Both being negative cannot happen unless an
    exact cancellation slipped past add().

    Raises:
        InvariantViolationError: If vx + vy == 0 or neither ratio is
            nonnegative
    """
    if (vx > 0) == (vy > 0):
        return max(ex, ey)

    total = vx + vy
    if total == 0:
        raise InvariantViolationError(
            f"Exact cancellation {vx!r} + {vy!r} reached the combined-error rule"
        )
    if ex + ey == 0:
        return 0.0

    # total / vx == 1 + vy/vx without the cancellation in the subtraction
    z = total / vx
    if z < 0:
        z = total / vy
        if z < 0:
            raise InvariantViolationError(
                f"No nonnegative ratio for {vx!r} + {vy!r}"
            )
    if z == 0:
        return math.inf
    return (ex + ey) / z


def add(x: AbstractFloat, y: AbstractFloat, fmt: FloatFormat = DEFAULT_FORMAT) -> AbstractFloat:
    """
    x + y.

    Opposite values cancel to an exact zero only when both are exact;
    otherwise the sum could be arbitrarily small relative to its spread
    and the result is ANY.
    """
    if isinstance(x, AnyFloat) or isinstance(y, AnyFloat):
        return ANY
    vx, vy = x.value, y.value
    if vx == 0:
        return y
    if vy == 0:
        return x
    if vx == -vy:
        if x.error == 0 and y.error == 0:
            return fl(0.0)
        return ANY
    return rounded(vx + vy, combined_error(vx, x.error, vy, y.error), fmt)


def sub(x: AbstractFloat, y: AbstractFloat, fmt: FloatFormat = DEFAULT_FORMAT) -> AbstractFloat:
    return add(x, negate(y), fmt)


def mul(x: AbstractFloat, y: AbstractFloat, fmt: FloatFormat = DEFAULT_FORMAT) -> AbstractFloat:
    """
    x * y, with bound (1 + ex)(1 + ey) - 1.

    An exact zero operand is checked before ANY: zero times anything is
    an exact zero.
    """
    if isinstance(x, AnyFloat) and isinstance(y, AnyFloat):
        return ANY
    if not isinstance(x, AnyFloat) and x.value == 0:
        return fl(0.0)
    if not isinstance(y, AnyFloat) and y.value == 0:
        return fl(0.0)
    if isinstance(x, AnyFloat) or isinstance(y, AnyFloat):
        return ANY

    product = x.value * y.value
    if product == 0:
        # underflow of a nonzero product
        return ANY
    ex, ey = x.error, y.error
    return rounded(product, ex + ey + ex * ey, fmt)


def div(x: AbstractFloat, y: AbstractFloat, fmt: FloatFormat = DEFAULT_FORMAT) -> AbstractFloat:
    """
    x / y, with bound (1 + ex) / (1 - ey) - 1.

    A zero denominator gives ANY, 0 / 0 included; a zero numerator over
    a nonzero denominator gives an exact zero.
    """
    if isinstance(x, AnyFloat) or isinstance(y, AnyFloat):
        return ANY
    if y.value == 0:
        return ANY
    if x.value == 0:
        return fl(0.0)

    quotient = x.value / y.value
    if quotient == 0:
        return ANY
    ex, ey = x.error, y.error
    return rounded(quotient, (ex + ey) / (1.0 - ey), fmt)


def fmin(
    x: AbstractFloat,
    y: AbstractFloat,
    choice: ChoiceSource,
    probability: float = FAIR
) -> AbstractFloat:
    """x if x < y else y; an UNCERTAIN comparison is settled by `choice`."""
    if resolve(less_than(x, y), choice, probability):
        return x
    return y


def fmax(
    x: AbstractFloat,
    y: AbstractFloat,
    choice: ChoiceSource,
    probability: float = FAIR
) -> AbstractFloat:
    """y if x < y else x; an UNCERTAIN comparison is settled by `choice`."""
    if resolve(less_than(x, y), choice, probability):
        return y
    return x
