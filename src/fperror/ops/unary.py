"""
Unary Operations

Each operation maps the center value exactly and derives a relative
error bound that covers the image of the whole input interval, then adds
one rounding unit for the final rounding into the target format.

Negation, absolute value, doubling and halving are exact in binary
floating point: they keep the input's error and add no rounding unit.

The transcendental bounds favour simple closed forms over the tightest
possible ones. Where a derivation is the textbook expression with a
cancellation problem, an algebraically identical form is used instead,
e.g. e / (1 + sqrt(1 - e)) for 1 - sqrt(1 - e).
"""

import math

from ..core.formats import DEFAULT_FORMAT, FloatFormat
from ..core.tristate import Tri
from ..core.value import ANY, AbstractFloat, AnyFloat, fl, make_float
from ._rounding import rounded


# Sign flips and power-of-two scaling

def negate(x: AbstractFloat) -> AbstractFloat:
    if isinstance(x, AnyFloat):
        return ANY
    return make_float(-x.value, x.error)


def fabs(x: AbstractFloat) -> AbstractFloat:
    if isinstance(x, AnyFloat):
        return ANY
    return make_float(abs(x.value), x.error)


def double(x: AbstractFloat, fmt: FloatFormat = DEFAULT_FORMAT) -> AbstractFloat:
    """x * 2; overflows to ANY past the format's range."""
    if isinstance(x, AnyFloat):
        return ANY
    return make_float(x.value * 2.0, x.error, fmt)


def halve(x: AbstractFloat) -> AbstractFloat:
    """x / 2; a nonzero value that underflows to zero gives ANY."""
    if isinstance(x, AnyFloat):
        return ANY
    half = x.value / 2.0
    if half == 0 and x.value != 0:
        return ANY
    return make_float(half, x.error)


# Sign predicates

def is_positive(x: AbstractFloat) -> Tri:
    if isinstance(x, AnyFloat):
        return Tri.UNCERTAIN
    return Tri.from_bool(x.value > 0)


def is_negative(x: AbstractFloat) -> Tri:
    if isinstance(x, AnyFloat):
        return Tri.UNCERTAIN
    return Tri.from_bool(x.value < 0)


def is_zero(x: AbstractFloat) -> Tri:
    if isinstance(x, AnyFloat):
        return Tri.UNCERTAIN
    return Tri.from_bool(x.value == 0)


# Algebraic

def sqrt(x: AbstractFloat, fmt: FloatFormat = DEFAULT_FORMAT) -> AbstractFloat:
    """
    Square root.

    The lower end of the interval shrinks faster than the upper end
    grows, so the bound is 1 - sqrt(1 - e).
    """
    if isinstance(x, AnyFloat) or x.value < 0:
        return ANY
    if x.value == 0:
        return fl(0.0)
    e = x.error
    return rounded(math.sqrt(x.value), e / (1.0 + math.sqrt(1.0 - e)), fmt)


def square(x: AbstractFloat, fmt: FloatFormat = DEFAULT_FORMAT) -> AbstractFloat:
    """Square, bounded by the upper end: (1 + e)^2 - 1."""
    if isinstance(x, AnyFloat):
        return ANY
    if x.value == 0:
        return fl(0.0)
    e = x.error
    return rounded(x.value * x.value, e * (2.0 + e), fmt)


# Logarithm / exponential family

def log(x: AbstractFloat, fmt: FloatFormat = DEFAULT_FORMAT) -> AbstractFloat:
    """
    Natural logarithm.

    Over [v(1-e), v(1+e)] the result moves by at most -log1p(-e) from
    log(v), whichever side of 1 the value is on; relative to |log v| the
    bound blows up as v approaches 1, and at v == 1 only an exact input
    gives a usable (exactly zero) result.
    """
    if isinstance(x, AnyFloat) or x.value <= 0:
        return ANY
    v, e = x.value, x.error
    if v == 1:
        return fl(0.0) if e == 0 else ANY

    center = math.log(v)
    return rounded(center, -math.log1p(-e) / abs(center), fmt)


def exp(x: AbstractFloat, fmt: FloatFormat = DEFAULT_FORMAT) -> AbstractFloat:
    """
    Exponential.

    exp(v(1 +- e)) = exp(v) * exp(+-|v|e); the side moving away from zero
    dominates, giving expm1(|v| e). Overflow and underflow of the center
    give ANY.
    """
    if isinstance(x, AnyFloat):
        return ANY
    v, e = x.value, x.error
    if v == 0:
        return fl(1.0)
    try:
        center = math.exp(v)
        if v > 0:
            spread = math.expm1(v * e)
        else:
            spread = math.expm1(-v * e)
    except OverflowError:
        return ANY
    if center == 0:
        return ANY
    return rounded(center, spread, fmt)


def log1p(x: AbstractFloat, fmt: FloatFormat = DEFAULT_FORMAT) -> AbstractFloat:
    """
    log(1 + x).

    For v > 0, concavity with log1p(0) = 0 keeps the relative error at or
    below e. For v < 0 the bound comes from the end nearest -1, and an
    interval reaching -1 leaves the domain.
    """
    if isinstance(x, AnyFloat):
        return ANY
    v, e = x.value, x.error
    if v == 0:
        return fl(0.0)
    if v > 0:
        return rounded(math.log1p(v), e, fmt)

    if v * (1.0 + e) <= -1.0:
        return ANY
    center = math.log1p(v)
    # log1p(v(1+e)) = log1p(v) + log1p(v e / (1 + v)); both logs are negative
    return rounded(center, math.log1p(v * e / (1.0 + v)) / center, fmt)


def expm1(x: AbstractFloat, fmt: FloatFormat = DEFAULT_FORMAT) -> AbstractFloat:
    """
    exp(x) - 1.

    For v > 0 the upper end dominates with relative spread
    exp(v) expm1(v e) / expm1(v), written as expm1(v e) / -expm1(-v) to
    stay finite for large v. For v < 0 the end nearest zero dominates:
    exp(v) expm1(-v e) / -expm1(v).
    """
    if isinstance(x, AnyFloat):
        return ANY
    v, e = x.value, x.error
    if v == 0:
        return fl(0.0)
    try:
        center = math.expm1(v)
        if v > 0:
            spread = math.expm1(v * e) / -math.expm1(-v)
        else:
            spread = math.exp(v) * math.expm1(-v * e) / -center
    except OverflowError:
        return ANY
    return rounded(center, spread, fmt)
