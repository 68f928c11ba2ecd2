"""
Comparisons

Ordering and equality of abstract floats in three-valued logic. Two
intervals that overlap admit either answer, so the result is
Tri.UNCERTAIN; only disjoint intervals (or sign information) decide.
"""

from ..core.tristate import Tri, tri_not
from ..core.value import AbstractFloat, AnyFloat


def less_than(x: AbstractFloat, y: AbstractFloat) -> Tri:
    """
    x < y over every pair of reals the operands stand for.

    TRUE when all of x lies strictly below all of y, FALSE when all of y
    lies strictly below all of x, UNCERTAIN otherwise; intervals that
    touch or overlap, including two equal exact values, are UNCERTAIN.
    """
    if isinstance(x, AnyFloat) or isinstance(y, AnyFloat):
        return Tri.UNCERTAIN

    vx, vy = x.value, y.value
    if vx == 0:
        return Tri.from_bool(vy > 0)
    if vx < 0 and vy >= 0:
        return Tri.TRUE
    if vx > 0 and vy <= 0:
        return Tri.FALSE

    # Same sign: compare interval extremes
    if x.upper < y.lower:
        return Tri.TRUE
    if y.upper < x.lower:
        return Tri.FALSE
    return Tri.UNCERTAIN


def greater_than(x: AbstractFloat, y: AbstractFloat) -> Tri:
    return less_than(y, x)


def less_equal(x: AbstractFloat, y: AbstractFloat) -> Tri:
    return tri_not(less_than(y, x))


def greater_equal(x: AbstractFloat, y: AbstractFloat) -> Tri:
    return tri_not(less_than(x, y))


def equals(x: AbstractFloat, y: AbstractFloat) -> Tri:
    """
    x == y.

    Only two exact operands are known equal; disjoint intervals are known
    different; anything overlapping is UNCERTAIN.
    """
    if isinstance(x, AnyFloat) or isinstance(y, AnyFloat):
        return Tri.UNCERTAIN
    if x.error == 0 and y.error == 0:
        return Tri.from_bool(x.value == y.value)
    if x.upper < y.lower or y.upper < x.lower:
        return Tri.FALSE
    return Tri.UNCERTAIN


def not_equals(x: AbstractFloat, y: AbstractFloat) -> Tri:
    return tri_not(equals(x, y))
