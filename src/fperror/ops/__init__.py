"""
Operations Module - Error Propagation Rules

Provides:
- Unary operations: sign flips, scaling, sqrt, square, log/exp family
- Binary operations: add, sub, mul, div, min, max
- Comparisons in three-valued logic

Rounding operations take the target format as `fmt`
(default: single precision).
"""

from .unary import (
    negate,
    fabs,
    double,
    halve,
    is_positive,
    is_negative,
    is_zero,
    sqrt,
    square,
    log,
    exp,
    log1p,
    expm1,
)
from .binary import (
    combined_error,
    add,
    sub,
    mul,
    div,
    fmin,
    fmax,
)
from .compare import (
    less_than,
    greater_than,
    less_equal,
    greater_equal,
    equals,
    not_equals,
)

__all__ = [
    # Unary
    'negate',
    'fabs',
    'double',
    'halve',
    'is_positive',
    'is_negative',
    'is_zero',
    'sqrt',
    'square',
    'log',
    'exp',
    'log1p',
    'expm1',
    # Binary
    'combined_error',
    'add',
    'sub',
    'mul',
    'div',
    'fmin',
    'fmax',
    # Comparisons
    'less_than',
    'greater_than',
    'less_equal',
    'greater_equal',
    'equals',
    'not_equals',
]
