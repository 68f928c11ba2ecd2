"""
Core Module - Abstract Float Representation

Provides:
- The two-variant abstract float (ANY / Valued) and its constructors
- Floating-point formats (rounding unit, overflow threshold)
- Three-valued comparison outcomes
- The model's failure kinds
"""

from .errors import (
    FloatModelError,
    InvalidConstructionError,
    InvariantViolationError,
)
from .formats import (
    FloatFormat,
    HALF,
    SINGLE,
    DOUBLE,
    DEFAULT_FORMAT,
    FORMATS,
    get_format,
)
from .tristate import Tri, tri_not, tri_and, tri_or
from .value import (
    AbstractFloat,
    AnyFloat,
    Valued,
    ANY,
    fl,
    make_float,
)

__all__ = [
    'FloatModelError',
    'InvalidConstructionError',
    'InvariantViolationError',
    'FloatFormat',
    'HALF',
    'SINGLE',
    'DOUBLE',
    'DEFAULT_FORMAT',
    'FORMATS',
    'get_format',
    'Tri',
    'tri_not',
    'tri_and',
    'tri_or',
    'AbstractFloat',
    'AnyFloat',
    'Valued',
    'ANY',
    'fl',
    'make_float',
]
