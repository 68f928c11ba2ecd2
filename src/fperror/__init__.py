"""
fperror - Symbolic Bounds on Floating-Point Rounding Error

This package models IEEE-754-like arithmetic abstractly: every value is
a center plus an upper bound on its relative error, standing for all the
reals a genuine floating-point computation could produce. Propagating
these bounds through a computation verifies, ahead of time, that its
error stays acceptable for every possible rounding of its inputs.

Key Features:
- Two-variant abstract floats: ANY, or Valued(value, error)
- Sound error propagation for sign flips, scaling, sqrt, square,
  log/exp/log1p/expm1, add, sub, mul, div
- Three-valued comparisons (TRUE / FALSE / UNCERTAIN), resolved by a
  caller-supplied choice source
- Configurable target format (half, single, double rounding units)
- Expression graph tracing and abstract evaluation
- Sampling-based soundness checking
"""

from .core.errors import (
    FloatModelError,
    InvalidConstructionError,
    InvariantViolationError,
)
from .core.formats import (
    FloatFormat,
    HALF,
    SINGLE,
    DOUBLE,
    DEFAULT_FORMAT,
    get_format,
)
from .core.tristate import Tri, tri_not, tri_and, tri_or
from .core.value import (
    AbstractFloat,
    AnyFloat,
    Valued,
    ANY,
    fl,
    make_float,
)
from .ops import (
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
    combined_error,
    add,
    sub,
    mul,
    div,
    fmin,
    fmax,
    less_than,
    greater_than,
    less_equal,
    greater_equal,
    equals,
    not_equals,
)
from .choice import (
    ChoiceSource,
    RandomChoice,
    ScriptedChoice,
    resolve,
)
from .expr_graph import (
    ExpressionGraph,
    ExprNode,
    Variable,
    Constant,
    UnaryOp,
    BinaryOp,
    OpType,
    TracedVar,
)
from .evaluator import AbstractEvaluator, abstract_evaluate
from .soundness import (
    SoundnessChecker,
    SoundnessConfig,
    SoundnessReport,
    OPERATIONS,
    random_inputs,
)

__version__ = "0.1.0"

__all__ = [
    # Errors
    "FloatModelError",
    "InvalidConstructionError",
    "InvariantViolationError",
    # Formats
    "FloatFormat",
    "HALF",
    "SINGLE",
    "DOUBLE",
    "DEFAULT_FORMAT",
    "get_format",
    # Three-valued logic
    "Tri",
    "tri_not",
    "tri_and",
    "tri_or",
    # Values
    "AbstractFloat",
    "AnyFloat",
    "Valued",
    "ANY",
    "fl",
    "make_float",
    # Unary operations
    "negate",
    "fabs",
    "double",
    "halve",
    "is_positive",
    "is_negative",
    "is_zero",
    "sqrt",
    "square",
    "log",
    "exp",
    "log1p",
    "expm1",
    # Binary operations
    "combined_error",
    "add",
    "sub",
    "mul",
    "div",
    "fmin",
    "fmax",
    # Comparisons
    "less_than",
    "greater_than",
    "less_equal",
    "greater_equal",
    "equals",
    "not_equals",
    # Choice sources
    "ChoiceSource",
    "RandomChoice",
    "ScriptedChoice",
    "resolve",
    # Expression graphs
    "ExpressionGraph",
    "ExprNode",
    "Variable",
    "Constant",
    "UnaryOp",
    "BinaryOp",
    "OpType",
    "TracedVar",
    # Evaluation
    "AbstractEvaluator",
    "abstract_evaluate",
    # Soundness
    "SoundnessChecker",
    "SoundnessConfig",
    "SoundnessReport",
    "OPERATIONS",
    "random_inputs",
]
