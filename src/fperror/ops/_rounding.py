"""Final rounding step shared by every rounding operation."""

import math

from ..core.formats import FloatFormat
from ..core.value import AbstractFloat, make_float


def rounded(value: float, derived_error: float, fmt: FloatFormat) -> AbstractFloat:
    """
    Build the result of an operation whose exact-precision value carries
    `derived_error`, then is rounded once into `fmt`.

    A nonzero derived bound is pushed one ulp upward so that the float
    arithmetic spent on the bound itself never shrinks it.
    """
    if derived_error == 0:
        error = fmt.rounding_unit
    else:
        error = math.nextafter(derived_error + fmt.rounding_unit, math.inf)
    return make_float(value, error, fmt)
