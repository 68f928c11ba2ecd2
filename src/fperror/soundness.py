"""
Soundness Checking by Interval Sampling

An error bound is sound when the exact result of the operation, applied
to any reals drawn from the input intervals, lies inside the output
interval. The checker samples each input interval with a scrambled Sobol
sequence plus the interval corners and center, applies the exact
operation in double precision, and reports every sample that escapes.

Double precision is far finer than the single-precision rounding unit
added to every derived bound, so it stands in for exact arithmetic;
sums use math.fsum, which is correctly rounded.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np
from scipy.stats import qmc

from .core.formats import DEFAULT_FORMAT, FloatFormat
from .core.value import AbstractFloat, AnyFloat, Valued, make_float
from .ops import unary, binary


@dataclass(frozen=True)
class Operation:
    """An abstract operation paired with its exact counterpart."""
    name: str
    arity: int
    abstract: Callable[..., AbstractFloat]
    exact: Callable[..., float]


def _unary(name, abstract, exact, rounding=True) -> Operation:
    if rounding:
        return Operation(name, 1, lambda x, fmt: abstract(x, fmt), exact)
    return Operation(name, 1, lambda x, fmt: abstract(x), exact)


def _binary(name, abstract, exact) -> Operation:
    return Operation(name, 2, lambda x, y, fmt: abstract(x, y, fmt), exact)


OPERATIONS: Dict[str, Operation] = {op.name: op for op in [
    _unary("neg", unary.negate, lambda a: -a, rounding=False),
    _unary("abs", unary.fabs, abs, rounding=False),
    _unary("double", unary.double, lambda a: 2.0 * a),
    _unary("halve", unary.halve, lambda a: a / 2.0, rounding=False),
    _unary("sqrt", unary.sqrt, math.sqrt),
    _unary("square", unary.square, lambda a: a * a),
    _unary("log", unary.log, math.log),
    _unary("exp", unary.exp, math.exp),
    _unary("log1p", unary.log1p, math.log1p),
    _unary("expm1", unary.expm1, math.expm1),
    _binary("add", binary.add, lambda a, b: math.fsum((a, b))),
    _binary("sub", binary.sub, lambda a, b: math.fsum((a, -b))),
    _binary("mul", binary.mul, lambda a, b: a * b),
    _binary("div", binary.div, lambda a, b: a / b),
]}


@dataclass
class SoundnessConfig:
    """Configuration for the soundness checker."""
    sobol_log2: int = 6          # 2**6 Sobol points per check
    seed: int = 42
    rel_tol: float = 1e-12       # slack for double-precision sampling noise
    verbose: bool = False
    log_frequency: int = 100


@dataclass
class SoundnessReport:
    """Outcome of checking one operation on one set of operands."""
    operation: str
    inputs: Tuple[AbstractFloat, ...]
    result: AbstractFloat
    n_samples: int = 0
    n_violations: int = 0
    worst_point: Optional[Tuple[float, ...]] = None
    worst_excess: float = 0.0
    messages: List[str] = field(default_factory=list)

    @property
    def sound(self) -> bool:
        return self.n_violations == 0

    @property
    def trivial(self) -> bool:
        """The result is ANY, which contains everything."""
        return isinstance(self.result, AnyFloat)

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "operation": self.operation,
            "inputs": [x.to_canonical() for x in self.inputs],
            "result": self.result.to_canonical(),
            "n_samples": self.n_samples,
            "n_violations": self.n_violations,
            "worst_point": list(self.worst_point) if self.worst_point else None,
            "worst_excess": self.worst_excess,
        }


def random_inputs(rng: np.random.Generator, n: int) -> List[Valued]:
    """
    Draw operands spanning both signs, six decades of magnitude, exact
    zero, and error bounds from exact through tiny to close to 1.
    """
    inputs = []
    for _ in range(n):
        if rng.random() < 0.1:
            inputs.append(make_float(0.0, 0.0))
            continue
        magnitude = 10.0 ** rng.uniform(-3.0, 3.0)
        value = magnitude if rng.random() < 0.5 else -magnitude

        bucket = rng.random()
        if bucket < 0.2:
            error = 0.0
        elif bucket < 0.5:
            error = rng.uniform(0.0, 1e-6)
        elif bucket < 0.85:
            error = rng.uniform(0.0, 0.1)
        else:
            error = rng.uniform(0.9, 0.999)
        inputs.append(make_float(value, error))
    return inputs


class SoundnessChecker:
    """
    Checks abstract operations against exact evaluation on samples.

    All samples are reproducible given the same config seed.
    """

    def __init__(
        self,
        fmt: FloatFormat = DEFAULT_FORMAT,
        config: Optional[SoundnessConfig] = None
    ):
        self.fmt = fmt
        self.config = config or SoundnessConfig()

    def sample(self, inputs: Sequence[Valued]) -> np.ndarray:
        """
        Sample points of the box spanned by the input intervals.

        Returns:
            Array of shape (n_points, len(inputs)); the first rows are
            the box corners and its center, the rest a Sobol sequence
        """
        d = len(inputs)
        lower = np.array([x.lower for x in inputs])
        upper = np.array([x.upper for x in inputs])

        engine = qmc.Sobol(d=d, scramble=True, seed=self.config.seed)
        unit = engine.random_base2(self.config.sobol_log2)

        corners = np.array([
            [(i >> j) & 1 for j in range(d)]
            for i in range(2 ** d)
        ], dtype=float)
        center = np.full((1, d), 0.5)
        unit = np.vstack([corners, center, unit])

        points = lower + unit * (upper - lower)
        # Pin the corners exactly; lower + 1.0 * (upper - lower) may round
        points[: 2 ** d] = np.where(corners == 1.0, upper, lower)
        return points

    def check(self, op_name: str, *inputs: AbstractFloat) -> SoundnessReport:
        """
        Check one operation on concrete operands.

        Args:
            op_name: Key of OPERATIONS
            inputs: Operands, one per argument of the operation

        Returns:
            SoundnessReport with every escaping sample counted
        """
        if op_name not in OPERATIONS:
            raise ValueError(f"Unknown operation '{op_name}'. Available: {sorted(OPERATIONS)}")
        op = OPERATIONS[op_name]
        if len(inputs) != op.arity:
            raise ValueError(f"{op_name} takes {op.arity} operands, got {len(inputs)}")

        result = op.abstract(*inputs, self.fmt)
        report = SoundnessReport(operation=op_name, inputs=tuple(inputs), result=result)
        if isinstance(result, AnyFloat) or any(isinstance(x, AnyFloat) for x in inputs):
            return report

        scale = abs(result.value)
        for point in self.sample(inputs):
            point = tuple(float(p) for p in point)
            report.n_samples += 1
            try:
                exact = op.exact(*point)
            except (ValueError, OverflowError, ZeroDivisionError) as exc:
                report.n_violations += 1
                report.messages.append(f"{op_name}{point}: {exc}")
                continue

            if result.contains(exact, self.config.rel_tol):
                continue
            excess = max(result.lower - exact, exact - result.upper)
            excess = excess / scale if scale > 0 else math.inf
            report.n_violations += 1
            if excess > report.worst_excess:
                report.worst_excess = excess
                report.worst_point = point

        return report

    def run_sweep(
        self,
        n_cases: int,
        operations: Optional[Sequence[str]] = None
    ) -> List[SoundnessReport]:
        """
        Check every operation on `n_cases` random operand sets.

        Args:
            n_cases: Operand sets per operation
            operations: Operation names (default: all of OPERATIONS)

        Returns:
            One report per (operation, operand set)
        """
        rng = np.random.default_rng(self.config.seed)
        names = list(operations) if operations is not None else sorted(OPERATIONS)
        reports = []

        for name in names:
            arity = OPERATIONS[name].arity
            for _ in range(n_cases):
                report = self.check(name, *random_inputs(rng, arity))
                reports.append(report)
                if self.config.verbose and len(reports) % self.config.log_frequency == 0:
                    self._log_progress(reports)

        return reports

    def _log_progress(self, reports: List[SoundnessReport]) -> None:
        violations = sum(1 for r in reports if not r.sound)
        trivial = sum(1 for r in reports if r.trivial)
        print(
            f"Cases: {len(reports):,} | "
            f"Trivial (ANY): {trivial:,} | "
            f"Violations: {violations:,}"
        )
