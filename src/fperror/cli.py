"""
fperror Command-Line Interface

Bounds the rounding error of built-in computations and runs the
soundness sweep from the command line.
"""

import sys
import argparse
import json
import time
from typing import List, Optional

import numpy as np

from . import (
    AnyFloat,
    ExpressionGraph,
    RandomChoice,
    SoundnessChecker,
    SoundnessConfig,
    abstract_evaluate,
    get_format,
)
from .core.formats import FORMATS
from .expr_graph import sqrt, exp, log1p, fmax, fmin


def build_hypot() -> ExpressionGraph:
    """sqrt(x^2 + y^2), the naive way."""
    return ExpressionGraph.from_callable(
        lambda x, y: sqrt(x * x + y * y), 2, ["x", "y"]
    )


def build_norm3() -> ExpressionGraph:
    """Euclidean norm of a 3-vector."""
    return ExpressionGraph.from_callable(
        lambda x, y, z: sqrt(x ** 2 + y ** 2 + z ** 2), 3, ["x", "y", "z"]
    )


def build_softplus() -> ExpressionGraph:
    """log(1 + exp(x))."""
    return ExpressionGraph.from_callable(lambda x: log1p(exp(x)), 1, ["x"])


def build_logistic() -> ExpressionGraph:
    """1 / (1 + exp(-x))."""
    return ExpressionGraph.from_callable(lambda x: 1 / (1 + exp(-x)), 1, ["x"])


def build_relative_change() -> ExpressionGraph:
    """(new - old) / old."""
    return ExpressionGraph.from_callable(
        lambda new, old: (new - old) / old, 2, ["new", "old"]
    )


def build_logsumexp2() -> ExpressionGraph:
    """max + log1p(exp(min - max)), the shifted log-sum-exp of two values."""
    def f(x, y):
        hi = fmax(x, y)
        lo = fmin(x, y)
        return hi + log1p(exp(lo - hi))
    return ExpressionGraph.from_callable(f, 2, ["x", "y"])


FUNCTIONS = {
    'hypot': build_hypot,
    'norm3': build_norm3,
    'softplus': build_softplus,
    'logistic': build_logistic,
    'relative_change': build_relative_change,
    'logsumexp2': build_logsumexp2,
}


def cmd_eval(args):
    """Bound the rounding error of a built-in computation."""
    print("=" * 60)
    print("fperror: abstract evaluation")
    print("=" * 60)

    graph = FUNCTIONS[args.function]()
    n = graph.num_variables()
    if len(args.values) != n:
        print(f"Error: {args.function} takes {n} values, got {len(args.values)}")
        return 1

    errors = args.error if args.error is not None else [0.0]
    if len(errors) == 1:
        errors = errors * n
    elif len(errors) != n:
        print(f"Error: give one error bound or {n}, got {len(errors)}")
        return 1

    fmt = get_format(args.format)
    choice = RandomChoice(seed=args.seed)

    print(f"\nFunction: {args.function}")
    print(f"Format: {fmt.name} (rounding unit {fmt.rounding_unit:.3e})")
    print(f"Values: {args.values}")
    print(f"Errors: {errors}")

    result = abstract_evaluate(graph, args.values, errors, fmt, choice)
    try:
        point = graph.evaluate(args.values)
    except (ValueError, OverflowError, ZeroDivisionError):
        point = None

    print("\n" + "-" * 60)
    print("RESULT")
    print("-" * 60)
    if isinstance(result, AnyFloat):
        print("Result: ANY (no useful bound)")
    else:
        print(f"Value: {result.value:.17g}")
        print(f"Relative error bound: {result.error:.6e}")
        print(f"Interval: [{result.lower:.17g}, {result.upper:.17g}]")
    if point is None:
        print("Float evaluation: undefined")
    else:
        print(f"Float evaluation: {point:.17g}")
    if choice.history:
        print(f"Uncertain comparisons resolved: {choice.history}")

    if args.output:
        output_data = {
            'function': args.function,
            'format': fmt.to_canonical(),
            'values': list(args.values),
            'errors': list(errors),
            'result': result.to_canonical(),
            'float_evaluation': point,
            'choices': choice.history,
        }
        with open(args.output, 'w') as f:
            json.dump(output_data, f, indent=2)
        print(f"\nResults saved to: {args.output}")

    return 0


def cmd_check(args):
    """Run the sampling soundness sweep over every operation."""
    print("=" * 60)
    print("fperror: soundness sweep")
    print("=" * 60)

    fmt = get_format(args.format)
    config = SoundnessConfig(
        sobol_log2=args.sobol_log2,
        seed=args.seed,
        verbose=args.verbose,
    )
    checker = SoundnessChecker(fmt, config)

    start = time.time()
    reports = checker.run_sweep(args.cases)
    elapsed = time.time() - start

    by_op = {}
    for r in reports:
        by_op.setdefault(r.operation, []).append(r)

    print(f"\n{'operation':10} {'cases':>6} {'ANY':>6} {'samples':>8} {'violations':>10}")
    for name, group in by_op.items():
        print(f"{name:10} {len(group):6d} {sum(r.trivial for r in group):6d} "
              f"{sum(r.n_samples for r in group):8d} "
              f"{sum(r.n_violations for r in group):10d}")

    failed = [r for r in reports if not r.sound]
    for r in failed[:10]:
        print(f"\nVIOLATION {r.operation}{r.inputs} -> {r.result}: "
              f"{r.n_violations} samples, worst excess {r.worst_excess:.3e} at {r.worst_point}")

    print(f"\nTime: {elapsed:.3f}s")
    print(f"Total: {len(reports) - len(failed)}/{len(reports)} sound")

    if args.output:
        with open(args.output, 'w') as f:
            json.dump([r.to_canonical() for r in reports], f, indent=2)
        print(f"Results saved to: {args.output}")

    return 0 if not failed else 1


def cmd_formats(args):
    """List the known floating-point formats."""
    for fmt in FORMATS.values():
        print(f"{fmt.name:8} u = 2^{int(np.log2(fmt.rounding_unit))}"
              f" ({fmt.rounding_unit:.3e}), max = {fmt.max_value:.6e}")
    return 0


def cmd_version(args):
    """Print version information."""
    from . import __version__
    print(f"fperror {__version__}")
    print("Symbolic bounds on floating-point rounding error")
    return 0


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='fperror',
        description='fperror - Symbolic Floating-Point Error Bounds'
    )
    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Eval command
    eval_parser = subparsers.add_parser('eval', help='Bound the error of a computation')
    eval_parser.add_argument('function', choices=list(FUNCTIONS.keys()),
                             help='Computation to evaluate')
    eval_parser.add_argument('--values', '-v', type=float, nargs='+', required=True,
                             help='Input values')
    eval_parser.add_argument('--error', '-e', type=float, nargs='+',
                             help='Input relative error bounds (default: 0, exact inputs)')
    eval_parser.add_argument('--format', '-f', choices=sorted(FORMATS), default='single',
                             help='Target format (default: single)')
    eval_parser.add_argument('--seed', type=int, default=42,
                             help='Seed for uncertain comparisons (default: 42)')
    eval_parser.add_argument('--output', '-o', type=str,
                             help='Output JSON file')
    eval_parser.set_defaults(func=cmd_eval)

    # Check command
    check_parser = subparsers.add_parser('check', help='Run the soundness sweep')
    check_parser.add_argument('--cases', '-n', type=int, default=200,
                              help='Random operand sets per operation (default: 200)')
    check_parser.add_argument('--format', '-f', choices=sorted(FORMATS), default='single',
                              help='Target format (default: single)')
    check_parser.add_argument('--seed', type=int, default=42,
                              help='Random seed (default: 42)')
    check_parser.add_argument('--sobol-log2', type=int, default=6,
                              help='log2 of Sobol samples per case (default: 6)')
    check_parser.add_argument('--verbose', action='store_true',
                              help='Print progress')
    check_parser.add_argument('--output', '-o', type=str,
                              help='Output JSON file')
    check_parser.set_defaults(func=cmd_check)

    # Formats command
    formats_parser = subparsers.add_parser('formats', help='List floating-point formats')
    formats_parser.set_defaults(func=cmd_formats)

    # Version command
    ver_parser = subparsers.add_parser('version', help='Print version')
    ver_parser.set_defaults(func=cmd_version)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
