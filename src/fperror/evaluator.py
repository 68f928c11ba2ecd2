"""
Abstract Evaluation

Evaluates an expression graph over abstract floats: each input is a
value with a relative error bound, each node's result bounds what a
floating-point execution of the same computation could produce.

MIN and MAX nodes compare abstract floats; when the comparison is
UNCERTAIN the evaluator asks its choice source, so different sources
(or different seeds) explore different branches of the computation.
"""

from typing import Callable, Dict, Optional, Sequence, Tuple, Union

from .choice import ChoiceSource, RandomChoice
from .core.formats import DEFAULT_FORMAT, FloatFormat
from .core.value import AbstractFloat, fl, make_float
from .expr_graph import (
    ExpressionGraph,
    ExprNode,
    Variable,
    Constant,
    UnaryOp,
    BinaryOp,
    OpType,
)
from .ops import unary, binary


class AbstractEvaluator:
    """
    Evaluates an expression graph over abstract floats.

    Given abstract inputs, computes an abstract float for every node in
    the graph.
    """

    def __init__(
        self,
        graph: ExpressionGraph,
        fmt: FloatFormat = DEFAULT_FORMAT,
        choice: Optional[ChoiceSource] = None
    ):
        self.graph = graph
        self.fmt = fmt
        self.choice = choice if choice is not None else RandomChoice()
        self._node_values: Dict[int, AbstractFloat] = {}

    def evaluate(
        self,
        var_values: Dict[int, AbstractFloat]
    ) -> Tuple[AbstractFloat, Dict[int, AbstractFloat]]:
        """
        Evaluate the graph over given abstract inputs.

        Args:
            var_values: Map from variable index to abstract float

        Returns:
            Tuple of (output value, all node values)
        """
        if self.graph.output_node is None:
            raise ValueError("No output node set")

        self._node_values = {}

        for node in self.graph.topological_order():
            self._node_values[node.node_id] = self._eval_node(node, var_values)

        output = self._node_values[self.graph.output_node.node_id]
        return output, self._node_values.copy()

    def _eval_node(
        self,
        node: ExprNode,
        var_values: Dict[int, AbstractFloat]
    ) -> AbstractFloat:
        if isinstance(node, Variable):
            if node.var_index not in var_values:
                raise ValueError(f"Missing value for variable {node.name}")
            return var_values[node.var_index]

        elif isinstance(node, Constant):
            return fl(node.value)

        elif isinstance(node, UnaryOp):
            child = self._node_values[node.child.node_id]
            return self._eval_unary(node.op, child)

        elif isinstance(node, BinaryOp):
            left = self._node_values[node.left.node_id]
            right = self._node_values[node.right.node_id]
            return self._eval_binary(node.op, left, right)

        else:
            raise ValueError(f"Unknown node type: {type(node)}")

    def _eval_unary(self, op: OpType, x: AbstractFloat) -> AbstractFloat:
        fmt = self.fmt
        if op == OpType.NEG:
            return unary.negate(x)
        elif op == OpType.ABS:
            return unary.fabs(x)
        elif op == OpType.DOUBLE:
            return unary.double(x, fmt)
        elif op == OpType.HALVE:
            return unary.halve(x)
        elif op == OpType.SQRT:
            return unary.sqrt(x, fmt)
        elif op == OpType.SQUARE:
            return unary.square(x, fmt)
        elif op == OpType.LOG:
            return unary.log(x, fmt)
        elif op == OpType.EXP:
            return unary.exp(x, fmt)
        elif op == OpType.LOG1P:
            return unary.log1p(x, fmt)
        elif op == OpType.EXPM1:
            return unary.expm1(x, fmt)
        else:
            raise ValueError(f"Unknown unary op: {op}")

    def _eval_binary(self, op: OpType, l: AbstractFloat, r: AbstractFloat) -> AbstractFloat:
        fmt = self.fmt
        if op == OpType.ADD:
            return binary.add(l, r, fmt)
        elif op == OpType.SUB:
            return binary.sub(l, r, fmt)
        elif op == OpType.MUL:
            return binary.mul(l, r, fmt)
        elif op == OpType.DIV:
            return binary.div(l, r, fmt)
        elif op == OpType.MIN:
            return binary.fmin(l, r, self.choice)
        elif op == OpType.MAX:
            return binary.fmax(l, r, self.choice)
        else:
            raise ValueError(f"Unknown binary op: {op}")


def abstract_evaluate(
    func: Union[ExpressionGraph, Callable],
    values: Sequence[float],
    errors: Union[float, Sequence[float]] = 0.0,
    fmt: FloatFormat = DEFAULT_FORMAT,
    choice: Optional[ChoiceSource] = None
) -> AbstractFloat:
    """
    Bound the rounding error of a computation at given inputs.

    This is the main entry point for one-shot evaluation.

    Args:
        func: ExpressionGraph, or a callable traced with one variable per
            entry of `values`
        values: Input centers
        errors: Input error bounds, one per input or a single shared bound
        fmt: Target floating-point format
        choice: Source for UNCERTAIN comparisons (default: seeded random)

    Returns:
        Abstract float for the output
    """
    if isinstance(errors, (int, float)):
        errors = [float(errors)] * len(values)
    if len(errors) != len(values):
        raise ValueError(
            f"Got {len(errors)} error bounds for {len(values)} values"
        )

    if isinstance(func, ExpressionGraph):
        graph = func
    else:
        graph = ExpressionGraph.from_callable(func, len(values))

    var_values = {
        i: make_float(v, e, fmt)
        for i, (v, e) in enumerate(zip(values, errors))
    }
    result, _ = AbstractEvaluator(graph, fmt, choice).evaluate(var_values)
    return result
