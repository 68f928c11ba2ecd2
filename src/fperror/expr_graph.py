"""
Expression Graph for Floating-Point Computations

A straight-line computation over the operations the error model knows,
stored as a DAG so it can be run twice: once with plain floats, once
with abstract floats (see fperror.evaluator).

Graphs are usually built by tracing: from_callable passes TracedVar
placeholders into an ordinary Python function, and every operator or
helper call on them (sqrt, exp, fmin, double, ...) records a node.
"""

import math
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union
from dataclasses import dataclass, field


class OpType(Enum):
    """Operations with an error propagation rule."""

    # Binary operations
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    MIN = "min"
    MAX = "max"

    # Unary operations
    NEG = "neg"
    ABS = "abs"
    DOUBLE = "double"
    HALVE = "halve"
    SQRT = "sqrt"
    SQUARE = "square"
    LOG = "log"
    EXP = "exp"
    LOG1P = "log1p"
    EXPM1 = "expm1"


# Point semantics. The math functions raise on domain errors and
# overflow instead of producing inf or nan.
_UNARY_FUNCS: Dict[OpType, Callable[[float], float]] = {
    OpType.NEG: lambda x: -x,
    OpType.ABS: abs,
    OpType.DOUBLE: lambda x: 2.0 * x,
    OpType.HALVE: lambda x: x / 2.0,
    OpType.SQRT: math.sqrt,
    OpType.SQUARE: lambda x: x * x,
    OpType.LOG: math.log,
    OpType.EXP: math.exp,
    OpType.LOG1P: math.log1p,
    OpType.EXPM1: math.expm1,
}

_BINARY_FUNCS: Dict[OpType, Callable[[float, float], float]] = {
    OpType.ADD: lambda l, r: l + r,
    OpType.SUB: lambda l, r: l - r,
    OpType.MUL: lambda l, r: l * r,
    OpType.DIV: lambda l, r: l / r,
    OpType.MIN: min,
    OpType.MAX: max,
}

UNARY_OPS = frozenset(_UNARY_FUNCS)
BINARY_OPS = frozenset(_BINARY_FUNCS)


@dataclass
class ExprNode:
    """Base class for expression graph nodes."""
    node_id: int = field(default=-1)

    @property
    def children(self) -> Tuple['ExprNode', ...]:
        return ()

    def evaluate(self, var_values: Mapping[int, float]) -> float:
        raise NotImplementedError

    def to_canonical(self) -> Dict[str, Any]:
        raise NotImplementedError


@dataclass
class Variable(ExprNode):
    """Input number `var_index`."""
    var_index: int = 0
    name: str = ""

    def evaluate(self, var_values: Mapping[int, float]) -> float:
        return var_values[self.var_index]

    def to_canonical(self) -> Dict[str, Any]:
        return {"type": "variable", "node_id": self.node_id,
                "var_index": self.var_index, "name": self.name}


@dataclass
class Constant(ExprNode):
    """An exact literal."""
    value: float = 0.0

    def evaluate(self, var_values: Mapping[int, float]) -> float:
        return self.value

    def to_canonical(self) -> Dict[str, Any]:
        return {"type": "constant", "node_id": self.node_id, "value": self.value}


@dataclass
class UnaryOp(ExprNode):
    op: OpType = OpType.NEG
    child: ExprNode = None

    @property
    def children(self) -> Tuple[ExprNode, ...]:
        return (self.child,)

    def evaluate(self, var_values: Mapping[int, float]) -> float:
        return _UNARY_FUNCS[self.op](self.child.evaluate(var_values))

    def to_canonical(self) -> Dict[str, Any]:
        return {"type": "unary", "node_id": self.node_id, "op": self.op.value,
                "child_id": self.child.node_id}


@dataclass
class BinaryOp(ExprNode):
    op: OpType = OpType.ADD
    left: ExprNode = None
    right: ExprNode = None

    @property
    def children(self) -> Tuple[ExprNode, ...]:
        return (self.left, self.right)

    def evaluate(self, var_values: Mapping[int, float]) -> float:
        return _BINARY_FUNCS[self.op](
            self.left.evaluate(var_values), self.right.evaluate(var_values)
        )

    def to_canonical(self) -> Dict[str, Any]:
        return {"type": "binary", "node_id": self.node_id, "op": self.op.value,
                "left_id": self.left.node_id, "right_id": self.right.node_id}


class ExpressionGraph:
    """
    Nodes in creation order plus the output node.

    Variables are shared: asking twice for input i returns the same node,
    so num_variables() is one past the highest index requested.
    """

    def __init__(self):
        self.nodes: List[ExprNode] = []
        self.variables: Dict[int, Variable] = {}
        self.output_node: Optional[ExprNode] = None

    def _add_node(self, node: ExprNode) -> ExprNode:
        node.node_id = len(self.nodes)
        self.nodes.append(node)
        return node

    def variable(self, index: int, name: Optional[str] = None) -> Variable:
        if index not in self.variables:
            self.variables[index] = self._add_node(
                Variable(var_index=index, name=name or f"x{index}")
            )
        return self.variables[index]

    def constant(self, value: float) -> Constant:
        return self._add_node(Constant(value=float(value)))

    def unary(self, op: OpType, child: ExprNode) -> UnaryOp:
        if op not in UNARY_OPS:
            raise ValueError(f"{op} is not a unary operation")
        return self._add_node(UnaryOp(op=op, child=child))

    def binary(self, op: OpType, left: ExprNode, right: ExprNode) -> BinaryOp:
        if op not in BINARY_OPS:
            raise ValueError(f"{op} is not a binary operation")
        return self._add_node(BinaryOp(op=op, left=left, right=right))

    def set_output(self, node: ExprNode) -> None:
        self.output_node = node

    def evaluate(self, x: Union[Sequence[float], Mapping[int, float]]) -> float:
        """
        Run the computation on plain floats.

        Args:
            x: Variable values by position (list, tuple, numpy array) or
                by index (dict)

        Returns:
            Output value

        Raises:
            ValueError: No output node, or a math domain error
            OverflowError: exp or expm1 overflowed
            ZeroDivisionError: Division by zero
        """
        if self.output_node is None:
            raise ValueError("No output node set")
        if isinstance(x, Mapping):
            var_values = x
        else:
            var_values = {i: float(v) for i, v in enumerate(x)}
        return self.output_node.evaluate(var_values)

    def num_variables(self) -> int:
        return max(self.variables) + 1 if self.variables else 0

    def topological_order(self) -> List[ExprNode]:
        """Nodes reachable from the output, each after its children."""
        order: List[ExprNode] = []
        seen = set()
        stack = [(self.output_node, False)] if self.output_node else []
        while stack:
            node, expanded = stack.pop()
            if expanded:
                order.append(node)
                continue
            if node.node_id in seen:
                continue
            seen.add(node.node_id)
            stack.append((node, True))
            for child in reversed(node.children):
                if child.node_id not in seen:
                    stack.append((child, False))
        return order

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "nodes": [n.to_canonical() for n in self.nodes],
            "output_node_id": self.output_node.node_id if self.output_node else None,
            "num_variables": self.num_variables(),
        }

    @classmethod
    def from_callable(
        cls,
        func: Callable,
        num_vars: int,
        var_names: Optional[List[str]] = None
    ) -> 'ExpressionGraph':
        """
        Trace `func` called with `num_vars` TracedVar arguments.

        A function that ignores its inputs and returns a number gives a
        graph whose output is that constant.
        """
        graph = cls()
        args = [
            TracedVar(graph, graph.variable(i, var_names[i] if var_names else None))
            for i in range(num_vars)
        ]
        result = func(*args)
        if isinstance(result, TracedVar):
            graph.set_output(result.node)
        else:
            graph.set_output(graph.constant(result))
        return graph


class TracedVar:
    """Placeholder that records every operation applied to it."""

    def __init__(self, graph: ExpressionGraph, node: ExprNode):
        self.graph = graph
        self.node = node

    def _lift(self, other) -> 'TracedVar':
        if isinstance(other, TracedVar):
            return other
        return TracedVar(self.graph, self.graph.constant(other))

    def _apply(self, op: OpType, other=None, reflected: bool = False) -> 'TracedVar':
        if op in UNARY_OPS:
            return TracedVar(self.graph, self.graph.unary(op, self.node))
        left, right = self, self._lift(other)
        if reflected:
            left, right = right, left
        return TracedVar(self.graph, self.graph.binary(op, left.node, right.node))

    def __add__(self, other):
        return self._apply(OpType.ADD, other)

    def __radd__(self, other):
        return self._apply(OpType.ADD, other, reflected=True)

    def __sub__(self, other):
        return self._apply(OpType.SUB, other)

    def __rsub__(self, other):
        return self._apply(OpType.SUB, other, reflected=True)

    def __mul__(self, other):
        return self._apply(OpType.MUL, other)

    def __rmul__(self, other):
        return self._apply(OpType.MUL, other, reflected=True)

    def __truediv__(self, other):
        return self._apply(OpType.DIV, other)

    def __rtruediv__(self, other):
        return self._apply(OpType.DIV, other, reflected=True)

    def __pow__(self, other):
        # only squaring has an error rule
        if isinstance(other, int) and other == 2:
            return self._apply(OpType.SQUARE)
        raise ValueError(f"Only x**2 is supported, got exponent {other!r}")

    def __neg__(self):
        return self._apply(OpType.NEG)

    def __abs__(self):
        return self._apply(OpType.ABS)


def _traced(x, y=None) -> TracedVar:
    """The TracedVar among the arguments, used to reach the graph."""
    if isinstance(x, TracedVar):
        return x
    if isinstance(y, TracedVar):
        return y
    raise TypeError("At least one argument must be a traced variable")


def sqrt(x: TracedVar) -> TracedVar:
    return _traced(x)._apply(OpType.SQRT)


def square(x: TracedVar) -> TracedVar:
    return _traced(x)._apply(OpType.SQUARE)


def double(x: TracedVar) -> TracedVar:
    """2 * x as an exact scaling; `2 * x` traces a rounded product."""
    return _traced(x)._apply(OpType.DOUBLE)


def halve(x: TracedVar) -> TracedVar:
    """x / 2 as an exact scaling."""
    return _traced(x)._apply(OpType.HALVE)


def log(x: TracedVar) -> TracedVar:
    return _traced(x)._apply(OpType.LOG)


def exp(x: TracedVar) -> TracedVar:
    return _traced(x)._apply(OpType.EXP)


def log1p(x: TracedVar) -> TracedVar:
    return _traced(x)._apply(OpType.LOG1P)


def expm1(x: TracedVar) -> TracedVar:
    return _traced(x)._apply(OpType.EXPM1)


def fmin(x, y) -> TracedVar:
    """min(x, y); either argument may be a plain number."""
    t = _traced(x, y)
    return TracedVar(t.graph, t.graph.binary(OpType.MIN, t._lift(x).node, t._lift(y).node))


def fmax(x, y) -> TracedVar:
    t = _traced(x, y)
    return TracedVar(t.graph, t.graph.binary(OpType.MAX, t._lift(x).node, t._lift(y).node))
