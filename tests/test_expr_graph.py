"""
Tests for Expression Graph
"""

import math

import numpy as np
import pytest
from fperror.expr_graph import (
    ExpressionGraph,
    OpType,
    TracedVar,
    sqrt,
    log1p,
    exp,
    fmax,
    fmin,
    double,
    halve,
)


class TestExpressionGraph:
    """Test expression graph creation and evaluation."""

    def test_constant(self):
        """Test constant node."""
        g = ExpressionGraph()
        c = g.constant(5.0)
        g.set_output(c)
        assert g.evaluate(np.array([1.0, 2.0])) == 5.0

    def test_variable(self):
        """Test variable node."""
        g = ExpressionGraph()
        x = g.variable(0)
        g.set_output(x)
        assert g.evaluate([3.0]) == 3.0

    def test_variable_reused(self):
        """Variables are created once per index."""
        g = ExpressionGraph()
        assert g.variable(0) is g.variable(0)
        assert g.num_variables() == 1

    def test_addition(self):
        """Test addition operation."""
        g = ExpressionGraph()
        s = g.binary(OpType.ADD, g.variable(0), g.variable(1))
        g.set_output(s)
        assert g.evaluate(np.array([2.0, 3.0])) == 5.0

    def test_log_family(self):
        """Point evaluation of log1p and expm1."""
        g = ExpressionGraph()
        x = g.variable(0)
        g.set_output(g.unary(OpType.EXPM1, g.unary(OpType.LOG1P, x)))
        assert g.evaluate([0.25]) == pytest.approx(0.25)

    def test_op_kind_checked(self):
        """Unary and binary constructors reject the other kind."""
        g = ExpressionGraph()
        x = g.variable(0)
        with pytest.raises(ValueError):
            g.unary(OpType.ADD, x)
        with pytest.raises(ValueError):
            g.binary(OpType.SQRT, x, x)

    def test_no_output(self):
        with pytest.raises(ValueError):
            ExpressionGraph().evaluate([1.0])

    def test_topological_order(self):
        """Leaves come before the nodes using them."""
        g = ExpressionGraph()
        x = g.variable(0)
        sq = g.unary(OpType.SQUARE, x)
        out = g.binary(OpType.MUL, sq, x)
        g.set_output(out)
        order = [n.node_id for n in g.topological_order()]
        assert order.index(x.node_id) < order.index(sq.node_id) < order.index(out.node_id)

    def test_canonical(self):
        g = ExpressionGraph()
        g.set_output(g.unary(OpType.SQRT, g.variable(0)))
        canon = g.to_canonical()
        assert canon["num_variables"] == 1
        assert canon["nodes"][1]["op"] == "sqrt"


class TestTracedVar:
    """Test traced variable for automatic graph construction."""

    def test_traced_quadratic(self):
        """Test traced variable quadratic."""
        g = ExpressionGraph()
        x = TracedVar(g, g.variable(0))
        z = x * x + 2 * x + 1  # (x+1)^2
        g.set_output(z.node)
        assert abs(g.evaluate(np.array([3.0])) - 16.0) < 1e-10

    def test_from_callable(self):
        """Tracing a function with math helpers."""
        g = ExpressionGraph.from_callable(lambda x, y: sqrt(x ** 2 + y ** 2), 2)
        assert g.evaluate([3.0, 4.0]) == 5.0
        assert g.num_variables() == 2

    def test_reflected_operators(self):
        g = ExpressionGraph.from_callable(lambda x: 1 / (1 - x), 1)
        assert g.evaluate([0.5]) == 2.0

    def test_softplus(self):
        g = ExpressionGraph.from_callable(lambda x: log1p(exp(x)), 1)
        assert g.evaluate([0.0]) == pytest.approx(math.log(2.0))

    def test_max(self):
        g = ExpressionGraph.from_callable(lambda x, y: fmax(x, y), 2)
        assert g.evaluate([1.0, 2.0]) == 2.0

    def test_exact_scaling(self):
        """double and halve record their own ops, not MUL or DIV."""
        g = ExpressionGraph.from_callable(lambda x: halve(double(x)) + 2 * x, 1)
        ops = [n["op"] for n in g.to_canonical()["nodes"] if n["type"] != "variable"
               and n["type"] != "constant"]
        assert ops == ["double", "halve", "mul", "add"]
        assert g.evaluate([1.5]) == 4.5

    def test_min_with_constant_first(self):
        g = ExpressionGraph.from_callable(lambda x: fmin(0.0, x), 1)
        assert g.evaluate([2.0]) == 0.0
        assert g.evaluate([-2.0]) == -2.0

    def test_helpers_need_a_traced_argument(self):
        with pytest.raises(TypeError):
            fmin(1.0, 2.0)

    def test_unsupported_power(self):
        with pytest.raises(ValueError):
            ExpressionGraph.from_callable(lambda x: x ** 3, 1)

    def test_constant_result(self):
        g = ExpressionGraph.from_callable(lambda x: 7.0, 1)
        assert g.evaluate([1.0]) == 7.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
