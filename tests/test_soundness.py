"""
Tests for Soundness of the Error Bounds

Every derived bound must contain the exact result of the operation on
every point of the input intervals. These tests sample the input boxes
(Sobol points plus corners) across the whole domain of each operation.
"""

import math

import numpy as np
import pytest
from fperror.core.value import ANY, Valued, fl, make_float
from fperror.soundness import (
    OPERATIONS,
    Operation,
    SoundnessChecker,
    SoundnessConfig,
    random_inputs,
)


@pytest.fixture
def checker():
    """Checker with a modest sample budget."""
    return SoundnessChecker(config=SoundnessConfig(sobol_log2=5, seed=123))


UNARY = sorted(name for name, op in OPERATIONS.items() if op.arity == 1)
BINARY = sorted(name for name, op in OPERATIONS.items() if op.arity == 2)

# Boundary operands: zero, near sign changes, errors near 0 and near 1
BOUNDARY = [
    fl(0.0),
    fl(1.0),
    fl(-1.0),
    make_float(1.0, 1e-9),
    make_float(1.001, 1e-4),
    make_float(0.999, 1e-4),
    make_float(-0.999, 1e-4),
    make_float(-0.5, 0.9),
    make_float(2.0, 0.999),
    make_float(-2.0, 0.999),
    make_float(1e-6, 0.5),
    make_float(-1e-6, 0.5),
    make_float(80.0, 1e-3),
    make_float(-80.0, 1e-3),
]


class TestRandomSweep:
    """Randomized interval sampling over every operation."""

    @pytest.mark.parametrize("name", UNARY)
    def test_unary_sound(self, checker, name):
        for report in checker.run_sweep(60, [name]):
            assert report.sound, report.to_canonical()

    @pytest.mark.parametrize("name", BINARY)
    def test_binary_sound(self, checker, name):
        for report in checker.run_sweep(60, [name]):
            assert report.sound, report.to_canonical()

    def test_sweep_covers_valued_results(self, checker):
        """The sweep exercises real bounds, not only ANY."""
        reports = checker.run_sweep(40)
        assert sum(1 for r in reports if not r.trivial) > len(reports) // 2


class TestBoundaries:
    """Boundary operands for every operation."""

    @pytest.mark.parametrize("name", UNARY)
    def test_unary_boundaries(self, checker, name):
        for x in BOUNDARY:
            report = checker.check(name, x)
            assert report.sound, report.to_canonical()

    @pytest.mark.parametrize("name", BINARY)
    def test_binary_boundaries(self, checker, name):
        for x in BOUNDARY:
            for y in BOUNDARY:
                report = checker.check(name, x, y)
                assert report.sound, report.to_canonical()

    def test_near_cancellation(self, checker):
        """Nearly opposite operands with small errors."""
        x = make_float(1.0, 1e-6)
        y = make_float(-0.999, 1e-6)
        report = checker.check("add", x, y)
        assert not report.trivial
        assert report.sound


class TestChecker:
    """Test the checker itself."""

    def test_any_is_trivial(self, checker):
        report = checker.check("sqrt", fl(-4.0))
        assert report.trivial
        assert report.sound
        assert report.n_samples == 0

    def test_any_input_is_trivial(self, checker):
        report = checker.check("add", ANY, fl(1.0))
        assert report.trivial

    def test_samples_cover_corners(self, checker):
        x = make_float(2.0, 0.5)
        y = make_float(-4.0, 0.25)
        points = checker.sample([x, y])
        assert points.shape == (4 + 1 + 2 ** 5, 2)
        assert [1.0, -5.0] in points.tolist()
        assert [3.0, -3.0] in points.tolist()
        assert np.all(points[:, 0] >= x.lower) and np.all(points[:, 0] <= x.upper)

    def test_detects_unsound_rule(self, checker, monkeypatch):
        """A bound that ignores the input error is caught."""
        careless = Operation(
            "careless_sqrt", 1,
            lambda x, fmt: make_float(math.sqrt(x.value), 0.0),
            math.sqrt,
        )
        monkeypatch.setitem(OPERATIONS, "careless_sqrt", careless)
        report = checker.check("careless_sqrt", make_float(4.0, 0.1))
        assert not report.sound
        assert report.worst_excess > 0.01

    def test_unknown_operation(self, checker):
        with pytest.raises(ValueError):
            checker.check("cbrt", fl(8.0))

    def test_wrong_arity(self, checker):
        with pytest.raises(ValueError):
            checker.check("add", fl(1.0))

    def test_random_inputs_valid(self):
        rng = np.random.default_rng(0)
        inputs = random_inputs(rng, 500)
        assert all(isinstance(x, Valued) for x in inputs)
        assert any(x.value == 0 for x in inputs)
        assert any(x.error > 0.9 for x in inputs)
        assert any(x.value < 0 for x in inputs)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
