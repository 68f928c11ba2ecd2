"""
Tests for the command-line interface
"""

import json

import pytest
from fperror.cli import main, FUNCTIONS


class TestEval:
    """Test the eval command."""

    def test_hypot(self, capsys):
        assert main(["eval", "hypot", "--values", "3", "4"]) == 0
        out = capsys.readouterr().out
        assert "Value: 5" in out
        assert "Relative error bound" in out

    def test_wrong_value_count(self, capsys):
        assert main(["eval", "hypot", "--values", "3"]) == 1
        assert "takes 2 values" in capsys.readouterr().out

    def test_wrong_error_count(self, capsys):
        rc = main(["eval", "norm3", "-v", "1", "2", "3", "-e", "0.1", "0.2"])
        assert rc == 1

    def test_cancellation_reports_any(self, capsys):
        rc = main(["eval", "relative_change", "-v", "1", "1", "-e", "1e-6"])
        assert rc == 0
        assert "ANY" in capsys.readouterr().out

    def test_zero_denominator(self, capsys):
        """A division by zero reports ANY instead of failing."""
        assert main(["eval", "relative_change", "-v", "1", "0"]) == 0
        out = capsys.readouterr().out
        assert "Result: ANY" in out
        assert "Float evaluation: undefined" in out

    def test_overflow(self, capsys):
        assert main(["eval", "softplus", "-v", "1000"]) == 0
        out = capsys.readouterr().out
        assert "Result: ANY" in out
        assert "Float evaluation: undefined" in out

    def test_undefined_point_in_json(self, tmp_path):
        path = tmp_path / "result.json"
        assert main(["eval", "logistic", "-v", "-1000", "-o", str(path)]) == 0
        data = json.loads(path.read_text())
        assert data["result"] == {"type": "any"}
        assert data["float_evaluation"] is None

    def test_json_output(self, tmp_path):
        path = tmp_path / "result.json"
        rc = main(["eval", "logsumexp2", "-v", "1", "2", "-e", "0.01",
                   "--format", "double", "--output", str(path)])
        assert rc == 0
        data = json.loads(path.read_text())
        assert data["function"] == "logsumexp2"
        assert data["format"]["name"] == "double"
        assert data["errors"] == [0.01, 0.01]
        assert "type" in data["result"]

    def test_every_function_runs(self, capsys):
        for name, build in FUNCTIONS.items():
            n = build().num_variables()
            values = [str(0.5 + i) for i in range(n)]
            assert main(["eval", name, "-v"] + values) == 0


class TestOtherCommands:
    """Test check, formats and version."""

    def test_check_small_sweep(self, capsys, tmp_path):
        path = tmp_path / "sweep.json"
        rc = main(["check", "-n", "3", "--sobol-log2", "3", "-o", str(path)])
        assert rc == 0
        assert "sound" in capsys.readouterr().out
        reports = json.loads(path.read_text())
        assert all(r["n_violations"] == 0 for r in reports)

    def test_formats(self, capsys):
        assert main(["formats"]) == 0
        out = capsys.readouterr().out
        assert "single" in out
        assert "2^-24" in out

    def test_version(self, capsys):
        assert main(["version"]) == 0
        assert "fperror" in capsys.readouterr().out

    def test_no_command(self, capsys):
        assert main([]) == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
