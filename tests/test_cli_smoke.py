"""CLI smoke tests.

Verify that the console entry point runs the lifecycle, prints the sample
prediction line, and maps lifecycle errors to a non-zero exit code.
Correctness of the individual stages is covered by the unit tests.
"""

import re
import subprocess
import sys
from pathlib import Path

from taxifare.cli import main

PROJECT_ROOT = Path(__file__).parent.parent


def run_module(args: list) -> subprocess.CompletedProcess:
    """Run `python -m taxifare` with PYTHONPATH set to src."""
    env = {"PYTHONPATH": str(PROJECT_ROOT / "src")}
    return subprocess.run(
        [sys.executable, "-m", "taxifare", *args],
        capture_output=True,
        text=True,
        env={**subprocess.os.environ, **env},
        cwd=str(PROJECT_ROOT),
        timeout=120,
    )


class TestMain:
    def test_runs_and_exits_zero(self, train_csv, test_csv, tmp_path, capsys):
        model_path = tmp_path / "fare.joblib"
        code = main([
            "--trainDataPath", str(train_csv),
            "--testDataPath", str(test_csv),
            "--modelPath", str(model_path),
        ])
        out = capsys.readouterr().out

        assert code == 0
        assert model_path.exists()
        assert f"The model is saved to {model_path}" in out
        assert re.search(r"Predicted fare: \d+\.\d{4}, actual fare: 15\.5", out)
        assert "R2 Score" in out
        assert "The metrics report is saved to" in out

    def test_kebab_case_options(self, train_csv, test_csv, tmp_path, capsys):
        code = main([
            "--train-data-path", str(train_csv),
            "--test-data-path", str(test_csv),
            "--model-path", str(tmp_path / "fare.joblib"),
            "--algorithm", "ridge",
        ])
        assert code == 0
        assert "Ridge" in capsys.readouterr().out

    def test_missing_training_file(self, test_csv, tmp_path, capsys):
        code = main([
            "--trainDataPath", str(tmp_path / "missing.csv"),
            "--testDataPath", str(test_csv),
            "--modelPath", str(tmp_path / "fare.joblib"),
        ])
        err = capsys.readouterr().err

        assert code == 1
        assert "SourceNotFound" in err

    def test_schema_mismatch(self, test_csv, tmp_path, capsys):
        bad = tmp_path / "bad.csv"
        bad.write_text("vendor_id,rate_code\nVTS,1\n")
        code = main([
            "--trainDataPath", str(bad),
            "--testDataPath", str(test_csv),
            "--modelPath", str(tmp_path / "fare.joblib"),
        ])
        assert code == 1
        assert "SchemaMismatch" in capsys.readouterr().err

    def test_infinite_training_value(self, train_csv, test_csv, tmp_path, capsys):
        bad = tmp_path / "inf.csv"
        lines = train_csv.read_text().splitlines()
        fields = lines[1].split(",")
        fields[4] = "inf"
        lines[1] = ",".join(fields)
        bad.write_text("\n".join(lines) + "\n")
        code = main([
            "--trainDataPath", str(bad),
            "--testDataPath", str(test_csv),
            "--modelPath", str(tmp_path / "fare.joblib"),
        ])
        assert code == 1
        assert "error: SchemaMismatch" in capsys.readouterr().err


class TestModuleEntryPoint:
    def test_help(self):
        result = run_module(["--help"])
        assert result.returncode == 0
        assert "usage" in result.stdout.lower()
        assert "--trainDataPath" in result.stdout

    def test_failure_exit_code(self, tmp_path):
        result = run_module([
            "--trainDataPath", str(tmp_path / "missing.csv"),
            "--modelPath", str(tmp_path / "fare.joblib"),
        ])
        assert result.returncode == 1
        assert "error: SourceNotFound" in result.stderr
