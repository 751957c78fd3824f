"""
Tests for the command-line interface.
"""

import json
import subprocess
import sys
import pytest
from unittest.mock import patch

from shaftalign.cli.main import main


class TestCLIEntryPoints:
    """Test that the CLI entry point defined in pyproject.toml is importable."""

    def test_entry_point_importable(self):
        assert callable(main)

    def test_entry_point_via_subprocess(self):
        """Test entry point works when invoked as module."""
        result = subprocess.run(
            [sys.executable, "-m", "shaftalign.cli.main", "--help"],
            capture_output=True,
            text=True
        )
        assert result.returncode == 0
        assert "--apply-required" in result.stdout
        assert "How to remove angular misalignment?" in result.stdout


class TestCLIReports:

    def test_summary_from_flags(self, capsys):
        assert main(["--offset", "-0.5", "--angle", "0.1"]) == 0
        out = capsys.readouterr().out
        assert "Status: ALIGNMENT REQUIRED" in out
        assert "Rear foot:         +1.200 mm (add)" in out
        assert "Front foot:        +0.700 mm (add)" in out

    def test_defaults_in_tolerance(self, capsys):
        assert main([]) == 0
        assert "Status: IN TOLERANCE" in capsys.readouterr().out

    def test_session_file_json(self, session_file, capsys):
        assert main([str(session_file), "--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["measurements"]["initial_offset_mm"] == -0.5
        assert data["status"] == "needs_alignment"
        assert "validation" in data

    def test_flags_override_file(self, session_file, capsys):
        assert main([str(session_file), "--offset", "0.0", "--angle", "0.0", "--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["status"] == "in_tolerance"

    def test_apply_required(self, session_file, capsys):
        assert main([str(session_file), "--apply-required", "--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["status"] == "in_tolerance"
        assert data["correction"]["rear_shim_mm"] == pytest.approx(1.2)

    def test_explicit_shims(self, capsys):
        assert main(["--rear-shim", "1.0", "--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["result"]["vertical_offset_mm"] == pytest.approx(-0.4)

    def test_markdown(self, capsys):
        assert main(["--example", "--format", "markdown"]) == 0
        assert "# Shaft Alignment Report" in capsys.readouterr().out

    def test_zero_span_fails(self, capsys):
        assert main(["--motor-length", "0"]) == 1
        assert "DEGENERATE_GEOMETRY" in capsys.readouterr().err

    def test_missing_file_fails(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.json")]) == 1
        assert "Error loading session" in capsys.readouterr().err


class TestCLIOutputs:

    def test_save_json(self, tmp_path):
        out_path = tmp_path / "saved.json"
        assert main(["--offset", "0.3", "--save-json", str(out_path)]) == 0
        data = json.loads(out_path.read_text())
        assert data["measurements"]["initial_offset_mm"] == 0.3

    def test_render(self, tmp_path):
        import matplotlib
        matplotlib.use("Agg")

        out_path = tmp_path / "schematic.svg"
        assert main(["--example", "--render", str(out_path)]) == 0
        assert "<svg" in out_path.read_text()

    def test_ask(self, capsys):
        with patch("shaftalign.advice.get_alignment_advice", return_value="Shim the rear foot.") as mock_advice:
            assert main(["--offset", "-0.5", "--ask", ""]) == 0
        assert "Shim the rear foot." in capsys.readouterr().out
        assert mock_advice.call_args.args[2] == ""

    def test_ask_heading_flags_attention(self, capsys):
        with patch("shaftalign.advice.get_alignment_advice", return_value="ok"):
            assert main(["--offset", "-0.5", "--ask", ""]) == 0
        assert "Advice (attention required):" in capsys.readouterr().out

    def test_ask_heading_in_tolerance(self, capsys):
        with patch("shaftalign.advice.get_alignment_advice", return_value="ok"):
            assert main(["--ask", "Anything to check?"]) == 0
        out = capsys.readouterr().out
        assert "\nAdvice:\n" in out
        assert "attention required" not in out


class TestCLIHints:

    def test_out_of_tolerance_hint(self, capsys):
        assert main(["--offset", "-0.5"]) == 0
        assert "add --ask" in capsys.readouterr().out

    def test_no_hint_in_tolerance(self, capsys):
        assert main([]) == 0
        assert "add --ask" not in capsys.readouterr().out


class TestCLIOutputErrors:
    """Failures while writing outputs return 1 with a message, no traceback."""

    def test_unsupported_render_format(self, tmp_path, capsys):
        import matplotlib
        matplotlib.use("Agg")

        assert main(["--offset", "-0.5", "--render", str(tmp_path / "schematic.badext")]) == 1
        assert "Error writing schematic" in capsys.readouterr().err

    def test_render_into_missing_directory(self, tmp_path, capsys):
        import matplotlib
        matplotlib.use("Agg")

        assert main(["--render", str(tmp_path / "nope" / "schematic.png")]) == 1
        assert "Error writing schematic" in capsys.readouterr().err

    def test_save_json_into_missing_directory(self, tmp_path, capsys):
        assert main(["--save-json", str(tmp_path / "nope" / "saved.json")]) == 1
        assert "Error saving session" in capsys.readouterr().err
