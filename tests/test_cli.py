"""
Tests for bin/layer_tool.py
"""

import importlib.util
import json
from pathlib import Path

import pytest

from codelayers.core import load_layer, save_layer

TOOL_PATH = Path(__file__).resolve().parent.parent / "bin" / "layer_tool.py"


@pytest.fixture(scope="module")
def layer_tool():
    spec = importlib.util.spec_from_file_location("layer_tool", TOOL_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestLayerTool:

    def test_stats_json(self, layer_tool, layer_file, capsys):
        assert layer_tool.main(["stats", str(layer_file), "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["lines"] == {"dead": 4, "dead_file": 0}
        assert data["files"] == {"dead": 2, "dead_file": 0}

    def test_stats_display(self, layer_tool, layer_file, capsys):
        assert layer_tool.main(["stats", str(layer_file)]) == 0
        assert "Layer: deadcode" in capsys.readouterr().out

    def test_filter(self, layer_tool, layer_file, temp_dir):
        out = temp_dir / "src_only.json"
        assert layer_tool.main(["filter", str(layer_file), "--prefix", "src/", "-o", str(out)]) == 0
        assert load_layer(out).filenames() == ("src/a.py",)

    def test_convert(self, layer_tool, layer_file, deadcode_layer, temp_dir):
        out = temp_dir / "deadcode.layer"
        assert layer_tool.main(["convert", str(layer_file), str(out)]) == 0
        assert load_layer(out) == deadcode_layer

    def test_index(self, layer_tool, layer_file, coverage_layer, temp_dir, capsys):
        coverage = save_layer(coverage_layer, temp_dir / "coverage.json")
        code = layer_tool.main([
            "index", str(layer_file), coverage, "--root", "/repo", "--inactive", "coverage",
        ])
        assert code == 0
        out = capsys.readouterr().out
        assert "/repo/src/a.py" in out
        assert "inactive" in out

    def test_chart(self, layer_tool, layer_file, temp_dir):
        out = temp_dir / "chart.png"
        assert layer_tool.main(["chart", str(layer_file), "-o", str(out)]) == 0
        assert out.read_bytes().startswith(b"\x89PNG")

    def test_decode_error_exit_code(self, layer_tool, temp_dir, capsys):
        bad = temp_dir / "bad.json"
        bad.write_text('{"files": [], "kinds": [], "extra": 1}')

        assert layer_tool.main(["stats", str(bad)]) == 1
        assert "unexpected field 'extra'" in capsys.readouterr().err

    def test_lenient_flag(self, layer_tool, temp_dir):
        bad = temp_dir / "extra.json"
        bad.write_text('{"files": [], "kinds": [], "extra": 1}')
        assert layer_tool.main(["--lenient", "stats", str(bad), "--json"]) == 0

    def test_missing_file_exit_code(self, layer_tool, temp_dir):
        assert layer_tool.main(["stats", str(temp_dir / "missing.json")]) == 1

    def test_unknown_log_level_exit_code(self, layer_tool, layer_file, monkeypatch, capsys):
        monkeypatch.setenv("CODELAYERS_LOG_LEVEL", "LOUD")
        assert layer_tool.main(["stats", str(layer_file), "--json"]) == 1
        assert "Unknown log level: LOUD" in capsys.readouterr().err

    def test_verbose_overrides_log_level(self, layer_tool, layer_file, monkeypatch):
        monkeypatch.setenv("CODELAYERS_LOG_LEVEL", "LOUD")
        assert layer_tool.main(["-v", "stats", str(layer_file), "--json"]) == 0
