"""Smoke tests for the stand-alone experiment scripts."""

import importlib.util
from pathlib import Path

import pytest

from blind_birthday.analysis.benchmark import run_benchmark

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "experiment" / "width_scaling.py"


@pytest.fixture
def width_scaling():
    spec = importlib.util.spec_from_file_location("width_scaling", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestWidthScaling:
    def test_widths_accepted_by_benchmark(self, width_scaling):
        for width in width_scaling.WIDTHS:
            records = run_benchmark([width], 1, seed=width_scaling.SEED)
            assert records[0].digest_bits == width

    def test_main_prints_report(self, width_scaling, monkeypatch, capsys):
        monkeypatch.setattr(width_scaling, "WIDTHS", [8, 16])
        monkeypatch.setattr(width_scaling, "N_TRIALS", 2)
        width_scaling.main()
        out = capsys.readouterr().out
        assert "TEST 1" in out
        assert "TEST 2" in out
        assert "Pearson correlation" in out
