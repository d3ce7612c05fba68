"""Tests for the matplotlib plot suite."""

import os

import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pytest

from blind_birthday.analysis.metrics import MetricExtractor
from blind_birthday.utils.types import ProgressEvent, TrialRecord
from blind_birthday.visualization.plots import PlotSuite


@pytest.fixture
def tmp_save_dir(tmp_path):
    return str(tmp_path)


@pytest.fixture
def plot_suite(tmp_save_dir):
    return PlotSuite(save_dir=tmp_save_dir)


@pytest.fixture
def sample_events():
    return [
        ProgressEvent(closest_match=c, tree_size=2**c, queries=c * 2**c)
        for c in range(1, 17)
    ]


@pytest.fixture
def sample_report():
    records = [
        TrialRecord(digest_bits=w, tree_size=2 ** (w // 2) + i, queries=w * 2 ** (w // 2) + i)
        for w in (8, 16, 24)
        for i in range(3)
    ]
    return MetricExtractor(records).full_report()


class TestProgressTimeline:
    def test_returns_figure(self, plot_suite, sample_events):
        fig = plot_suite.progress_timeline(sample_events, digest_bits=16, save=False)
        assert isinstance(fig, plt.Figure)

    def test_empty_events(self, plot_suite):
        fig = plot_suite.progress_timeline([], save=False)
        assert isinstance(fig, plt.Figure)

    def test_saves_file(self, plot_suite, sample_events, tmp_save_dir):
        plot_suite.progress_timeline(sample_events, save=True)
        assert os.path.exists(os.path.join(tmp_save_dir, "bb_progress.png"))


class TestDepthHistogram:
    def test_returns_figure(self, plot_suite):
        fig = plot_suite.depth_histogram(np.array([1, 2, 4, 7, 3, 1]), save=False)
        assert isinstance(fig, plt.Figure)

    def test_saves_file(self, plot_suite, tmp_save_dir):
        plot_suite.depth_histogram(np.array([1, 1]), save=True)
        assert os.path.exists(os.path.join(tmp_save_dir, "bb_depth_histogram.png"))


class TestQueryScaling:
    def test_returns_figure(self, plot_suite, sample_report):
        fig = plot_suite.query_scaling(sample_report, save=False)
        assert isinstance(fig, plt.Figure)

    def test_empty_report(self, plot_suite):
        fig = plot_suite.query_scaling({}, save=False)
        assert isinstance(fig, plt.Figure)

    def test_saves_file(self, plot_suite, sample_report, tmp_save_dir):
        plot_suite.query_scaling(sample_report, save=True)
        assert os.path.exists(os.path.join(tmp_save_dir, "bb_query_scaling.png"))
