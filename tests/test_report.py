"""Tests for spkmeans_lib.utils.report and spkmeans_lib.utils.plots."""

import matplotlib.pyplot as plt
import numpy as np
import pytest

from spkmeans_lib.clustering.sphere import SphericalKMeans
from spkmeans_lib.utils.plots import plot_clustering
from spkmeans_lib.utils.report import cluster_summary, display_results, top_words


@pytest.fixture
def fitted(toy_matrix):
    return SphericalKMeans(n_clusters=2).fit(toy_matrix)


class TestTopWords:
    def test_ranking_and_ties(self, fitted):
        df = top_words(fitted.documents_, fitted.partitions_, ["w0", "w1", "w2"], n_words=3)
        # Equal weights: higher word index first
        assert df[df["partition"] == 0]["word"].tolist() == ["w0", "w2", "w1"]
        assert df[df["partition"] == 1]["word"].tolist() == ["w2", "w1", "w0"]
        assert df[df["partition"] == 0]["weight"].iloc[0] == pytest.approx(2.0)

    def test_n_words_capped_at_wc(self, fitted):
        df = top_words(fitted.documents_, fitted.partitions_, n_words=10)
        assert df.shape[0] == 6
        assert df["rank"].max() == 3

    def test_word_indices_without_vocabulary(self, fitted):
        df = top_words(fitted.documents_, fitted.partitions_, n_words=1)
        assert df["word"].tolist() == ["0", "2"]

    def test_display_results(self, fitted, capsys):
        display_results(fitted.documents_, fitted.partitions_, ["apple", "banana", "cherry"], n_words=1)
        out = capsys.readouterr().out
        assert out == "Partition #1:\n   apple\nPartition #2:\n   cherry\n"


class TestClusterSummary:
    def test_summary(self, fitted):
        df = cluster_summary(fitted.state_, fitted.documents_)
        assert df["size"].tolist() == [2, 2]
        assert df["quality"].sum() == pytest.approx(fitted.quality_)
        assert df.attrs["iteration"] == 1
        assert df.attrs["normalized_entropy"] == pytest.approx(1.0)


class TestPlots:
    def test_plot_clustering(self, fitted):
        axs = plot_clustering(fitted, title="toy")
        assert axs[0].get_title() == "Partition population histogram"
        assert axs[1].get_title() == "Quality after 1 iterations"
        plt.close("all")
