import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest


@pytest.fixture
def toy_matrix():
    # Already unit vectors: two identical documents, then two orthogonal ones
    return np.array([[1.0, 0.0, 0.0],
                     [1.0, 0.0, 0.0],
                     [0.0, 1.0, 0.0],
                     [0.0, 0.0, 1.0]])


@pytest.fixture
def mixed_matrix():
    # Topics A = word 0 and B = word 1, interleaved so the contiguous split is wrong
    a, b = [1.0, 0.0], [0.0, 1.0]
    return np.array([a, a, b, a, b, b])


@pytest.fixture
def doc_file(tmp_path):
    path = tmp_path / "data"
    path.write_text("4\n3\n5\n"
                    "1 1 2\n"
                    "2 1 1\n"
                    "3 2 3\n"
                    "4 3 1\n"
                    "this line is skipped\n"
                    "4 3 4\n")
    return path


@pytest.fixture
def vocabulary_file(tmp_path):
    path = tmp_path / "vocabulary"
    path.write_text("apple\nbanana\ncherry\n")
    return path
