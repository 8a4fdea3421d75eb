"""
Immutable snapshot of the clustering state.

A new ClusteringState is built at each iteration boundary of the engine; its
arrays are flagged read-only so a state handed to the caller (or attached to an
error) cannot be altered by a later iteration.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


def _frozen(array, dtype) -> np.ndarray:
    array = np.array(array, dtype=dtype)
    array.setflags(write=False)
    return array


def partitions_from_labels(labels, k:int) -> tuple:
    """Brand-new partitions (sorted document indices) from a label vector."""
    labels = np.asarray(labels)
    return tuple(np.flatnonzero(labels == i) for i in range(k))


@dataclass(frozen=True)
class ClusteringState:

    k: int
    partitions: tuple            # k arrays of document indices
    concepts: np.ndarray         # (k, wc), one unit concept vector per partition
    quality: float
    iteration: int               # 0 for the initial partitioning

    def __post_init__(self):
        partitions = tuple(_frozen(p, np.intp) for p in self.partitions)
        if len(partitions) != self.k :
            raise ValueError(f"Expected {self.k} partitions, got {len(partitions)}")
        object.__setattr__(self, 'partitions', partitions)
        object.__setattr__(self, 'concepts', _frozen(self.concepts, np.float64))
        object.__setattr__(self, 'quality', float(self.quality))

    @property
    def dc(self) -> int:
        return int(sum(p.shape[0] for p in self.partitions))

    @property
    def sizes(self) -> list[int]:
        return [int(p.shape[0]) for p in self.partitions]

    @property
    def labels(self) -> np.ndarray:
        labels = np.empty(self.dc, dtype=np.intp)
        for i, members in enumerate(self.partitions):
            labels[members] = i
        return labels

    def same_partitioning(self, other:ClusteringState) -> bool:
        return self.k == other.k and all(
            np.array_equal(a, b) for a, b in zip(self.partitions, other.partitions)
        )

    def to_dict(self) -> dict:
        return {
            "k": self.k,
            "partitions": [p.tolist() for p in self.partitions],
            "concepts": self.concepts.tolist(),
            "quality": self.quality,
            "iteration": self.iteration,
        }
