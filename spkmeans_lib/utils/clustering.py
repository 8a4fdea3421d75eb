import numpy as np
from scipy.stats import entropy

from spkmeans_lib.utils.vectors import vec_dot, vec_sum


def partition_quality(partition_vectors, concept:np.ndarray) -> float:
    """
    Quality of a single partition: dot product of the sum of its members
    against its concept vector.

    Args:
        partition_vectors: array-like of shape (p_size, wc) - member documents
        concept: array of shape (wc,) - concept vector of the partition

    Returns:
        float: 0 for an empty partition
    """
    sum_p = vec_sum(partition_vectors, wc=concept.shape[0])
    return vec_dot(sum_p, concept)


def total_quality(documents:np.ndarray, partitions, concepts:np.ndarray) -> float:
    """
    Sum of the partition qualities. With unit-length documents and concepts
    computed as normalized member sums, this is the sum of within-cluster
    cosine similarities.
    """
    quality = 0.0
    for members, concept in zip(partitions, concepts):
        quality += partition_quality(documents[members], concept)
    return quality


def normalized_entropy(labels:np.array, k:int = None):
    # Balance of the partition sizes: 1 for equal sizes, 0 when all documents share one partition
    labels = np.asarray(labels, dtype=int)
    if k is None :
        k = int(labels.max()) + 1 if labels.size else 0
    if k < 2 or labels.size == 0 :
        return 0.0
    counts = np.bincount(labels, minlength=k)
    freq = counts / counts.sum()
    return float(entropy(freq) / np.log(k))
