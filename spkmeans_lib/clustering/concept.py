import numpy as np

from spkmeans_lib.errors import DegenerateClusterError
from spkmeans_lib.utils.vectors import vec_norm, vec_normalize, vec_scale, vec_sum


def compute_concept(partition_vectors, wc:int = None) -> np.ndarray:
    """
    Concept vector of a partition: the sum of its member vectors, scaled by
    1/wc, then normalized to unit length.

    Members are summed in the order they are given (ascending document index
    for engine partitions). Raises DegenerateClusterError when the partition
    is empty or its members sum to the zero vector.
    """
    if len(partition_vectors) == 0 :
        raise DegenerateClusterError(partitions=[])
    cv = vec_sum(partition_vectors, wc=wc)
    wc = cv.shape[0]
    if vec_norm(cv) == 0 :
        raise DegenerateClusterError(partitions=[])
    # Normalization cancels the 1/wc factor, kept to match the reference results
    vec_scale(cv, 1.0 / wc)
    return vec_normalize(cv)


def compute_concepts(documents:np.ndarray, partitions, previous:np.ndarray = None) -> np.ndarray:
    """
    One concept vector per partition, shape (k, wc).

    When `previous` concepts are given, an empty partition keeps its previous
    concept vector instead of raising.
    """
    wc = documents.shape[1]
    concepts = np.empty((len(partitions), wc), dtype=np.float64)
    empty = []
    for i, members in enumerate(partitions):
        if len(members) == 0 and previous is not None :
            concepts[i] = previous[i]
            continue
        try :
            concepts[i] = compute_concept(documents[members], wc=wc)
        except DegenerateClusterError :
            empty.append(i)
    if empty :
        raise DegenerateClusterError(partitions=empty)
    return concepts
