import numpy as np
import pandas as pd

from spkmeans_lib.constants import DEFAULT_N_WORDS
from spkmeans_lib.utils.clustering import normalized_entropy, partition_quality
from spkmeans_lib.utils.vectors import vec_sum


def top_words(documents:np.ndarray, partitions, words:list = None, n_words:int = DEFAULT_N_WORDS) -> pd.DataFrame:
    """
    Top words of each partition, ranked by the summed weight of the word over
    the partition's documents. Equal weights rank the higher word index first.

    Args:
        documents: array of shape (dc, wc) - normalized document vectors
        partitions: k arrays of document indices
        words: vocabulary of length wc, word indices are used when None
        n_words: number of words per partition, capped at wc

    Returns:
        pd.DataFrame with columns partition, rank, word_id, word, weight
    """
    wc = documents.shape[1]
    n_words = min(n_words, wc)
    rows = []
    for i, members in enumerate(partitions):
        weights = vec_sum(documents[members], wc=wc)
        word_ids = np.arange(wc)
        # lexsort: last key is the primary one
        order = np.lexsort((-word_ids, -weights))[:n_words]
        for rank, w in enumerate(order):
            rows.append({'partition': i,
                         'rank': rank + 1,
                         'word_id': int(w),
                         'word': words[w] if words is not None else str(w),
                         'weight': float(weights[w])})
    return pd.DataFrame(rows, columns=['partition', 'rank', 'word_id', 'word', 'weight'])


def display_results(documents:np.ndarray, partitions, words:list = None, n_words:int = DEFAULT_N_WORDS):
    df = top_words(documents, partitions, words, n_words)
    for i in range(len(partitions)):
        print(f"Partition #{i + 1}:")
        for word in df[df['partition'] == i]['word']:
            print(f"   {word}")
    return df


def cluster_summary(state, documents:np.ndarray) -> pd.DataFrame:
    """Size, share and quality of each partition of a ClusteringState."""
    sizes = np.array(state.sizes)
    df = pd.DataFrame({
        'partition': range(state.k),
        'size': sizes,
        'share': sizes / sizes.sum(),
        'quality': [partition_quality(documents[p], c) for p, c in zip(state.partitions, state.concepts)],
    }).set_index('partition')
    df.attrs['total_quality'] = state.quality
    df.attrs['iteration'] = state.iteration
    df.attrs['normalized_entropy'] = normalized_entropy(state.labels, state.k)
    return df
