from multiprocessing import cpu_count
from multiprocessing.pool import ThreadPool

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity as pairwise_cosine_similarity

from spkmeans_lib.errors import ConfigurationError
from spkmeans_lib.utils.vectors import vec_dot, vec_norm


def cosine_similarity(dv, cv) -> float:
    return vec_dot(dv, cv) / (vec_norm(dv) * vec_norm(cv))


def assign(document, concepts) -> int:
    """
    Index of the concept vector most similar to a single `document`.

    Concepts are scanned in index order and only a strictly greater similarity
    replaces the current best, so ties go to the lowest index. This is the
    reference rule that `assign_all` vectorizes over a whole matrix.
    """
    c_indx = 0
    c_val = cosine_similarity(document, concepts[0])
    for j in range(1, len(concepts)):
        new_c_val = cosine_similarity(document, concepts[j])
        if new_c_val > c_val :
            c_val = new_c_val
            c_indx = j
    return c_indx


def resolve_n_jobs(n_jobs:int = None) -> int:
    if n_jobs is None :
        return 1
    if isinstance(n_jobs, bool) or not isinstance(n_jobs, (int, np.integer)) :
        raise ConfigurationError(f"n_jobs must be an integer, got {n_jobs!r}")
    if n_jobs == -1 :
        return max(1, cpu_count() - 1)  # Leave one CPU free
    if n_jobs < 1 :
        raise ConfigurationError(f"n_jobs must be >= 1 or -1, got {n_jobs}")
    return int(n_jobs)


def assign_all(documents:np.ndarray, concepts:np.ndarray, n_jobs:int = 1) -> np.ndarray:
    """
    Label of every document, the rule of `assign` applied row by row.

    Each document only depends on the fixed concept vectors, so documents are
    split into contiguous chunks and, with n_jobs > 1, processed on a thread
    pool. Chunks are concatenated in document order: the labels do not depend
    on n_jobs.

    Args:
        documents: array of shape (dc, wc)
        concepts: array of shape (k, wc)
        n_jobs: number of worker threads, -1 for all CPUs but one

    Returns:
        np.ndarray of shape (dc,) - partition index of each document
    """
    n_jobs = resolve_n_jobs(n_jobs)
    dc = documents.shape[0]
    if n_jobs == 1 or dc < 2 :
        return _assign_chunk((documents, concepts))

    bounds = np.array_split(np.arange(dc), min(n_jobs, dc))
    args = [(documents[idx[0]:idx[-1] + 1], concepts) for idx in bounds]
    with ThreadPool(processes=len(args)) as pool:
        results = list(pool.imap(_assign_chunk, args))
    return np.concatenate(results)


def _assign_chunk(args) -> np.ndarray:
    documents, concepts = args
    # (n_docs, k) ; argmax keeps the first maximum
    similarities = pairwise_cosine_similarity(documents, concepts)
    return np.argmax(similarities, axis=1).astype(np.intp)
