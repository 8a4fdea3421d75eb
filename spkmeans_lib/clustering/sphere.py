import time
import warnings

import numpy as np
from sklearn.exceptions import ConvergenceWarning, NotFittedError

from spkmeans_lib.clustering.concept import compute_concepts
from spkmeans_lib.clustering.similarity import assign_all, resolve_n_jobs
from spkmeans_lib.clustering.state import ClusteringState, partitions_from_labels
from spkmeans_lib.constants import (DEFAULT_EMPTY_CLUSTER, DEFAULT_K, DEFAULT_MAX_ITER,
                                    DEFAULT_N_JOBS, EMPTY_CLUSTER_POLICIES, Q_THRESHOLD)
from spkmeans_lib.errors import (ClusteringCancelledError, ConfigurationError,
                                 DegenerateClusterError, InvalidDocumentMatrixError,
                                 NonConvergenceError)
from spkmeans_lib.preprocessing.preprocessing import check_document_matrix, txn_scheme
from spkmeans_lib.utils.clustering import total_quality


def contiguous_partitions(dc:int, k:int) -> tuple:
    """
    First arbitrary partitioning: k contiguous blocks of dc // k documents,
    the last block absorbing the remainder.
    """
    split = dc // k
    partitions = []
    for i in range(k):
        base = i * split
        top = dc if i == k - 1 else base + split
        partitions.append(np.arange(base, top, dtype=np.intp))
    return tuple(partitions)


class SphericalKMeans :
    """
    Spherical k-means on a document-term matrix.

    Documents are normalized to unit length, split into k contiguous
    partitions, then iteratively reassigned to the partition whose concept
    vector has the highest cosine similarity until the quality improvement
    drops to `threshold` or below.

    Args:
        n_clusters: number of partitions k, 1 <= k <= number of documents
        threshold: convergence threshold on the quality improvement
        max_iter: optional cap on refinement rounds, None for no cap
        stop_on_non_improvement: stop as soon as dQ <= threshold, a quality
            decrease included (reference behavior). When False, the loop only
            stops once |dQ| <= threshold
        empty_cluster: 'raise' to abort on an empty partition, 'carry' to keep
            the previous concept vector of a partition that lost all members
        n_jobs: worker threads for the assignment stage, -1 for all CPUs but one
        timeout: wall clock budget in seconds, checked between iterations
        should_cancel: callable returning True to stop, checked between iterations
        raise_on_max_iter: raise NonConvergenceError instead of warning when
            max_iter is reached
        copy: when False, a float64 input matrix is normalized in place
    """

    def __init__(self,
                n_clusters:int = DEFAULT_K,
                threshold:float = Q_THRESHOLD,
                max_iter:int = DEFAULT_MAX_ITER,
                stop_on_non_improvement:bool = True,
                empty_cluster:str = DEFAULT_EMPTY_CLUSTER,
                n_jobs:int = DEFAULT_N_JOBS,
                timeout:float = None,
                should_cancel = None,
                raise_on_max_iter:bool = False,
                copy:bool = True):
        self.n_clusters = n_clusters
        self.threshold = threshold
        self.max_iter = max_iter
        self.stop_on_non_improvement = stop_on_non_improvement
        self.empty_cluster = empty_cluster
        self.n_jobs = n_jobs
        self.timeout = timeout
        self.should_cancel = should_cancel
        self.raise_on_max_iter = raise_on_max_iter
        self.copy = copy

    # Validation

    def _check_params(self):
        k = self.n_clusters
        if isinstance(k, bool) or not isinstance(k, (int, np.integer)) :
            raise ConfigurationError(f"n_clusters must be an integer, got {k!r}")
        if k < 1 :
            raise ConfigurationError(f"n_clusters must be >= 1, got {k}")
        try :
            threshold = float(self.threshold)
        except (TypeError, ValueError) as e :
            raise ConfigurationError(f"threshold must be a number, got {self.threshold!r}") from e
        if np.isnan(threshold) or threshold < 0 :
            raise ConfigurationError(f"threshold must be a non-negative number, got {self.threshold!r}")
        if self.max_iter is not None :
            if isinstance(self.max_iter, bool) or not isinstance(self.max_iter, (int, np.integer)) or self.max_iter < 0 :
                raise ConfigurationError(f"max_iter must be None or a non-negative integer, got {self.max_iter!r}")
        if self.empty_cluster not in EMPTY_CLUSTER_POLICIES :
            raise ConfigurationError(f"empty_cluster must be one of {EMPTY_CLUSTER_POLICIES}, got {self.empty_cluster!r}")
        if self.timeout is not None and not self.timeout > 0 :
            raise ConfigurationError(f"timeout must be a positive number of seconds, got {self.timeout!r}")
        if self.should_cancel is not None and not callable(self.should_cancel) :
            raise ConfigurationError("should_cancel must be callable")
        self._threshold = threshold
        self._n_jobs = resolve_n_jobs(self.n_jobs)

    def _prepare_data(self, X):
        self._check_params()
        X = check_document_matrix(X, copy=self.copy)
        dc = X.shape[0]
        if self.n_clusters > dc :
            raise ConfigurationError(f"n_clusters={self.n_clusters} exceeds the number of documents ({dc})")
        return txn_scheme(X, copy=False)

    # Iteration

    def _initial_state(self, X, verbose:bool = True) -> ClusteringState:
        dc, k = X.shape[0], self.n_clusters
        partitions = contiguous_partitions(dc, k)
        if verbose :
            print(f"Split = {dc // k}")
            for p in partitions:
                print(f"Created new partition of size {p.shape[0]}")
        concepts = compute_concepts(X, partitions)
        quality = total_quality(X, partitions, concepts)
        if verbose :
            print(f"Initial quality: {quality}")
        return ClusteringState(k=k, partitions=partitions, concepts=concepts, quality=quality, iteration=0)

    def _step(self, X, state:ClusteringState, verbose:bool = True) -> ClusteringState:
        iteration = state.iteration + 1

        # compute new partitions based on old concept vectors
        labels = assign_all(X, state.concepts, n_jobs=self._n_jobs)
        partitions = partitions_from_labels(labels, self.n_clusters)

        # compute new concept vectors
        previous = state.concepts if self.empty_cluster == 'carry' else None
        try :
            concepts = compute_concepts(X, partitions, previous=previous)
        except DegenerateClusterError as e :
            raise DegenerateClusterError(e.partitions,
                                         iteration=iteration,
                                         quality_history=self.quality_history_,
                                         state=state) from e
        if verbose and previous is not None :
            empty = [i for i, p in enumerate(partitions) if p.shape[0] == 0]
            if empty :
                print(f"    Partition(s) {empty} emptied at iteration {iteration}, keeping previous concept vectors")

        quality = total_quality(X, partitions, concepts)
        return ClusteringState(k=self.n_clusters, partitions=partitions, concepts=concepts,
                               quality=quality, iteration=iteration)

    def _has_converged(self, d_q:float) -> bool:
        if self.stop_on_non_improvement :
            return d_q <= self._threshold
        return abs(d_q) <= self._threshold

    def _keep_iterating(self, state:ClusteringState, d_q:float = None) -> bool:
        if self.max_iter is not None and state.iteration >= self.max_iter :
            return False
        if d_q is None :
            return True
        return not self._has_converged(d_q)

    def _check_interruption(self, state:ClusteringState):
        reason = None
        if self.timeout is not None and time.perf_counter() - self._start > self.timeout :
            reason = f"timeout of {self.timeout}s exceeded"
        elif self.should_cancel is not None and self.should_cancel() :
            reason = "cancelled"
        if reason is not None :
            raise ClusteringCancelledError(f"Clustering stopped after iteration {state.iteration}: {reason}",
                                           iteration=state.iteration,
                                           quality_history=self.quality_history_,
                                           state=state)

    def _record_state(self, state:ClusteringState):
        self.state_ = state
        self.quality_history_.append(state.quality)

    def _display_state(self, d_q:float):
        print(f"Quality: {self.state_.quality} (+{d_q})")

    def _check_convergence(self, d_q:float = None):
        self.converged_ = d_q is not None and self._has_converged(d_q)
        if self.converged_ or not self.max_iter :
            return
        msg = f"Quality did not stabilize within max_iter={self.max_iter} iterations (last dQ = {d_q})"
        if self.raise_on_max_iter :
            raise NonConvergenceError(msg,
                                      iteration=self.state_.iteration,
                                      quality_history=self.quality_history_,
                                      state=self.state_)
        warnings.warn(msg, ConvergenceWarning)

    # Public API

    def fit(self, X, verbose:bool = False):
        self._start = time.perf_counter()
        X = self._prepare_data(X)
        self.quality_history_ = []

        state = self._initial_state(X, verbose=verbose)
        self._record_state(state)

        d_q = None
        while self._keep_iterating(state, d_q) :
            self._check_interruption(state)
            new_state = self._step(X, state, verbose=verbose)
            d_q = new_state.quality - state.quality
            state = new_state
            self._record_state(state)
            if verbose :
                self._display_state(d_q)

        self.elapsed_ = time.perf_counter() - self._start
        if verbose :
            print(f"Done in {self.elapsed_:.3f} seconds after {state.iteration} iterations.")
        self._check_convergence(d_q)

        self.documents_ = X
        self.n_iter_ = state.iteration
        self.quality_ = state.quality
        self.partitions_ = state.partitions
        self.cluster_centers_ = state.concepts
        self.labels_ = state.labels
        return self

    def fit_predict(self, X, verbose:bool = False) -> np.ndarray:
        return self.fit(X, verbose=verbose).labels_

    def predict(self, X) -> np.ndarray:
        if not hasattr(self, 'cluster_centers_') :
            raise NotFittedError("This SphericalKMeans instance is not fitted yet, call 'fit' first.")
        X = txn_scheme(X, copy=True)
        if X.shape[1] != self.cluster_centers_.shape[1] :
            raise InvalidDocumentMatrixError(
                f"Expected documents with {self.cluster_centers_.shape[1]} words, got {X.shape[1]}")
        return assign_all(X, self.cluster_centers_, n_jobs=resolve_n_jobs(self.n_jobs))


def run_spkmeans(doc_matrix, k:int, verbose:bool = False, **kwargs) -> ClusteringState:
    """Cluster `doc_matrix` into `k` partitions and return the final ClusteringState."""
    return SphericalKMeans(n_clusters=k, **kwargs).fit(doc_matrix, verbose=verbose).state_
