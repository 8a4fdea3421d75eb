"""
Exceptions raised by the clustering engine and its collaborators.

Configuration and input errors are raised before any clustering work starts.
Errors deriving from ClusteringRuntimeError are raised from inside the
refinement loop and carry the iteration number, the quality history and the
last complete ClusteringState so a failed run can be diagnosed.
"""


class SPKMeansError(Exception):
    """Base class for all spkmeans_lib errors."""


class ConfigurationError(SPKMeansError, ValueError):
    """Invalid engine parameter (k out of range, bad threshold, ...)."""


class InvalidDocumentMatrixError(SPKMeansError, ValueError):
    """Document matrix (or document file) that cannot be clustered."""


class NumericDegeneracyError(InvalidDocumentMatrixError):
    """Document vectors with zero norm, for which cosine similarity is undefined."""

    def __init__(self, doc_indices, message:str = None):
        self.doc_indices = [int(i) for i in doc_indices]
        if message is None :
            shown = ', '.join(str(i) for i in self.doc_indices[:10])
            if len(self.doc_indices) > 10 :
                shown += ', ...'
            message = f"{len(self.doc_indices)} document(s) have an all-zero weight vector: [{shown}]"
        super().__init__(message)


class ClusteringRuntimeError(SPKMeansError):

    def __init__(self, message:str, iteration:int = None, quality_history:list = None, state = None):
        super().__init__(message)
        self.iteration = iteration
        self.quality_history = list(quality_history) if quality_history is not None else []
        self.state = state


class DegenerateClusterError(ClusteringRuntimeError):
    """One or more partitions became empty, their concept vector is undefined."""

    def __init__(self, partitions, iteration:int = None, quality_history:list = None, state = None):
        self.partitions = [int(p) for p in partitions]
        message = f"Empty partition(s) {self.partitions}"
        if iteration is not None :
            message += f" after reassignment at iteration {iteration}"
        super().__init__(message, iteration=iteration, quality_history=quality_history, state=state)


class NonConvergenceError(ClusteringRuntimeError):
    """Iteration cap reached before the convergence test passed."""


class ClusteringCancelledError(ClusteringRuntimeError):
    """Run stopped by a timeout or a cancellation callback."""
