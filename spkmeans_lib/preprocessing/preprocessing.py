import numpy as np
import pandas as pd
from scipy import sparse
from sklearn.preprocessing import normalize

from spkmeans_lib.errors import InvalidDocumentMatrixError, NumericDegeneracyError


def check_document_matrix(X, copy:bool = True) -> np.ndarray:
    """
    Validate a document-term matrix and return it as a dense float64 array.

    Accepts numpy arrays, nested lists, DataFrames and scipy sparse matrices.
    A float64 ndarray is returned as is when copy is False.
    """
    if sparse.issparse(X):
        X = X.toarray()
    elif isinstance(X, pd.DataFrame):
        X = X.to_numpy()
    try :
        X = np.array(X, dtype=np.float64, copy=True) if copy else np.asarray(X, dtype=np.float64)
    except (TypeError, ValueError) as e :
        raise InvalidDocumentMatrixError(f"Document matrix is not numeric: {e}") from e

    if X.ndim != 2 :
        raise InvalidDocumentMatrixError(f"Document matrix must be 2D (dc, wc), got shape {X.shape}")
    dc, wc = X.shape
    if dc == 0 or wc == 0 :
        raise InvalidDocumentMatrixError(f"Document matrix is empty, got shape {X.shape}")
    if not np.isfinite(X).all():
        raise InvalidDocumentMatrixError("Document matrix contains NaN or infinite weights")
    if (X < 0).any():
        raise InvalidDocumentMatrixError("Document matrix contains negative weights")
    return X


def zero_documents(X:np.ndarray) -> np.ndarray:
    return np.flatnonzero(~X.any(axis=1))


def txn_scheme(X, copy:bool = True) -> np.ndarray:
    """
    Apply the TXN scheme to the document vectors, i.e. normalize every
    document vector to unit length.

    Documents with an all-zero weight vector have no direction: they are
    rejected with a NumericDegeneracyError. With copy=False a float64 array
    is normalized in place.
    """
    X = check_document_matrix(X, copy=copy)
    zeros = zero_documents(X)
    if zeros.size > 0 :
        raise NumericDegeneracyError(zeros)
    return normalize(X, norm='l2', axis=1, copy=False)
