import numpy as np


def vec_dot(a, b) -> float:
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape :
        raise ValueError(f"Cannot compute dot product of vectors with shapes {a.shape} and {b.shape}")
    return float(np.dot(a, b))


def vec_norm(a) -> float:
    return float(np.sqrt(vec_dot(a, a)))


def vec_sum(vectors, wc:int = None) -> np.ndarray:
    """
    Elementwise sum of a collection of equal-length vectors.

    Args:
        vectors: array-like of shape (n_vectors, wc), may hold no vector
        wc: vector length, only needed when `vectors` is an empty list

    Returns:
        np.ndarray of shape (wc,), all zeros when there is no vector to sum
    """
    matrix = np.asarray(vectors, dtype=np.float64)
    if matrix.shape[0] == 0 :
        if matrix.ndim == 2 :
            wc = matrix.shape[1]
        if wc is None :
            raise ValueError("wc is required to sum an empty list of vectors")
        return np.zeros(wc, dtype=np.float64)
    if matrix.ndim != 2 :
        raise ValueError(f"Expected a 2D collection of vectors, got shape {matrix.shape}")
    return matrix.sum(axis=0)


def vec_scale(v:np.ndarray, c:float) -> np.ndarray:
    # in place
    v *= c
    return v


def vec_normalize(v:np.ndarray) -> np.ndarray:
    """Divides `v` by its norm in place. A zero vector turns into NaNs."""
    norm = vec_norm(v)
    with np.errstate(divide='ignore', invalid='ignore'):
        v /= norm
    return v
