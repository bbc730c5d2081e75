"""
Numeric vector primitives shared by the projectors.

Provides dot products, squared Euclidean distances, safe normalization and
validation of the input matrix.
"""

from __future__ import annotations

from typing import Sequence, Union
import numpy as np

from ..errors import InvalidInputError

Array2D = np.ndarray
MatrixIn = Union[np.ndarray, Sequence[Sequence[float]]]

NEAR_ZERO = 1e-12


def dot(a: np.ndarray, b: np.ndarray) -> float:
    """Dot product of two equal-length vectors."""
    return float(np.dot(a, b))


def squared_euclidean(a: np.ndarray, b: np.ndarray) -> float:
    """Squared Euclidean distance between two equal-length vectors."""
    diff = np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)
    return float(np.dot(diff, diff))


def pairwise_squared_distances(X: Array2D) -> Array2D:
    """
    Full symmetric matrix of squared Euclidean distances between rows.

    Args:
        X: Data of shape (n_samples, n_features)

    Returns:
        Array of shape (n_samples, n_samples) with a zero diagonal
    """
    sq = np.einsum("ij,ij->i", X, X)
    D = sq[:, None] + sq[None, :] - 2.0 * (X @ X.T)
    np.maximum(D, 0.0, out=D)
    # Exact symmetry; the expansion above can differ in the last bit.
    D = 0.5 * (D + D.T)
    np.fill_diagonal(D, 0.0)
    return D


def safe_normalize(v: np.ndarray, tol: float = NEAR_ZERO) -> np.ndarray:
    """
    Scale a vector to unit length.

    A vector whose norm is at or below ``tol`` is divided by 1 instead, so a
    zero vector stays zero rather than turning into NaNs.
    """
    norm = float(np.linalg.norm(v))
    if norm <= tol:
        norm = 1.0
    return v / norm


def safe_divide(x: np.ndarray, denom: float) -> np.ndarray:
    """Divide by ``denom``, falling back to 1 when it is (near) zero."""
    if abs(denom) <= NEAR_ZERO:
        denom = 1.0
    return x / denom


def as_matrix(data: MatrixIn) -> Array2D:
    """
    Validate an input matrix and return it as a float64 array.

    Accepts a 2D ndarray or a sequence of equal-length numeric sequences.

    Raises:
        InvalidInputError: If the matrix is empty, rows disagree in length,
            rows are empty, or any value is not a finite number
    """
    if isinstance(data, np.ndarray):
        if data.ndim != 2:
            raise InvalidInputError(f"Expected a 2D matrix; got shape {data.shape}")
        rows = data
    else:
        if data is None or len(data) == 0:
            raise InvalidInputError("Input matrix is empty")
        try:
            d = len(data[0])
            for i, row in enumerate(data):
                if len(row) != d:
                    raise InvalidInputError(
                        f"Row {i} has length {len(row)}; expected {d}"
                    )
        except TypeError as e:
            raise InvalidInputError("Input rows must be sequences of numbers") from e
        try:
            rows = np.asarray(data, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Input matrix is not numeric: {e}") from e
        if rows.ndim != 2:
            raise InvalidInputError(f"Expected a 2D matrix; got shape {rows.shape}")

    if rows.shape[0] == 0:
        raise InvalidInputError("Input matrix is empty")
    if rows.shape[1] == 0:
        raise InvalidInputError("Input vectors must have at least one dimension")

    try:
        X = rows.astype(np.float64, copy=False)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Input matrix is not numeric: {e}") from e
    if not np.all(np.isfinite(X)):
        raise InvalidInputError("Input matrix contains NaN or infinite values")
    return X
