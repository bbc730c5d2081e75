"""
Linear projection (approximate PCA).

Finds the top principal directions with power iteration and deflation
instead of an explicit eigendecomposition, then projects the centered data
onto the first two of them.
"""

from __future__ import annotations

from typing import List, Optional
import numpy as np

from ..errors import InvalidInputError
from ..utils.logging_config import get_logger
from .points import ProjectedPoint, points_from_coords
from .vectors import Array2D, MatrixIn, NEAR_ZERO, as_matrix, safe_normalize

logger = get_logger(__name__)

POWER_ITERATIONS = 100


def power_iteration(
    residual: Array2D,
    rng: np.random.Generator,
    *,
    iterations: int = POWER_ITERATIONS,
    tol: float = NEAR_ZERO,
) -> np.ndarray:
    """
    Approximate the dominant eigenvector of ``residual.T @ residual``.

    Starts from a random direction in [-0.5, 0.5)^d and repeatedly multiplies
    it by the (unscaled) covariance, renormalizing each time.

    Args:
        residual: Centered (and possibly deflated) data, shape (n, d)
        rng: Random generator for the starting direction
        iterations: Fixed number of multiply/normalize steps
        tol: Norms at or below this are treated as zero (divided by 1)

    Returns:
        Direction of shape (d,); unit length, or a degenerate near-zero
        vector when the residual carries no variance
    """
    d = residual.shape[1]
    v = safe_normalize(rng.random(d) - 0.5)
    for _ in range(iterations):
        projected = residual @ v
        v = safe_normalize(residual.T @ projected, tol)
    return v


def principal_directions(
    centered: Array2D,
    n_components: int,
    rng: np.random.Generator,
    *,
    iterations: int = POWER_ITERATIONS,
) -> Array2D:
    """
    Extract ``n_components`` approximately orthogonal directions by deflation.

    Returns:
        Array of shape (n_components, d), one direction per row
    """
    # Tolerance scales with the total variance so rounding residue left by
    # deflation does not get promoted to a full unit direction.
    total = float(np.sum(centered * centered))
    tol = NEAR_ZERO * total

    residual = centered.copy()
    components = np.zeros((n_components, centered.shape[1]))
    for comp in range(n_components):
        v = power_iteration(residual, rng, iterations=iterations, tol=tol)
        components[comp] = v
        residual -= np.outer(residual @ v, v)
    return components


def project_linear(
    data: MatrixIn,
    target_dims: int = 2,
    *,
    iterations: int = POWER_ITERATIONS,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> List[ProjectedPoint]:
    """
    Project vectors to 2D along their top principal directions.

    Args:
        data: N vectors of equal length D (list of lists or 2D array)
        target_dims: Number of components to extract (y is 0 when < 2)
        iterations: Power-iteration steps per component
        seed: Seed for the random starting directions (ignored if rng given)
        rng: Random generator to use instead of a seeded one

    Returns:
        N points, index-aligned with the input

    Raises:
        InvalidInputError: On empty/ragged/non-finite input or target_dims < 1
    """
    X = as_matrix(data)
    if isinstance(target_dims, bool) or not isinstance(target_dims, (int, np.integer)):
        raise InvalidInputError(f"target_dims must be an integer; got {target_dims!r}")
    if target_dims < 1:
        raise InvalidInputError(f"target_dims must be >= 1, got {target_dims}")
    if rng is None:
        rng = np.random.default_rng(seed)

    n, d = X.shape
    logger.debug("Linear projection of %d x %d matrix (%d components)", n, d, target_dims)

    centered = X - X.mean(axis=0, keepdims=True)
    components = principal_directions(centered, int(target_dims), rng, iterations=iterations)

    xs = centered @ components[0]
    ys = centered @ components[1] if target_dims > 1 else np.zeros(n)
    return points_from_coords(xs, ys)
