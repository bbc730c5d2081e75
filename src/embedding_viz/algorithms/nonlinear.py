"""
Nonlinear projection (simplified t-SNE).

Builds Gaussian neighbor probabilities in the input space, then moves a 2D
layout by gradient descent (momentum plus adaptive gains) until its Student-t
similarities match them. Exact O(n^2) version, no Barnes-Hut approximation.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, List, Optional
import numpy as np

from ..errors import InvalidInputError
from ..utils.logging_config import get_logger
from .points import ProjectedPoint, points_from_coords
from .vectors import Array2D, MatrixIn, as_matrix, pairwise_squared_distances, safe_divide

logger = get_logger(__name__)

ProgressCallback = Callable[[int, float], None]

MIN_POINTS = 3
SIGMA_BOUNDS = (0.01, 100.0)
SIGMA_SEARCH_STEPS = 50
PROB_FLOOR = 1e-10
INIT_SCALE = 0.01
MOMENTUM_SWITCH_ITER = 250
INITIAL_MOMENTUM = 0.5
FINAL_MOMENTUM = 0.8
GAIN_DECAY = 0.8
GAIN_INCREMENT = 0.2
MIN_GAIN = 0.01
PROGRESS_EVERY = 50


@dataclass
class TSNEOptions:
    """Options for :func:`project_nonlinear`."""

    perplexity: float = 30.0
    learning_rate: float = 200.0
    iterations: int = 500
    on_progress: Optional[ProgressCallback] = None
    seed: Optional[int] = None

    def __post_init__(self):
        """Reject values the optimizer cannot work with."""
        if not _is_number(self.perplexity) or self.perplexity <= 0:
            raise InvalidInputError(f"perplexity must be > 0, got {self.perplexity!r}")
        if not _is_number(self.learning_rate) or self.learning_rate <= 0:
            raise InvalidInputError(
                f"learning_rate must be > 0, got {self.learning_rate!r}"
            )
        if (
            isinstance(self.iterations, bool)
            or not isinstance(self.iterations, (int, np.integer))
            or self.iterations < 0
        ):
            raise InvalidInputError(
                f"iterations must be a non-negative integer, got {self.iterations!r}"
            )
        if self.on_progress is not None and not callable(self.on_progress):
            raise InvalidInputError("on_progress must be callable")


@dataclass
class EmbeddingState:
    """Working matrices for one optimization run."""

    Y: Array2D
    gains: Array2D
    velocities: Array2D

    @classmethod
    def initial(cls, n: int, rng: np.random.Generator) -> "EmbeddingState":
        Y = (rng.random((n, 2)) - 0.5) * INIT_SCALE
        return cls(Y=Y, gains=np.ones((n, 2)), velocities=np.zeros((n, 2)))


def _is_number(value) -> bool:
    return (
        isinstance(value, (int, float, np.integer, np.floating))
        and not isinstance(value, bool)
        and np.isfinite(value)
    )


def effective_perplexity(perplexity: float, n: int) -> float:
    """Clamp perplexity to floor(n / 3) so the bandwidth search stays well-posed."""
    return min(perplexity, n // 3)


def row_probabilities(distances_i: np.ndarray, perplexity: float) -> np.ndarray:
    """
    Conditional neighbor probabilities for one point.

    Bisects sigma over SIGMA_BOUNDS for a fixed number of steps so that the
    perplexity (2 ** entropy in bits) of the Gaussian kernel matches the
    target. The distribution from the last sigma tried is returned.

    Args:
        distances_i: Squared distances to every *other* point
        perplexity: Target perplexity

    Returns:
        Probabilities aligned with ``distances_i``, summing to 1 (or all
        zero if every kernel value underflows)
    """
    lo, hi = SIGMA_BOUNDS
    p = np.zeros_like(distances_i)
    for _ in range(SIGMA_SEARCH_STEPS):
        sigma = (lo + hi) / 2.0
        p = np.exp(-distances_i / (2.0 * sigma * sigma))
        p = safe_divide(p, float(p.sum()))

        nz = p[p > PROB_FLOOR]
        H = -float(np.sum(nz * np.log2(nz)))
        if 2.0 ** H > perplexity:
            hi = sigma
        else:
            lo = sigma
    return p


def joint_probabilities(distances: Array2D, perplexity: float) -> Array2D:
    """
    Symmetric affinity matrix P from squared distances.

    Row-wise conditional probabilities are symmetrized as
    ``(P_ij + P_ji) / (2n)``; the diagonal is zero.
    """
    n = distances.shape[0]
    cond = np.zeros((n, n))
    idx = np.arange(n)
    for i in range(n):
        others = idx != i
        cond[i, others] = row_probabilities(distances[i, others], perplexity)
    return (cond + cond.T) / (2.0 * n)


def student_t_affinities(Y: Array2D) -> tuple[Array2D, Array2D]:
    """
    Low-dimensional affinities under the Student-t kernel.

    Returns:
        Tuple of:
        - Q: Normalized affinities (sum over all ordered pairs is 1)
        - num: Unnormalized kernel values 1 / (1 + ||y_i - y_j||^2), zero diagonal
    """
    num = 1.0 / (1.0 + pairwise_squared_distances(Y))
    np.fill_diagonal(num, 0.0)
    Q = safe_divide(num, float(num.sum()))
    return Q, num


def kl_gradient(P: Array2D, Q: Array2D, num: Array2D, Y: Array2D) -> Array2D:
    """
    Gradient of KL(P || Q) with respect to each 2D coordinate.

    ``grad_i = 4 * sum_j (P_ij - Q_ij) * num_ij * (y_i - y_j)``
    """
    W = (P - Q) * num
    return 4.0 * (W.sum(axis=1)[:, None] * Y - W @ Y)


def kl_divergence(P: Array2D, Q: Array2D) -> float:
    """KL(P || Q) over entries where both probabilities exceed PROB_FLOOR."""
    mask = (P > PROB_FLOOR) & (Q > PROB_FLOOR)
    return float(np.sum(P[mask] * np.log(P[mask] / Q[mask])))


def gradient_step(
    state: EmbeddingState,
    grad: Array2D,
    *,
    momentum: float,
    learning_rate: float,
) -> None:
    """
    Apply one momentum update with adaptive gains, then re-center.

    Gains shrink when the gradient keeps the sign of the previous velocity
    and grow otherwise, floored at MIN_GAIN.
    """
    same_sign = (grad > 0) == (state.velocities > 0)
    state.gains = np.where(same_sign, state.gains * GAIN_DECAY, state.gains + GAIN_INCREMENT)
    np.maximum(state.gains, MIN_GAIN, out=state.gains)

    state.velocities = momentum * state.velocities - learning_rate * state.gains * grad
    state.Y = state.Y + state.velocities
    state.Y = state.Y - state.Y.mean(axis=0, keepdims=True)


def optimize_embedding(
    P: Array2D,
    opts: TSNEOptions,
    rng: np.random.Generator,
) -> EmbeddingState:
    """Run the fixed-length gradient descent for a precomputed P."""
    state = EmbeddingState.initial(P.shape[0], rng)

    for it in range(opts.iterations):
        Q, num = student_t_affinities(state.Y)
        grad = kl_gradient(P, Q, num, state.Y)
        momentum = INITIAL_MOMENTUM if it < MOMENTUM_SWITCH_ITER else FINAL_MOMENTUM
        gradient_step(state, grad, momentum=momentum, learning_rate=opts.learning_rate)

        if opts.on_progress is not None and it % PROGRESS_EVERY == 0:
            cost = kl_divergence(P, Q)
            logger.debug("t-SNE iteration %d: KL=%.6f", it, cost)
            opts.on_progress(it, cost)

    return state


def project_nonlinear(
    data: MatrixIn,
    options: Optional[TSNEOptions] = None,
    *,
    rng: Optional[np.random.Generator] = None,
    **overrides,
) -> List[ProjectedPoint]:
    """
    Project vectors to 2D with a simplified t-SNE.

    Fewer than three points carry no neighbor structure; they get random
    coordinates in [0, 1) x [0, 1) without any optimization.

    Example:
        points = project_nonlinear(vectors, perplexity=10, iterations=300, seed=0)

    Args:
        data: N vectors of equal length D (list of lists or 2D array)
        options: TSNEOptions; keyword overrides are applied on top
        rng: Random generator to use instead of one seeded from options.seed
        **overrides: Any TSNEOptions field (perplexity, learning_rate,
            iterations, on_progress, seed)

    Returns:
        N points, index-aligned with the input

    Raises:
        InvalidInputError: On malformed input or invalid options
    """
    X = as_matrix(data)
    if options is None:
        options = TSNEOptions(**overrides)
    elif overrides:
        options = replace(options, **overrides)
    if rng is None:
        rng = np.random.default_rng(options.seed)

    n = X.shape[0]
    if n < MIN_POINTS:
        logger.debug("Only %d point(s); returning random layout", n)
        coords = rng.random((n, 2))
        return points_from_coords(coords[:, 0], coords[:, 1])

    perp = effective_perplexity(options.perplexity, n)
    logger.debug(
        "t-SNE on %d x %d matrix (perplexity=%s, learning_rate=%s, iterations=%d)",
        n,
        X.shape[1],
        perp,
        options.learning_rate,
        options.iterations,
    )

    P = joint_probabilities(pairwise_squared_distances(X), perp)
    state = optimize_embedding(P, options, rng)
    return points_from_coords(state.Y[:, 0], state.Y[:, 1])
