"""
Algorithm Core Library - linear and nonlinear 2D projections.

Both projectors are pure functions of their input matrix and an injectable
random source; neither keeps state between calls.
"""

from .vectors import (
    dot,
    squared_euclidean,
    pairwise_squared_distances,
    safe_normalize,
    as_matrix,
)
from .points import ProjectedPoint, points_to_array
from .linear import power_iteration, principal_directions, project_linear
from .nonlinear import (
    TSNEOptions,
    EmbeddingState,
    joint_probabilities,
    kl_divergence,
    project_nonlinear,
)
from .dimensionality_reduction import METHODS, project, resolve_method

__all__ = [
    # Vector primitives
    "dot",
    "squared_euclidean",
    "pairwise_squared_distances",
    "safe_normalize",
    "as_matrix",
    # Output records
    "ProjectedPoint",
    "points_to_array",
    # Linear projection
    "power_iteration",
    "principal_directions",
    "project_linear",
    # Nonlinear projection
    "TSNEOptions",
    "EmbeddingState",
    "joint_probabilities",
    "kl_divergence",
    "project_nonlinear",
    # Dispatch
    "METHODS",
    "project",
    "resolve_method",
]
