"""
Dimensionality reduction entry point.

Selects the linear or nonlinear projector by name so callers (and the CLI)
can switch methods without importing each one.
"""

from __future__ import annotations

from typing import Any, List

from ..errors import InvalidInputError
from .linear import project_linear
from .nonlinear import project_nonlinear
from .points import ProjectedPoint
from .vectors import MatrixIn

_ALIASES = {
    "pca": "pca",
    "linear": "pca",
    "tsne": "tsne",
    "t-sne": "tsne",
    "nonlinear": "tsne",
}

METHODS = ("pca", "tsne")


def resolve_method(method: str) -> str:
    """Map a method name or alias to "pca" or "tsne"."""
    key = str(method).strip().lower()
    if key not in _ALIASES:
        raise InvalidInputError(
            f"Unknown projection method: {method!r} (expected one of {', '.join(METHODS)})"
        )
    return _ALIASES[key]


def project(data: MatrixIn, method: str = "tsne", **kwargs: Any) -> List[ProjectedPoint]:
    """
    Project data to 2D with the named method.

    Args:
        data: N vectors of equal length D
        method: "pca"/"linear" or "tsne"/"nonlinear"
        **kwargs: Forwarded to project_linear or project_nonlinear

    Returns:
        N points, index-aligned with the input

    Raises:
        InvalidInputError: If the method is unknown or the projector rejects the input
    """
    if resolve_method(method) == "pca":
        return project_linear(data, **kwargs)
    return project_nonlinear(data, **kwargs)
