"""
Embedding Viz - Core Package

Maps high-dimensional vectors (typically text embeddings) onto 2D
coordinates for plotting.

This package provides:
- Linear projection (power-iteration PCA)
- Nonlinear projection (simplified t-SNE)
- Input adapters for JSON payloads, synthetic clusters and text
"""

__version__ = "0.1.0"

from .errors import InvalidInputError
from .algorithms import (
    ProjectedPoint,
    TSNEOptions,
    project,
    project_linear,
    project_nonlinear,
)

# Explicitly import subpackages to ensure they're discoverable
from . import algorithms
from . import data
from . import utils

__all__ = [
    "InvalidInputError",
    "ProjectedPoint",
    "TSNEOptions",
    "project",
    "project_linear",
    "project_nonlinear",
    "algorithms",
    "data",
    "utils",
]
