"""
Projected point records returned by the projectors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Union
import numpy as np


@dataclass(frozen=True)
class ProjectedPoint:
    """A 2D coordinate tied back to the row it came from."""

    x: float
    y: float
    index: int

    def to_dict(self) -> Dict[str, Union[float, int]]:
        return {"x": self.x, "y": self.y, "index": self.index}


def points_from_coords(xs: np.ndarray, ys: np.ndarray) -> List[ProjectedPoint]:
    """Build index-aligned points from coordinate arrays."""
    return [
        ProjectedPoint(x=float(x), y=float(y), index=i)
        for i, (x, y) in enumerate(zip(xs, ys))
    ]


def points_to_array(points: Sequence[ProjectedPoint]) -> np.ndarray:
    """Stack points into an (n, 2) array ordered by ``index``."""
    ordered = sorted(points, key=lambda p: p.index)
    return np.array([[p.x, p.y] for p in ordered], dtype=np.float64).reshape(-1, 2)
