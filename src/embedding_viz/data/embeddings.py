"""
Embedding inputs: loading, synthetic clusters and text pseudo-embeddings.

Every adapter returns an EmbeddingData whose vectors are ready to hand to a
projector; labels and metadata stay here, joined back by point index.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np

from ..errors import InvalidInputError
from ..utils.logging_config import get_logger

logger = get_logger(__name__)

CLUSTER_NAMES = ["science", "technology", "nature", "art", "history"]


@dataclass
class EmbeddingData:
    """Vectors plus the labels/metadata the caller keeps alongside them."""

    vectors: List[List[float]]
    labels: List[str]
    metadata: Optional[List[Dict[str, Any]]] = None
    dimensions: int = 0

    def __post_init__(self):
        """Check that labels and metadata line up with the vectors."""
        if len(self.labels) != len(self.vectors):
            raise InvalidInputError(
                f"Got {len(self.labels)} labels for {len(self.vectors)} vectors"
            )
        if self.metadata is not None and len(self.metadata) != len(self.vectors):
            raise InvalidInputError(
                f"Got {len(self.metadata)} metadata records for {len(self.vectors)} vectors"
            )
        if not self.dimensions and self.vectors:
            self.dimensions = len(self.vectors[0])

    def __len__(self) -> int:
        return len(self.vectors)


def parse_embedding_payload(payload: Any) -> EmbeddingData:
    """
    Parse an already-decoded JSON payload.

    Supported formats:
    - ``[{"vector": [...], "label": "...", ...extra}]``; label falls back to
      ``text`` then ``point-<i>``, extra keys become metadata
    - ``{"vectors": [[...]], "labels": [...]}``

    Raises:
        InvalidInputError: For any other shape
    """
    if (
        isinstance(payload, list)
        and payload
        and isinstance(payload[0], dict)
        and payload[0].get("vector") is not None
    ):
        vectors, labels, metadata = [], [], []
        for i, rec in enumerate(payload):
            if not isinstance(rec, dict) or rec.get("vector") is None:
                raise InvalidInputError(f"Record {i} has no 'vector' field")
            vectors.append(list(rec["vector"]))
            labels.append(str(rec.get("label") or rec.get("text") or f"point-{i}"))
            metadata.append({k: v for k, v in rec.items() if k not in ("vector", "label")})
        return EmbeddingData(
            vectors=vectors,
            labels=labels,
            metadata=metadata,
            dimensions=len(vectors[0]),
        )

    if isinstance(payload, dict) and "vectors" in payload and "labels" in payload:
        vectors = [list(v) for v in payload["vectors"]]
        return EmbeddingData(
            vectors=vectors,
            labels=[str(label) for label in payload["labels"]],
            dimensions=len(vectors[0]) if vectors else 0,
        )

    raise InvalidInputError("Unsupported embedding format")


def load_embeddings_json(path: Union[str, Path]) -> EmbeddingData:
    """Read a JSON file from disk and parse it with parse_embedding_payload."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidInputError(f"{path} is not valid JSON: {e}") from e
    data = parse_embedding_payload(payload)
    logger.info("Loaded %d vectors (%d dims) from %s", len(data), data.dimensions, path)
    return data


def generate_clustered(
    n: int,
    dims: int,
    clusters: int = 5,
    *,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> EmbeddingData:
    """
    Synthetic clustered vectors for demos and tests.

    Cluster centers are uniform in [-5, 5)^dims; point ``i`` belongs to
    cluster ``i % clusters`` and is jittered uniformly within +/-1 per axis.

    Args:
        n: Number of points
        dims: Vector dimensionality
        clusters: Number of clusters
        seed: Seed for the generator (ignored if rng given)
        rng: Random generator to use

    Returns:
        EmbeddingData with labels like ``science_0``, ``technology_0``, ...
    """
    if n < 1 or dims < 1 or clusters < 1:
        raise InvalidInputError(
            f"n, dims and clusters must all be >= 1 (got {n}, {dims}, {clusters})"
        )
    if rng is None:
        rng = np.random.default_rng(seed)

    centers = (rng.random((clusters, dims)) - 0.5) * 10.0
    vectors: List[List[float]] = []
    labels: List[str] = []
    for i in range(n):
        cluster = i % clusters
        vec = centers[cluster] + (rng.random(dims) - 0.5) * 2.0
        vectors.append(vec.tolist())
        name = CLUSTER_NAMES[cluster] if cluster < len(CLUSTER_NAMES) else f"cluster-{cluster}"
        labels.append(f"{name}_{i // clusters}")

    return EmbeddingData(vectors=vectors, labels=labels, dimensions=dims)


def _utf16_units(text: str) -> List[int]:
    """UTF-16 code units of ``text``; characters outside the BMP become surrogate pairs."""
    raw = text.encode("utf-16-le", "surrogatepass")
    return [int.from_bytes(raw[k:k + 2], "little") for k in range(0, len(raw), 2)]


def text_to_embedding(texts: Sequence[str], dims: int = 64) -> EmbeddingData:
    """
    Hash-based bag-of-characters vectors.

    Not a real embedding; handy for demos when no model is available.
    """
    if dims < 1:
        raise InvalidInputError(f"dims must be >= 1, got {dims}")

    vectors = []
    for text in texts:
        vec = np.zeros(dims)
        for i, unit in enumerate(_utf16_units(text)):
            vec[(unit * 31 + i * 17) % dims] += 1.0
        norm = float(np.linalg.norm(vec)) or 1.0
        vectors.append((vec / norm).tolist())

    return EmbeddingData(
        vectors=vectors,
        labels=[t[:30] for t in texts],
        dimensions=dims,
    )
