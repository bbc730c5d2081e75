"""Input adapters producing vectors for the projectors."""

from .embeddings import (
    EmbeddingData,
    parse_embedding_payload,
    load_embeddings_json,
    generate_clustered,
    text_to_embedding,
)

__all__ = [
    "EmbeddingData",
    "parse_embedding_payload",
    "load_embeddings_json",
    "generate_clustered",
    "text_to_embedding",
]
