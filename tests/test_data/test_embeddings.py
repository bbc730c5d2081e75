"""
Tests for the embedding input adapters.
"""

import json

import numpy as np
import pytest

from embedding_viz.algorithms import project_linear
from embedding_viz.data import (
    EmbeddingData,
    generate_clustered,
    load_embeddings_json,
    parse_embedding_payload,
    text_to_embedding,
)
from embedding_viz.errors import InvalidInputError


def test_parse_record_list():
    """Test the list-of-records format with label fallbacks and metadata."""
    payload = [
        {"vector": [1, 2, 3], "label": "first", "source": "a"},
        {"vector": [4, 5, 6], "text": "second text"},
        {"vector": [7, 8, 9]},
    ]
    data = parse_embedding_payload(payload)

    assert data.vectors == [[1, 2, 3], [4, 5, 6], [7, 8, 9]]
    assert data.labels == ["first", "second text", "point-2"]
    assert data.metadata == [{"source": "a"}, {"text": "second text"}, {}]
    assert data.dimensions == 3
    assert len(data) == 3


def test_parse_vectors_and_labels():
    """Test the columnar format."""
    data = parse_embedding_payload({"vectors": [[0.5, 1.5]], "labels": ["only"]})
    assert data.vectors == [[0.5, 1.5]]
    assert data.labels == ["only"]
    assert data.metadata is None
    assert data.dimensions == 2


@pytest.mark.parametrize(
    "payload",
    [
        {"points": []},
        [],
        [{"label": "no vector"}],
        "vectors",
        [{"vector": [1, 2]}, {"label": "missing"}],
    ],
)
def test_parse_unsupported_format(payload):
    """Test that unknown payloads raise InvalidInputError."""
    with pytest.raises(InvalidInputError):
        parse_embedding_payload(payload)


def test_mismatched_labels_rejected():
    """Labels must line up with vectors."""
    with pytest.raises(InvalidInputError):
        parse_embedding_payload({"vectors": [[1.0], [2.0]], "labels": ["a"]})
    with pytest.raises(InvalidInputError):
        EmbeddingData(vectors=[[1.0]], labels=["a"], metadata=[{}, {}])


def test_load_embeddings_json(tmp_path):
    """Test loading a JSON file from disk."""
    path = tmp_path / "vectors.json"
    path.write_text(json.dumps({"vectors": [[1, 0], [0, 1]], "labels": ["x", "y"]}))

    data = load_embeddings_json(path)
    assert data.labels == ["x", "y"]
    assert data.dimensions == 2


def test_load_embeddings_invalid_json(tmp_path):
    """Test that a malformed file raises InvalidInputError."""
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(InvalidInputError):
        load_embeddings_json(path)


def test_generate_clustered_shapes_and_labels():
    """Test sizes, cluster assignment and label naming."""
    data = generate_clustered(12, 4, clusters=6, seed=0)

    assert len(data.vectors) == 12
    assert all(len(v) == 4 for v in data.vectors)
    assert data.dimensions == 4
    assert data.labels[:6] == [
        "science_0",
        "technology_0",
        "nature_0",
        "art_0",
        "history_0",
        "cluster-5_0",
    ]
    assert data.labels[6] == "science_1"


def test_generate_clustered_points_stay_near_center():
    """Points of one cluster lie within +/-1 per axis of each other's center."""
    data = generate_clustered(30, 5, clusters=3, seed=1)
    X = np.array(data.vectors)
    for k in range(3):
        members = X[k::3]
        spread = members.max(axis=0) - members.min(axis=0)
        assert np.all(spread < 2.0)
        assert np.all(np.abs(members) < 6.0)


def test_generate_clustered_is_seeded():
    """Test determinism for a fixed seed."""
    a = generate_clustered(10, 3, seed=5)
    b = generate_clustered(10, 3, seed=5)
    assert a.vectors == b.vectors


def test_generate_clustered_rejects_bad_sizes():
    """Test argument validation."""
    with pytest.raises(InvalidInputError):
        generate_clustered(0, 3)


def test_text_to_embedding():
    """Vectors are unit length, labels truncated to 30 characters."""
    long_text = "a fairly long sentence that goes past thirty characters"
    data = text_to_embedding(["hello", long_text, ""], dims=16)

    X = np.array(data.vectors)
    assert X.shape == (3, 16)
    np.testing.assert_allclose(np.linalg.norm(X[:2], axis=1), 1.0)
    np.testing.assert_array_equal(X[2], 0.0)
    assert data.labels == ["hello", long_text[:30], ""]


def test_text_to_embedding_buckets():
    """Characters land in the hashed bucket (ord * 31 + position * 17) % dims."""
    data = text_to_embedding(["ab"], dims=8)
    expected = np.zeros(8)
    expected[(ord("a") * 31) % 8] += 1
    expected[(ord("b") * 31 + 17) % 8] += 1
    expected /= np.linalg.norm(expected)
    np.testing.assert_allclose(data.vectors[0], expected)


def test_generated_data_feeds_projector():
    """Adapters produce input the projectors accept."""
    data = generate_clustered(20, 8, clusters=4, seed=2)
    points = project_linear(data.vectors, seed=0)
    assert [p.index for p in points] == list(range(20))


def test_text_to_embedding_uses_utf16_code_units():
    """Characters outside the BMP hash as their two surrogate code units."""
    data = text_to_embedding(["\U0001F600"], dims=64)
    expected = np.zeros(64)
    expected[(0xD83D * 31) % 64] += 1
    expected[(0xDE00 * 31 + 17) % 64] += 1
    expected /= np.linalg.norm(expected)
    np.testing.assert_allclose(data.vectors[0], expected)
