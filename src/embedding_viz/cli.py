"""
Command-line entry point: project embeddings to 2D and write JSON points.

Usage:
    embedding-viz vectors.json --method pca
    embedding-viz --generate 200 --dims 32 --clusters 4 --method tsne --seed 0
    embedding-viz --text-file sentences.txt --output points.json
"""

import argparse
import json
import sys
from typing import List, Optional

from .algorithms import project, resolve_method
from .config import config
from .data import EmbeddingData, generate_clustered, load_embeddings_json, text_to_embedding
from .errors import InvalidInputError
from .utils.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    defaults = config.projection
    parser = argparse.ArgumentParser(
        prog="embedding-viz",
        description="Project high-dimensional vectors to 2D (PCA or t-SNE)",
    )
    parser.add_argument("input", nargs="?", default=None, help="JSON file with vectors")
    parser.add_argument("--generate", type=int, metavar="N", help="Generate N clustered points")
    parser.add_argument("--text-file", help="Embed each non-empty line of a text file")

    parser.add_argument("--dims", type=int, default=64, help="Dimensions for --generate/--text-file")
    parser.add_argument("--clusters", type=int, default=5, help="Clusters for --generate")
    parser.add_argument("--method", default=defaults.method, help="pca or tsne")
    parser.add_argument("--perplexity", type=float, default=defaults.perplexity)
    parser.add_argument("--learning-rate", type=float, default=defaults.learning_rate)
    parser.add_argument("--iterations", type=int, default=defaults.iterations)
    parser.add_argument("--seed", type=int, default=defaults.seed)
    parser.add_argument("--output", "-o", default=None, help="Output file (default: stdout)")
    parser.add_argument("--log-level", default=defaults.log_level)
    return parser


def load_source(args: argparse.Namespace) -> EmbeddingData:
    if args.generate is not None:
        return generate_clustered(args.generate, args.dims, args.clusters, seed=args.seed)
    if args.text_file:
        with open(args.text_file, "r", encoding="utf-8") as f:
            texts = [line.strip() for line in f if line.strip()]
        return text_to_embedding(texts, dims=args.dims)
    return load_embeddings_json(args.input)


def run(args: argparse.Namespace) -> List[dict]:
    """Load the vectors, project them and return JSON-ready records."""
    data = load_source(args)
    method = resolve_method(args.method)

    if method == "pca":
        kwargs = {"seed": args.seed}
    else:
        def on_progress(iteration: int, cost: float) -> None:
            logger.info("iteration %d: KL divergence %.4f", iteration, cost)

        kwargs = {
            "perplexity": args.perplexity,
            "learning_rate": args.learning_rate,
            "iterations": args.iterations,
            "seed": args.seed,
            "on_progress": on_progress,
        }

    logger.info("Projecting %d vectors with %s", len(data), method)
    points = project(data.vectors, method=method, **kwargs)
    return [{**p.to_dict(), "label": data.labels[p.index]} for p in points]


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    sources = [args.input is not None, args.generate is not None, args.text_file is not None]
    if sum(sources) != 1:
        parser.error("give exactly one of INPUT, --generate or --text-file")
    setup_logging(args.log_level)

    try:
        records = run(args)
    except (InvalidInputError, OSError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    text = json.dumps(records, indent=2)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text)
        logger.info("Wrote %d points to %s", len(records), args.output)
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
