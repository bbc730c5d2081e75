"""
Configuration management for Embedding Viz.

Loads projection defaults from environment variables (typically from a .env
file). Uses python-dotenv to load .env automatically.

Usage:
    from embedding_viz.config import config

    defaults = config.projection
    points = project(vectors, method=defaults.method, **defaults.tsne_kwargs())
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from dotenv import load_dotenv

# Look for .env in project root (parent of src/)
env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

ENV_PREFIX = "EMBEDDING_VIZ_"


@dataclass
class ProjectionDefaults:
    """Default projection settings."""
    method: str = "tsne"
    perplexity: float = 30.0
    learning_rate: float = 200.0
    iterations: int = 500
    seed: Optional[int] = None
    log_level: str = "INFO"

    def __post_init__(self):
        """Normalize the method and log level names."""
        self.method = self.method.strip().lower()
        self.log_level = self.log_level.strip().upper()

    def tsne_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for project_nonlinear."""
        return {
            "perplexity": self.perplexity,
            "learning_rate": self.learning_rate,
            "iterations": self.iterations,
            "seed": self.seed,
        }


def _env(name: str, cast: Callable[[str], Any], default: Any) -> Any:
    """Read ``EMBEDDING_VIZ_<name>`` and convert it, or return the default."""
    key = ENV_PREFIX + name
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ValueError(f"Invalid value for {key}: {raw!r}") from e


class Config:
    """
    Application configuration loaded from environment variables.

    Environment variables can be set:
    1. In a .env file in the project root
    2. In the system environment
    """

    def __init__(self):
        """Load configuration from environment."""
        self.projection = ProjectionDefaults(
            method=_env("METHOD", str, "tsne"),
            perplexity=_env("PERPLEXITY", float, 30.0),
            learning_rate=_env("LEARNING_RATE", float, 200.0),
            iterations=_env("ITERATIONS", int, 500),
            seed=_env("SEED", int, None),
            log_level=_env("LOG_LEVEL", str, "INFO"),
        )


# Global config instance
config = Config()
