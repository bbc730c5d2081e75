"""
Error types for Embedding Viz.
"""


class InvalidInputError(ValueError):
    """
    Raised when a projection receives unusable input.

    Covers empty or ragged matrices, non-finite values, and out-of-range
    options (perplexity, learning rate, iteration count). Raised before any
    computation starts.
    """
