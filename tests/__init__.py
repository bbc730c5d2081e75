"""
Test suite for Embedding Viz.

This package contains all tests organized by component:
- test_algorithms/: Tests for the linear and nonlinear projectors
- test_data/: Tests for input adapters
"""
