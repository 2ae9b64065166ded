"""
Benchmark suite for toggle membership strategies.

This package runs plans of toggle cases across collection types and container
sizes, collects per-run timings into DataFrames, and renders charts comparing
the strategies.
"""

from .main import main

__all__ = ["main"]
