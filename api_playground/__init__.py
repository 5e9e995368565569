"""API Playground: a request proxy with per-user history, diffing and analysis."""

__version__ = "1.0.0"
