"""Correlate year-over-year genre popularity with unemployment, on Spark."""

__version__ = "0.1.0"
