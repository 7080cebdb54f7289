"""Branching story script interpreter."""

__version__ = "0.1.0"
