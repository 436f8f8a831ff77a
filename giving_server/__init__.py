"""Charitable-giving REST backend."""

__version__ = "0.3.0"
