"""Byte and substring search routines with a small benchmark harness."""

__version__ = "0.1.0"

__all__ = ["__version__"]