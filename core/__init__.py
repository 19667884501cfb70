# accelstats/core/__init__.py
"""Core computational modules for accelstats."""
from . import backend, bootstrap, descriptive, linalg

__all__ = ["backend", "bootstrap", "descriptive", "linalg"]
