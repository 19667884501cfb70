# accelstats/utils/__init__.py
"""Utility functions module."""
from .helpers import (
    InvalidInputError,
    as_float_matrix,
    as_float_vector,
    check_n_boot,
    normalize_ci_level,
)

__all__ = [
    "InvalidInputError",
    "as_float_matrix",
    "as_float_vector",
    "check_n_boot",
    "normalize_ci_level",
]
