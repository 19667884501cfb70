"""Estimator exports.

Least-squares estimator and its result container.
"""
from __future__ import annotations

from .base import EstimationResult
from .ols import OLS

__all__ = [
    "OLS",
    "EstimationResult",
]
