# accelstats/output/__init__.py
"""Fit metrics and summary tables."""
from .summary import fit_metrics, modelsummary

__all__ = [
    "fit_metrics",
    "modelsummary",
]
