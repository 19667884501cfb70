"""accelstats: vectorised statistical kernels.

NA-aware means, column coefficients of variation, bootstrap median
confidence intervals, least-squares fits with accuracy metrics, and
random-walk simulation, built on NumPy/SciPy.
"""
from __future__ import annotations

from importlib import import_module
from typing import Any

__version__ = "0.1.0"

__all__ = [
    "OLS",
    "BootConfig",
    "EstimationResult",
    "InvalidInputError",
    "boot_median_ci",
    "col_cvs",
    "fit_metrics",
    "lm_coef",
    "mean",
    "modelsummary",
    "na_omit",
    "random_walk",
]

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "BootConfig": ("accelstats.core.bootstrap", "BootConfig"),
    "boot_median_ci": ("accelstats.core.bootstrap", "boot_median_ci"),
    "col_cvs": ("accelstats.core.descriptive", "col_cvs"),
    "mean": ("accelstats.core.descriptive", "mean"),
    "na_omit": ("accelstats.core.descriptive", "na_omit"),
    "lm_coef": ("accelstats.core.linalg", "lm_coef"),
    "EstimationResult": ("accelstats.estimators.base", "EstimationResult"),
    "OLS": ("accelstats.estimators.ols", "OLS"),
    "fit_metrics": ("accelstats.output.summary", "fit_metrics"),
    "modelsummary": ("accelstats.output.summary", "modelsummary"),
    "random_walk": ("accelstats.sim.montecarlo", "random_walk"),
    "InvalidInputError": ("accelstats.utils.helpers", "InvalidInputError"),
}


def __getattr__(name: str) -> Any:
    """Lazily import public functions and classes on first access."""
    if name in _LAZY_IMPORTS:
        module_name, attr_name = _LAZY_IMPORTS[name]
        module = import_module(module_name)
        attr = getattr(module, attr_name)
        globals()[name] = attr
        return attr
    raise AttributeError(f"module 'accelstats' has no attribute '{name}'")


def __dir__() -> list[str]:
    """Ensure dir() exposes lazily imported names."""
    return sorted(set(globals()) | set(__all__))
