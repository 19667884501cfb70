"""Demonstration of the accelstats kernels.

Runs each routine on simulated data and prints the results: means with
missing values, column CVs, bootstrap median CIs, least-squares fits with
accuracy metrics, and a random walk.
"""

from __future__ import annotations

import logging
import warnings
from typing import Callable

import numpy as np
import pandas as pd

from .core import linalg as la
from .core.bootstrap import BootConfig, boot_median_ci
from .core.descriptive import col_cvs, mean
from .estimators import OLS
from .output import fit_metrics, modelsummary
from .sim.montecarlo import random_walk, simulate_ols_data

_LOGGER = logging.getLogger(__name__)
SOFT_FAILURE_EXCEPTIONS: tuple[type[Exception], ...] = (
    RuntimeError,
    ValueError,
    np.linalg.LinAlgError,
    KeyError,
    TypeError,
)


def _run_demo_block(label: str, func: Callable[[], None]) -> None:
    """Execute a demonstration function, logging any soft failures."""
    try:
        func()
    except SOFT_FAILURE_EXCEPTIONS as exc:
        _LOGGER.debug("%s demo failed: %s", label, exc)
        print(f"\n[{label} demo failed: {exc}]")


def _header(title: str) -> None:
    print("\n" + "=" * 70)
    print(f" {title}")
    print("=" * 70)


def demo_descriptive():
    """Means with missing values and column coefficients of variation."""
    _header("1. MEANS AND COEFFICIENTS OF VARIATION")
    rng = np.random.default_rng(42)
    x = rng.standard_normal(10)
    x[[2, 4]] = np.nan
    print(f"mean (NA kept):      {mean(x)}")
    print(f"mean (NA dropped):   {mean(x, na_rm=True):.6f}")
    print(f"mean via inner prod: {mean(x, na_rm=True, method='dot'):.6f}")

    X = pd.DataFrame(rng.normal(loc=[10.0, 50.0, 5.0], scale=[1.0, 10.0, 2.0], size=(200, 3)),
                     columns=["a", "b", "c"])
    print("\nColumn CVs (%):")
    print(col_cvs(X))


def demo_bootstrap():
    """Bootstrap median confidence intervals."""
    _header("2. BOOTSTRAP MEDIAN CONFIDENCE INTERVALS")
    rng = np.random.default_rng(7)
    x = rng.lognormal(mean=0.0, sigma=1.0, size=150)
    x[:5] = np.nan
    print(f"sample median: {np.nanmedian(x):.4f}")
    for level in (0.90, 0.95, 0.99):
        lo, hi = boot_median_ci(x, 2000, level, seed=123)
        print(f"  {level:.0%} CI: [{lo:.4f}, {hi:.4f}]")
    cfg = BootConfig(n_boot=500, ci_level=0.9, seed=1)
    print(f"  BootConfig {cfg}: {boot_median_ci(x, boot=cfg)}")


def demo_linear_model():
    """Least squares by explicit inverse and by solve, with fit metrics."""
    _header("3. LINEAR REGRESSION AND FIT METRICS")
    y, X, beta_true = simulate_ols_data(n_obs=100, n_features=3, seed=42)
    print(f"True beta: {beta_true}")
    print(f"lm_coef (inv):   {la.lm_coef(y, X, method='inv')}")
    print(f"lm_coef (solve): {la.lm_coef(y, X, method='solve')}")

    res_arr = OLS(y, X, add_const=True).fit(method="inv")
    df = pd.concat([y, X], axis=1)
    res_frm = OLS.from_formula("y ~ x1 + x2 + x3", df).fit()
    print()
    print(modelsummary([res_arr, res_frm], ["arrays/inv", "formula/solve"]))
    print("\nFit metrics:")
    print(fit_metrics(res_frm).T)


def demo_random_walk():
    """Seeded Gaussian random walk."""
    _header("4. RANDOM WALK")
    path = random_walk(1000)
    print(f"length={path.size} last={path[-1]:.4f} min={path.min():.4f} max={path.max():.4f}")


def run_all_demos():
    """Run every demonstration block."""
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", category=RuntimeWarning)
        demo_tasks: list[tuple[str, Callable[[], None]]] = [
            ("Descriptive", demo_descriptive),
            ("Bootstrap", demo_bootstrap),
            ("Linear model", demo_linear_model),
            ("Random walk", demo_random_walk),
        ]
        for label, func in demo_tasks:
            _run_demo_block(label, func)
    print("\nDemo complete.\n")


if __name__ == "__main__":
    run_all_demos()
