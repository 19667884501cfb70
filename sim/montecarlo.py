"""Random-walk and regression data simulation."""

from __future__ import annotations

import numpy as np
import pandas as pd

from accelstats.core import linalg as la
from accelstats.utils.helpers import InvalidInputError

__all__ = ["DEFAULT_WALK_SEED", "random_walk", "simulate_ols_data"]

DEFAULT_WALK_SEED = 987654321


def random_walk(n: int, seed: int | None = DEFAULT_WALK_SEED) -> np.ndarray:
    """Gaussian random walk: cumulative sum of ``n`` standard normal steps.

    The generator is seeded with ``seed`` on every call, so repeated calls
    return the same path.
    """
    if isinstance(n, (bool, np.bool_)):
        raise InvalidInputError("n must be a non-negative integer.")
    try:
        steps = int(n)
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidInputError("n must be a non-negative integer.") from exc
    if steps != n or steps < 0:
        raise InvalidInputError("n must be a non-negative integer.")
    rng = np.random.default_rng(seed)
    e = rng.standard_normal(steps)
    return np.cumsum(e)


def simulate_ols_data(
    n_obs: int = 100, n_features: int = 3, seed: int | None = 42
) -> tuple[pd.Series, pd.DataFrame, np.ndarray]:
    """Simulates linear-model data with coefficients 1..k and N(0, 1) errors."""
    rng = np.random.default_rng(seed)
    X = rng.random((n_obs, n_features))
    beta_true = np.arange(1, n_features + 1, dtype=np.float64)
    epsilon = rng.standard_normal(n_obs)
    y = la.dot(X, beta_true.reshape(-1, 1)).reshape(-1) + epsilon
    X_df = pd.DataFrame(X, columns=[f"x{i + 1}" for i in range(n_features)])
    return pd.Series(y, name="y"), X_df, beta_true
