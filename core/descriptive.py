"""Descriptive statistics kernels.

NA-aware means and column-wise coefficients of variation.
"""

from __future__ import annotations

import warnings
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import numpy as np
import pandas as pd

from accelstats.utils.helpers import InvalidInputError, as_float_matrix, as_float_vector

if TYPE_CHECKING:
    from numpy.typing import NDArray

__all__ = ["col_cvs", "mean", "na_omit"]

_MEAN_METHODS = {"sum", "dot"}


def na_omit(x: Any) -> NDArray[np.float64]:
    """Return ``x`` as a float64 vector with missing values removed."""
    xa = as_float_vector(x)
    return xa[~np.isnan(xa)]


def mean(x: Any, *, na_rm: bool = False, method: str = "sum") -> float:
    """Arithmetic mean of a numeric vector.

    ``method="sum"`` divides the total by n; ``method="dot"`` takes the inner
    product with uniform weights 1/n. Without ``na_rm`` a missing value makes
    the result NaN.
    """
    if method not in _MEAN_METHODS:
        raise ValueError("method must be one of {'sum','dot'}")
    xa = na_omit(x) if na_rm else as_float_vector(x)
    n = xa.size
    if n == 0:
        warnings.warn("mean of an empty vector is undefined; returning NaN.", RuntimeWarning, stacklevel=2)
        return float("nan")
    if method == "dot":
        weights = np.full(n, 1.0 / n)
        return float(np.dot(xa, weights))
    return float(np.sum(xa) / n)


def _column_names(X: Any, k: int) -> list[str]:
    cols = getattr(X, "columns", None)
    if cols is not None:
        return [str(c) for c in cols]
    return [f"x{j}" for j in range(k)]


def col_cvs(
    X: Any, *, var_names: Sequence[str] | None = None, as_frame: bool = True,
) -> pd.DataFrame | dict[str, NDArray[np.float64]]:
    """Column means, standard deviations and coefficients of variation.

    The standard deviation uses the moment form
    ``sqrt(n / (n - 1) * (mean(x**2) - mean(x)**2))`` and the CV is
    ``100 * sd / mean`` (in percent).

    Returns a DataFrame indexed by column name with columns
    ``means, sds, cvs``, or a dict of arrays when ``as_frame`` is False.
    """
    Xd = as_float_matrix(X)
    n, k = Xd.shape
    if n < 2:
        raise InvalidInputError("col_cvs requires at least 2 rows.")
    means = Xd.mean(axis=0)
    means_sq = (Xd ** 2).mean(axis=0)
    # rounding can push the moment difference slightly below zero
    var = np.maximum(float(n) / (n - 1) * (means_sq - means ** 2), 0.0)
    sds = np.sqrt(var)
    with np.errstate(divide="ignore", invalid="ignore"):
        cvs = 100.0 * sds / means
    if np.any(means == 0.0):
        warnings.warn(
            "Zero column mean encountered; its coefficient of variation is not finite.",
            RuntimeWarning,
            stacklevel=2,
        )
    if not as_frame:
        return {"means": means, "sds": sds, "cvs": cvs}
    names = list(var_names) if var_names is not None else _column_names(X, k)
    if len(names) != k:
        raise ValueError(f"var_names has {len(names)} entries but X has {k} columns.")
    return pd.DataFrame({"means": means, "sds": sds, "cvs": cvs}, index=names)
