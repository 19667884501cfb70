"""Linear algebra routines for least-squares fitting.

Cross products, finiteness checks, and regression coefficients computed
either through the explicit normal-equation inverse or a least-squares solve.
Dense products go through :mod:`accelstats.core.backend` so an enabled GPU is
used transparently.
"""

from __future__ import annotations

import warnings as _warnings
from typing import TYPE_CHECKING, Any

import numpy as np
import scipy.linalg as sla

from accelstats.utils.helpers import as_float_matrix, as_float_vector

from . import backend as _bk

if TYPE_CHECKING:
    from numpy.typing import NDArray
else:
    NDArray = np.ndarray  # type: ignore[misc,assignment]

__all__ = ["LM_METHODS", "crossprod", "dot", "lm_coef"]

# Matrix type alias
Matrix = Any

LM_METHODS = ("inv", "solve")


def _check_array_finiteness(arr: NDArray[np.float64]) -> None:
    """Helper to validate array finiteness with clear error message."""
    if not np.all(np.isfinite(arr)):
        raise ValueError(
            "Input contains NA/NaN/Inf; please drop/clean rows before fitting.",
        )


def _assert_all_finite(*arrays: NDArray[np.float64]) -> None:
    """Raise ValueError if any input contains NaN or Inf."""
    for a in arrays:
        if a is None:
            continue
        _check_array_finiteness(np.asarray(a))


def dot(A: Matrix, B: Matrix) -> NDArray[np.float64]:
    """Dense matrix multiplication (GPU fast-path when enabled)."""
    return _bk.dot(A, B)


def crossprod(X: Matrix, y: Matrix) -> NDArray[np.float64]:
    """Compute X'y as a 2D array (a vector ``y`` becomes one column)."""
    Xd = np.asarray(X, dtype=np.float64)
    yd = np.asarray(y, dtype=np.float64)
    if yd.ndim == 1:
        yd = yd.reshape(-1, 1)
    return dot(Xd.T, yd)


def lm_coef(y: Any, X: Any, *, method: str = "solve") -> NDArray[np.float64]:
    """Least-squares coefficients of ``y`` on ``X``.

    Parameters
    ----------
    y : array-like, shape (n,)
    X : array-like, shape (n, k)
    method : {"solve", "inv"}
        ``"inv"`` evaluates ``inv(X'X) X'y`` and requires full column rank.
        ``"solve"`` solves ``X b = y`` in the least-squares sense (SVD based),
        returning the minimum-norm solution for rank-deficient designs.

    Returns
    -------
    ndarray, shape (k,)

    """
    if method not in LM_METHODS:
        raise ValueError("method must be one of {'inv','solve'}")
    Xd = as_float_matrix(X)
    yd = as_float_vector(y, name="y")
    n, k = Xd.shape
    if yd.shape[0] != n:
        raise ValueError(f"y has {yd.shape[0]} rows but X has {n}.")
    if n == 0 or k == 0:
        raise ValueError("X must have at least one row and one column.")
    _assert_all_finite(Xd, yd)

    if method == "inv":
        if np.linalg.matrix_rank(Xd) < k:
            raise ValueError("X'X is singular (X is not full column rank); use method='solve'.")
        XtX = crossprod(Xd, Xd)
        Xty = crossprod(Xd, yd)
        try:
            XtX_inv = sla.inv(XtX)
        except np.linalg.LinAlgError as e:
            raise ValueError("X'X could not be inverted; use method='solve'.") from e
        return dot(XtX_inv, Xty).reshape(-1)

    # same relative singular-value cutoff as numpy.linalg.matrix_rank
    cond = float(np.finfo(np.float64).eps) * max(n, k)
    coef, _resid, rank, _sv = sla.lstsq(Xd, yd, cond=cond)
    if int(rank) < k:
        _warnings.warn(
            f"Design matrix is rank deficient (rank {int(rank)} < {k}); "
            "returning the minimum-norm solution.",
            RuntimeWarning,
            stacklevel=2,
        )
    return np.asarray(coef, dtype=np.float64).reshape(-1)
