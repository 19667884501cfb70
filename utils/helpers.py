"""Shared input helpers.

Coercion of vectors/matrices to float64 arrays, missing-value handling, and
argument validation used across the core kernels and estimators.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np

if TYPE_CHECKING:  # pragma: no cover - import only for type checking
    from numpy.typing import NDArray

__all__ = [
    "InvalidInputError",
    "as_float_matrix",
    "as_float_vector",
    "check_n_boot",
    "normalize_ci_level",
]


class InvalidInputError(ValueError):
    """Raised when caller input cannot produce a defined result."""


def _to_numpy(x: Any) -> NDArray[np.float64]:
    # pandas nullable dtypes carry pd.NA, which np.asarray cannot cast to float
    if hasattr(x, "to_numpy"):
        try:
            return np.asarray(x.to_numpy(dtype=np.float64, na_value=np.nan), dtype=np.float64)
        except TypeError:
            return np.asarray(x.to_numpy(), dtype=np.float64)
    return np.asarray(x, dtype=np.float64)


def as_float_vector(x: Any, *, name: str = "x") -> NDArray[np.float64]:
    """Return ``x`` as a 1D float64 array; ``None`` entries become NaN."""
    try:
        arr = _to_numpy(x)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"{name} must be a numeric sequence.") from exc
    if arr.ndim == 0:
        arr = arr.reshape(1)
    if arr.ndim == 2 and 1 in arr.shape:
        arr = arr.reshape(-1)
    if arr.ndim != 1:
        raise InvalidInputError(f"{name} must be 1D.")
    return arr


def as_float_matrix(X: Any, *, name: str = "X") -> NDArray[np.float64]:
    """Return ``X`` as a 2D float64 array (a vector becomes one column)."""
    try:
        arr = _to_numpy(X)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"{name} must be numeric.") from exc
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    if arr.ndim != 2:
        raise InvalidInputError(f"{name} must be 2D.")
    return arr


def check_n_boot(n_boot: Any) -> int:
    """Validate the number of bootstrap replications."""
    if isinstance(n_boot, (bool, np.bool_)):
        raise InvalidInputError("n_boot must be a positive integer.")
    try:
        B = int(n_boot)
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidInputError("n_boot must be a positive integer.") from exc
    if B != n_boot or B < 1:
        raise InvalidInputError("n_boot must be a positive integer.")
    return B


def normalize_ci_level(level: float | None, *, default: float = 0.95) -> float:
    """Normalize a confidence level to a probability in (0, 1).

    Unlike percentage-style helpers, values outside (0, 1) are rejected rather
    than rescaled: ``95`` is an error, not ``0.95``.
    """
    if level is None:
        level = default
    try:
        coerced = float(level)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError("ci_level must be a number in (0, 1).") from exc
    if not (0.0 < coerced < 1.0):
        raise InvalidInputError("ci_level must be in (0, 1); supply e.g. 0.95")
    return coerced
