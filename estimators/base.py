"""Estimation results container.

A plain dataclass holding coefficients, fitted values and residuals of a
least-squares fit, plus estimator metadata.
"""

# accelstats/estimators/base.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pandas as pd

__all__ = ["EstimationResult"]


@dataclass
class EstimationResult:
    """Container for estimation results.

    Stores parameter estimates together with the fitted values and residuals
    they imply, so that fit metrics can be derived without the original data
    (``fitted + resid`` recovers the response).
    """

    params: pd.Series
    fitted: pd.Series
    resid: pd.Series
    n_obs: int | None = None
    model_info: dict[str, Any] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)
    """Dictionary for estimator-specific diagnostics."""

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        head = ", ".join(f"{k}={v}" for k, v in self.model_info.items())
        return f"EstimationResult(k={len(self.params)}, n={self.n_obs}, {head})"

    @property
    def response(self) -> pd.Series:
        """Observed outcome reconstructed as fitted + residuals."""
        return self.fitted + self.resid
