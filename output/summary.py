"""Fit metrics and plain-text / LaTeX summary tables for linear fits."""

from __future__ import annotations

from collections.abc import Sequence
from typing import cast

import numpy as np
import pandas as pd
from tabulate import tabulate

from accelstats.estimators.base import EstimationResult

__all__ = ["FIT_METRICS", "fit_metrics", "modelsummary"]

FIT_METRICS = ("MSE", "RMSE", "MAE", "MAPE", "AMAPE", "MedAE", "MSLE", "R2")


def fit_metrics(res: EstimationResult) -> pd.DataFrame:
    """One-row table of forecast-accuracy metrics for a fitted linear model.

    The observed outcome is recovered as ``fitted + resid``. Percentage errors
    divide by the observed value without taking its absolute value, and MSLE
    uses ``log(1 + value)``; both are undefined (NaN) when an observation makes
    the denominator or logarithm argument non-positive.
    """
    if not isinstance(res, EstimationResult):
        raise TypeError("The argument must be an OLS EstimationResult.")
    forecast = np.asarray(res.fitted, dtype=np.float64)
    resid = np.asarray(res.resid, dtype=np.float64)
    if forecast.shape != resid.shape or forecast.size == 0:
        raise ValueError("EstimationResult must hold non-empty fitted values and residuals of equal length.")
    real = forecast + resid
    absresid = np.abs(resid)

    with np.errstate(divide="ignore", invalid="ignore"):
        mse = float(np.mean(resid**2))
        tss = float(np.sum((real - np.mean(real)) ** 2))
        rss = float(np.sum((forecast - real) ** 2))
        row = {
            "MSE": mse,
            "RMSE": float(np.sqrt(mse)),
            "MAE": float(np.mean(absresid)),
            "MAPE": float(np.mean(absresid / real)),
            "AMAPE": float(np.mean(absresid / (real + forecast))),
            "MedAE": float(np.median(absresid)),
            "MSLE": float(np.mean((np.log1p(real) - np.log1p(forecast)) ** 2)),
            "R2": (1.0 - rss / tss) if tss > 0.0 else float("nan"),
        }
    return pd.DataFrame([row], columns=list(FIT_METRICS))


def _format_value(val: object, digits: int) -> str:
    if val is None:
        return ""
    if isinstance(val, (float, np.floating)):
        return "" if not np.isfinite(val) else f"{float(val):.{digits}f}"
    return str(val)


def modelsummary(
    results: EstimationResult | Sequence[EstimationResult],
    model_names: Sequence[str] | None = None,
    *,
    digits: int = 4,
    metrics: Sequence[str] = ("RMSE", "R2"),
    latex: bool = False,
) -> str:
    """Side-by-side coefficient table for one or more fits.

    Coefficients are ordered by first appearance across ``results``; a term
    absent from a model is left blank. The footer lists N and the requested
    ``metrics`` from :func:`fit_metrics`.
    """
    res_list = [results] if isinstance(results, EstimationResult) else list(results)
    if not res_list:
        raise ValueError("modelsummary requires at least one result.")
    names = list(model_names) if model_names is not None else [f"({i + 1})" for i in range(len(res_list))]
    if len(names) != len(res_list):
        raise ValueError("model_names must match the number of results.")
    unknown = [m for m in metrics if m not in FIT_METRICS]
    if unknown:
        raise ValueError(f"Unknown metric(s): {', '.join(unknown)}")

    terms: list[str] = []
    for res in res_list:
        for name in res.params.index:
            if name not in terms:
                terms.append(name)

    rows = [
        [term, *(_format_value(res.params.get(term), digits) for res in res_list)]
        for term in terms
    ]
    rows.append(["" for _ in range(len(res_list) + 1)])
    rows.append(["N", *(_format_value(res.n_obs, digits) for res in res_list)])
    tables = [fit_metrics(res) for res in res_list]
    rows.extend(
        [m, *(_format_value(float(tbl.at[0, m]), digits) for tbl in tables)]
        for m in metrics
    )
    headers = ["", *names]
    tablefmt = "latex_booktabs" if latex else "simple"
    return cast("str", tabulate(rows, headers=headers, stralign="center", tablefmt=tablefmt))
