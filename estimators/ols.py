"""Ordinary Least Squares (OLS) estimator.

Coefficients come from :func:`accelstats.core.linalg.lm_coef`, either through
the explicit normal-equation inverse or a least-squares solve.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Union

import numpy as np
import pandas as pd
import patsy

from accelstats.core import linalg as la
from accelstats.utils.helpers import as_float_matrix, as_float_vector

from .base import EstimationResult

if TYPE_CHECKING:
    from collections.abc import Sequence

_LOGGER = logging.getLogger(__name__)

ArrayLike = Union[pd.Series, np.ndarray[Any, np.dtype[np.float64]]]
MatrixLike = Union[pd.DataFrame, np.ndarray[Any, np.dtype[np.float64]]]

CONST_NAME = "_cons"


class OLS:
    """Ordinary Least Squares regression.

    Estimates y = Xβ + u.

    Parameters
    ----------
    y : array-like, shape (n,) or (n, 1)
        Dependent variable (outcome).
    X : array-like, shape (n, p)
        Independent variables (covariates). Can be numpy array or pandas DataFrame.
    add_const : bool, default=False
        If True, appends a constant column named ``_cons`` as the LAST column.
    var_names : Sequence[str], optional
        Variable names for X columns. If None and X is a DataFrame, uses X.columns.
        If None and X is array, generates names as ['x0', 'x1', ...].

    Rows with a missing or infinite value in y or X are dropped; the count is
    reported in ``model_info["dropped_na"]``.

    Examples
    --------
    >>> import numpy as np
    >>> from accelstats.estimators.ols import OLS
    >>> rng = np.random.default_rng(42)
    >>> X = rng.standard_normal((200, 2))
    >>> y = 1.0 + 2.0 * X[:, 0] + 1.5 * X[:, 1] + rng.standard_normal(200) * 0.5
    >>> res = OLS(y, X, add_const=True, var_names=["x1", "x2"]).fit()
    >>> res.params.index.tolist()
    ['x1', 'x2', '_cons']

    Formula interface (patsy, intercept included unless ``- 1``):

    >>> import pandas as pd
    >>> df = pd.DataFrame({"y": y, "x1": X[:, 0], "x2": X[:, 1]})
    >>> res = OLS.from_formula("y ~ x1 + x2", df).fit(method="inv")

    """

    def __init__(
        self,
        y: ArrayLike,
        X: MatrixLike,
        *,
        add_const: bool = False,
        var_names: Sequence[str] | None = None,
    ) -> None:
        Xd = as_float_matrix(X)
        yd = as_float_vector(y, name="y")
        if yd.shape[0] != Xd.shape[0]:
            raise ValueError(f"y has {yd.shape[0]} rows but X has {Xd.shape[0]}.")

        if var_names is not None:
            names = [str(v) for v in var_names]
        elif isinstance(X, pd.DataFrame):
            names = [str(c) for c in X.columns]
        else:
            names = [f"x{j}" for j in range(Xd.shape[1])]
        if len(names) != Xd.shape[1]:
            raise ValueError(f"var_names has {len(names)} entries but X has {Xd.shape[1]} columns.")

        if isinstance(y, pd.Series):
            index = y.index
        elif isinstance(X, pd.DataFrame):
            index = X.index
        else:
            index = pd.RangeIndex(yd.shape[0])

        keep = np.isfinite(yd) & np.all(np.isfinite(Xd), axis=1)
        self._dropped_na = int((~keep).sum())
        if self._dropped_na:
            _LOGGER.debug("OLS: dropping %d rows with NA/Inf", self._dropped_na)

        Xd = Xd[keep]
        self._const_name: str | None = None
        if add_const:
            Xd = np.column_stack([Xd, np.ones(Xd.shape[0])])
            names = [*names, CONST_NAME]
            self._const_name = CONST_NAME

        self.y_orig = yd[keep]
        self.X_orig = Xd
        self._var_names = names
        self._index = index[keep]
        self.formula: str | None = None

    @classmethod
    def from_formula(cls, formula: str, data: pd.DataFrame) -> OLS:
        """Build an OLS model from a patsy formula such as ``"y ~ x1 + np.log(x2)"``."""
        y_df, X_df = patsy.dmatrices(formula, data, return_type="dataframe", NA_action="drop")
        model = cls(y_df.iloc[:, 0], X_df)
        model._dropped_na += int(len(data) - len(y_df))
        if "Intercept" in X_df.columns:
            model._const_name = "Intercept"
        model.formula = formula
        return model

    @property
    def var_names(self) -> list[str]:
        return list(self._var_names)

    def fit(self, *, method: str = "solve") -> EstimationResult:
        """Fit the model by least squares (``method`` is ``"solve"`` or ``"inv"``)."""
        if self.X_orig.shape[0] == 0:
            raise ValueError("No complete observations left to fit.")
        beta = la.lm_coef(self.y_orig, self.X_orig, method=method)
        fitted = la.dot(self.X_orig, beta.reshape(-1, 1)).reshape(-1)
        resid = self.y_orig - fitted

        info: dict[str, Any] = {
            "Estimator": "OLS",
            "method": method,
            "dropped_na": self._dropped_na,
            "const_name": self._const_name,
        }
        if self.formula is not None:
            info["formula"] = self.formula
        return EstimationResult(
            params=pd.Series(beta, index=self._var_names, name="coef"),
            fitted=pd.Series(fitted, index=self._index, name="fitted"),
            resid=pd.Series(resid, index=self._index, name="resid"),
            n_obs=int(self.X_orig.shape[0]),
            model_info=info,
        )
