import warnings
from dataclasses import dataclass
from typing import Any, Tuple

import numpy as np
import pandas as pd
import statsmodels.api as sm
from statsmodels.tools.sm_exceptions import (
    ConvergenceWarning,
    PerfectSeparationError,
    PerfectSeparationWarning,
)

from .errors import ConvergenceError, SingularDesignError
from .schema import DIABETES
from .utils.logger import get_logger

INTERCEPT = "const"


@dataclass(frozen=True)
class FittedModel:
    """Immutable logistic regression fit: coefficients plus the statsmodels result."""

    feature_names: Tuple[str, ...]
    params: pd.Series
    std_errors: pd.Series
    p_values: pd.Series
    n_iter: int
    n_obs: int
    result: Any

    @property
    def intercept(self) -> float:
        return float(self.params[INTERCEPT])

    @property
    def coefficients(self) -> pd.Series:
        return self.params.drop(INTERCEPT)

    def design_matrix(self, df: pd.DataFrame) -> pd.DataFrame:
        missing = [c for c in self.feature_names if c not in df.columns]
        if missing:
            raise KeyError(f"Columns missing for prediction: {missing}")
        X = df[list(self.feature_names)].astype(float)
        return sm.add_constant(X, prepend=True, has_constant="add")

    def predict_proba(self, df: pd.DataFrame) -> np.ndarray:
        """P(target=1) per row of ``df``."""
        X = self.design_matrix(df)
        return np.asarray(self.result.predict(X), dtype=float)

    def coefficient_table(self) -> pd.DataFrame:
        table = pd.DataFrame(
            {
                "coef": self.params,
                "std_err": self.std_errors,
                "z": self.params / self.std_errors,
                "p_value": self.p_values,
                "odds_ratio": np.exp(self.params),
            }
        )
        table.index.name = "term"
        return table


class ModelTrainer:
    """
    Fits a binomial GLM (logit link) by iteratively reweighted least squares.

    All non-target columns are used as features. The design matrix is checked
    for rank deficiency before fitting; optimizer failures surface as
    :class:`ConvergenceError`.
    """

    SEPARATION_ATOL = 1e-6

    def __init__(self, target_col: str = DIABETES, max_iter: int = 100, tol: float = 1e-8):
        self.target_col = target_col
        self.max_iter = max_iter
        self.tol = tol
        self.logger = get_logger(self.__class__.__name__)

    @staticmethod
    def _check_rank(X: pd.DataFrame) -> None:
        rank = np.linalg.matrix_rank(X.to_numpy(dtype=float))
        if rank < X.shape[1]:
            constant = [
                c for c in X.columns if c != INTERCEPT and X[c].nunique(dropna=False) <= 1
            ]
            raise SingularDesignError(
                f"design matrix has rank {rank} < {X.shape[1]} columns"
                + (f"; constant columns: {constant}" if constant else "; collinear predictors"),
                columns=constant,
            )

    def fit(self, train_df: pd.DataFrame) -> FittedModel:
        feature_names = tuple(c for c in train_df.columns if c != self.target_col)
        if not feature_names:
            raise SingularDesignError("no feature columns to fit")

        # oversampled frames carry duplicate index labels
        train_df = train_df.reset_index(drop=True)
        y = train_df[self.target_col].astype(int).to_numpy()
        X = sm.add_constant(
            train_df[list(feature_names)].astype(float), prepend=True, has_constant="add"
        )
        self._check_rank(X)

        glm = sm.GLM(y, X, family=sm.families.Binomial())
        with warnings.catch_warnings():
            warnings.simplefilter("error", PerfectSeparationWarning)
            warnings.simplefilter("error", ConvergenceWarning)
            try:
                result = glm.fit(method="IRLS", maxiter=self.max_iter, tol=self.tol)
            except (PerfectSeparationError, PerfectSeparationWarning) as exc:
                raise ConvergenceError(f"perfect separation detected: {exc}") from exc
            except ConvergenceWarning as exc:
                raise ConvergenceError(
                    f"IRLS did not converge within {self.max_iter} iterations"
                ) from exc

        if not getattr(result, "converged", True):
            raise ConvergenceError(f"IRLS did not converge within {self.max_iter} iterations")
        if np.allclose(np.asarray(result.fittedvalues), y, atol=self.SEPARATION_ATOL):
            raise ConvergenceError("perfect separation detected: fitted probabilities equal the labels")

        n_iter = int(result.fit_history.get("iteration", 0))
        self.logger.info(
            f"Fitted logistic regression on {len(y):,} rows, {len(feature_names)} features "
            f"({n_iter} IRLS iterations, deviance={result.deviance:.2f})"
        )

        return FittedModel(
            feature_names=feature_names,
            params=result.params.copy(),
            std_errors=result.bse.copy(),
            p_values=result.pvalues.copy(),
            n_iter=n_iter,
            n_obs=int(result.nobs),
            result=result,
        )
