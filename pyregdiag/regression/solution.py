"""
OLS fit results: the backend payload and the LinearSolution wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray
from scipy import linalg as sp_linalg
from scipy import stats as sp_stats

from pyregdiag.core.result import Result
from pyregdiag.core.exceptions import ValidationError

if TYPE_CHECKING:
    from pyregdiag.regression.design import Design
    from pyregdiag.diagnostics import FittedModel


@dataclass(frozen=True)
class LinearParams:
    """What a backend returns for one OLS fit."""
    coefficients: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    rss: float
    tss: float
    rank: int
    df_residual: int


def _na(value: float, fmt: str, width: int) -> str:
    return f"{value:{fmt}}" if np.isfinite(value) else "NA".rjust(width)


@dataclass
class LinearSolution:
    """
    Result of fit(): coefficients, residuals and coefficient inference.

    Standard errors, t statistics and p-values use the usual homoscedastic
    covariance s² (X'X)⁻¹ with s² = RSS / (n - rank). They are NaN when
    no residual degrees of freedom remain.
    """
    _result: Result[LinearParams]
    _design: 'Design'
    _cache: dict[str, NDArray[np.floating[Any]]] = field(default_factory=dict, repr=False)

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        return self._result.params.coefficients

    @property
    def coefficient_names(self) -> tuple[str, ...]:
        return self._design.names

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.residuals

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.fitted_values

    @property
    def rss(self) -> float:
        return self._result.params.rss

    @property
    def tss(self) -> float:
        return self._result.params.tss

    @property
    def rank(self) -> int:
        return self._result.params.rank

    @property
    def df_residual(self) -> int:
        return self._result.params.df_residual

    @property
    def r_squared(self) -> float:
        """1 - RSS/TSS; TSS is about the mean only when the design has an intercept."""
        if self.tss == 0:
            return 1.0 if self.rss == 0 else 0.0
        return 1.0 - self.rss / self.tss

    @property
    def adjusted_r_squared(self) -> float:
        n, df = self._design.n, self.df_residual
        if df <= 0 or self.tss == 0:
            return self.r_squared
        df_total = n - 1 if self._design.has_intercept else n
        return 1.0 - (1.0 - self.r_squared) * df_total / df

    @property
    def residual_std_error(self) -> float:
        if self.df_residual <= 0:
            return 0.0
        return float(np.sqrt(self.rss / self.df_residual))

    @property
    def vcov(self) -> NDArray[np.floating[Any]]:
        """Estimated covariance matrix of the coefficients (p x p)."""
        if 'vcov' not in self._cache:
            k = len(self.coefficients)
            if self.df_residual <= 0:
                self._cache['vcov'] = np.full((k, k), np.nan)
            else:
                sigma_sq = self.rss / self.df_residual
                try:
                    factor = sp_linalg.cho_factor(self._design.XtX())
                    unscaled = sp_linalg.cho_solve(factor, np.eye(k))
                except np.linalg.LinAlgError:
                    unscaled = np.full((k, k), np.nan)
                self._cache['vcov'] = sigma_sq * unscaled
        return self._cache['vcov']

    @property
    def standard_errors(self) -> NDArray[np.floating[Any]]:
        return np.sqrt(np.diag(self.vcov))

    @property
    def t_statistics(self) -> NDArray[np.floating[Any]]:
        with np.errstate(divide='ignore', invalid='ignore'):
            t = self.coefficients / self.standard_errors
        return np.where(np.isfinite(t), t, np.nan)

    @property
    def p_values(self) -> NDArray[np.floating[Any]]:
        """Two-sided p-values of the t statistics."""
        if self.df_residual <= 0:
            return np.full(len(self.coefficients), np.nan)
        return 2.0 * sp_stats.t.sf(np.abs(self.t_statistics), self.df_residual)

    @property
    def design(self) -> 'Design':
        return self._design

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def to_fitted_model(self) -> 'FittedModel':
        """
        Freeze this fit into a FittedModel for diagnostic evaluation.

        Raises:
            ValidationError: If the design has no intercept column
        """
        from pyregdiag.diagnostics import FittedModel

        if not self._design.has_intercept:
            raise ValidationError(
                "to_fitted_model: diagnostics require a model with an intercept; "
                "refit with intercept=True"
            )
        return FittedModel.from_arrays(
            response=self._design.y,
            fitted_values=self.fitted_values,
            predictors=self._design.predictors,
            coefficients=dict(zip(self.coefficient_names, self.coefficients.tolist())),
            predictor_names=self._design.predictor_names,
        )

    def summary(self) -> str:
        """Coefficient table in the layout of R's summary.lm()."""
        rule = "-" * 72
        lines = [
            "Linear Regression Results",
            "=" * 72,
            f"Observations: {self._design.n}    Columns: {self._design.p}    Rank: {self.rank}",
            "",
            f"{'':<16} {'Estimate':>14} {'Std.Error':>12} {'t value':>10} {'Pr(>|t|)':>12}",
            rule,
        ]
        rows = zip(
            self.coefficient_names, self.coefficients,
            self.standard_errors, self.t_statistics, self.p_values,
        )
        for name, coef, se, t, pv in rows:
            lines.append(
                f"{name[:16]:<16} {coef:14.6f} {_na(se, '12.6f', 12)} "
                f"{_na(t, '10.3f', 10)} {_na(pv, '12.4e', 12)}"
            )
        lines += [
            rule,
            f"Residual standard error: {self.residual_std_error:.6f} "
            f"on {self.df_residual} degrees of freedom",
            f"R-squared: {self.r_squared:.6f},  Adjusted R-squared: {self.adjusted_r_squared:.6f}",
            f"Backend: {self.backend_name}",
        ]
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0.0):.4f}s")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LinearSolution(n={self._design.n}, p={self._design.p}, "
            f"rank={self.rank}, r_squared={self.r_squared:.4f})"
        )
