"""
DiagnosticReport: the user-facing result of evaluating a FittedModel.

The report holds only plain scalars, so two evaluations of the same model
compare equal with ==. Timing is deliberately absent for the same reason.
"""

from dataclasses import dataclass, field
from typing import Any

from pyregdiag.diagnostics._common import AIC_CONVENTION, HeteroscedasticityTest


@dataclass(frozen=True)
class DiagnosticReport:
    """
    Goodness-of-fit and diagnostic statistics for one OLS fit.

    Attributes:
        n_observations: Sample size n
        n_predictors: Predictors p, intercept excluded
        df_model: Numerator degrees of freedom of the F-test (p)
        df_residual: n - p - 1
        r_squared: 1 - RSS/TSS
        adjusted_r_squared: 1 - (1 - R²)(n - 1)/(n - p - 1)
        f_statistic: Overall F statistic (inf for a perfect fit)
        f_p_value: Upper tail of F(p, n - p - 1)
        mse: RSS / n
        rmse: sqrt(MSE)
        mape: Mean |residual / response| over defined terms, None if none are
        mape_n_omitted: Observations left out of MAPE (zero or missing response)
        log_likelihood: Gaussian log-likelihood at sigma² = RSS/n
        aic: -2 log L + 2(p + 1)
        bic: -2 log L + ln(n)(p + 1)
        aic_convention: Human-readable statement of the AIC convention
        heteroscedasticity: Auxiliary-regression test of the residual variance
        warnings: Non-fatal issues found while evaluating
    """
    n_observations: int
    n_predictors: int
    df_model: int
    df_residual: int
    r_squared: float
    adjusted_r_squared: float
    f_statistic: float
    f_p_value: float
    mse: float
    rmse: float
    mape: float | None
    mape_n_omitted: int
    log_likelihood: float
    aic: float
    bic: float
    heteroscedasticity: HeteroscedasticityTest
    aic_convention: str = AIC_CONVENTION
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)

    def to_dict(self) -> dict[str, Any]:
        """Flat dictionary of the report (heteroscedasticity fields prefixed 'het_')."""
        het = self.heteroscedasticity
        return {
            'n_observations': self.n_observations,
            'n_predictors': self.n_predictors,
            'df_model': self.df_model,
            'df_residual': self.df_residual,
            'r_squared': self.r_squared,
            'adjusted_r_squared': self.adjusted_r_squared,
            'f_statistic': self.f_statistic,
            'f_p_value': self.f_p_value,
            'mse': self.mse,
            'rmse': self.rmse,
            'mape': self.mape,
            'mape_n_omitted': self.mape_n_omitted,
            'log_likelihood': self.log_likelihood,
            'aic': self.aic,
            'bic': self.bic,
            'het_method': het.method,
            'het_statistic': het.statistic,
            'het_df': het.df,
            'het_p_value': het.p_value,
            'aic_convention': self.aic_convention,
            'warnings': list(self.warnings),
        }

    def summary(self) -> str:
        """Generate an R-style diagnostic summary."""
        het = self.heteroscedasticity
        if self.mape is None:
            mape_str = "NA (no defined terms)"
        else:
            mape_str = f"{self.mape:.6f}"
        if self.mape_n_omitted:
            mape_str += f"  [{self.mape_n_omitted} obs. omitted: zero or missing response]"

        lines = [
            "Regression Diagnostics",
            "=" * 60,
            f"Observations: {self.n_observations}",
            f"Predictors: {self.n_predictors}",
            "",
            f"R-squared: {self.r_squared:.6f}",
            f"Adj. R-squared: {self.adjusted_r_squared:.6f}",
            f"F-statistic: {self.f_statistic:.4f} on {self.df_model} and "
            f"{self.df_residual} DF,  p-value: {self.f_p_value:.4e}",
            f"MSE: {self.mse:.6g}",
            f"RMSE: {self.rmse:.6g}",
            f"MAPE: {mape_str}",
            "",
            f"Log-likelihood: {self.log_likelihood:.4f}",
            f"AIC: {self.aic:.4f}",
            f"BIC: {self.bic:.4f}",
            f"  ({self.aic_convention})",
            "",
            f"{het.label}:",
            f"  statistic = {het.statistic:.4f}, df = {het.df}, p-value = {het.p_value:.4e}",
        ]
        if self.warnings:
            lines.append("")
            lines.append("Warnings:")
            lines.extend(f"  - {w}" for w in self.warnings)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"DiagnosticReport(n={self.n_observations}, p={self.n_predictors}, "
            f"r_squared={self.r_squared:.4f}, aic={self.aic:.4f})"
        )
