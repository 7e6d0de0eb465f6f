"""
Common data types and constants for regression diagnostics.

HeteroscedasticityTest is a pure data container, nested inside
DiagnosticReport.
"""

from dataclasses import dataclass

from pyregdiag.regression.design import INTERCEPT_NAME

# Heteroscedasticity test variants
HET_BREUSCH_PAGAN = 'breusch_pagan'                  # Koenker's studentized form
HET_BREUSCH_PAGAN_CLASSIC = 'breusch_pagan_classic'  # Breusch & Pagan (1979)
HET_WHITE = 'white'

VALID_HET_TESTS = (HET_BREUSCH_PAGAN, HET_BREUSCH_PAGAN_CLASSIC, HET_WHITE)
DEFAULT_HET_TEST = HET_BREUSCH_PAGAN

HET_TEST_LABELS = {
    HET_BREUSCH_PAGAN: "studentized Breusch-Pagan test",
    HET_BREUSCH_PAGAN_CLASSIC: "Breusch-Pagan test",
    HET_WHITE: "White's test",
}

# AIC = -2 log L + 2 (p + 1), with the Gaussian log-likelihood evaluated at
# sigma² = RSS / n. The error variance is not counted as a parameter.
AIC_CONVENTION = (
    "-2*loglik + 2*(p + 1), Gaussian loglik at sigma^2 = RSS/n, "
    "error variance not counted"
)

# Columns of the comparison table that are better when smaller
LOWER_IS_BETTER = ('aic', 'bic', 'mse', 'rmse', 'mape')
# ... and when larger
HIGHER_IS_BETTER = ('r_squared', 'adjusted_r_squared', 'log_likelihood')


@dataclass(frozen=True)
class HeteroscedasticityTest:
    """Result of an auxiliary-regression heteroscedasticity test."""
    method: str          # one of VALID_HET_TESTS
    statistic: float     # LM statistic, chi-squared under homoscedasticity
    df: int
    p_value: float

    @property
    def label(self) -> str:
        return HET_TEST_LABELS[self.method]


__all__ = [
    'INTERCEPT_NAME',
    'HET_BREUSCH_PAGAN',
    'HET_BREUSCH_PAGAN_CLASSIC',
    'HET_WHITE',
    'VALID_HET_TESTS',
    'DEFAULT_HET_TEST',
    'AIC_CONVENTION',
    'LOWER_IS_BETTER',
    'HIGHER_IS_BETTER',
    'HeteroscedasticityTest',
]
