"""
Regression diagnostics.

Converts a fitted OLS regression into a fixed bundle of goodness-of-fit
and assumption-check statistics for model comparison.

Public API:
    FittedModel                      - immutable record of an OLS fit
    ModelEvaluator(het_test).evaluate(model) -> DiagnosticReport
    evaluate(model, het_test=...)    - functional form of the above
    compare(models, sort_by='aic')   - ranked comparison table (DataFrame)
    heteroscedasticity_test(e, X)    - Breusch-Pagan / White tests
    mean_absolute_percentage_error(y, e)

Conventions:
    AIC = n ln(RSS/n) + 2(p + 1) + n ln(2π) + n, i.e. -2 log L + 2(p + 1)
    with the error variance not counted. This matches statsmodels' OLS
    AIC and is 2 less than R's AIC(lm).
"""

from pyregdiag.diagnostics._common import (
    AIC_CONVENTION,
    DEFAULT_HET_TEST,
    VALID_HET_TESTS,
    HeteroscedasticityTest,
)
from pyregdiag.diagnostics._metrics import mean_absolute_percentage_error
from pyregdiag.diagnostics._heteroscedasticity import heteroscedasticity_test
from pyregdiag.diagnostics.design import FittedModel
from pyregdiag.diagnostics.solution import DiagnosticReport
from pyregdiag.diagnostics.solvers import ModelEvaluator, evaluate, compare

__all__ = [
    "FittedModel",
    "DiagnosticReport",
    "HeteroscedasticityTest",
    "ModelEvaluator",
    "evaluate",
    "compare",
    "heteroscedasticity_test",
    "mean_absolute_percentage_error",
    "AIC_CONVENTION",
    "DEFAULT_HET_TEST",
    "VALID_HET_TESTS",
]
