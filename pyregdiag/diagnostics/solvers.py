"""
Diagnostic evaluation.

Public API:
    ModelEvaluator(het_test=...).evaluate(model) -> DiagnosticReport
    evaluate(model, ...) -> DiagnosticReport
    compare(models, ...) -> pandas.DataFrame
"""

from __future__ import annotations

import math
import warnings
from collections.abc import Mapping
from typing import TYPE_CHECKING

import numpy as np

from pyregdiag.core.exceptions import (
    DegenerateResponse,
    InsufficientDegreesOfFreedom,
    ValidationError,
)
from pyregdiag.core.validation import check_choice
from pyregdiag.diagnostics._common import (
    AIC_CONVENTION,
    DEFAULT_HET_TEST,
    HIGHER_IS_BETTER,
    LOWER_IS_BETTER,
    VALID_HET_TESTS,
)
from pyregdiag.diagnostics._heteroscedasticity import heteroscedasticity_test
from pyregdiag.diagnostics._metrics import (
    adjusted_r_squared,
    f_test,
    gaussian_log_likelihood,
    information_criteria,
    mean_absolute_percentage_error,
    r_squared,
    sums_of_squares,
)
from pyregdiag.diagnostics.design import FittedModel
from pyregdiag.diagnostics.solution import DiagnosticReport

if TYPE_CHECKING:
    import pandas as pd


class ModelEvaluator:
    """
    Turns a FittedModel into a DiagnosticReport.

    The evaluator holds configuration only; evaluate() is a pure function
    of its argument, so one evaluator can be shared freely.

    Args:
        het_test: Heteroscedasticity test variant, one of
            'breusch_pagan' (default, Koenker's studentized form),
            'breusch_pagan_classic', 'white'

    Example:
        >>> evaluator = ModelEvaluator()
        >>> report = evaluator.evaluate(fit(X, y).to_fitted_model())
        >>> print(report.summary())
    """

    def __init__(self, het_test: str = DEFAULT_HET_TEST):
        self._het_test = check_choice(het_test, VALID_HET_TESTS, 'het_test')

    @property
    def het_test(self) -> str:
        return self._het_test

    def evaluate(self, model: FittedModel) -> DiagnosticReport:
        """
        Compute the diagnostic bundle for one fit.

        Args:
            model: The fit to evaluate

        Returns:
            DiagnosticReport

        Raises:
            InsufficientDegreesOfFreedom: If p < 1 or n - p - 1 <= 0
            DegenerateResponse: If the response has zero variance
        """
        return self._evaluate(model, stacklevel=3)

    def _evaluate(self, model: FittedModel, stacklevel: int) -> DiagnosticReport:
        # stacklevel counts from this frame to the caller of the public entry point
        if not isinstance(model, FittedModel):
            raise TypeError(
                f"evaluate() expects a FittedModel, got {type(model).__name__}; "
                f"use LinearSolution.to_fitted_model()"
            )

        n = model.n_observations
        p = model.n_predictors
        df_residual = n - p - 1

        if p < 1:
            raise InsufficientDegreesOfFreedom(
                "model has no predictors; at least one is required",
                n_observations=n,
                n_predictors=p,
            )
        if df_residual <= 0:
            raise InsufficientDegreesOfFreedom(
                f"n - p - 1 = {df_residual} with n={n}, p={p}; "
                f"need at least {p + 2} observations",
                n_observations=n,
                n_predictors=p,
            )

        y = model.response
        e = model.residuals
        if np.ptp(y) == 0.0:
            raise DegenerateResponse(
                f"response has zero variance (every value is {float(y[0])!r}); "
                f"R-squared is undefined",
                value=float(y[0]),
            )

        warnings_list: list[str] = []

        rss, tss = sums_of_squares(y, e)
        r2 = r_squared(rss, tss)
        adj_r2 = adjusted_r_squared(r2, n, p)
        f_stat, f_p = f_test(rss, tss, n, p)
        if rss == 0.0:
            warnings_list.append(
                "perfect fit: residual sum of squares is zero, "
                "F-statistic and log-likelihood are infinite"
            )

        mse = rss / n
        # Responses are finite and not all equal, so at least one term is defined
        mape, n_omitted = mean_absolute_percentage_error(y, e)

        log_lik = gaussian_log_likelihood(rss, n)
        aic, bic = information_criteria(log_lik, n, p)

        het, het_warnings = heteroscedasticity_test(e, model.predictors, self._het_test)
        warnings_list.extend(het_warnings)

        for message in warnings_list:
            warnings.warn(message, UserWarning, stacklevel=stacklevel)

        return DiagnosticReport(
            n_observations=n,
            n_predictors=p,
            df_model=p,
            df_residual=df_residual,
            r_squared=r2,
            adjusted_r_squared=adj_r2,
            f_statistic=f_stat,
            f_p_value=f_p,
            mse=mse,
            rmse=math.sqrt(mse),
            mape=mape,
            mape_n_omitted=n_omitted,
            log_likelihood=log_lik,
            aic=aic,
            bic=bic,
            heteroscedasticity=het,
            aic_convention=AIC_CONVENTION,
            warnings=tuple(warnings_list),
        )

    def __repr__(self) -> str:
        return f"ModelEvaluator(het_test={self._het_test!r})"


def evaluate(model: FittedModel, *, het_test: str = DEFAULT_HET_TEST) -> DiagnosticReport:
    """
    Evaluate a fitted OLS regression.

    Convenience wrapper around ModelEvaluator(het_test).evaluate(model).

    Args:
        model: The fit to evaluate
        het_test: 'breusch_pagan' (default), 'breusch_pagan_classic' or 'white'

    Returns:
        DiagnosticReport with R², adjusted R², F-test, MSE, MAPE, AIC/BIC
        and a heteroscedasticity test

    Raises:
        ValidationError: If het_test is unknown
        InsufficientDegreesOfFreedom: If p < 1 or n - p - 1 <= 0
        DegenerateResponse: If the response has zero variance

    Example:
        >>> from pyregdiag.regression import fit
        >>> from pyregdiag.diagnostics import evaluate
        >>> report = evaluate(fit(X, y).to_fitted_model())
        >>> report.aic
    """
    return ModelEvaluator(het_test)._evaluate(model, stacklevel=3)


def compare(
    models: Mapping[str, FittedModel | DiagnosticReport],
    *,
    sort_by: str = 'aic',
    het_test: str = DEFAULT_HET_TEST,
) -> 'pd.DataFrame':
    """
    Side-by-side comparison of several models.

    Models are evaluated as needed (het_test applies only to those) and
    ranked by sort_by: ascending for 'aic', 'bic', 'mse', 'rmse', 'mape',
    descending for 'r_squared', 'adjusted_r_squared', 'log_likelihood'.
    AIC and BIC are only comparable between models fit to the same response.

    Args:
        models: Name -> FittedModel or already computed DiagnosticReport
        sort_by: Ranking criterion
        het_test: Heteroscedasticity test for models that need evaluating

    Returns:
        DataFrame indexed by model name, best model first

    Raises:
        ValidationError: If models is empty or sort_by is unknown
    """
    import pandas as pd

    check_choice(sort_by, LOWER_IS_BETTER + HIGHER_IS_BETTER, 'sort_by')
    if not models:
        raise ValidationError("models: nothing to compare")

    evaluator = ModelEvaluator(het_test)
    rows = []
    for name, item in models.items():
        if isinstance(item, DiagnosticReport):
            report = item
        else:
            report = evaluator._evaluate(item, stacklevel=3)
        row = report.to_dict()
        del row['aic_convention']
        row['warnings'] = len(report.warnings)
        row['model'] = name
        rows.append(row)

    table = pd.DataFrame(rows).set_index('model')
    return table.sort_values(
        sort_by,
        ascending=sort_by in LOWER_IS_BETTER,
        na_position='last',
        kind='mergesort',
    )
