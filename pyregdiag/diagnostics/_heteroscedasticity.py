"""
Heteroscedasticity tests based on an auxiliary regression of the squared
residuals.

Three variants, all chi-squared under the null of constant error variance:

    breusch_pagan          Koenker's studentized Breusch-Pagan test (the
                           default of R's lmtest::bptest). Regress e² on
                           [1, X]; LM = n R²_aux, df = rank([1, X]) - 1.
    breusch_pagan_classic  The original Breusch-Pagan test. Regress
                           g = e² / (RSS/n) on [1, X]; LM = ESS/2.
    white                  White's test. Regress e² on [1, X, X², pairwise
                           cross products]; LM = n R²_aux.

The auxiliary design may be rank-deficient (e.g. squares of 0/1 dummies
in White's test); degrees of freedom come from the numerical rank.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy import stats as sp_stats

from pyregdiag.core.compute.linalg.qr import lstsq_rank_cpu
from pyregdiag.core.validation import check_choice
from pyregdiag.diagnostics._common import (
    HET_BREUSCH_PAGAN,
    HET_BREUSCH_PAGAN_CLASSIC,
    HET_WHITE,
    VALID_HET_TESTS,
    HeteroscedasticityTest,
)


def _white_regressors(X: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """Predictors, their squares and all pairwise cross products."""
    p = X.shape[1]
    columns = [X[:, j] for j in range(p)]
    for i in range(p):
        for j in range(i, p):
            columns.append(X[:, i] * X[:, j])
    return np.column_stack(columns)


def _with_intercept(X: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    return np.column_stack([np.ones(X.shape[0]), X])


def heteroscedasticity_test(
    residuals: NDArray[np.floating[Any]],
    predictors: NDArray[np.floating[Any]],
    method: str = HET_BREUSCH_PAGAN,
) -> tuple[HeteroscedasticityTest, list[str]]:
    """
    Test the residuals of an OLS fit for non-constant variance.

    Args:
        residuals: OLS residuals (n,)
        predictors: Predictor matrix the fit used (n x p), no intercept column
        method: 'breusch_pagan', 'breusch_pagan_classic' or 'white'

    Returns:
        (test result, list of warning messages)

    Raises:
        ValidationError: If method is unknown
    """
    check_choice(method, VALID_HET_TESTS, 'het_test')
    warnings_list: list[str] = []

    e = np.asarray(residuals, dtype=np.float64)
    X = np.asarray(predictors, dtype=np.float64)
    n = e.shape[0]
    u = e * e

    if method == HET_WHITE:
        Z = _with_intercept(_white_regressors(X))
    else:
        Z = _with_intercept(X)

    if method == HET_BREUSCH_PAGAN_CLASSIC:
        # Scale by the ML variance estimate RSS/n
        sigma_sq = float(np.mean(u))
        target = u / sigma_sq if sigma_sq > 0.0 else u
    else:
        target = u

    centered_ss = float(np.sum((target - np.mean(target)) ** 2))
    fitted, rank = lstsq_rank_cpu(Z, target)
    df = rank - 1

    if centered_ss == 0.0 or df <= 0:
        warnings_list.append(
            "heteroscedasticity test: auxiliary regression is degenerate "
            "(constant squared residuals or constant predictors); "
            "statistic set to 0"
        )
        return HeteroscedasticityTest(
            method=method, statistic=0.0, df=max(df, 0), p_value=1.0,
        ), warnings_list

    if method == HET_BREUSCH_PAGAN_CLASSIC:
        explained_ss = float(np.sum((fitted - np.mean(target)) ** 2))
        statistic = explained_ss / 2.0
    else:
        residual_ss = float(np.sum((target - fitted) ** 2))
        statistic = n * (1.0 - residual_ss / centered_ss)

    statistic = max(statistic, 0.0)
    p_value = float(sp_stats.chi2.sf(statistic, df))

    return HeteroscedasticityTest(
        method=method,
        statistic=float(statistic),
        df=int(df),
        p_value=p_value,
    ), warnings_list
