"""
Goodness-of-fit metrics for OLS fits.

Plain functions over arrays and sums of squares; the evaluator composes
them into a DiagnosticReport.
"""

import math
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import stats as sp_stats


def sums_of_squares(
    response: NDArray[np.floating[Any]],
    residuals: NDArray[np.floating[Any]],
) -> tuple[float, float]:
    """Return (RSS, TSS), TSS taken about the mean of the response."""
    rss = float(residuals @ residuals)
    centered = response - np.mean(response)
    tss = float(centered @ centered)
    return rss, tss


def r_squared(rss: float, tss: float) -> float:
    return 1.0 - rss / tss


def adjusted_r_squared(r2: float, n: int, p: int) -> float:
    """1 - (1 - R²)(n - 1)/(n - p - 1)."""
    return 1.0 - (1.0 - r2) * (n - 1) / (n - p - 1)


def f_test(rss: float, tss: float, n: int, p: int) -> tuple[float, float]:
    """
    Overall F-test of the regression against the intercept-only model.

    Returns:
        (F statistic, upper-tail p-value of F(p, n - p - 1)).
        A perfect fit (RSS = 0) gives (inf, 0.0).
    """
    df_residual = n - p - 1
    if rss == 0.0:
        return math.inf, 0.0
    f_stat = ((tss - rss) / p) / (rss / df_residual)
    p_value = float(sp_stats.f.sf(f_stat, p, df_residual))
    return float(f_stat), p_value


def mean_absolute_percentage_error(
    response: ArrayLike,
    residuals: ArrayLike,
) -> tuple[float | None, int]:
    """
    Mean of |residual / response| over observations where it is defined.

    Observations whose response is zero or missing (NaN) are left out of
    the average rather than treated as zero or infinity.

    Args:
        response: Observed response (n,)
        residuals: Residuals (n,)

    Returns:
        (MAPE as a fraction, number of omitted observations). MAPE is None
        when every observation is omitted.

    Example:
        >>> mean_absolute_percentage_error([2.0, 0.0, 4.0], [1.0, 5.0, -1.0])
        (0.375, 1)
    """
    y = np.asarray(response, dtype=np.float64)
    e = np.asarray(residuals, dtype=np.float64)
    defined = np.isfinite(y) & (y != 0.0) & np.isfinite(e)
    n_omitted = int(y.shape[0] - np.count_nonzero(defined))
    if not defined.any():
        return None, n_omitted
    return float(np.mean(np.abs(e[defined] / y[defined]))), n_omitted


def gaussian_log_likelihood(rss: float, n: int) -> float:
    """
    Maximized Gaussian log-likelihood of an OLS fit.

    log L = -n/2 * (ln(2π) + ln(RSS/n) + 1). A perfect fit gives +inf.
    """
    if rss == 0.0:
        return math.inf
    return -0.5 * n * (math.log(2.0 * math.pi) + math.log(rss / n) + 1.0)


def information_criteria(log_likelihood: float, n: int, p: int) -> tuple[float, float]:
    """
    AIC and BIC with k = p + 1 estimated coefficients.

    AIC = -2 log L + 2k, BIC = -2 log L + ln(n) k.
    """
    k = p + 1
    aic = -2.0 * log_likelihood + 2.0 * k
    bic = -2.0 * log_likelihood + math.log(n) * k
    return aic, bic
