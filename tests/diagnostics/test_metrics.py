"""
Tests for the metric helpers behind the diagnostic report.
"""

import math

import numpy as np
import pytest

from pyregdiag.diagnostics import mean_absolute_percentage_error
from pyregdiag.diagnostics._metrics import (
    adjusted_r_squared,
    f_test,
    gaussian_log_likelihood,
    information_criteria,
    sums_of_squares,
)


class TestMAPE:

    def test_docstring_example(self):
        assert mean_absolute_percentage_error([2.0, 0.0, 4.0], [1.0, 5.0, -1.0]) == (0.375, 1)

    def test_missing_response_omitted(self):
        mape, omitted = mean_absolute_percentage_error(
            [np.nan, 5.0, 10.0, 0.0], [1.0, 1.0, -2.0, 3.0]
        )
        assert omitted == 2
        assert mape == pytest.approx(0.2)

    def test_all_omitted(self):
        assert mean_absolute_percentage_error([0.0, np.nan], [1.0, 2.0]) == (None, 2)

    def test_negative_response(self):
        mape, omitted = mean_absolute_percentage_error([-4.0], [1.0])
        assert omitted == 0
        assert mape == pytest.approx(0.25)


class TestSumsAndTests:

    def test_sums_of_squares(self):
        rss, tss = sums_of_squares(np.array([1.0, 3.0, 2.0, 4.0]),
                                   np.array([-0.3, 0.9, -0.9, 0.3]))
        assert rss == pytest.approx(1.8)
        assert tss == pytest.approx(5.0)

    def test_adjusted_r_squared(self):
        assert adjusted_r_squared(0.64, 4, 1) == pytest.approx(0.46)

    def test_f_test_perfect_fit(self):
        assert f_test(0.0, 5.0, 10, 2) == (math.inf, 0.0)

    def test_log_likelihood_and_ic(self):
        ll = gaussian_log_likelihood(1.8, 4)
        aic, bic = information_criteria(ll, 4, 1)
        assert aic == pytest.approx(-2.0 * ll + 4.0)
        assert bic == pytest.approx(-2.0 * ll + 2.0 * math.log(4))

    def test_log_likelihood_perfect_fit(self):
        assert gaussian_log_likelihood(0.0, 10) == math.inf
