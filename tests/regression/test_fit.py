"""
Tests for regression fit().

Tests the complete pipeline: Design construction, backend selection,
and solution properties.
"""

import pytest
import numpy as np

from pyregdiag.core.datasource import DataSource
from pyregdiag.core.exceptions import SingularMatrixError, ValidationError
from pyregdiag.core.protocols import Backend
from pyregdiag.regression import fit, Design, INTERCEPT_NAME
from pyregdiag.regression.backends import CPUQRBackend
from pyregdiag.regression.solution import LinearSolution


class TestFitBasic:
    """Basic fit() functionality tests."""

    def test_fit_from_arrays(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        assert isinstance(result, LinearSolution)
        assert result.coefficients.shape == (4,)
        assert result.coefficient_names == (INTERCEPT_NAME, 'x1', 'x2', 'x3')

    def test_fit_from_design(self, simple_regression_data):
        X, y, _ = simple_regression_data
        design = Design.from_arrays(X, y)
        result = fit(design)
        assert isinstance(result, LinearSolution)

    def test_fit_requires_y_with_arrays(self, simple_regression_data):
        X, _, _ = simple_regression_data
        with pytest.raises(ValueError, match="y required"):
            fit(X)

    def test_coefficients_close_to_truth(self, simple_regression_data):
        X, y, beta_true = simple_regression_data
        result = fit(X, y)
        np.testing.assert_allclose(result.coefficients[1:], beta_true, atol=0.1)
        assert abs(result.coefficients[0] - 0.5) < 0.1

    def test_without_intercept(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y, intercept=False)
        assert result.coefficients.shape == (3,)
        assert not result.design.has_intercept

    def test_residuals_sum_to_near_zero_with_intercept(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        assert abs(result.residuals.sum()) < 1e-10

    def test_named_predictors(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y, names=['a', 'b', 'c'])
        assert result.coefficient_names == (INTERCEPT_NAME, 'a', 'b', 'c')


class TestFitProperties:
    """Test derived properties of LinearSolution."""

    def test_standard_errors_positive(self, simple_regression_data):
        X, y, _ = simple_regression_data
        se = fit(X, y).standard_errors
        assert np.all(se > 0)
        assert np.all(np.isfinite(se))

    def test_p_values_in_zero_one(self, simple_regression_data):
        X, y, _ = simple_regression_data
        pv = fit(X, y).p_values
        assert np.all(pv >= 0.0)
        assert np.all(pv <= 1.0)

    def test_fitted_plus_residuals_equals_y(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        np.testing.assert_allclose(
            result.fitted_values + result.residuals, y, atol=1e-12
        )

    def test_rss_matches_residuals(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        expected_rss = float(result.residuals @ result.residuals)
        assert abs(result.rss - expected_rss) < 1e-12

    def test_r_squared_formula(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        expected = 1.0 - result.rss / result.tss
        assert abs(result.r_squared - expected) < 1e-15

    def test_matches_numpy_lstsq(self, simple_regression_data):
        X, y, _ = simple_regression_data
        Xi = np.column_stack([np.ones(len(y)), X])
        expected, *_ = np.linalg.lstsq(Xi, y, rcond=None)
        np.testing.assert_allclose(fit(X, y).coefficients, expected, rtol=1e-10)

    def test_vcov_matches_closed_form(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        Xi = np.column_stack([np.ones(len(y)), X])
        expected = result.rss / (len(y) - 4) * np.linalg.inv(Xi.T @ Xi)
        np.testing.assert_allclose(result.vcov, expected, rtol=1e-8)
        np.testing.assert_allclose(result.standard_errors, np.sqrt(np.diag(expected)), rtol=1e-8)

    def test_summary_runs(self, simple_regression_data):
        X, y, _ = simple_regression_data
        s = fit(X, y, names=['price', 'distance', 'weight']).summary()
        assert "R-squared" in s
        assert "Pr(>|t|)" in s
        assert "distance" in s
        assert "Backend" in s


class TestFitRankDeficient:

    def test_collinear_raises(self, collinear_data):
        X, y = collinear_data
        with pytest.raises(SingularMatrixError, match="rank-deficient"):
            fit(X, y)

    def test_ill_conditioned_warns(self, rng):
        x = rng.standard_normal(50)
        X = np.column_stack([x, x + rng.standard_normal(50) * 1e-11])
        y = x + rng.standard_normal(50)
        with pytest.warns(UserWarning, match="ill-conditioned"):
            result = fit(X, y)
        assert result.info['condition_number'] > 1e10
        assert result.warnings

    def test_uncentered_tss_without_intercept(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y, intercept=False)
        assert result.tss == pytest.approx(float(y @ y))


class TestDesign:

    def test_from_datasource_named(self, simple_regression_data):
        X, y, _ = simple_regression_data
        ds = DataSource.from_arrays(price=X[:, 0], distance=X[:, 1], sales=y)
        design = Design.from_datasource(ds, x=['price', 'distance'], y='sales')
        assert design.names == (INTERCEPT_NAME, 'price', 'distance')
        assert design.predictor_names == ('price', 'distance')
        assert design.predictors.shape == (100, 2)

    def test_from_datasource_all_other_columns(self, simple_regression_data):
        X, y, _ = simple_regression_data
        ds = DataSource.from_arrays(b=X[:, 1], a=X[:, 0], sales=y)
        design = Design.from_datasource(ds, y='sales')
        assert design.predictor_names == ('a', 'b')

    def test_reserved_intercept_name(self):
        with pytest.raises(ValidationError, match="reserved"):
            Design.from_arrays(np.ones((5, 1)), np.arange(5.0), names=[INTERCEPT_NAME])

    def test_name_count_mismatch(self):
        with pytest.raises(ValidationError, match="names"):
            Design.from_arrays(np.ones((5, 2)), np.arange(5.0), names=['a'])

    def test_non_finite_rejected(self):
        y = np.array([1.0, np.nan, 3.0])
        with pytest.raises(ValidationError, match="non-finite"):
            Design.from_arrays(np.arange(3.0), y)

    def test_too_few_rows(self):
        with pytest.raises(ValidationError, match="at least 3 samples"):
            Design.from_arrays(np.ones((2, 2)), np.ones(2))


class TestBackendSelection:

    def test_cpu_backend(self, simple_regression_data):
        X, y, _ = simple_regression_data
        assert fit(X, y, backend='cpu').backend_name == 'cpu_qr'

    def test_auto_backend(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y, backend='auto')
        assert result.backend_name == 'cpu_qr'
        assert 'total_seconds' in result.timing

    def test_invalid_backend_raises(self, simple_regression_data):
        X, y, _ = simple_regression_data
        with pytest.raises(ValueError, match="Unknown backend"):
            fit(X, y, backend='nonsense')

    def test_backend_satisfies_protocol(self):
        assert isinstance(CPUQRBackend(), Backend)


class TestToFittedModel:

    def test_fields(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y, names=['a', 'b', 'c'])
        model = result.to_fitted_model()
        assert model.n_predictors == 3
        assert model.predictor_names == ('a', 'b', 'c')
        assert set(model.coefficients) == {INTERCEPT_NAME, 'a', 'b', 'c'}
        np.testing.assert_array_equal(model.response, y)
        np.testing.assert_allclose(model.residuals, result.residuals, atol=1e-12)

    def test_requires_intercept(self, simple_regression_data):
        X, y, _ = simple_regression_data
        with pytest.raises(ValidationError, match="intercept"):
            fit(X, y, intercept=False).to_fitted_model()
