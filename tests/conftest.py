"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pyregdiag.diagnostics import FittedModel
from pyregdiag.regression import fit


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def simple_regression_data(rng):
    """Simple regression dataset for basic tests (true intercept 0.5)."""
    n, p = 100, 3
    X = rng.standard_normal((n, p))
    beta_true = np.array([1.0, -2.0, 0.5])
    y = 0.5 + X @ beta_true + rng.standard_normal(n) * 0.1
    return X, y, beta_true


@pytest.fixture
def collinear_data(rng):
    """Dataset with perfect collinearity (should fail)."""
    n = 100
    x1 = rng.standard_normal(n)
    x2 = rng.standard_normal(n)
    x3 = x1 + x2
    X = np.column_stack([x1, x2, x3])
    y = rng.standard_normal(n)
    return X, y


@pytest.fixture
def fitted_model(simple_regression_data):
    """FittedModel from an OLS fit with named predictors."""
    X, y, _ = simple_regression_data
    return fit(X, y, names=['price', 'distance', 'weight']).to_fitted_model()


@pytest.fixture
def heteroscedastic_data(rng):
    """Error standard deviation grows linearly with the predictor."""
    n = 400
    x = rng.uniform(1.0, 10.0, n)
    y = 2.0 + 3.0 * x + rng.standard_normal(n) * x
    return x, y


def make_model(response, fitted_values, predictors, names=None):
    """Build a FittedModel with placeholder coefficients."""
    predictors = np.asarray(predictors, dtype=np.float64)
    if predictors.ndim == 1:
        predictors = predictors.reshape(-1, 1)
    if names is None:
        names = [f'x{i + 1}' for i in range(predictors.shape[1])]
    coefficients = {'(Intercept)': 0.0}
    coefficients.update({name: 1.0 for name in names})
    return FittedModel.from_arrays(
        response=response,
        fitted_values=fitted_values,
        predictors=predictors,
        coefficients=coefficients,
        predictor_names=names,
    )


@pytest.fixture
def model_factory():
    return make_model
