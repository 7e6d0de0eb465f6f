"""
Ordinary least squares regression.

Public API:
    fit(X, y, ...) -> LinearSolution

The fit() function is the only entry point. It handles:
    - Input validation
    - Design construction (optional intercept, column names)
    - Backend selection
    - Result wrapping

Example:
    >>> from pyregdiag.regression import fit
    >>> result = fit(X, y, names=['price', 'distance'])
    >>> print(result.summary())
    >>> model = result.to_fitted_model()
"""

from pyregdiag.regression.design import Design, INTERCEPT_NAME
from pyregdiag.regression.solution import LinearSolution, LinearParams
from pyregdiag.regression.solvers import fit

__all__ = [
    "fit",
    "Design",
    "INTERCEPT_NAME",
    "LinearSolution",
    "LinearParams",
]
