"""
fit(): the public entry point for ordinary least squares.
"""

import warnings
from collections.abc import Sequence
from typing import Literal

from numpy.typing import ArrayLike

from pyregdiag.regression.design import Design
from pyregdiag.regression.solution import LinearSolution
from pyregdiag.regression.backends.cpu import CPUQRBackend


BackendChoice = Literal['auto', 'cpu', 'cpu_qr']


def fit(
    X: ArrayLike | Design,
    y: ArrayLike | None = None,
    *,
    names: Sequence[str] | None = None,
    intercept: bool = True,
    backend: BackendChoice = 'auto',
) -> LinearSolution:
    """
    Fit y = Xβ + ε by ordinary least squares.

    Args:
        X: Design, or predictor matrix (n x k) as any array-like
        y: Response vector (n,). Required unless X is a Design.
        names: Predictor names (ignored when X is a Design)
        intercept: Prepend an intercept column (ignored when X is a Design)
        backend: 'auto', 'cpu' or 'cpu_qr'; all currently run the CPU QR solver

    Returns:
        LinearSolution. Call .to_fitted_model() on it to evaluate
        diagnostics.

    Raises:
        ValidationError: If inputs are invalid
        DimensionError: If X and y have inconsistent dimensions
        SingularMatrixError: If X is rank-deficient

    Example:
        >>> rng = np.random.default_rng(0)
        >>> X = rng.standard_normal((100, 2))
        >>> y = 1 + X @ [2, 3] + rng.standard_normal(100) * 0.1
        >>> print(fit(X, y, names=['a', 'b']).summary())
    """
    if isinstance(X, Design):
        design = X
    else:
        if y is None:
            raise ValueError("y required when X is not a Design")
        design = Design.from_arrays(X, y, names=names, intercept=intercept)

    result = _get_backend(backend).solve(design)
    for message in result.warnings:
        warnings.warn(message, UserWarning, stacklevel=2)

    return LinearSolution(_result=result, _design=design)


def _get_backend(choice: BackendChoice) -> CPUQRBackend:
    if choice in ('auto', 'cpu', 'cpu_qr'):
        return CPUQRBackend()
    raise ValueError(f"Unknown backend: {choice!r}")
