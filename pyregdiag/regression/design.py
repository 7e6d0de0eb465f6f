"""
Regression Design.

Design wraps a DataSource (or raw arrays) and extracts X (design matrix)
and y (response), together with column names and whether X carries an
intercept column. It knows it's building a regression; DataSource doesn't.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyregdiag.core.datasource import DataSource
from pyregdiag.core.capabilities import CAPABILITY_MATERIALIZED, CAPABILITY_REPEATABLE
from pyregdiag.core.exceptions import ValidationError
from pyregdiag.core.validation import (
    check_array,
    check_finite,
    check_2d,
    check_1d,
    check_consistent_length,
    check_min_samples,
)

INTERCEPT_NAME = '(Intercept)'


@dataclass(frozen=True)
class Design:
    """
    Response vector and design matrix for one regression.

    Immutable after construction. When built with intercept=True the first
    column of X is a column of ones named '(Intercept)'.

    Construction:
        Design.from_datasource(ds, y='target')           # X = all other columns
        Design.from_datasource(ds, x=['a','b'], y='c')  # X = specified columns
        Design.from_datasource(ds)                        # Uses ds['X'] and ds['y']
        Design.from_arrays(X, y)                          # Direct from arrays
    """
    _X: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _n: int
    _p: int
    _names: tuple[str, ...]
    _has_intercept: bool
    _source: DataSource | None = None

    @classmethod
    def from_datasource(
        cls,
        source: DataSource,
        *,
        x: str | list[str] | None = None,
        y: str | None = None,
        intercept: bool = True,
    ) -> Design:
        """
        Build Design from DataSource.

        Args:
            source: The DataSource
            x: Predictor column(s). If None and source has 'X', uses that.
               If None and y is specified, uses all columns except y.
            y: Response column. If None, uses 'y' from source.
            intercept: Prepend an intercept column

        Returns:
            Design ready for regression
        """
        if y is not None:
            y_arr = source[y]
        elif 'y' in source:
            y_arr = source['y']
        else:
            raise ValueError("Must specify y or DataSource must have 'y'")

        names: list[str] | None
        if x is not None:
            names = [x] if isinstance(x, str) else list(x)
            X_arr = _get_columns(source, names)
        elif 'X' in source:
            X_arr = source['X']
            names = None
        elif y is not None:
            names = sorted(k for k in source.keys() if k != y)
            if not names:
                raise ValueError("No predictor columns available")
            X_arr = _get_columns(source, names)
        else:
            raise ValueError("Must specify x or DataSource must have 'X'")

        return cls._build(
            np.asarray(X_arr, dtype=np.float64),
            np.asarray(y_arr, dtype=np.float64),
            names=names,
            intercept=intercept,
            source=source,
        )

    @classmethod
    def from_arrays(
        cls,
        X: ArrayLike,
        y: ArrayLike,
        *,
        names: Sequence[str] | None = None,
        intercept: bool = True,
    ) -> Design:
        """
        Build Design directly from arrays.

        X is used as given unless intercept=True, in which case a column
        of ones is prepended.
        """
        return cls._build(
            check_array(X, 'X'),
            check_array(y, 'y'),
            names=names,
            intercept=intercept,
            source=None,
        )

    @classmethod
    def _build(
        cls,
        X: NDArray,
        y: NDArray,
        *,
        names: Sequence[str] | None,
        intercept: bool,
        source: DataSource | None,
    ) -> Design:
        """Internal builder with validation."""
        if X.ndim == 1:
            X = X.reshape(-1, 1)
        if y.ndim == 2 and y.shape[1] == 1:
            y = y.ravel()

        check_2d(X, 'X')
        check_1d(y, 'y')
        check_finite(X, 'X')
        check_finite(y, 'y')
        check_consistent_length(X, y, names=('X', 'y'))

        if names is None:
            names = [f'x{i + 1}' for i in range(X.shape[1])]
        names = tuple(str(name) for name in names)
        if len(names) != X.shape[1]:
            raise ValidationError(
                f"names: got {len(names)} names for {X.shape[1]} columns of X"
            )
        if len(set(names)) != len(names):
            raise ValidationError(f"names: duplicate column names in {list(names)}")

        if intercept:
            if INTERCEPT_NAME in names:
                raise ValidationError(
                    f"names: {INTERCEPT_NAME!r} is reserved for the intercept column"
                )
            X = np.column_stack([np.ones(X.shape[0]), X])
            names = (INTERCEPT_NAME,) + names

        n, p = X.shape
        check_min_samples(X, p, 'X')

        return cls(
            _X=X,
            _y=y,
            _n=n,
            _p=p,
            _names=names,
            _has_intercept=intercept or INTERCEPT_NAME in names,
            _source=source,
        )

    # === Properties ===

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Design matrix (n x p), intercept column included."""
        return self._X

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Response vector (n,)."""
        return self._y

    @property
    def n(self) -> int:
        """Number of observations."""
        return self._n

    @property
    def p(self) -> int:
        """Number of columns of X, intercept included."""
        return self._p

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    @property
    def has_intercept(self) -> bool:
        return self._has_intercept

    @property
    def predictor_names(self) -> tuple[str, ...]:
        """Column names excluding the intercept."""
        return tuple(name for name in self._names if name != INTERCEPT_NAME)

    @property
    def predictors(self) -> NDArray[np.floating[Any]]:
        """Columns of X excluding the intercept (n x n_predictors)."""
        keep = [i for i, name in enumerate(self._names) if name != INTERCEPT_NAME]
        return self._X[:, keep]

    @property
    def source(self) -> DataSource | None:
        """Original DataSource, if available."""
        return self._source

    def supports(self, capability: str) -> bool:
        """Check if underlying data supports a capability."""
        if self._source is not None:
            return self._source.supports(capability)
        return capability in (CAPABILITY_MATERIALIZED, CAPABILITY_REPEATABLE)

    def XtX(self) -> NDArray[np.floating[Any]]:
        """Compute X'X (for standard errors)."""
        return self._X.T @ self._X

    def Xty(self) -> NDArray[np.floating[Any]]:
        """Compute X'y."""
        return self._X.T @ self._y


def _get_columns(source: DataSource, names: list[str]) -> NDArray:
    """Stack multiple columns from DataSource into a matrix."""
    arrays = []
    for name in names:
        arr = np.asarray(source[name], dtype=np.float64)
        if arr.ndim == 1:
            arr = arr.reshape(-1, 1)
        arrays.append(arr)
    return np.hstack(arrays)
