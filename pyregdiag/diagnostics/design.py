"""
FittedModel: the immutable input to diagnostic evaluation.

A FittedModel is a snapshot of an ordinary least squares fit: the
observed response, the fitted values, the residuals, the coefficient
estimates by name and the predictor matrix the fit used. It is produced
once per regression (usually by LinearSolution.to_fitted_model()) and
never changes afterwards. Arrays are copied on construction and marked
read-only, so evaluating a model can never alter it.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyregdiag.core.exceptions import ValidationError
from pyregdiag.core.validation import (
    check_array,
    check_finite,
    check_1d,
    check_2d,
    check_consistent_length,
    check_min_samples,
)
from pyregdiag.diagnostics._common import INTERCEPT_NAME


def _frozen_copy(array: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    out = np.array(array, dtype=np.float64, copy=True)
    out.setflags(write=False)
    return out


@dataclass(frozen=True, eq=False)
class FittedModel:
    """
    Immutable record of an ordinary least squares fit.

    Every construction path is validated, including a direct
    FittedModel(...) call. from_arrays() is the keyword-only spelling
    that makes residuals optional.

    Attributes:
        response: Observed response (n,)
        fitted_values: Predicted response (n,)
        residuals: response - fitted_values (n,). None derives them.
        coefficients: Read-only mapping name -> estimate; may include
            '(Intercept)' in addition to the predictor names
        predictors: Predictor matrix (n x p), intercept column excluded.
            A vector is taken as a single predictor.
        predictor_names: Names of the p predictor columns; x1..xp if empty

    Raises:
        ValidationError: On non-finite values, residuals that don't equal
            response - fitted_values, or coefficient names that don't
            match the predictors
        DimensionError: On wrongly shaped or inconsistent arrays
    """
    response: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]] | None
    coefficients: Mapping[str, float]
    predictors: NDArray[np.floating[Any]]
    predictor_names: tuple[str, ...] = field(default=())

    @classmethod
    def from_arrays(
        cls,
        *,
        response: ArrayLike,
        fitted_values: ArrayLike,
        predictors: ArrayLike,
        coefficients: Mapping[str, float],
        predictor_names: Sequence[str] | None = None,
        residuals: ArrayLike | None = None,
    ) -> FittedModel:
        """
        Build a FittedModel, deriving residuals when they are omitted.

        Args:
            response: Observed response (n,)
            fitted_values: Predicted response (n,)
            predictors: Predictor matrix (n x p) without the intercept column
            coefficients: Estimates by name. Must contain every predictor
                name and may contain '(Intercept)'.
            predictor_names: Column names; defaults to x1..xp
            residuals: Optional; must equal response - fitted_values
        """
        return cls(
            response=response,
            fitted_values=fitted_values,
            residuals=residuals,
            coefficients=coefficients,
            predictors=predictors,
            predictor_names=tuple(predictor_names or ()),
        )

    def __post_init__(self) -> None:
        y = check_array(self.response, 'response')
        fitted = check_array(self.fitted_values, 'fitted_values')
        X = check_array(self.predictors, 'predictors')
        if X.ndim == 1:
            X = X.reshape(-1, 1)

        check_1d(y, 'response')
        check_1d(fitted, 'fitted_values')
        check_2d(X, 'predictors')
        check_consistent_length(
            y, fitted, X, names=('response', 'fitted_values', 'predictors')
        )
        check_min_samples(y, 1, 'response')
        check_finite(y, 'response')
        check_finite(fitted, 'fitted_values')
        check_finite(X, 'predictors')

        derived = y - fitted
        if self.residuals is not None:
            resid = check_array(self.residuals, 'residuals')
            check_1d(resid, 'residuals')
            check_consistent_length(y, resid, names=('response', 'residuals'))
            check_finite(resid, 'residuals')
            if not np.allclose(resid, derived, rtol=1e-10, atol=1e-12):
                raise ValidationError("residuals: must equal response - fitted_values")

        names = tuple(str(name) for name in self.predictor_names)
        if not names and X.shape[1] > 0:
            names = tuple(f'x{i + 1}' for i in range(X.shape[1]))
        if len(names) != X.shape[1]:
            raise ValidationError(
                f"predictor_names: got {len(names)} names "
                f"for {X.shape[1]} predictor columns"
            )
        if len(set(names)) != len(names):
            raise ValidationError(
                f"predictor_names: duplicate names in {list(names)}"
            )

        coefs = {str(k): float(v) for k, v in self.coefficients.items()}
        missing = [name for name in names if name not in coefs]
        if missing:
            raise ValidationError(f"coefficients: no estimate for predictors {missing}")
        extra = set(coefs) - set(names) - {INTERCEPT_NAME}
        if extra:
            raise ValidationError(
                f"coefficients: unknown names {sorted(extra)}; expected "
                f"{list(names)} and optionally {INTERCEPT_NAME!r}"
            )
        if not all(np.isfinite(v) for v in coefs.values()):
            raise ValidationError("coefficients: contains non-finite estimates")

        object.__setattr__(self, 'response', _frozen_copy(y))
        object.__setattr__(self, 'fitted_values', _frozen_copy(fitted))
        # Stored as response - fitted_values exactly, once the supplied copy agrees
        object.__setattr__(self, 'residuals', _frozen_copy(derived))
        object.__setattr__(self, 'predictors', _frozen_copy(X))
        object.__setattr__(self, 'predictor_names', names)
        object.__setattr__(self, 'coefficients', MappingProxyType(coefs))

    @property
    def n_observations(self) -> int:
        return int(self.response.shape[0])

    @property
    def n_predictors(self) -> int:
        """Number of predictors p, intercept excluded."""
        return int(self.predictors.shape[1])

    @property
    def df_residual(self) -> int:
        return self.n_observations - self.n_predictors - 1

    def __repr__(self) -> str:
        return (
            f"FittedModel(n={self.n_observations}, p={self.n_predictors}, "
            f"predictors={list(self.predictor_names)})"
        )
