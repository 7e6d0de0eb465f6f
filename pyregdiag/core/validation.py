"""
Input validators shared by the regression and diagnostics layers.

Each validator checks one property and raises at the first violation,
naming the offending argument and the value that was seen. Nothing is
repaired quietly: the only conversion performed is integer or boolean
data to float64 in check_array().
"""

from collections.abc import Collection

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pyregdiag.core.exceptions import ValidationError, DimensionError


def check_array(array: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    """
    Convert an array-like to a floating numpy array.

    Raises:
        ValidationError: If the input is ragged, mixed or non-numeric
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object or not (
        np.issubdtype(result.dtype, np.number) or result.dtype == np.bool_
    ):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )
    if np.issubdtype(result.dtype, np.floating):
        return result
    return result.astype(np.float64)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """Reject NaN and ±Inf entries, reporting how many of each were found."""
    if np.isfinite(array).all():
        return
    n_nan = int(np.isnan(array).sum())
    n_inf = int(np.isinf(array).sum())
    raise ValidationError(
        f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
    )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    check_ndim(array, 2, name)


def check_consistent_length(
    *arrays: NDArray[np.floating[Any]],
    names: tuple[str, ...]
) -> None:
    """
    Require every array to have the same number of rows.

    Raises:
        ValueError: If names and arrays are not paired one to one
        DimensionError: If the row counts differ
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    lengths = [arr.shape[0] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")


def check_min_samples(array: NDArray[np.floating[Any]], min_samples: int, name: str) -> None:
    n = array.shape[0]
    if n < min_samples:
        raise ValidationError(
            f"{name}: requires at least {min_samples} samples, got {n}"
        )


def check_choice(value: str, choices: Collection[str], name: str) -> str:
    """
    Require an option string to be one of the allowed values.

    Returns:
        The value, unchanged

    Raises:
        ValidationError: Listing the allowed values
    """
    if value not in choices:
        allowed = ", ".join(repr(c) for c in sorted(choices))
        raise ValidationError(f"{name} must be one of {allowed}, got {value!r}")
    return value
