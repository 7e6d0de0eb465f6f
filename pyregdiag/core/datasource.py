"""
DataSource: named numeric columns for building regression designs.

A DataSource holds float64 arrays keyed by name, all with the same number
of rows. It has no notion of response or predictors; Design decides which
columns play which role.

    ds = DataSource.from_arrays(X=X, y=y)
    ds = DataSource.from_arrays(price=price, sales=sales)
    ds = DataSource.from_dataframe(orders)
    ds = DataSource.from_file("orders.csv")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyregdiag.core.exceptions import DimensionError, ValidationError
from pyregdiag.core.capabilities import (
    CAPABILITY_MATERIALIZED,
    CAPABILITY_REPEATABLE,
    CAPABILITY_NAMED_COLUMNS,
)

if TYPE_CHECKING:
    import pandas as pd


_IN_MEMORY = frozenset({CAPABILITY_MATERIALIZED, CAPABILITY_REPEATABLE})


def _as_float(values: ArrayLike) -> NDArray[np.floating[Any]]:
    return np.asarray(values, dtype=np.float64)


def _common_length(storage: dict[str, NDArray]) -> int | None:
    lengths = {name: arr.shape[0] for name, arr in storage.items() if arr.ndim > 0}
    if len(set(lengths.values())) > 1:
        raise DimensionError(f"DataSource columns differ in length: {lengths}")
    return next(iter(lengths.values()), None)


@dataclass
class DataSource:
    """
    Container of named float64 arrays with a shared row count.

    Build it with one of the from_* classmethods.
    """
    _data: dict[str, NDArray[np.floating[Any]]]
    _capabilities: frozenset[str]
    _metadata: dict[str, Any] = field(default_factory=dict)

    def keys(self) -> frozenset[str]:
        """Names of the stored arrays."""
        return frozenset(self._data)

    def __getitem__(self, key: str) -> NDArray[np.floating[Any]]:
        try:
            return self._data[key]
        except KeyError:
            raise KeyError(
                f"DataSource has no array '{key}'. Available: {sorted(self._data)}"
            ) from None

    def __contains__(self, key: str) -> bool:
        return key in self._data

    @property
    def n_observations(self) -> int:
        return self._metadata.get('n_observations') or 0

    @property
    def metadata(self) -> dict[str, Any]:
        return dict(self._metadata)

    def supports(self, capability: str) -> bool:
        """True if the source has the capability; unknown names give False."""
        return capability in self._capabilities

    @classmethod
    def from_arrays(
        cls,
        *,
        data: ArrayLike | None = None,
        columns: list[str] | None = None,
        **named_arrays: ArrayLike,
    ) -> DataSource:
        """
        Construct from arrays passed by keyword.

        A 2-D `data` matrix together with `columns` is split into one array
        per column. 'X' is kept two-dimensional and a column-vector 'y' is
        flattened, so DataSource.from_arrays(X=X, y=y) feeds Design directly.

        Raises:
            ValidationError: If `columns` doesn't match the width of `data`
            DimensionError: If the arrays differ in length
        """
        storage: dict[str, NDArray] = {}
        capabilities = set(_IN_MEMORY)

        if data is not None:
            matrix = _as_float(data)
            if columns is None:
                storage['data'] = matrix
            else:
                if matrix.ndim != 2 or matrix.shape[1] != len(columns):
                    raise ValidationError(
                        f"data: {len(columns)} column names given for array "
                        f"of shape {matrix.shape}"
                    )
                storage.update({name: matrix[:, j] for j, name in enumerate(columns)})
                capabilities.add(CAPABILITY_NAMED_COLUMNS)

        for name, values in named_arrays.items():
            arr = _as_float(values)
            if name == 'X' and arr.ndim == 1:
                arr = arr.reshape(-1, 1)
            elif name == 'y' and arr.ndim == 2 and arr.shape[1] == 1:
                arr = arr[:, 0]
            storage[name] = arr

        return cls(
            _data=storage,
            _capabilities=frozenset(capabilities),
            _metadata={'n_observations': _common_length(storage), 'source': 'arrays'},
        )

    @classmethod
    def from_file(cls, path: str | Path, *, columns: list[str] | None = None) -> DataSource:
        """Read a .csv, .tsv (through pandas) or .npy file."""
        path = Path(path)
        suffix = path.suffix.lower()

        if suffix == '.npy':
            return cls.from_arrays(data=np.load(path), columns=columns)
        if suffix not in ('.csv', '.tsv'):
            raise ValidationError(f"Unknown file format: {suffix}")

        import pandas as pd
        frame = pd.read_csv(path, usecols=columns, sep='\t' if suffix == '.tsv' else ',')
        return cls.from_dataframe(frame, source_path=str(path))

    @classmethod
    def from_dataframe(cls, df: 'pd.DataFrame', *, source_path: str | None = None) -> DataSource:
        """
        Construct from a pandas DataFrame.

        Numeric and boolean columns are converted to float64, with missing
        entries as NaN. Any other column is left out and recorded in
        metadata['skipped_columns'].
        """
        from pandas.api import types as pd_types

        storage: dict[str, NDArray] = {}
        skipped: list[str] = []
        for col in df.columns:
            series = df[col]
            if pd_types.is_numeric_dtype(series) or pd_types.is_bool_dtype(series):
                storage[str(col)] = series.to_numpy(dtype=np.float64, na_value=np.nan)
            else:
                skipped.append(str(col))

        metadata: dict[str, Any] = {
            'n_observations': len(df),
            'source': 'dataframe',
            'columns': list(storage),
        }
        if skipped:
            metadata['skipped_columns'] = skipped
        if source_path:
            metadata['source_path'] = source_path

        return cls(
            _data=storage,
            _capabilities=_IN_MEMORY | {CAPABILITY_NAMED_COLUMNS},
            _metadata=metadata,
        )

    @classmethod
    def build(cls, *args, **kwargs) -> DataSource:
        """from_file() for a path argument, from_arrays() otherwise."""
        if args and isinstance(args[0], (str, Path)):
            return cls.from_file(args[0], **kwargs)
        return cls.from_arrays(**kwargs)
