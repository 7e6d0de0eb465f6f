"""
Core infrastructure for PyRegDiag.

This module provides shared abstractions and utilities used by the
domain-specific submodules (regression, diagnostics).

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    datasource: Domain-agnostic data container
    compute: Timing and linear algebra primitives
"""

from pyregdiag.core.protocols import Backend
from pyregdiag.core.result import Result
from pyregdiag.core.datasource import DataSource
from pyregdiag.core.exceptions import (
    PyRegDiagError,
    ValidationError,
    DimensionError,
    InsufficientDegreesOfFreedom,
    NumericalError,
    SingularMatrixError,
    DegenerateResponse,
)

__all__ = [
    # Protocols
    "Backend",
    # Data
    "DataSource",
    # Result
    "Result",
    # Exceptions
    "PyRegDiagError",
    "ValidationError",
    "DimensionError",
    "InsufficientDegreesOfFreedom",
    "NumericalError",
    "SingularMatrixError",
    "DegenerateResponse",
]
