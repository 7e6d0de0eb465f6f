"""
Linear algebra kernels for PyRegDiag.

All functions follow these conventions:
    - Functions use NumPy/SciPy (LAPACK under the hood)
    - Each decomposition returns a structured result dataclass
    - Errors are raised immediately with clear messages
"""

from pyregdiag.core.compute.linalg.qr import (
    QRResult,
    qr_cpu,
    qr_solve_cpu,
    lstsq_rank_cpu,
)

__all__ = [
    "QRResult",
    "qr_cpu",
    "qr_solve_cpu",
    "lstsq_rank_cpu",
]
