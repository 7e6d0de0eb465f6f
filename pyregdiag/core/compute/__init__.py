"""
Numeric kernels shared by the backends and the diagnostics layer.

    timing: Timer and timed() for per-section wall-clock timings
    linalg: QR factorization, QR solve and rank-tolerant least squares
"""

from pyregdiag.core.compute.timing import Timer, timed

__all__ = [
    "Timer",
    "timed",
]
