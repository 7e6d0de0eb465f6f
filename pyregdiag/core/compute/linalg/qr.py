"""
QR decomposition and least squares kernels.

Used by the regression backend for the primary fit and by the
diagnostics domain for auxiliary regressions (heteroscedasticity tests),
whose regressor matrices can legitimately be rank-deficient.
"""

from dataclasses import dataclass
from typing import Literal, Any
import numpy as np
from numpy.typing import NDArray
from scipy import linalg as sp_linalg

from pyregdiag.core.exceptions import SingularMatrixError


@dataclass(frozen=True)
class QRResult:
    """Q, R and the numerical rank read off the diagonal of R."""
    Q: NDArray[np.floating[Any]]
    R: NDArray[np.floating[Any]]
    rank: int


def _numerical_rank(R: NDArray[np.floating[Any]], shape: tuple[int, ...]) -> int:
    diag_R = np.abs(np.diag(R))
    if len(diag_R) == 0 or diag_R.max() == 0:
        return 0
    tol = max(shape) * np.finfo(R.dtype).eps * diag_R.max()
    return int(np.sum(diag_R > tol))


def qr_cpu(
    X: NDArray[np.floating[Any]],
    mode: Literal['reduced', 'complete'] = 'reduced'
) -> QRResult:
    """
    Householder QR of X (LAPACK geqrf through numpy).

    In reduced mode Q is n x min(n, p); in complete mode it is n x n.
    """
    Q, R = np.linalg.qr(X, mode=mode)
    return QRResult(Q=Q, R=R, rank=_numerical_rank(R, X.shape))


def qr_solve_cpu(
    X: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    check_rank: bool,
    qr_result: QRResult | None = None,
) -> NDArray[np.floating[Any]]:
    """
    OLS coefficients from β = R⁻¹ Q'y.

    Args:
        X: Design matrix (n x p), must have n >= p
        y: Response vector (n,)
        check_rank: If True, raise SingularMatrixError on rank-deficient X
        qr_result: Precomputed decomposition of X, if the caller has one

    Returns:
        Coefficient vector β (p,)

    Raises:
        SingularMatrixError: If X is rank-deficient and check_rank=True
    """
    n, p = X.shape
    if qr_result is None:
        qr_result = qr_cpu(X, mode='reduced')

    if check_rank and qr_result.rank < p:
        raise SingularMatrixError(
            f"Design matrix is rank-deficient: rank={qr_result.rank}, expected={p}. "
            f"This indicates perfect multicollinearity.",
            matrix_name='X',
            rank=qr_result.rank,
            expected_rank=p
        )

    Qty = qr_result.Q.T @ y
    return sp_linalg.solve_triangular(qr_result.R[:p, :p], Qty[:p], lower=False)


def lstsq_rank_cpu(
    X: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
) -> tuple[NDArray[np.floating[Any]], int]:
    """
    Minimum-norm least squares fit that tolerates rank deficiency.

    Fitted values are unique even when the coefficients are not, so this
    is safe for auxiliary regressions whose only output is a fit
    statistic.

    Args:
        X: Regressor matrix (n x k)
        y: Response vector (n,)

    Returns:
        (fitted values (n,), numerical rank of X)
    """
    coef, _, rank, _ = sp_linalg.lstsq(X, y, lapack_driver='gelsd')
    return X @ coef, int(rank)
