"""
QR least squares on the CPU.

Coefficients come from a Householder QR of the full design (LAPACK via
SciPy), the way R's lm() computes them for full-rank designs.
"""

from typing import Any
import numpy as np

from pyregdiag.core.result import Result
from pyregdiag.core.compute.timing import Timer
from pyregdiag.core.compute.linalg.qr import qr_solve_cpu, qr_cpu
from pyregdiag.regression.design import Design
from pyregdiag.regression.solution import LinearParams

# Above this 2-norm condition number of R the coefficients lose most of
# their significant digits.
ILL_CONDITIONED = 1e10


class CPUQRBackend:
    """Backend[Design, LinearParams] that solves R β = Q'y."""

    @property
    def name(self) -> str:
        return 'cpu_qr'

    def solve(self, design: Design) -> Result[LinearParams]:
        """
        Fit OLS to a Design.

        TSS is taken about the mean of y for designs with an intercept and
        about zero otherwise, matching R's summary.lm().

        Raises:
            SingularMatrixError: If X is rank-deficient
        """
        timer = Timer()
        timer.start()
        X, y = design.X, design.y
        warnings_list: list[str] = []

        with timer.section('qr'):
            qr_result = qr_cpu(X, mode='reduced')
            condition = float(np.linalg.cond(qr_result.R))

        with timer.section('solve'):
            beta = qr_solve_cpu(X, y, check_rank=True, qr_result=qr_result)
            fitted = X @ beta
            resid = y - fitted

        rss = float(resid @ resid)
        centered = y - y.mean() if design.has_intercept else y
        tss = float(centered @ centered)

        if condition > ILL_CONDITIONED:
            warnings_list.append(
                f"design matrix is ill-conditioned (condition number {condition:.3g}); "
                "coefficients may be inaccurate"
            )

        timer.stop()

        info: dict[str, Any] = {
            'method': 'qr',
            'rank': qr_result.rank,
            'condition_number': condition,
            'has_intercept': design.has_intercept,
        }
        return Result(
            params=LinearParams(
                coefficients=beta,
                residuals=resid,
                fitted_values=fitted,
                rss=rss,
                tss=tss,
                rank=qr_result.rank,
                df_residual=design.n - qr_result.rank,
            ),
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
