"""
Errors raised by PyRegDiag.

Everything derives from PyRegDiagError. Bad input raises a
ValidationError subclass; a computation that cannot produce a meaningful
number raises a NumericalError subclass. Errors keep the quantities that
triggered them as attributes, so callers can react without parsing the
message.
"""


class PyRegDiagError(Exception):
    """Root of the PyRegDiag exception tree."""


class ValidationError(PyRegDiagError):
    """An argument failed a validation check."""


class DimensionError(ValidationError):
    """Array shapes are wrong or disagree with each other."""


class InsufficientDegreesOfFreedom(ValidationError):
    """
    Too few observations for the number of predictors.

    Raised when the residual degrees of freedom n - p - 1 are not
    positive, or when the model has no predictors at all. Goodness-of-fit
    statistics (adjusted R², F) are undefined in that case.

    Attributes:
        n_observations: Sample size n
        n_predictors: Number of predictors p (intercept excluded)
    """

    def __init__(
        self,
        message: str,
        n_observations: int | None = None,
        n_predictors: int | None = None,
    ):
        super().__init__(message)
        self.n_observations = n_observations
        self.n_predictors = n_predictors

    @property
    def df_residual(self) -> int | None:
        if self.n_observations is None or self.n_predictors is None:
            return None
        return self.n_observations - self.n_predictors - 1


class NumericalError(PyRegDiagError):
    """A quantity is undefined or cannot be computed reliably."""


class SingularMatrixError(NumericalError):
    """
    A design matrix is numerically rank-deficient.

    OLS coefficients are not identified, typically because one predictor
    is a linear combination of others.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
        rank: Numerical rank, if computed
        expected_rank: Expected rank (typically min(n, p))
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank


class DegenerateResponse(NumericalError):
    """
    Response vector has zero variance.

    The total sum of squares is zero, so R² and every statistic built on
    it are undefined.

    Attributes:
        value: The constant response value, if known
    """

    def __init__(self, message: str, value: float | None = None):
        super().__init__(message)
        self.value = value
