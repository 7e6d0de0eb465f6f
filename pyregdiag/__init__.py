"""
PyRegDiag: ordinary least squares with a standardized diagnostic bundle.

Fits linear regressions and turns each fit into a fixed set of
goodness-of-fit and assumption-check statistics, so that competing
models can be compared on equal terms.

Submodules:
    regression: Ordinary least squares fitting (QR decomposition)
    diagnostics: R², F-test, MSE, MAPE, AIC/BIC, heteroscedasticity tests
"""

__version__ = "0.1.0"
__author__ = "Hai-Shuo"
__email__ = "contact@sgcx.org"

from pyregdiag import regression
from pyregdiag import diagnostics
from pyregdiag.core.datasource import DataSource

__all__ = [
    "__version__",
    "regression",
    "diagnostics",
    "DataSource",
]
