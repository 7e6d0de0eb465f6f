"""
Result: the envelope every backend returns.

The numbers a backend computes travel in `params` (a payload type chosen
by the domain); everything about how they were computed (method details,
timings, warnings, library versions) travels alongside in the envelope.
"""

import platform
from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


def _default_provenance() -> dict[str, str]:
    """Versions of the libraries that produced a result."""
    import numpy
    import scipy
    from pyregdiag import __version__

    return {
        'pyregdiag_version': __version__,
        'numpy_version': numpy.__version__,
        'scipy_version': scipy.__version__,
        'python_version': platform.python_version(),
    }


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Frozen envelope around a backend payload of type P.

    Attributes:
        params: The payload, e.g. LinearParams
        info: Method metadata such as rank and condition number
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation
        provenance: Library versions, filled in automatically
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
    provenance: dict[str, str] = field(default_factory=_default_provenance)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
