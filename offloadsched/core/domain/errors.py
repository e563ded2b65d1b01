"""Fatal error types for model invariant violations.

Configuration mistakes raise ValueError; these types mark caller bugs that must
abort the computation.
"""

from __future__ import annotations


class OffloadingModelError(RuntimeError):
    pass


class IllegalActionError(OffloadingModelError):
    pass


class VariableCountMismatchError(OffloadingModelError):
    pass
