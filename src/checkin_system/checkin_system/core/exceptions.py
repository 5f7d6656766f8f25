from __future__ import annotations

from typing import Iterable, Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    def __init__(self, message: str, violations: Sequence[str] | None = None):
        super().__init__(message)
        self.violations = list(violations or [message])


class TransitionError(ValidationError):
    """Raised when some ids cannot take the requested entrance/exit action.

    The whole batch is rejected; `ids` lists every offending id.
    """

    def __init__(self, message: str, ids: Iterable[int], violations: Sequence[str] | None = None):
        super().__init__(message, violations)
        self.ids = sorted({int(i) for i in ids})


class PreconditionError(DomainError):
    """Raised when the environment cannot support a batch run (missing folders, ...)."""
