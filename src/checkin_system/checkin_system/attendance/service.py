from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

from ..common.datetime_utils import now_local
from ..core.enums import AttendanceAction
from ..core.exceptions import ValidationError
from ..inscritos.repository import InscritoRepository
from ..logger import get_logger
from .guard import ensure_transition_allowed, validate_transition_request

logger = get_logger(__name__)


@dataclass(frozen=True)
class TransitionResult:
    action: AttendanceAction
    updated: int
    at: datetime


class AttendanceService:
    """Use case: marcar entrada/salida para un grupo de inscritos (todo o nada)."""

    def __init__(self, inscritos: InscritoRepository, *, clock: Optional[Callable[[], datetime]] = None):
        self._inscritos = inscritos
        self._clock = clock or now_local

    def apply(self, action: Any, ids: Any, *, now: datetime | None = None) -> TransitionResult:
        check = validate_transition_request(action, ids)
        if not check.ok:
            raise ValidationError(check.violations[0], check.violations)

        ids = list(check.ids)
        # Fail fast with a readable error; the repository re-checks under lock.
        try:
            ensure_transition_allowed(ids, self._inscritos.get_by_ids(ids), check.action)
        except ValidationError as e:
            logger.info("Rejected %s for ids=%s: %s", check.action.value, getattr(e, "ids", ids), e)
            raise

        now = now or self._clock()
        updated = self._inscritos.apply_transition(action=check.action, ids=ids, now=now)
        logger.info("Applied %s to %d inscritos", check.action.value, updated)
        return TransitionResult(action=check.action, updated=updated, at=now)

    def enter(self, ids, *, now: datetime | None = None) -> TransitionResult:
        return self.apply(AttendanceAction.ENTER, ids, now=now)

    def exit(self, ids, *, now: datetime | None = None) -> TransitionResult:
        return self.apply(AttendanceAction.EXIT, ids, now=now)
