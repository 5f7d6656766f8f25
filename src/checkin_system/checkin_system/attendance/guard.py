"""Reglas de transición entrada/salida.

Pure functions shared by the service (pre-check) and the repositories (re-check
inside the transaction). A registrant is INSIDE when `entrada` is set and
`salida` is not; every other combination is OUTSIDE.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Iterable, List, Optional, Sequence

from ..core.constants import EXIT_CLEARS_ENTRANCE
from ..core.enums import AttendanceAction, AttendanceState
from ..core.exceptions import TransitionError
from ..inscritos.model import Inscrito

REQUIRED_STATE = {
    AttendanceAction.ENTER: AttendanceState.OUTSIDE,
    AttendanceAction.EXIT: AttendanceState.INSIDE,
}


@dataclass(frozen=True)
class TransitionCheck:
    """Result of validating a raw state-change request before touching the store."""

    action: Optional[AttendanceAction] = None
    ids: tuple[int, ...] = ()
    violations: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations


def validate_transition_request(action: Any, ids: Any) -> TransitionCheck:
    violations: list[str] = []

    parsed_action: Optional[AttendanceAction] = None
    if isinstance(action, AttendanceAction):
        parsed_action = action
    else:
        try:
            parsed_action = AttendanceAction(str(action or "").strip().lower())
        except ValueError:
            violations.append("La acción debe ser 'entrada' o 'salida'")

    parsed_ids: list[int] = []
    if not isinstance(ids, (list, tuple)) or not ids:
        violations.append("Debe indicar al menos un inscrito")
    else:
        for raw in ids:
            if isinstance(raw, bool):
                violations.append(f"ID inválido: {raw!r}")
                continue
            try:
                value = int(raw)
            except (TypeError, ValueError):
                violations.append(f"ID inválido: {raw!r}")
                continue
            if value <= 0:
                violations.append(f"ID inválido: {raw!r}")
            elif value not in parsed_ids:
                parsed_ids.append(value)

    return TransitionCheck(action=parsed_action, ids=tuple(parsed_ids), violations=violations)


def can_apply(inscrito: Inscrito, action: AttendanceAction) -> bool:
    return inscrito.state == REQUIRED_STATE[action]


def blocked_ids(records: Iterable[Inscrito], action: AttendanceAction) -> List[int]:
    return sorted(r.id for r in records if not can_apply(r, action))


def ensure_transition_allowed(ids: Sequence[int], records: Sequence[Inscrito], action: AttendanceAction) -> None:
    """Raise TransitionError for unknown ids first, then for ids in the wrong state."""

    found = {r.id for r in records}
    missing = [i for i in ids if i not in found]
    if missing:
        raise TransitionError(
            "Algunos inscritos no existen",
            missing,
            [f"El inscrito {i} no existe" for i in sorted(missing)],
        )

    blocked = blocked_ids(records, action)
    if blocked:
        if action == AttendanceAction.ENTER:
            message = "Algunos inscritos ya se encuentran dentro"
        else:
            message = "Algunos inscritos no se encuentran dentro"
        raise TransitionError(message, blocked, [f"{message}: {i}" for i in blocked])


def apply_action(inscrito: Inscrito, action: AttendanceAction, now: datetime) -> Inscrito:
    if action == AttendanceAction.ENTER:
        return replace(inscrito, entrada=now, salida=None, updated_at=now)
    entrada = None if EXIT_CLEARS_ENTRANCE else inscrito.entrada
    return replace(inscrito, entrada=entrada, salida=now, updated_at=now)
