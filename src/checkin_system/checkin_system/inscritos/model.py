from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import to_iso
from ..core.enums import AttendanceState


@dataclass(frozen=True)
class Inscrito:
    """Entidad de dominio: persona inscrita en el evento.

    Only `entrada`/`salida` change inside this system; the rest comes from the roster import.
    """

    id: int
    nombre: str
    distrito: str
    iglesia: str
    comida: Optional[str] = None
    entrada: Optional[datetime] = None
    salida: Optional[datetime] = None
    director: Optional[str] = None
    telefono: Optional[str] = None
    email: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def state(self) -> AttendanceState:
        if self.entrada is not None and self.salida is None:
            return AttendanceState.INSIDE
        return AttendanceState.OUTSIDE

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "nombre": self.nombre,
            "distrito": self.distrito,
            "iglesia": self.iglesia,
            "comida": self.comida,
            "entrada": to_iso(self.entrada),
            "salida": to_iso(self.salida),
            "director": self.director,
            "telefono": self.telefono,
            "email": self.email,
            "estado": self.state.value,
        }


@dataclass(frozen=True)
class SearchFilter:
    """Parsed free-text token.

    `ids` set => exact id membership only. Otherwise `text` is matched as a substring
    against nombre/iglesia/distrito, ORed with `exact_id` when present.
    """

    ids: tuple[int, ...] = ()
    text: Optional[str] = None
    exact_id: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return not self.ids and not self.text


@dataclass(frozen=True)
class InscritoPage:
    items: Sequence[Inscrito]
    page: int
    per_page: int
    total: int
    iglesias: Sequence[str] = field(default_factory=list)

    @property
    def last_page(self) -> int:
        return max(1, -(-self.total // self.per_page))


@dataclass(frozen=True)
class NotificationTarget:
    """Una fila DISTINCT (distrito, iglesia, email) con email no vacío."""

    distrito: str
    iglesia: str
    email: str
