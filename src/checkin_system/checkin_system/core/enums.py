from __future__ import annotations

from enum import Enum


class AttendanceAction(str, Enum):
    """Acción solicitada sobre un grupo de inscritos (valor = columna afectada)."""

    ENTER = "entrada"
    EXIT = "salida"


class AttendanceState(str, Enum):
    """Estado lógico derivado de las marcas entrada/salida."""

    INSIDE = "INSIDE"
    OUTSIDE = "OUTSIDE"
