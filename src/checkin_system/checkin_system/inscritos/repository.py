from __future__ import annotations

from datetime import datetime
from typing import Iterator, Optional, Protocol, Sequence

from ..core.enums import AttendanceAction
from .model import Inscrito, NotificationTarget, SearchFilter


class InscritoRepository(Protocol):
    """Interfaz del repositorio de inscritos.

    Note (DIP): services depend on this protocol, never on a concrete database.
    """

    def get_by_id(self, inscrito_id: int) -> Optional[Inscrito]:
        raise NotImplementedError

    def get_by_ids(self, ids: Sequence[int]) -> Sequence[Inscrito]:
        raise NotImplementedError

    def search(
        self,
        *,
        search: SearchFilter,
        iglesia: Optional[str],
        offset: int,
        limit: int,
    ) -> tuple[Sequence[Inscrito], int]:
        """Rows ordered by distrito, iglesia (then id) and the total match count."""

        raise NotImplementedError

    def list_churches(self) -> Sequence[str]:
        raise NotImplementedError

    def count(self, ids: Optional[Sequence[int]] = None) -> int:
        raise NotImplementedError

    def iter_chunks(self, *, ids: Optional[Sequence[int]] = None, chunk_size: int) -> Iterator[Sequence[Inscrito]]:
        raise NotImplementedError

    def apply_transition(self, *, action: AttendanceAction, ids: Sequence[int], now: datetime) -> int:
        """Apply the action to every id in one transaction or raise TransitionError."""

        raise NotImplementedError

    def list_notification_targets(self) -> Sequence[NotificationTarget]:
        raise NotImplementedError
