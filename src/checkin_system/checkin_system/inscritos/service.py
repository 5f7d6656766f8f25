from __future__ import annotations

from typing import Optional

from ..core.constants import DEFAULT_PAGE_SIZE
from .model import Inscrito, InscritoPage
from .repository import InscritoRepository
from .search import parse_search


class InscritoService:
    """Use case: browse/search the roster (read-only)."""

    def __init__(self, inscritos: InscritoRepository, *, per_page: int = DEFAULT_PAGE_SIZE):
        self._inscritos = inscritos
        self._per_page = max(1, int(per_page))

    def search(self, query: Optional[str] = None, iglesia: Optional[str] = None, *, page: int = 1) -> InscritoPage:
        page = max(1, int(page or 1))
        iglesia = (iglesia or "").strip() or None

        rows, total = self._inscritos.search(
            search=parse_search(query),
            iglesia=iglesia,
            offset=(page - 1) * self._per_page,
            limit=self._per_page,
        )
        return InscritoPage(
            items=list(rows),
            page=page,
            per_page=self._per_page,
            total=total,
            iglesias=list(self._inscritos.list_churches()),
        )

    def get(self, inscrito_id: int) -> Optional[Inscrito]:
        return self._inscritos.get_by_id(inscrito_id)
