from __future__ import annotations

from datetime import datetime
from typing import Iterator, Optional, Sequence

from ..attendance.guard import ensure_transition_allowed
from ..core.constants import EXIT_CLEARS_ENTRANCE
from ..core.enums import AttendanceAction
from ..core.exceptions import TransitionError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_placeholders, like_pattern
from .model import Inscrito, NotificationTarget, SearchFilter
from .repository import InscritoRepository

_COLUMNS = (
    "id, nombre, distrito, iglesia, comida, entrada, salida, "
    "director, telefono, email, created_at, updated_at"
)

# action -> (SET clause, precondition predicate)
_TRANSITIONS = {
    AttendanceAction.ENTER: ("entrada=%s, salida=NULL", "(entrada IS NULL OR salida IS NOT NULL)"),
    AttendanceAction.EXIT: (
        "salida=%s, entrada=NULL" if EXIT_CLEARS_ENTRANCE else "salida=%s",
        "(entrada IS NOT NULL AND salida IS NULL)",
    ),
}


def _to_model(r: dict) -> Inscrito:
    return Inscrito(
        id=int(r["id"]),
        nombre=r["nombre"],
        distrito=r["distrito"],
        iglesia=r["iglesia"],
        comida=r.get("comida"),
        entrada=r.get("entrada"),
        salida=r.get("salida"),
        director=r.get("director"),
        telefono=r.get("telefono"),
        email=r.get("email"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLInscritoRepository(InscritoRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, inscrito_id: int) -> Optional[Inscrito]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM inscritos WHERE id=%s", (int(inscrito_id),))
            row = fetchone(cur)
            return _to_model(row) if row else None

    def get_by_ids(self, ids: Sequence[int]) -> Sequence[Inscrito]:
        if not ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM inscritos WHERE id IN ({in_placeholders(ids)}) ORDER BY id",
                tuple(int(i) for i in ids),
            )
            return [_to_model(r) for r in fetchall(cur)]

    def _where(self, search: SearchFilter, iglesia: Optional[str]) -> tuple[str, list[object]]:
        clauses: list[str] = []
        params: list[object] = []

        if search.ids:
            clauses.append(f"id IN ({in_placeholders(search.ids)})")
            params.extend(search.ids)
        elif search.text:
            pattern = like_pattern(search.text.lower())
            text_clauses = [
                "LOWER(nombre) LIKE %s",
                "LOWER(iglesia) LIKE %s",
                "LOWER(distrito) LIKE %s",
            ]
            params.extend([pattern, pattern, pattern])
            if search.exact_id is not None:
                text_clauses.append("id=%s")
                params.append(search.exact_id)
            clauses.append("(" + " OR ".join(text_clauses) + ")")

        if iglesia:
            clauses.append("iglesia=%s")
            params.append(iglesia)

        where = " AND ".join(clauses) if clauses else "1=1"
        return where, params

    def search(
        self,
        *,
        search: SearchFilter,
        iglesia: Optional[str],
        offset: int,
        limit: int,
    ) -> tuple[Sequence[Inscrito], int]:
        where, params = self._where(search, iglesia)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM inscritos WHERE {where}", tuple(params))
            total = int((fetchone(cur) or {}).get("total") or 0)

            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM inscritos
                WHERE {where}
                ORDER BY distrito ASC, iglesia ASC, id ASC
                LIMIT %s OFFSET %s
                """,
                tuple(params) + (int(limit), int(offset)),
            )
            return [_to_model(r) for r in fetchall(cur)], total

    def list_churches(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT iglesia
                FROM inscritos
                WHERE iglesia IS NOT NULL AND iglesia <> ''
                GROUP BY iglesia
                ORDER BY iglesia
                """
            )
            return [r["iglesia"] for r in fetchall(cur)]

    def count(self, ids: Optional[Sequence[int]] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            if ids:
                cur.execute(
                    f"SELECT COUNT(*) AS total FROM inscritos WHERE id IN ({in_placeholders(ids)})",
                    tuple(ids),
                )
            else:
                cur.execute("SELECT COUNT(*) AS total FROM inscritos")
            return int((fetchone(cur) or {}).get("total") or 0)

    def iter_chunks(self, *, ids: Optional[Sequence[int]] = None, chunk_size: int) -> Iterator[Sequence[Inscrito]]:
        # Keyset pagination: one short query per chunk, ordered by id.
        last_id = 0
        while True:
            clauses = ["id > %s"]
            params: list[object] = [last_id]
            if ids:
                clauses.append(f"id IN ({in_placeholders(ids)})")
                params.extend(int(i) for i in ids)
            params.append(int(chunk_size))

            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"SELECT {_COLUMNS} FROM inscritos WHERE {' AND '.join(clauses)} ORDER BY id LIMIT %s",
                    tuple(params),
                )
                chunk = [_to_model(r) for r in fetchall(cur)]

            if not chunk:
                return
            yield chunk
            if len(chunk) < chunk_size:
                return
            last_id = chunk[-1].id

    def apply_transition(self, *, action: AttendanceAction, ids: Sequence[int], now: datetime) -> int:
        ids = [int(i) for i in ids]
        placeholders = in_placeholders(ids)
        set_clause, precondition = _TRANSITIONS[action]

        with db_cursor(self._conn_factory) as (_, cur):
            # Lock the rows so the re-check and the update see the same state.
            cur.execute(
                f"SELECT {_COLUMNS} FROM inscritos WHERE id IN ({placeholders}) FOR UPDATE",
                tuple(ids),
            )
            ensure_transition_allowed(ids, [_to_model(r) for r in fetchall(cur)], action)

            cur.execute(
                f"""
                UPDATE inscritos
                SET {set_clause}, updated_at=%s
                WHERE id IN ({placeholders}) AND {precondition}
                """,
                (now, now, *ids),
            )
            if cur.rowcount != len(ids):
                # db_cursor rolls back on the way out.
                raise TransitionError("El estado de algunos inscritos cambió, intente de nuevo", ids)
            return int(cur.rowcount)

    def list_notification_targets(self) -> Sequence[NotificationTarget]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT DISTINCT distrito, iglesia, email
                FROM inscritos
                WHERE email IS NOT NULL AND email <> ''
                ORDER BY distrito, iglesia
                """
            )
            return [
                NotificationTarget(distrito=r["distrito"] or "", iglesia=r["iglesia"] or "", email=r["email"])
                for r in fetchall(cur)
            ]
