from __future__ import annotations

from datetime import datetime
from typing import Iterator, Optional, Sequence

from src.checkin_system.checkin_system.attendance.guard import apply_action, ensure_transition_allowed
from src.checkin_system.checkin_system.core.enums import AttendanceAction
from src.checkin_system.checkin_system.inscritos.model import Inscrito, NotificationTarget, SearchFilter


class InMemoryInscritos:
    def __init__(self, rows: Sequence[Inscrito] = ()):
        self.rows: dict[int, Inscrito] = {r.id: r for r in rows}
        self.chunk_sizes: list[int] = []

    def get_by_id(self, inscrito_id: int) -> Optional[Inscrito]:
        return self.rows.get(int(inscrito_id))

    def get_by_ids(self, ids: Sequence[int]) -> Sequence[Inscrito]:
        return [self.rows[i] for i in sorted(set(ids)) if i in self.rows]

    def _matches(self, r: Inscrito, search: SearchFilter) -> bool:
        if search.ids:
            return r.id in search.ids
        if search.text:
            term = search.text.lower()
            if any(term in (v or "").lower() for v in (r.nombre, r.iglesia, r.distrito)):
                return True
            return search.exact_id is not None and r.id == search.exact_id
        return True

    def search(self, *, search: SearchFilter, iglesia: Optional[str], offset: int, limit: int):
        rows = [r for r in self.rows.values() if self._matches(r, search)]
        if iglesia:
            rows = [r for r in rows if r.iglesia == iglesia]
        rows.sort(key=lambda r: (r.distrito, r.iglesia, r.id))
        return rows[offset : offset + limit], len(rows)

    def list_churches(self) -> Sequence[str]:
        return sorted({r.iglesia for r in self.rows.values() if r.iglesia})

    def count(self, ids: Optional[Sequence[int]] = None) -> int:
        if ids:
            return len([i for i in set(ids) if i in self.rows])
        return len(self.rows)

    def iter_chunks(self, *, ids: Optional[Sequence[int]] = None, chunk_size: int) -> Iterator[Sequence[Inscrito]]:
        rows = [self.rows[i] for i in sorted(self.rows) if not ids or i in ids]
        for start in range(0, len(rows), chunk_size):
            chunk = rows[start : start + chunk_size]
            self.chunk_sizes.append(len(chunk))
            yield chunk

    def apply_transition(self, *, action: AttendanceAction, ids: Sequence[int], now: datetime) -> int:
        records = [self.rows[i] for i in sorted(set(ids)) if i in self.rows]
        ensure_transition_allowed(list(ids), records, action)
        for r in records:
            self.rows[r.id] = apply_action(r, action, now)
        return len(records)

    def list_notification_targets(self) -> Sequence[NotificationTarget]:
        seen: list[NotificationTarget] = []
        for r in sorted(self.rows.values(), key=lambda r: (r.distrito, r.iglesia)):
            if not r.email:
                continue
            t = NotificationTarget(distrito=r.distrito, iglesia=r.iglesia, email=r.email)
            if t not in seen:
                seen.append(t)
        return seen


class FakeMailer:
    def __init__(self, fail_for: Sequence[str] = ()):
        self.sent = []
        self._fail_for = set(fail_for)

    def send(self, message) -> None:
        if message["To"] in self._fail_for:
            raise ConnectionError("SMTP caído")
        self.sent.append(message)
