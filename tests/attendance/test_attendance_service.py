from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.checkin_system.checkin_system.attendance.service import AttendanceService
from src.checkin_system.checkin_system.core.enums import AttendanceAction, AttendanceState
from src.checkin_system.checkin_system.core.exceptions import TransitionError, ValidationError
from src.checkin_system.checkin_system.inscritos.model import Inscrito
from tests.fakes import InMemoryInscritos


def test_enter_marks_everyone_inside(roster, fixed_now):
    repo = InMemoryInscritos(roster)
    svc = AttendanceService(repo)

    result = svc.apply("entrada", [1, 2, 3], now=fixed_now)

    assert result.updated == 3
    for i in (1, 2, 3):
        assert repo.rows[i].state == AttendanceState.INSIDE
        assert repo.rows[i].entrada == fixed_now
    assert repo.rows[4].state == AttendanceState.OUTSIDE


def test_enter_on_inside_id_rejects_whole_batch(roster, fixed_now):
    repo = InMemoryInscritos(roster)
    svc = AttendanceService(repo)
    svc.enter([2], now=fixed_now)
    before = dict(repo.rows)

    with pytest.raises(TransitionError) as exc:
        svc.enter([1, 2, 3], now=fixed_now + timedelta(minutes=5))

    assert exc.value.ids == [2]
    assert repo.rows == before


def test_exit_on_outside_id_rejects_whole_batch(roster, fixed_now):
    repo = InMemoryInscritos(roster)
    svc = AttendanceService(repo)
    svc.enter([1], now=fixed_now)
    before = dict(repo.rows)

    with pytest.raises(TransitionError) as exc:
        svc.exit([1, 3], now=fixed_now + timedelta(hours=1))

    assert exc.value.ids == [3]
    assert repo.rows == before


def test_unknown_ids_are_validation_errors(roster, fixed_now):
    svc = AttendanceService(InMemoryInscritos(roster))
    with pytest.raises(TransitionError) as exc:
        svc.enter([1, 999], now=fixed_now)
    assert exc.value.ids == [999]


def test_bad_action_is_rejected_before_touching_store(roster):
    repo = InMemoryInscritos(roster)
    svc = AttendanceService(repo)
    with pytest.raises(ValidationError):
        svc.apply("pausa", [1])
    assert all(r.state == AttendanceState.OUTSIDE for r in repo.rows.values())


def test_enter_exit_enter_cycle(ana, fixed_now):
    repo = InMemoryInscritos([ana])
    svc = AttendanceService(repo)
    t1, t2, t3 = fixed_now, fixed_now + timedelta(hours=2), fixed_now + timedelta(hours=3)

    states = [repo.rows[1].state]
    svc.enter([1], now=t1)
    states.append(repo.rows[1].state)
    assert repo.rows[1].entrada == t1

    svc.exit([1], now=t2)
    states.append(repo.rows[1].state)
    assert repo.rows[1].salida == t2

    svc.enter([1], now=t3)
    states.append(repo.rows[1].state)
    assert repo.rows[1].entrada == t3
    assert repo.rows[1].salida is None

    assert states == [
        AttendanceState.OUTSIDE,
        AttendanceState.INSIDE,
        AttendanceState.OUTSIDE,
        AttendanceState.INSIDE,
    ]
    assert t1 < t2 < t3


def test_uses_clock_when_now_not_given(ana):
    stamp = datetime(2025, 10, 4, 9, 15)
    repo = InMemoryInscritos([ana])
    AttendanceService(repo, clock=lambda: stamp).enter([1])
    assert repo.rows[1].entrada == stamp


class StaleReadRepo(InMemoryInscritos):
    """Pre-check sees OUTSIDE, but another writer got there first."""

    def get_by_ids(self, ids):
        return [
            Inscrito(id=r.id, nombre=r.nombre, distrito=r.distrito, iglesia=r.iglesia)
            for r in super().get_by_ids(ids)
        ]


def test_repository_recheck_keeps_batch_atomic(roster, fixed_now):
    repo = StaleReadRepo(roster)
    repo.rows[3] = Inscrito(id=3, nombre="Carla Ruiz", distrito="Norte", iglesia="Betel", entrada=fixed_now)
    before = dict(repo.rows)

    with pytest.raises(TransitionError) as exc:
        AttendanceService(repo).apply(AttendanceAction.ENTER, [1, 3], now=fixed_now)

    assert exc.value.ids == [3]
    assert repo.rows == before
