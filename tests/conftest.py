from __future__ import annotations

from datetime import datetime

import pytest

from src.checkin_system.checkin_system.inscritos.model import Inscrito


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 10, 4, 8, 30, 0)


@pytest.fixture
def ana() -> Inscrito:
    return Inscrito(id=1, nombre="Ana", distrito="Norte", iglesia="Central", email="a@x.com")


@pytest.fixture
def roster(ana) -> list[Inscrito]:
    return [
        ana,
        Inscrito(id=2, nombre="Bruno Díaz", distrito="Norte", iglesia="Central", email="a@x.com"),
        Inscrito(id=3, nombre="Carla Ruiz", distrito="Norte", iglesia="Betel", email="betel@x.com"),
        Inscrito(id=4, nombre="Diego Ríos", distrito="Sur", iglesia="Emanuel", email=""),
        Inscrito(id=12, nombre="Elena Mora", distrito="Sur", iglesia="Iglesia 12", email=None),
    ]
