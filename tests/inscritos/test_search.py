from __future__ import annotations

from src.checkin_system.checkin_system.inscritos.model import Inscrito
from src.checkin_system.checkin_system.inscritos.search import parse_search
from src.checkin_system.checkin_system.inscritos.service import InscritoService
from tests.fakes import InMemoryInscritos


def test_parse_id_lists_with_mixed_separators():
    f = parse_search(" 12, 40;7 | 12 ")
    assert f.ids == (12, 40, 7)
    assert f.text is None


def test_parse_single_id_is_exact_match():
    assert parse_search("12").ids == (12,)


def test_parse_free_text():
    f = parse_search("Ana 12")
    assert f.ids == ()
    assert f.text == "Ana 12"
    assert f.exact_id is None


def test_parse_signed_integer_keeps_text_and_exact_id():
    f = parse_search("+12")
    assert f.text == "+12"
    assert f.exact_id == 12


def test_parse_blank_is_empty():
    assert parse_search("   ").is_empty
    assert parse_search(None).is_empty


def test_exact_id_token_returns_registrant_once(roster):
    svc = InscritoService(InMemoryInscritos(roster))
    page = svc.search("12")
    assert [r.id for r in page.items] == [12]


def test_substring_search_is_case_insensitive(roster):
    svc = InscritoService(InMemoryInscritos(roster))
    page = svc.search("nORte")
    assert {r.id for r in page.items} == {1, 2, 3}


def test_church_filter_is_anded(roster):
    svc = InscritoService(InMemoryInscritos(roster))
    page = svc.search("Norte", "Betel")
    assert [r.id for r in page.items] == [3]


def test_results_ordered_by_district_then_church(roster):
    page = InscritoService(InMemoryInscritos(roster)).search()
    keys = [(r.distrito, r.iglesia) for r in page.items]
    assert keys == sorted(keys)
    assert page.iglesias == ["Betel", "Central", "Emanuel", "Iglesia 12"]


def test_pagination(fixed_now):
    rows = [Inscrito(id=i, nombre=f"P{i}", distrito="D", iglesia="I") for i in range(1, 8)]
    svc = InscritoService(InMemoryInscritos(rows), per_page=3)

    page = svc.search(page=3)
    assert page.total == 7
    assert page.last_page == 3
    assert [r.id for r in page.items] == [7]

    assert svc.search(page=0).page == 1


def test_signed_integer_token_finds_registrant_by_id(roster):
    page = InscritoService(InMemoryInscritos(roster)).search("+12")
    assert [r.id for r in page.items] == [12]
