from __future__ import annotations

import zipfile
from types import SimpleNamespace

import pytest
from flask import Flask

from src.checkin_system.checkin_system.archives.packager import ArchivePackager
from src.checkin_system.checkin_system.badges.service import BadgeService
from src.checkin_system.checkin_system.cli import register
from src.checkin_system.checkin_system.notifications.service import NotificationDispatcher
from tests.fakes import FakeMailer, InMemoryInscritos


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def app(tmp_path, roster, mailer):
    repo = InMemoryInscritos(roster)
    container = SimpleNamespace(
        inscritos_repo=repo,
        badge_service=BadgeService(repo),
        archive_packager=ArchivePackager(),
        notification_dispatcher=NotificationDispatcher(
            repo, mailer, default_sender="fesja@example.com", sleep=lambda s: None
        ),
    )
    app = Flask(__name__)
    app.config["STORAGE_DIR"] = str(tmp_path)
    register(app, container)
    return app


def test_barcodes_rejects_garbage_ids(app):
    result = app.test_cli_runner().invoke(args=["inscritos", "barcodes", "--ids", "abc"])
    assert result.exit_code == 2
    assert "no tiene IDs válidos" in result.output


def test_barcodes_then_zips(app, tmp_path):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["inscritos", "barcodes", "--ids", "1,2"])
    assert result.exit_code == 0, result.output
    assert "Generadas: 2" in result.output
    assert (tmp_path / "barcodes" / "norte" / "central" / "1-ana.png").is_file()

    result = runner.invoke(args=["inscritos", "zips"])
    assert result.exit_code == 0, result.output
    with zipfile.ZipFile(tmp_path / "barcodes" / "norte.zip") as zf:
        assert sorted(zf.namelist()) == ["central/1-ana.png", "central/2-bruno-diaz.png"]


def test_barcodes_empty_selection_warns(app):
    result = app.test_cli_runner().invoke(args=["inscritos", "barcodes", "--ids", "404"])
    assert result.exit_code == 0
    assert "No hay inscritos que procesar." in result.output


def test_zips_without_images_fails(app):
    result = app.test_cli_runner().invoke(args=["inscritos", "zips", "--path", "otra"])
    assert result.exit_code == 1
    assert "no existe" in result.output


def test_run_all_dry_run(app, mailer):
    result = app.test_cli_runner().invoke(args=["inscritos", "run-all", "--dry-run"])

    assert result.exit_code == 0, result.output
    assert "[DRY] Enviando a betel@x.com" in result.output
    assert "[DRY] Enviando a a@x.com" in result.output
    assert "Dry-run: no se envió ningún correo." in result.output
    assert mailer.sent == []


def test_send_zips_reports_tally(app, mailer):
    runner = app.test_cli_runner()
    runner.invoke(args=["inscritos", "barcodes"])
    runner.invoke(args=["inscritos", "zips"])

    result = runner.invoke(args=["inscritos", "send-zips", "--subject", "Credenciales", "--sleep", "0"])

    assert result.exit_code == 0, result.output
    assert "Envíos realizados: 2" in result.output
    assert [m["Subject"] for m in mailer.sent] == ["Credenciales", "Credenciales"]


def test_run_all_stops_cleanly_on_unknown_ids(app, tmp_path, mailer):
    result = app.test_cli_runner().invoke(args=["inscritos", "run-all", "--ids", "404", "--dry-run"])

    assert result.exit_code == 0, result.output
    assert "No hay inscritos que procesar." in result.output
    assert "no existe" not in result.output
    assert not (tmp_path / "barcodes").exists()
    assert mailer.sent == []


def test_run_all_with_empty_roster_exits_ok(tmp_path, mailer):
    repo = InMemoryInscritos([])
    container = SimpleNamespace(
        inscritos_repo=repo,
        badge_service=BadgeService(repo),
        archive_packager=ArchivePackager(),
        notification_dispatcher=NotificationDispatcher(repo, mailer, sleep=lambda s: None),
    )
    empty = Flask(__name__)
    empty.config["STORAGE_DIR"] = str(tmp_path)
    register(empty, container)

    result = empty.test_cli_runner().invoke(args=["inscritos", "run-all"])

    assert result.exit_code == 0, result.output
    assert "No hay inscritos que procesar." in result.output
    assert "Zips por iglesia" not in result.output
