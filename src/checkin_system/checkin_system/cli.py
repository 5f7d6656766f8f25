"""Batch commands: `flask inscritos barcodes|zips|send-zips|run-all`."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import click
from flask import Flask
from flask.cli import AppGroup

from .badges.options import RenderOptions
from .badges.renderer import BadgeRenderer
from .badges.service import BadgeService
from .batch.config import BatchConfig
from .common.validators import parse_lenient_ids
from .core.constants import (
    DEFAULT_BASE_FOLDER,
    DEFAULT_MAIL_BODY,
    DEFAULT_MAIL_SUBJECT,
    DEFAULT_SLEEP_SECONDS,
)
from .core.exceptions import DomainError

path_option = click.option(
    "--path",
    "path",
    default=DEFAULT_BASE_FOLDER,
    show_default=True,
    help="Carpeta base (dentro de STORAGE_DIR) para imágenes y zips.",
)
ids_option = click.option("--ids", default=None, help="IDs separados por coma (ej: 1,2,3).")
font_option = click.option(
    "--font",
    type=click.Path(dir_okay=False),
    default=None,
    help="Fuente TTF (por defecto FONT_PATH o la fuente de Pillow).",
)


def mail_options(f):
    f = click.option("--sleep", type=int, default=DEFAULT_SLEEP_SECONDS, show_default=True, help="Segundos entre correos.")(f)
    f = click.option("--dry-run", is_flag=True, help="No envía, solo muestra qué se enviaría.")(f)
    f = click.option("--name", "sender_name", default=None, help="Nombre From opcional.")(f)
    f = click.option("--from", "sender", default=None, help="Dirección From opcional.")(f)
    f = click.option("--body", default=DEFAULT_MAIL_BODY, show_default=True, help="Cuerpo del correo.")(f)
    f = click.option("--subject", default=DEFAULT_MAIL_SUBJECT, show_default=True, help="Asunto del correo.")(f)
    return f


def register(app: Flask, container) -> None:
    group = AppGroup("inscritos", help="Procesos batch de inscritos (imágenes, zips, correos).")

    def _base_folder(path: Optional[str]) -> Path:
        rel = (path or DEFAULT_BASE_FOLDER).strip("/") or DEFAULT_BASE_FOLDER
        return Path(app.config.get("STORAGE_DIR", "storage")) / rel

    def _parse_ids(raw: Optional[str]) -> tuple[int, ...]:
        if not raw:
            return ()
        ids = parse_lenient_ids(raw)
        if not ids:
            raise click.UsageError("La opción --ids no tiene IDs válidos.")
        return tuple(ids)

    def _run_barcodes(config: BatchConfig, font: Optional[str]) -> bool:
        """Return False when the selection is empty (nothing to package or send)."""
        service = container.badge_service
        if font:
            service = BadgeService(container.inscritos_repo, BadgeRenderer(RenderOptions(font_path=Path(font))))

        total = service.count(config)
        if total == 0:
            click.secho("No hay inscritos que procesar.", fg="yellow")
            return False

        click.echo(f"Generando códigos de barras para {total} inscritos…")
        with click.progressbar(length=total) as bar:
            report = service.generate(config, progress=lambda _: bar.update(1))

        click.echo()
        click.secho(f"Listo. Revisa: {config.base_folder}/<distrito>/<iglesia>/", fg="green")
        click.echo(f"Generadas: {report.generated_count}")
        click.echo(f"Con error: {len(report.failed)}")
        return True

    def _run_zips(config: BatchConfig) -> None:
        report = container.archive_packager.package(config)
        click.echo(f"Zips por iglesia: {len(report.churches)}")
        click.echo(f"Zips por distrito: {len(report.districts)}")
        click.echo(f"Con error: {len(report.failed)}")
        for path in report.failed:
            click.secho(f"  {path}", fg="yellow")

    def _run_send(config: BatchConfig) -> None:
        report = container.notification_dispatcher.dispatch(config, on_line=click.echo)
        if report.total == 0:
            click.secho("No hay registros con email.", fg="yellow")
            return

        click.echo()
        click.secho(f"Envíos realizados: {report.sent}", fg="green")
        click.echo(f"Saltados (ZIP inexistente): {report.skipped_missing_archive}")
        click.echo(f"Saltados (email inválido): {report.skipped_invalid_email}")
        click.echo(f"Fallidos: {report.failed}")
        if config.dry_run:
            click.secho("Dry-run: no se envió ningún correo.", fg="cyan")

    @group.command("barcodes", help="Genera PNG con código de barras (Code128) por inscrito.")
    @ids_option
    @path_option
    @font_option
    def barcodes(ids, path, font):
        config = BatchConfig(base_folder=_base_folder(path), ids=_parse_ids(ids))
        try:
            _run_barcodes(config, font)
        except DomainError as e:
            raise click.ClickException(str(e)) from e

    @group.command("zips", help="Crea un zip por iglesia y uno por distrito.")
    @path_option
    def zips(path):
        try:
            _run_zips(BatchConfig(base_folder=_base_folder(path)))
        except DomainError as e:
            raise click.ClickException(str(e)) from e

    @group.command("send-zips", help="Envía por email el zip de cada iglesia (distrito, iglesia, email distintos).")
    @path_option
    @mail_options
    def send_zips(path, subject, body, sender, sender_name, dry_run, sleep):
        config = BatchConfig(
            base_folder=_base_folder(path),
            subject=subject,
            body=body,
            sender=sender,
            sender_name=sender_name,
            dry_run=dry_run,
            sleep_seconds=sleep,
        )
        try:
            _run_send(config)
        except DomainError as e:
            raise click.ClickException(str(e)) from e

    @group.command("run-all", help="barcodes -> zips -> send-zips con la misma configuración.")
    @ids_option
    @path_option
    @font_option
    @mail_options
    def run_all(ids, path, font, subject, body, sender, sender_name, dry_run, sleep):
        config = BatchConfig(
            base_folder=_base_folder(path),
            ids=_parse_ids(ids),
            subject=subject,
            body=body,
            sender=sender,
            sender_name=sender_name,
            dry_run=dry_run,
            sleep_seconds=sleep,
        )
        try:
            if not _run_barcodes(config, font):
                return
            _run_zips(config)
            _run_send(config)
        except DomainError as e:
            raise click.ClickException(str(e)) from e

    app.cli.add_command(group)
