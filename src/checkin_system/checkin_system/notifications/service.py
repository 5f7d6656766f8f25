from __future__ import annotations

import time
from typing import Callable, Optional

from ..batch.config import BatchConfig
from ..batch.report import NotificationReport
from ..common.slugs import church_slug, district_slug
from ..common.validators import normalize_email
from ..core.exceptions import PreconditionError
from ..inscritos.repository import InscritoRepository
from ..logger import get_logger
from .mailer import Mailer, build_church_zip_message

logger = get_logger(__name__)


class NotificationDispatcher:
    """Use case: enviar el zip de cada iglesia a los correos (distrito, iglesia, email) distintos."""

    def __init__(
        self,
        inscritos: InscritoRepository,
        mailer: Mailer,
        *,
        default_sender: Optional[str] = None,
        default_sender_name: Optional[str] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._inscritos = inscritos
        self._mailer = mailer
        self._default_sender = default_sender
        self._default_sender_name = default_sender_name
        self._sleep = sleep

    def dispatch(
        self,
        config: BatchConfig,
        *,
        on_line: Optional[Callable[[str], None]] = None,
    ) -> NotificationReport:
        sender = config.sender or self._default_sender
        sender_name = config.sender_name or self._default_sender_name
        if not sender and not config.dry_run:
            raise PreconditionError("No hay remitente configurado (MAIL_FROM_ADDRESS o --from)")

        def emit(line: str) -> None:
            if on_line:
                on_line(line)

        targets = self._inscritos.list_notification_targets()
        report = NotificationReport(total=len(targets))

        for t in targets:
            zip_path = config.church_archive(district_slug(t.distrito), church_slug(t.iglesia))

            email = normalize_email(t.email)
            if not email:
                logger.warning("Email inválido: %s (%s / %s)", t.email, t.distrito, t.iglesia)
                emit(f"Email inválido: {t.email} ({t.distrito} / {t.iglesia})")
                report.skipped_invalid_email += 1
                continue

            if not zip_path.is_file():
                logger.warning("ZIP no encontrado: %s (%s / %s)", zip_path, t.distrito, t.iglesia)
                emit(f"ZIP no encontrado: {zip_path} ({t.distrito} / {t.iglesia})")
                report.skipped_missing_archive += 1
                continue

            emit(f"{'[DRY] ' if config.dry_run else ''}Enviando a {email} -> {zip_path}")
            if config.dry_run:
                report.planned.append(email)
                continue

            try:
                message = build_church_zip_message(
                    to=email,
                    sender=sender,
                    sender_name=sender_name,
                    subject=config.subject,
                    body=config.body,
                    distrito=t.distrito,
                    iglesia=t.iglesia,
                    zip_path=zip_path,
                )
                self._mailer.send(message)
            except Exception as e:
                logger.warning("Fallo enviando a %s: %s", email, e)
                emit(f"Fallo enviando a {email}: {e}")
                report.failed += 1
                continue

            report.sent += 1
            if config.sleep_seconds > 0:
                self._sleep(config.sleep_seconds)

        logger.info(
            "Notifications: sent=%d missing_zip=%d bad_email=%d failed=%d dry_run=%s",
            report.sent,
            report.skipped_missing_archive,
            report.skipped_invalid_email,
            report.failed,
            config.dry_run,
        )
        return report
