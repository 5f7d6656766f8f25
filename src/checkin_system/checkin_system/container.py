from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .archives.packager import ArchivePackager
from .attendance.service import AttendanceService
from .badges.options import RenderOptions
from .badges.renderer import BadgeRenderer
from .badges.service import BadgeService
from .core.constants import DEFAULT_PAGE_SIZE
from .database.connection import DBConfig, DatabaseConnection
from .inscritos.mysql_inscrito_repository import MySQLInscritoRepository
from .inscritos.service import InscritoService
from .notifications.mailer import MailSettings, SmtpMailer
from .notifications.service import NotificationDispatcher


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    inscritos_repo: MySQLInscritoRepository

    inscrito_service: InscritoService
    attendance_service: AttendanceService
    badge_service: BadgeService
    archive_packager: ArchivePackager
    notification_dispatcher: NotificationDispatcher


def build_container(
    *,
    db_config: dict,
    mail_config: Optional[dict] = None,
    font_path: Optional[str] = None,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    inscritos_repo = MySQLInscritoRepository(conn)

    mail_settings = MailSettings.from_dict(mail_config or {})
    renderer = BadgeRenderer(RenderOptions(font_path=Path(font_path) if font_path else None))

    return Container(
        conn=conn,
        inscritos_repo=inscritos_repo,
        inscrito_service=InscritoService(inscritos_repo, per_page=page_size),
        attendance_service=AttendanceService(inscritos_repo),
        badge_service=BadgeService(inscritos_repo, renderer),
        archive_packager=ArchivePackager(),
        notification_dispatcher=NotificationDispatcher(
            inscritos_repo,
            SmtpMailer(mail_settings),
            default_sender=mail_settings.from_address,
            default_sender_name=mail_settings.from_name,
        ),
    )
