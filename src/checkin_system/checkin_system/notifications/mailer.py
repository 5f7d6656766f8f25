from __future__ import annotations

import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr
from pathlib import Path
from typing import Optional, Protocol

from ..core.constants import ATTACHMENT_FILENAME, ATTACHMENT_MIME


@dataclass(frozen=True)
class MailSettings:
    host: str = "localhost"
    port: int = 587
    username: Optional[str] = None
    password: Optional[str] = None
    use_tls: bool = True
    from_address: Optional[str] = None
    from_name: Optional[str] = None
    timeout: float = 30.0

    @classmethod
    def from_dict(cls, mail_config: dict) -> "MailSettings":
        return cls(
            host=str(mail_config.get("host", "localhost")),
            port=int(mail_config.get("port", 587)),
            username=mail_config.get("username") or None,
            password=mail_config.get("password") or None,
            use_tls=bool(mail_config.get("use_tls", True)),
            from_address=mail_config.get("from_address") or None,
            from_name=mail_config.get("from_name") or None,
            timeout=float(mail_config.get("timeout", 30)),
        )


class Mailer(Protocol):
    def send(self, message: EmailMessage) -> None:
        raise NotImplementedError


class SmtpMailer(Mailer):
    """One SMTP session per message (sends are throttled anyway)."""

    def __init__(self, settings: MailSettings):
        self._settings = settings

    def send(self, message: EmailMessage) -> None:
        s = self._settings
        with smtplib.SMTP(s.host, s.port, timeout=s.timeout) as server:
            if s.use_tls:
                server.starttls()
            if s.username:
                server.login(s.username, s.password or "")
            server.send_message(message)


def render_body(*, distrito: str, iglesia: str, body: str) -> str:
    return (
        "Codigos de entrada para la fesja Cuenta Regresiva!!\n"
        "\n"
        f"Distrito: {distrito}\n"
        f"Iglesia: {iglesia}\n"
        "\n"
        f"{body}\n"
        "\n"
        "Gracias,\n"
        "FESJA-BN\n"
    )


def build_church_zip_message(
    *,
    to: str,
    sender: str,
    sender_name: Optional[str],
    subject: str,
    body: str,
    distrito: str,
    iglesia: str,
    zip_path: Path,
) -> EmailMessage:
    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = formataddr((sender_name, sender)) if sender_name else sender
    msg["To"] = to
    msg.set_content(render_body(distrito=distrito, iglesia=iglesia, body=body))

    maintype, subtype = ATTACHMENT_MIME.split("/", 1)
    msg.add_attachment(
        Path(zip_path).read_bytes(),
        maintype=maintype,
        subtype=subtype,
        filename=ATTACHMENT_FILENAME,
    )
    return msg
