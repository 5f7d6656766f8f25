from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..core.constants import (
    DEFAULT_BASE_FOLDER,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_MAIL_BODY,
    DEFAULT_MAIL_SUBJECT,
    DEFAULT_SLEEP_SECONDS,
)


@dataclass(frozen=True)
class BatchConfig:
    """Parámetros explícitos de una corrida batch (imágenes -> zips -> correos).

    Built once by the CLI and handed to every stage; stages never read settings.
    """

    base_folder: Path = field(default_factory=lambda: Path(DEFAULT_BASE_FOLDER))
    ids: tuple[int, ...] = ()
    chunk_size: int = DEFAULT_CHUNK_SIZE
    subject: str = DEFAULT_MAIL_SUBJECT
    body: str = DEFAULT_MAIL_BODY
    sender: Optional[str] = None
    sender_name: Optional[str] = None
    dry_run: bool = False
    sleep_seconds: float = DEFAULT_SLEEP_SECONDS

    def __post_init__(self):
        object.__setattr__(self, "base_folder", Path(self.base_folder))
        object.__setattr__(self, "ids", tuple(int(i) for i in self.ids))
        object.__setattr__(self, "chunk_size", max(1, int(self.chunk_size)))
        object.__setattr__(self, "sleep_seconds", max(0.0, float(self.sleep_seconds)))

    def church_archive(self, distrito_slug: str, iglesia_slug: str) -> Path:
        return self.base_folder / distrito_slug / f"{iglesia_slug}.zip"
