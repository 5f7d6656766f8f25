from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List


@dataclass
class BadgeReport:
    total: int = 0
    generated: List[Path] = field(default_factory=list)
    failed: List[int] = field(default_factory=list)

    @property
    def generated_count(self) -> int:
        return len(self.generated)


@dataclass
class ArchiveReport:
    churches: List[Path] = field(default_factory=list)
    districts: List[Path] = field(default_factory=list)
    failed: List[Path] = field(default_factory=list)


@dataclass
class NotificationReport:
    total: int = 0
    sent: int = 0
    skipped_missing_archive: int = 0
    skipped_invalid_email: int = 0
    failed: int = 0
    planned: List[str] = field(default_factory=list)
