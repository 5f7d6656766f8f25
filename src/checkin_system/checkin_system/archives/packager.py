from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Iterator, Tuple

from ..batch.config import BatchConfig
from ..batch.report import ArchiveReport
from ..core.exceptions import PreconditionError
from ..logger import get_logger

logger = get_logger(__name__)


def _subdirs(folder: Path) -> list[Path]:
    return sorted(p for p in folder.iterdir() if p.is_dir())


def _church_files(folder: Path) -> Iterator[Tuple[Path, str]]:
    for p in sorted(folder.iterdir()):
        if p.is_file() and p.suffix.lower() != ".zip":
            yield p, p.name


def _district_files(folder: Path) -> Iterator[Tuple[Path, str]]:
    # Church archives live beside the church folders; never nest them.
    for p in sorted(folder.rglob("*")):
        if p.is_file() and p.suffix.lower() != ".zip":
            yield p, p.relative_to(folder).as_posix()


def write_archive(target: Path, files: Iterator[Tuple[Path, str]]) -> int:
    """Rebuild `target` from scratch; returns the number of files written."""
    if target.exists():
        target.unlink()
    count = 0
    with zipfile.ZipFile(target, "w", zipfile.ZIP_DEFLATED) as zf:
        for path, arcname in files:
            zf.write(path, arcname)
            count += 1
    return count


class ArchivePackager:
    """Use case: one zip per church (flat) and one per district (recursive).

    <base>/<distrito>/<iglesia>/*.png -> <base>/<distrito>/<iglesia>.zip
    <base>/<distrito>/**             -> <base>/<distrito>.zip (paths relative to the district)
    """

    def package(self, config: BatchConfig) -> ArchiveReport:
        base = config.base_folder
        if not base.is_dir():
            raise PreconditionError(f"La carpeta base {base} no existe; genere las imágenes primero")

        report = ArchiveReport()
        for district in _subdirs(base):
            for church in _subdirs(district):
                target = district / f"{church.name}.zip"
                try:
                    count = write_archive(target, _church_files(church))
                    report.churches.append(target)
                    logger.debug("Zip %s (%d files)", target, count)
                except (OSError, zipfile.BadZipFile) as e:
                    logger.warning("Error creando %s: %s", target, e)
                    report.failed.append(target)

            target = base / f"{district.name}.zip"
            try:
                count = write_archive(target, _district_files(district))
                report.districts.append(target)
                logger.debug("Zip %s (%d files)", target, count)
            except (OSError, zipfile.BadZipFile) as e:
                logger.warning("Error creando %s: %s", target, e)
                report.failed.append(target)

        logger.info(
            "Archives: %d churches, %d districts, %d failed",
            len(report.churches),
            len(report.districts),
            len(report.failed),
        )
        return report
