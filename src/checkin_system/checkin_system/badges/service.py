from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

from ..batch.config import BatchConfig
from ..batch.report import BadgeReport
from ..common.slugs import church_slug, district_slug, name_slug
from ..core.exceptions import PreconditionError
from ..inscritos.model import Inscrito
from ..inscritos.repository import InscritoRepository
from ..logger import get_logger
from .renderer import BadgeRenderer

logger = get_logger(__name__)


def badge_path(base_folder: Path, inscrito: Inscrito) -> Path:
    """<base>/<distrito>/<iglesia>/<id>-<nombre>.png"""
    return (
        Path(base_folder)
        / district_slug(inscrito.distrito)
        / church_slug(inscrito.iglesia)
        / f"{inscrito.id}-{name_slug(inscrito.nombre)}.png"
    )


class BadgeService:
    """Use case: generate one PNG badge per selected inscrito."""

    def __init__(self, inscritos: InscritoRepository, renderer: BadgeRenderer | None = None):
        self._inscritos = inscritos
        self._renderer = renderer

    @property
    def renderer(self) -> BadgeRenderer:
        if self._renderer is None:
            self._renderer = BadgeRenderer()
        return self._renderer

    def count(self, config: BatchConfig) -> int:
        return self._inscritos.count(list(config.ids) or None)

    def generate(
        self,
        config: BatchConfig,
        *,
        progress: Optional[Callable[[Inscrito], None]] = None,
    ) -> BadgeReport:
        try:
            config.base_folder.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PreconditionError(f"No se pudo crear la carpeta {config.base_folder}: {e}") from e

        ids = list(config.ids) or None
        report = BadgeReport(total=self._inscritos.count(ids))
        if report.total == 0:
            return report

        renderer = self.renderer
        for chunk in self._inscritos.iter_chunks(ids=ids, chunk_size=config.chunk_size):
            for inscrito in chunk:
                path = badge_path(config.base_folder, inscrito)
                partial = path.with_name(path.name + ".part")
                try:
                    path.parent.mkdir(parents=True, exist_ok=True)
                    renderer.render(inscrito).save(partial, format="PNG")
                    partial.replace(path)
                    report.generated.append(path)
                except Exception as e:
                    logger.warning("Error en ID %s: %s", inscrito.id, e)
                    partial.unlink(missing_ok=True)
                    report.failed.append(inscrito.id)
                if progress:
                    progress(inscrito)

        logger.info(
            "Badges: %d generated, %d failed (base=%s)",
            report.generated_count,
            len(report.failed),
            config.base_folder,
        )
        return report
