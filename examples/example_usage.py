"""Ejemplo: usar la capa de servicios sin Flask.

Busca inscritos y simula el envío de correos (dry-run) con la configuración actual.
"""

import importlib
from pathlib import Path

from config import get_settings_module

from src.checkin_system.checkin_system.batch.config import BatchConfig
from src.checkin_system.checkin_system.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, mail_config=settings.MAIL_CONFIG)

    page = container.inscrito_service.search("Central")
    for inscrito in page.items:
        print(inscrito.id, inscrito.nombre, inscrito.state.value)

    config = BatchConfig(base_folder=Path(settings.STORAGE_DIR) / "barcodes", dry_run=True)
    report = container.notification_dispatcher.dispatch(config, on_line=print)
    print(f"planned={len(report.planned)} missing_zip={report.skipped_missing_archive}")


if __name__ == "__main__":
    main()
