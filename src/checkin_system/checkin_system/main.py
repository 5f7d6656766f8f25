from __future__ import annotations

import importlib
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .cli import register as register_cli
from .container import build_container
from .core.constants import DEFAULT_PAGE_SIZE
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .inscritos.controller import register as register_inscritos
from .logger import setup_logging

REPO_ROOT = Path(__file__).resolve().parents[3]


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    mail_config = getattr(settings, "MAIL_CONFIG", {})
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["STORAGE_DIR"] = str(getattr(settings, "STORAGE_DIR", "storage"))
    app.config["FONT_PATH"] = getattr(settings, "FONT_PATH", None)

    logger = setup_logging(app.config["DEBUG"])
    logger.debug(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
        logger.info("demo seed ready")

    container = build_container(
        db_config=db_config,
        mail_config=mail_config,
        font_path=app.config["FONT_PATH"],
        page_size=int(getattr(settings, "PAGE_SIZE", DEFAULT_PAGE_SIZE)),
    )

    register_inscritos(app, container)
    register_cli(app, container)

    return app
