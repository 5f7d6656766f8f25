import os

from config.config import db_config_from_env, env_bool

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env(default_password="12345")
MAIL_CONFIG = {
    "host": "localhost",
    "port": 1025,
    "use_tls": False,
    "from_address": "pruebas@example.com",
    "from_name": "Pruebas",
}

STORAGE_DIR = os.getenv("STORAGE_DIR", "storage-test")
FONT_PATH = None
PAGE_SIZE = 50

DEBUG = False
TESTING = True

AUTO_INIT_DB = env_bool("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_bool("AUTO_SEED_DB", "0")
