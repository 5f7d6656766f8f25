import os

from config.config import db_config_from_env, env_bool, mail_config_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config_from_env(default_password="secret")
MAIL_CONFIG = mail_config_from_env()

# Carpeta raíz de las corridas batch (barcodes/, zips)
STORAGE_DIR = os.getenv("STORAGE_DIR", "storage")
# Fuente TTF opcional para las credenciales
FONT_PATH = os.getenv("FONT_PATH", "resources/fonts/Inter_28pt-Regular.ttf")
PAGE_SIZE = int(os.getenv("PAGE_SIZE", "50"))

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_bool("AUTO_INIT_DB", "1")
# Optional: also seed demo data on startup
AUTO_SEED_DB = env_bool("AUTO_SEED_DB", "0")
