import os

from config.config import db_config_from_env, env_bool, mail_config_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config_from_env()
MAIL_CONFIG = mail_config_from_env()

STORAGE_DIR = os.getenv("STORAGE_DIR", "storage")
FONT_PATH = os.getenv("FONT_PATH", "resources/fonts/Inter_28pt-Regular.ttf")
PAGE_SIZE = int(os.getenv("PAGE_SIZE", "50"))

DEBUG = False

AUTO_INIT_DB = env_bool("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_bool("AUTO_SEED_DB", "0")
