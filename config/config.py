"""Lectores de variables de entorno compartidos por los módulos de settings."""
import os


def env_bool(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


def db_config_from_env(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "inscritos_db"),
    }


def mail_config_from_env() -> dict:
    # Mismos nombres que usa el .env del sistema de inscripción
    return {
        "host": os.getenv("MAIL_HOST", "localhost"),
        "port": int(os.getenv("MAIL_PORT", "587")),
        "username": os.getenv("MAIL_USERNAME", ""),
        "password": os.getenv("MAIL_PASSWORD", ""),
        "use_tls": env_bool("MAIL_USE_TLS", "1"),
        "from_address": os.getenv("MAIL_FROM_ADDRESS", ""),
        "from_name": os.getenv("MAIL_FROM_NAME", "FESJA-BN"),
    }
