import os

def get_settings_module() -> str:
    # Entorno desde la variable APP_ENV, por defecto 'development'
    env = os.getenv("APP_ENV", "development").lower()

    # 1. Producción
    if env in {"prod", "production"}:
        return "config.production"

    # 2. Pruebas
    if env in {"test", "testing"}:
        return "config.testing"

    # 3. Cualquier otro valor usa development
    return "config.development"
