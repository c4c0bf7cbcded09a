import importlib
import os


def get_settings_module() -> str:
    # Pick the settings module from APP_ENV, defaulting to development.
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "timeclock_keys.config.production"

    if env in {"test", "testing"}:
        return "timeclock_keys.config.testing"

    return "timeclock_keys.config.development"


def load_settings(module_name: str | None = None):
    return importlib.import_module(module_name or get_settings_module())
