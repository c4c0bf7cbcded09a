import os

from ..core import constants


def env_flag(name: str, default: str) -> bool:
    return bool(int(os.getenv(name, default)))


SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# memory | json | mysql
STORE_BACKEND = os.getenv("STORE_BACKEND", "json")
STORE_PATH = os.getenv("STORE_PATH", "var/timeclock_state.json")
STORE_KEY = os.getenv("STORE_KEY", "timeclock_state_v1")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock_db"),
    "charset": os.getenv("DB_CHARSET", "utf8mb4"),
    "connect_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "10")),
}

VISIBILITY_BUFFER_MINUTES = int(os.getenv("VISIBILITY_BUFFER_MINUTES", str(constants.VISIBILITY_BUFFER_MINUTES)))
LATE_THRESHOLD_MINUTES = int(os.getenv("LATE_THRESHOLD_MINUTES", str(constants.LATE_THRESHOLD_MINUTES)))
ABSENT_THRESHOLD_MINUTES = int(os.getenv("ABSENT_THRESHOLD_MINUTES", str(constants.ABSENT_THRESHOLD_MINUTES)))
AUTO_TAG_INTERVAL_SECONDS = int(os.getenv("AUTO_TAG_INTERVAL_SECONDS", str(constants.AUTO_TAG_INTERVAL_SECONDS)))

AUTO_TAG_ENABLED = env_flag("AUTO_TAG_ENABLED", "1")
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
LOG_JSON = env_flag("LOG_JSON", "0")
DEBUG = False
