import os

from .base import *  # noqa: F401,F403

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")
LOG_JSON = env_flag("LOG_JSON", "1")  # noqa: F405
DEBUG = False
