from .base import *  # noqa: F401,F403

SECRET_KEY = "test-secret"
STORE_BACKEND = "memory"
AUTO_TAG_ENABLED = False
DEBUG = False
TESTING = True
