from .base import *  # noqa: F401,F403

DEBUG = True
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")  # noqa: F405
