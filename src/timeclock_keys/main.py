from __future__ import annotations

import atexit
import logging

from dotenv import load_dotenv
from flask import Flask, jsonify

from .attendance.controller import register as register_attendance
from .attendance.poller import AutoTagPoller
from .common.logging_utils import setup_logging
from .config import get_settings_module, load_settings
from .container import build_container, build_store
from .core.exceptions import NotFoundError, ValidationError
from .reports.controller import register as register_reports
from .schedules.controller import register as register_schedules
from .store.repository import StateStore

logger = logging.getLogger(__name__)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(NotFoundError)
    def handle_not_found(exc: NotFoundError):
        return jsonify({"error": str(exc)}), 404


def create_app(settings_module: str | None = None, *, store: StateStore | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = load_settings(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if not app.config["TESTING"]:
        setup_logging(json_output=bool(getattr(settings, "LOG_JSON", False)))
    logger.info(
        "app configured",
        extra={"settings": settings_module, "store_backend": getattr(settings, "STORE_BACKEND", "memory")},
    )

    container = build_container(
        store=store or build_store(settings),
        buffer_minutes=int(getattr(settings, "VISIBILITY_BUFFER_MINUTES")),
        late_minutes=int(getattr(settings, "LATE_THRESHOLD_MINUTES")),
        absent_minutes=int(getattr(settings, "ABSENT_THRESHOLD_MINUTES")),
    )
    app.extensions["timeclock_container"] = container

    _register_error_handlers(app)
    register_attendance(app, container)
    register_reports(app, container)
    register_schedules(app, container)

    if getattr(settings, "AUTO_TAG_ENABLED", False):
        poller = AutoTagPoller(
            container.auto_tagger,
            interval_seconds=int(getattr(settings, "AUTO_TAG_INTERVAL_SECONDS")),
        )
        poller.start()
        atexit.register(poller.stop)
        app.extensions["auto_tag_poller"] = poller

    return app


if __name__ == "__main__":
    create_app().run(use_reloader=False)
