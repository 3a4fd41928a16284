from __future__ import annotations

import atexit
import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, session

from .attendance.controller import register as register_attendance
from .common.clock import DisplayClock
from .common.logger import setup_logging
from .config import get_settings_module
from .container import Container, build_container
from .corrections.controller import register as register_corrections
from .reports.controller import register as register_reports
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def _session_token():
    return session.get("token")


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    api_config = {
        "base_url": getattr(settings, "API_BASE_URL"),
        "timeout": getattr(settings, "REQUEST_TIMEOUT_SECONDS", 10),
    }
    logger.info("settings=%s api=%s", settings_module, api_config["base_url"])

    if container is None:
        container = build_container(api_config=api_config, token_provider=_session_token)
    app.extensions["attendance_dashboard"] = container

    clock = DisplayClock()
    app.extensions["display_clock"] = clock
    if not app.config["TESTING"]:
        clock.start()
        atexit.register(clock.stop)

    register_users(app, container)
    register_attendance(app, container)
    register_reports(app, container)
    register_corrections(app, container)

    return app
