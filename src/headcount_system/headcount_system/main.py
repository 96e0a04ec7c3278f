from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .areas.controller import register as register_areas
from .attendance.controller import register as register_attendance
from .backup.controller import register as register_backup
from .common.web import install_error_handlers
from .container import Container, build_container, build_store
from .exports.controller import register as register_exports
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig, DatabaseConnection
from .settings.controller import register as register_settings
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        backend = str(getattr(settings, "STORE_BACKEND", "memory"))
        db_config = dict(getattr(settings, "DB_CONFIG", {}))
        logger.info("settings=%s store=%s", settings_module, backend)

        if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
            conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(conn, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(conn)))

        container = build_container(store=build_store(backend=backend, db_config=db_config))

    app.extensions["headcount"] = container

    install_error_handlers(app)
    register_users(app, container)
    register_areas(app, container)
    register_attendance(app, container)
    register_settings(app, container)
    register_backup(app, container)
    register_exports(app, container)

    return app
