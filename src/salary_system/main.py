from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, send_from_directory

from .common.http import register_http_handlers
from .config import Settings, load_settings
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .salaries.controller import register as register_salaries
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings: Optional[Settings] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)

    if settings is None:
        settings = container.settings if container else load_settings()
    _configure_logging(settings)

    # Unknown non-API paths resolve against the static folder
    static_dir = Path(settings.static_dir).resolve() if settings.static_dir else None
    app = Flask(
        __name__,
        static_folder=str(static_dir) if static_dir else None,
        static_url_path="",
    )
    app.secret_key = settings.secret_key
    app.config["DEBUG"] = settings.debug
    app.config["TESTING"] = settings.testing

    db = settings.db_config
    logger.info(
        "starting (debug=%s) db=%s@%s:%s/%s",
        settings.debug, db.get("user"), db.get("host"), db.get("port", 3306), db.get("database"),
    )

    if container is None:
        if settings.auto_init_db:
            apply_schema(settings.db_config)
            logger.info("schema ready (tables=%d)", len(list_tables(settings.db_config)))
        container = build_container(settings=settings)

    app.extensions["salary_system.container"] = container

    register_http_handlers(app)
    register_users(app, container)
    register_salaries(app, container)

    if static_dir is not None:
        @app.route("/", endpoint="index")
        @app.route("/index", endpoint="index_alias")
        def index():
            return send_from_directory(app.static_folder, "index.html")

    return app
