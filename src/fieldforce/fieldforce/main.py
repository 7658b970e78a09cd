from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify

from .config import get_settings_module
from .container import build_container, build_store
from .core.exceptions import AuthorizationError, NotFoundError, StoreError, ValidationError
from .store.bootstrap import apply_schema, list_tables
from .approvals.controller import register as register_approvals
from .claims.controller import register as register_claims
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)


def _register_error_handlers(app: Flask) -> None:
    def as_json(status: int):
        def handler(e: Exception):
            return jsonify({"error": str(e)}), status

        return handler

    app.register_error_handler(ValidationError, as_json(400))
    app.register_error_handler(AuthorizationError, as_json(403))
    app.register_error_handler(NotFoundError, as_json(404))
    app.register_error_handler(StoreError, as_json(503))


def create_app() -> Flask:
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

    backend = getattr(settings, "STORE_BACKEND", "mysql")
    db_config = getattr(settings, "DB_CONFIG", None)
    logger.info("settings=%s store=%s", settings_module, backend)

    if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(
        store=build_store(backend=backend, db_config=db_config),
        asset_root=getattr(settings, "ASSET_ROOT", None),
        default_sales_target=int(getattr(settings, "DEFAULT_SALES_TARGET", 1000)),
        selfie_retention_days=int(getattr(settings, "SELFIE_RETENTION_DAYS", 3)),
    )
    app.extensions["fieldforce"] = container

    _register_error_handlers(app)
    register_claims(app, container)
    register_approvals(app, container)
    register_reports(app, container)

    return app
