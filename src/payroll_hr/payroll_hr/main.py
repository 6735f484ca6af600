from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .container import Container, build_container
from .core.constants import DEFAULT_REPORT_BATCH_SIZE
from .core.exceptions import DataFetchError, NotFoundError, ValidationError
from .database.bootstrap import SCHEMA_PATH, apply_schema, list_tables
from .logging_config import configure_logging
from .reports.controller import register as register_reports
from .sickness.controller import register as register_sickness
from .work_patterns.controller import register as register_work_patterns

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation_error(e: ValidationError):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return jsonify({"error": str(e)}), 404

    @app.errorhandler(DataFetchError)
    def _data_fetch_error(e: DataFetchError):
        logger.error("Data store unavailable: %s", e)
        return jsonify({"error": "Data store unavailable"}), 503


def create_app(container: Container | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        log_file=getattr(settings, "LOG_FILE", None),
    )
    logger.info(
        "Starting payroll-hr settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None and bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=getattr(settings, "SCHEMA_PATH", None) or SCHEMA_PATH)
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

    if container is None:
        container = build_container(
            db_config=db_config,
            report_batch_size=int(getattr(settings, "REPORT_BATCH_SIZE", DEFAULT_REPORT_BATCH_SIZE)),
        )

    register_error_handlers(app)
    register_work_patterns(app, container)
    register_sickness(app, container)
    register_reports(app, container)

    return app
