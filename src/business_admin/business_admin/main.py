from __future__ import annotations

import importlib
import logging
from decimal import Decimal
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module, validate_db_config

from .common.logger import set_global_log_level
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_admin_user, list_tables, missing_tables

from .container import Container, build_container
from .attendance.controller import register as register_attendance
from .employees.controller import register as register_employees
from .expenses.controller import register as register_expenses
from .payments.controller import register as register_payments
from .payroll.controller import register as register_payroll
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    When ``container`` is given (tests), settings are still loaded but the
    database is neither validated nor touched.
    """

    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates", static_folder="../../../static")

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    set_global_log_level(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        errors, warnings = validate_db_config(db_config)
        for warning in warnings:
            logger.warning("Settings %s: %s", settings_module, warning)
        if errors:
            raise RuntimeError(f"Invalid database settings in {settings_module}: {'; '.join(errors)}")

        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            tables = list_tables(db_config)
            missing = missing_tables(tables)
            if missing:
                raise RuntimeError(f"Schema is missing tables: {', '.join(missing)}")
            logger.info("Schema ready (tables=%s)", len(tables))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
            ensure_admin_user(
                db_config,
                username=getattr(settings, "ADMIN_USERNAME", "admin"),
                password=getattr(settings, "ADMIN_PASSWORD", "admin123"),
            )
            logger.info("Demo seed ready")

        container = build_container(
            db_config=db_config,
            default_daily_rate=Decimal(str(getattr(settings, "DEFAULT_DAILY_RATE", "750"))),
        )

    register_users(app, container)
    register_employees(app, container)
    register_attendance(app, container)
    register_payments(app, container)
    register_payroll(app, container)
    register_expenses(app, container)

    return app
