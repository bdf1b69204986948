import os
from typing import Any, Mapping


def get_settings_module() -> str:
    # APP_ENV picks the settings module, default is 'development'
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def validate_db_config(db_config: Mapping[str, Any]) -> tuple[list[str], list[str]]:
    """Check a DB_CONFIG mapping before connecting.

    Returns (errors, warnings). Errors are missing required keys; an empty
    password is only a warning since local MySQL installs often run without one.
    """

    errors: list[str] = []
    warnings: list[str] = []

    for key in ("host", "user", "database"):
        if not str(db_config.get(key) or "").strip():
            errors.append(f"DB_CONFIG['{key}'] is required")

    port = db_config.get("port", 3306)
    try:
        if not 0 < int(port) < 65536:
            errors.append("DB_CONFIG['port'] must be between 1 and 65535")
    except (TypeError, ValueError):
        errors.append("DB_CONFIG['port'] must be a number")

    if not str(db_config.get("password") or ""):
        warnings.append("DB_CONFIG['password'] is empty")

    return errors, warnings
