import importlib

import pytest

from config import get_settings_module, validate_db_config


@pytest.mark.parametrize(
    "env, module",
    [
        ("production", "config.production"),
        ("PROD", "config.production"),
        ("testing", "config.testing"),
        ("anything", "config.development"),
    ],
)
def test_settings_module_follows_app_env(monkeypatch, env, module):
    monkeypatch.setenv("APP_ENV", env)
    assert get_settings_module() == module


def test_default_env_is_development(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    assert get_settings_module() == "config.development"


def test_settings_modules_define_required_names():
    for name in ("config.development", "config.production", "config.testing"):
        settings = importlib.import_module(name)
        for attr in ("SECRET_KEY", "DB_CONFIG", "LOG_LEVEL", "DEFAULT_DAILY_RATE", "ADMIN_USERNAME"):
            assert hasattr(settings, attr), f"{name} is missing {attr}"


def test_validate_db_config():
    errors, warnings = validate_db_config({"host": "localhost", "user": "root", "database": "db", "password": ""})
    assert errors == []
    assert warnings == ["DB_CONFIG['password'] is empty"]

    errors, _ = validate_db_config({"host": "", "user": "root", "database": "db", "port": "abc"})
    assert "DB_CONFIG['host'] is required" in errors
    assert "DB_CONFIG['port'] must be a number" in errors

    errors, _ = validate_db_config({"host": "h", "user": "u", "database": "d", "port": 70000})
    assert errors == ["DB_CONFIG['port'] must be between 1 and 65535"]
