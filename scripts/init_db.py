from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module, validate_db_config

from src.business_admin.business_admin.database.bootstrap import apply_schema, list_tables, missing_tables


def main() -> int:
    settings_module = get_settings_module()
    db_config = dict(importlib.import_module(settings_module).DB_CONFIG)

    errors, warnings = validate_db_config(db_config)
    for warning in warnings:
        print(f"WARN: {warning}")
    if errors:
        print(f"ERROR: {settings_module} has invalid DB_CONFIG: {'; '.join(errors)}")
        return 1

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = sorted(list_tables(db_config))
    missing = missing_tables(tables)
    if missing:
        print(f"ERROR: schema applied but tables are missing: {', '.join(missing)}")
        return 1

    print(f"OK: {db_config['database']} on {db_config['host']} has tables: {', '.join(tables)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
