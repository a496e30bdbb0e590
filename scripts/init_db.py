#!/usr/bin/env python3
"""Create the sensor_readings table in the configured PostgreSQL database.

Same DDL as PostgreSQLSensorStore (which also creates it on first use). Run from project root.

Usage:
  python scripts/init_db.py [--config PATH]
  --config   Config file (default: config/config.yaml)
"""

import argparse
import os
import sys
from pathlib import Path

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))
os.chdir(_PROJECT_ROOT)


def main() -> int:
    parser = argparse.ArgumentParser(description="Create sensor_readings in PostgreSQL.")
    parser.add_argument("--config", default="config/config.yaml", help="Config path")
    args = parser.parse_args()
    config_path = args.config
    if not os.path.isabs(config_path):
        config_path = str(_PROJECT_ROOT / config_path)
    if not Path(config_path).exists():
        print(f"Config not found: {config_path}", file=sys.stderr)
        return 1

    try:
        import psycopg2
        from spacestatus.config.settings import get_store_config, read_config
        from spacestatus.store.postgres_store import _ensure_tables, _get_conn_params
    except ImportError as e:
        print(f"Missing dependency: {e}", file=sys.stderr)
        print("  Install with: pip install -e .", file=sys.stderr)
        return 1

    config, _ = read_config(config_path)
    store_cfg = get_store_config(config)
    if store_cfg.get("backend") != "postgres":
        print("store.backend is not 'postgres'; nothing to do.", file=sys.stderr)
        return 1
    params = _get_conn_params(store_cfg)
    params["connect_timeout"] = 10

    try:
        conn = psycopg2.connect(**params)
    except psycopg2.Error as e:
        print(f"PostgreSQL connect failed: {e}", file=sys.stderr)
        return 1

    try:
        _ensure_tables(conn)
        print(f"Created/verified table sensor_readings in database {params['dbname']!r}")
        return 0
    except psycopg2.Error as e:
        print(f"Schema creation failed: {e}", file=sys.stderr)
        return 1
    finally:
        conn.close()


if __name__ == "__main__":
    sys.exit(main())
