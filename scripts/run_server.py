#!/usr/bin/env python3
"""Start the space status server: GET /status, PUT /sensors/{kind}.

Usage: python scripts/run_server.py [config/config.yaml]
Config path falls back to $SPACESTATUS_CONFIG, then config/config.yaml(.example)."""

import logging
import os
import sys

# Project root: so "spacestatus" imports without installing
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _PROJECT_ROOT)
os.chdir(_PROJECT_ROOT)

logging.basicConfig(
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    level=logging.INFO,
)
logger = logging.getLogger("run_server")


def main() -> int:
    from spacestatus.config.settings import read_config
    from spacestatus.errors import ConfigurationError
    from spacestatus.status_server.app import run_server

    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    config_path = args[0] if args else None
    if config_path and not os.path.isabs(config_path):
        config_path = os.path.join(_PROJECT_ROOT, config_path)
    try:
        config, resolved = read_config(config_path)
        logger.info("Config: %s", resolved)
        run_server(config)
    except ConfigurationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
