"""Startup config: server, store, status template and modifier selection.

Defaults for server/store/modifiers are loaded from defaults.yaml next to this
module (single source of truth, no code-level defaults). The status section is
never merged with defaults.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from spacestatus.errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SPACESTATUS_CONFIG"

# Lazy-loaded defaults
_DEFAULT_CONFIG: Optional[Dict[str, Any]] = None


def _load_default_config() -> Dict[str, Any]:
    """Load defaults.yaml. No code-level defaults."""
    global _DEFAULT_CONFIG
    if _DEFAULT_CONFIG is None:
        path = Path(__file__).resolve().parent / "defaults.yaml"
        with open(path, encoding="utf-8") as f:
            _DEFAULT_CONFIG = yaml.safe_load(f) or {}
    return _DEFAULT_CONFIG


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge override into base. Override values take precedence."""
    out = dict(base)
    for k, v in override.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _section(cfg: Dict[str, Any], section: str) -> Dict[str, Any]:
    """Section merged over defaults. Returns {} if neither defines it."""
    default = _load_default_config().get(section) or {}
    value = cfg.get(section) or {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"config section {section!r} must be a mapping")
    return _deep_merge(default, value)


def read_config(config_path: Optional[str] = None) -> Tuple[dict, str]:
    """Load YAML config. Path: argument, else $SPACESTATUS_CONFIG, else config/config.yaml,
    falling back to config/config.yaml.example. Returns (config, resolved_path)."""
    config_path = config_path or os.environ.get(CONFIG_ENV_VAR, "config/config.yaml")
    if not Path(config_path).exists():
        fallback = "config/config.yaml.example"
        logger.warning("Config %s not found, using %s", config_path, fallback)
        config_path = fallback
    config_path = str(Path(config_path).resolve())
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"cannot read config {config_path}: {e}") from e
    if not isinstance(config, dict):
        raise ConfigurationError(f"config {config_path} must be a YAML mapping")
    return config, config_path


def get_server_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return listen host/port."""
    s = _section(config or {}, "server")
    return {"host": str(s.get("host")), "port": int(s.get("port"))}


def get_store_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return store config (backend, timeout_sec, max_connections, postgres)."""
    return _section(config or {}, "store")


def get_status_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the status template section as written by the operator (no defaults)."""
    status = (config or {}).get("status")
    if not isinstance(status, dict) or not status:
        raise ConfigurationError("config has no 'status' section")
    return status


def get_modifier_names(config: Optional[Dict[str, Any]] = None) -> List[str]:
    """Ordered modifier selection. An explicit empty list disables all modifiers."""
    cfg = config or {}
    if "modifiers" in cfg:
        names = cfg.get("modifiers") or []
    else:
        names = _load_default_config().get("modifiers") or []
    if not isinstance(names, list):
        raise ConfigurationError("config 'modifiers' must be a list of names")
    return list(names)
