"""Configuration loading (YAML)."""

from spacestatus.config.settings import (
    get_modifier_names,
    get_server_config,
    get_status_config,
    get_store_config,
    read_config,
)

__all__ = [
    "read_config",
    "get_server_config",
    "get_store_config",
    "get_status_config",
    "get_modifier_names",
]
