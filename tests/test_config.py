"""Tests for config/settings: defaults merge, status section, modifier selection."""

import pytest

from spacestatus.config.settings import (
    get_modifier_names,
    get_server_config,
    get_status_config,
    get_store_config,
    read_config,
)
from spacestatus.errors import ConfigurationError


class TestDefaults:
    def test_server_defaults(self):
        assert get_server_config({}) == {"host": "0.0.0.0", "port": 8000}

    def test_server_override(self):
        out = get_server_config({"server": {"port": "9090"}})
        assert out["port"] == 9090
        assert out["host"] == "0.0.0.0"

    def test_store_defaults(self):
        out = get_store_config({})
        assert out["backend"] == "memory"
        assert out["timeout_sec"] == 2.0

    def test_store_nested_merge(self):
        out = get_store_config({"store": {"backend": "postgres", "postgres": {"user": "ops"}}})
        assert out["backend"] == "postgres"
        assert out["postgres"]["user"] == "ops"
        assert out["postgres"]["host"] == "127.0.0.1"

    def test_section_must_be_mapping(self):
        with pytest.raises(ConfigurationError):
            get_store_config({"store": "postgres"})


class TestStatusSection:
    def test_missing_status(self):
        with pytest.raises(ConfigurationError):
            get_status_config({})

    def test_status_has_no_defaults(self):
        cfg = {"status": {"name": "x"}}
        assert get_status_config(cfg) == {"name": "x"}


class TestModifiers:
    def test_default_selection(self):
        assert get_modifier_names({}) == ["state_from_people_now_present"]

    def test_explicit_empty_disables(self):
        assert get_modifier_names({"modifiers": []}) == []
        assert get_modifier_names({"modifiers": None}) == []

    def test_must_be_list(self):
        with pytest.raises(ConfigurationError):
            get_modifier_names({"modifiers": "state_from_people_now_present"})


class TestReadConfig:
    def test_example_file(self, config_path):
        config, resolved = read_config(str(config_path))
        assert resolved == str(config_path.resolve())
        assert config["status"]["name"] == "coredump"
        assert config["modifiers"] == ["state_from_people_now_present"]

    def test_non_mapping_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            read_config(str(path))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("status: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            read_config(str(path))
