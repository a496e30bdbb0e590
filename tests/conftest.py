"""Pytest fixtures for spacestatus tests."""

import sys
from pathlib import Path

import pytest
import yaml

# Ensure project root is in path for spacestatus imports
_project_root = Path(__file__).resolve().parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from spacestatus.engine.composer import StatusComposer  # noqa: E402
from spacestatus.model.optional import Value  # noqa: E402
from spacestatus.model.sensors import PEOPLE_NOW_PRESENT, TEMPERATURE  # noqa: E402
from spacestatus.model.status import Contact, Location  # noqa: E402
from spacestatus.modifiers.chain import ModifierChain  # noqa: E402
from spacestatus.modifiers.occupancy import StateFromPeopleNowPresent  # noqa: E402
from spacestatus.store.memory_store import InMemorySensorStore  # noqa: E402
from spacestatus.template import StatusTemplate  # noqa: E402


def _project_root_path() -> Path:
    return Path(__file__).resolve().parent.parent


@pytest.fixture
def project_root() -> Path:
    return _project_root_path()


@pytest.fixture
def config_path(project_root: Path) -> Path:
    """Path to config file. Prefers config.yaml, falls back to example."""
    cfg = project_root / "config" / "config.yaml"
    if cfg.exists():
        return cfg
    return project_root / "config" / "config.yaml.example"


@pytest.fixture
def config(config_path: Path) -> dict:
    """Load config dict from YAML."""
    with open(config_path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@pytest.fixture
def make_template():
    """Factory for a valid coredump template; keyword overrides replace constructor args."""

    def _make(**overrides) -> StatusTemplate:
        kwargs = dict(
            name="coredump",
            logo="https://www.coredump.ch/logo.png",
            url="https://www.coredump.ch/",
            location=Location(
                lat=47.22936,
                lon=8.82949,
                address=Value("Spinnereistrasse 2, 8640 Rapperswil, Switzerland"),
            ),
            contact=Contact(irc=Value("irc://freenode.net/#coredump"), twitter=Value("@coredump_ch")),
            issue_report_channels=["email", "twitter"],
            sensor_kinds=[PEOPLE_NOW_PRESENT, TEMPERATURE],
        )
        kwargs.update(overrides)
        return StatusTemplate(**kwargs)

    return _make


@pytest.fixture
def template(make_template) -> StatusTemplate:
    return make_template()


@pytest.fixture
def store() -> InMemorySensorStore:
    return InMemorySensorStore()


@pytest.fixture
def composer(template: StatusTemplate, store: InMemorySensorStore) -> StatusComposer:
    return StatusComposer(template, store, ModifierChain([StateFromPeopleNowPresent()]))


@pytest.fixture
def client(composer: StatusComposer):
    """TestClient around an app with the in-memory store."""
    from fastapi.testclient import TestClient

    from spacestatus.status_server.app import create_app

    return TestClient(create_app(composer))
