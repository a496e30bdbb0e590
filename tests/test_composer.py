"""Tests for StatusComposer: sensor merge, modifier run, idempotence, degraded reads, isolation."""

import dataclasses
import logging
import threading
from typing import Dict, List

import pytest

from spacestatus.engine.composer import StatusComposer
from spacestatus.errors import StoreUnavailable
from spacestatus.model.optional import Absent, Value
from spacestatus.model.sensors import PEOPLE_NOW_PRESENT, TEMPERATURE, SensorReading
from spacestatus.model.serialize import to_document
from spacestatus.model.status import State
from spacestatus.modifiers import ModifierChain, StateFromPeopleNowPresent
from spacestatus.store.base import SensorStore


class FixedStore(SensorStore):
    """Returns canned readings per kind; kinds listed in ``failing`` raise StoreUnavailable."""

    def __init__(self, readings: Dict[str, List[SensorReading]], failing=()):
        self._readings = readings
        self._failing = set(failing)

    def get(self, kind):
        if kind in self._failing:
            raise StoreUnavailable("timed out", "get", kind)
        return list(self._readings.get(kind, []))

    def set(self, kind, reading):
        raise StoreUnavailable("read-only", "set", kind)


def _pnp(value: int) -> SensorReading:
    return SensorReading(kind=PEOPLE_NOW_PRESENT, value=value)


def _temp(value: float) -> SensorReading:
    return SensorReading(kind=TEMPERATURE, value=value, unit=Value("°C"), location=Value("Lab"))


def _occupancy_composer(template, store) -> StatusComposer:
    return StatusComposer(template, store, ModifierChain([StateFromPeopleNowPresent()]))


class TestOccupancyScenarios:
    def test_no_sensors_recorded(self, composer):
        status = composer.compose()
        assert status.sensors is Absent
        assert status.state.open is Absent
        assert status.state.message is Absent
        assert "sensors" not in to_document(status)

    def test_zero_people_keeps_template_message(self, make_template, store):
        template = make_template(state=State(message=Value("This will remain unchanged.")))
        store.set(PEOPLE_NOW_PRESENT, _pnp(0))
        status = _occupancy_composer(template, store).compose()
        assert status.state.open == Value(False)
        assert status.state.message == Value("This will remain unchanged.")

    def test_one_person(self, composer, store):
        store.set(PEOPLE_NOW_PRESENT, _pnp(1))
        status = composer.compose()
        assert status.state.open == Value(True)
        assert status.state.message == Value("1 person here right now")

    def test_two_people(self, composer, store):
        store.set(PEOPLE_NOW_PRESENT, _pnp(2))
        status = composer.compose()
        assert status.state.open == Value(True)
        assert status.state.message == Value("2 people here right now")

    def test_empty_people_list_leaves_state(self, template):
        store = FixedStore({PEOPLE_NOW_PRESENT: [], TEMPERATURE: [_temp(19.5)]})
        status = _occupancy_composer(template, store).compose()
        assert status.state.open is Absent
        assert status.state.message is Absent
        assert [r.value for r in status.sensors.value.temperature] == [19.5]
        assert "people_now_present" not in to_document(status)["sensors"]


class TestComposition:
    def test_sensors_attached_in_store_order(self, composer, store):
        store.set(TEMPERATURE, _temp(20.0))
        store.set(TEMPERATURE, SensorReading(kind=TEMPERATURE, value=3.0, unit=Value("°C"), location=Value("Roof")))
        status = composer.compose()
        assert [r.value for r in status.sensors.value.temperature] == [20.0, 3.0]
        assert status.sensors.value.people_now_present == ()

    def test_undeclared_kind_is_not_merged(self, make_template, store):
        template = make_template(sensor_kinds=[TEMPERATURE])
        store.set(PEOPLE_NOW_PRESENT, _pnp(5))
        status = _occupancy_composer(template, store).compose()
        assert status.sensors is Absent
        assert status.state.open is Absent

    def test_compose_is_idempotent(self, composer, store):
        store.set(PEOPLE_NOW_PRESENT, _pnp(3))
        store.set(TEMPERATURE, _temp(21.0))
        first = composer.compose()
        second = composer.compose()
        assert first == second
        assert first is not second
        assert to_document(first) == to_document(second)

    def test_result_is_frozen(self, composer, store):
        store.set(PEOPLE_NOW_PRESENT, _pnp(1))
        status = composer.compose()
        with pytest.raises(dataclasses.FrozenInstanceError):
            status.state.open = Value(False)
        with pytest.raises(dataclasses.FrozenInstanceError):
            status.sensors.value.people_now_present[0].value = 7

    def test_template_is_never_mutated(self, composer, store, template):
        before = to_document(template.status)
        store.set(PEOPLE_NOW_PRESENT, _pnp(4))
        composer.compose()
        assert to_document(template.status) == before
        assert template.status.sensors is Absent

    def test_modifier_runs_once_per_compose(self, template, store):
        calls = []
        composer = StatusComposer(template, store, ModifierChain([lambda s: calls.append(1)]))
        composer.compose()
        composer.compose()
        assert calls == [1, 1]

    def test_modifier_sees_merged_sensors(self, template, store):
        seen = []
        store.set(TEMPERATURE, _temp(18.0))
        composer = StatusComposer(template, store, ModifierChain([lambda s: seen.append(s.sensors)]))
        composer.compose()
        assert [r.value for r in seen[0].value.temperature] == [18.0]

    def test_base_status_is_template_only(self, composer, store):
        store.set(PEOPLE_NOW_PRESENT, _pnp(2))
        base = composer.base_status()
        assert base.frozen
        assert base.sensors is Absent
        assert base.state.open is Absent

    def test_composed_log_line_unwraps_state(self, composer, store, caplog):
        store.set(PEOPLE_NOW_PRESENT, _pnp(2))
        with caplog.at_level(logging.DEBUG, logger="spacestatus.core.logging_utils"):
            composer.compose(trace_id="t1")
        line = next(r.getMessage() for r in caplog.records if r.getMessage().startswith("status_composed"))
        assert "open=True" in line
        assert "has_message=True" in line
        assert "trace_id=t1" in line


class TestDegradedStore:
    def test_store_timeout_omits_that_kind(self, template):
        store = FixedStore({PEOPLE_NOW_PRESENT: [_pnp(2)], TEMPERATURE: [_temp(20.0)]}, failing=[TEMPERATURE])
        status = _occupancy_composer(template, store).compose()
        assert status.state.open == Value(True)
        doc = to_document(status)
        assert "temperature" not in doc["sensors"]
        assert doc["sensors"]["people_now_present"][0]["value"] == 2

    def test_all_kinds_unavailable(self, template):
        store = FixedStore({}, failing=[PEOPLE_NOW_PRESENT, TEMPERATURE])
        status = _occupancy_composer(template, store).compose()
        assert status.sensors is Absent
        assert status.state.open is Absent


class TestConcurrency:
    def test_compose_while_writing(self, composer, store):
        errors = []
        done = threading.Event()

        def writer():
            for v in range(300):
                store.set(PEOPLE_NOW_PRESENT, _pnp(v % 3))
                store.set(TEMPERATURE, _temp(float(v)))
            done.set()

        def reader():
            while not done.is_set():
                status = composer.compose()
                if status.sensors is Absent:
                    continue
                readings = status.sensors.value.people_now_present
                if readings and status.state.open != Value(readings[0].value > 0):
                    errors.append(status)

        threads = [threading.Thread(target=writer)] + [threading.Thread(target=reader) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert errors == []
        assert composer.template.status.state.open is Absent
