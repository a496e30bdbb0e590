"""Derive the opening state from the people-now-present sensor."""

from spacestatus.model.optional import Value, is_present
from spacestatus.model.sensors import PEOPLE_NOW_PRESENT
from spacestatus.model.status import Status
from spacestatus.modifiers.base import StatusModifier


class StateFromPeopleNowPresent(StatusModifier):
    """Update state from the first people_now_present reading (if present).

    Only the first reading counts (the primary occupancy sensor); later ones
    are ignored. ``open`` becomes count > 0. The message is set for one or
    more people; zero people never sets or clears the message.
    """

    def apply(self, status: Status) -> None:
        if not is_present(status.sensors):
            return
        readings = status.sensors.value.readings(PEOPLE_NOW_PRESENT)
        if not readings:
            return
        count = readings[0].value
        status.state.open = Value(count > 0)
        if count == 1:
            status.state.message = Value(f"{count} person here right now")
        elif count > 1:
            status.state.message = Value(f"{count} people here right now")
