"""Space status server: template + sensor store + modifier chain -> SpaceAPI document."""

__version__ = "0.1.0"
