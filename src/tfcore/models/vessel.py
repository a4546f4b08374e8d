"""Vessel classification and tracking models."""

from __future__ import annotations

from collections.abc import Hashable
from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class VesselType(StrEnum):
    """Host vessel categories.

    Values without a mapped member resolve to ``UNKNOWN`` instead of raising,
    so a category the host adds later is simply not trackable.
    """

    DEBRIS = "debris"
    SPACE_OBJECT = "space_object"
    UNKNOWN = "unknown"
    PROBE = "probe"
    ROVER = "rover"
    LANDER = "lander"
    SHIP = "ship"
    STATION = "station"
    BASE = "base"
    EVA = "eva"
    FLAG = "flag"

    @classmethod
    def _missing_(cls, value: object) -> VesselType:
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return cls.UNKNOWN


TRACKABLE_VESSEL_TYPES: frozenset[VesselType] = frozenset(
    {
        VesselType.LANDER,
        VesselType.PROBE,
        VesselType.ROVER,
        VesselType.SHIP,
        VesselType.STATION,
    }
)


class TrackedVessel(BaseModel):
    """A vessel admitted to the tracker.

    ``first_seen`` stands in for the mission start time: the host does not
    start its mission clock until first staging, which rules out static
    test stands.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    vessel_id: Hashable
    first_seen: float
