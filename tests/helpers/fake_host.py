"""In-memory stand-ins for the simulation host and part modules."""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from tfcore.host import FlightCore
from tfcore.models.flight_data import FlightDataRecord
from tfcore.models.vessel import VesselType


class FakeFailure:
    def __init__(self, name: str = "engineShutdown") -> None:
        self.name = name


class FakeCore(FlightCore):
    """A flight core whose readings are plain attributes."""

    def __init__(
        self,
        *,
        scope: str = "kerbin_atmosphere",
        flight_data: float = 0.0,
        flight_time: float = 0.0,
        status: int = 0,
        reliability: float = 0.99,
        tooltip: str = "",
        acknowledged: bool = False,
        failure: Any = None,
    ) -> None:
        self.scope = scope
        self.flight_data = flight_data
        self.flight_time = flight_time
        self.status = status
        self.reliability = reliability
        self.tooltip = tooltip
        self.acknowledged = acknowledged
        self.failure = failure
        self.initialized: list[tuple[list[FlightDataRecord], float]] = []

    def initialize_flight_data(self, records: Sequence[FlightDataRecord], reliability_modifier: float) -> None:
        self.initialized.append((list(records), reliability_modifier))

    def get_scope(self) -> str:
        return self.scope

    def get_flight_data(self) -> float:
        return self.flight_data

    def get_flight_time(self) -> float:
        return self.flight_time

    def get_part_status(self) -> int:
        return self.status

    def get_current_reliability(self, reliability_modifier: float) -> float:
        return self.reliability * reliability_modifier

    def get_requirements_tooltip(self) -> str:
        return self.tooltip

    def is_failure_acknowledged(self) -> bool:
        return self.acknowledged

    def get_failure_module(self) -> Any:
        return self.failure


class OtherModule:
    """A part module without the flight core capability."""


@dataclass
class FakePart:
    flight_id: int
    name: str = "liquidEngine"
    title: str = "LV-T30 Liquid Fuel Engine"
    modules: list[Any] = field(default_factory=list)

    @property
    def cores(self) -> list[FakeCore]:
        return [m for m in self.modules if isinstance(m, FakeCore)]


@dataclass
class FakeVessel:
    name: str = "Untitled Space Craft"
    vessel_type: VesselType = VesselType.SHIP
    loaded: bool = True
    parts: list[FakePart] = field(default_factory=list)
    id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass
class FakeHost:
    vessels: list[FakeVessel] = field(default_factory=list)
    active_vessel: FakeVessel | None = None
    now: float = 0.0

    def universal_time(self) -> float:
        return self.now

    def remove(self, vessel: FakeVessel) -> None:
        self.vessels.remove(vessel)
        if self.active_vessel is vessel:
            self.active_vessel = None


def make_part(flight_id: int, name: str = "liquidEngine", **core_kwargs: Any) -> FakePart:
    """A part carrying one flight core plus an unrelated module."""
    return FakePart(
        flight_id=flight_id,
        name=name,
        title=f"{name} #{flight_id}",
        modules=[OtherModule(), FakeCore(**core_kwargs)],
    )


def make_vessel(
    name: str,
    *part_ids: int,
    vessel_type: VesselType = VesselType.SHIP,
    loaded: bool = True,
) -> FakeVessel:
    return FakeVessel(
        name=name,
        vessel_type=vessel_type,
        loaded=loaded,
        parts=[make_part(pid) for pid in part_ids],
    )
