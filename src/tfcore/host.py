"""Interfaces to the simulation host.

The host owns vessels and parts; tfcore only queries them.  Part modules
that take part in flight data tracking subclass :class:`FlightCore`, and the
tick loop skips every module that does not.
"""

from __future__ import annotations

import abc
from collections.abc import Hashable, Iterator, Sequence
from typing import Any, Protocol

from tfcore.models.flight_data import FlightDataRecord
from tfcore.models.vessel import VesselType


class FlightCore(abc.ABC):
    """Status capability exposed by a part module."""

    @abc.abstractmethod
    def initialize_flight_data(self, records: Sequence[FlightDataRecord], reliability_modifier: float) -> None:
        """Seed the module from persisted history for its part type."""

    @abc.abstractmethod
    def get_scope(self) -> str: ...

    @abc.abstractmethod
    def get_flight_data(self) -> float: ...

    @abc.abstractmethod
    def get_flight_time(self) -> float: ...

    @abc.abstractmethod
    def get_part_status(self) -> int:
        """``0`` when nominal, a positive failure code otherwise."""

    @abc.abstractmethod
    def get_current_reliability(self, reliability_modifier: float) -> float: ...

    def get_momentary_reliability(self, reliability_modifier: float) -> float:
        return self.get_current_reliability(reliability_modifier)

    @abc.abstractmethod
    def get_requirements_tooltip(self) -> str: ...

    @abc.abstractmethod
    def is_failure_acknowledged(self) -> bool: ...

    @abc.abstractmethod
    def get_failure_module(self) -> Any:
        """The module describing the active failure, owned by the part."""


class HostPart(Protocol):
    @property
    def flight_id(self) -> int: ...

    @property
    def name(self) -> str:
        """Part type name, shared by every part built from the same definition."""
        ...

    @property
    def title(self) -> str: ...

    @property
    def modules(self) -> Sequence[Any]: ...


class HostVessel(Protocol):
    @property
    def id(self) -> Hashable: ...

    @property
    def name(self) -> str: ...

    @property
    def vessel_type(self) -> VesselType: ...

    @property
    def loaded(self) -> bool: ...

    @property
    def parts(self) -> Sequence[HostPart]: ...


class FlightHost(Protocol):
    @property
    def vessels(self) -> Sequence[HostVessel]: ...

    @property
    def active_vessel(self) -> HostVessel | None: ...

    def universal_time(self) -> float: ...


def flight_cores(part: HostPart) -> Iterator[FlightCore]:
    for module in part.modules:
        if isinstance(module, FlightCore):
            yield module


def find_vessel(host: FlightHost, vessel_id: Hashable) -> HostVessel | None:
    for vessel in host.vessels:
        if vessel.id == vessel_id:
            return vessel
    return None


def find_part(vessel: HostVessel, part_id: int) -> HostPart | None:
    for part in vessel.parts:
        if part.flight_id == part_id:
            return part
    return None


def is_debris(vessel: HostVessel) -> bool:
    return VesselType(vessel.vessel_type) == VesselType.DEBRIS
