"""Known-vessel cache.

The host does not start a vessel's mission clock until first staging, so the
tracker records the time it first sees each vessel and uses that instead.
Admission also seeds the vessel's part modules from stored flight data,
exactly once per admission.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Mapping
from types import MappingProxyType

from tfcore.host import FlightHost, HostVessel, flight_cores, is_debris
from tfcore.models.vessel import TRACKABLE_VESSEL_TYPES, TrackedVessel, VesselType
from tfcore.state.store import FlightDataStore

_logger = logging.getLogger(__name__)


class VesselTracker:
    def __init__(self, store: FlightDataStore, *, reliability_modifier: float = 1.0) -> None:
        self._store = store
        self.reliability_modifier = reliability_modifier
        self._known: dict[Hashable, TrackedVessel] = {}

    @property
    def known_vessels(self) -> Mapping[Hashable, TrackedVessel]:
        return MappingProxyType(self._known)

    def __len__(self) -> int:
        return len(self._known)

    def __contains__(self, vessel_id: object) -> bool:
        return vessel_id in self._known

    def is_known(self, vessel_id: Hashable) -> bool:
        return vessel_id in self._known

    def first_seen(self, vessel_id: Hashable) -> float | None:
        tracked = self._known.get(vessel_id)
        return None if tracked is None else tracked.first_seen

    def mission_time(self, vessel_id: Hashable, now: float) -> float | None:
        """Seconds since the vessel was admitted, or ``None`` if unknown."""
        first_seen = self.first_seen(vessel_id)
        return None if first_seen is None else now - first_seen

    def forget(self, vessel_id: Hashable) -> bool:
        return self._known.pop(vessel_id, None) is not None

    def cache_vessels(self, host: FlightHost, *, process_all_vessels: bool) -> list[Hashable]:
        """Prune vanished or debris vessels, then admit new ones.

        With ``process_all_vessels`` off only the active vessel is admitted;
        otherwise every vessel of a trackable type is.  Returns the ids
        admitted by this call.
        """
        live: dict[Hashable, HostVessel] = {vessel.id: vessel for vessel in host.vessels}

        stale = [
            vessel_id
            for vessel_id in self._known
            if vessel_id not in live or is_debris(live[vessel_id])
        ]
        if stale:
            _logger.debug("Deleting %d vessel(s) from cached vessels", len(stale))
        for vessel_id in stale:
            del self._known[vessel_id]

        if process_all_vessels:
            candidates = [v for v in live.values() if VesselType(v.vessel_type) in TRACKABLE_VESSEL_TYPES]
        else:
            active = host.active_vessel
            # A debris active vessel would be pruned and re-admitted every tick.
            if active is not None and active.id in live and not is_debris(active):
                candidates = [active]
            else:
                candidates = []

        admitted: list[Hashable] = []
        for vessel in candidates:
            if vessel.id in self._known:
                continue
            now = host.universal_time()
            _logger.debug("Adding new vessel %s with launch time %s", vessel.name, now)
            self._known[vessel.id] = TrackedVessel(vessel_id=vessel.id, first_seen=now)
            self.initialize_parts(vessel)
            admitted.append(vessel.id)
        return admitted

    def initialize_parts(self, vessel: HostVessel) -> int:
        """Seed every flight core on *vessel* from stored flight data.

        Part types with no stored data are seeded with an empty history.
        Returns the number of cores initialized.
        """
        _logger.debug("Initializing parts for vessel %s", vessel.name)
        count = 0
        for part in vessel.parts:
            for core in flight_cores(part):
                part_data = self._store.get(part.name)
                records = part_data.get_flight_data() if part_data is not None else []
                core.initialize_flight_data(records, self.reliability_modifier)
                count += 1
        return count
